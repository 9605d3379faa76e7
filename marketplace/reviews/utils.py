from typing import List, Optional
from marketplace import storage
from marketplace.errors import ConflictError, NotFoundError
from marketplace.reviews import schemas
from marketplace.shops import utils as shop_utils

REVIEWS_FILE = storage.collection_path("reviews")


def load_reviews() -> List[dict]:
    return storage.load_collection(REVIEWS_FILE)


def add_review(review_data: schemas.ReviewCreate, shopper_id: str) -> schemas.Review:
    item = shop_utils.get_item(review_data.item_id)
    if not item or not item.is_active:
        raise NotFoundError("Item not found")

    now = storage.utcnow()
    new_review = schemas.Review(
        id=storage.new_id(),
        shopper_id=shopper_id,
        item_id=item.id,
        shop_id=item.shop_id,
        description=review_data.description.strip(),
        availability=review_data.availability,
        images=review_data.images,
        created_at=now,
        updated_at=now,
    )
    with storage.locked_collection(REVIEWS_FILE) as reviews:
        # One active review per item per shopper
        if any(r["item_id"] == item.id and r["shopper_id"] == shopper_id and r.get("is_active", True) for r in reviews):
            raise ConflictError("You have already reviewed this item")
        reviews.append(new_review.model_dump())
    return new_review


def get_review(review_id: str) -> Optional[schemas.Review]:
    review = storage.find_by_id(load_reviews(), review_id)
    return schemas.Review(**review) if review else None


def get_item_reviews(item_id: str) -> List[schemas.Review]:
    """Active reviews for an item, newest first."""
    reviews = [schemas.Review(**r) for r in load_reviews() if r["item_id"] == item_id and r.get("is_active", True)]
    reviews.sort(key=lambda r: r.created_at or "", reverse=True)
    return reviews


def update_review(review_id: str, updates: schemas.ReviewUpdate) -> Optional[schemas.Review]:
    changes = updates.model_dump(exclude_unset=True)
    return _mutate(review_id, lambda r: r.update(changes))


def _mutate(review_id: str, mutation) -> Optional[schemas.Review]:
    with storage.locked_collection(REVIEWS_FILE) as reviews:
        review = storage.find_by_id(reviews, review_id)
        if not review:
            return None
        mutation(review)
        review["updated_at"] = storage.utcnow()
    return schemas.Review(**review)


def deactivate_review(review_id: str) -> Optional[schemas.Review]:
    """Soft delete by the review's author."""
    return _mutate(review_id, lambda r: r.update(is_active=False))


def remove_review(review_id: str) -> Optional[schemas.Review]:
    """Soft delete as a moderation outcome; the review carries the warning."""
    def _apply(review):
        review["is_active"] = False
        review["warnings"] = review.get("warnings", 0) + 1
    return _mutate(review_id, _apply)


def increment_report_count(review_id: str) -> Optional[schemas.Review]:
    def _apply(review):
        review["report_count"] = review.get("report_count", 0) + 1
    return _mutate(review_id, _apply)
