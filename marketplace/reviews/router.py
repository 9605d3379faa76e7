from fastapi import APIRouter, Depends, status
from marketplace.reviews import utils, schemas
from marketplace.authentication.security import get_current_user, require_shopper
from marketplace.errors import ForbiddenError, NotFoundError

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.post("", status_code=status.HTTP_201_CREATED)
def add_review(review_data: schemas.ReviewCreate, current_user=Depends(require_shopper)):
    """Add a review for a catalogue item, limited to 1 active review per shopper."""
    review = utils.add_review(review_data, current_user.user_id)
    return {"success": True, "data": review, "message": "Review submitted successfully"}


@router.get("/item/{item_id}")
def list_item_reviews(item_id: str, current_user=Depends(get_current_user)):
    return {"success": True, "data": utils.get_item_reviews(item_id)}


@router.patch("/{review_id}")
def edit_review(review_id: str, updates: schemas.ReviewUpdate, current_user=Depends(get_current_user)):
    """Edit a review (only its author)."""
    review = utils.get_review(review_id)
    if not review or not review.is_active:
        raise NotFoundError("Review not found")
    if review.shopper_id != current_user.user_id:
        raise ForbiddenError("Unauthorized to update this review")

    updated = utils.update_review(review_id, updates)
    return {"success": True, "data": updated, "message": "Review updated successfully"}


@router.delete("/{review_id}")
def delete_review(review_id: str, current_user=Depends(get_current_user)):
    """Delete a review (only its author). The record is kept, marked inactive."""
    review = utils.get_review(review_id)
    if not review or not review.is_active:
        raise NotFoundError("Review not found")
    if review.shopper_id != current_user.user_id:
        raise ForbiddenError("Unauthorized to delete this review")

    utils.deactivate_review(review_id)
    return {"success": True, "message": "Review deleted successfully"}
