"""
Shop and catalogue item persistence.

Counters on a shop only ever grow: `report_count` by one per accepted
report, `warnings` by one per moderation removal.
"""

from typing import List, Optional
from marketplace import storage
from marketplace.shops import schemas

SHOPS_FILE = storage.collection_path("shops")
ITEMS_FILE = storage.collection_path("items")


# ────────────────────────────────
# JSON helpers
# ────────────────────────────────
def load_shops() -> List[dict]:
    return storage.load_collection(SHOPS_FILE)


def save_shops(shops: List[dict]) -> None:
    with storage.locked_collection(SHOPS_FILE) as current:
        current[:] = shops


def load_items() -> List[dict]:
    return storage.load_collection(ITEMS_FILE)


def _update_shop(shop_id: str, mutation) -> Optional[schemas.Shop]:
    with storage.locked_collection(SHOPS_FILE) as shops:
        shop = storage.find_by_id(shops, shop_id)
        if not shop:
            return None
        mutation(shop)
    return schemas.Shop(**shop)


# ────────────────────────────────
# Shops
# ────────────────────────────────
def create_shop(owner_id: str, shop_data: schemas.ShopCreate) -> schemas.Shop:
    new_shop = schemas.Shop(
        id=storage.new_id(),
        owner_id=owner_id,
        name=shop_data.name,
        description=shop_data.description,
        address=shop_data.address,
        location=shop_data.location,
        created_at=storage.utcnow(),
    )
    with storage.locked_collection(SHOPS_FILE) as shops:
        shops.append(new_shop.model_dump())
    return new_shop


def get_shop(shop_id: str) -> Optional[schemas.Shop]:
    shop = storage.find_by_id(load_shops(), shop_id)
    return schemas.Shop(**shop) if shop else None


def get_shops_by_owner(owner_id: str) -> List[schemas.Shop]:
    return [schemas.Shop(**s) for s in load_shops() if s["owner_id"] == owner_id]


def increment_report_count(shop_id: str) -> Optional[schemas.Shop]:
    def _apply(shop):
        shop["report_count"] = shop.get("report_count", 0) + 1
    return _update_shop(shop_id, _apply)


def remove_shop(shop_id: str) -> Optional[schemas.Shop]:
    """Deactivate a shop as a moderation outcome and count the warning."""
    def _apply(shop):
        shop["is_active"] = False
        shop["warnings"] = shop.get("warnings", 0) + 1
    return _update_shop(shop_id, _apply)


def deactivate_shops_for_owner(owner_id: str) -> int:
    """Deactivate every shop the owner runs; returns how many changed."""
    changed = 0
    with storage.locked_collection(SHOPS_FILE) as shops:
        for shop in shops:
            if shop["owner_id"] == owner_id and shop.get("is_active", True):
                shop["is_active"] = False
                changed += 1
    return changed


def total_report_count(owner_id: str) -> int:
    return sum(s.report_count for s in get_shops_by_owner(owner_id))


# ────────────────────────────────
# Catalogue items
# ────────────────────────────────
def add_item(shop_id: str, item_data: schemas.ItemCreate) -> schemas.Item:
    new_item = schemas.Item(
        id=storage.new_id(),
        shop_id=shop_id,
        name=item_data.name,
        description=item_data.description,
        price=item_data.price,
        created_at=storage.utcnow(),
    )
    with storage.locked_collection(ITEMS_FILE) as items:
        items.append(new_item.model_dump())
    return new_item


def get_item(item_id: str) -> Optional[schemas.Item]:
    item = storage.find_by_id(load_items(), item_id)
    return schemas.Item(**item) if item else None


def get_items_for_shop(shop_id: str) -> List[schemas.Item]:
    return [schemas.Item(**i) for i in load_items() if i["shop_id"] == shop_id and i.get("is_active", True)]
