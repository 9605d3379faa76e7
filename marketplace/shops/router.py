"""
Owner-facing shop and catalogue routes.
"""

from fastapi import APIRouter, Depends, status
from marketplace.authentication.security import get_current_user, require_owner
from marketplace.errors import ForbiddenError, NotFoundError
from marketplace.shops import schemas, utils

router = APIRouter(prefix="/api/shops", tags=["Shops"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_shop(shop: schemas.ShopCreate, user=Depends(require_owner)):
    """Create a shop owned by the current owner."""
    created = utils.create_shop(user.user_id, shop)
    return {"success": True, "data": created, "message": "Shop created successfully"}


@router.get("/mine")
def list_my_shops(user=Depends(require_owner)):
    return {"success": True, "data": utils.get_shops_by_owner(user.user_id)}


@router.get("/{shop_id}")
def get_shop(shop_id: str, user=Depends(get_current_user)):
    shop = utils.get_shop(shop_id)
    if not shop or not shop.is_active:
        raise NotFoundError("Shop not found")
    return {"success": True, "data": shop}


@router.post("/{shop_id}/items", status_code=status.HTTP_201_CREATED)
def add_item(shop_id: str, item: schemas.ItemCreate, user=Depends(require_owner)):
    """Add a catalogue item (only the shop's owner)."""
    shop = utils.get_shop(shop_id)
    if not shop or not shop.is_active:
        raise NotFoundError("Shop not found")
    if shop.owner_id != user.user_id:
        raise ForbiddenError("Unauthorized to modify this shop")
    created = utils.add_item(shop_id, item)
    return {"success": True, "data": created, "message": "Item added successfully"}


@router.get("/{shop_id}/items")
def list_items(shop_id: str, user=Depends(get_current_user)):
    if not utils.get_shop(shop_id):
        raise NotFoundError("Shop not found")
    return {"success": True, "data": utils.get_items_for_shop(shop_id)}
