from fastapi import APIRouter, Depends
from marketplace.authentication.security import require_shopper
from marketplace.cart import schemas, utils

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("")
def get_cart(user=Depends(require_shopper)):
    return {"success": True, "data": utils.get_cart(user.user_id)}


@router.post("/add")
def add_to_cart(payload: schemas.CartAdd, user=Depends(require_shopper)):
    cart, already_in_cart = utils.add_shop_to_cart(user.user_id, payload.shop_id, payload.item_tag)
    message = "Shop already in cart" if already_in_cart else "Shop added to cart"
    return {"success": True, "data": cart, "message": message, "alreadyInCart": already_in_cart}


@router.delete("/remove/{shop_id}")
def remove_from_cart(shop_id: str, user=Depends(require_shopper)):
    cart = utils.remove_shop_from_cart(user.user_id, shop_id)
    return {"success": True, "data": cart, "message": "Shop removed from cart"}


@router.delete("/clear")
def clear_cart(user=Depends(require_shopper)):
    cart = utils.clear_cart(user.user_id)
    return {"success": True, "data": cart, "message": "Cart cleared"}


@router.post("/generate-route")
def generate_route(request: schemas.RouteRequest, user=Depends(require_shopper)):
    """Order the cart's shops for a single trip from `origin`."""
    route = utils.plan_route(user.user_id, request)
    return {"success": True, "data": route, "message": "Route generated successfully"}
