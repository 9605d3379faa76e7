"""
Cart persistence and route ordering.

Each shopper has at most one cart listing the shops they plan to visit,
tagged with the items they want there. The visiting order is a greedy
nearest-neighbour walk from the origin; an external routing service can
turn the ordered stops into directions.
"""

import logging
from typing import List, Optional, Tuple
from marketplace import geo, storage
from marketplace.cart import schemas
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.shops import utils as shop_utils

logger = logging.getLogger(__name__)

CARTS_FILE = storage.collection_path("carts")


def load_carts() -> List[dict]:
    return storage.load_collection(CARTS_FILE)


def _find_cart(carts: List[dict], shopper_id: str) -> Optional[dict]:
    return next((c for c in carts if c["shopper_id"] == shopper_id), None)


def get_cart(shopper_id: str) -> schemas.Cart:
    cart = _find_cart(load_carts(), shopper_id)
    return schemas.Cart(**cart) if cart else schemas.Cart(shopper_id=shopper_id)


def add_shop_to_cart(shopper_id: str, shop_id: str, item_tag: Optional[str] = None) -> Tuple[schemas.Cart, bool]:
    """Add a shop, or append a new tag to it; returns (cart, already_in_cart)."""
    shop = shop_utils.get_shop(shop_id)
    if not shop or not shop.is_active:
        raise NotFoundError("Shop not found")

    now = storage.utcnow()
    with storage.locked_collection(CARTS_FILE) as carts:
        cart = _find_cart(carts, shopper_id)
        if cart is None:
            cart = {"shopper_id": shopper_id, "items": []}
            carts.append(cart)

        entry = next((e for e in cart["items"] if e["shop_id"] == shop_id), None)
        already_in_cart = entry is not None
        if entry is None:
            cart["items"].append({"shop_id": shop_id, "item_tags": [item_tag] if item_tag else [], "added_at": now})
        elif item_tag and item_tag not in entry["item_tags"]:
            entry["item_tags"].append(item_tag)
        cart["updated_at"] = now

    logger.info("Shop %s %s cart for shopper %s", shop_id, "updated in" if already_in_cart else "added to", shopper_id)
    return schemas.Cart(**cart), already_in_cart


def remove_shop_from_cart(shopper_id: str, shop_id: str) -> schemas.Cart:
    with storage.locked_collection(CARTS_FILE) as carts:
        cart = _find_cart(carts, shopper_id)
        if cart is None:
            raise NotFoundError("Cart not found")
        cart["items"] = [e for e in cart["items"] if e["shop_id"] != shop_id]
        cart["updated_at"] = storage.utcnow()

    logger.info("Shop %s removed from cart for shopper %s", shop_id, shopper_id)
    return schemas.Cart(**cart)


def clear_cart(shopper_id: str) -> schemas.Cart:
    with storage.locked_collection(CARTS_FILE) as carts:
        cart = _find_cart(carts, shopper_id)
        if cart is None:
            raise NotFoundError("Cart not found")
        cart["items"] = []
        cart["updated_at"] = storage.utcnow()

    logger.info("Cart cleared for shopper %s", shopper_id)
    return schemas.Cart(**cart)


def order_stops(origin: geo.GeoPoint, shops: list) -> List[schemas.RouteStop]:
    """Greedy nearest-neighbour ordering of located shops starting at `origin`."""
    remaining = list(shops)
    stops = []
    here = origin
    while remaining:
        nearest = min(remaining, key=lambda s: geo.distance_km(here, s.location))
        remaining.remove(nearest)
        stops.append(schemas.RouteStop(
            order=len(stops) + 1,
            shop_id=nearest.id,
            shop_name=nearest.name,
            location=nearest.location,
            leg_distance_km=geo.distance_km(here, nearest.location),
        ))
        here = nearest.location
    return stops


def plan_route(shopper_id: str, request: schemas.RouteRequest) -> schemas.PlannedRoute:
    cart = get_cart(shopper_id)
    if not cart.items:
        raise BadRequestError("Cart is empty")

    routable, skipped = [], []
    for entry in cart.items:
        shop = shop_utils.get_shop(entry.shop_id)
        if shop and shop.is_active and shop.location:
            routable.append(shop)
        else:
            skipped.append(entry.shop_id)
    if skipped:
        logger.info("Route for shopper %s skips %d shop(s) without a usable location", shopper_id, len(skipped))

    stops = order_stops(request.origin, routable)
    return schemas.PlannedRoute(
        origin=request.origin,
        mode=request.mode,
        stops=stops,
        total_distance_km=round(sum(s.leg_distance_km for s in stops), 2),
        skipped=skipped,
    )
