"""
Item and shop search over the active catalogue.

Results are filtered in memory, sorted by distance from the origin or by
name, then paginated.
"""

import logging
import math
import re
from typing import Callable, List, Optional, Tuple, TypeVar

from marketplace import geo
from marketplace.search import schemas
from marketplace.shops import schemas as shop_schemas, utils as shop_utils

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _shop_result(shop: shop_schemas.Shop, origin: shop_schemas.GeoPoint) -> schemas.ShopResult:
    distance = geo.distance_km(origin, shop.location) if shop.location else None
    return schemas.ShopResult(
        id=shop.id,
        name=shop.name,
        description=shop.description,
        address=shop.address,
        location=shop.location,
        distance_km=distance,
    )


def _active_shops() -> List[shop_schemas.Shop]:
    return [shop_schemas.Shop(**s) for s in shop_utils.load_shops() if s.get("is_active", True)]


def _within(distance: Optional[float], max_distance: Optional[float]) -> bool:
    if max_distance is None:
        return True
    return distance is not None and distance <= max_distance


def sort_results(results: List[T], sort_by: schemas.SortOption, distance: Callable, name: Callable) -> List[T]:
    if sort_by == schemas.SortOption.distance:
        # Shops without a location go last
        return sorted(results, key=lambda r: (distance(r) is None, distance(r) or 0))
    return sorted(results, key=lambda r: name(r).lower(), reverse=sort_by == schemas.SortOption.name_desc)


def paginate(results: List[T], page: int, limit: int) -> Tuple[List[T], schemas.Pagination]:
    total = len(results)
    start = (page - 1) * limit
    pagination = schemas.Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit))
    return results[start:start + limit], pagination


def search_items(params: schemas.SearchParams) -> Tuple[List[schemas.ItemResult], schemas.Pagination]:
    shops = {shop.id: _shop_result(shop, params.origin) for shop in _active_shops()}
    needle = (params.query or "").strip().lower()

    results = []
    for raw in shop_utils.load_items():
        item = shop_schemas.Item(**raw)
        shop = shops.get(item.shop_id)
        if not item.is_active or shop is None:
            continue
        if needle and needle not in item.name.lower() and needle not in item.description.lower():
            continue
        if not _within(shop.distance_km, params.max_distance):
            continue
        results.append(schemas.ItemResult(item=item, shop=shop))

    logger.debug("Item search %r matched %d results", needle, len(results))
    results = sort_results(results, params.sort_by, lambda r: r.shop.distance_km, lambda r: r.item.name)
    return paginate(results, params.page, params.limit)


def search_shops(params: schemas.SearchParams) -> Tuple[List[schemas.ShopResult], schemas.Pagination]:
    query = (params.query or "").strip()
    # A word of the shop name must start with the query
    pattern = re.compile(r"\b" + re.escape(query), re.IGNORECASE) if query else None

    results = [
        _shop_result(shop, params.origin) for shop in _active_shops()
        if pattern is None or pattern.search(shop.name)
    ]
    results = [r for r in results if _within(r.distance_km, params.max_distance)]

    results = sort_results(results, params.sort_by, lambda r: r.distance_km, lambda r: r.name)
    return paginate(results, params.page, params.limit)
