from typing import Optional
from fastapi import APIRouter, Query
from marketplace import geo
from marketplace.search import schemas, utils

router = APIRouter(prefix="/api/search", tags=["Search"])


def _params(query, lat, lng, max_distance, sort_by, page, limit) -> schemas.SearchParams:
    return schemas.SearchParams(
        query=query,
        origin=geo.resolve_origin(lat, lng),
        max_distance=max_distance,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )


@router.get("/items", response_model=schemas.ItemSearchPage)
def search_items(
    query: Optional[str] = None,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    max_distance: Optional[float] = Query(None, alias="maxDistance", gt=0),
    sort_by: schemas.SortOption = Query(schemas.SortOption.distance, alias="sortBy"),
    page: int = Query(1, ge=1),
    limit: int = Query(schemas.DEFAULT_PAGE_LIMIT, ge=1, le=schemas.MAX_PAGE_LIMIT),
):
    """Items whose name or description matches, nearest shop first by default."""
    results, pagination = utils.search_items(_params(query, lat, lng, max_distance, sort_by, page, limit))
    return {"success": True, "data": results, "pagination": pagination}


@router.get("/shops", response_model=schemas.ShopSearchPage)
def search_shops(
    query: Optional[str] = None,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    max_distance: Optional[float] = Query(None, alias="maxDistance", gt=0),
    sort_by: schemas.SortOption = Query(schemas.SortOption.distance, alias="sortBy"),
    page: int = Query(1, ge=1),
    limit: int = Query(schemas.DEFAULT_PAGE_LIMIT, ge=1, le=schemas.MAX_PAGE_LIMIT),
):
    results, pagination = utils.search_shops(_params(query, lat, lng, max_distance, sort_by, page, limit))
    return {"success": True, "data": results, "pagination": pagination}
