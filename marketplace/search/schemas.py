"""
Search parameters and result shapes for item and shop discovery.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from marketplace.shops.schemas import GeoPoint, Item

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100


class SortOption(str, Enum):
    distance = "distance"
    name_asc = "name_asc"
    name_desc = "name_desc"


class SearchParams(BaseModel):
    query: Optional[str] = None
    origin: GeoPoint
    max_distance: Optional[float] = None
    sort_by: SortOption = SortOption.distance
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT


class ShopResult(BaseModel):
    id: str
    name: str
    description: str = ""
    address: str = ""
    location: Optional[GeoPoint] = None
    distance_km: Optional[float] = None


class ItemResult(BaseModel):
    item: Item
    shop: ShopResult


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ShopSearchPage(BaseModel):
    success: bool = True
    data: List[ShopResult]
    pagination: Pagination


class ItemSearchPage(BaseModel):
    success: bool = True
    data: List[ItemResult]
    pagination: Pagination
