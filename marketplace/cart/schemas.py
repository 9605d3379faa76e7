"""
Shopping cart of shops and the planned visiting order.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from marketplace.shops.schemas import GeoPoint


class TransportMode(str, Enum):
    walking = "walking"
    driving = "driving"
    transit = "transit"


class CartEntry(BaseModel):
    shop_id: str
    item_tags: List[str] = []
    added_at: str


class Cart(BaseModel):
    shopper_id: str
    items: List[CartEntry] = []
    updated_at: Optional[str] = None


class CartAdd(BaseModel):
    shop_id: str = Field(..., alias="shopId")
    item_tag: Optional[str] = Field(None, alias="itemTag", max_length=200)

    model_config = {"populate_by_name": True}


class RouteRequest(BaseModel):
    origin: GeoPoint
    mode: TransportMode = TransportMode.walking


class RouteStop(BaseModel):
    order: int
    shop_id: str
    shop_name: str
    location: GeoPoint
    leg_distance_km: float


class PlannedRoute(BaseModel):
    origin: GeoPoint
    mode: TransportMode
    stops: List[RouteStop]
    total_distance_km: float
    skipped: List[str] = []
