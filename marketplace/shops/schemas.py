"""
Data models for shops and their catalogue items.
"""

from pydantic import BaseModel, Field
from typing import Optional


class GeoPoint(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Shop(BaseModel):
    id: str
    owner_id: str
    name: str
    description: str = ""
    address: str = ""
    location: Optional[GeoPoint] = None
    report_count: int = Field(0, ge=0)
    warnings: int = Field(0, ge=0)
    is_active: bool = True
    created_at: Optional[str] = None


class ShopCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    address: str = Field("", max_length=500)
    location: Optional[GeoPoint] = None


class Item(BaseModel):
    id: str
    shop_id: str
    name: str
    description: str = ""
    price: Optional[float] = None
    is_active: bool = True
    created_at: Optional[str] = None


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    price: Optional[float] = Field(None, ge=0)
