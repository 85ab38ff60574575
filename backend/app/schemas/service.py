"""Models for AI catalog entries."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class ServicePricing(BaseModel):
    model: Literal["free", "freemium", "paid", "enterprise"]
    price: Optional[float] = None
    currency: Optional[str] = None
    period: Optional[Literal["month", "year", "usage"]] = None


class ServiceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    category: str = Field(min_length=1)
    url: Optional[HttpUrl] = None
    api_endpoint: Optional[HttpUrl] = None
    pricing: ServicePricing
    features: list[str] = Field(default_factory=list)
    is_active: bool = True


class ServiceRead(BaseModel):
    id: int
    name: str
    description: str
    category: str
    url: Optional[str] = None
    api_endpoint: Optional[str] = None
    pricing: dict
    features: list[str]
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
