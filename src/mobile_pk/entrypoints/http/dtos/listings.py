from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from mobile_pk.entrypoints.http.dtos.common import DataQualityWarningDTO


class PhoneSpecsDTO(BaseModel):
    display_size: str | None = None
    ram: str | None = None
    storage: str | None = None
    camera: str | None = None
    battery: str | None = None
    processor: str | None = None
    os: str | None = None


class ListingDTO(BaseModel):
    id: str
    brand: str
    model: str
    specs: PhoneSpecsDTO
    image_url: str | None = None
    lowest_price: int | Literal["unavailable"] = Field(
        description="Lowest observed price in PKR, or 'unavailable' when no price is recorded",
        examples=[84999, "unavailable"],
    )
    retailer_count: int = Field(description="Distinct retailers quoting this model")
    offer_count: int = Field(description="Price observations behind lowest_price")


class ListingsQueryDTO(BaseModel):
    """Query parameters for the mobile listings."""

    search: str | None = Field(
        default=None,
        description="Case-insensitive substring of '<brand> <model>'",
        examples=["galaxy"],
        max_length=100,
    )
    brand: str = Field(
        default="all",
        description="Brand name (case-insensitive exact match) or 'all'",
        examples=["Samsung"],
    )
    price_range: str = Field(
        default="all",
        description="One of 'all', '0-50000', '50000-100000', '100000-200000', '200000+'. "
        "Unknown values mean 'all'.",
        examples=["50000-100000"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "search": "galaxy",
                "brand": "Samsung",
                "price_range": "100000-200000",
            }
        }
    )


class ListingsResponseDTO(BaseModel):
    mobiles: list[ListingDTO]
    total: int
    warnings: list[DataQualityWarningDTO] = []


class PriceOfferDTO(BaseModel):
    retailer: str
    city: str
    price: int
    observed_at: datetime


class PriceComparisonResponseDTO(BaseModel):
    """Every offer for one model, cheapest first."""

    id: str
    brand: str
    model: str
    lowest_price: int | Literal["unavailable"]
    offers: list[PriceOfferDTO]
    warnings: list[DataQualityWarningDTO] = []
