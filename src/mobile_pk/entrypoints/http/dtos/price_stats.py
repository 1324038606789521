from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mobile_pk.entrypoints.http.dtos.common import DataQualityWarningDTO
from mobile_pk.entrypoints.http.dtos.listings import ListingDTO


class BrandDTO(BaseModel):
    id: str
    name: str


class BrandsResponseDTO(BaseModel):
    brands: list[BrandDTO]


class BrandAverageDTO(BaseModel):
    brand_id: str
    brand: str
    avg_price: str = Field(
        description="Mean observed price in PKR as decimal string",
        examples=["47500.00"],
    )
    sample_count: int = Field(description="Observations averaged")


class BrandAveragesResponseDTO(BaseModel):
    """Brand averages, highest average first."""

    averages: list[BrandAverageDTO]
    warnings: list[DataQualityWarningDTO] = []

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "averages": [
                    {"brand_id": "b-apple", "brand": "Apple", "avg_price": "180000.00", "sample_count": 1},
                    {"brand_id": "b-samsung", "brand": "Samsung", "avg_price": "47500.00", "sample_count": 2},
                ],
                "warnings": [],
            }
        }
    )


class TrendPointDTO(BaseModel):
    period: str = Field(description="Calendar month as YYYY-MM", examples=["2025-03"])
    brand_id: str
    brand: str
    avg_price: str = Field(examples=["85250.50"])
    sample_count: int


class TrendsResponseDTO(BaseModel):
    """Sparse monthly series, ordered by period then brand."""

    timezone: str = Field(description="Timezone the months are cut in", examples=["Asia/Karachi"])
    points: list[TrendPointDTO]
    warnings: list[DataQualityWarningDTO] = []


class PriceOverviewResponseDTO(BaseModel):
    """Listings, averages and trends computed from one snapshot."""

    mobiles: list[ListingDTO]
    averages: list[BrandAverageDTO]
    trends: list[TrendPointDTO]
    warnings: list[DataQualityWarningDTO] = []


class PriceChangeDTO(BaseModel):
    model_id: str
    model: str
    brand: str
    retailer: str
    city: str
    previous_price: int
    current_price: int
    change_pct: str | None = Field(
        description="Percent change as decimal string, null when the previous price was 0",
        examples=["-2.2"],
    )
    changed_at: datetime

    model_config = ConfigDict(protected_namespaces=())


class RecentPriceChangesResponseDTO(BaseModel):
    changes: list[PriceChangeDTO]
    warnings: list[DataQualityWarningDTO] = []


class MarketSummaryResponseDTO(BaseModel):
    observation_count: int
    average_price: str | None = Field(examples=["95000.00"])
    current_period: str | None = Field(examples=["2025-06"])
    current_period_average: str | None
    month_over_month_pct: str | None = Field(
        description="Change of the monthly average against the previous calendar month",
        examples=["-2.3"],
    )
    price_increases: int
    price_decreases: int
    warnings: list[DataQualityWarningDTO] = []
