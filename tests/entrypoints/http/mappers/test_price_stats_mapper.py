"""Tests for PriceStatsMapper."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from mobile_pk.domain.catalog import Brand
from mobile_pk.domain.price_changes import PriceChange
from mobile_pk.domain.pricing import BrandAverage
from mobile_pk.domain.trends import TrendPoint
from mobile_pk.entrypoints.http.mappers.price_stats_mapper import PriceStatsMapper
from mobile_pk.use_cases.get_brand_averages import GetBrandAveragesResponse
from mobile_pk.use_cases.get_price_trends import GetPriceTrendsResponse
from mobile_pk.use_cases.list_brands import ListBrandsResponse
from mobile_pk.use_cases.price_query_facade import (
    MarketSummary,
    RecentPriceChange,
    RecentPriceChangesResult,
)


def test_to_brands_response() -> None:
    """Brands map to id/name pairs."""
    dto = PriceStatsMapper.to_brands_response(ListBrandsResponse(brands=[Brand("b-1", "Apple")]))

    assert dto.model_dump() == {"brands": [{"id": "b-1", "name": "Apple"}]}


def test_to_averages_response_preserves_decimal_precision() -> None:
    """Averages serialize as strings with two places."""
    dto = PriceStatsMapper.to_averages_response(
        GetBrandAveragesResponse(
            averages=[BrandAverage("b-samsung", "Samsung", Decimal("47500.00"), 2)]
        )
    )

    assert dto.averages[0].avg_price == "47500.00"
    assert dto.averages[0].brand == "Samsung"
    assert dto.warnings == []


def test_to_trends_response() -> None:
    """Trend points keep period and echo the timezone."""
    dto = PriceStatsMapper.to_trends_response(
        GetPriceTrendsResponse(
            points=[TrendPoint("2024-02", "b-apple", "Apple", Decimal("180000.00"), 1)],
            timezone="Asia/Karachi",
        )
    )

    assert dto.timezone == "Asia/Karachi"
    assert dto.points[0].model_dump() == {
        "period": "2024-02",
        "brand_id": "b-apple",
        "brand": "Apple",
        "avg_price": "180000.00",
        "sample_count": 1,
    }


def test_to_changes_response() -> None:
    """Percent changes become strings; a missing percentage stays null."""
    changed_at = datetime(2024, 2, 1, tzinfo=timezone.utc)
    result = RecentPriceChangesResult(
        changes=[
            RecentPriceChange(
                change=PriceChange("m-s24", "Daraz", "Karachi", 449999, 439999, Decimal("-2.2"), changed_at),
                model_name="Galaxy S24 Ultra",
                brand_name="Samsung",
            ),
            RecentPriceChange(
                change=PriceChange("m-a15", "Daraz", "Lahore", 0, 5000, None, changed_at),
                model_name="Galaxy A15",
                brand_name="Samsung",
            ),
        ]
    )

    dto = PriceStatsMapper.to_changes_response(result)

    assert [change.change_pct for change in dto.changes] == ["-2.2", None]
    assert dto.changes[0].model == "Galaxy S24 Ultra"
    assert dto.changes[0].model_id == "m-s24"


def test_to_summary_response_handles_missing_values() -> None:
    """None decimals stay null in the DTO."""
    dto = PriceStatsMapper.to_summary_response(
        MarketSummary(
            observation_count=0,
            average_price=None,
            current_period=None,
            current_period_average=None,
            month_over_month_pct=None,
            price_increases=0,
            price_decreases=0,
        )
    )

    assert dto.average_price is None
    assert dto.month_over_month_pct is None
    assert dto.observation_count == 0


def test_to_summary_response_formats_decimals() -> None:
    """Present decimals become strings."""
    dto = PriceStatsMapper.to_summary_response(
        MarketSummary(
            observation_count=3,
            average_price=Decimal("91666.67"),
            current_period="2024-02",
            current_period_average=Decimal("112500.00"),
            month_over_month_pct=Decimal("125.0"),
            price_increases=0,
            price_decreases=1,
        )
    )

    assert (dto.average_price, dto.current_period_average, dto.month_over_month_pct) == (
        "91666.67",
        "112500.00",
        "125.0",
    )
