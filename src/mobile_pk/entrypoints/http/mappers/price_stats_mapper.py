from __future__ import annotations

from decimal import Decimal

from mobile_pk.domain.pricing import BrandAverage
from mobile_pk.domain.trends import TrendPoint
from mobile_pk.entrypoints.http.dtos.price_stats import (
    BrandAverageDTO,
    BrandAveragesResponseDTO,
    BrandDTO,
    BrandsResponseDTO,
    MarketSummaryResponseDTO,
    PriceChangeDTO,
    PriceOverviewResponseDTO,
    RecentPriceChangesResponseDTO,
    TrendPointDTO,
    TrendsResponseDTO,
)
from mobile_pk.entrypoints.http.mappers.listings_mapper import ListingsMapper
from mobile_pk.use_cases.get_brand_averages import GetBrandAveragesResponse
from mobile_pk.use_cases.get_price_trends import GetPriceTrendsResponse
from mobile_pk.use_cases.list_brands import ListBrandsResponse
from mobile_pk.use_cases.price_query_facade import (
    MarketSummary,
    PriceOverview,
    RecentPriceChangesResult,
)


def _decimal_str(value: Decimal | None) -> str | None:
    # Decimal → str at the boundary
    return str(value) if value is not None else None


class PriceStatsMapper:
    """Maps brand, average, trend and market results to REST DTOs."""

    @staticmethod
    def to_brands_response(result: ListBrandsResponse) -> BrandsResponseDTO:
        return BrandsResponseDTO(
            brands=[BrandDTO(id=brand.id, name=brand.name) for brand in result.brands]
        )

    @staticmethod
    def to_average(average: BrandAverage) -> BrandAverageDTO:
        return BrandAverageDTO(
            brand_id=average.brand_id,
            brand=average.brand_name,
            avg_price=str(average.avg_price),
            sample_count=average.sample_count,
        )

    @staticmethod
    def to_trend_point(point: TrendPoint) -> TrendPointDTO:
        return TrendPointDTO(
            period=point.period,
            brand_id=point.brand_id,
            brand=point.brand_name,
            avg_price=str(point.avg_price),
            sample_count=point.sample_count,
        )

    @staticmethod
    def to_averages_response(result: GetBrandAveragesResponse) -> BrandAveragesResponseDTO:
        return BrandAveragesResponseDTO(
            averages=[PriceStatsMapper.to_average(average) for average in result.averages],
            warnings=ListingsMapper.to_warnings(result.warnings),
        )

    @staticmethod
    def to_trends_response(result: GetPriceTrendsResponse) -> TrendsResponseDTO:
        return TrendsResponseDTO(
            timezone=result.timezone,
            points=[PriceStatsMapper.to_trend_point(point) for point in result.points],
            warnings=ListingsMapper.to_warnings(result.warnings),
        )

    @staticmethod
    def to_overview_response(overview: PriceOverview) -> PriceOverviewResponseDTO:
        return PriceOverviewResponseDTO(
            mobiles=[ListingsMapper.to_listing_response(entry) for entry in overview.listings],
            averages=[PriceStatsMapper.to_average(average) for average in overview.averages],
            trends=[PriceStatsMapper.to_trend_point(point) for point in overview.points],
            warnings=ListingsMapper.to_warnings(overview.warnings),
        )

    @staticmethod
    def to_changes_response(result: RecentPriceChangesResult) -> RecentPriceChangesResponseDTO:
        return RecentPriceChangesResponseDTO(
            changes=[
                PriceChangeDTO(
                    model_id=recent.change.model_id,
                    model=recent.model_name,
                    brand=recent.brand_name,
                    retailer=recent.change.retailer,
                    city=recent.change.city,
                    previous_price=recent.change.previous_price,
                    current_price=recent.change.current_price,
                    change_pct=_decimal_str(recent.change.change_pct),
                    changed_at=recent.change.changed_at,
                )
                for recent in result.changes
            ],
            warnings=ListingsMapper.to_warnings(result.warnings),
        )

    @staticmethod
    def to_summary_response(summary: MarketSummary) -> MarketSummaryResponseDTO:
        return MarketSummaryResponseDTO(
            observation_count=summary.observation_count,
            average_price=_decimal_str(summary.average_price),
            current_period=summary.current_period,
            current_period_average=_decimal_str(summary.current_period_average),
            month_over_month_pct=_decimal_str(summary.month_over_month_pct),
            price_increases=summary.price_increases,
            price_decreases=summary.price_decreases,
            warnings=ListingsMapper.to_warnings(summary.warnings),
        )
