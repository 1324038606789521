from fastapi import APIRouter, Depends, Query

from mobile_pk.entrypoints.http.dependencies import (
    get_market_summary_use_case,
    get_price_overview_use_case,
    get_price_trends_use_case,
    get_recent_price_changes_use_case,
)
from mobile_pk.entrypoints.http.dtos.listings import ListingsQueryDTO
from mobile_pk.entrypoints.http.dtos.price_stats import (
    MarketSummaryResponseDTO,
    PriceOverviewResponseDTO,
    RecentPriceChangesResponseDTO,
    TrendsResponseDTO,
)
from mobile_pk.entrypoints.http.error_responses import ErrorResponse
from mobile_pk.entrypoints.http.mappers.listings_mapper import ListingsMapper
from mobile_pk.entrypoints.http.mappers.price_stats_mapper import PriceStatsMapper
from mobile_pk.use_cases.get_market_summary import GetMarketSummary
from mobile_pk.use_cases.get_price_overview import GetPriceOverview, GetPriceOverviewRequest
from mobile_pk.use_cases.get_price_trends import GetPriceTrends
from mobile_pk.use_cases.get_recent_price_changes import (
    MAX_RECENT_CHANGES,
    GetRecentPriceChanges,
    GetRecentPriceChangesRequest,
)


router = APIRouter(prefix="/price-trends", tags=["Price Trends"])

_STORE_DOWN = {503: {"model": ErrorResponse, "description": "Observation store unavailable"}}


@router.get(
    "",
    response_model=TrendsResponseDTO,
    summary="Monthly average price by brand",
    description="""
    One point per brand per calendar month that has observations.

    - Months are cut in the configured timezone (TREND_TIMEZONE, default Asia/Karachi)
    - Series are sparse: months without data for a brand are omitted, not interpolated
    - Ordered by period ascending, then brand name
    """,
    responses=_STORE_DOWN,
)
def get_price_trends(
    use_case: GetPriceTrends = Depends(get_price_trends_use_case),
) -> TrendsResponseDTO:
    return PriceStatsMapper.to_trends_response(use_case.execute())


@router.get(
    "/overview",
    response_model=PriceOverviewResponseDTO,
    summary="Listings, brand averages and trends in one consistent read",
    responses={422: {"model": ErrorResponse, "description": "Validation error"}, **_STORE_DOWN},
)
def get_price_overview(
    query: ListingsQueryDTO = Depends(),
    use_case: GetPriceOverview = Depends(get_price_overview_use_case),
) -> PriceOverviewResponseDTO:
    request = GetPriceOverviewRequest(filters=ListingsMapper.to_domain_filters(query))

    overview = use_case.execute(request)

    return PriceStatsMapper.to_overview_response(overview)


@router.get(
    "/recent-changes",
    response_model=RecentPriceChangesResponseDTO,
    summary="Recent price changes",
    description="""
    Latest price movement per (mobile, retailer, city), newest first.
    Listings whose last two prices are equal are skipped.
    """,
    responses={422: {"model": ErrorResponse, "description": "Validation error"}, **_STORE_DOWN},
)
def get_recent_price_changes(
    limit: int = Query(default=10, ge=1, le=MAX_RECENT_CHANGES, description="Maximum changes to return"),
    use_case: GetRecentPriceChanges = Depends(get_recent_price_changes_use_case),
) -> RecentPriceChangesResponseDTO:
    result = use_case.execute(GetRecentPriceChangesRequest(limit=limit))

    return PriceStatsMapper.to_changes_response(result)


@router.get(
    "/summary",
    response_model=MarketSummaryResponseDTO,
    summary="Market summary",
    description="Overall average price, month-over-month change and counts of recent price moves.",
    responses=_STORE_DOWN,
)
def get_market_summary(
    use_case: GetMarketSummary = Depends(get_market_summary_use_case),
) -> MarketSummaryResponseDTO:
    return PriceStatsMapper.to_summary_response(use_case.execute())
