from fastapi import APIRouter, Depends

from mobile_pk.entrypoints.http.dependencies import (
    get_brand_averages_use_case,
    get_list_brands_use_case,
)
from mobile_pk.entrypoints.http.dtos.price_stats import (
    BrandAveragesResponseDTO,
    BrandsResponseDTO,
)
from mobile_pk.entrypoints.http.error_responses import ErrorResponse
from mobile_pk.entrypoints.http.mappers.price_stats_mapper import PriceStatsMapper
from mobile_pk.use_cases.get_brand_averages import GetBrandAverages
from mobile_pk.use_cases.list_brands import ListBrands


router = APIRouter(tags=["Brands"])


@router.get(
    "/brands",
    response_model=BrandsResponseDTO,
    summary="List brands",
    description="All catalog brands sorted by name. Use the names as the `brand` listing filter.",
    responses={503: {"model": ErrorResponse, "description": "Observation store unavailable"}},
)
def get_brands(
    use_case: ListBrands = Depends(get_list_brands_use_case),
) -> BrandsResponseDTO:
    return PriceStatsMapper.to_brands_response(use_case.execute())


@router.get(
    "/brands/averages",
    response_model=BrandAveragesResponseDTO,
    summary="Average price by brand",
    description="""
    Mean of every valid price observation per brand.

    - Highest average first; ties by brand name
    - Brands without observations are left out (never reported as 0)
    - avg_price is a decimal string rounded half-up to 2 places
    """,
    responses={503: {"model": ErrorResponse, "description": "Observation store unavailable"}},
)
def get_brand_averages(
    use_case: GetBrandAverages = Depends(get_brand_averages_use_case),
) -> BrandAveragesResponseDTO:
    return PriceStatsMapper.to_averages_response(use_case.execute())
