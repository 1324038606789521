from fastapi import APIRouter, Depends

from mobile_pk.entrypoints.http.dependencies import (
    get_price_comparison_use_case,
    get_search_listings_use_case,
)
from mobile_pk.entrypoints.http.dtos.listings import (
    ListingsQueryDTO,
    ListingsResponseDTO,
    PriceComparisonResponseDTO,
)
from mobile_pk.entrypoints.http.error_responses import ErrorResponse
from mobile_pk.entrypoints.http.mappers.listings_mapper import ListingsMapper
from mobile_pk.use_cases.get_price_comparison import (
    GetPriceComparison,
    GetPriceComparisonRequest,
)
from mobile_pk.use_cases.search_listings import SearchListings


router = APIRouter(tags=["Mobiles"])


@router.get(
    "/mobiles",
    response_model=ListingsResponseDTO,
    summary="Search mobile listings",
    description="""
    List mobiles with their lowest price across retailers and cities.

    ## Filters
    - All filters use AND semantics
    - search: case-insensitive substring of "<brand> <model>"
    - brand: case-insensitive exact match, or "all"
    - price_range: "0-50000", "50000-100000", "100000-200000", "200000+" or "all"
    - Unknown brand or price_range values mean "all"
    - Mobiles without a recorded price only appear when price_range is "all"

    ## Example
    ```
    GET /v1/mobiles?search=galaxy&price_range=100000-200000
    ```
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "mobiles": [
                            {
                                "id": "6f1c8a52-4f0e-4c55-9a49-0c1e4bb0e2a1",
                                "brand": "Samsung",
                                "model": "Galaxy A55",
                                "specs": {"ram": "8GB", "storage": "256GB"},
                                "image_url": None,
                                "lowest_price": 124999,
                                "retailer_count": 3,
                                "offer_count": 4,
                            }
                        ],
                        "total": 1,
                        "warnings": [],
                    }
                }
            },
        },
        422: {"model": ErrorResponse, "description": "Validation error"},
        503: {"model": ErrorResponse, "description": "Observation store unavailable"},
    },
)
def get_mobiles(
    query: ListingsQueryDTO = Depends(),
    use_case: SearchListings = Depends(get_search_listings_use_case),
) -> ListingsResponseDTO:
    """Search mobiles endpoint following parse → execute → map → return pattern."""
    request = ListingsMapper.to_domain_request(query)

    result = use_case.execute(request)

    return ListingsMapper.to_response(result)


@router.get(
    "/mobiles/{model_id}/prices",
    response_model=PriceComparisonResponseDTO,
    summary="Compare prices for a mobile",
    description="""
    Every valid price observation for one mobile, cheapest first.
    Ties are ordered by retailer, then city.
    """,
    responses={
        404: {"model": ErrorResponse, "description": "Mobile not found"},
        503: {"model": ErrorResponse, "description": "Observation store unavailable"},
    },
)
def get_mobile_prices(
    model_id: str,
    use_case: GetPriceComparison = Depends(get_price_comparison_use_case),
) -> PriceComparisonResponseDTO:
    comparison = use_case.execute(GetPriceComparisonRequest(model_id=model_id))

    return ListingsMapper.to_comparison_response(comparison)
