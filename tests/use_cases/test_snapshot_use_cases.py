"""
Test suite for the snapshot read use cases.

Covers GetBrandAverages, GetPriceTrends, GetPriceOverview, ListBrands and
GetMarketSummary: each reads exactly one snapshot and lets store errors through.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock
from zoneinfo import ZoneInfo

import pytest

from mobile_pk.domain.catalog import CatalogSnapshot
from mobile_pk.domain.errors import ObservationStoreError
from mobile_pk.domain.listing import FilterValidationError, ListingFilters
from mobile_pk.domain.trends import TrendCalculator
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.get_brand_averages import GetBrandAverages
from mobile_pk.use_cases.get_market_summary import GetMarketSummary
from mobile_pk.use_cases.get_price_overview import GetPriceOverview, GetPriceOverviewRequest
from mobile_pk.use_cases.get_price_trends import GetPriceTrends
from mobile_pk.use_cases.list_brands import ListBrands
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade


@pytest.fixture()
def mock_store(catalog_snapshot: CatalogSnapshot) -> Mock:
    """Mock ObservationStore returning the default snapshot."""
    store = Mock(spec=ObservationStore)
    store.fetch_snapshot.return_value = catalog_snapshot
    return store


@pytest.fixture()
def facade() -> PriceQueryFacade:
    return PriceQueryFacade()


# ==============================================================================
# GetBrandAverages
# ==============================================================================


def test_brand_averages(mock_store: Mock, facade: PriceQueryFacade) -> None:
    """Averages come from a single store read."""
    response = GetBrandAverages(mock_store, facade).execute()

    assert [(a.brand_name, a.avg_price) for a in response.averages] == [
        ("Apple", Decimal("180000.00")),
        ("Samsung", Decimal("47500.00")),
    ]
    mock_store.fetch_snapshot.assert_called_once_with()


# ==============================================================================
# GetPriceTrends
# ==============================================================================


def test_price_trends_echo_timezone(mock_store: Mock) -> None:
    """The configured timezone is returned with the points."""
    facade = PriceQueryFacade(TrendCalculator(tz=ZoneInfo("Asia/Karachi")))

    response = GetPriceTrends(mock_store, facade).execute()

    assert response.timezone == "Asia/Karachi"
    assert [(p.period, p.brand_name) for p in response.points] == [
        ("2024-01", "Samsung"),
        ("2024-02", "Apple"),
    ]


def test_price_trends_default_timezone_is_utc(mock_store: Mock, facade: PriceQueryFacade) -> None:
    """Without configuration the calculator works in UTC."""
    assert GetPriceTrends(mock_store, facade).execute().timezone == "UTC"


# ==============================================================================
# GetPriceOverview
# ==============================================================================


def test_price_overview_reads_store_once(mock_store: Mock, facade: PriceQueryFacade) -> None:
    """Listings, averages and trends share one snapshot."""
    overview = GetPriceOverview(mock_store, facade).execute(
        GetPriceOverviewRequest(filters=ListingFilters(brand="Samsung"))
    )

    assert [entry.model.name for entry in overview.listings] == ["Galaxy A15"]
    assert len(overview.averages) == 2
    assert len(overview.points) == 2
    mock_store.fetch_snapshot.assert_called_once_with()


def test_price_overview_validates_filters_first(mock_store: Mock, facade: PriceQueryFacade) -> None:
    """Invalid filters fail before the store is read."""
    with pytest.raises(FilterValidationError):
        GetPriceOverview(mock_store, facade).execute(
            GetPriceOverviewRequest(filters=ListingFilters(search_term="x" * 101))
        )

    mock_store.fetch_snapshot.assert_not_called()


# ==============================================================================
# ListBrands and GetMarketSummary
# ==============================================================================


def test_list_brands(mock_store: Mock, facade: PriceQueryFacade) -> None:
    """Brands are sorted by name."""
    response = ListBrands(mock_store, facade).execute()

    assert [brand.name for brand in response.brands] == ["Apple", "Samsung", "Xiaomi"]


def test_market_summary(mock_store: Mock, facade: PriceQueryFacade) -> None:
    """February (Apple, 180000) is compared with January (Samsung, 47500)."""
    summary = GetMarketSummary(mock_store, facade).execute()

    assert summary.observation_count == 3
    assert summary.current_period == "2024-02"
    assert summary.month_over_month_pct == Decimal("278.9")


@pytest.mark.parametrize(
    "run",
    [
        lambda store, facade: GetBrandAverages(store, facade).execute(),
        lambda store, facade: GetPriceTrends(store, facade).execute(),
        lambda store, facade: GetPriceOverview(store, facade).execute(
            GetPriceOverviewRequest(filters=ListingFilters())
        ),
        lambda store, facade: ListBrands(store, facade).execute(),
        lambda store, facade: GetMarketSummary(store, facade).execute(),
    ],
    ids=["brand_averages", "price_trends", "price_overview", "list_brands", "market_summary"],
)
def test_store_errors_propagate(mock_store: Mock, facade: PriceQueryFacade, run) -> None:
    """ObservationStoreError is never swallowed or wrapped."""
    mock_store.fetch_snapshot.side_effect = ObservationStoreError("down")

    with pytest.raises(ObservationStoreError):
        run(mock_store, facade)
