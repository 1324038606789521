"""Test suite for SearchListings use case."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from mobile_pk.domain.catalog import CatalogSnapshot
from mobile_pk.domain.errors import ObservationStoreError
from mobile_pk.domain.listing import FilterValidationError, ListingFilters, PriceRange
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade
from mobile_pk.use_cases.search_listings import (
    SearchListings,
    SearchListingsRequest,
    SearchListingsResponse,
)


@pytest.fixture()
def mock_store(catalog_snapshot: CatalogSnapshot) -> Mock:
    """Mock ObservationStore returning the default snapshot."""
    store = Mock(spec=ObservationStore)
    store.fetch_snapshot.return_value = catalog_snapshot
    return store


@pytest.fixture()
def use_case(mock_store: Mock) -> SearchListings:
    return SearchListings(observation_store=mock_store, price_query_facade=PriceQueryFacade())


# ==============================================================================
# Happy Path Tests
# ==============================================================================


def test_execute_returns_filtered_listings(use_case: SearchListings, mock_store: Mock) -> None:
    """Use case reads one snapshot and returns the matching listings."""
    request = SearchListingsRequest(filters=ListingFilters(price_range=PriceRange.UNDER_50K))

    response = use_case.execute(request)

    assert isinstance(response, SearchListingsResponse)
    assert [entry.model.name for entry in response.listings] == ["Galaxy A15"]
    assert response.warnings == ()
    mock_store.fetch_snapshot.assert_called_once_with()


def test_execute_with_default_filters_lists_whole_catalog(use_case: SearchListings) -> None:
    """No filters returns every model."""
    response = use_case.execute(SearchListingsRequest(filters=ListingFilters()))

    assert len(response.listings) == 3


def test_execute_delegates_to_facade(mock_store: Mock, catalog_snapshot: CatalogSnapshot) -> None:
    """The snapshot from the store is handed to the façade unchanged."""
    facade = Mock(spec=PriceQueryFacade)
    facade.get_listings.return_value = Mock(listings=[], warnings=())
    filters = ListingFilters(search_term="galaxy")

    SearchListings(observation_store=mock_store, price_query_facade=facade).execute(
        SearchListingsRequest(filters=filters)
    )

    facade.get_listings.assert_called_once_with(catalog_snapshot, filters)


# ==============================================================================
# Validation and Error Tests
# ==============================================================================


def test_invalid_filters_rejected_before_store_read(use_case: SearchListings, mock_store: Mock) -> None:
    """Filters are validated before the store is touched."""
    request = SearchListingsRequest(filters=ListingFilters(search_term="x" * 101))

    with pytest.raises(FilterValidationError):
        use_case.execute(request)

    mock_store.fetch_snapshot.assert_not_called()


def test_store_error_propagates_unchanged(use_case: SearchListings, mock_store: Mock) -> None:
    """Store failures reach the caller as-is, without retries."""
    error = ObservationStoreError("Could not read price observations")
    mock_store.fetch_snapshot.side_effect = error

    with pytest.raises(ObservationStoreError) as exc_info:
        use_case.execute(SearchListingsRequest(filters=ListingFilters()))

    assert exc_info.value is error
    mock_store.fetch_snapshot.assert_called_once_with()
