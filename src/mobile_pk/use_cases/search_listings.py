from __future__ import annotations

from dataclasses import dataclass

from mobile_pk.domain.listing import ListingEntry, ListingFilters
from mobile_pk.domain.pricing import DataQualityWarning
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade


@dataclass(frozen=True, slots=True)
class SearchListingsRequest:
    filters: ListingFilters


@dataclass(frozen=True, slots=True)
class SearchListingsResponse:
    listings: list[ListingEntry]
    warnings: tuple[DataQualityWarning, ...] = ()


class SearchListings:
    """
    Mobile listings filtered by search term, brand and price range.

    Reads one snapshot from the store and hands it to the façade. Store
    failures propagate unchanged; there is no retry here.
    """

    def __init__(
        self,
        observation_store: ObservationStore,
        price_query_facade: PriceQueryFacade,
    ) -> None:
        self._observation_store = observation_store
        self._facade = price_query_facade

    def execute(self, request: SearchListingsRequest) -> SearchListingsResponse:
        """
        Execute listing search.

        Filters are validated before the store is read.

        Args:
            request: Listing filters

        Returns:
            Response with matching listings in catalog order and any data-quality warnings

        Raises:
            FilterValidationError: If filter parameters are invalid
            ObservationStoreError: If the snapshot cannot be read
        """
        request.filters.validate()

        snapshot = self._observation_store.fetch_snapshot()
        result = self._facade.get_listings(snapshot, request.filters)

        return SearchListingsResponse(listings=result.listings, warnings=result.warnings)
