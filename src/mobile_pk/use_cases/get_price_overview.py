from __future__ import annotations

from dataclasses import dataclass

from mobile_pk.domain.listing import ListingFilters
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import PriceOverview, PriceQueryFacade


@dataclass(frozen=True, slots=True)
class GetPriceOverviewRequest:
    filters: ListingFilters


class GetPriceOverview:
    """
    Listings, brand averages and trends from a single store read.

    Use this when a page shows more than one of them: all three come from
    the same snapshot, so they always agree with each other.
    """

    def __init__(
        self,
        observation_store: ObservationStore,
        price_query_facade: PriceQueryFacade,
    ) -> None:
        self._observation_store = observation_store
        self._facade = price_query_facade

    def execute(self, request: GetPriceOverviewRequest) -> PriceOverview:
        """
        Raises:
            FilterValidationError: If filter parameters are invalid
            ObservationStoreError: If the snapshot cannot be read
        """
        request.filters.validate()

        snapshot = self._observation_store.fetch_snapshot()
        return self._facade.get_overview(snapshot, request.filters)
