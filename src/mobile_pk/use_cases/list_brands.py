from __future__ import annotations

from dataclasses import dataclass

from mobile_pk.domain.catalog import Brand
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade


@dataclass(frozen=True, slots=True)
class ListBrandsResponse:
    brands: list[Brand]


class ListBrands:
    """Every catalog brand, sorted by name (feeds the brand filter options)."""

    def __init__(
        self,
        observation_store: ObservationStore,
        price_query_facade: PriceQueryFacade,
    ) -> None:
        self._observation_store = observation_store
        self._facade = price_query_facade

    def execute(self) -> ListBrandsResponse:
        snapshot = self._observation_store.fetch_snapshot()
        return ListBrandsResponse(brands=self._facade.list_brands(snapshot))
