from __future__ import annotations

from dataclasses import dataclass

from mobile_pk.domain.pricing import BrandAverage, DataQualityWarning
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade


@dataclass(frozen=True, slots=True)
class GetBrandAveragesResponse:
    averages: list[BrandAverage]
    warnings: tuple[DataQualityWarning, ...] = ()


class GetBrandAverages:
    """Average observed price per brand, highest first."""

    def __init__(
        self,
        observation_store: ObservationStore,
        price_query_facade: PriceQueryFacade,
    ) -> None:
        self._observation_store = observation_store
        self._facade = price_query_facade

    def execute(self) -> GetBrandAveragesResponse:
        snapshot = self._observation_store.fetch_snapshot()
        result = self._facade.get_brand_averages(snapshot)
        return GetBrandAveragesResponse(averages=result.averages, warnings=result.warnings)
