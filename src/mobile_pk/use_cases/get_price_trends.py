from __future__ import annotations

from dataclasses import dataclass

from mobile_pk.domain.pricing import DataQualityWarning
from mobile_pk.domain.trends import TrendPoint
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade


@dataclass(frozen=True, slots=True)
class GetPriceTrendsResponse:
    points: list[TrendPoint]
    timezone: str
    warnings: tuple[DataQualityWarning, ...] = ()


class GetPriceTrends:
    """
    Monthly average price per brand.

    Periods are calendar months in the façade's configured timezone, which
    is echoed back so callers can label the series.
    """

    def __init__(
        self,
        observation_store: ObservationStore,
        price_query_facade: PriceQueryFacade,
    ) -> None:
        self._observation_store = observation_store
        self._facade = price_query_facade

    def execute(self) -> GetPriceTrendsResponse:
        snapshot = self._observation_store.fetch_snapshot()
        result = self._facade.get_trends(snapshot)
        return GetPriceTrendsResponse(
            points=result.points,
            timezone=str(self._facade.trend_calculator.tz),
            warnings=result.warnings,
        )
