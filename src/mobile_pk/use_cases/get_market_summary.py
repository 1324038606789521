from __future__ import annotations

from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import MarketSummary, PriceQueryFacade


class GetMarketSummary:
    """Headline market figures: overall average, month-over-month move, price moves."""

    def __init__(
        self,
        observation_store: ObservationStore,
        price_query_facade: PriceQueryFacade,
    ) -> None:
        self._observation_store = observation_store
        self._facade = price_query_facade

    def execute(self) -> MarketSummary:
        snapshot = self._observation_store.fetch_snapshot()
        return self._facade.get_market_summary(snapshot)
