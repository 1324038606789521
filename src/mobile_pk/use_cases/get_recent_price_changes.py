from __future__ import annotations

from dataclasses import dataclass

from mobile_pk.domain.errors import ValidationError
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade, RecentPriceChangesResult

MAX_RECENT_CHANGES = 100


@dataclass(frozen=True, slots=True)
class GetRecentPriceChangesRequest:
    limit: int = 10

    def validate(self) -> None:
        """
        Raises:
            ValidationError: If limit is outside 1..MAX_RECENT_CHANGES
        """
        if self.limit <= 0:
            raise ValidationError("limit must be > 0")
        if self.limit > MAX_RECENT_CHANGES:
            raise ValidationError(f"limit must be <= {MAX_RECENT_CHANGES}")


class GetRecentPriceChanges:
    """Newest price movements per retailer listing."""

    def __init__(
        self,
        observation_store: ObservationStore,
        price_query_facade: PriceQueryFacade,
    ) -> None:
        self._observation_store = observation_store
        self._facade = price_query_facade

    def execute(self, request: GetRecentPriceChangesRequest) -> RecentPriceChangesResult:
        request.validate()

        snapshot = self._observation_store.fetch_snapshot()
        return self._facade.get_recent_price_changes(snapshot, limit=request.limit)
