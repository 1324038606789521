"""Get price comparison for one phone model use case."""

from __future__ import annotations

from dataclasses import dataclass

from mobile_pk.domain.errors import ValidationError
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.price_query_facade import PriceComparison, PriceQueryFacade


@dataclass(frozen=True, slots=True)
class GetPriceComparisonRequest:
    """Request to compare prices for a model."""

    model_id: str


class GetPriceComparison:
    """
    Use case behind "Compare Prices".

    Responsibilities:
    - Validate model_id is not blank
    - Read one snapshot from the store
    - Return every valid offer for the model, cheapest first
    - Raise NotFoundError if the model is not in the catalog
    """

    def __init__(
        self,
        observation_store: ObservationStore,
        price_query_facade: PriceQueryFacade,
    ) -> None:
        self._observation_store = observation_store
        self._facade = price_query_facade

    def execute(self, request: GetPriceComparisonRequest) -> PriceComparison:
        """
        Args:
            request: Request containing model_id

        Returns:
            PriceComparison for the model

        Raises:
            ValidationError: If model_id is blank
            NotFoundError: If the model doesn't exist
            ObservationStoreError: If the snapshot cannot be read
        """
        if not request.model_id.strip():
            raise ValidationError(
                errors=[
                    {
                        "field": "model_id",
                        "message": "Must not be blank",
                        "code": "BLANK_ID",
                    }
                ]
            )

        snapshot = self._observation_store.fetch_snapshot()
        return self._facade.get_price_comparison(snapshot, request.model_id)
