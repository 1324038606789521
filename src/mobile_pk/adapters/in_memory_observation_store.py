from __future__ import annotations

from collections.abc import Iterable

from mobile_pk.domain.catalog import Brand, CatalogSnapshot, PhoneModel, PriceObservation
from mobile_pk.ports.observation_store import ObservationStore


class InMemoryObservationStore(ObservationStore):
    """
    Canonical contract implementation for tests.

    - Stores rows in insertion order
    - Observations are append-only
    - Every fetch returns an immutable snapshot; later appends never change it
    """

    def __init__(
        self,
        brands: Iterable[Brand] = (),
        models: Iterable[PhoneModel] = (),
        observations: Iterable[PriceObservation] = (),
    ) -> None:
        self._brands = list(brands)
        self._models = list(models)
        self._observations = list(observations)

    def append(self, observation: PriceObservation) -> None:
        self._observations.append(observation)

    def fetch_snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            brands=tuple(self._brands),
            models=tuple(self._models),
            observations=tuple(self._observations),
        )
