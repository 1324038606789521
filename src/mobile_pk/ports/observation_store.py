from __future__ import annotations

from abc import ABC, abstractmethod

from mobile_pk.domain.catalog import CatalogSnapshot


class ObservationStore(ABC):
    """
    Port for reading the catalog and its price observations.

    The engine never writes through this port. Each call returns one
    consistent snapshot; callers must not combine rows from two calls.

    Contract (Postconditions):
        - Rows are returned in store order (catalog order for models)
        - Failures raise ObservationStoreError; no retries at this layer's callers
    """

    @abstractmethod
    def fetch_snapshot(self) -> CatalogSnapshot:
        """
        Read brands, models and observations as one snapshot.

        Returns:
            CatalogSnapshot with every brand, model and observation row

        Raises:
            ObservationStoreError: If the underlying store cannot be read
        """
        ...
