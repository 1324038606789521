"""PostgreSQL implementation of ObservationStore."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mobile_pk.domain.catalog import (
    Brand,
    CatalogSnapshot,
    PhoneModel,
    PhoneSpecs,
    PriceObservation,
)
from mobile_pk.domain.errors import ObservationStoreError
from mobile_pk.infra.db.models import BrandRow, MobilePriceRow, MobileRow
from mobile_pk.ports.observation_store import ObservationStore

logger = logging.getLogger(__name__)

SNAPSHOT_ISOLATION_LEVEL = "REPEATABLE READ"


class PostgresObservationStore(ObservationStore):
    """
    PostgreSQL implementation of ObservationStore.

    - Reads mobile_brands, mobiles and mobile_prices in one REPEATABLE READ
      transaction, so the three reads see the same database state
    - Models come back in catalog order (name), observations oldest first
    - Converts ORM rows (infrastructure) to domain entities
    - Wraps driver failures in ObservationStoreError; never retries
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize store with database session.

        Args:
            session: SQLAlchemy session; must not have begun a transaction yet
        """
        self._session = session

    def fetch_snapshot(self) -> CatalogSnapshot:
        try:
            # Must run before the first query so it applies to the whole transaction
            self._session.connection(
                execution_options={"isolation_level": SNAPSHOT_ISOLATION_LEVEL}
            )

            brand_rows = self._session.execute(
                select(BrandRow).order_by(BrandRow.name)
            ).scalars().all()
            mobile_rows = self._session.execute(
                select(MobileRow).order_by(MobileRow.model, MobileRow.id)
            ).scalars().all()
            price_rows = self._session.execute(
                select(MobilePriceRow).order_by(MobilePriceRow.created_at, MobilePriceRow.id)
            ).scalars().all()
        except SQLAlchemyError as exc:
            logger.error(
                "Observation store read failed",
                extra={"error_type": type(exc).__name__},
            )
            raise ObservationStoreError(
                "Could not read price observations", cause=type(exc).__name__
            ) from exc

        return CatalogSnapshot(
            brands=tuple(self._to_brand(row) for row in brand_rows),
            models=tuple(self._to_model(row) for row in mobile_rows),
            observations=tuple(self._to_observation(row) for row in price_rows),
        )

    def _to_brand(self, row: BrandRow) -> Brand:
        return Brand(id=str(row.id), name=row.name)

    def _to_model(self, row: MobileRow) -> PhoneModel:
        return PhoneModel(
            id=str(row.id),
            brand_id=str(row.brand_id),
            name=row.model,
            specs=PhoneSpecs(
                display_size=row.display_size,
                ram=row.ram,
                storage=row.storage,
                camera=row.camera,
                battery=row.battery,
                processor=row.processor,
                os=row.operating_system,
            ),
            image_url=row.image_url,
        )

    def _to_observation(self, row: MobilePriceRow) -> PriceObservation:
        # Prices are screened by the engine, not here
        return PriceObservation(
            model_id=str(row.mobile_id),
            retailer=row.retailer,
            city=row.city,
            price=row.price,
            observed_at=row.created_at,
        )
