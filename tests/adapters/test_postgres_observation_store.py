"""
Unit test suite for PostgresObservationStore.

This test suite verifies the PostgreSQL implementation using mocks.
Tests verify:
- The snapshot transaction runs at REPEATABLE READ before any query
- Brands, mobiles and prices are each read with one SELECT
- Type conversions (UUID → string, column renames) work
- Driver failures become ObservationStoreError
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from unittest.mock import Mock, call

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from mobile_pk.adapters.postgres_observation_store import (
    SNAPSHOT_ISOLATION_LEVEL,
    PostgresObservationStore,
)
from mobile_pk.domain.catalog import Brand, PhoneModel, PhoneSpecs, PriceObservation
from mobile_pk.domain.errors import ObservationStoreError
from mobile_pk.infra.db.models import BrandRow, MobilePriceRow, MobileRow

BRAND_ID = uuid.UUID("00000000-0000-0000-0000-0000000000b1")
MOBILE_ID = uuid.UUID("00000000-0000-0000-0000-0000000000a1")
PRICE_ID = uuid.UUID("00000000-0000-0000-0000-0000000000c1")
OBSERVED_AT = datetime(2024, 1, 10, 9, 30, tzinfo=timezone.utc)


def _result(rows: list) -> Mock:
    result = Mock()
    result.scalars.return_value.all.return_value = rows
    return result


@pytest.fixture()
def mock_session() -> Mock:
    """Mock SQLAlchemy session."""
    return Mock(spec=Session)


@pytest.fixture()
def rows() -> tuple[list[BrandRow], list[MobileRow], list[MobilePriceRow]]:
    """One brand, one mobile and one price row."""
    brand = BrandRow(id=BRAND_ID, name="Samsung")
    mobile = MobileRow(
        id=MOBILE_ID,
        brand_id=BRAND_ID,
        model="Galaxy A15",
        display_size="6.5 inches",
        ram="6GB",
        storage="128GB",
        camera="50MP",
        battery="5000mAh",
        processor="Helio G99",
        operating_system="Android 14",
        image_url=None,
    )
    price = MobilePriceRow(
        id=PRICE_ID,
        mobile_id=MOBILE_ID,
        price=45999,
        retailer="Daraz",
        city="Karachi",
        created_at=OBSERVED_AT,
    )
    return [brand], [mobile], [price]


@pytest.fixture()
def store(mock_session: Mock, rows) -> PostgresObservationStore:
    brand_rows, mobile_rows, price_rows = rows
    mock_session.execute.side_effect = [
        _result(brand_rows),
        _result(mobile_rows),
        _result(price_rows),
    ]
    return PostgresObservationStore(mock_session)


# ==============================================================================
# Query Execution Tests
# ==============================================================================


def test_fetch_snapshot_sets_isolation_level_first(store: PostgresObservationStore, mock_session: Mock) -> None:
    """The transaction is pinned to REPEATABLE READ before the SELECTs run."""
    store.fetch_snapshot()

    assert mock_session.mock_calls[0] == call.connection(
        execution_options={"isolation_level": "REPEATABLE READ"}
    )
    assert SNAPSHOT_ISOLATION_LEVEL == "REPEATABLE READ"


def test_fetch_snapshot_runs_three_selects(store: PostgresObservationStore, mock_session: Mock) -> None:
    """Brands, mobiles and prices are each read once."""
    store.fetch_snapshot()

    assert mock_session.execute.call_count == 3
    tables = [
        execute_call.args[0].get_final_froms()[0].name
        for execute_call in mock_session.execute.call_args_list
    ]
    assert tables == ["mobile_brands", "mobiles", "mobile_prices"]


# ==============================================================================
# Conversion Tests
# ==============================================================================


def test_fetch_snapshot_converts_rows(store: PostgresObservationStore) -> None:
    """ORM rows become domain entities with string ids."""
    snapshot = store.fetch_snapshot()

    assert snapshot.brands == (Brand(id=str(BRAND_ID), name="Samsung"),)
    assert snapshot.models == (
        PhoneModel(
            id=str(MOBILE_ID),
            brand_id=str(BRAND_ID),
            name="Galaxy A15",
            specs=PhoneSpecs(
                display_size="6.5 inches",
                ram="6GB",
                storage="128GB",
                camera="50MP",
                battery="5000mAh",
                processor="Helio G99",
                os="Android 14",
            ),
            image_url=None,
        ),
    )
    assert snapshot.observations == (
        PriceObservation(
            model_id=str(MOBILE_ID),
            retailer="Daraz",
            city="Karachi",
            price=45999,
            observed_at=OBSERVED_AT,
        ),
    )


def test_fetch_snapshot_with_empty_tables(mock_session: Mock) -> None:
    """Empty tables give an empty snapshot."""
    mock_session.execute.side_effect = [_result([]), _result([]), _result([])]

    snapshot = PostgresObservationStore(mock_session).fetch_snapshot()

    assert (snapshot.brands, snapshot.models, snapshot.observations) == ((), (), ())


# ==============================================================================
# Error Handling Tests
# ==============================================================================


def test_query_failure_raises_store_error(mock_session: Mock) -> None:
    """A failing SELECT surfaces as ObservationStoreError, chained to the cause."""
    failure = OperationalError("SELECT", {}, Exception("connection refused"))
    mock_session.execute.side_effect = failure

    with pytest.raises(ObservationStoreError) as exc_info:
        PostgresObservationStore(mock_session).fetch_snapshot()

    assert exc_info.value.__cause__ is failure
    assert exc_info.value.context == {"cause": "OperationalError"}


def test_connection_failure_raises_store_error(mock_session: Mock) -> None:
    """Failing to open the transaction is a store error too."""
    mock_session.connection.side_effect = OperationalError("BEGIN", {}, Exception("timeout"))

    with pytest.raises(ObservationStoreError):
        PostgresObservationStore(mock_session).fetch_snapshot()

    mock_session.execute.assert_not_called()
