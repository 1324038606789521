"""Test suite for GetRecentPriceChanges use case."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from mobile_pk.domain.catalog import CatalogSnapshot
from mobile_pk.domain.errors import ValidationError
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.get_recent_price_changes import (
    MAX_RECENT_CHANGES,
    GetRecentPriceChanges,
    GetRecentPriceChangesRequest,
)
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade


@pytest.fixture()
def mock_store(catalog_snapshot: CatalogSnapshot, observe) -> Mock:
    """Mock ObservationStore with three listings that moved."""
    rows = []
    for day, (model_id, city) in enumerate(
        [("m-a15", "Karachi"), ("m-a15", "Lahore"), ("m-iphone15", "Karachi")], start=1
    ):
        rows.append(observe(model_id, 100000, city=city, observed_at=datetime(2024, 1, day, tzinfo=timezone.utc)))
        rows.append(observe(model_id, 90000, city=city, observed_at=datetime(2024, 2, day, tzinfo=timezone.utc)))

    store = Mock(spec=ObservationStore)
    store.fetch_snapshot.return_value = dataclasses.replace(catalog_snapshot, observations=tuple(rows))
    return store


@pytest.fixture()
def use_case(mock_store: Mock) -> GetRecentPriceChanges:
    return GetRecentPriceChanges(observation_store=mock_store, price_query_facade=PriceQueryFacade())


def test_default_limit_returns_all_changes(use_case: GetRecentPriceChanges) -> None:
    """Newest change first."""
    result = use_case.execute(GetRecentPriceChangesRequest())

    assert [(c.change.model_id, c.change.city) for c in result.changes] == [
        ("m-iphone15", "Karachi"),
        ("m-a15", "Lahore"),
        ("m-a15", "Karachi"),
    ]


def test_limit_is_applied(use_case: GetRecentPriceChanges) -> None:
    """Only the newest `limit` changes are returned."""
    result = use_case.execute(GetRecentPriceChangesRequest(limit=2))

    assert len(result.changes) == 2


@pytest.mark.parametrize("limit", [0, -1, MAX_RECENT_CHANGES + 1])
def test_out_of_range_limit_rejected(use_case: GetRecentPriceChanges, mock_store: Mock, limit: int) -> None:
    """Limits outside 1..100 fail before the store is read."""
    with pytest.raises(ValidationError):
        use_case.execute(GetRecentPriceChangesRequest(limit=limit))

    mock_store.fetch_snapshot.assert_not_called()


def test_max_limit_accepted() -> None:
    """The upper bound itself is valid."""
    GetRecentPriceChangesRequest(limit=MAX_RECENT_CHANGES).validate()
