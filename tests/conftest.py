"""Shared catalog fixtures.

The default snapshot is the worked example used throughout the suite:

    Galaxy A15 (Samsung): 50000 @ Daraz/Karachi, 45000 @ PriceOye/Lahore (January)
    iPhone 15 (Apple):    180000 @ Daraz/Islamabad (February)
    Redmi Note 13 (Xiaomi): no observations
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from mobile_pk.domain.catalog import (
    Brand,
    CatalogSnapshot,
    PhoneModel,
    PhoneSpecs,
    PriceObservation,
)

ObservationFactory = Callable[..., PriceObservation]


@pytest.fixture()
def observe() -> ObservationFactory:
    """Factory for observations with sensible defaults."""

    def _observe(
        model_id: str,
        price: int | Decimal | float | str,
        *,
        retailer: str = "Daraz",
        city: str = "Karachi",
        observed_at: datetime = datetime(2024, 1, 15, tzinfo=timezone.utc),
    ) -> PriceObservation:
        return PriceObservation(
            model_id=model_id,
            retailer=retailer,
            city=city,
            price=price,  # type: ignore[arg-type]
            observed_at=observed_at,
        )

    return _observe


@pytest.fixture()
def brands() -> tuple[Brand, ...]:
    return (
        Brand(id="b-samsung", name="Samsung"),
        Brand(id="b-apple", name="Apple"),
        Brand(id="b-xiaomi", name="Xiaomi"),
    )


@pytest.fixture()
def models() -> tuple[PhoneModel, ...]:
    return (
        PhoneModel(
            id="m-a15",
            brand_id="b-samsung",
            name="Galaxy A15",
            specs=PhoneSpecs(ram="6GB", storage="128GB", os="Android"),
        ),
        PhoneModel(
            id="m-iphone15",
            brand_id="b-apple",
            name="iPhone 15",
            specs=PhoneSpecs(ram="6GB", storage="128GB", os="iOS"),
            image_url="https://img.example/iphone15.png",
        ),
        PhoneModel(id="m-redmi13", brand_id="b-xiaomi", name="Redmi Note 13"),
    )


@pytest.fixture()
def observations(observe: ObservationFactory) -> tuple[PriceObservation, ...]:
    return (
        observe(
            "m-a15",
            50000,
            retailer="Daraz",
            city="Karachi",
            observed_at=datetime(2024, 1, 10, tzinfo=timezone.utc),
        ),
        observe(
            "m-a15",
            45000,
            retailer="PriceOye",
            city="Lahore",
            observed_at=datetime(2024, 1, 20, tzinfo=timezone.utc),
        ),
        observe(
            "m-iphone15",
            180000,
            retailer="Daraz",
            city="Islamabad",
            observed_at=datetime(2024, 2, 5, tzinfo=timezone.utc),
        ),
    )


@pytest.fixture()
def catalog_snapshot(
    brands: tuple[Brand, ...],
    models: tuple[PhoneModel, ...],
    observations: tuple[PriceObservation, ...],
) -> CatalogSnapshot:
    return CatalogSnapshot(brands=brands, models=models, observations=observations)
