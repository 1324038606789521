from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Brand:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class PhoneSpecs:
    display_size: str | None = None
    ram: str | None = None
    storage: str | None = None
    camera: str | None = None
    battery: str | None = None
    processor: str | None = None
    os: str | None = None


@dataclass(frozen=True, slots=True)
class PhoneModel:
    id: str
    brand_id: str
    name: str
    specs: PhoneSpecs = field(default_factory=PhoneSpecs)
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class PriceObservation:
    """One recorded price for one model at one retailer/city/time.

    ``price`` is in whole PKR. Rows are append-only: a new price point is a new
    observation, never an update of an old one.
    """

    model_id: str
    retailer: str
    city: str
    price: int | Decimal
    observed_at: datetime


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """
    Immutable point-in-time view of the catalog and its price observations.

    Every derived result of one query is computed from a single snapshot,
    so results returned together are mutually consistent.
    """

    brands: tuple[Brand, ...] = ()
    models: tuple[PhoneModel, ...] = ()
    observations: tuple[PriceObservation, ...] = ()

    def brand_by_model(self) -> dict[str, Brand]:
        """Resolve each model id to its brand (models with an unknown brand are skipped)."""
        brands = {brand.id: brand for brand in self.brands}
        return {
            model.id: brands[model.brand_id]
            for model in self.models
            if model.brand_id in brands
        }

    def model_ids(self) -> frozenset[str]:
        return frozenset(model.id for model in self.models)
