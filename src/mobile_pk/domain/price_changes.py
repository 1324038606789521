from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from mobile_pk.domain.catalog import PriceObservation
from mobile_pk.domain.pricing import percent_change
from mobile_pk.domain.trends import as_utc


@dataclass(frozen=True, slots=True)
class PriceChange:
    model_id: str
    retailer: str
    city: str
    previous_price: int
    current_price: int
    change_pct: Decimal | None  # None when the previous price was 0
    changed_at: datetime

    @property
    def is_increase(self) -> bool:
        return self.current_price > self.previous_price


def detect_price_changes(observations: Iterable[PriceObservation]) -> list[PriceChange]:
    """
    Latest price movement per (model, retailer, city) listing.

    Compares each listing's newest observation with the one before it and
    keeps only listings whose price moved. Newest change first.
    """
    by_listing: dict[tuple[str, str, str], list[PriceObservation]] = defaultdict(list)
    for observation in observations:
        key = (
            observation.model_id,
            observation.retailer.strip().casefold(),
            observation.city.strip().casefold(),
        )
        by_listing[key].append(observation)

    changes: list[PriceChange] = []
    for rows in by_listing.values():
        if len(rows) < 2:
            continue
        # sorted() is stable, so same-timestamp rows keep store order
        previous, current = sorted(rows, key=lambda row: as_utc(row.observed_at))[-2:]
        if int(previous.price) == int(current.price):
            continue
        changes.append(
            PriceChange(
                model_id=current.model_id,
                retailer=current.retailer,
                city=current.city,
                previous_price=int(previous.price),
                current_price=int(current.price),
                change_pct=percent_change(previous.price, current.price),
                changed_at=current.observed_at,
            )
        )

    changes.sort(
        key=lambda change: (
            -as_utc(change.changed_at).timestamp(),
            change.model_id,
            change.retailer.casefold(),
            change.city.casefold(),
        )
    )
    return changes
