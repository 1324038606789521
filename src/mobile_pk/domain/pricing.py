"""Price aggregation over a snapshot of observations.

Screens raw observations for bad prices, then answers the aggregate questions
the storefront asks: lowest price per model, offer counts, and the average
price per brand.

Rounding policy:
- Prices are whole PKR (int)
- Averages use exact Decimal division, quantized to 2 places (ROUND_HALF_UP)
- Percent changes are quantized to 1 place (ROUND_HALF_UP)
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Final, Literal, Union

from mobile_pk.domain.catalog import Brand, PriceObservation

logger = logging.getLogger(__name__)

AVERAGE_QUANTUM = Decimal("0.01")
PERCENT_QUANTUM = Decimal("0.1")


class PriceAvailability(Enum):
    UNAVAILABLE = "unavailable"


# "No price recorded" is distinct from a price of zero
UNAVAILABLE: Final = PriceAvailability.UNAVAILABLE

LowestPrice = Union[int, Literal[PriceAvailability.UNAVAILABLE]]


# ==============================================================================
# Screening
# ==============================================================================


class QualityIssue(str, Enum):
    INVALID_PRICE_TYPE = "INVALID_PRICE_TYPE"
    NON_FINITE_PRICE = "NON_FINITE_PRICE"
    NEGATIVE_PRICE = "NEGATIVE_PRICE"
    NON_INTEGER_PRICE = "NON_INTEGER_PRICE"
    UNKNOWN_MODEL = "UNKNOWN_MODEL"


_ISSUE_MESSAGES: dict[QualityIssue, str] = {
    QualityIssue.INVALID_PRICE_TYPE: "price {price!r} is not a number",
    QualityIssue.NON_FINITE_PRICE: "price {price!r} is not finite",
    QualityIssue.NEGATIVE_PRICE: "price {price!r} is negative",
    QualityIssue.NON_INTEGER_PRICE: "price {price!r} is not a whole amount",
    QualityIssue.UNKNOWN_MODEL: "model '{model_id}' is not in the catalog",
}


@dataclass(frozen=True, slots=True)
class DataQualityWarning:
    row_index: int
    model_id: str
    code: str
    message: str


@dataclass(frozen=True, slots=True)
class ScreenedObservations:
    observations: tuple[PriceObservation, ...]
    warnings: tuple[DataQualityWarning, ...] = ()


def _price_issue(price: object) -> QualityIssue | None:
    if isinstance(price, bool) or not isinstance(price, (int, float, Decimal)):
        return QualityIssue.INVALID_PRICE_TYPE
    if isinstance(price, int):
        return QualityIssue.NEGATIVE_PRICE if price < 0 else None

    finite = math.isfinite(price) if isinstance(price, float) else price.is_finite()
    if not finite:
        return QualityIssue.NON_FINITE_PRICE
    if price < 0:
        return QualityIssue.NEGATIVE_PRICE
    if price != int(price):
        return QualityIssue.NON_INTEGER_PRICE
    return None


def screen_observations(
    observations: Iterable[PriceObservation],
    known_model_ids: Collection[str] | None = None,
) -> ScreenedObservations:
    """
    Split observations into usable rows and data-quality warnings.

    One bad row never fails the batch: it is dropped and reported. Accepted
    rows keep their input order and have their price normalized to int.

    Args:
        observations: Raw observation rows, in store order
        known_model_ids: When given, rows for other models are rejected too

    Returns:
        ScreenedObservations with the accepted rows and one warning per rejection
    """
    accepted: list[PriceObservation] = []
    warnings: list[DataQualityWarning] = []

    for index, observation in enumerate(observations):
        issue = _price_issue(observation.price)
        if (
            issue is None
            and known_model_ids is not None
            and observation.model_id not in known_model_ids
        ):
            issue = QualityIssue.UNKNOWN_MODEL

        if issue is not None:
            warnings.append(
                DataQualityWarning(
                    row_index=index,
                    model_id=observation.model_id,
                    code=issue.value,
                    message=_ISSUE_MESSAGES[issue].format(
                        price=observation.price, model_id=observation.model_id
                    ),
                )
            )
            continue

        if type(observation.price) is not int:
            observation = replace(observation, price=int(observation.price))
        accepted.append(observation)

    if warnings:
        logger.warning(
            "Rejected price observations",
            extra={
                "rejected": len(warnings),
                "accepted": len(accepted),
                "codes": sorted({warning.code for warning in warnings}),
            },
        )

    return ScreenedObservations(observations=tuple(accepted), warnings=tuple(warnings))


# ==============================================================================
# Arithmetic helpers
# ==============================================================================


def mean_price(prices: Sequence[int]) -> Decimal:
    """Arithmetic mean of whole-PKR prices, quantized to 2 places."""
    if not prices:
        raise ValueError("mean of an empty sample is undefined")
    exact = Decimal(sum(prices)) / Decimal(len(prices))
    return exact.quantize(AVERAGE_QUANTUM, rounding=ROUND_HALF_UP)


def percent_change(previous: int | Decimal, current: int | Decimal) -> Decimal | None:
    """Relative change in percent, or None when the baseline is zero."""
    if previous == 0:
        return None
    exact = (Decimal(current) - Decimal(previous)) * Decimal(100) / Decimal(previous)
    return exact.quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)


# ==============================================================================
# Aggregator
# ==============================================================================


@dataclass(frozen=True, slots=True)
class BrandAverage:
    brand_id: str
    brand_name: str
    avg_price: Decimal
    sample_count: int


def brand_order_key(brand_name: str) -> tuple[str, str]:
    # casefold first, then the exact name so equal-folding names still order deterministically
    return (brand_name.casefold(), brand_name)


class PriceAggregator:
    """
    Aggregates for one snapshot of screened observations.

    - lowest_price: minimum observed price, or UNAVAILABLE with no observations
    - average_price_by_brand: true mean over every row (duplicates included),
      highest average first, ties by brand name ascending
    - Brands without observations never appear in the averages

    Instances are built per snapshot and never mutated afterwards.
    """

    def __init__(
        self,
        observations: Iterable[PriceObservation],
        brand_by_model: Mapping[str, Brand],
    ) -> None:
        self._observations = tuple(observations)
        self._brand_by_model = brand_by_model

        by_model: dict[str, list[PriceObservation]] = defaultdict(list)
        for observation in self._observations:
            by_model[observation.model_id].append(observation)
        self._by_model = dict(by_model)

    @property
    def observations(self) -> tuple[PriceObservation, ...]:
        return self._observations

    def lowest_price(self, model_id: str) -> LowestPrice:
        rows = self._by_model.get(model_id)
        if not rows:
            return UNAVAILABLE
        return min(int(row.price) for row in rows)

    def lowest_prices(self) -> dict[str, int]:
        return {
            model_id: min(int(row.price) for row in rows)
            for model_id, rows in self._by_model.items()
        }

    def retailer_count(self, model_id: str) -> int:
        """Distinct retailers (case-insensitive) with at least one price for the model."""
        rows = self._by_model.get(model_id, [])
        return len({row.retailer.strip().casefold() for row in rows})

    def offer_count(self, model_id: str) -> int:
        return len(self._by_model.get(model_id, []))

    def offers(self, model_id: str) -> list[PriceObservation]:
        """All observations for a model, cheapest first."""
        rows = self._by_model.get(model_id, [])
        return sorted(
            rows,
            key=lambda row: (
                int(row.price),
                row.retailer.casefold(),
                row.city.casefold(),
                row.observed_at.isoformat(),
            ),
        )

    def average_price_by_brand(self) -> list[BrandAverage]:
        brands: dict[str, Brand] = {}
        prices_by_brand: dict[str, list[int]] = defaultdict(list)

        for observation in self._observations:
            brand = self._brand_by_model.get(observation.model_id)
            if brand is None:
                continue
            brands[brand.id] = brand
            prices_by_brand[brand.id].append(int(observation.price))

        averages = [
            BrandAverage(
                brand_id=brand_id,
                brand_name=brands[brand_id].name,
                avg_price=mean_price(prices),
                sample_count=len(prices),
            )
            for brand_id, prices in prices_by_brand.items()
        ]
        averages.sort(
            key=lambda average: (
                -average.avg_price,
                *brand_order_key(average.brand_name),
                average.brand_id,
            )
        )
        return averages

    def overall_average(self) -> Decimal | None:
        if not self._observations:
            return None
        return mean_price([int(row.price) for row in self._observations])
