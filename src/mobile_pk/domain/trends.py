from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from decimal import Decimal

from mobile_pk.domain.catalog import Brand, PriceObservation
from mobile_pk.domain.pricing import PriceAggregator, brand_order_key, mean_price


def as_utc(moment: datetime) -> datetime:
    """Naive timestamps are read as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def previous_period(period: str) -> str:
    year, month = (int(part) for part in period.split("-"))
    if month == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month - 1:02d}"


@dataclass(frozen=True, slots=True)
class TrendPoint:
    period: str  # "YYYY-MM" in the calculator's timezone
    brand_id: str
    brand_name: str
    avg_price: Decimal
    sample_count: int


@dataclass(frozen=True, slots=True)
class TrendCalculator:
    """
    Monthly average price per brand.

    - Observations are bucketed by calendar month in ``tz`` (one timezone for all rows)
    - Each period is averaged independently with the same rules as the Aggregator
    - Series are sparse: a (period, brand) pair without observations is omitted
    - Output is ordered by period ascending, then brand name ascending

    The result depends only on the observations passed in, so appending rows
    changes only the periods those rows fall in.
    """

    tz: tzinfo = timezone.utc

    def period_key(self, observed_at: datetime) -> str:
        local = as_utc(observed_at).astimezone(self.tz)
        return f"{local.year:04d}-{local.month:02d}"

    def bucket(
        self, observations: Iterable[PriceObservation]
    ) -> dict[str, list[PriceObservation]]:
        by_period: dict[str, list[PriceObservation]] = defaultdict(list)
        for observation in observations:
            by_period[self.period_key(observation.observed_at)].append(observation)
        return dict(sorted(by_period.items()))

    def calculate(
        self,
        observations: Iterable[PriceObservation],
        brand_by_model: Mapping[str, Brand],
    ) -> list[TrendPoint]:
        points: list[TrendPoint] = []

        for period, rows in self.bucket(observations).items():
            averages = PriceAggregator(rows, brand_by_model).average_price_by_brand()
            averages.sort(key=lambda average: (*brand_order_key(average.brand_name), average.brand_id))
            points.extend(
                TrendPoint(
                    period=period,
                    brand_id=average.brand_id,
                    brand_name=average.brand_name,
                    avg_price=average.avg_price,
                    sample_count=average.sample_count,
                )
                for average in averages
            )

        return points

    def monthly_averages(self, observations: Iterable[PriceObservation]) -> dict[str, Decimal]:
        """Average over all brands per period, ascending by period."""
        return {
            period: mean_price([int(row.price) for row in rows])
            for period, rows in self.bucket(observations).items()
        }
