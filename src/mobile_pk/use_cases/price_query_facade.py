"""Query façade over the price aggregation engine.

Single entry point for every read the storefront makes. Each call screens the
snapshot it is given exactly once and derives all of its outputs from that
screening, so values returned together never mix two underlying states.

The façade performs no I/O: use cases fetch the snapshot from the
ObservationStore and pass it in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from mobile_pk.domain.catalog import Brand, CatalogSnapshot, PhoneModel, PriceObservation
from mobile_pk.domain.errors import NotFoundError
from mobile_pk.domain.listing import ListingEntry, ListingFilters, filter_listings
from mobile_pk.domain.price_changes import PriceChange, detect_price_changes
from mobile_pk.domain.pricing import (
    BrandAverage,
    DataQualityWarning,
    LowestPrice,
    PriceAggregator,
    ScreenedObservations,
    brand_order_key,
    percent_change,
    screen_observations,
)
from mobile_pk.domain.trends import TrendCalculator, TrendPoint, previous_period

logger = logging.getLogger(__name__)


# ==============================================================================
# Results
# ==============================================================================


@dataclass(frozen=True, slots=True)
class ListingsResult:
    listings: list[ListingEntry]
    warnings: tuple[DataQualityWarning, ...] = ()


@dataclass(frozen=True, slots=True)
class BrandAveragesResult:
    averages: list[BrandAverage]
    warnings: tuple[DataQualityWarning, ...] = ()


@dataclass(frozen=True, slots=True)
class TrendsResult:
    points: list[TrendPoint]
    warnings: tuple[DataQualityWarning, ...] = ()


@dataclass(frozen=True, slots=True)
class PriceOverview:
    listings: list[ListingEntry]
    averages: list[BrandAverage]
    points: list[TrendPoint]
    warnings: tuple[DataQualityWarning, ...] = ()


@dataclass(frozen=True, slots=True)
class PriceComparison:
    model: PhoneModel
    brand_name: str
    lowest_price: LowestPrice
    offers: list[PriceObservation]
    warnings: tuple[DataQualityWarning, ...] = ()


@dataclass(frozen=True, slots=True)
class RecentPriceChange:
    change: PriceChange
    model_name: str
    brand_name: str


@dataclass(frozen=True, slots=True)
class RecentPriceChangesResult:
    changes: list[RecentPriceChange]
    warnings: tuple[DataQualityWarning, ...] = ()


@dataclass(frozen=True, slots=True)
class MarketSummary:
    observation_count: int
    average_price: Decimal | None
    current_period: str | None
    current_period_average: Decimal | None
    month_over_month_pct: Decimal | None  # None without data for the previous calendar month
    price_increases: int
    price_decreases: int
    warnings: tuple[DataQualityWarning, ...] = ()


@dataclass(frozen=True, slots=True)
class _PreparedSnapshot:
    snapshot: CatalogSnapshot
    screened: ScreenedObservations
    brand_by_model: dict[str, Brand]
    aggregator: PriceAggregator

    @property
    def warnings(self) -> tuple[DataQualityWarning, ...]:
        return self.screened.warnings

    def brand_name(self, model_id: str) -> str:
        brand = self.brand_by_model.get(model_id)
        return brand.name if brand else ""


# ==============================================================================
# Façade
# ==============================================================================


class PriceQueryFacade:
    """
    Stateless composition of the Aggregator, Trend Calculator and Filter Index.

    Safe to share across concurrent requests: nothing is stored between calls.
    """

    def __init__(self, trend_calculator: TrendCalculator | None = None) -> None:
        self._trend_calculator = trend_calculator or TrendCalculator()

    @property
    def trend_calculator(self) -> TrendCalculator:
        return self._trend_calculator

    def get_listings(self, snapshot: CatalogSnapshot, filters: ListingFilters) -> ListingsResult:
        """
        Filtered catalog with the lowest price and retailer count attached.

        Raises:
            FilterValidationError: If filter parameters are invalid
        """
        filters.validate()
        prepared = self._prepare(snapshot)
        return ListingsResult(
            listings=self._listings(prepared, filters),
            warnings=prepared.warnings,
        )

    def get_brand_averages(self, snapshot: CatalogSnapshot) -> BrandAveragesResult:
        prepared = self._prepare(snapshot)
        return BrandAveragesResult(
            averages=prepared.aggregator.average_price_by_brand(),
            warnings=prepared.warnings,
        )

    def get_trends(self, snapshot: CatalogSnapshot) -> TrendsResult:
        prepared = self._prepare(snapshot)
        return TrendsResult(points=self._trends(prepared), warnings=prepared.warnings)

    def get_overview(self, snapshot: CatalogSnapshot, filters: ListingFilters) -> PriceOverview:
        """Listings, brand averages and trends derived from one screening of one snapshot."""
        filters.validate()
        prepared = self._prepare(snapshot)
        return PriceOverview(
            listings=self._listings(prepared, filters),
            averages=prepared.aggregator.average_price_by_brand(),
            points=self._trends(prepared),
            warnings=prepared.warnings,
        )

    def list_brands(self, snapshot: CatalogSnapshot) -> list[Brand]:
        return sorted(snapshot.brands, key=lambda brand: (*brand_order_key(brand.name), brand.id))

    def get_price_comparison(self, snapshot: CatalogSnapshot, model_id: str) -> PriceComparison:
        """
        Every valid offer for one model, cheapest first.

        Raises:
            NotFoundError: If the model is not in the snapshot
        """
        model = next((model for model in snapshot.models if model.id == model_id), None)
        if model is None:
            raise NotFoundError(resource="PhoneModel", identifier=model_id)

        prepared = self._prepare(snapshot)
        return PriceComparison(
            model=model,
            brand_name=prepared.brand_name(model.id),
            lowest_price=prepared.aggregator.lowest_price(model.id),
            offers=prepared.aggregator.offers(model.id),
            warnings=prepared.warnings,
        )

    def get_recent_price_changes(
        self, snapshot: CatalogSnapshot, limit: int | None = None
    ) -> RecentPriceChangesResult:
        prepared = self._prepare(snapshot)
        model_names = {model.id: model.name for model in snapshot.models}

        changes = detect_price_changes(prepared.aggregator.observations)
        if limit is not None:
            changes = changes[:limit]

        return RecentPriceChangesResult(
            changes=[
                RecentPriceChange(
                    change=change,
                    model_name=model_names.get(change.model_id, ""),
                    brand_name=prepared.brand_name(change.model_id),
                )
                for change in changes
            ],
            warnings=prepared.warnings,
        )

    def get_market_summary(self, snapshot: CatalogSnapshot) -> MarketSummary:
        prepared = self._prepare(snapshot)
        observations = prepared.aggregator.observations

        monthly = self._trend_calculator.monthly_averages(observations)
        current_period = next(reversed(monthly), None)
        current_average = monthly.get(current_period) if current_period else None

        month_over_month: Decimal | None = None
        if current_period is not None and current_average is not None:
            previous_average = monthly.get(previous_period(current_period))
            if previous_average is not None:
                month_over_month = percent_change(previous_average, current_average)

        changes = detect_price_changes(observations)

        return MarketSummary(
            observation_count=len(observations),
            average_price=prepared.aggregator.overall_average(),
            current_period=current_period,
            current_period_average=current_average,
            month_over_month_pct=month_over_month,
            price_increases=sum(1 for change in changes if change.is_increase),
            price_decreases=sum(1 for change in changes if not change.is_increase),
            warnings=prepared.warnings,
        )

    # --------------------------------------------------------------------------

    def _prepare(self, snapshot: CatalogSnapshot) -> _PreparedSnapshot:
        screened = screen_observations(snapshot.observations, known_model_ids=snapshot.model_ids())
        brand_by_model = snapshot.brand_by_model()

        logger.debug(
            "Prepared price snapshot",
            extra={
                "brands": len(snapshot.brands),
                "models": len(snapshot.models),
                "observations": len(snapshot.observations),
                "rejected": len(screened.warnings),
            },
        )

        return _PreparedSnapshot(
            snapshot=snapshot,
            screened=screened,
            brand_by_model=brand_by_model,
            aggregator=PriceAggregator(screened.observations, brand_by_model),
        )

    def _listings(self, prepared: _PreparedSnapshot, filters: ListingFilters) -> list[ListingEntry]:
        aggregator = prepared.aggregator
        entries = [
            ListingEntry(
                model=model,
                brand_name=prepared.brand_name(model.id),
                lowest_price=aggregator.lowest_price(model.id),
                retailer_count=aggregator.retailer_count(model.id),
                offer_count=aggregator.offer_count(model.id),
            )
            for model in prepared.snapshot.models
        ]
        return filter_listings(
            entries,
            filters,
            known_brand_names=[brand.name for brand in prepared.snapshot.brands],
        )

    def _trends(self, prepared: _PreparedSnapshot) -> list[TrendPoint]:
        return self._trend_calculator.calculate(
            prepared.aggregator.observations, prepared.brand_by_model
        )
