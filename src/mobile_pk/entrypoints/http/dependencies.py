"""
Dependency injection for FastAPI routes.

Key principle: database sessions and stores are per-request, never cached.
Only stateless singletons (the query façade) use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from mobile_pk.adapters.postgres_observation_store import PostgresObservationStore
from mobile_pk.domain.trends import TrendCalculator
from mobile_pk.infra.db.session import get_read_session
from mobile_pk.infra.settings import trend_timezone
from mobile_pk.ports.observation_store import ObservationStore
from mobile_pk.use_cases.get_brand_averages import GetBrandAverages
from mobile_pk.use_cases.get_market_summary import GetMarketSummary
from mobile_pk.use_cases.get_price_comparison import GetPriceComparison
from mobile_pk.use_cases.get_price_overview import GetPriceOverview
from mobile_pk.use_cases.get_price_trends import GetPriceTrends
from mobile_pk.use_cases.get_recent_price_changes import GetRecentPriceChanges
from mobile_pk.use_cases.list_brands import ListBrands
from mobile_pk.use_cases.price_query_facade import PriceQueryFacade
from mobile_pk.use_cases.search_listings import SearchListings


def get_db() -> Generator[Session, None, None]:
    """
    Provides a read-only database session for a single request.

    The session's transaction is rolled back and the session closed when
    the request ends, whether or not it succeeded.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_read_session() as session:
        yield session


def get_observation_store(db: Session = Depends(get_db)) -> ObservationStore:
    return PostgresObservationStore(session=db)


@lru_cache
def get_price_query_facade() -> PriceQueryFacade:
    """Shared façade; stateless, so one instance serves every request."""
    return PriceQueryFacade(trend_calculator=TrendCalculator(tz=trend_timezone()))


def get_search_listings_use_case(
    store: ObservationStore = Depends(get_observation_store),
    facade: PriceQueryFacade = Depends(get_price_query_facade),
) -> SearchListings:
    """
    Factory function that returns a configured SearchListings use case.

    Called per request, so each request gets a fresh store bound to its
    own session.
    """
    return SearchListings(observation_store=store, price_query_facade=facade)


def get_price_comparison_use_case(
    store: ObservationStore = Depends(get_observation_store),
    facade: PriceQueryFacade = Depends(get_price_query_facade),
) -> GetPriceComparison:
    return GetPriceComparison(observation_store=store, price_query_facade=facade)


def get_list_brands_use_case(
    store: ObservationStore = Depends(get_observation_store),
    facade: PriceQueryFacade = Depends(get_price_query_facade),
) -> ListBrands:
    return ListBrands(observation_store=store, price_query_facade=facade)


def get_brand_averages_use_case(
    store: ObservationStore = Depends(get_observation_store),
    facade: PriceQueryFacade = Depends(get_price_query_facade),
) -> GetBrandAverages:
    return GetBrandAverages(observation_store=store, price_query_facade=facade)


def get_price_trends_use_case(
    store: ObservationStore = Depends(get_observation_store),
    facade: PriceQueryFacade = Depends(get_price_query_facade),
) -> GetPriceTrends:
    return GetPriceTrends(observation_store=store, price_query_facade=facade)


def get_price_overview_use_case(
    store: ObservationStore = Depends(get_observation_store),
    facade: PriceQueryFacade = Depends(get_price_query_facade),
) -> GetPriceOverview:
    return GetPriceOverview(observation_store=store, price_query_facade=facade)


def get_recent_price_changes_use_case(
    store: ObservationStore = Depends(get_observation_store),
    facade: PriceQueryFacade = Depends(get_price_query_facade),
) -> GetRecentPriceChanges:
    return GetRecentPriceChanges(observation_store=store, price_query_facade=facade)


def get_market_summary_use_case(
    store: ObservationStore = Depends(get_observation_store),
    facade: PriceQueryFacade = Depends(get_price_query_facade),
) -> GetMarketSummary:
    return GetMarketSummary(observation_store=store, price_query_facade=facade)
