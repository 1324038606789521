from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from enum import Enum

from mobile_pk.domain.catalog import PhoneModel
from mobile_pk.domain.errors import ValidationError
from mobile_pk.domain.pricing import UNAVAILABLE, LowestPrice

logger = logging.getLogger(__name__)

ALL = "all"
MAX_SEARCH_TERM_LENGTH = 100


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class FilterValidationError(ValidationError):
    """Raised when listing filter parameters are invalid."""

    pass


class PriceRange(str, Enum):
    """Fixed listing price buckets, closed at the bottom and open at the top."""

    ALL = "all"
    UNDER_50K = "0-50000"
    FROM_50K_TO_100K = "50000-100000"
    FROM_100K_TO_200K = "100000-200000"
    FROM_200K = "200000+"

    @classmethod
    def parse(cls, value: str | None) -> PriceRange:
        """Parse a raw filter value. Unknown values mean no price filtering."""
        if value is None:
            return cls.ALL
        try:
            return cls(value.strip().lower())
        except ValueError:
            logger.info("Unknown price range, not filtering by price", extra={"price_range": value})
            return cls.ALL

    def contains(self, price: LowestPrice) -> bool:
        if self is PriceRange.ALL:
            return True
        # An unknown price cannot be placed in any priced bucket
        if price is UNAVAILABLE:
            return False
        lower, upper = _BUCKET_BOUNDS[self]
        return price >= lower and (upper is None or price < upper)


_BUCKET_BOUNDS: dict[PriceRange, tuple[int, int | None]] = {
    PriceRange.UNDER_50K: (0, 50_000),
    PriceRange.FROM_50K_TO_100K: (50_000, 100_000),
    PriceRange.FROM_100K_TO_200K: (100_000, 200_000),
    PriceRange.FROM_200K: (200_000, None),
}


@dataclass(frozen=True, slots=True)
class ListingFilters:
    search_term: str | None = None
    brand: str | None = None  # brand name, or "all"
    price_range: PriceRange = PriceRange.ALL

    def __post_init__(self) -> None:
        # Raw strings go through the same permissive parsing as query parameters
        if not isinstance(self.price_range, PriceRange):
            object.__setattr__(self, "price_range", PriceRange.parse(self.price_range))

    def validate(self) -> None:
        """
        Validate filter parameters.

        Raises:
            FilterValidationError: If filter parameters are invalid
        """
        if self.search_term is not None and len(self.search_term) > MAX_SEARCH_TERM_LENGTH:
            raise FilterValidationError(
                errors=[
                    {
                        "field": "search",
                        "message": f"Must be at most {MAX_SEARCH_TERM_LENGTH} characters",
                        "code": "TOO_LONG",
                    }
                ]
            )

@dataclass(frozen=True, slots=True)
class ListingEntry:
    model: PhoneModel
    brand_name: str
    lowest_price: LowestPrice
    retailer_count: int = 0
    offer_count: int = 0

    @property
    def display_name(self) -> str:
        return f"{self.brand_name} {self.model.name}".strip()


# ==============================================================================
# Predicates
# ==============================================================================


def normalize_search_term(search_term: str | None) -> str:
    return (search_term or "").casefold()


def effective_brand(brand: str | None, known_brand_names: Collection[str] | None = None) -> str | None:
    """
    Resolve the brand filter to a casefolded name, or None for no filtering.

    "all", blank values and names outside ``known_brand_names`` mean no filtering.
    """
    if brand is None or not brand.strip() or brand.strip().casefold() == ALL:
        return None
    wanted = brand.strip().casefold()
    if known_brand_names is not None and wanted not in {name.casefold() for name in known_brand_names}:
        logger.info("Unknown brand filter, not filtering by brand", extra={"brand": brand})
        return None
    return wanted


def matches_search_term(entry: ListingEntry, search_term: str | None) -> bool:
    term = normalize_search_term(search_term)
    if not term:
        return True
    return term in f"{entry.brand_name} {entry.model.name}".casefold()


def matches_brand(entry: ListingEntry, brand: str | None) -> bool:
    if brand is None:
        return True
    return entry.brand_name.casefold() == brand.casefold()


def matches_price_range(entry: ListingEntry, price_range: PriceRange) -> bool:
    return price_range.contains(entry.lowest_price)


def filter_listings(
    entries: Iterable[ListingEntry],
    filters: ListingFilters,
    known_brand_names: Collection[str] | None = None,
) -> list[ListingEntry]:
    """
    Apply search, brand and price-range filters (AND semantics).

    Stateless: nothing is cached between calls. Output keeps input order.
    """
    brand = effective_brand(filters.brand, known_brand_names)
    return [
        entry
        for entry in entries
        if matches_search_term(entry, filters.search_term)
        and matches_brand(entry, brand)
        and matches_price_range(entry, filters.price_range)
    ]
