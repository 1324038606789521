from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from mobile_pk.domain.listing import ListingEntry, ListingFilters, PriceRange
from mobile_pk.domain.pricing import UNAVAILABLE, DataQualityWarning, LowestPrice
from mobile_pk.entrypoints.http.dtos.common import DataQualityWarningDTO
from mobile_pk.entrypoints.http.dtos.listings import (
    ListingDTO,
    ListingsQueryDTO,
    ListingsResponseDTO,
    PhoneSpecsDTO,
    PriceComparisonResponseDTO,
    PriceOfferDTO,
)
from mobile_pk.use_cases.price_query_facade import PriceComparison
from mobile_pk.use_cases.search_listings import (
    SearchListingsRequest,
    SearchListingsResponse,
)


class ListingsMapper:
    """Maps between REST DTOs and domain models for listings and price comparison."""

    @staticmethod
    def to_domain_filters(dto: ListingsQueryDTO) -> ListingFilters:
        """
        Converts query params to domain filters.

        Raw price_range strings are parsed here; unknown values become ALL.

        Args:
            dto: The data transfer object containing listing query parameters

        Returns:
            ListingFilters: Domain filters
        """
        return ListingFilters(
            search_term=dto.search,
            brand=dto.brand,
            price_range=PriceRange.parse(dto.price_range),
        )

    @staticmethod
    def to_domain_request(dto: ListingsQueryDTO) -> SearchListingsRequest:
        return SearchListingsRequest(filters=ListingsMapper.to_domain_filters(dto))

    @staticmethod
    def to_price(price: LowestPrice) -> int | Literal["unavailable"]:
        """UNAVAILABLE → 'unavailable' at the boundary; numbers pass through."""
        if price is UNAVAILABLE:
            return "unavailable"
        return price

    @staticmethod
    def to_warnings(warnings: Iterable[DataQualityWarning]) -> list[DataQualityWarningDTO]:
        return [
            DataQualityWarningDTO(
                row_index=warning.row_index,
                model_id=warning.model_id,
                code=warning.code,
                message=warning.message,
            )
            for warning in warnings
        ]

    @staticmethod
    def to_listing_response(entry: ListingEntry) -> ListingDTO:
        """
        Converts a domain ListingEntry to its REST DTO.

        Args:
            entry: Listing entry with resolved brand and lowest price

        Returns:
            ListingDTO: REST response DTO
        """
        specs = entry.model.specs
        return ListingDTO(
            id=entry.model.id,
            brand=entry.brand_name,
            model=entry.model.name,
            specs=PhoneSpecsDTO(
                display_size=specs.display_size,
                ram=specs.ram,
                storage=specs.storage,
                camera=specs.camera,
                battery=specs.battery,
                processor=specs.processor,
                os=specs.os,
            ),
            image_url=entry.model.image_url,
            lowest_price=ListingsMapper.to_price(entry.lowest_price),
            retailer_count=entry.retailer_count,
            offer_count=entry.offer_count,
        )

    @staticmethod
    def to_response(result: SearchListingsResponse) -> ListingsResponseDTO:
        return ListingsResponseDTO(
            mobiles=[ListingsMapper.to_listing_response(entry) for entry in result.listings],
            total=len(result.listings),
            warnings=ListingsMapper.to_warnings(result.warnings),
        )

    @staticmethod
    def to_comparison_response(comparison: PriceComparison) -> PriceComparisonResponseDTO:
        return PriceComparisonResponseDTO(
            id=comparison.model.id,
            brand=comparison.brand_name,
            model=comparison.model.name,
            lowest_price=ListingsMapper.to_price(comparison.lowest_price),
            offers=[
                PriceOfferDTO(
                    retailer=offer.retailer,
                    city=offer.city,
                    price=int(offer.price),
                    observed_at=offer.observed_at,
                )
                for offer in comparison.offers
            ],
            warnings=ListingsMapper.to_warnings(comparison.warnings),
        )
