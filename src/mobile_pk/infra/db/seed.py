"""
Seed the catalog tables with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: prices follow a brand tier, drift month to month and
  vary a little between retailers and cities

Usage:
    python -m mobile_pk.infra.db.seed
"""

from __future__ import annotations

import random
import sys
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from mobile_pk.infra.db.models import BrandRow, MobilePriceRow, MobileRow
from mobile_pk.infra.db.session import get_session


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_MONTHS = 6  # Months of price history to generate
ANCHOR = datetime(2025, 6, 1, tzinfo=timezone.utc)  # First day of the newest month


# ==============================================================================
# Pakistani Market Phone Data
# ==============================================================================

# Brand tiers with launch price bands (PKR)
TIERS = {
    "budget": {
        "brands": ["Infinix", "Tecno", "itel"],
        "price_min": 18_000,
        "price_max": 65_000,
    },
    "mid_range": {
        "brands": ["Xiaomi", "Vivo", "Oppo", "Realme"],
        "price_min": 45_000,
        "price_max": 160_000,
    },
    "flagship": {
        "brands": ["Samsung", "Apple", "OnePlus"],
        "price_min": 120_000,
        "price_max": 480_000,
    },
}

MODELS_BY_BRAND = {
    "Infinix": ["Hot 40", "Note 40 Pro", "Smart 8"],
    "Tecno": ["Spark 20", "Camon 30", "Pova 6"],
    "itel": ["A70", "S24", "P55"],
    "Xiaomi": ["Redmi Note 13", "Redmi 13C", "Xiaomi 14"],
    "Vivo": ["Y36", "V30", "X100"],
    "Oppo": ["A78", "Reno 11", "Find X7"],
    "Realme": ["C67", "12 Pro+", "GT 6"],
    "Samsung": ["Galaxy A55", "Galaxy S24", "Galaxy S24 Ultra"],
    "Apple": ["iPhone 13", "iPhone 15", "iPhone 15 Pro"],
    "OnePlus": ["Nord CE4", "OnePlus 12", "OnePlus 12R"],
}

RETAILERS = ["Daraz", "PriceOye", "Whatmobile", "Telemart", "Mega.pk"]

CITIES = ["Karachi", "Lahore", "Islamabad", "Rawalpindi", "Faisalabad", "Peshawar", "Multan"]

RAM_OPTIONS = ["4GB", "6GB", "8GB", "12GB"]
STORAGE_OPTIONS = ["64GB", "128GB", "256GB", "512GB"]


@dataclass
class SeedData:
    brands: list[BrandRow] = field(default_factory=list)
    mobiles: list[MobileRow] = field(default_factory=list)
    prices: list[MobilePriceRow] = field(default_factory=list)


# ==============================================================================
# Price Calculation with Realism
# ==============================================================================


def retail_price(amount: float) -> int:
    """Round to a shelf price ending in 999 (e.g. 84_999), never below 999."""
    thousands = max(1, round(amount / 1000))
    return thousands * 1000 - 1


def month_start(anchor: datetime, months_back: int) -> datetime:
    year, month = anchor.year, anchor.month - months_back
    while month < 1:
        month += 12
        year -= 1
    return anchor.replace(year=year, month=month, day=1)


def _seeded_uuid(rng: random.Random) -> uuid.UUID:
    return uuid.UUID(int=rng.getrandbits(128), version=4)


# ==============================================================================
# Seed Generation
# ==============================================================================


def generate_catalog(
    rng: random.Random,
    num_months: int = NUM_MONTHS,
    anchor: datetime = ANCHOR,
) -> SeedData:
    """
    Generate brands, models and a price history.

    Each model gets a launch price from its brand tier. Every month it drifts
    by up to ±4%, and each retailer/city pair quoting it that month adds up
    to ±5% on top.
    """
    data = SeedData()

    for tier in TIERS.values():
        for brand_name in tier["brands"]:
            brand = BrandRow(id=_seeded_uuid(rng), name=brand_name)
            data.brands.append(brand)

            for model_name in MODELS_BY_BRAND[brand_name]:
                mobile = MobileRow(
                    id=_seeded_uuid(rng),
                    brand_id=brand.id,
                    model=model_name,
                    display_size=f'{rng.choice([6.1, 6.5, 6.7, 6.8])}"',
                    ram=rng.choice(RAM_OPTIONS),
                    storage=rng.choice(STORAGE_OPTIONS),
                    camera=f"{rng.choice([13, 50, 64, 108, 200])}MP",
                    battery=f"{rng.choice([4000, 4500, 5000, 6000])}mAh",
                    processor=rng.choice(["Helio G99", "Dimensity 7050", "Snapdragon 8 Gen 3", "A17 Pro"]),
                    operating_system="iOS" if brand_name == "Apple" else "Android",
                    image_url=None,
                )
                data.mobiles.append(mobile)

                base_price = float(rng.randint(tier["price_min"], tier["price_max"]))
                for months_back in range(num_months - 1, -1, -1):
                    base_price *= rng.uniform(0.96, 1.04)
                    period_start = month_start(anchor, months_back)

                    for retailer in rng.sample(RETAILERS, k=rng.randint(1, 3)):
                        observed_at = period_start + timedelta(
                            days=rng.randint(0, 27), hours=rng.randint(0, 23)
                        )
                        data.prices.append(
                            MobilePriceRow(
                                id=_seeded_uuid(rng),
                                mobile_id=mobile.id,
                                price=retail_price(base_price * rng.uniform(0.95, 1.05)),
                                retailer=retailer,
                                city=rng.choice(CITIES),
                                created_at=observed_at,
                            )
                        )

    return data


def seed_catalog(num_months: int = NUM_MONTHS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with random catalog data.

    Args:
        num_months: Months of price history to generate
        seed: Random seed for deterministic results
    """
    rng = random.Random(seed)

    print(f"🌱 Seeding catalog with {num_months} months of prices (seed={seed})...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent), children first
        print("🗑️  Clearing existing catalog...")
        deleted_prices = session.query(MobilePriceRow).delete()
        deleted_mobiles = session.query(MobileRow).delete()
        deleted_brands = session.query(BrandRow).delete()
        print(
            f"   Deleted {deleted_brands} brands, {deleted_mobiles} mobiles, "
            f"{deleted_prices} prices"
        )

        # Step 2: Generate and insert new rows
        print("📱 Generating catalog...")
        data = generate_catalog(rng, num_months=num_months)

        session.add_all(data.brands)
        session.flush()
        session.add_all(data.mobiles)
        session.flush()
        session.add_all(data.prices)
        session.flush()

        print(
            f"✅ Seeded {len(data.brands)} brands, {len(data.mobiles)} mobiles, "
            f"{len(data.prices)} price observations!"
        )


# ==============================================================================
# Main
# ==============================================================================


def main() -> int:
    try:
        seed_catalog()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
