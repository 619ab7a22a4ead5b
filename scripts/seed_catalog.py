#!/usr/bin/env python3
"""
Write a sample catalog JSON file with deterministic random data.

Features:
- Deterministic: fixed seed → same file every run
- Idempotent: overwrites the target file
- Realism-lite: prices correlated with size and collection band
- Schema drift: records use alternate id/name keys, and a few are
  malformed so the normalizer has something to omit

Usage:
    python scripts/seed_catalog.py [output-path]
    # default output: $CATALOG_DATA_PATH, else data/catalog.json
"""

from __future__ import annotations

import json
import os
import random
import sys
from pathlib import Path
from typing import Any

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bloom_catalog.domain.catalog_item import SIZE_ORDER
from bloom_catalog.use_cases.normalize_catalog_items import normalize_items


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_ITEMS = 120  # Number of well-formed records
DEFAULT_OUTPUT = Path("data") / "catalog.json"


# ==============================================================================
# Bouquet Data
# ==============================================================================

# Collections with price bands (IDR)
COLLECTIONS = {
    "Everyday": {"price_min": 100_000, "price_max": 300_000},
    "Romance": {"price_min": 250_000, "price_max": 600_000},
    "Celebration": {"price_min": 200_000, "price_max": 500_000},
    "Signature": {"price_min": 500_000, "price_max": 950_000},
}

TYPES = ["Roses", "Tulips", "Lilies", "Orchid", "Sunflowers", "Mixed"]

FLOWERS_BY_TYPE = {
    "Roses": ["Red Rose", "White Rose", "Pink Rose"],
    "Tulips": ["Yellow Tulip", "Purple Tulip"],
    "Lilies": ["Stargazer Lily", "Calla Lily"],
    "Orchid": ["Phalaenopsis", "Dendrobium"],
    "Sunflowers": ["Sunflower"],
    "Mixed": ["Baby's Breath", "Carnation", "Eucalyptus", "Red Rose"],
}

OCCASIONS = ["Birthday", "Anniversary", "Graduation", "Get Well", "Sympathy", "Wedding"]

ADJECTIVES = ["Sunrise", "Velvet", "Garden", "Blush", "Golden", "Moonlight", "Meadow", "Ember"]

# Size multiplier applied to the collection base price
SIZE_FACTORS = dict(zip(SIZE_ORDER, (0.6, 0.8, 1.0, 1.25, 1.5, 2.0)))


# ==============================================================================
# Price Calculation with Realism
# ==============================================================================


def calculate_price(collection: str, size: str) -> int:
    """
    Price from collection band and size, rounded to the nearest 5,000.

    Capped at 1,000,000 so every seeded price sits inside the price filter domain.
    """
    band = COLLECTIONS[collection]
    base = random.randint(band["price_min"], band["price_max"])
    price = base * SIZE_FACTORS[size]
    return min(1_000_000, int(round(price / 5000)) * 5000)


# ==============================================================================
# Record Generation
# ==============================================================================


def generate_record(index: int) -> dict[str, Any]:
    """Generate one raw bouquet record the way the upstream API returns it."""
    collection = random.choice(list(COLLECTIONS))
    bouquet_type = random.choice(TYPES)
    size = random.choices(SIZE_ORDER, weights=[1, 3, 4, 3, 2, 1], k=1)[0]
    name = f"{random.choice(ADJECTIVES)} {bouquet_type}"

    record: dict[str, Any] = {
        "name": name,
        "description": f"A {size.lower()} {bouquet_type.lower()} arrangement from the {collection} collection.",
        "price": calculate_price(collection, size),
        "type": bouquet_type,
        "size": size,
        "collectionName": collection,
        "image": f"https://cdn.bloom-catalog.dev/bouquets/{index:04d}.jpg",
        "status": random.choices(["ready", "preorder"], weights=[4, 1], k=1)[0],
        "isFeatured": random.random() < 0.15,
        "isNewEdition": random.random() < 0.2,
        "quantity": random.randint(0, 40),
        "occasions": random.sample(OCCASIONS, k=random.randint(1, 3)),
        "flowers": FLOWERS_BY_TYPE[bouquet_type],
        "customTags": [],
        "careInstructions": "Trim stems and change water every two days.",
        "createdAt": f"2024-{random.randint(1, 12):02d}-{random.randint(1, 28):02d}T09:00:00Z",
    }

    # Schema drift: the id key varies between API versions
    id_key = random.choices(["_id", "id", "sku"], weights=[6, 3, 1], k=1)[0]
    record[id_key] = f"b-{index:04d}"
    return record


def malformed_records() -> list[Any]:
    """Records the normalizer must omit or repair."""
    return [
        {"price": 150_000, "type": "Roses"},  # no id, no name → omitted
        {"_id": "b-bad-1", "price": 120_000},  # no name → omitted
        {"_id": "b-bad-2", "name": "   ", "price": 90_000},  # blank name → omitted
        {"_id": "b-repair-1", "name": "Unpriced Posy", "price": "call us"},  # price → 0
        {"_id": "b-repair-2", "title": "Legacy Title Bouquet", "price": -5, "occasions": "Birthday"},
        "not-a-record",
        None,
    ]


def seed_catalog(output: Path, num_items: int = NUM_ITEMS, seed: int = RANDOM_SEED) -> None:
    """
    Write the sample catalog as ``{"data": [...]}``.

    Args:
        output: Target JSON file (parent directories are created)
        num_items: Number of well-formed records
        seed: Random seed for deterministic results
    """
    random.seed(seed)

    print(f"🌱 Generating {num_items} bouquets (seed={seed})...")
    records: list[Any] = [generate_record(i) for i in range(1, num_items + 1)]
    records.extend(malformed_records())

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as handle:
        json.dump({"data": records}, handle, indent=2, ensure_ascii=False)

    items = normalize_items(records)
    print(f"✅ Wrote {len(records)} records to {output} ({len(items)} normalize cleanly)")

    print("\n📊 Sample bouquets:")
    for i, item in enumerate(items[:5], 1):
        print(f"   {i}. {item.name} ({item.size}, {item.collection_name}) - Rp{item.price:,}")

    if len(items) > 5:
        print(f"   ... and {len(items) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(os.getenv("CATALOG_DATA_PATH") or DEFAULT_OUTPUT)
    try:
        seed_catalog(target)
    except Exception as e:
        print(f"❌ Error writing catalog: {e}", file=sys.stderr)
        sys.exit(1)
