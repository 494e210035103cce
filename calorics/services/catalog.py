"""
Food catalog: one-time CSV seeding, read-only listing and ad-hoc foods.

CSV columns: name, (ignored), calories, fat, carbs, protein, ...
Values in the CSV are per gram; the catalog stores them per 100 g.
"""
import csv
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from calorics.models.food import Food, FoodServing
from calorics.services.errors import CatalogSeedError

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"
CUSTOM_CATEGORY = "Custom"

BASE_SERVINGS: List[Tuple[str, float]] = [
    ("100 grams", 100),
    ("50 grams", 50),
]

# First matching rule wins
SERVING_RULES: List[Tuple[Tuple[str, ...], List[Tuple[str, float]]]] = [
    (("oil", "sauce", "dressing"), [("1 tablespoon", 15), ("1 teaspoon", 5)]),
    (("fruit", "apple", "orange", "banana", "pear", "peach"), [("1 medium piece", 150)]),
    (("egg",), [("1 piece", 50)]),
    (("bread", "toast"), [("1 slice", 30)]),
    (("rice", "pasta", "noodle"), [("1 cup cooked", 200)]),
]


def _to_float(cell: str) -> float:
    try:
        return float(cell.strip())
    except (AttributeError, ValueError):
        return 0.0


def servings_for(name: str) -> List[Tuple[str, float]]:
    """
    Baseline servings plus the extra servings of the first rule matching the name.
    """
    servings = list(BASE_SERVINGS)
    lowered = name.lower()
    for keywords, extra in SERVING_RULES:
        if any(keyword in lowered for keyword in keywords):
            servings.extend(extra)
            break
    return servings


def parse_catalog_row(record: List[str]) -> Optional[Food]:
    """
    Build a Food (with its servings) from one CSV row, or None if the row is skipped.
    """
    if len(record) < 6:
        return None

    name = record[0].strip()
    if name == "deprecated":
        return None

    calories = _to_float(record[2])
    fat = _to_float(record[3])
    carbs = _to_float(record[4])
    protein = _to_float(record[5])

    food = Food(
        name=name,
        calories=int(calories * 100),
        protein=protein * 100,
        carbohydrates=carbs * 100,
        fat=fat * 100,
        serving_size=100,
        category=DEFAULT_CATEGORY,
    )
    food.servings = [
        FoodServing(description=description, grams=grams)
        for description, grams in servings_for(name)
    ]
    return food


def seed_catalog(db: Session, csv_path) -> int:
    """
    Load the catalog from CSV if it is empty. Returns the number of foods inserted.

    Everything is committed in one transaction so the catalog is never half-seeded.
    Raises CatalogSeedError if the catalog is empty and the file cannot be read.
    """
    existing = db.query(Food).count()
    if existing > 0:
        logger.info(f"[SEED] Catalog already has {existing} foods, skipping")
        return 0

    path = Path(csv_path)
    if not path.is_file():
        raise CatalogSeedError(f"Catalog is empty and seed file {path} does not exist")

    inserted = 0
    skipped = 0
    try:
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            next(reader, None)  # header

            for record in reader:
                food = parse_catalog_row(record)
                if food is None:
                    skipped += 1
                    continue
                db.add(food)
                inserted += 1

        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"[SEED] Failed to seed catalog from {path}: {e}", exc_info=True)
        raise CatalogSeedError(f"Failed to seed catalog from {path}: {e}") from e

    logger.info(f"[SEED] Inserted {inserted} foods from {path} ({skipped} rows skipped)")
    return inserted


def list_foods(db: Session, query: Optional[str] = None, limit: Optional[int] = None) -> List[Food]:
    """
    Catalog foods with their servings, ordered by name.
    `query` filters by case-insensitive name substring.
    """
    q = (
        db.query(Food)
        .options(selectinload(Food.servings))
        .filter(Food.deleted_at.is_(None))
    )
    if query:
        q = q.filter(Food.name.ilike(f"%{query.strip()}%"))
    q = q.order_by(Food.name.asc(), Food.id.asc())
    if limit:
        q = q.limit(limit)
    return q.all()


def create_custom_food(db: Session, name: str, calories: int) -> Food:
    """
    Insert an ad-hoc food with a single 100 g serving. Flushed, not committed.
    Foods are not deduplicated by name.
    """
    food = Food(
        name=name.strip(),
        calories=calories,
        protein=0,
        carbohydrates=0,
        fat=0,
        serving_size=100,
        category=CUSTOM_CATEGORY,
    )
    food.servings = [FoodServing(description="100 grams", grams=100)]
    db.add(food)
    db.flush()
    return food
