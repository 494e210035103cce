"""
Intake ledger: per-user log of dated food entries and reusable food sets.

Entries saved with a set are ordinary dated entries of the user. Applying a set
clones them onto another day as entries without a set id.
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from calorics.models.food_entry import FoodEntry
from calorics.models.food_set import FoodSet
from calorics.services.catalog import create_custom_food
from calorics.services.dates import normalize_date
from calorics.services.errors import NotFoundError
from calorics.services.intake import build_entry

logger = logging.getLogger(__name__)


def _entries_query(db: Session, user_id: int):
    return (
        db.query(FoodEntry)
        .options(joinedload(FoodEntry.food))
        .filter(FoodEntry.user_id == user_id)
    )


def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def append_entry(
    db: Session,
    user_id: int,
    food_id: int,
    serving_desc: str,
    quantity: float,
    date: Optional[str] = None,
) -> FoodEntry:
    entry = build_entry(db, user_id, food_id, serving_desc, quantity, date)
    db.add(entry)
    _commit(db)
    db.refresh(entry)

    logger.info(
        f"[LEDGER] Saved entry: user_id={user_id}, entry_id={entry.id}, "
        f"date={entry.date}, calories={entry.calories}"
    )
    return entry


def append_direct_entry(
    db: Session,
    user_id: int,
    name: str,
    calories: int,
    quantity: float,
    date: Optional[str] = None,
) -> FoodEntry:
    """
    Log intake of a food that is not in the catalog.
    A new food with a single "100 grams" serving is created for every call.
    """
    entry_date = normalize_date(date)
    food = create_custom_food(db, name, calories)
    entry = build_entry(db, user_id, food.id, "100 grams", quantity, entry_date)
    db.add(entry)
    _commit(db)
    db.refresh(entry)

    logger.info(
        f"[LEDGER] Saved direct entry: user_id={user_id}, food_id={food.id}, "
        f"entry_id={entry.id}, calories={entry.calories}"
    )
    return entry


def delete_entry(db: Session, user_id: int, entry_id: int) -> None:
    """
    Delete one of the user's entries. Absent and foreign entries both raise NotFoundError.
    """
    entry = (
        db.query(FoodEntry)
        .filter(FoodEntry.id == entry_id, FoodEntry.user_id == user_id)
        .first()
    )
    if not entry:
        raise NotFoundError("Food entry not found")

    db.delete(entry)
    _commit(db)
    logger.info(f"[LEDGER] Deleted entry: user_id={user_id}, entry_id={entry_id}")


def list_by_date(db: Session, user_id: int, date: str) -> List[FoodEntry]:
    return (
        _entries_query(db, user_id)
        .filter(FoodEntry.date == date)
        .order_by(FoodEntry.created_at.desc(), FoodEntry.id.desc())
        .all()
    )


def list_by_range(db: Session, user_id: int, start_date: str, end_date: str) -> List[FoodEntry]:
    # ISO dates compare correctly as strings
    return (
        _entries_query(db, user_id)
        .filter(FoodEntry.date >= start_date, FoodEntry.date <= end_date)
        .order_by(FoodEntry.created_at.desc(), FoodEntry.id.desc())
        .all()
    )


# ---------- FOOD SETS ----------


def create_set(
    db: Session,
    user_id: int,
    name: str,
    description: str,
    entries: Iterable,
) -> FoodSet:
    """
    Create a set with its entries in one transaction.

    `entries` items need food_id, serving_desc, quantity and an optional date.
    Every item goes through the intake calculator; any failure leaves nothing behind.
    """
    built = [
        build_entry(db, user_id, item.food_id, item.serving_desc, item.quantity, item.date)
        for item in entries
    ]

    food_set = FoodSet(user_id=user_id, name=name, description=description or "")
    food_set.entries = built
    db.add(food_set)
    _commit(db)
    db.refresh(food_set)

    logger.info(
        f"[FOOD_SETS] Created set: user_id={user_id}, set_id={food_set.id}, entries={len(built)}"
    )
    return food_set


def list_sets(db: Session, user_id: int) -> List[FoodSet]:
    return (
        db.query(FoodSet)
        .options(selectinload(FoodSet.entries).joinedload(FoodEntry.food))
        .filter(FoodSet.user_id == user_id)
        .order_by(FoodSet.created_at.desc(), FoodSet.id.desc())
        .all()
    )


def get_set(db: Session, user_id: int, set_id: int) -> FoodSet:
    food_set = (
        db.query(FoodSet)
        .filter(FoodSet.id == set_id, FoodSet.user_id == user_id)
        .first()
    )
    if not food_set:
        raise NotFoundError("Food set not found")
    return food_set


def apply_set(db: Session, user_id: int, set_id: int, date: Optional[str] = None) -> List[FoodEntry]:
    """
    Clone the set's entries as fresh entries on `date` (today if omitted).

    Calories are copied from the set, not recalculated. The clones carry no set id
    and are committed as one batch.
    """
    target_date = normalize_date(date)
    food_set = get_set(db, user_id, set_id)

    clones = [
        FoodEntry(
            user_id=user_id,
            food_id=entry.food_id,
            serving_desc=entry.serving_desc,
            quantity=entry.quantity,
            calories=entry.calories,
            date=target_date,
        )
        for entry in food_set.entries
    ]

    db.add_all(clones)
    _commit(db)
    for clone in clones:
        db.refresh(clone)

    logger.info(
        f"[FOOD_SETS] Applied set: user_id={user_id}, set_id={set_id}, "
        f"date={target_date}, entries={len(clones)}"
    )
    return clones


def delete_set(db: Session, user_id: int, set_id: int) -> None:
    """
    Delete a set and the entries saved with it. Entries cloned by apply_set are untouched.
    """
    food_set = get_set(db, user_id, set_id)

    db.query(FoodEntry).filter(FoodEntry.food_set_id == food_set.id).delete(
        synchronize_session=False
    )
    db.delete(food_set)
    _commit(db)
    logger.info(f"[FOOD_SETS] Deleted set: user_id={user_id}, set_id={set_id}")
