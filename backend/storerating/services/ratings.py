"""
Rating aggregation and the one-rating-per-store upsert.
"""
import logging
from typing import Optional, Union
from decimal import Decimal

from tortoise.exceptions import IntegrityError
from tortoise.functions import Avg, Count, Sum
from tortoise.queryset import QuerySet

from storerating.models.rating import Rating
from storerating.models.store import Store

logger = logging.getLogger("uvicorn.error")

Number = Union[int, float, Decimal, None]


def with_rating_stats(qs: QuerySet[Store]) -> QuerySet[Store]:
    """
    Annotate stores with `average_rating` (None when unrated) and `total_ratings`.
    """
    return qs.annotate(
        average_rating=Avg("ratings__rating"),
        total_ratings=Count("ratings__id"),
    )


def to_float(value: Number) -> float:
    return float(value) if value is not None else 0.0


def format_average(value: Number) -> str:
    """Averages are shown with one decimal; "0.0" when there is nothing to average."""
    return f"{to_float(value):.1f}"


def store_to_dict(store: Store) -> dict:
    """
    Serialize a store annotated by `with_rating_stats`.
    """
    return {
        "id": store.id,
        "name": store.name,
        "email": store.email,
        "address": store.address,
        "created_at": store.created_at.isoformat() if store.created_at else None,
        "average_rating": format_average(getattr(store, "average_rating", None)),
        "total_ratings": int(getattr(store, "total_ratings", 0) or 0),
    }


def rating_to_dict(rating: Rating) -> dict:
    return {
        "id": rating.id,
        "user_id": rating.user_id,
        "store_id": rating.store_id,
        "rating": rating.rating,
        "created_at": rating.created_at.isoformat() if rating.created_at else None,
        "updated_at": rating.updated_at.isoformat() if rating.updated_at else None,
    }


async def upsert_rating(user_id: int, store_id: int, value: int) -> tuple[Optional[Rating], bool]:
    """
    Record `value` as the user's rating of a store.

    The insert is attempted first and the (user, store) unique constraint
    decides: if a row already exists the insert fails and that row is
    updated in place (same id and created_at, fresh updated_at). Two
    concurrent submissions therefore never produce two rows.

    Returns:
        (rating, created) where created is False when an existing row was
        updated. rating is None when the insert failed and there is no row
        to update, i.e. the store (or user) vanished after it was checked.
    """
    try:
        rating = await Rating.create(user_id=user_id, store_id=store_id, rating=value)
        return rating, True
    except IntegrityError:
        logger.info("Rating by user %s for store %s rejected on insert, updating in place", user_id, store_id)

    existing = await Rating.get_or_none(user_id=user_id, store_id=store_id)
    if existing is None:
        logger.warning("No rating to update for user %s and store %s", user_id, store_id)
        return None, False
    existing.rating = value
    await existing.save(update_fields=["rating", "updated_at"])
    return existing, False


async def user_ratings_by_store(user_id: int) -> dict[int, int]:
    """Map store id -> the user's rating, for every store the user has rated."""
    rows = await Rating.filter(user_id=user_id).values_list("store_id", "rating")
    return {store_id: value for store_id, value in rows}


async def ratings_summary(store_ids: Optional[list[int]] = None) -> tuple[int, Optional[float]]:
    """
    Count and mean of ratings, optionally restricted to some stores.

    The mean is Sum / Count: an Avg in a values() query is converted back
    through the integer rating column and would lose the fraction.

    Returns:
        (total, average) where average is None when there are no ratings
    """
    qs = Rating.all()
    if store_ids is not None:
        if not store_ids:
            return 0, None
        qs = qs.filter(store_id__in=store_ids)
    rows = await qs.annotate(total=Count("id"), stars=Sum("rating")).values("total", "stars")
    total = int(rows[0]["total"] or 0) if rows else 0
    if not total:
        return 0, None
    return total, float(rows[0]["stars"]) / total
