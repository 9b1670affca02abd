# storerating/api/routers/store_owner.py
from fastapi import APIRouter, Depends
from tortoise import timezone

from storerating.api.deps import require_store_owner, require_store_owner_analytics
from storerating.core.security import TokenClaims
from storerating.models.rating import Rating
from storerating.models.store import Store
from storerating.services.ratings import (
    format_average,
    ratings_summary,
    store_to_dict,
    to_float,
    with_rating_stats,
)

router = APIRouter(prefix="/store-owner", tags=["store-owner"])

RECENT_RATINGS_LIMIT = 10


@router.get("/stores")
async def my_stores(claims: TokenClaims = Depends(require_store_owner)):
    """
    Stores owned by the caller, every rating they received, and summary statistics.

    Returns:
        dict: stores (with aggregates), ratings (newest first, with rater
        name and email) and statistics {totalStores, totalRatings,
        overallAverageRating}

    Note:
        overallAverageRating is the mean of the per-store averages over all
        owned stores (an unrated store contributes 0), not the mean of the
        individual ratings. /store-owner/analytics reports the latter.
    """
    owner_id = claims["id"]
    stores = await with_rating_stats(Store.filter(owner_id=owner_id)).order_by("name")
    ratings = await Rating.filter(store__owner_id=owner_id).order_by("-created_at").values(
        "id",
        "rating",
        "created_at",
        user_name="user__name",
        user_email="user__email",
        store_name="store__name",
        store_id="store__id",
    )

    total_stores = len(stores)
    total_ratings = len(ratings)
    overall = None
    if total_ratings:
        overall = sum(to_float(s.average_rating) for s in stores) / total_stores

    return {
        "stores": [store_to_dict(s) for s in stores],
        "ratings": ratings,
        "statistics": {
            "totalStores": total_stores,
            "totalRatings": total_ratings,
            "overallAverageRating": format_average(overall),
        },
    }


@router.get("/analytics")
async def analytics(claims: TokenClaims = Depends(require_store_owner_analytics)):
    """
    Rating analytics across the caller's stores.

    Returns:
        dict: total_stores, total_ratings, average_rating (mean of all
        individual ratings, 2 decimals, 0 when none), ratings_this_month
        and the 10 most recent ratings with rater and store names
    """
    owner_id = claims["id"]
    store_ids = await Store.filter(owner_id=owner_id).values_list("id", flat=True)
    total_ratings, average = await ratings_summary(list(store_ids))

    month_start = timezone.now().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    this_month = await Rating.filter(store_id__in=store_ids, created_at__gte=month_start).count() if store_ids else 0

    recent = await Rating.filter(store__owner_id=owner_id).order_by("-created_at").limit(
        RECENT_RATINGS_LIMIT
    ).values(
        "id",
        "rating",
        "created_at",
        user_name="user__name",
        store_name="store__name",
    )

    return {
        "total_stores": len(store_ids),
        "total_ratings": total_ratings,
        "average_rating": round(to_float(average), 2),
        "ratings_this_month": this_month,
        "recent_ratings": recent,
    }
