# storerating/api/routers/stores.py
from fastapi import APIRouter, Depends, Query

from storerating.api.deps import require_authenticated
from storerating.core.security import TokenClaims
from storerating.models.store import Store
from storerating.services.listing import apply_search
from storerating.services.ratings import store_to_dict, user_ratings_by_store, with_rating_stats

router = APIRouter(prefix="/stores", tags=["stores"])


@router.get("")
async def list_stores(
    query: str = Query(default=""),
    field: str = Query(default="name"),
    claims: TokenClaims = Depends(require_authenticated),
):
    """
    Browse stores ordered by name, with rating aggregates and the caller's own rating.

    Args:
        query: Case-insensitive substring to look for
        field: Column searched: name, email or address

    Returns:
        dict: {"stores": [...]} where each store carries average_rating,
        total_ratings and user_rating (None if the caller has not rated it)
    """
    qs = with_rating_stats(apply_search(Store.all(), query, field)).order_by("name")
    rows = await qs
    mine = await user_ratings_by_store(claims["id"])

    stores = []
    for s in rows:
        item = store_to_dict(s)
        item["user_rating"] = mine.get(s.id)
        stores.append(item)
    return {"stores": stores}
