# storerating/api/routers/ratings.py
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from storerating.api.deps import require_authenticated, require_rater
from storerating.core.errors import read_payload
from storerating.core.security import TokenClaims
from storerating.models.rating import Rating
from storerating.models.store import Store
from storerating.schemas.rating import RatingIn
from storerating.services.ratings import rating_to_dict, upsert_rating

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_rating(
    request: Request,
    response: Response,
    claims: TokenClaims = Depends(require_rater),
):
    """
    Rate a store, or change an earlier rating of it (role "user" only).

    A user holds at most one rating per store. The first submission creates
    it (201, "Rating submitted successfully"); every later submission,
    including one with the same value, updates it in place (200, "Rating
    updated successfully").

    Raises:
        HTTPException (404): Store does not exist, or was deleted while the
            rating was being written
    """
    body = await read_payload(request, RatingIn)
    if not await Store.filter(id=body.storeId).exists():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")

    rating, created = await upsert_rating(claims["id"], body.storeId, body.rating)
    if rating is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")
    if created:
        message = "Rating submitted successfully"
    else:
        response.status_code = status.HTTP_200_OK
        message = "Rating updated successfully"
    return {"message": message, "rating": rating_to_dict(rating)}


@router.get("")
async def list_my_ratings(claims: TokenClaims = Depends(require_authenticated)):
    """
    The caller's own ratings with store name and address, most recently updated first.
    """
    rows = await Rating.filter(user_id=claims["id"]).order_by("-updated_at").values(
        "id",
        "rating",
        "created_at",
        "updated_at",
        store_id="store__id",
        store_name="store__name",
        store_address="store__address",
    )
    return {"ratings": rows}
