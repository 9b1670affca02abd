# storerating/api/routers/admin.py
from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import (
    APIRouter,
    Request,
    Depends,
    HTTPException,
    Query,
    status,
)
from tortoise import timezone
from tortoise.exceptions import IntegrityError
from tortoise.functions import Count

from storerating.api.deps import require_admin
from storerating.core.errors import read_payload
from storerating.core.security import TokenClaims, hash_password
from storerating.models.rating import Rating
from storerating.models.store import Store
from storerating.models.user import Role, User
from storerating.schemas.admin import AdminUserCreateIn, AdminUserUpdateIn, StoreCreateIn
from storerating.services.listing import (
    STORE_SORT_FIELDS,
    USER_SORT_FIELDS,
    apply_search,
    apply_sort,
)
from storerating.services.ratings import (
    format_average,
    ratings_summary,
    store_to_dict,
    with_rating_stats,
)
from storerating.services.users import email_taken, user_to_dict

router = APIRouter(prefix="/admin", tags=["admin"])

RECENT_WINDOW = dt.timedelta(days=30)


def _parse_user_id(raw: str) -> int:
    """
    Path ids arrive as strings so a non-numeric id gets the API's own 400
    instead of FastAPI's generic path validation error.
    """
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user ID")


async def _get_user_or_404(user_id: int) -> User:
    u = await User.get_or_none(id=user_id)
    if not u:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return u


# ==============================================================================
# I. User Management Interface
#     Prefix: /admin/users
# ==============================================================================
@router.get("/users")
async def list_users(
    search: str = Query(default=""),
    field: str = Query(default="name"),
    role: str = Query(default=""),
    sortBy: str = Query(default="name"),
    sortOrder: str = Query(default="asc"),
    _: TokenClaims = Depends(require_admin),
):
    """
    List users (admin only) with optional search, role filter and sorting.

    Args:
        search: Case-insensitive substring to look for
        field: Column searched: name, email or address
        role: Only return users with this role
        sortBy: name, email, address, role or created_at
        sortOrder: asc or desc

    Returns:
        dict: {"users": [...]}

    Note:
        An unknown sortBy/sortOrder disables ordering rather than failing the
        request, and an unknown search field disables the search. A role
        that does not exist matches no users.
    """
    qs = User.all()
    qs = apply_search(qs, search, field)
    if role:
        try:
            qs = qs.filter(role=Role(role))
        except ValueError:
            return {"users": []}
    qs = apply_sort(qs, sortBy, sortOrder, USER_SORT_FIELDS)

    rows = await qs
    return {"users": [user_to_dict(u, timestamps=True) for u in rows]}


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(request: Request, _: TokenClaims = Depends(require_admin)):
    """
    Create a user with any role (admin only).

    Raises:
        HTTPException (400): Email already registered
    """
    body = await read_payload(request, AdminUserCreateIn)
    if await email_taken(body.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User with this email already exists")
    try:
        u = await User.create(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password),
            address=body.address,
            role=body.role,
        )
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User with this email already exists")
    return {"message": "User created successfully", "user": user_to_dict(u, timestamps=True)}


@router.put("/users/{user_id}")
async def update_user(
    user_id: str,
    request: Request,
    _: TokenClaims = Depends(require_admin),
):
    """
    Update user information (admin only).

    Only supplied fields are touched; the password is hashed before storing
    and updated_at is always refreshed.

    Order of checks: id format (400), existence (404), body validation (400),
    email uniqueness (400).

    Raises:
        HTTPException (400): Invalid id, invalid body, or email already taken
        HTTPException (404): If user not found
    """
    u = await _get_user_or_404(_parse_user_id(user_id))
    changes = (await read_payload(request, AdminUserUpdateIn)).changes()

    email = changes.get("email")
    if email and email != u.email and await email_taken(email, exclude_id=u.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already taken by another user")

    if "password" in changes:
        u.password_hash = hash_password(changes.pop("password"))
    for key, value in changes.items():
        setattr(u, key, value)

    try:
        await u.save()
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already taken by another user")
    return {"message": "User updated successfully", "user": user_to_dict(u, timestamps=True)}


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, current_admin: TokenClaims = Depends(require_admin)):
    """
    Delete a user account (admin only). The user's ratings go with it.

    Raises:
        HTTPException (400): Invalid id, deleting yourself, or user still owns stores
        HTTPException (404): If user not found
    """
    u = await _get_user_or_404(_parse_user_id(user_id))

    # Cannot delete self
    if current_admin["id"] == u.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")

    # Owned stores must be reassigned or removed first
    if await Store.filter(owner_id=u.id).exists():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete user with associated stores. Please reassign or delete stores first.",
        )

    await u.delete()
    return {"message": "User deleted successfully"}


# ==============================================================================
# II. Store Management
#     Prefix: /admin/stores
# ==============================================================================
@router.get("/stores")
async def list_stores(
    search: str = Query(default=""),
    field: str = Query(default="name"),
    sortBy: str = Query(default="name"),
    sortOrder: str = Query(default="asc"),
    _: TokenClaims = Depends(require_admin),
):
    """
    List stores with their rating aggregates and owner name (admin only).

    Args:
        search: Case-insensitive substring to look for
        field: Column searched: name, email or address
        sortBy: name, email, address, average_rating, total_ratings or created_at
        sortOrder: asc or desc

    Returns:
        dict: {"stores": [...]} with average_rating as a one-decimal string
    """
    qs = with_rating_stats(apply_search(Store.all(), search, field))
    qs = apply_sort(qs, sortBy, sortOrder, STORE_SORT_FIELDS)
    rows = await qs.prefetch_related("owner")

    stores = []
    for s in rows:
        item = store_to_dict(s)
        item["owner_name"] = s.owner.name if s.owner else None
        stores.append(item)
    return {"stores": stores}


@router.post("/stores", status_code=status.HTTP_201_CREATED)
async def create_store(request: Request, _: TokenClaims = Depends(require_admin)):
    """
    Create a store, optionally assigning an owner by email (admin only).

    Raises:
        HTTPException (400): Duplicate store email, unknown owner, or owner
            account is not a store_owner
    """
    body = await read_payload(request, StoreCreateIn)
    if await Store.filter(email=body.email).exists():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Store with this email already exists")

    owner: Optional[User] = None
    if body.ownerEmail:
        owner = await User.get_or_none(email=body.ownerEmail)
        if not owner:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Store owner not found")
        if owner.role != Role.STORE_OWNER:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User must have store_owner role")

    try:
        s = await Store.create(name=body.name, email=body.email, address=body.address, owner=owner)
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Store with this email already exists")

    return {
        "message": "Store created successfully",
        "store": {
            "id": s.id,
            "name": s.name,
            "email": s.email,
            "address": s.address,
            "owner_id": s.owner_id,
            "created_at": s.created_at.isoformat() if s.created_at else None,
        },
    }


# ==============================================================================
# III. Platform overview
# ==============================================================================
@router.get("/dashboard")
async def dashboard(_: TokenClaims = Depends(require_admin)):
    """
    Platform-wide statistics (admin only).

    Returns:
        dict: totals, users per role, platform average rating ("0.0" when
        empty) and the number of users and ratings created in the last 30 days
    """
    since = timezone.now() - RECENT_WINDOW

    total_users = await User.all().count()
    total_stores = await Store.all().count()
    total_ratings, average = await ratings_summary()

    by_role = await User.annotate(count=Count("id")).group_by("role").values("role", "count")

    return {
        "totalUsers": total_users,
        "totalStores": total_stores,
        "totalRatings": total_ratings,
        "averageRating": format_average(average),
        "recentUsers": await User.filter(created_at__gte=since).count(),
        "recentRatings": await Rating.filter(created_at__gte=since).count(),
        "usersByRole": {Role(row["role"]).value: int(row["count"]) for row in by_role},
    }


@router.get("/ratings")
async def list_ratings(_: TokenClaims = Depends(require_admin)):
    """
    Every rating on the platform, newest first, with rater and store names (admin only).
    """
    rows = await Rating.all().order_by("-created_at").values(
        "id",
        "rating",
        "created_at",
        user_name="user__name",
        user_email="user__email",
        store_name="store__name",
    )
    return {"ratings": rows}
