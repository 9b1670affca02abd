# storerating/api/routers/auth.py
from fastapi import APIRouter, HTTPException, Request, status, Depends
from tortoise.exceptions import IntegrityError

from storerating.core.errors import read_payload
from storerating.core.security import verify_password, create_access_token, hash_password, TokenClaims
from storerating.api.deps import require_password_change
from storerating.models.user import User, Role
from storerating.schemas.auth import RegisterIn, LoginIn, ChangePasswordIn
from storerating.services.users import email_taken, user_to_dict

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid credentials"
EMAIL_EXISTS = "User already exists with this email"


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterIn):
    """
    Register a new user account.

    Public sign-up always creates a regular "user"; a role supplied in the
    body is ignored so nobody can register themselves as admin or owner.

    Args:
        body: Request body containing name, email, password, address

    Returns:
        dict: message, user (without password) and an access token

    Raises:
        HTTPException (400): Email already registered
    """
    if await email_taken(body.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_EXISTS)
    try:
        u = await User.create(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password),
            address=body.address,
            role=Role.USER,
        )
    except IntegrityError:
        # Concurrent registration with the same email won the unique constraint
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_EXISTS)

    token = create_access_token(u.id, u.email, u.role)
    return {"message": "User registered successfully", "user": user_to_dict(u), "token": token}


@router.post("/login")
async def login(payload: LoginIn):
    """
    Authenticate user and create access token.

    Unknown email and wrong password produce the same 401 so the response
    does not reveal which accounts exist.

    Raises:
        HTTPException (401): If credentials are invalid
    """
    user = await User.get_or_none(email=payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    token = create_access_token(user.id, user.email, user.role)
    return {"message": "Login successful", "user": user_to_dict(user), "token": token}


@router.put("/password")
async def change_password(request: Request, claims: TokenClaims = Depends(require_password_change)):
    """
    Change password for the currently authenticated user.

    The current password must be supplied and must match.

    Raises:
        HTTPException (404): Token refers to a user that no longer exists
        HTTPException (400): Current password is incorrect
    """
    body = await read_payload(request, ChangePasswordIn)
    user = await User.get_or_none(id=claims["id"])
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not verify_password(body.currentPassword, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    user.password_hash = hash_password(body.newPassword)
    await user.save(update_fields=["password_hash", "updated_at"])
    return {"message": "Password updated successfully"}
