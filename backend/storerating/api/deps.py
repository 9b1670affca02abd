# storerating/api/deps.py
from fastapi import Header, HTTPException, status

from storerating.core.security import TokenClaims, verify_access_token
from storerating.models.user import Role

ACCESS_TOKEN_REQUIRED = "Access token required"


def require_role(
    *roles: Role,
    denied: str = "Access denied",
    invalid: str = "Invalid token",
):
    """
    Build a FastAPI dependency that authenticates the caller and checks their role.

    Checks run in a fixed order, each with its own response:
    1. No bearer token in the Authorization header -> 401 "Access token required"
    2. Token fails verification (signature, expiry, garbage) -> 403 `invalid`
    3. Token role not in `roles` -> 403 `denied`

    With no `roles` any authenticated caller is accepted.

    Args:
        roles: Roles allowed to call the endpoint
        denied: Message returned when the role does not match
        invalid: Message returned when the token cannot be verified

    Returns:
        An async dependency yielding the verified TokenClaims.

    Usage:
        admin_only = require_role(Role.ADMIN, denied="Admin access required",
                                  invalid="Admin access required")

        @router.get("/admin/users")
        async def list_users(claims: TokenClaims = Depends(admin_only)):
            ...
    """
    allowed = frozenset(roles)

    async def dependency(authorization: str | None = Header(default=None)) -> TokenClaims:
        # "Bearer <token>": the token is the second space-separated segment
        parts = (authorization or "").split(" ")
        token = parts[1] if len(parts) > 1 else ""
        if not token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=ACCESS_TOKEN_REQUIRED)

        claims = verify_access_token(token)
        if claims is None:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=invalid)

        if allowed and claims["role"] not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=denied)
        return claims

    return dependency


# Guards shared by the routers. Message texts are part of the API contract.
require_authenticated = require_role(invalid="Invalid token")
require_password_change = require_role(invalid="Invalid or expired token")
require_admin = require_role(Role.ADMIN, denied="Admin access required", invalid="Admin access required")
require_rater = require_role(
    Role.USER, denied="Only users can submit ratings", invalid="Only users can submit ratings"
)
require_store_owner = require_role(
    Role.STORE_OWNER, denied="Store owner access required", invalid="Store owner access required"
)
require_store_owner_analytics = require_role(Role.STORE_OWNER, denied="Unauthorized", invalid="Unauthorized")
