"""FastAPI dependencies: get_caller_identity, require_owner.

Usage in any protected router:
    from src.ct_gateway.auth.dependencies import get_caller_identity

    @router.post("/protected")
    async def protected(caller: str = Depends(get_caller_identity)):
        ...

Whether the caller is an *authorized detector* is the ledger's decision, not
the gateway's: a valid token only establishes who is calling.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from config.settings import settings
from src.ct_common.errors import InvalidCredentialsError, NotOwnerError
from src.ct_gateway.auth.jwt_handler import decode_token

# tokenUrl is informational only (Swagger "Authorize" button); tokens come from /admin/tokens
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/admin/tokens")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_caller_identity(token: str = Depends(oauth2_scheme)) -> str:
    """Return the lowercase identity from a valid Bearer token, else HTTP 401."""
    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None
    return payload["sub"].lower()


async def require_owner(caller: str = Depends(get_caller_identity)) -> str:
    """Verify the caller is the ledger owner (HTTP 403, code 2003 otherwise)."""
    if caller != settings.OWNER_ID.lower():
        raise NotOwnerError(caller)
    return caller
