"""
Homebase Backend: Caller Identity
=================================

What:  FastAPI dependency that turns an `Authorization: Bearer <jwt>` header
       into an `AuthContext` carrying the caller's numeric user id.
How:   The token is verified with python-jose (signature + expiry) using the
       configured secret and algorithm. The id is read from the `userId` claim.
Who:   Every properties and movies route declares `CurrentUser` in its
       signature, so a request without a valid identity is answered 401
       before the handler body or any query runs.

Token issuance is handled by the login service, not here.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from homebase.config import settings
from homebase.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

USER_ID_CLAIM = "userId"

# auto_error=False: a missing header reaches our dependency so the response
# uses our 401 error body instead of FastAPI's default 403.
bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="JWT access token carrying a numeric userId claim",
    auto_error=False,
)


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller, threaded explicitly into handlers."""
    user_id: int


def _parse_user_id(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    try:
        user_id = int(raw)
    except (TypeError, ValueError):
        return None
    # Reject 12.7 and friends rather than truncating them into someone else's id
    if isinstance(raw, float) and raw != user_id:
        return None
    return user_id if user_id > 0 else None


def decode_token(token: str) -> AuthContext:
    """
    Verifies a bearer token and extracts the caller.

    Raises:
        AuthenticationError: expired, malformed, badly signed, or no usable userId
    """
    try:
        payload = jwt.decode(
            token,
            settings.token_secret,
            algorithms=[settings.token_algorithm],
        )
    except ExpiredSignatureError:
        raise AuthenticationError(message="Token has expired")
    except JWTError as e:
        logger.warning("Rejected bearer token: %s", str(e))
        raise AuthenticationError(message="Invalid authentication token")

    user_id = _parse_user_id(payload.get(USER_ID_CLAIM))
    if user_id is None:
        logger.warning("Bearer token has no valid %s claim: %r", USER_ID_CLAIM, payload.get(USER_ID_CLAIM))
        raise AuthenticationError(message="Invalid authentication token")

    return AuthContext(user_id=user_id)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthContext:
    """Dependency: resolves the caller or raises a 401."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return decode_token(credentials.credentials)


CurrentUser = Annotated[AuthContext, Depends(get_current_user)]
