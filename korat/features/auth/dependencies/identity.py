from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from korat.features.auth.utils.security import decode_access_token
from korat.platform.exceptions import AuthError

security = HTTPBearer(auto_error=False)


def resolve_identity(token: str) -> str:
    """
    Resolve the caller's user id from a bearer credential, or fail.

    Raises:
        AuthError: If the token is expired, malformed or has no subject
    """
    try:
        payload = decode_access_token(token)
    except ValueError as e:
        raise AuthError(f"Unauthorized: {e}")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Unauthorized: invalid authentication credentials")
    return str(user_id)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Dependency returning the authenticated caller's user id."""
    if credentials is None:
        raise AuthError("Unauthorized: missing authorization header")
    return resolve_identity(credentials.credentials)
