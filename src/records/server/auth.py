from __future__ import annotations

import secrets
from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..settings import ServerSettings

_security = HTTPBasic(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )


# PUBLIC_INTERFACE
def get_basic_auth_dependency(settings: ServerSettings) -> Callable:
    """
    Return a FastAPI dependency that enforces HTTP Basic Auth only when
    settings.enable_basic_auth is set. When disabled, the dependency is a no-op.

    Usage:
        router = APIRouter(dependencies=[Depends(get_basic_auth_dependency(settings))])
    """
    if not settings.enable_basic_auth:
        async def _noop() -> None:
            return None

        return _noop

    expected_user: Optional[str] = settings.basic_auth_username
    expected_pass: Optional[str] = settings.basic_auth_password

    async def _enforce(creds: Optional[HTTPBasicCredentials] = Depends(_security)) -> None:
        """
        Raises:
            HTTPException(401) if credentials are missing, invalid, or not configured.
        """
        if creds is None:
            raise _unauthorized("Not authenticated")
        if expected_user is None or expected_pass is None:
            raise _unauthorized("Server authentication not configured")
        user_ok = secrets.compare_digest(creds.username, expected_user)
        pass_ok = secrets.compare_digest(creds.password, expected_pass)
        if not (user_ok and pass_ok):
            raise _unauthorized("Invalid authentication credentials")

    return _enforce
