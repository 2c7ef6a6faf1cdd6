"""Optional HTTP Basic authentication for the API."""

import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from superpowers.config import Settings, get_settings

logger = logging.getLogger(__name__)

security = HTTPBasic(auto_error=False)


def require_basic_auth(
    credentials: HTTPBasicCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject requests without valid credentials when auth is configured."""
    if not settings.auth_enabled:
        return

    if credentials is not None:
        user_ok = secrets.compare_digest(
            credentials.username.encode(), settings.basic_auth_user.encode()
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode(), settings.basic_auth_password.encode()
        )
        if user_ok and password_ok:
            return
        logger.warning("Rejected credentials for user %r", credentials.username)

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Basic"},
    )
