"""Bearer-token gate for the dashboard routes."""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wellpredict import config

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"

_bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str:
    """Return the user owning the bearer token.

    With no tokens configured the gate is open and every caller is
    ``ANONYMOUS_USER``.
    """
    tokens = config.API_TOKENS
    if not tokens:
        return ANONYMOUS_USER

    if credentials is None or credentials.credentials not in tokens:
        logger.warning("Rejected request with missing or unknown token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return tokens[credentials.credentials]
