"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from notevault.core.database import get_db_session
from notevault.core.exceptions import AuthenticationError
from notevault.core.logging import get_logger
from notevault.core.security import owner_id_from_token

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """Extract or generate request ID from headers."""
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_owner_id(
    authorization: str | None = Header(None),
) -> str:
    """
    Resolve the authenticated user id from the Authorization header.

    Raises:
        AuthenticationError: When no bearer token is present or it is invalid
    """
    if not authorization:
        raise AuthenticationError()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Bearer token required")

    return owner_id_from_token(token.strip())


OwnerId = Annotated[str, Depends(get_current_owner_id)]
