"""
FastAPI Dependencies.

Shared dependencies for request handling: database session, request id,
session resolution and service wiring.
"""

import uuid
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from endorseme.backend.core.config import get_app_config
from endorseme.backend.core.database import get_db_session
from endorseme.backend.core.environment import require_telegram_env
from endorseme.backend.core.exceptions import NotAuthenticatedError
from endorseme.backend.core.logging import get_logger
from endorseme.backend.core.security import decode_session_token
from endorseme.backend.core.session import SessionContext
from endorseme.backend.services.activity import ActivityLogService
from endorseme.backend.services.endorsement import EndorsementService
from endorseme.backend.services.identity import IdentityService
from endorseme.backend.services.workflow import EndorsementWorkflow
from endorseme.telegram.services.notifications import NotificationService

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """Extract or generate request ID from headers."""
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


@lru_cache
def get_activity_service() -> ActivityLogService:
    """Process-wide audit writer."""
    return ActivityLogService()


@lru_cache
def get_identity_service() -> IdentityService:
    """Process-wide identity resolver over the shared session store."""
    return IdentityService(get_activity_service())


Activity = Annotated[ActivityLogService, Depends(get_activity_service)]
Identity = Annotated[IdentityService, Depends(get_identity_service)]


async def get_init_data(
    x_telegram_init_data: str | None = Header(None),
) -> str | None:
    """Raw Telegram WebApp init data forwarded by the client."""
    return x_telegram_init_data or None


InitData = Annotated[str | None, Depends(get_init_data)]


def _session_token(request: Request) -> str | None:
    cookie_name = get_app_config().application.session.cookie_name
    token = request.cookies.get(cookie_name)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def get_session_context(request: Request, identity: Identity) -> SessionContext | None:
    """
    Stored session referenced by the request's token, if any.

    Invalid, expired or unknown tokens resolve to no session.
    """
    token = _session_token(request)
    if not token:
        return None
    try:
        session_id = decode_session_token(token)
    except NotAuthenticatedError:
        return None
    return identity.store.get(session_id)


OptionalSession = Annotated[SessionContext | None, Depends(get_session_context)]


async def require_session(
    session: OptionalSession,
    init_data: InitData,
    identity: Identity,
) -> SessionContext:
    """
    Session with a resolved user.

    Raises:
        NotAuthenticatedError: If neither a login session nor a WebApp identity exists
    """
    resolved = identity.resolve_session(session, init_data)
    if resolved is None:
        raise NotAuthenticatedError()
    return resolved


CurrentSession = Annotated[SessionContext, Depends(require_session)]


async def telegram_env_required() -> None:
    """Reject the request with ConfigurationError when Telegram settings are missing."""
    require_telegram_env()


async def get_workflow(db: DbSession, activity: Activity) -> EndorsementWorkflow:
    return EndorsementWorkflow(
        EndorsementService(db),
        NotificationService(activity),
    )


Workflow = Annotated[EndorsementWorkflow, Depends(get_workflow)]
