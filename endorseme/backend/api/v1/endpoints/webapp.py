"""
WebApp API Endpoints.
"""

from fastapi import APIRouter, Depends, Response

from endorseme.backend.api.v1.endpoints.auth import set_session_cookie
from endorseme.backend.core.config import get_settings
from endorseme.backend.core.dependencies import (
    Identity,
    InitData,
    OptionalSession,
    RequestId,
    telegram_env_required,
)
from endorseme.backend.core.security import create_session_token
from endorseme.backend.schemas.auth import WebAppInitResponse
from endorseme.backend.schemas.base import ApiResponse, ResponseMetadata

router = APIRouter()


@router.post(
    "/init",
    response_model=ApiResponse[WebAppInitResponse],
    dependencies=[Depends(telegram_env_required)],
    summary="Initialize a session opened inside Telegram",
)
async def init_webapp(
    init_data: InitData,
    session: OptionalSession,
    response: Response,
    identity: Identity,
    request_id: RequestId,
) -> ApiResponse[WebAppInitResponse]:
    """
    Record the WebApp start and, when the host supplies a user, open a
    login session for it so the page can reload into the main screen.

    A live session of the same user is reused instead of opening another.
    """
    user = await identity.init_webapp(init_data, get_settings().telegram_bot_username)
    reload = False
    if user is not None:
        if session is None or session.user is None or session.user.id != user.id:
            session = identity.login(user)
            set_session_cookie(response, create_session_token(session.session_id))
        reload = True
    return ApiResponse(
        data=WebAppInitResponse(user=user, reload=reload),
        metadata=ResponseMetadata(request_id=request_id),
    )
