"""
Auth API Endpoints.

Login from the Telegram Login Widget, current user and logout.
Widget payloads are accepted without hash verification.
"""

from fastapi import APIRouter, Query, Response
from fastapi.responses import RedirectResponse

from endorseme.backend.core.config import get_app_config
from endorseme.backend.core.dependencies import Identity, InitData, OptionalSession, RequestId
from endorseme.backend.core.security import create_session_token
from endorseme.backend.schemas.auth import LoginResponse, LogoutResponse, TelegramUser
from endorseme.backend.schemas.base import ApiResponse, ResponseMetadata

router = APIRouter()


def set_session_cookie(response: Response, token: str) -> None:
    session_config = get_app_config().application.session
    response.set_cookie(
        key=session_config.cookie_name,
        value=token,
        httponly=True,
        secure=session_config.cookie_secure,
        samesite="lax",
        max_age=get_app_config().security.jwt.access_token_expire_minutes * 60,
    )


def delete_session_cookie(response: Response) -> None:
    response.delete_cookie(get_app_config().application.session.cookie_name)


@router.post(
    "/telegram",
    response_model=ApiResponse[LoginResponse],
    summary="Log in with a Telegram Login Widget payload",
)
async def login(
    user: TelegramUser,
    response: Response,
    identity: Identity,
    request_id: RequestId,
) -> ApiResponse[LoginResponse]:
    session = identity.login(user)
    token = create_session_token(session.session_id)
    set_session_cookie(response, token)
    return ApiResponse(
        data=LoginResponse(user=user, token=token),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/telegram/callback",
    summary="Login Widget redirect target",
    response_class=RedirectResponse,
)
async def login_callback(
    identity: Identity,
    id: int = Query(...),
    first_name: str = Query(""),
    last_name: str | None = Query(None),
    username: str | None = Query(None),
    photo_url: str | None = Query(None),
    auth_date: int | None = Query(None),
    hash: str | None = Query(None),
) -> RedirectResponse:
    """Create the session, then reload the app."""
    user = TelegramUser(
        id=id,
        first_name=first_name,
        last_name=last_name,
        username=username,
        photo_url=photo_url,
        auth_date=auth_date,
        hash=hash,
    )
    session = identity.login(user)
    redirect = RedirectResponse(url="/", status_code=303)
    set_session_cookie(redirect, create_session_token(session.session_id))
    return redirect


@router.get(
    "/me",
    response_model=ApiResponse[TelegramUser | None],
    summary="Current user",
)
async def me(
    session: OptionalSession,
    init_data: InitData,
    identity: Identity,
    request_id: RequestId,
) -> ApiResponse[TelegramUser | None]:
    return ApiResponse(
        data=identity.get_current_user(session, init_data),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/logout",
    response_model=ApiResponse[LogoutResponse],
    summary="Log out and tell the client to reload",
)
async def logout(
    session: OptionalSession,
    response: Response,
    identity: Identity,
    request_id: RequestId,
) -> ApiResponse[LogoutResponse]:
    await identity.handle_logout(session)
    delete_session_cookie(response)
    return ApiResponse(
        data=LogoutResponse(reload=True),
        metadata=ResponseMetadata(request_id=request_id),
    )
