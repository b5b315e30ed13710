"""
Page Routes.

Serves the single-page client: configuration error, login or main screen,
chosen on every load. Logout is a form POST that clears the session and
redirects home, which is the client's full reload.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from endorseme.backend.api.v1.endpoints.auth import delete_session_cookie
from endorseme.backend.core.config import get_app_config, get_settings
from endorseme.backend.core.dependencies import Identity, OptionalSession
from endorseme.backend.core.environment import validate_telegram_env
from endorseme.backend.core.logging import get_logger
from endorseme.frontend import views

router = APIRouter()
logger = get_logger(__name__)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(request: Request, session: OptionalSession) -> HTMLResponse:
    app_name = get_app_config().application.name
    env = validate_telegram_env()
    if not env.is_valid:
        logger.warning("Serving configuration error screen", extra={"missing_vars": env.missing_vars})
        return views.render_config_error(request, env.missing_vars)

    if session is None or session.user is None:
        return views.render_login(request, app_name, get_settings().telegram_bot_username)

    return views.render_main(request, app_name, session.user, session.state)


@router.post("/logout", include_in_schema=False)
async def logout(session: OptionalSession, identity: Identity) -> RedirectResponse:
    await identity.handle_logout(session)
    redirect = RedirectResponse(url="/", status_code=303)
    delete_session_cookie(redirect)
    return redirect
