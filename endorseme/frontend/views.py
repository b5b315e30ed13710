"""
Server-rendered screens.

Three screens: configuration error, login, and the main endorsement form,
rendered from the Jinja2 templates next to this module. The main screen
talks to /api/v1 with fetch; inside Telegram it forwards the WebApp init
data in the X-Telegram-Init-Data header.
"""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from endorseme.backend.core.session import WorkflowState
from endorseme.backend.schemas.auth import TelegramUser
from endorseme.backend.schemas.endorsement import ENDORSEMENT_CATEGORIES, TRUST_LEVELS
from endorseme.telegram.webapp import LOGIN_WIDGET_SRC, WEBAPP_SCRIPT_SRC

TEMPLATES_DIR = Path(__file__).parent / "templates"

ABOUT_TEXT = (
    "Endorse Me is a decentralized social trust platform that allows you to build "
    "and verify your reputation through peer endorsements. Using our Telegram bot, "
    "you can easily endorse others and track trust scores across the community."
)
LEARN_MORE_URL = "https://endorse-me.com"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["webapp_script_src"] = WEBAPP_SCRIPT_SRC


def render_config_error(request: Request, missing_vars: list[str]) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "config_error.html",
        {"missing_vars": missing_vars},
        status_code=503,
    )


def render_login(request: Request, app_name: str, bot_username: str) -> HTMLResponse:
    """Login screen with the Telegram Login Widget in redirect mode."""
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "app_name": app_name,
            "bot_username": bot_username,
            "bot_login": bot_username.lstrip("@"),
            "login_widget_src": LOGIN_WIDGET_SRC,
        },
    )


def render_main(
    request: Request,
    app_name: str,
    user: TelegramUser,
    state: WorkflowState,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "main.html",
        {
            "app_name": app_name,
            "user": user,
            "state": state,
            "categories": ENDORSEMENT_CATEGORIES,
            "trust_levels": TRUST_LEVELS,
            "about_text": ABOUT_TEXT,
            "learn_more_url": LEARN_MORE_URL,
        },
    )
