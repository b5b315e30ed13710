"""
Telegram WebApp and Login Widget helpers.

Host identity is read from the WebApp init data string without checking its
signature. The login widget (see frontend/templates/login.html) is used in
redirect mode so the browser lands on an explicit callback route instead of
a global JS callback.
"""

from aiogram.utils.web_app import parse_webapp_init_data

from endorseme.backend.core.logging import get_logger, log_with_source
from endorseme.backend.schemas.auth import TelegramUser

logger = get_logger(__name__)

LOGIN_WIDGET_SRC = "https://telegram.org/js/telegram-widget.js?22"
WEBAPP_SCRIPT_SRC = "https://telegram.org/js/telegram-web-app.js"


def parse_host_identity(init_data: str | None) -> TelegramUser | None:
    """
    Extract the user from WebApp init data.

    Returns None when there is no init data, no user in it, or it does not
    parse.
    """
    if not init_data:
        return None

    try:
        data = parse_webapp_init_data(init_data)
    except ValueError as e:
        log_with_source(
            logger,
            "webapp",
            "warning",
            "Malformed WebApp init data",
            error=str(e),
        )
        return None

    if data.user is None:
        return None

    return TelegramUser(
        id=data.user.id,
        first_name=data.user.first_name,
        last_name=data.user.last_name,
        username=data.user.username,
        photo_url=data.user.photo_url,
    )
