"""
Bot Configuration.

Creates the aiogram Bot used for outgoing messages.
Uses lazy initialization to prevent import-time failures.
"""

from typing import TYPE_CHECKING

from endorseme.backend.core.exceptions import ConfigurationError
from endorseme.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

if TYPE_CHECKING:
    from aiogram import Bot

_bot: "Bot | None" = None


def create_bot() -> "Bot":
    """
    Create the aiogram Bot instance.

    Messages go out as plain text; no default parse mode is set.

    Raises:
        ConfigurationError: If TELEGRAM_BOT_TOKEN is missing or malformed
    """
    from aiogram import Bot
    from aiogram.utils.token import TokenValidationError

    from endorseme.backend.core.config import get_settings

    token = get_settings().telegram_bot_token.strip()
    if not token:
        raise ConfigurationError(
            "TELEGRAM_BOT_TOKEN not configured. "
            "Set TELEGRAM_BOT_TOKEN environment variable or configure it in config/.env",
            missing_vars=["TELEGRAM_BOT_TOKEN"],
        )

    try:
        bot = Bot(token=token)
    except TokenValidationError as e:
        raise ConfigurationError(f"Invalid TELEGRAM_BOT_TOKEN: {e}") from e

    log_with_source(logger, "telegram", "info", "Telegram bot created")
    return bot


def get_bot() -> "Bot":
    """Get or create the Bot instance."""
    global _bot
    if _bot is None:
        _bot = create_bot()
    return _bot


async def cleanup_bot() -> None:
    """Close the bot's HTTP session on shutdown, if a bot was created."""
    global _bot
    if _bot is None:
        return
    await _bot.session.close()
    _bot = None
    log_with_source(logger, "telegram", "info", "Bot session closed")
