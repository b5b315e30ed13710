"""
Telegram Bot Services.

Services for sending bot commands via Telegram.
"""

from endorseme.telegram.services.notifications import (
    BotCommand,
    NotificationResult,
    NotificationService,
    format_command_message,
)

__all__ = [
    "BotCommand",
    "NotificationResult",
    "NotificationService",
    "format_command_message",
]
