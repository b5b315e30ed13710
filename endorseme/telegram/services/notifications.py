"""
Notification Service.

Sends the /endorse and /check bot commands through the Telegram Bot API.
The message goes to the chat of the current user, so the bot acts on the
user's own conversation.

Usage:
    service = NotificationService(activity_service)
    result = await service.send_bot_command(BotCommand.ENDORSE, "@alice", user)
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from aiogram.exceptions import TelegramAPIError

from endorseme.backend.core.exceptions import NotAuthenticatedError, NotificationSendError
from endorseme.backend.core.logging import get_logger, log_with_source
from endorseme.backend.core.utils import normalize_username, utc_now
from endorseme.backend.models.activity_log import ActivityStatus, EventType
from endorseme.backend.schemas.auth import TelegramUser
from endorseme.backend.services.activity import ActivityLogService

logger = get_logger(__name__)

SEND_COMMAND_ACTION = "SEND_COMMAND"


class BotCommand(str, Enum):
    ENDORSE = "/endorse"
    CHECK = "/check"


@dataclass
class NotificationResult:
    """Result of a successful send."""

    user_id: int
    text: str
    message_id: int | None = None
    timestamp: datetime = field(default_factory=utc_now)


def format_command_message(
    command: BotCommand,
    username: str,
    category: str | None = None,
    note: str | None = None,
    include_details: bool = False,
) -> str:
    """
    Build the command text.

    Only "/endorse" carries details, and only when include_details is set:

        /endorse @alice [Services] - note
    """
    text = f"{BotCommand(command).value} {normalize_username(username)}"
    if include_details and BotCommand(command) is BotCommand.ENDORSE:
        if category:
            text += f" [{category}]"
        if note:
            text += f" - {note}"
    return text


class NotificationService:
    """
    Bot command sender.

    Args:
        activity: Audit writer for send outcomes
        include_details: Append category and note to /endorse. Defaults to
            the notification_include_details feature flag.
    """

    def __init__(
        self,
        activity: ActivityLogService,
        include_details: bool | None = None,
    ) -> None:
        self._activity = activity
        if include_details is None:
            from endorseme.backend.core.config import get_app_config

            include_details = get_app_config().features.notification_include_details
        self._include_details = include_details

    async def send_bot_command(
        self,
        command: BotCommand,
        username: str,
        user: TelegramUser | None,
        category: str | None = None,
        note: str | None = None,
    ) -> NotificationResult:
        """
        Send a bot command to the current user's chat.

        Raises:
            NotAuthenticatedError: If there is no current user
            NotificationSendError: If the Bot API rejects the call
        """
        from endorseme.telegram.bot import get_bot

        command = BotCommand(command)
        if user is None:
            await self._activity.log_activity(
                EventType.ERROR,
                SEND_COMMAND_ACTION,
                details={
                    "error": NotAuthenticatedError().message,
                    "command": command.value,
                    "username": username,
                },
                status=ActivityStatus.ERROR,
            )
            raise NotAuthenticatedError()

        text = format_command_message(
            command, username, category, note, include_details=self._include_details
        )
        details = {
            "command": command.value,
            "username": normalize_username(username),
            "category": category,
            "note": note,
            "sender": user.username or str(user.id),
        }

        try:
            message = await get_bot().send_message(chat_id=user.id, text=text)
        except TelegramAPIError as e:
            log_with_source(
                logger,
                "telegram",
                "error",
                "Bot command failed",
                command=command.value,
                user_id=user.id,
                error=e.message,
            )
            await self._activity.log_activity(
                EventType.ERROR,
                SEND_COMMAND_ACTION,
                details={**details, "error": e.message},
                status=ActivityStatus.ERROR,
                user_id=user.id,
            )
            raise NotificationSendError(e.message) from e

        log_with_source(
            logger,
            "telegram",
            "info",
            "Bot command sent",
            command=command.value,
            user_id=user.id,
            message_id=message.message_id,
        )
        await self._activity.log_activity(
            EventType.API_CALL,
            SEND_COMMAND_ACTION,
            details={**details, "message_id": message.message_id},
            user_id=user.id,
        )
        return NotificationResult(user_id=user.id, text=text, message_id=message.message_id)
