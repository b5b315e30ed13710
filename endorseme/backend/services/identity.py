"""
Identity Service.

Resolves who the current user is and manages the login session lifecycle.

Resolution order, first match wins:
    1. the user held by the stored session created on login
    2. the user of the Telegram WebApp init data sent by the host

Neither source is cryptographically verified.
"""

from endorseme.backend.core.exceptions import ConfigurationError, ValidationError
from endorseme.backend.core.logging import get_logger
from endorseme.backend.core.session import SessionContext, SessionStore, get_session_store
from endorseme.backend.models.activity_log import ActivityStatus, EventType
from endorseme.backend.schemas.auth import TelegramUser
from endorseme.backend.services.activity import ActivityLogService
from endorseme.telegram.webapp import parse_host_identity

logger = get_logger(__name__)

WEBAPP_UNAVAILABLE_MESSAGE = (
    "Telegram WebApp is not available. Please open this app through Telegram."
)
BOT_CONFIG_MISSING_MESSAGE = (
    "Telegram bot configuration is missing. Please set TELEGRAM_BOT_USERNAME."
)


class IdentityService:
    """
    Session/identity resolver.

    Args:
        activity: Audit writer
        store: Session registry. Defaults to the process-wide store.
        webapp_identity_enabled: Accept WebApp host identity. Defaults to
            the webapp_identity_enabled feature flag.
    """

    def __init__(
        self,
        activity: ActivityLogService,
        store: SessionStore | None = None,
        webapp_identity_enabled: bool | None = None,
    ) -> None:
        self._activity = activity
        self._store = store if store is not None else get_session_store()
        if webapp_identity_enabled is None:
            from endorseme.backend.core.config import get_app_config

            webapp_identity_enabled = get_app_config().features.webapp_identity_enabled
        self._webapp_identity_enabled = webapp_identity_enabled

    @property
    def store(self) -> SessionStore:
        return self._store

    def login(self, user: TelegramUser) -> SessionContext:
        """Create and store a session for a user returned by the login widget."""
        session = self._store.create(user)
        logger.info(
            "User logged in",
            extra={"user_id": user.id, "username": user.username},
        )
        return session

    def get_current_user(
        self,
        session: SessionContext | None,
        init_data: str | None = None,
    ) -> TelegramUser | None:
        """
        Resolve the current user.

        A WebApp identity match schedules an AUTH/GET_CURRENT_USER audit
        entry without waiting for it.
        """
        if session is not None and session.user is not None:
            return session.user

        if not self._webapp_identity_enabled:
            return None

        user = parse_host_identity(init_data)
        if user is not None:
            self._activity.log_activity_nowait(
                EventType.AUTH,
                "GET_CURRENT_USER",
                details={"source": "webapp", "username": user.username},
                user_id=user.id,
            )
        return user

    def resolve_session(
        self,
        session: SessionContext | None,
        init_data: str | None = None,
    ) -> SessionContext | None:
        """
        Session to run a workflow in.

        The stored session when it has a user; otherwise an unstored context
        around the WebApp identity; otherwise None.
        """
        if session is not None and session.user is not None:
            return session

        user = self.get_current_user(session, init_data)
        if user is None:
            return None
        return SessionContext(session_id=f"webapp:{user.id}", user=user, persistent=False)

    async def handle_logout(self, session: SessionContext | None) -> None:
        """
        Drop the session.

        AUTH/LOGOUT is recorded only when a user was logged in. Unexpected
        failures are recorded as ERROR/LOGOUT and re-raised.
        """
        user = session.user if session is not None else None
        try:
            if session is not None:
                if session.persistent:
                    self._store.discard(session.session_id)
                session.clear()
            if user is not None:
                await self._activity.log_activity(
                    EventType.AUTH,
                    "LOGOUT",
                    details={"username": user.username},
                    user_id=user.id,
                )
                logger.info("User logged out", extra={"user_id": user.id})
        except Exception as e:
            logger.exception("Logout failed", extra={"error": str(e)})
            await self._activity.log_activity(
                EventType.ERROR,
                "LOGOUT",
                details={"error": str(e)},
                status=ActivityStatus.ERROR,
                user_id=user.id if user is not None else None,
            )
            raise

    async def init_webapp(self, init_data: str | None, bot_username: str | None) -> TelegramUser | None:
        """
        Initialize a session opened inside the Telegram WebApp host.

        Returns:
            The host identity, if the init data carries one

        Raises:
            ValidationError: No WebApp init data
            ConfigurationError: No bot username configured
        """
        try:
            if not init_data:
                raise ValidationError(WEBAPP_UNAVAILABLE_MESSAGE)
            if not bot_username:
                raise ConfigurationError(
                    BOT_CONFIG_MISSING_MESSAGE,
                    missing_vars=["TELEGRAM_BOT_USERNAME"],
                )
            user = parse_host_identity(init_data)
        except Exception as e:
            await self._activity.log_activity(
                EventType.ERROR,
                "INIT_WEBAPP",
                details={"error": str(e), "bot_username": bot_username},
                status=ActivityStatus.ERROR,
            )
            raise

        await self._activity.log_activity(
            EventType.SYSTEM,
            "INIT_WEBAPP",
            details={"bot_username": bot_username, "has_user": user is not None},
            user_id=user.id if user is not None else None,
        )
        return user
