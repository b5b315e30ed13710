"""
Endorsement Workflow.

Orchestrates the two user-facing workflows on a SessionContext:

    endorse: Idle -> Validating -> Persisting -> Notifying -> Done
    check:   Idle -> Validating -> Querying   -> Notifying -> Done

Both follow the same shape: clear status, set busy, validate, run the
ordered calls, set success or error, clear busy. Errors never escape;
they end up in session.state.error / error_code.

The endorsement is committed before the bot is notified. A notification
failure leaves it stored and is reported as the workflow error.
"""

from endorseme.backend.core.exceptions import ApplicationError, ValidationError
from endorseme.backend.core.logging import get_logger
from endorseme.backend.core.session import SessionContext, WorkflowPhase, WorkflowState
from endorseme.backend.core.utils import normalize_username
from endorseme.backend.models.endorsement import MAX_TRUST_LEVEL, MIN_TRUST_LEVEL
from endorseme.backend.schemas.endorsement import ENDORSEMENT_CATEGORIES, EndorsementHistoryItem
from endorseme.backend.services.endorsement import EndorsementService
from endorseme.telegram.services.notifications import BotCommand, NotificationService

logger = get_logger(__name__)

EMPTY_TARGET_MESSAGE = "Please enter a valid Telegram username"
NO_USERNAME_MESSAGE = "You must be logged in with a username to endorse users"
INVALID_TRUST_LEVEL_MESSAGE = "Please select a valid trust level"
INVALID_CATEGORY_MESSAGE = "Please select a valid category"
GENERIC_ERROR_MESSAGE = "An error occurred"


def _require_target(state: WorkflowState) -> str:
    if not state.telegram_id.strip():
        raise ValidationError(EMPTY_TARGET_MESSAGE, details={"field": "telegram_id"})
    return normalize_username(state.telegram_id)


def _parse_trust_level(value: str) -> int:
    try:
        level = int(str(value).strip())
    except ValueError:
        raise ValidationError(INVALID_TRUST_LEVEL_MESSAGE, details={"field": "trust_level"}) from None
    if not MIN_TRUST_LEVEL <= level <= MAX_TRUST_LEVEL:
        raise ValidationError(INVALID_TRUST_LEVEL_MESSAGE, details={"field": "trust_level"})
    return level


class EndorsementWorkflow:
    """Workflow orchestrator over the persistence and notification clients."""

    def __init__(
        self,
        endorsements: EndorsementService,
        notifications: NotificationService,
    ) -> None:
        self._endorsements = endorsements
        self._notifications = notifications

    def _begin(self, state: WorkflowState) -> None:
        state.clear_status()
        state.busy = True
        state.phase = WorkflowPhase.VALIDATING

    def _fail(self, state: WorkflowState, error: Exception, workflow: str) -> None:
        if isinstance(error, ApplicationError):
            state.error = error.message
            state.error_code = error.code
            logger.warning(
                "Workflow failed",
                extra={"workflow": workflow, "code": error.code, "error": error.message},
            )
        else:
            logger.exception("Workflow crashed", extra={"workflow": workflow})
            state.error = GENERIC_ERROR_MESSAGE
            state.error_code = "SYS_INTERNAL_ERROR"

    async def endorse(self, session: SessionContext) -> WorkflowState:
        """
        Persist an endorsement of state.telegram_id, then send /endorse.

        On success the form inputs reset and the category stays selected.
        """
        state = session.state
        self._begin(state)
        try:
            username = _require_target(state)
            user = session.user
            if user is None or not user.username:
                raise ValidationError(NO_USERNAME_MESSAGE)
            trust_level = _parse_trust_level(state.trust_level)
            if state.category not in ENDORSEMENT_CATEGORIES:
                raise ValidationError(INVALID_CATEGORY_MESSAGE, details={"field": "category"})
            note = state.note.strip()

            state.phase = WorkflowPhase.PERSISTING
            await self._endorsements.create_endorsement(
                username,
                state.category,
                note or None,
                user.username,
                trust_level,
            )

            state.phase = WorkflowPhase.NOTIFYING
            await self._notifications.send_bot_command(
                BotCommand.ENDORSE,
                username,
                user,
                category=state.category,
                note=f"{note} [Trust Level: {trust_level}]",
            )

            state.success = f"Endorsement request sent for {username} with Trust Level {trust_level}"
            state.reset_inputs()
        except Exception as e:
            self._fail(state, e, "endorse")
        finally:
            state.busy = False
            state.phase = WorkflowPhase.DONE
        return state

    async def check(self, session: SessionContext) -> WorkflowState:
        """
        Load the endorsements of state.telegram_id, then send /check.

        An empty target leaves the displayed list as it was. Any later
        failure clears it, including a notification failure after a
        successful read.
        """
        state = session.state
        self._begin(state)
        try:
            username = _require_target(state)
        except ValidationError as e:
            self._fail(state, e, "check")
            state.busy = False
            state.phase = WorkflowPhase.DONE
            return state

        try:
            state.phase = WorkflowPhase.QUERYING
            endorsements = await self._endorsements.get_endorsements(username)
            state.endorsements = [
                EndorsementHistoryItem.model_validate(e) for e in endorsements
            ]

            state.phase = WorkflowPhase.NOTIFYING
            await self._notifications.send_bot_command(BotCommand.CHECK, username, session.user)

            state.success = f"Retrieved endorsements for {username}"
        except Exception as e:
            state.endorsements = []
            self._fail(state, e, "check")
        finally:
            state.busy = False
            state.phase = WorkflowPhase.DONE
        return state
