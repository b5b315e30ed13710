"""
Telegram Environment Validation.

Checks that the settings the Telegram integration cannot run without are
present. The result gates the whole UI: a failed check renders the
configuration-error screen and makes the API answer with ConfigurationError.
"""

from dataclasses import dataclass, field

from endorseme.backend.core.config import Settings, get_settings
from endorseme.backend.core.exceptions import ConfigurationError

# Checked in this order; missing names are reported in the same order.
REQUIRED_TELEGRAM_VARS: tuple[tuple[str, str], ...] = (
    ("TELEGRAM_BOT_TOKEN", "telegram_bot_token"),
    ("TELEGRAM_BOT_USERNAME", "telegram_bot_username"),
    ("TELEGRAM_WEBAPP_URL", "telegram_webapp_url"),
)


@dataclass(frozen=True)
class EnvValidationResult:
    """Outcome of validate_telegram_env()."""

    is_valid: bool
    missing_vars: list[str] = field(default_factory=list)


def validate_telegram_env(settings: Settings | None = None) -> EnvValidationResult:
    """
    Report which required Telegram settings are missing.

    Args:
        settings: Settings to check. Defaults to the cached application settings.

    Returns:
        EnvValidationResult with the missing variable names in check order
    """
    settings = settings if settings is not None else get_settings()
    missing_vars = [
        env_name
        for env_name, attr in REQUIRED_TELEGRAM_VARS
        if not (getattr(settings, attr, "") or "").strip()
    ]
    return EnvValidationResult(is_valid=not missing_vars, missing_vars=missing_vars)


def require_telegram_env(settings: Settings | None = None) -> None:
    """
    Raise ConfigurationError unless all required Telegram settings are set.

    Raises:
        ConfigurationError: Listing the missing variable names
    """
    result = validate_telegram_env(settings)
    if not result.is_valid:
        raise ConfigurationError(
            f"Missing environment variables: {', '.join(result.missing_vars)}",
            missing_vars=result.missing_vars,
        )
