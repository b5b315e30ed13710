"""
Auth Schemas.

Telegram identity as delivered by the Login Widget or the WebApp host.
Payloads are accepted as-is; their hash is carried but never verified.
"""

from pydantic import BaseModel, ConfigDict, Field


class TelegramUser(BaseModel):
    """Telegram user identity."""

    id: int = Field(..., description="Telegram user id, also the chat id for bot messages")
    first_name: str = ""
    last_name: str | None = None
    username: str | None = None
    photo_url: str | None = None
    auth_date: int | None = None
    hash: str | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part) or (
            self.username or str(self.id)
        )


class LogoutResponse(BaseModel):
    """Tells the client to do a full reload."""

    reload: bool = True


class AppConfigResponse(BaseModel):
    """Result of the Telegram environment validation."""

    is_valid: bool
    missing_vars: list[str]
    bot_username: str | None = None


class LoginResponse(BaseModel):
    """Logged-in user plus the session token for non-browser clients."""

    user: TelegramUser
    token: str


class WebAppInitResponse(BaseModel):
    user: TelegramUser | None = None
    reload: bool = False
