"""
Endorsement Schemas.

Request/response schemas for the endorsement API and the fixed
vocabularies (categories, trust levels) shown by the client.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

ENDORSEMENT_CATEGORIES: tuple[str, ...] = (
    "Money exchange",
    "Goods exchange",
    "Services",
    "Professional skills",
    "Personal character",
    "Community contribution",
)

TRUST_LEVELS: dict[int, str] = {
    1: "Level 1 - Basic Trust",
    2: "Level 2 - Moderate Trust",
    3: "Level 3 - High Trust",
    4: "Level 4 - Complete Trust",
}

DEFAULT_CATEGORY = ENDORSEMENT_CATEGORIES[0]
DEFAULT_TRUST_LEVEL = "3"


class EndorseRequest(BaseModel):
    """
    Form fields of the endorse workflow.

    Fields are loose strings on purpose; the workflow validates them and
    reports failures through the workflow state instead of a 422.
    """

    telegram_id: str = Field("", max_length=64, description="Target username, with or without '@'")
    category: str = DEFAULT_CATEGORY
    note: str = Field("", max_length=2000)
    trust_level: str = DEFAULT_TRUST_LEVEL


class CheckRequest(BaseModel):
    """Form fields of the check workflow."""

    telegram_id: str = Field("", max_length=64)


class EndorsementResponse(BaseModel):
    """A stored endorsement."""

    id: int
    username: str
    category_id: int
    note: str | None
    endorsed_by: str
    trust_level: int
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class EndorsementHistoryItem(EndorsementResponse):
    """An endorsement joined with its category display name."""

    category_name: str | None = None


class WorkflowStateResponse(BaseModel):
    """Session workflow state as rendered by the client."""

    telegram_id: str
    category: str
    note: str
    trust_level: str
    busy: bool
    phase: str
    success: str | None
    error: str | None
    error_code: str | None
    endorsements: list[EndorsementHistoryItem]

    model_config = ConfigDict(from_attributes=True)


class TrustLevelOption(BaseModel):
    value: int
    label: str


class OptionsResponse(BaseModel):
    """Choices and defaults for the endorsement form."""

    categories: list[str]
    trust_levels: list[TrustLevelOption]
    default_category: str = DEFAULT_CATEGORY
    default_trust_level: str = DEFAULT_TRUST_LEVEL
