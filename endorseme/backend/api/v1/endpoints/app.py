"""
App API Endpoints.

Environment status and form options for the client.
"""

from fastapi import APIRouter

from endorseme.backend.core.config import get_settings
from endorseme.backend.core.dependencies import RequestId
from endorseme.backend.core.environment import validate_telegram_env
from endorseme.backend.schemas.auth import AppConfigResponse
from endorseme.backend.schemas.base import ApiResponse, ResponseMetadata
from endorseme.backend.schemas.endorsement import (
    ENDORSEMENT_CATEGORIES,
    TRUST_LEVELS,
    OptionsResponse,
    TrustLevelOption,
)

router = APIRouter()


@router.get(
    "/config",
    response_model=ApiResponse[AppConfigResponse],
    summary="Telegram environment status",
)
async def get_config(request_id: RequestId) -> ApiResponse[AppConfigResponse]:
    result = validate_telegram_env()
    bot_username = get_settings().telegram_bot_username or None
    return ApiResponse(
        data=AppConfigResponse(
            is_valid=result.is_valid,
            missing_vars=result.missing_vars,
            bot_username=bot_username,
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/options",
    response_model=ApiResponse[OptionsResponse],
    summary="Categories and trust levels",
)
async def get_options(request_id: RequestId) -> ApiResponse[OptionsResponse]:
    return ApiResponse(
        data=OptionsResponse(
            categories=list(ENDORSEMENT_CATEGORIES),
            trust_levels=[
                TrustLevelOption(value=value, label=label)
                for value, label in TRUST_LEVELS.items()
            ],
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )
