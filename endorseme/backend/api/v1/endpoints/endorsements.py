"""
Endorsement API Endpoints.

The endorse and check workflows run against the caller's session and
always answer 200; `success` and `error` mirror the workflow outcome.
"""

from fastapi import APIRouter, Depends

from endorseme.backend.core.dependencies import CurrentSession, DbSession, RequestId, Workflow, telegram_env_required
from endorseme.backend.core.session import WorkflowState
from endorseme.backend.schemas.base import ApiResponse, ErrorDetail, ResponseMetadata
from endorseme.backend.schemas.endorsement import (
    CheckRequest,
    EndorsementHistoryItem,
    EndorseRequest,
    WorkflowStateResponse,
)
from endorseme.backend.services.endorsement import EndorsementService

router = APIRouter(dependencies=[Depends(telegram_env_required)])


def _workflow_response(state: WorkflowState, request_id: str) -> ApiResponse[WorkflowStateResponse]:
    error = None
    if state.error is not None:
        error = ErrorDetail(code=state.error_code or "SYS_INTERNAL_ERROR", message=state.error)
    return ApiResponse(
        success=error is None,
        data=state.to_response(),
        error=error,
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[WorkflowStateResponse],
    summary="Endorse a user",
)
async def endorse(
    data: EndorseRequest,
    session: CurrentSession,
    workflow: Workflow,
    request_id: RequestId,
) -> ApiResponse[WorkflowStateResponse]:
    state = session.state
    state.telegram_id = data.telegram_id
    state.category = data.category
    state.note = data.note
    state.trust_level = data.trust_level
    await workflow.endorse(session)
    return _workflow_response(state, request_id)


@router.post(
    "/check",
    response_model=ApiResponse[WorkflowStateResponse],
    summary="Check a user's endorsements",
)
async def check(
    data: CheckRequest,
    session: CurrentSession,
    workflow: Workflow,
    request_id: RequestId,
) -> ApiResponse[WorkflowStateResponse]:
    session.state.telegram_id = data.telegram_id
    await workflow.check(session)
    return _workflow_response(session.state, request_id)


@router.get(
    "/session/state",
    response_model=ApiResponse[WorkflowStateResponse],
    summary="Workflow state of the current session",
)
async def get_state(
    session: CurrentSession,
    request_id: RequestId,
) -> ApiResponse[WorkflowStateResponse]:
    return ApiResponse(
        data=session.state.to_response(),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{username}",
    response_model=ApiResponse[list[EndorsementHistoryItem]],
    summary="Endorsement history of a user",
)
async def get_endorsements(
    username: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[EndorsementHistoryItem]]:
    endorsements = await EndorsementService(db).get_endorsements(username)
    return ApiResponse(
        data=[EndorsementHistoryItem.model_validate(e) for e in endorsements],
        metadata=ResponseMetadata(request_id=request_id),
    )
