"""Project application endpoints - the applicant's view and the organizer's decision."""

from uuid import UUID

from fastapi import APIRouter

from src.marketplace.api.dependencies import ApplicationServiceDep, CurrentUser
from src.marketplace.schemas import (
    ApplicationListResponse,
    ApplicationRead,
    DecisionRequest,
)

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get(
    "/mine",
    response_model=ApplicationListResponse,
    summary="List my applications",
)
async def list_my_applications(
    user: CurrentUser,
    application_service: ApplicationServiceDep,
) -> ApplicationListResponse:
    applications = await application_service.list_for_user(user)
    return ApplicationListResponse(
        applications=[ApplicationRead.model_validate(a) for a in applications],
        total=len(applications),
    )


@router.post(
    "/{application_id}/decision",
    response_model=ApplicationRead,
    summary="Decide application",
    description=(
        "Approve or reject a pending application (project organizer or admin). "
        "Approval creates the partnership. Repeating a decision returns the "
        "application unchanged."
    ),
    responses={
        403: {"description": "Not the project organizer"},
        404: {"description": "Application not found"},
    },
)
async def decide_application(
    application_id: UUID,
    request: DecisionRequest,
    user: CurrentUser,
    application_service: ApplicationServiceDep,
) -> ApplicationRead:
    application = await application_service.decide_application(
        application_id, request.decision, user
    )
    return ApplicationRead.model_validate(application)
