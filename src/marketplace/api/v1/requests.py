"""Decision endpoints for join requests, interests and partnership applications."""

from uuid import UUID

from fastapi import APIRouter

from src.marketplace.api.dependencies import (
    CurrentUser,
    InterestServiceDep,
    JoinRequestServiceDep,
    PartnershipApplicationServiceDep,
)
from src.marketplace.schemas import (
    DecisionRequest,
    InterestRead,
    JoinRequestRead,
    PartnershipApplicationRead,
)

router = APIRouter(tags=["organizations"])


@router.post(
    "/join-requests/{join_request_id}/decision",
    response_model=JoinRequestRead,
    summary="Decide join request",
    description="Approve or reject a pending join request (organization owner or admin).",
)
async def decide_join_request(
    join_request_id: UUID,
    request: DecisionRequest,
    user: CurrentUser,
    join_request_service: JoinRequestServiceDep,
) -> JoinRequestRead:
    join_request = await join_request_service.decide_join_request(
        join_request_id, request.decision, user
    )
    return JoinRequestRead.model_validate(join_request)


@router.post(
    "/interests/{interest_id}/close",
    response_model=InterestRead,
    summary="Close partnership interest",
)
async def close_interest(
    interest_id: UUID,
    user: CurrentUser,
    interest_service: InterestServiceDep,
) -> InterestRead:
    interest = await interest_service.close_interest(interest_id, user)
    return InterestRead.model_validate(interest)


@router.post(
    "/partnership-applications/{application_id}/decision",
    response_model=PartnershipApplicationRead,
    summary="Decide partnership application",
    description="Approve or reject a pending partnership application (organization owner or admin).",
)
async def decide_partnership_application(
    application_id: UUID,
    request: DecisionRequest,
    user: CurrentUser,
    partnership_application_service: PartnershipApplicationServiceDep,
) -> PartnershipApplicationRead:
    application = await partnership_application_service.decide_partnership_application(
        application_id, request.decision, user
    )
    return PartnershipApplicationRead.model_validate(application)
