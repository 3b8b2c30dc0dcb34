"""Organization endpoints - organizations, join requests and partnership interests."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.marketplace.api.dependencies import (
    CurrentUser,
    InterestServiceDep,
    JoinRequestServiceDep,
    OrganizationServiceDep,
    PartnershipApplicationServiceDep,
    PolicyDep,
)
from src.marketplace.models import RequestStatus
from src.marketplace.schemas import (
    InterestCreate,
    InterestRead,
    JoinRequestCreate,
    JoinRequestRead,
    OrganizationCreate,
    OrganizationRead,
    PartnershipApplicationCreate,
    PartnershipApplicationRead,
)

router = APIRouter(prefix="/organizations", tags=["organizations"])

StatusFilter = Annotated[
    RequestStatus | None, Query(alias="status", description="Filter by status")
]


@router.post(
    "",
    response_model=OrganizationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create organization",
    description=(
        "Create an organization owned by the current user. It starts active or "
        "pending_approval depending on the auto-approval setting."
    ),
)
async def create_organization(
    request: OrganizationCreate,
    user: CurrentUser,
    policy: PolicyDep,
    organization_service: OrganizationServiceDep,
) -> OrganizationRead:
    organization = await organization_service.create_organization(
        user, request.name, policy, description=request.description
    )
    return OrganizationRead.model_validate(organization)


@router.get(
    "/{organization_id}",
    response_model=OrganizationRead,
    summary="Get organization",
    responses={404: {"description": "Organization not found"}},
)
async def get_organization(
    organization_id: UUID,
    _user: CurrentUser,
    organization_service: OrganizationServiceDep,
) -> OrganizationRead:
    organization = await organization_service.get_organization(organization_id)
    return OrganizationRead.model_validate(organization)


@router.post(
    "/{organization_id}/join-requests",
    response_model=JoinRequestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Request to join",
    responses={409: {"description": "Organization is not active"}},
)
async def submit_join_request(
    organization_id: UUID,
    request: JoinRequestCreate,
    user: CurrentUser,
    join_request_service: JoinRequestServiceDep,
) -> JoinRequestRead:
    join_request = await join_request_service.submit_join_request(
        organization_id, user, message=request.message
    )
    return JoinRequestRead.model_validate(join_request)


@router.get(
    "/{organization_id}/join-requests",
    response_model=list[JoinRequestRead],
    summary="List join requests",
    description="List join requests for an organization (owner or admin only).",
)
async def list_join_requests(
    organization_id: UUID,
    user: CurrentUser,
    join_request_service: JoinRequestServiceDep,
    status_filter: StatusFilter = None,
) -> list[JoinRequestRead]:
    join_requests = await join_request_service.list_for_organization(
        organization_id, user, status=status_filter
    )
    return [JoinRequestRead.model_validate(r) for r in join_requests]


@router.post(
    "/{organization_id}/interests",
    response_model=InterestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Publish partnership interest",
)
async def create_interest(
    organization_id: UUID,
    request: InterestCreate,
    user: CurrentUser,
    interest_service: InterestServiceDep,
) -> InterestRead:
    interest = await interest_service.create_interest(
        organization_id, user, request.partnership_type, request.description
    )
    return InterestRead.model_validate(interest)


@router.get(
    "/{organization_id}/interests",
    response_model=list[InterestRead],
    summary="List partnership interests",
)
async def list_interests(
    organization_id: UUID,
    _user: CurrentUser,
    interest_service: InterestServiceDep,
    open_only: Annotated[bool, Query(description="Only open interests")] = False,
) -> list[InterestRead]:
    interests = await interest_service.list_for_organization(organization_id, open_only=open_only)
    return [InterestRead.model_validate(i) for i in interests]


@router.post(
    "/{organization_id}/interests/{interest_id}/applications",
    response_model=PartnershipApplicationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Apply against a partnership interest",
    responses={
        404: {"description": "Interest not found in this organization"},
        409: {"description": "Interest closed or organization not active"},
    },
)
async def submit_partnership_application(
    organization_id: UUID,
    interest_id: UUID,
    request: PartnershipApplicationCreate,
    user: CurrentUser,
    partnership_application_service: PartnershipApplicationServiceDep,
) -> PartnershipApplicationRead:
    application = await partnership_application_service.submit_partnership_application(
        organization_id,
        interest_id,
        user,
        message=request.message,
        project_id=request.project_id,
    )
    return PartnershipApplicationRead.model_validate(application)


@router.get(
    "/{organization_id}/partnership-applications",
    response_model=list[PartnershipApplicationRead],
    summary="List partnership applications",
    description="List applications against an organization's interests (owner or admin only).",
)
async def list_partnership_applications(
    organization_id: UUID,
    user: CurrentUser,
    partnership_application_service: PartnershipApplicationServiceDep,
    status_filter: StatusFilter = None,
) -> list[PartnershipApplicationRead]:
    applications = await partnership_application_service.list_for_organization(
        organization_id, user, status=status_filter
    )
    return [PartnershipApplicationRead.model_validate(a) for a in applications]
