"""Admin endpoints - approval queue, publication and organization review, settings.

All endpoints require a platform admin (is_superuser).
"""

from uuid import UUID

from fastapi import APIRouter

from src.marketplace.api.dependencies import (
    AdminServiceDep,
    AdminUser,
    OrganizationServiceDep,
    PolicyResolverDep,
    ProjectServiceDep,
)
from src.marketplace.schemas import (
    DecisionRequest,
    OrganizationRead,
    PendingApprovalsResponse,
    ProjectRead,
    SettingRead,
    SettingsResponse,
    SettingUpdate,
)

router = APIRouter(prefix="/admin", tags=["admin"])

_ADMIN_RESPONSES: dict[int | str, dict[str, str]] = {
    401: {"description": "Not authenticated"},
    403: {"description": "Not authorized (admin required)"},
}


@router.get(
    "/approvals",
    response_model=PendingApprovalsResponse,
    summary="Pending approvals",
    description="Organizations awaiting approval and projects awaiting publication.",
    responses=_ADMIN_RESPONSES,
)
async def pending_approvals(
    user: AdminUser,
    admin_service: AdminServiceDep,
) -> PendingApprovalsResponse:
    organizations, projects = await admin_service.pending_approvals_for_admin(user)
    return PendingApprovalsResponse(
        organizations=[OrganizationRead.model_validate(o) for o in organizations],
        projects=[ProjectRead.model_validate(p) for p in projects],
    )


@router.post(
    "/projects/{project_id}/publish-decision",
    response_model=ProjectRead,
    summary="Decide project publication",
    description="Approving publishes the project; rejecting returns it to draft.",
    responses={**_ADMIN_RESPONSES, 409: {"description": "Project is not awaiting review"}},
)
async def decide_project_publish(
    project_id: UUID,
    request: DecisionRequest,
    user: AdminUser,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.decide_project_publish(project_id, request.decision, user)
    return ProjectRead.model_validate(project)


@router.post(
    "/organizations/{organization_id}/decision",
    response_model=OrganizationRead,
    summary="Decide organization approval",
    responses=_ADMIN_RESPONSES,
)
async def decide_organization(
    organization_id: UUID,
    request: DecisionRequest,
    user: AdminUser,
    organization_service: OrganizationServiceDep,
) -> OrganizationRead:
    organization = await organization_service.decide_organization_approval(
        organization_id, request.decision, user
    )
    return OrganizationRead.model_validate(organization)


@router.get(
    "/settings",
    response_model=SettingsResponse,
    summary="List policy settings",
    responses=_ADMIN_RESPONSES,
)
async def list_settings(
    _user: AdminUser,
    resolver: PolicyResolverDep,
) -> SettingsResponse:
    values = await resolver.list_settings()
    return SettingsResponse(
        settings=[SettingRead(key=key, value=value) for key, value in values.items()]
    )


@router.put(
    "/settings/{key}",
    response_model=SettingRead,
    summary="Update policy setting",
    description="Changes apply to entities created afterwards; existing ones keep their status.",
    responses={**_ADMIN_RESPONSES, 404: {"description": "Unknown setting"}},
)
async def update_setting(
    key: str,
    request: SettingUpdate,
    user: AdminUser,
    resolver: PolicyResolverDep,
) -> SettingRead:
    setting = await resolver.update_setting(key, request.value, user)
    return SettingRead(key=setting.key, value=setting.value)
