"""Project endpoints - lifecycle and applications to partner on a project."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.marketplace.api.dependencies import (
    ApplicationServiceDep,
    CurrentUser,
    PolicyDep,
    ProjectServiceDep,
)
from src.marketplace.models import RequestStatus
from src.marketplace.schemas import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationRead,
    ApplicationsToggle,
    PaginatedResponse,
    ProjectCreate,
    ProjectRead,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List my projects",
    description="List projects organized by the current user, newest first.",
)
async def list_my_projects(
    user: CurrentUser,
    project_service: ProjectServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ProjectRead]:
    projects, next_cursor, has_more = await project_service.list_my_projects(
        user, cursor=cursor, limit=limit
    )
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description=(
        "Create a draft project. With publish=true it is submitted for publication "
        "right away and lands in pending_publish or published depending on policy."
    ),
    responses={
        201: {"description": "Project created"},
        403: {"description": "Not a member of the given organization"},
        404: {"description": "Organization not found"},
    },
)
async def create_project(
    request: ProjectCreate,
    user: CurrentUser,
    policy: PolicyDep,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.create_project(
        user,
        request.title,
        policy,
        description=request.description,
        organization_id=request.organization_id,
        partnership_types_sought=request.partnership_types_sought,
        publish=request.publish,
    )
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: UUID,
    _user: CurrentUser,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.get_project(project_id)
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/submit",
    response_model=ProjectRead,
    summary="Submit project for publication",
    responses={
        403: {"description": "Not the project organizer"},
        409: {"description": "Project is not a draft"},
    },
)
async def submit_project(
    project_id: UUID,
    user: CurrentUser,
    policy: PolicyDep,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.submit_project_for_publish(project_id, user, policy)
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/start",
    response_model=ProjectRead,
    summary="Start project",
    responses={409: {"description": "Project is not published"}},
)
async def start_project(
    project_id: UUID,
    user: CurrentUser,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.start_project(project_id, user)
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/complete",
    response_model=ProjectRead,
    summary="Complete project",
    description="Complete a project, reject its pending applications and notify its partners.",
    responses={409: {"description": "Project cannot be completed from its current status"}},
)
async def complete_project(
    project_id: UUID,
    user: CurrentUser,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.complete_project(project_id, user)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}/applications",
    response_model=ProjectRead,
    summary="Open or close applications",
)
async def toggle_applications(
    project_id: UUID,
    request: ApplicationsToggle,
    user: CurrentUser,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.set_applications_enabled(project_id, user, request.enabled)
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/applications",
    response_model=ApplicationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Apply to partner on a project",
    responses={
        403: {"description": "Not a member of the given organization"},
        404: {"description": "Project not found"},
        409: {"description": "Project is not accepting applications"},
    },
)
async def submit_application(
    project_id: UUID,
    request: ApplicationCreate,
    user: CurrentUser,
    application_service: ApplicationServiceDep,
) -> ApplicationRead:
    application = await application_service.submit_application(
        project_id,
        user,
        request.partnership_type,
        message=request.message,
        organization_id=request.organization_id,
    )
    return ApplicationRead.model_validate(application)


@router.get(
    "/{project_id}/applications",
    response_model=ApplicationListResponse,
    summary="List project applications",
    description="List applications to a project (organizer or admin only).",
)
async def list_project_applications(
    project_id: UUID,
    user: CurrentUser,
    application_service: ApplicationServiceDep,
    status_filter: Annotated[
        RequestStatus | None, Query(alias="status", description="Filter by status")
    ] = None,
) -> ApplicationListResponse:
    applications = await application_service.list_for_project(
        project_id, user, status=status_filter
    )
    return ApplicationListResponse(
        applications=[ApplicationRead.model_validate(a) for a in applications],
        total=len(applications),
    )
