from fastapi import APIRouter

from src.marketplace.api.v1 import (
    admin,
    applications,
    notifications,
    organizations,
    partnerships,
    projects,
    requests,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(applications.router)
api_router.include_router(organizations.router)
api_router.include_router(requests.router)
api_router.include_router(partnerships.router)
api_router.include_router(notifications.router)
api_router.include_router(admin.router)
