"""Partnership endpoints."""

from fastapi import APIRouter

from src.marketplace.api.dependencies import CurrentUser, PartnershipViewServiceDep
from src.marketplace.schemas import PartnershipListResponse

router = APIRouter(prefix="/partnerships", tags=["partnerships"])


@router.get(
    "/mine",
    response_model=PartnershipListResponse,
    summary="List my partnerships",
    description=(
        "One entry per project the current user partners on, including approvals "
        "whose partnership record has not been written yet. Entries for completed "
        "projects have status completed."
    ),
)
async def list_my_partnerships(
    user: CurrentUser,
    partnership_views: PartnershipViewServiceDep,
) -> PartnershipListResponse:
    views = await partnership_views.partnerships_for(user.id)
    return PartnershipListResponse(partnerships=views, total=len(views))
