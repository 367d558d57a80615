# =============================================================================
# app/routers/dashboard.py - Dashboard Endpoint
# =============================================================================
# Summary data for the dashboard view.
# =============================================================================

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.auth import get_current_user, AuthUser
from app.config import settings
from core.models.contact import ContactResponse
from core.services.contact_service import ContactService

router = APIRouter()


class DashboardResponse(BaseModel):
    """What the dashboard shows."""
    user: AuthUser
    contact_count: int
    recent_contacts: list[ContactResponse]


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(user: AuthUser = Depends(get_current_user)):
    """
    Dashboard summary: total contacts and the newest few.

    Returns 503 if the contact store is unavailable.
    """
    return DashboardResponse(
        user=user,
        contact_count=ContactService.count_contacts(),
        recent_contacts=ContactService.recent_contacts(settings.DASHBOARD_RECENT_LIMIT),
    )
