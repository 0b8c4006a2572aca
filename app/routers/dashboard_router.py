# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from typing import List

from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..core.deps import get_current_user
from ..models.dashboard_model import DashboardHome, NavigationLink
from ..models.user_model import User
from ..services import dashboard_service

router = APIRouter()

# --- Endpoint Definitions ---
@router.get(
    "/home",
    response_model=DashboardHome,
    summary="Get Dashboard Home",
    description="Greets the signed-in user and lists the pages available to their role.",
)
def get_dashboard_home(current_user: User = Depends(get_current_user)):
    return dashboard_service.get_dashboard_home(current_user)


@router.get("/navigation", response_model=List[NavigationLink], summary="Get Sidebar Links")
def get_navigation(current_user: User = Depends(get_current_user)):
    return dashboard_service.build_navigation(current_user.role)
