# /app/routers/public_router.py

from typing import List

from fastapi import APIRouter

from ..models.dashboard_model import NavigationLink
from ..services import dashboard_service

router = APIRouter()


@router.get(
    "/landing",
    response_model=List[NavigationLink],
    summary="Landing Page Links",
)
def get_landing_page():
    """
    An unauthenticated endpoint listing where a visitor can go from the
    landing page: sign in or sign up.
    """
    return dashboard_service.get_landing_links()
