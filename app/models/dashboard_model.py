# /app/models/dashboard_model.py

# --- Core Imports ---
from typing import List

from pydantic import BaseModel, Field

from .user_model import Role

# --- Model Definitions ---

class NavigationLink(BaseModel):
    """A single entry of the dashboard sidebar."""
    label: str
    href: str
    action: str = Field(default="navigate", description="'navigate' for links, 'sign_out' for the sign-out button.")


class DashboardHome(BaseModel):
    """
    Defines the data contract for the dashboard home page: a greeting, the
    caller's role, a role-specific hint and the sidebar links.
    """
    greeting: str = Field(..., examples=["Hello, Ada!"])
    role: Role
    hint: str
    navigation: List[NavigationLink]
