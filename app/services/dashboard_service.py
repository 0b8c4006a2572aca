# /app/services/dashboard_service.py

# --- Core Imports ---
from typing import List

from ..models.dashboard_model import DashboardHome, NavigationLink
from ..models.user_model import Role, User

# --- Route Constants ---
LANDING_ROUTE = "/"
SIGN_IN_ROUTE = "/auth/signin"
SIGN_UP_ROUTE = "/auth/signup"
DASHBOARD_ROUTE = "/dashboard"
STUDENTS_ROUTE = "/dashboard/students"
GROUPS_ROUTE = "/dashboard/groups"
MY_GROUP_ROUTE = "/dashboard/my-group"

ROLE_HINTS = {
    Role.DEMONSTRATOR: "Use the sidebar to manage students and groups.",
    Role.STUDENT: "Use the sidebar to view and manage your group membership.",
}


def build_navigation(role: Role) -> List[NavigationLink]:
    """
    Builds the sidebar for a role. Demonstrators manage students and groups,
    students only see their own group. Sign out is always last.
    """
    links = [NavigationLink(label="Dashboard", href=DASHBOARD_ROUTE)]
    if role == Role.DEMONSTRATOR:
        links.append(NavigationLink(label="Manage Students", href=STUDENTS_ROUTE))
        links.append(NavigationLink(label="Manage Groups", href=GROUPS_ROUTE))
    elif role == Role.STUDENT:
        links.append(NavigationLink(label="My Group", href=MY_GROUP_ROUTE))
    links.append(NavigationLink(label="Sign Out", href=LANDING_ROUTE, action="sign_out"))
    return links


def get_dashboard_home(user: User) -> DashboardHome:
    return DashboardHome(
        greeting=f"Hello, {user.name}!",
        role=user.role,
        hint=ROLE_HINTS[user.role],
        navigation=build_navigation(user.role),
    )


def get_landing_links() -> List[NavigationLink]:
    return [
        NavigationLink(label="Sign In", href=SIGN_IN_ROUTE),
        NavigationLink(label="Sign Up", href=SIGN_UP_ROUTE),
    ]
