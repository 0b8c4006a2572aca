# /app/routers/groups_router.py

from fastapi import APIRouter, Depends, status

from ..core.deps import get_current_demonstrator
from ..core.http_errors import raise_for_errors
from ..models import page_model
from ..models.group_model import GroupCreate
from ..models.user_model import User
from ..services.database_helpers.query_result import QueryStatus
from ..services.database_service import DatabaseService, get_db_service
from ..services.group_service import GroupRosterPage

router = APIRouter()

# --- GROUP COLLECTION ENDPOINTS (/api/groups) ---

@router.get("", response_model=page_model.GroupRosterView, summary="List All Groups")
def list_groups(db: DatabaseService = Depends(get_db_service), current_user: User = Depends(get_current_demonstrator)):
    page = GroupRosterPage(db)
    page.list_groups()
    raise_for_errors(page.notifier)
    return page_model.GroupRosterView(groups=page.groups, notifications=page.notifier.notifications)

@router.post("", response_model=page_model.GroupAdded, status_code=status.HTTP_201_CREATED, summary="Create a New Group")
def add_group(group_create: GroupCreate, db: DatabaseService = Depends(get_db_service), current_user: User = Depends(get_current_demonstrator)):
    page = GroupRosterPage(db)
    new_group = page.add_group(group_create.name)
    if new_group is None:
        # A duplicate name is the caller's problem, anything else is the backend's.
        if page.last_status is QueryStatus.CONFLICT:
            raise_for_errors(page.notifier, status_code=status.HTTP_409_CONFLICT)
        raise_for_errors(page.notifier)
    return page_model.GroupAdded(group=new_group, notifications=page.notifier.notifications)

# --- MEMBER SUB-RESOURCE ENDPOINTS ---

@router.get("/{group_id}/members", response_model=page_model.GroupMembersView, summary="List the Members of a Group")
def list_group_members(group_id: str, db: DatabaseService = Depends(get_db_service), current_user: User = Depends(get_current_demonstrator)):
    page = GroupRosterPage(db)
    page.select_group(group_id)
    raise_for_errors(page.notifier)
    return page_model.GroupMembersView(group_id=group_id, members=page.members, notifications=page.notifier.notifications)

@router.delete("/members/{membership_id}", response_model=page_model.MessageResponse, summary="Remove a Member from a Group")
def remove_group_member(membership_id: str, db: DatabaseService = Depends(get_db_service), current_user: User = Depends(get_current_demonstrator)):
    page = GroupRosterPage(db)
    page.remove_member(membership_id)
    raise_for_errors(page.notifier)
    return page_model.MessageResponse(message="Member removed.", notifications=page.notifier.notifications)
