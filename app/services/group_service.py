# /app/services/group_service.py

"""
The group roster page used by demonstrators: create groups, open a group to
see its members and remove members from it.

The member panel moves through three states:
    no_selection -> (select a group) -> loading -> (fetch resolves) -> showing
Selecting another group goes straight back to `loading` and re-fetches; member
lists are never cached across selections.
"""

import logging
from typing import List, Optional

from ..models.group_model import Group, GroupMember
from .database_helpers.query_result import QueryStatus
from .database_service import DatabaseService
from .notification_service import Notifier

logger = logging.getLogger(__name__)

NO_SELECTION = "no_selection"
LOADING = "loading"
SHOWING = "showing"


class GroupRosterPage:
    def __init__(self, db: DatabaseService, notifier: Optional[Notifier] = None):
        self.db = db
        self.notifier = notifier or Notifier()
        self.groups: List[Group] = []
        self.loading = False
        self.new_group_name = ""
        self.selected_group_id: Optional[str] = None
        self.members: List[GroupMember] = []
        self.members_loading = False
        self.last_status: Optional[QueryStatus] = None

    @property
    def member_panel_state(self) -> str:
        if self.selected_group_id is None:
            return NO_SELECTION
        return LOADING if self.members_loading else SHOWING

    def list_groups(self) -> List[Group]:
        self.loading = True
        try:
            result = self.db.get_all_groups()
            if not result.is_ok:
                logger.error(f"ERROR fetching groups: {result.error}")
                self.notifier.error("Error fetching groups. Please try again.")
                return self.groups
            self.groups = [Group.model_validate(row) for row in result.data]
            return self.groups
        finally:
            self.loading = False

    def add_group(self, name: str) -> Optional[Group]:
        self.new_group_name = name
        result = self.db.add_groups([{"name": name}])
        self.last_status = result.status
        if result.status is QueryStatus.CONFLICT:
            self.notifier.error(f"A group named {name} already exists.")
            return None
        if not result.is_ok:
            logger.error(f"ERROR adding group {name}: {result.error}")
            self.notifier.error("Failed to add group. Please try again.")
            return None

        new_group = Group.model_validate(result.data[0])
        self.groups = [*self.groups, new_group]
        self.new_group_name = ""
        self.notifier.success("Group added", f"Successfully added group: {name}")
        return new_group

    def select_group(self, group_id: str) -> List[GroupMember]:
        """Opens a group in the member panel. Always re-fetches its members."""
        self.selected_group_id = group_id
        return self.list_members(group_id)

    def list_members(self, group_id: str) -> List[GroupMember]:
        self.members_loading = True
        try:
            result = self.db.get_group_members(group_id)
            if not result.is_ok:
                logger.error(f"ERROR fetching members of group {group_id}: {result.error}")
                self.notifier.error("Error fetching group members. Please try again.")
                return self.members
            self.members = [GroupMember.model_validate(row) for row in result.data]
            return self.members
        finally:
            self.members_loading = False

    def remove_member(self, membership_id: str) -> bool:
        """
        Deletes one membership row by its own id and drops it from the local
        list. The member list is not re-fetched.
        """
        result = self.db.delete_membership(membership_id)
        if not result.is_ok:
            logger.error(f"ERROR removing group member {membership_id}: {result.error}")
            self.notifier.error("Failed to remove group member. Please try again.")
            return False

        self.members = [m for m in self.members if m.id != membership_id]
        self.notifier.success("Member removed", "Successfully removed member from the group.")
        return True
