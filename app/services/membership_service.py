# /app/services/membership_service.py

"""
This service module holds the "My Group" page through which a student joins
or leaves a lab group.

The page receives the already-resolved caller (`User`) and never looks the
identity up on its own. A student belongs to at most one group; that rule is
enforced by the unique constraint on `group_members.user_id`, and the page
only interprets the outcome:

- a membership lookup that finds no row means "not in any group";
- an insert that hits the unique constraint means "already a member";
- anything else is a generic failure reported once, with no retry.

After a successful join the membership is read back from the database. After
a successful leave the delete itself confirms there is no membership left, so
local state is cleared without another query.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ..core.exceptions import NotAMemberError
from ..models.group_model import Group
from ..models.user_model import User
from .database_helpers.query_result import QueryStatus
from .database_service import DatabaseService
from .notification_service import Notifier

logger = logging.getLogger(__name__)

JOIN_ACTION = "join"
LEAVE_ACTION = "leave"


class MyGroupPage:
    def __init__(self, db: DatabaseService, user: User, notifier: Optional[Notifier] = None):
        self.db = db
        self.user = user
        self.notifier = notifier or Notifier()
        self.groups: List[Group] = []
        self.membership: Optional[Group] = None
        self.loading = True

    # --- Fetching ---

    def _fetch_groups(self) -> None:
        result = self.db.get_all_groups()
        if not result.is_ok:
            logger.error(f"ERROR fetching groups: {result.error}")
            self.notifier.error("Failed to fetch groups. Please try again.")
            return
        self.groups = [Group.model_validate(row) for row in result.data]

    def _fetch_membership(self) -> None:
        result = self.db.get_membership_for_user(self.user.id)
        if result.status is QueryStatus.NOT_FOUND:
            self.membership = None
            return
        if not result.is_ok:
            logger.error(f"ERROR fetching group of user {self.user.id}: {result.error}")
            self.notifier.error("Failed to fetch your group. Please try again.")
            return

        group = result.data.get("group")
        if not group:
            # A membership row whose group could not be embedded.
            logger.warning(f"Membership {result.data.get('id')} has no group attached; treating as no group")
            self.membership = None
            return
        self.membership = Group.model_validate(group)

    async def refresh(self) -> None:
        """
        Fetches the group list and the caller's membership side by side.
        One failing does not block the other; `loading` is cleared once both
        have finished.
        """
        self.loading = True
        try:
            await asyncio.gather(
                asyncio.to_thread(self._fetch_groups),
                asyncio.to_thread(self._fetch_membership),
            )
        finally:
            self.loading = False

    # --- Mutations ---

    async def join(self, group_id: str) -> bool:
        """Returns True only when a new membership was created."""
        result = await asyncio.to_thread(self.db.add_membership, self.user.id, group_id)
        if result.status is QueryStatus.CONFLICT:
            self.notifier.info("Already a member", "You are already a member of this group.")
            return False
        if not result.is_ok:
            logger.error(f"ERROR joining group {group_id}: {result.error}")
            self.notifier.error("Failed to join group. Please try again.")
            return False

        await asyncio.to_thread(self._fetch_membership)
        self.notifier.success("Success", "Successfully joined the group.")
        return True

    async def leave(self) -> bool:
        if self.membership is None:
            raise NotAMemberError(self.user.id)

        result = await asyncio.to_thread(self.db.delete_memberships_for_user, self.user.id)
        if not result.is_ok:
            logger.error(f"ERROR leaving group: {result.error}")
            self.notifier.error("Failed to leave group. Please try again.")
            return False

        self.membership = None
        self.notifier.success("Success", "Successfully left the group.")
        return True

    # --- Rendering ---

    @property
    def available_actions(self) -> List[Dict]:
        """
        With a membership only the current group and a leave action are
        offered; otherwise every group is listed with a join action.
        """
        if self.membership is not None:
            return [{"group": self.membership, "action": LEAVE_ACTION}]
        return [{"group": group, "action": JOIN_ACTION} for group in self.groups]
