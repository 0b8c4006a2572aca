# /app/services/student_service.py

"""
This service module holds the student roster page used by demonstrators.

`StudentRosterPage` keeps the in-memory copy of the roster for one page
instance: the student list, the add-student form and the search term. Every
mutation issues exactly one backend call through the `DatabaseService`; on
success the returned rows are applied to the local list, on failure the list
is left untouched and an error notification is raised.
"""

import logging
from typing import Dict, List, Optional

from ..models.user_model import Role, User
from .database_service import DatabaseService
from .notification_service import Notifier

logger = logging.getLogger(__name__)

# Never taken from an import; students set these by signing up.
CREDENTIAL_FIELDS = ("auth_id", "password_hash")


def filter_students(students: List[User], term: str) -> List[User]:
    """
    Case-insensitive substring match against name OR email.
    An empty term returns the list unchanged.
    """
    if not term:
        return list(students)
    needle = term.lower()
    return [s for s in students if needle in s.name.lower() or needle in s.email.lower()]


class StudentRosterPage:
    def __init__(self, db: DatabaseService, notifier: Optional[Notifier] = None):
        self.db = db
        self.notifier = notifier or Notifier()
        self.students: List[User] = []
        self.loading = False
        self.new_student = {"email": "", "name": ""}
        self.search_term = ""

    @property
    def filtered_students(self) -> List[User]:
        return filter_students(self.students, self.search_term)

    def list_students(self) -> List[User]:
        """Loads every student ordered by name. A failed fetch keeps the previous list."""
        self.loading = True
        try:
            result = self.db.get_students()
            if not result.is_ok:
                logger.error(f"ERROR fetching students: {result.error}")
                self.notifier.error("Failed to fetch students. Please try again.")
                return self.students
            self.students = [User.model_validate(row) for row in result.data]
            return self.students
        finally:
            self.loading = False

    def add_student(self, email: str, name: str) -> Optional[User]:
        self.new_student = {"email": email, "name": name}
        result = self.db.add_users([{"email": email, "name": name, "role": Role.STUDENT.value}])
        if not result.is_ok:
            logger.error(f"ERROR adding student {email}: {result.error}")
            self.notifier.error("Failed to add student. Please try again.")
            return None

        new_student = User.model_validate(result.data[0])
        self.students = [*self.students, new_student]
        self.new_student = {"email": "", "name": ""}
        self.notifier.success("Success", "Student added successfully.")
        return new_student

    def import_students(self, rows: List[Dict[str, str]]) -> List[User]:
        """
        Bulk-inserts parsed CSV rows as students. The role column, if any, is
        overwritten and credential columns are dropped; imported students
        sign up like any other roster entry. The insert is all-or-nothing; a failure reports one
        generic error and adds nobody.
        """
        records = [
            {**{k: v for k, v in row.items() if k not in CREDENTIAL_FIELDS}, "role": Role.STUDENT.value}
            for row in rows
        ]
        result = self.db.add_users(records)
        if not result.is_ok:
            logger.error(f"ERROR importing {len(records)} students: {result.error}")
            self.notifier.error("Failed to import students. Please try again.")
            return []

        imported = [User.model_validate(row) for row in result.data]
        self.students = [*self.students, *imported]
        self.notifier.success("Success", f"{len(imported)} students imported successfully.")
        return imported
