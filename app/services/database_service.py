# /app/services/database_service.py

from typing import Dict, Generator, List, Optional

from sqlalchemy.orm import sessionmaker

# --- Core Database Setup ---
from app.db.database import SessionLocal

# --- Repository Imports ---
from .database_helpers.lab_repository_sql import LabRepositorySQL
from .database_helpers.query_result import QueryResult


class DatabaseService:
    def __init__(self, session_factory: Optional[sessionmaker] = None):
        """
        Initializes the DatabaseService.

        The service never holds a session itself; the repository opens one per
        call from `session_factory` (the application's SessionLocal by default).
        """
        self.lab_repo = LabRepositorySQL(session_factory or SessionLocal)

    # --- USER METHODS (DELEGATED) ---
    def get_students(self) -> QueryResult: return self.lab_repo.select_users(role="student")
    def get_user_by_auth_id(self, auth_id: str) -> QueryResult: return self.lab_repo.select_single_user(auth_id=auth_id)
    def get_user_by_email(self, email: str) -> QueryResult: return self.lab_repo.select_single_user(email=email)
    def add_users(self, records: List[Dict]) -> QueryResult: return self.lab_repo.insert_users(records)
    def set_user_credentials(self, user_id: str, auth_id: str, password_hash: str) -> QueryResult: return self.lab_repo.update_single_user(user_id, {"auth_id": auth_id, "password_hash": password_hash})

    # --- GROUP METHODS (DELEGATED) ---
    def get_all_groups(self) -> QueryResult: return self.lab_repo.select_groups()
    def add_groups(self, records: List[Dict]) -> QueryResult: return self.lab_repo.insert_groups(records)

    # --- MEMBERSHIP METHODS (DELEGATED) ---
    def get_group_members(self, group_id: str) -> QueryResult: return self.lab_repo.select_group_members(group_id)
    def get_membership_for_user(self, user_id: str) -> QueryResult: return self.lab_repo.select_single_membership(user_id)
    def add_membership(self, user_id: str, group_id: str) -> QueryResult:
        return self.lab_repo.insert_group_members([{"user_id": user_id, "group_id": group_id}])
    def delete_membership(self, membership_id: str) -> QueryResult: return self.lab_repo.delete_group_members(id=membership_id)
    def delete_memberships_for_user(self, user_id: str) -> QueryResult: return self.lab_repo.delete_group_members(user_id=user_id)


# Replaced per-test through app.dependency_overrides.
def get_db_service() -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService bound to SessionLocal.
    """
    yield DatabaseService()
