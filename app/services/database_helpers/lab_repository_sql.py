# /app/services/database_helpers/lab_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the `users`, `groups`
and `group_members` tables. It is the only module that talks to the database
and the only one that knows about driver-specific error codes.

Every public method returns a `QueryResult`. Rows are plain dictionaries
keyed by column name; embedded relations appear as nested dictionaries
(`member["user"]["email"]`, `membership["group"]["name"]`).

Each call opens its own short-lived session, so independent calls can run
concurrently on different threads.
"""

import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, MultipleResultsFound, NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, sessionmaker

from app.db.models.lab_models import User, Group, GroupMember
from .query_result import QueryResult

logger = logging.getLogger(__name__)

# SQLSTATE reported by PostgreSQL drivers for a duplicate key.
UNIQUE_VIOLATION_SQLSTATE = "23505"
# SQLite has no SQLSTATE; the message prefix is stable across versions.
SQLITE_UNIQUE_MESSAGE = "UNIQUE constraint failed"


class InvalidPayloadError(ValueError):
    """Raised inside an insert when a record names a column the table does not have."""
    pass


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return SQLITE_UNIQUE_MESSAGE in str(orig)


def _to_dict(obj) -> Dict[str, Any]:
    return {c.name: getattr(obj, c.name) for c in obj.__table__.columns}


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _build_rows(model, prefix: str, records: List[Dict]) -> list:
    allowed = set(model.__table__.columns.keys())
    rows = []
    for record in records:
        unknown = set(record) - allowed
        if unknown:
            raise InvalidPayloadError(
                f"Could not find column(s) {sorted(unknown)} in table '{model.__tablename__}'"
            )
        row = dict(record)
        if not row.get("id"):
            row["id"] = _new_id(prefix)
        rows.append(model(**row))
    return rows


def _equality_filters(**filters) -> Dict[str, Any]:
    return {key: value for key, value in filters.items() if value is not None}


class LabRepositorySQL:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _run(self, action: str, operation: Callable[[Session], Any]) -> QueryResult:
        """
        Runs one backend call in its own session and tags the outcome.
        Nothing raised by SQLAlchemy escapes this method.
        """
        session = self._session_factory()
        try:
            return QueryResult.ok(operation(session))
        except NoResultFound:
            session.rollback()
            return QueryResult.not_found()
        except MultipleResultsFound as e:
            session.rollback()
            logger.error(f"ERROR {action}: expected a single row: {e}")
            return QueryResult.failure(str(e))
        except IntegrityError as e:
            session.rollback()
            if _is_unique_violation(e):
                logger.info(f"Conflict while {action}: {e.orig}")
                return QueryResult.conflict(str(e.orig))
            logger.error(f"ERROR {action}: {e.orig}")
            return QueryResult.failure(str(e.orig))
        except InvalidPayloadError as e:
            session.rollback()
            logger.error(f"ERROR {action}: {e}")
            return QueryResult.failure(str(e))
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"ERROR {action}: {e}")
            return QueryResult.failure(str(e))
        finally:
            session.close()

    def _insert(self, action: str, model, prefix: str, records: List[Dict]) -> QueryResult:
        # All records go in one transaction: either every row is stored or none.
        def operation(session: Session) -> List[Dict]:
            rows = _build_rows(model, prefix, records)
            session.add_all(rows)
            session.commit()
            return [_to_dict(row) for row in rows]
        return self._run(action, operation)

    # --- User Methods ---

    def select_users(
        self,
        role: Optional[str] = None,
        auth_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> QueryResult:
        """Users matching every given equality filter, ordered by name ascending."""
        filters = _equality_filters(role=role, auth_id=auth_id, email=email)

        def operation(session: Session) -> List[Dict]:
            query = session.query(User).filter_by(**filters).order_by(User.name.asc())
            return [_to_dict(u) for u in query.all()]
        return self._run("selecting users", operation)

    def select_single_user(self, **filters) -> QueryResult:
        """Exactly one user, or NOT_FOUND."""
        filters = _equality_filters(**filters)

        def operation(session: Session) -> Dict:
            return _to_dict(session.query(User).filter_by(**filters).one())
        return self._run("selecting a single user", operation)

    def insert_users(self, records: List[Dict]) -> QueryResult:
        return self._insert("inserting users", User, "usr", records)

    def update_single_user(self, user_id: str, values: Dict) -> QueryResult:
        """Sets `values` on one user and returns the updated row, or NOT_FOUND."""
        def operation(session: Session) -> Dict:
            user = session.query(User).filter(User.id == user_id).one()
            for key, value in values.items():
                if key not in User.__table__.columns.keys():
                    raise InvalidPayloadError(f"Could not find column '{key}' in table 'users'")
                setattr(user, key, value)
            session.commit()
            return _to_dict(user)
        return self._run("updating a user", operation)

    # --- Group Methods ---

    def select_groups(self) -> QueryResult:
        def operation(session: Session) -> List[Dict]:
            return [_to_dict(g) for g in session.query(Group).order_by(Group.name.asc()).all()]
        return self._run("selecting groups", operation)

    def insert_groups(self, records: List[Dict]) -> QueryResult:
        return self._insert("inserting groups", Group, "grp", records)

    # --- Membership Methods ---

    def select_group_members(self, group_id: str) -> QueryResult:
        """Membership rows of one group, each embedding the member's name and email."""
        def operation(session: Session) -> List[Dict]:
            members = (
                session.query(GroupMember)
                .options(joinedload(GroupMember.user))
                .filter(GroupMember.group_id == group_id)
                .all()
            )
            return [
                {**_to_dict(m), "user": {"name": m.user.name, "email": m.user.email}}
                for m in members
            ]
        return self._run("selecting group members", operation)

    def select_single_membership(self, user_id: str) -> QueryResult:
        """
        The one membership row of a user with its parent group embedded,
        or NOT_FOUND when the user is in no group.
        """
        def operation(session: Session) -> Dict:
            membership = (
                session.query(GroupMember)
                .options(joinedload(GroupMember.group))
                .filter(GroupMember.user_id == user_id)
                .one()
            )
            group = {"id": membership.group.id, "name": membership.group.name} if membership.group else None
            return {**_to_dict(membership), "group": group}
        return self._run("selecting a single membership", operation)

    def insert_group_members(self, records: List[Dict]) -> QueryResult:
        return self._insert("inserting group members", GroupMember, "mem", records)

    def delete_group_members(self, id: Optional[str] = None, user_id: Optional[str] = None) -> QueryResult:
        """Deletes every membership row matching the filter. Returns the number removed."""
        filters = _equality_filters(id=id, user_id=user_id)
        if not filters:
            return QueryResult.failure("refusing to delete group members without a filter")

        def operation(session: Session) -> int:
            deleted = session.query(GroupMember).filter_by(**filters).delete(synchronize_session=False)
            session.commit()
            return deleted
        return self._run("deleting group members", operation)
