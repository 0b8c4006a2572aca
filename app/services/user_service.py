# /app/services/user_service.py

"""
Sign-up, sign-in and identity resolution.

Every registered user has an `auth_id` and a bcrypt `password_hash`. Sign-in
checks the password and hands out a signed access token whose subject is the
`auth_id`; that token is resolved to a `User` once per request and the
resolved user is handed to the page managers explicitly.
"""

import logging
import uuid
from typing import Optional

from ..core import security
from ..core.exceptions import BackendError
from ..models.user_model import Role, SignUp, User
from .database_helpers.query_result import QueryStatus
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def _new_auth_id() -> str:
    return uuid.uuid4().hex


def create_user(db: DatabaseService, user: SignUp, role: Role = Role.STUDENT) -> User:
    """
    Registers a new identity with the given role. Self sign-up always goes
    through with the default; only `create_demonstrator` passes another one.

    If a demonstrator already added this email to the roster without an
    identity, the existing row is claimed and keeps its stored role.
    Raises ValueError if the email is already registered.
    """
    password_hash = security.hash_password(user.password)

    existing = db.get_user_by_email(user.email)
    if existing.status is QueryStatus.OK:
        if existing.data.get("auth_id"):
            raise ValueError("A user with this email is already registered.")
        claimed = db.set_user_credentials(existing.data["id"], _new_auth_id(), password_hash)
        if not claimed.is_ok:
            raise BackendError("claiming a roster entry", claimed.error)
        logger.info(f"User {claimed.data['id']} claimed an existing roster entry")
        return User.model_validate(claimed.data)
    if existing.status is not QueryStatus.NOT_FOUND:
        raise BackendError("looking up a user by email", existing.error)

    record = {
        "email": user.email,
        "name": user.name,
        "role": role.value,
        "auth_id": _new_auth_id(),
        "password_hash": password_hash,
    }
    result = db.add_users([record])
    if result.status is QueryStatus.CONFLICT:
        raise ValueError("A user with this email is already registered.")
    if not result.is_ok:
        raise BackendError("creating a user", result.error)
    return User.model_validate(result.data[0])


def create_demonstrator(db: DatabaseService, user: SignUp) -> User:
    """
    Registers a demonstrator. Only reachable by an existing demonstrator or
    the startup seed. An unclaimed roster row for the email is a student
    entry, so it is rejected rather than promoted.
    """
    existing = db.get_user_by_email(user.email)
    if existing.status is QueryStatus.OK:
        raise ValueError("A user with this email already exists.")
    if existing.status is not QueryStatus.NOT_FOUND:
        raise BackendError("looking up a user by email", existing.error)
    new_user = create_user(db, user, role=Role.DEMONSTRATOR)
    logger.info(f"Demonstrator {new_user.id} created")
    return new_user


def seed_demonstrator(db: DatabaseService, email: Optional[str], password: Optional[str], name: str) -> Optional[User]:
    """Creates the configured first demonstrator unless the email is already taken."""
    if not email or not password:
        return None
    try:
        return create_demonstrator(db, SignUp(email=email, name=name, password=password))
    except ValueError:
        logger.info(f"Seed demonstrator {email} already exists")
        return None


def authenticate_user(db: DatabaseService, email: str, password: str) -> Optional[User]:
    """Returns the registered user if the password matches, else None."""
    result = db.get_user_by_email(email)
    if result.status is QueryStatus.NOT_FOUND:
        return None
    if not result.is_ok:
        raise BackendError("looking up a user by email", result.error)
    if not result.data.get("auth_id"):
        # On the roster, but never signed up.
        return None
    if not security.verify_password(password, result.data.get("password_hash")):
        logger.info(f"Failed sign-in for {email}")
        return None
    return User.model_validate(result.data)


def issue_token(user: User) -> str:
    return security.create_access_token(subject=user.auth_id)


def resolve_identity(db: DatabaseService, token: str) -> Optional[User]:
    """Decodes an access token and loads its user; None for a bad token or unknown subject."""
    auth_id = security.decode_access_token(token)
    if not auth_id:
        return None
    result = db.get_user_by_auth_id(auth_id)
    if result.status is QueryStatus.NOT_FOUND:
        return None
    if not result.is_ok:
        raise BackendError("resolving the current user", result.error)
    return User.model_validate(result.data)
