# /app/db/models/lab_models.py

"""
This module defines the SQLAlchemy ORM models for the `User`, `Group` and
`GroupMember` entities. A group owns many membership rows and every
membership row points at exactly one user.
"""

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base


class User(Base):
    """
    A person known to the application, either a student or a demonstrator.

    `auth_id` is the identity handed out at sign-up and carried as the `sub`
    claim of access tokens. Students added by a demonstrator or imported from
    CSV have no auth_id and no password_hash until they sign up.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    auth_id = Column(String, unique=True, index=True, nullable=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=True)
    name = Column(String, index=True, nullable=False)
    role = Column(String, nullable=False, default="student")

    memberships = relationship("GroupMember", back_populates="user", cascade="all, delete-orphan")


class Group(Base):
    __tablename__ = "groups"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)

    # Deleting a group removes its membership rows.
    members = relationship("GroupMember", back_populates="group", cascade="all, delete-orphan")


class GroupMember(Base):
    """
    The join row between a group and a user.

    The unique constraint on `user_id` is the only place that enforces the
    one-group-per-user rule. A second insert for the same user surfaces as a
    conflict from the repository.
    """
    __tablename__ = "group_members"
    __table_args__ = (UniqueConstraint("user_id", name="uq_group_members_user_id"),)

    id = Column(String, primary_key=True, index=True)
    group_id = Column(String, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    group = relationship("Group", back_populates="members")
    user = relationship("User", back_populates="memberships")
