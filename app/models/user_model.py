# /app/models/user_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class Role(str, Enum):
    STUDENT = "student"
    DEMONSTRATOR = "demonstrator"


class UserBase(BaseModel):
    email: str = Field(..., min_length=3, description="The user's email address.")
    name: str = Field(..., min_length=1, description="The user's display name.")


class StudentCreate(UserBase):
    """Payload for adding a single student. The role is always forced to student."""
    pass


class SignUp(UserBase):
    """
    Self-registration. There is no role field: every new account is a
    student, and demonstrators are created by an existing demonstrator.
    """
    password: str = Field(..., min_length=8, description="Plain-text password; only its bcrypt hash is stored.")


class DemonstratorCreate(SignUp):
    pass


class User(BaseModel):
    """
    The full representation of a row in the `users` table. No length rules
    here: rows are reported as stored, including CSV imports.
    """
    model_config = ConfigDict(from_attributes=True)

    email: str
    name: str
    id: str = Field(..., description="The unique, server-generated identifier for the user.")
    auth_id: Optional[str] = Field(default=None, description="Opaque authentication identity, if the user has signed up.")
    role: Role


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
