# /app/models/page_model.py

"""
Response contracts for the page endpoints. Each one is a snapshot of a page
manager after it handled one request, plus the notifications it raised.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .group_model import Group, GroupMember
from .notification_model import Notification
from .user_model import User


class StudentRosterView(BaseModel):
    students: List[User]
    total: int
    search: str = ""
    notifications: List[Notification] = Field(default_factory=list)


class StudentAdded(BaseModel):
    student: User
    notifications: List[Notification] = Field(default_factory=list)


class CSVPreview(BaseModel):
    filename: Optional[str] = None
    headers: List[str]
    preview: List[Dict[str, str]]
    total_rows: int
    preview_note: Optional[str] = None
    notifications: List[Notification] = Field(default_factory=list)


class StudentImportResult(CSVPreview):
    imported: List[User] = Field(default_factory=list)


class GroupRosterView(BaseModel):
    groups: List[Group]
    notifications: List[Notification] = Field(default_factory=list)


class GroupAdded(BaseModel):
    group: Group
    notifications: List[Notification] = Field(default_factory=list)


class GroupMembersView(BaseModel):
    group_id: str
    members: List[GroupMember]
    notifications: List[Notification] = Field(default_factory=list)


class MyGroupAction(BaseModel):
    group: Group
    action: str


class MyGroupView(BaseModel):
    membership: Optional[Group] = None
    groups: List[Group]
    actions: List[MyGroupAction]
    loading: bool = False
    notifications: List[Notification] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str
    redirect_to: Optional[str] = None
    notifications: List[Notification] = Field(default_factory=list)
