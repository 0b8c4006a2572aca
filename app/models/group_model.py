# /app/models/group_model.py

from pydantic import BaseModel, Field, ConfigDict


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=1, description="The display name of the lab group.")


class Group(GroupCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str


class MemberUser(BaseModel):
    """The slice of the user row embedded in a membership listing."""
    name: str
    email: str


class GroupMember(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    group_id: str
    user_id: str
    user: MemberUser


class JoinRequest(BaseModel):
    group_id: str
