# /app/models/notification_model.py

from enum import Enum

from pydantic import BaseModel


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """
    A transient, toast-style message produced by a single user action.
    `destructive` marks failures; everything else uses `default`.
    """
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT
