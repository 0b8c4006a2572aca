# /app/services/notification_service.py

import logging
from typing import List

from ..models.notification_model import Notification, NotificationVariant

logger = logging.getLogger(__name__)


class Notifier:
    """
    Collects the transient notifications raised while a page handles one
    user action. Routers return them alongside the page snapshot.
    """

    def __init__(self):
        self.notifications: List[Notification] = []

    def success(self, title: str, description: str) -> Notification:
        notification = Notification(title=title, description=description)
        self.notifications.append(notification)
        return notification

    def info(self, title: str, description: str) -> Notification:
        # Benign outcomes (e.g. a duplicate join) are reported without alarm.
        logger.info(f"{title}: {description}")
        return self.success(title, description)

    def error(self, description: str, title: str = "Error") -> Notification:
        # Every failure shown to the user is also written to the log.
        logger.warning(f"{title}: {description}")
        notification = Notification(
            title=title, description=description, variant=NotificationVariant.DESTRUCTIVE
        )
        self.notifications.append(notification)
        return notification

    @property
    def has_errors(self) -> bool:
        return any(n.variant is NotificationVariant.DESTRUCTIVE for n in self.notifications)
