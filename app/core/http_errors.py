# /app/core/http_errors.py

from fastapi import HTTPException, status

from app.models.notification_model import NotificationVariant
from app.services.notification_service import Notifier


def raise_for_errors(notifier: Notifier, status_code: int = status.HTTP_502_BAD_GATEWAY) -> None:
    """
    Turns the last error notification of a page into an HTTPException.
    Backend failures default to 502; benign outcomes never reach here.
    """
    errors = [n for n in notifier.notifications if n.variant is NotificationVariant.DESTRUCTIVE]
    if errors:
        raise HTTPException(status_code=status_code, detail=errors[-1].description)
