import logging

from .models import Notification

logger = logging.getLogger(__name__)


def initials(name):
    """Nguyễn Văn A -> NA; a single word gives its first two letters."""
    parts = [p for p in (name or "").split() if p]
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0][:2].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def notify(user, title, message, type=Notification.SYSTEM, link=""):
    if user is None:
        return None

    notification = Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        link=link,
    )
    logger.debug("Notification %s queued for user %s", notification.pk, user.pk)
    return notification
