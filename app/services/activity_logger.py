import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models.activity_log import ActivityLog

logger = logging.getLogger(__name__)


def log_activity(
    db: Session,
    *,
    subject: str,  # "item" | "batch" | "stock-receiving" | ...
    event: str,  # "create" | "edit" | "delete" | "stock-out"
    details: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ActivityLog:
    """
    Append one activity row to the caller's session.
    Does not commit: the row is written with the mutation it describes.
    """
    now = now or datetime.now()
    log = ActivityLog(
        subject=subject,
        event=event,
        date=now.date(),
        time=now.time().replace(microsecond=0),
        details=details,
    )
    db.add(log)
    logger.debug("activity %s/%s %s", subject, event, details or "")
    return log
