from datetime import date, datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    Time,
    Text,
)

from app.db.base import Base


class ActivityLog(Base):
    """
    Inventory audit trail.
    Every create / edit / delete / stock-out appends one row here.
    """
    __tablename__ = "inv_activity_logs"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
        "mysql_collate": "utf8mb4_unicode_ci",
    }

    activity_log_id = Column(Integer, primary_key=True, index=True)

    subject = Column(String(50), nullable=False)  # item / batch / stock-receiving ...
    event = Column(String(20), nullable=False)  # create / edit / delete / stock-out

    date = Column(Date, nullable=False, default=date.today, index=True)
    time = Column(Time, nullable=False, default=lambda: datetime.now().time().replace(microsecond=0))

    details = Column(Text, nullable=True)
