from __future__ import annotations

from datetime import date as dt_date, time as dt_time
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActivityLogCreate(BaseModel):
    # all four are required; checked in the route to answer 400, not 422
    subject: Optional[str] = None
    event: Optional[str] = None
    date: Optional[dt_date] = None
    time: Optional[dt_time] = None
    details: Optional[str] = None


class ActivityLogOut(BaseModel):
    activity_log_id: int
    subject: str
    event: str
    date: dt_date
    time: dt_time
    details: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
