# FILE: app/api/routes_inventory_activity_log.py
from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db, db_failure, get_or_404
from app.core.config import settings
from app.models.activity_log import ActivityLog
from app.schemas.activity_log import ActivityLogCreate, ActivityLogOut
from app.schemas.inventory import MessageOut

router = APIRouter(prefix="/inventory/activity-log", tags=["Inventory - Activity Log"])


@router.get("", response_model=List[ActivityLogOut])
def list_activity_logs(db: Session = Depends(get_db)):
    try:
        return db.query(ActivityLog).order_by(ActivityLog.activity_log_id.desc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch activity logs")


@router.get("/recent", response_model=List[ActivityLogOut])
def recent_activity_logs(db: Session = Depends(get_db)):
    try:
        return (
            db.query(ActivityLog)
            .order_by(ActivityLog.activity_log_id.desc())
            .limit(settings.RECENT_ACTIVITY_LIMIT)
            .all()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch recent activity logs")


@router.get("/filter/by-date/{log_date}", response_model=List[ActivityLogOut])
def activity_logs_by_date(log_date: date, db: Session = Depends(get_db)):
    try:
        return (
            db.query(ActivityLog)
            .filter(ActivityLog.date == log_date)
            .order_by(ActivityLog.time.asc(), ActivityLog.activity_log_id.asc())
            .all()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to filter logs")


@router.get("/{log_id}", response_model=ActivityLogOut)
def get_activity_log(log_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, ActivityLog, log_id, "Log")


@router.post("", response_model=ActivityLogOut, status_code=status.HTTP_201_CREATED)
def create_activity_log(payload: ActivityLogCreate, db: Session = Depends(get_db)):
    if not (payload.subject and payload.event and payload.date and payload.time):
        raise HTTPException(status_code=400, detail="All fields are required")
    try:
        log = ActivityLog(**payload.model_dump())
        db.add(log)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create activity log")
    db.refresh(log)
    return log


@router.delete("/{log_id}", response_model=MessageOut)
def delete_activity_log(log_id: int, db: Session = Depends(get_db)):
    log = get_or_404(db, ActivityLog, log_id, "Log")
    try:
        db.delete(log)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete activity log")
    return {"message": "Log deleted successfully"}
