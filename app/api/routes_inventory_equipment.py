# FILE: app/api/routes_inventory_equipment.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from app.api.deps import get_db, db_failure, get_or_404
from app.models.equipment import EquipmentCategory, Equipment, Maintenance
from app.schemas.equipment import (
    EquipmentCategoryCreate,
    EquipmentCategoryUpdate,
    EquipmentCategoryDetailOut,
    EquipmentCategoryOut,
    EquipmentCreate,
    EquipmentUpdate,
    EquipmentOut,
    EquipmentDetailOut,
    MaintenanceCreate,
    MaintenanceUpdate,
    MaintenanceOut,
    MaintenanceDetailOut,
)
from app.schemas.inventory import MessageOut
from app.services.activity_logger import log_activity

router = APIRouter(prefix="/inventory", tags=["Inventory - Equipment"])


def _apply(obj, data: dict) -> None:
    for k, v in data.items():
        setattr(obj, k, v)


# ============================================================
# Equipment categories
# ============================================================
@router.get("/equipment-categories", response_model=List[EquipmentCategoryDetailOut])
def list_equipment_categories(db: Session = Depends(get_db)):
    try:
        return (
            db.query(EquipmentCategory)
            .options(selectinload(EquipmentCategory.equipments))
            .order_by(EquipmentCategory.equipment_category)
            .all()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch equipment categories")


@router.get("/equipment-categories/{equipment_category_id}", response_model=EquipmentCategoryDetailOut)
def get_equipment_category(equipment_category_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, EquipmentCategory, equipment_category_id, "Equipment category")


@router.post("/equipment-categories", response_model=EquipmentCategoryOut, status_code=status.HTTP_201_CREATED)
def create_equipment_category(payload: EquipmentCategoryCreate, db: Session = Depends(get_db)):
    try:
        cat = EquipmentCategory(**payload.model_dump())
        db.add(cat)
        log_activity(db, subject="equipment-category", event="create", details=payload.equipment_category)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create equipment category")
    db.refresh(cat)
    return cat


@router.put("/equipment-categories/{equipment_category_id}", response_model=EquipmentCategoryOut,
            status_code=status.HTTP_202_ACCEPTED)
def update_equipment_category(equipment_category_id: int, payload: EquipmentCategoryUpdate,
                              db: Session = Depends(get_db)):
    cat = get_or_404(db, EquipmentCategory, equipment_category_id, "Equipment category")
    try:
        _apply(cat, payload.model_dump(exclude_unset=True))
        log_activity(db, subject="equipment-category", event="edit", details=cat.equipment_category)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update equipment category")
    db.refresh(cat)
    return cat


@router.delete("/equipment-categories/{equipment_category_id}", response_model=MessageOut)
def delete_equipment_category(equipment_category_id: int, db: Session = Depends(get_db)):
    cat = get_or_404(db, EquipmentCategory, equipment_category_id, "Equipment category")
    try:
        db.delete(cat)
        log_activity(db, subject="equipment-category", event="delete",
                     details=f"equipment_category_id={equipment_category_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete equipment category")
    return {"message": "Equipment category deleted"}


# ============================================================
# Equipment
# ============================================================
def _equipment_query(db: Session):
    return db.query(Equipment).options(
        joinedload(Equipment.equipment_category),
        selectinload(Equipment.maintenances),
    )


def _check_category(db: Session, data: dict) -> None:
    if data.get("equipment_category_id") is not None:
        get_or_404(db, EquipmentCategory, data["equipment_category_id"], "Equipment category")


@router.get("/equipment", response_model=List[EquipmentDetailOut])
def list_equipment(db: Session = Depends(get_db)):
    try:
        return _equipment_query(db).order_by(Equipment.equipment_id.asc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch equipment")


# declared before /equipment/{equipment_id}
@router.get("/equipment/count", response_model=int)
def count_equipment(db: Session = Depends(get_db)):
    try:
        return db.query(func.count(Equipment.equipment_id)).scalar() or 0
    except SQLAlchemyError:
        raise db_failure(db, "Failed to count equipment")


@router.get("/equipment/{equipment_id}", response_model=EquipmentDetailOut)
def get_equipment(equipment_id: int, db: Session = Depends(get_db)):
    try:
        eq = _equipment_query(db).filter(Equipment.equipment_id == equipment_id).first()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch equipment")
    if not eq:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return eq


@router.post("/equipment", response_model=EquipmentOut, status_code=status.HTTP_201_CREATED)
def create_equipment(payload: EquipmentCreate, db: Session = Depends(get_db)):
    data = payload.model_dump()
    data["equipment_category_id"] = data.get("equipment_category_id") or None
    _check_category(db, data)
    try:
        eq = Equipment(**data)
        db.add(eq)
        log_activity(db, subject="equipment", event="create", details=payload.equipment_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create equipment")
    db.refresh(eq)
    return eq


@router.put("/equipment/{equipment_id}", response_model=EquipmentOut, status_code=status.HTTP_202_ACCEPTED)
def update_equipment(equipment_id: int, payload: EquipmentUpdate, db: Session = Depends(get_db)):
    eq = get_or_404(db, Equipment, equipment_id, "Equipment")
    data = payload.model_dump(exclude_unset=True)
    _check_category(db, data)
    try:
        _apply(eq, data)
        log_activity(db, subject="equipment", event="edit", details=eq.equipment_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update equipment")
    db.refresh(eq)
    return eq


@router.delete("/equipment/{equipment_id}", response_model=MessageOut)
def delete_equipment(equipment_id: int, db: Session = Depends(get_db)):
    """Maintenance records of the equipment go with it."""
    eq = get_or_404(db, Equipment, equipment_id, "Equipment")
    try:
        db.delete(eq)
        log_activity(db, subject="equipment", event="delete", details=f"equipment_id={equipment_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete equipment")
    return {"message": "Equipment deleted"}


# ============================================================
# Maintenance records
# ============================================================
def _maintenance_query(db: Session):
    return db.query(Maintenance).options(joinedload(Maintenance.equipment))


@router.get("/maintenance", response_model=List[MaintenanceDetailOut])
def list_maintenance(db: Session = Depends(get_db)):
    try:
        return _maintenance_query(db).order_by(Maintenance.maintenance_id.desc()).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch maintenance records")


@router.get("/maintenance/{maintenance_id}", response_model=MaintenanceDetailOut)
def get_maintenance(maintenance_id: int, db: Session = Depends(get_db)):
    try:
        rec = _maintenance_query(db).filter(Maintenance.maintenance_id == maintenance_id).first()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch maintenance record")
    if not rec:
        raise HTTPException(status_code=404, detail="Maintenance record not found")
    return rec


@router.post("/maintenance", response_model=MaintenanceOut, status_code=status.HTTP_201_CREATED)
def create_maintenance(payload: MaintenanceCreate, db: Session = Depends(get_db)):
    eq = get_or_404(db, Equipment, payload.equipment_id, "Equipment")
    try:
        rec = Maintenance(**payload.model_dump(exclude_none=True))
        db.add(rec)
        log_activity(db, subject="maintenance", event="create",
                     details=f"{eq.equipment_name}: {payload.maintain_type}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create maintenance record")
    db.refresh(rec)
    return rec


@router.put("/maintenance/{maintenance_id}", response_model=MaintenanceOut, status_code=status.HTTP_202_ACCEPTED)
def update_maintenance(maintenance_id: int, payload: MaintenanceUpdate, db: Session = Depends(get_db)):
    rec = get_or_404(db, Maintenance, maintenance_id, "Maintenance record")
    data = payload.model_dump(exclude_unset=True)
    if data.get("equipment_id") is not None:
        get_or_404(db, Equipment, data["equipment_id"], "Equipment")
    try:
        _apply(rec, data)
        log_activity(db, subject="maintenance", event="edit", details=f"maintenance_id={maintenance_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update maintenance record")
    db.refresh(rec)
    return rec


@router.delete("/maintenance/{maintenance_id}", response_model=MessageOut)
def delete_maintenance(maintenance_id: int, db: Session = Depends(get_db)):
    rec = get_or_404(db, Maintenance, maintenance_id, "Maintenance record")
    try:
        db.delete(rec)
        log_activity(db, subject="maintenance", event="delete", details=f"maintenance_id={maintenance_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete maintenance record")
    return {"message": "Maintenance record deleted"}
