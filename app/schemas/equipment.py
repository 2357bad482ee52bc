from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, condecimal

Money = condecimal(max_digits=14, decimal_places=2)


# ---------- Equipment categories ----------


class EquipmentCategoryCreate(BaseModel):
    equipment_category: str


class EquipmentCategoryUpdate(BaseModel):
    equipment_category: Optional[str] = None


class EquipmentCategoryOut(BaseModel):
    equipment_category_id: int
    equipment_category: str

    model_config = ConfigDict(from_attributes=True)


# ---------- Equipment ----------


class EquipmentBase(BaseModel):
    equipment_name: str
    equipment_category_id: Optional[int] = None
    brand: str | None = ""
    model: str | None = ""
    serial_number: str | None = ""
    purchase_date: Optional[date] = None
    purchase_price: Money = Decimal("0")
    location: str | None = ""
    warranty_start_date: Optional[date] = None
    warranty_end_date: Optional[date] = None
    status: str = "active"
    notes: str | None = ""


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentUpdate(BaseModel):
    equipment_name: Optional[str] = None
    equipment_category_id: Optional[int] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    purchase_date: Optional[date] = None
    purchase_price: Optional[Money] = None
    location: Optional[str] = None
    warranty_start_date: Optional[date] = None
    warranty_end_date: Optional[date] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class EquipmentOut(EquipmentBase):
    equipment_id: int

    model_config = ConfigDict(from_attributes=True)


# ---------- Maintenance ----------


class MaintenanceBase(BaseModel):
    equipment_id: int
    maintain_type: str = "preventive"
    maintenance_date: Optional[date] = None
    description: str | None = ""
    performed_by: str | None = ""
    cost: Money = Decimal("0")
    next_maintenance_date: Optional[date] = None
    notes: str | None = ""


class MaintenanceCreate(MaintenanceBase):
    pass


class MaintenanceUpdate(BaseModel):
    equipment_id: Optional[int] = None
    maintain_type: Optional[str] = None
    maintenance_date: Optional[date] = None
    description: Optional[str] = None
    performed_by: Optional[str] = None
    cost: Optional[Money] = None
    next_maintenance_date: Optional[date] = None
    notes: Optional[str] = None


class MaintenanceOut(MaintenanceBase):
    maintenance_id: int
    maintenance_date: date

    model_config = ConfigDict(from_attributes=True)


class MaintenanceDetailOut(MaintenanceOut):
    equipment: Optional[EquipmentOut] = None


class EquipmentDetailOut(EquipmentOut):
    equipment_category: Optional[EquipmentCategoryOut] = None
    maintenances: List[MaintenanceOut] = []


class EquipmentCategoryDetailOut(EquipmentCategoryOut):
    equipments: List[EquipmentOut] = []
