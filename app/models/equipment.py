# FILE: app/models/equipment.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Column, Integer, String, Date, Numeric, ForeignKey, Text, Index
from sqlalchemy.orm import relationship

from app.db.base import Base

Money = Numeric(14, 2)


class EquipmentCategory(Base):
    __tablename__ = "inv_equipment_categories"

    equipment_category_id = Column(Integer, primary_key=True, index=True)
    equipment_category = Column(String(200), nullable=False)

    equipments = relationship("Equipment", back_populates="equipment_category")


class Equipment(Base):
    """Clinic equipment (chairs, sterilizers, imaging units) tracked per serial."""
    __tablename__ = "inv_equipment"

    equipment_id = Column(Integer, primary_key=True, index=True)
    equipment_name = Column(String(255), nullable=False)
    equipment_category_id = Column(
        Integer,
        ForeignKey("inv_equipment_categories.equipment_category_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    brand = Column(String(255), default="")
    model = Column(String(255), default="")
    serial_number = Column(String(255), default="", index=True)
    purchase_date = Column(Date, nullable=True)
    purchase_price = Column(Money, nullable=False, default=Decimal("0.00"))
    location = Column(String(255), default="")
    warranty_start_date = Column(Date, nullable=True)
    warranty_end_date = Column(Date, nullable=True)
    status = Column(String(30), nullable=False, default="active")
    notes = Column(Text, default="")

    equipment_category = relationship("EquipmentCategory", back_populates="equipments")
    maintenances = relationship(
        "Maintenance",
        back_populates="equipment",
        cascade="all, delete-orphan",
        order_by="Maintenance.maintenance_date",
    )


class Maintenance(Base):
    __tablename__ = "inv_maintenances"
    __table_args__ = (
        Index("ix_inv_maintenance_equipment_date", "equipment_id", "maintenance_date"),
    )

    maintenance_id = Column(Integer, primary_key=True, index=True)
    equipment_id = Column(
        Integer,
        ForeignKey("inv_equipment.equipment_id", ondelete="CASCADE"),
        nullable=False,
    )
    maintain_type = Column(String(30), nullable=False, default="preventive")  # preventive / corrective / ...
    maintenance_date = Column(Date, nullable=False, default=date.today)
    description = Column(Text, default="")
    performed_by = Column(String(255), default="")
    cost = Column(Money, nullable=False, default=Decimal("0.00"))
    next_maintenance_date = Column(Date, nullable=True)
    notes = Column(Text, default="")

    equipment = relationship("Equipment", back_populates="maintenances")
