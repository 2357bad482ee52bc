# FILE: app/models/inventory.py
from __future__ import annotations

import enum
from datetime import datetime, date
from decimal import Decimal
from sqlalchemy import (
    Column, Integer, String, Boolean, Date, DateTime, Numeric,
    ForeignKey, Text, Index,
)
from sqlalchemy.orm import relationship

from app.db.base import Base

Money = Numeric(14, 2)


# -------------------------
# Enums
# -------------------------
class UsageType(str, enum.Enum):
    TREATMENT = "treatment"
    WASTED = "wasted"
    EXPIRED = "expired"
    DAMAGED = "damaged"
    OTHER = "other"


# -------------------------
# Masters
# -------------------------
class ParentCategory(Base):
    __tablename__ = "inv_parent_categories"

    parent_category_id = Column(Integer, primary_key=True, index=True)
    parent_category_name = Column(String(200), nullable=False)
    description = Column(String(500), default="")

    sub_categories = relationship("SubCategory", back_populates="parent_category")


class SubCategory(Base):
    __tablename__ = "inv_sub_categories"

    sub_category_id = Column(Integer, primary_key=True, index=True)
    sub_category_name = Column(String(200), nullable=False)
    description = Column(String(500), default="")
    parent_category_id = Column(
        Integer,
        ForeignKey("inv_parent_categories.parent_category_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    parent_category = relationship("ParentCategory", back_populates="sub_categories")
    items = relationship("Item", back_populates="sub_category")


class Supplier(Base):
    __tablename__ = "inv_suppliers"

    supplier_id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), default="")
    email = Column(String(255), default="")
    phone_number = Column(String(50), default="")
    address = Column(String(1000), default="")
    city = Column(String(100), default="")
    state = Column(String(100), default="")
    postal_code = Column(String(20), default="")
    country = Column(String(100), default="")
    website = Column(String(255), default="")
    notes = Column(Text, default="")
    status = Column(String(20), default="active", nullable=False)

    items = relationship("Item", back_populates="supplier")
    purchase_orders = relationship("PurchaseOrder", back_populates="supplier")


class PaymentTerm(Base):
    __tablename__ = "inv_payment_terms"

    payment_term_id = Column(Integer, primary_key=True, index=True)
    payment_term_name = Column(String(100), nullable=False)
    description = Column(String(500), default="")


class ShippingMethod(Base):
    __tablename__ = "inv_shipping_methods"

    shipping_method_id = Column(Integer, primary_key=True, index=True)
    shipping_method_name = Column(String(100), nullable=False)
    description = Column(String(500), default="")


# -------------------------
# Items + Batches
# -------------------------
class Item(Base):
    __tablename__ = "inv_items"

    item_id = Column(Integer, primary_key=True, index=True)
    item_name = Column(String(255), nullable=False)
    unit_of_measurements = Column(String(50), default="unit")
    unit_price = Column(Money, nullable=False, default=Decimal("0.00"))
    storage_location = Column(String(255), default="")
    barcode = Column(String(100), nullable=True, index=True)
    expiry_alert_days = Column(Integer, nullable=False, default=30)
    description = Column(Text, default="")
    batch_tracking = Column(Boolean, nullable=False, default=False)

    sub_category_id = Column(
        Integer,
        ForeignKey("inv_sub_categories.sub_category_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    supplier_id = Column(
        Integer,
        ForeignKey("inv_suppliers.supplier_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    sub_category = relationship("SubCategory", back_populates="items")
    supplier = relationship("Supplier", back_populates="items")
    batches = relationship(
        "Batch",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="Batch.batch_id",
    )
    # item_id is part of the line's primary key; never null it out from here
    po_items = relationship("PurchaseOrderItem", back_populates="item", passive_deletes="all")


class Batch(Base):
    """
    Stock held for one item, received together.
    Items without batch tracking keep a single implicit batch.
    """
    __tablename__ = "inv_batches"
    __table_args__ = (
        Index("ix_inv_batch_item_expiry", "item_id", "expiry_date"),
    )

    batch_id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("inv_items.item_id", ondelete="CASCADE"), nullable=False, index=True)

    current_stock = Column(Integer, nullable=False, default=0)
    minimum_stock = Column(Integer, nullable=False, default=0)
    expiry_date = Column(Date, nullable=True)
    stock_date = Column(Date, nullable=False, default=date.today)

    item = relationship("Item", back_populates="batches")
    issues = relationship("StockIssue", back_populates="batch", cascade="all, delete-orphan")


class StockIssue(Base):
    """Stock-out record. Rows are written by issue_stock() only."""
    __tablename__ = "inv_stock_issues"

    stock_issue_id = Column(Integer, primary_key=True, index=True)
    batch_id = Column(Integer, ForeignKey("inv_batches.batch_id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    usage_type = Column(String(20), nullable=False, default=UsageType.TREATMENT.value)
    issued_to = Column(String(255), default="")
    notes = Column(Text, default="")
    date = Column(Date, nullable=False, default=date.today)

    batch = relationship("Batch", back_populates="issues")


# -------------------------
# Purchase Orders
# -------------------------
class PurchaseOrder(Base):
    __tablename__ = "inv_purchase_orders"
    __table_args__ = (
        Index("ix_inv_po_supplier_date", "supplier_id", "order_date"),
    )

    purchase_order_id = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("inv_suppliers.supplier_id"), nullable=False, index=True)
    requested_by = Column(String(255), default="")
    expected_delivery_date = Column(Date, nullable=True)
    payment_term_id = Column(
        Integer, ForeignKey("inv_payment_terms.payment_term_id", ondelete="SET NULL"), nullable=True)
    shipping_method_id = Column(
        Integer, ForeignKey("inv_shipping_methods.shipping_method_id", ondelete="SET NULL"), nullable=True)
    order_date = Column(Date, nullable=False, default=date.today)
    authorized_by = Column(String(255), default="")
    delivery_address = Column(String(1000), default="")
    notes = Column(Text, default="")

    # Σ(quantity × unit_price) over purchase_order_items
    total_amount = Column(Money, nullable=False, default=Decimal("0.00"))

    supplier = relationship("Supplier", back_populates="purchase_orders")
    payment_term = relationship("PaymentTerm")
    shipping_method = relationship("ShippingMethod")
    purchase_order_items = relationship(
        "PurchaseOrderItem",
        back_populates="purchase_order",
        cascade="all, delete-orphan",
    )
    stock_receivings = relationship(
        "StockReceiving",
        back_populates="purchase_order",
        cascade="all, delete-orphan",
    )


class PurchaseOrderItem(Base):
    __tablename__ = "inv_purchase_order_items"

    purchase_order_id = Column(
        Integer,
        ForeignKey("inv_purchase_orders.purchase_order_id", ondelete="CASCADE"),
        primary_key=True,
    )
    item_id = Column(Integer, ForeignKey("inv_items.item_id"), primary_key=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Money, nullable=False, default=Decimal("0.00"))

    purchase_order = relationship("PurchaseOrder", back_populates="purchase_order_items")
    item = relationship("Item", back_populates="po_items")


class StockReceiving(Base):
    __tablename__ = "inv_stock_receivings"

    stock_receiving_id = Column(Integer, primary_key=True, index=True)
    purchase_order_id = Column(
        Integer,
        ForeignKey("inv_purchase_orders.purchase_order_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    received_date = Column(Date, nullable=False, default=date.today)
    received_by = Column(String(255), default="")
    invoice_url = Column(String(1000), nullable=True)
    delivery_note_url = Column(String(1000), nullable=True)
    qc_report_url = Column(String(1000), nullable=True)
    notes = Column(Text, default="")
    status = Column(String(30), default="pending", nullable=False)

    purchase_order = relationship("PurchaseOrder", back_populates="stock_receivings")
