# FILE: app/schemas/inventory.py
from __future__ import annotations

from datetime import date, date as dt_date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict, condecimal

from app.models.inventory import UsageType

Money = condecimal(max_digits=14, decimal_places=2)


# ---------- Categories ----------


class ParentCategoryBase(BaseModel):
    parent_category_name: str
    description: str | None = ""


class ParentCategoryCreate(ParentCategoryBase):
    pass


class ParentCategoryUpdate(BaseModel):
    parent_category_name: Optional[str] = None
    description: Optional[str] = None


class ParentCategoryOut(ParentCategoryBase):
    parent_category_id: int

    model_config = ConfigDict(from_attributes=True)


class SubCategoryBase(BaseModel):
    sub_category_name: str
    description: str | None = ""
    parent_category_id: Optional[int] = None


class SubCategoryCreate(SubCategoryBase):
    pass


class SubCategoryUpdate(BaseModel):
    sub_category_name: Optional[str] = None
    description: Optional[str] = None
    parent_category_id: Optional[int] = None


class SubCategoryOut(SubCategoryBase):
    sub_category_id: int
    parent_category: Optional[ParentCategoryOut] = None

    model_config = ConfigDict(from_attributes=True)


# ---------- Suppliers ----------


class SupplierBase(BaseModel):
    company_name: str
    contact_person: str | None = ""
    email: str | None = ""
    phone_number: str | None = ""
    address: str | None = ""
    city: str | None = ""
    state: str | None = ""
    postal_code: str | None = ""
    country: str | None = ""
    website: str | None = ""
    notes: str | None = ""
    status: str = "active"


class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(BaseModel):
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class SupplierOut(SupplierBase):
    supplier_id: int

    model_config = ConfigDict(from_attributes=True)


# ---------- Payment terms / Shipping methods ----------


class PaymentTermBase(BaseModel):
    payment_term_name: str
    description: str | None = ""


class PaymentTermCreate(PaymentTermBase):
    pass


class PaymentTermUpdate(BaseModel):
    payment_term_name: Optional[str] = None
    description: Optional[str] = None


class PaymentTermOut(PaymentTermBase):
    payment_term_id: int

    model_config = ConfigDict(from_attributes=True)


class ShippingMethodBase(BaseModel):
    shipping_method_name: str
    description: str | None = ""


class ShippingMethodCreate(ShippingMethodBase):
    pass


class ShippingMethodUpdate(BaseModel):
    shipping_method_name: Optional[str] = None
    description: Optional[str] = None


class ShippingMethodOut(ShippingMethodBase):
    shipping_method_id: int

    model_config = ConfigDict(from_attributes=True)


# ---------- Batches ----------


class BatchFields(BaseModel):
    current_stock: int = 0
    minimum_stock: int = 0
    expiry_date: Optional[date] = None
    stock_date: Optional[date] = None


class BatchCreate(BatchFields):
    item_id: int


class BatchUpdate(BaseModel):
    item_id: Optional[int] = None
    current_stock: Optional[int] = None
    minimum_stock: Optional[int] = None
    expiry_date: Optional[date] = None
    stock_date: Optional[date] = None


class BatchOut(BatchFields):
    batch_id: int
    item_id: int
    stock_date: date

    model_config = ConfigDict(from_attributes=True)


# ---------- Items ----------


class ItemBase(BaseModel):
    item_name: str
    unit_of_measurements: str | None = "unit"
    unit_price: Money = Decimal("0")
    storage_location: str | None = ""
    barcode: Optional[str] = None
    expiry_alert_days: int = Field(30, ge=0)
    description: str | None = ""
    sub_category_id: Optional[int] = None
    supplier_id: Optional[int] = None
    batch_tracking: bool = False


class ItemCreate(ItemBase):
    # created together with the item, in one transaction
    batches: List[BatchFields] = Field(default_factory=list)


class ItemUpdate(BaseModel):
    item_name: Optional[str] = None
    unit_of_measurements: Optional[str] = None
    unit_price: Optional[Money] = None
    storage_location: Optional[str] = None
    barcode: Optional[str] = None
    expiry_alert_days: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    sub_category_id: Optional[int] = None
    supplier_id: Optional[int] = None
    batch_tracking: Optional[bool] = None


class ItemOut(ItemBase):
    item_id: int
    created_at: datetime
    updated_at: datetime
    sub_category: Optional[SubCategoryOut] = None
    supplier: Optional[SupplierOut] = None

    model_config = ConfigDict(from_attributes=True)


class ItemWithBatchesOut(ItemOut):
    batches: List[BatchOut] = []


class BatchWithItemOut(BatchOut):
    item: ItemOut


# ---------- Rollups ----------


class StockGroupOut(BaseModel):
    """One item with the batches that triggered an alert."""
    item: ItemOut
    batches: List[BatchOut]


# ---------- Stock issues ----------


class StockIssueCreate(BaseModel):
    batch_id: int
    quantity: int = Field(..., gt=0)
    usage_type: UsageType = UsageType.TREATMENT
    issued_to: str | None = ""
    notes: str | None = ""


class StockIssueUpdate(BaseModel):
    usage_type: Optional[UsageType] = None
    issued_to: Optional[str] = None
    notes: Optional[str] = None
    date: Optional[dt_date] = None


class StockIssueOut(BaseModel):
    stock_issue_id: int
    batch_id: int
    quantity: int
    usage_type: str
    issued_to: str | None = ""
    notes: str | None = ""
    date: dt_date
    batch: Optional[BatchWithItemOut] = None

    model_config = ConfigDict(from_attributes=True)


# ---------- Purchase Orders ----------


class PurchaseOrderBase(BaseModel):
    supplier_id: int
    requested_by: str | None = ""
    expected_delivery_date: Optional[date] = None
    payment_term_id: Optional[int] = None
    shipping_method_id: Optional[int] = None
    order_date: Optional[date] = None
    authorized_by: str | None = ""
    delivery_address: str | None = ""
    notes: str | None = ""


class PurchaseOrderCreate(PurchaseOrderBase):
    pass


class PurchaseOrderUpdate(BaseModel):
    supplier_id: Optional[int] = None
    requested_by: Optional[str] = None
    expected_delivery_date: Optional[date] = None
    payment_term_id: Optional[int] = None
    shipping_method_id: Optional[int] = None
    order_date: Optional[date] = None
    authorized_by: Optional[str] = None
    delivery_address: Optional[str] = None
    notes: Optional[str] = None


class PurchaseOrderItemCreate(BaseModel):
    purchase_order_id: int
    item_id: int
    quantity: int = Field(..., gt=0)
    # falls back to the item's unit_price
    unit_price: Optional[Money] = None


class PurchaseOrderItemOut(BaseModel):
    purchase_order_id: int
    item_id: int
    quantity: int
    unit_price: Money

    model_config = ConfigDict(from_attributes=True)


class PurchaseOrderOut(PurchaseOrderBase):
    purchase_order_id: int
    order_date: date
    total_amount: Money

    model_config = ConfigDict(from_attributes=True)


class StockReceivingBase(BaseModel):
    purchase_order_id: int
    received_date: Optional[date] = None
    received_by: str | None = ""
    invoice_url: Optional[str] = None
    delivery_note_url: Optional[str] = None
    qc_report_url: Optional[str] = None
    notes: str | None = ""
    status: str = "pending"


class StockReceivingCreate(StockReceivingBase):
    pass


class StockReceivingUpdate(BaseModel):
    purchase_order_id: Optional[int] = None
    received_date: Optional[date] = None
    received_by: Optional[str] = None
    invoice_url: Optional[str] = None
    delivery_note_url: Optional[str] = None
    qc_report_url: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class StockReceivingOut(StockReceivingBase):
    stock_receiving_id: int
    received_date: date
    purchase_order: Optional[PurchaseOrderOut] = None

    model_config = ConfigDict(from_attributes=True)


class StockReceivingSummaryOut(StockReceivingBase):
    stock_receiving_id: int
    received_date: date

    model_config = ConfigDict(from_attributes=True)


class PurchaseOrderItemDetailOut(PurchaseOrderItemOut):
    purchase_order: Optional[PurchaseOrderOut] = None
    item: Optional[ItemOut] = None


class PurchaseOrderDetailOut(PurchaseOrderOut):
    supplier: Optional[SupplierOut] = None
    payment_term: Optional[PaymentTermOut] = None
    shipping_method: Optional[ShippingMethodOut] = None
    purchase_order_items: List[PurchaseOrderItemOut] = []
    stock_receivings: List[StockReceivingSummaryOut] = []


class MessageOut(BaseModel):
    message: str
