# app/models/__init__.py
from .inventory import (
    ParentCategory,
    SubCategory,
    Supplier,
    PaymentTerm,
    ShippingMethod,
    Item,
    Batch,
    StockIssue,
    PurchaseOrder,
    PurchaseOrderItem,
    StockReceiving,
    UsageType,
)
from .equipment import EquipmentCategory, Equipment, Maintenance
from .activity_log import ActivityLog

__all__ = [
    "ParentCategory",
    "SubCategory",
    "Supplier",
    "PaymentTerm",
    "ShippingMethod",
    "Item",
    "Batch",
    "StockIssue",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "StockReceiving",
    "UsageType",
    "EquipmentCategory",
    "Equipment",
    "Maintenance",
    "ActivityLog",
]
