# app/api/router.py
from fastapi import APIRouter
from app.api import (
    routes_inventory_items,
    routes_inventory_batches,
    routes_inventory_stock_issues,
    routes_inventory_purchase_orders,
    routes_inventory_stock_receiving,
    routes_inventory_masters,
    routes_inventory_activity_log,
    routes_inventory_reports,
    routes_inventory_equipment,
)

api_router = APIRouter()

api_router.include_router(routes_inventory_items.router)
api_router.include_router(routes_inventory_batches.router)
api_router.include_router(routes_inventory_stock_issues.router)
api_router.include_router(routes_inventory_purchase_orders.router)
api_router.include_router(routes_inventory_stock_receiving.router)
api_router.include_router(routes_inventory_masters.router)
api_router.include_router(routes_inventory_activity_log.router)
api_router.include_router(routes_inventory_reports.router)
api_router.include_router(routes_inventory_equipment.router)
