# FILE: app/api/routes_inventory_masters.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.api.deps import get_db, db_failure, get_or_404
from app.models.inventory import (
    Supplier,
    ParentCategory,
    SubCategory,
    PaymentTerm,
    ShippingMethod,
)
from app.schemas.inventory import (
    SupplierCreate,
    SupplierUpdate,
    SupplierOut,
    ParentCategoryCreate,
    ParentCategoryUpdate,
    ParentCategoryOut,
    SubCategoryCreate,
    SubCategoryUpdate,
    SubCategoryOut,
    PaymentTermCreate,
    PaymentTermUpdate,
    PaymentTermOut,
    ShippingMethodCreate,
    ShippingMethodUpdate,
    ShippingMethodOut,
    MessageOut,
)
from app.services.activity_logger import log_activity

router = APIRouter(prefix="/inventory", tags=["Inventory - Masters"])


def _apply(obj, data: dict) -> None:
    for k, v in data.items():
        setattr(obj, k, v)


# ============================================================
# Suppliers
# ============================================================
@router.get("/suppliers", response_model=List[SupplierOut])
def list_suppliers(db: Session = Depends(get_db)):
    try:
        return db.query(Supplier).order_by(Supplier.company_name).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch suppliers")


@router.get("/suppliers/{supplier_id}", response_model=SupplierOut)
def get_supplier(supplier_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Supplier, supplier_id, "Supplier")


@router.post("/suppliers", response_model=SupplierOut, status_code=status.HTTP_201_CREATED)
def create_supplier(payload: SupplierCreate, db: Session = Depends(get_db)):
    try:
        sup = Supplier(**payload.model_dump())
        db.add(sup)
        log_activity(db, subject="supplier", event="create", details=payload.company_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create supplier")
    db.refresh(sup)
    return sup


@router.put("/suppliers/{supplier_id}", response_model=SupplierOut, status_code=status.HTTP_202_ACCEPTED)
def update_supplier(supplier_id: int, payload: SupplierUpdate, db: Session = Depends(get_db)):
    sup = get_or_404(db, Supplier, supplier_id, "Supplier")
    try:
        _apply(sup, payload.model_dump(exclude_unset=True))
        log_activity(db, subject="supplier", event="edit", details=sup.company_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update supplier")
    db.refresh(sup)
    return sup


@router.delete("/suppliers/{supplier_id}", response_model=MessageOut)
def delete_supplier(supplier_id: int, db: Session = Depends(get_db)):
    sup = get_or_404(db, Supplier, supplier_id, "Supplier")
    try:
        db.delete(sup)
        log_activity(db, subject="supplier", event="delete", details=f"supplier_id={supplier_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete supplier")
    return {"message": "Supplier deleted"}


# ============================================================
# Parent categories
# ============================================================
@router.get("/parent-categories", response_model=List[ParentCategoryOut])
def list_parent_categories(db: Session = Depends(get_db)):
    try:
        return db.query(ParentCategory).order_by(ParentCategory.parent_category_name).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch parent categories")


@router.get("/parent-categories/{parent_category_id}", response_model=ParentCategoryOut)
def get_parent_category(parent_category_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, ParentCategory, parent_category_id, "Parent category")


@router.post("/parent-categories", response_model=ParentCategoryOut, status_code=status.HTTP_201_CREATED)
def create_parent_category(payload: ParentCategoryCreate, db: Session = Depends(get_db)):
    try:
        pc = ParentCategory(**payload.model_dump())
        db.add(pc)
        log_activity(db, subject="parent-category", event="create", details=payload.parent_category_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create parent category")
    db.refresh(pc)
    return pc


@router.put("/parent-categories/{parent_category_id}", response_model=ParentCategoryOut,
            status_code=status.HTTP_202_ACCEPTED)
def update_parent_category(parent_category_id: int, payload: ParentCategoryUpdate, db: Session = Depends(get_db)):
    pc = get_or_404(db, ParentCategory, parent_category_id, "Parent category")
    try:
        _apply(pc, payload.model_dump(exclude_unset=True))
        log_activity(db, subject="parent-category", event="edit", details=pc.parent_category_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update parent category")
    db.refresh(pc)
    return pc


@router.delete("/parent-categories/{parent_category_id}", response_model=MessageOut)
def delete_parent_category(parent_category_id: int, db: Session = Depends(get_db)):
    pc = get_or_404(db, ParentCategory, parent_category_id, "Parent category")
    try:
        db.delete(pc)
        log_activity(db, subject="parent-category", event="delete",
                     details=f"parent_category_id={parent_category_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete parent category")
    return {"message": "Parent category deleted"}


# ============================================================
# Sub categories
# ============================================================
@router.get("/sub-categories", response_model=List[SubCategoryOut])
def list_sub_categories(db: Session = Depends(get_db)):
    try:
        return (
            db.query(SubCategory)
            .options(joinedload(SubCategory.parent_category))
            .order_by(SubCategory.sub_category_name)
            .all()
        )
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch sub categories")


@router.get("/sub-categories/{sub_category_id}", response_model=SubCategoryOut)
def get_sub_category(sub_category_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, SubCategory, sub_category_id, "Sub category")


@router.post("/sub-categories", response_model=SubCategoryOut, status_code=status.HTTP_201_CREATED)
def create_sub_category(payload: SubCategoryCreate, db: Session = Depends(get_db)):
    data = payload.model_dump()
    data["parent_category_id"] = data.get("parent_category_id") or None
    if data["parent_category_id"] is not None:
        get_or_404(db, ParentCategory, data["parent_category_id"], "Parent category")
    try:
        sc = SubCategory(**data)
        db.add(sc)
        log_activity(db, subject="sub-category", event="create", details=payload.sub_category_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create sub category")
    db.refresh(sc)
    return sc


@router.put("/sub-categories/{sub_category_id}", response_model=SubCategoryOut,
            status_code=status.HTTP_202_ACCEPTED)
def update_sub_category(sub_category_id: int, payload: SubCategoryUpdate, db: Session = Depends(get_db)):
    sc = get_or_404(db, SubCategory, sub_category_id, "Sub category")
    data = payload.model_dump(exclude_unset=True)
    if data.get("parent_category_id") is not None:
        get_or_404(db, ParentCategory, data["parent_category_id"], "Parent category")
    try:
        _apply(sc, data)
        log_activity(db, subject="sub-category", event="edit", details=sc.sub_category_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update sub category")
    db.refresh(sc)
    return sc


@router.delete("/sub-categories/{sub_category_id}", response_model=MessageOut)
def delete_sub_category(sub_category_id: int, db: Session = Depends(get_db)):
    sc = get_or_404(db, SubCategory, sub_category_id, "Sub category")
    try:
        db.delete(sc)
        log_activity(db, subject="sub-category", event="delete", details=f"sub_category_id={sub_category_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete sub category")
    return {"message": "Sub category deleted"}


# ============================================================
# Payment terms
# ============================================================
@router.get("/payment-terms", response_model=List[PaymentTermOut])
def list_payment_terms(db: Session = Depends(get_db)):
    try:
        return db.query(PaymentTerm).order_by(PaymentTerm.payment_term_name).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch payment terms")


@router.get("/payment-terms/{payment_term_id}", response_model=PaymentTermOut)
def get_payment_term(payment_term_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, PaymentTerm, payment_term_id, "Payment term")


@router.post("/payment-terms", response_model=PaymentTermOut, status_code=status.HTTP_201_CREATED)
def create_payment_term(payload: PaymentTermCreate, db: Session = Depends(get_db)):
    try:
        pt = PaymentTerm(**payload.model_dump())
        db.add(pt)
        log_activity(db, subject="payment-term", event="create", details=payload.payment_term_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create payment term")
    db.refresh(pt)
    return pt


@router.put("/payment-terms/{payment_term_id}", response_model=PaymentTermOut,
            status_code=status.HTTP_202_ACCEPTED)
def update_payment_term(payment_term_id: int, payload: PaymentTermUpdate, db: Session = Depends(get_db)):
    pt = get_or_404(db, PaymentTerm, payment_term_id, "Payment term")
    try:
        _apply(pt, payload.model_dump(exclude_unset=True))
        log_activity(db, subject="payment-term", event="edit", details=pt.payment_term_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update payment term")
    db.refresh(pt)
    return pt


@router.delete("/payment-terms/{payment_term_id}", response_model=MessageOut)
def delete_payment_term(payment_term_id: int, db: Session = Depends(get_db)):
    pt = get_or_404(db, PaymentTerm, payment_term_id, "Payment term")
    try:
        db.delete(pt)
        log_activity(db, subject="payment-term", event="delete", details=f"payment_term_id={payment_term_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete payment term")
    return {"message": "Payment term deleted"}


# ============================================================
# Shipping methods
# ============================================================
@router.get("/shipping-methods", response_model=List[ShippingMethodOut])
def list_shipping_methods(db: Session = Depends(get_db)):
    try:
        return db.query(ShippingMethod).order_by(ShippingMethod.shipping_method_name).all()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to fetch shipping methods")


@router.get("/shipping-methods/{shipping_method_id}", response_model=ShippingMethodOut)
def get_shipping_method(shipping_method_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, ShippingMethod, shipping_method_id, "Shipping method")


@router.post("/shipping-methods", response_model=ShippingMethodOut, status_code=status.HTTP_201_CREATED)
def create_shipping_method(payload: ShippingMethodCreate, db: Session = Depends(get_db)):
    try:
        sm = ShippingMethod(**payload.model_dump())
        db.add(sm)
        log_activity(db, subject="shipping-method", event="create", details=payload.shipping_method_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to create shipping method")
    db.refresh(sm)
    return sm


@router.put("/shipping-methods/{shipping_method_id}", response_model=ShippingMethodOut,
            status_code=status.HTTP_202_ACCEPTED)
def update_shipping_method(shipping_method_id: int, payload: ShippingMethodUpdate, db: Session = Depends(get_db)):
    sm = get_or_404(db, ShippingMethod, shipping_method_id, "Shipping method")
    try:
        _apply(sm, payload.model_dump(exclude_unset=True))
        log_activity(db, subject="shipping-method", event="edit", details=sm.shipping_method_name)
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to update shipping method")
    db.refresh(sm)
    return sm


@router.delete("/shipping-methods/{shipping_method_id}", response_model=MessageOut)
def delete_shipping_method(shipping_method_id: int, db: Session = Depends(get_db)):
    sm = get_or_404(db, ShippingMethod, shipping_method_id, "Shipping method")
    try:
        db.delete(sm)
        log_activity(db, subject="shipping-method", event="delete",
                     details=f"shipping_method_id={shipping_method_id}")
        db.commit()
    except SQLAlchemyError:
        raise db_failure(db, "Failed to delete shipping method")
    return {"message": "Shipping method deleted"}
