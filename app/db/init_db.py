# app/db/init_db.py
from __future__ import annotations

import argparse
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.session import engine
from app.db.base import Base

# Import all models so metadata is complete
from app.models import (  # noqa: F401
    inventory, equipment, activity_log)
from app.models.inventory import PaymentTerm, ShippingMethod, ParentCategory
from app.models.equipment import EquipmentCategory


def print_tables(conn):
    names = inspect(conn).get_table_names()
    print("Existing tables:", names)
    return set(names)


def seed_masters(db: Session) -> None:
    """
    Seed ONLY missing reference rows; safe to run multiple times.
    """
    PAYMENT_TERMS = [
        ("Cash on Delivery", "Payment on receipt of goods"),
        ("Net 15", "Payment due 15 days after invoice"),
        ("Net 30", "Payment due 30 days after invoice"),
        ("Advance", "Full payment before dispatch"),
    ]
    SHIPPING_METHODS = [
        ("Courier", "Door delivery by courier"),
        ("Supplier Delivery", "Supplier's own vehicle"),
        ("Pickup", "Collected by clinic staff"),
    ]
    PARENT_CATEGORIES = [
        ("Consumables", "Gloves, masks, cotton, suction tips"),
        ("Restorative Materials", "Composites, cements, bonding agents"),
        ("Endodontics", "Files, sealers, gutta-percha"),
        ("Anaesthetics", "Local anaesthetic cartridges and needles"),
        ("Instruments", "Hand instruments and burs"),
    ]
    EQUIPMENT_CATEGORIES = [
        "Imaging Equipment",
        "Dental Chairs",
        "Sterilization",
        "Laboratory Equipment",
        "Computer/Software",
        "Other",
    ]

    for name, desc in PAYMENT_TERMS:
        if not db.query(PaymentTerm).filter(PaymentTerm.payment_term_name == name).first():
            db.add(PaymentTerm(payment_term_name=name, description=desc))

    for name, desc in SHIPPING_METHODS:
        if not db.query(ShippingMethod).filter(ShippingMethod.shipping_method_name == name).first():
            db.add(ShippingMethod(shipping_method_name=name, description=desc))

    for name, desc in PARENT_CATEGORIES:
        if not db.query(ParentCategory).filter(ParentCategory.parent_category_name == name).first():
            db.add(ParentCategory(parent_category_name=name, description=desc))

    for name in EQUIPMENT_CATEGORIES:
        if not db.query(EquipmentCategory).filter(EquipmentCategory.equipment_category == name).first():
            db.add(EquipmentCategory(equipment_category=name))


def run(fresh: bool = False, seed: bool = False) -> None:
    if fresh:
        print("WARNING: Dropping ALL tables (dev only) …")
        Base.metadata.drop_all(bind=engine)

    print("Creating all missing tables …")
    Base.metadata.create_all(bind=engine)

    with engine.connect() as conn:
        print_tables(conn)

    if not seed:
        return

    try:
        with Session(engine) as db:
            seed_masters(db)
            db.commit()
            print("Masters seeded (missing rows inserted).")
    except SQLAlchemyError as e:
        print("Seeding failed:", e)
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Initialize DB (create tables, seed reference masters).")
    parser.add_argument(
        "--fresh",
        action="store_true",
        help="Drop & recreate all tables (DEV ONLY).",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Insert payment terms, shipping methods, parent and equipment categories.",
    )
    args = parser.parse_args()
    run(fresh=args.fresh, seed=args.seed)
