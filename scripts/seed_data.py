import argparse

from sqlalchemy import delete, select

from stock_engine.core.logging import setup_logging
from stock_engine.database import Base, SessionLocal, engine
from stock_engine.models import import_all_models
from stock_engine.models.inventory import Inventory
from stock_engine.models.inventory_history import InventoryHistory
from stock_engine.models.product import Product
from stock_engine.models.stock_alert import StockAlert
from stock_engine.services.inventory_service import create_inventory


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample products and inventory.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(StockAlert))
            db.execute(delete(InventoryHistory))
            db.execute(delete(Inventory))
            db.execute(delete(Product))
            db.commit()

        has_product = db.execute(select(Product.id).limit(1)).first()
        if has_product:
            print("Seed skipped: products already exist.")
            return

        products = [
            Product(id=1, supplier_id=10, name="Cimento CP-II 50kg", price=38.9),
            Product(id=2, supplier_id=10, name="Argamassa AC-III 20kg", price=42.5),
            Product(id=3, supplier_id=20, name="Tijolo cerâmico 9 furos", price=1.2),
        ]
        db.add_all(products)
        db.commit()

        create_inventory(db, {"product_id": 1, "supplier_id": 10, "quantity": 120, "location": "A-01"})
        create_inventory(db, {"product_id": 2, "supplier_id": 10, "quantity": 6, "low_stock_threshold": 10})
        create_inventory(db, {"product_id": 3, "supplier_id": 20, "quantity": 0})
        print("Seed data created.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
