import unittest
from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from stock_engine.database.base import Base
from stock_engine.database.engine import build_engine
from stock_engine.models import import_all_models
from stock_engine.models.product import Product
from stock_engine.repositories.sql import SqlInventoryRepository
from stock_engine.services.inventory_service import create_inventory
from stock_engine.services.report_service import (
    StockSummary,
    calculate_stock_status,
    low_stock_products,
)


class ReportServiceTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        self.engine = build_engine("sqlite:///:memory:")
        Base.metadata.create_all(bind=self.engine)
        Session = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.db = Session()
        self.db.add_all(
            [
                Product(id=1, supplier_id=10, name="A", price=2.5),
                Product(id=2, supplier_id=10, name="B", price=10.0),
                Product(id=3, supplier_id=10, name="C", price=4.0),
                Product(id=4, supplier_id=10, name="D", price=1.0),
            ]
        )
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _stock(self, product_id, quantity, threshold=10, supplier_id=10, **extra):
        data = {
            "product_id": product_id,
            "supplier_id": supplier_id,
            "quantity": quantity,
            "low_stock_threshold": threshold,
        }
        data.update(extra)
        return create_inventory(self.db, data)

    def test_status_partition(self):
        self._stock(1, 0)
        self._stock(2, -2)
        self._stock(3, 5)
        self._stock(4, 10)
        self._stock(5, 11)

        summary = calculate_stock_status(self.db, supplier_id=10)
        self.assertEqual(summary.total_products, 5)
        self.assertEqual(summary.out_of_stock, 2)
        self.assertEqual(summary.low_stock, 2)
        self.assertEqual(summary.in_stock, 1)
        self.assertEqual(
            summary.in_stock + summary.low_stock + summary.out_of_stock,
            summary.total_products,
        )

    def test_total_value_uses_product_prices(self):
        self._stock(1, 4)
        self._stock(2, 3)
        self._stock(9, 100)

        summary = calculate_stock_status(self.db)
        self.assertAlmostEqual(summary.total_value, 4 * 2.5 + 3 * 10.0)

    def test_supplier_filter(self):
        self._stock(1, 20)
        self._stock(1, 20, supplier_id=30)

        self.assertEqual(calculate_stock_status(self.db, supplier_id=30).total_products, 1)
        self.assertEqual(calculate_stock_status(self.db).total_products, 2)
        self.assertEqual(calculate_stock_status(self.db, supplier_id=99), StockSummary())

    def test_classification_ignores_override(self):
        self._stock(1, 3, status="DISCONTINUED")
        summary = calculate_stock_status(self.db)
        self.assertEqual(summary.low_stock, 1)

    def test_read_failure_returns_zeroed_summary(self):
        self._stock(1, 20)
        with patch.object(SqlInventoryRepository, "list", side_effect=SQLAlchemyError("timeout")):
            summary = calculate_stock_status(self.db)
        self.assertEqual(summary, StockSummary())
        self.assertEqual(
            summary.as_dict(),
            {"total_products": 0, "in_stock": 0, "low_stock": 0, "out_of_stock": 0, "total_value": 0.0},
        )

    def test_low_stock_products_most_urgent_first(self):
        self._stock(1, 5, threshold=10)
        self._stock(2, 1, threshold=10)
        self._stock(3, 3, threshold=4)
        self._stock(4, 0, threshold=10)

        ordered = low_stock_products(self.db, supplier_id=10)
        self.assertEqual([record.product_id for record in ordered], [2, 1, 3])


if __name__ == "__main__":
    unittest.main()
