import json
import os
import tempfile
import unittest

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from stock_engine.core.exceptions import LegacyMigrationError
from stock_engine.database.base import Base
from stock_engine.database.engine import build_engine
from stock_engine.models import import_all_models
from stock_engine.models.applied_migration import AppliedMigration
from stock_engine.models.inventory_history import InventoryHistory
from stock_engine.services.inventory_service import create_inventory, get_inventory
from stock_engine.services.legacy_migration import (
    load_legacy_snapshot,
    migrate_legacy_inventory,
    migration_applied,
    normalize_legacy_record,
    run_legacy_migration,
)

LEGACY_ROWS = [
    {"id": 7, "productId": 1, "supplierId": 10, "quantity": 25, "lowStockThreshold": 5, "status": "in_stock"},
    {"id": 8, "productId": 2, "supplierId": 10, "quantity": 3, "status": "discontinued"},
    {"id": 9, "productId": 3, "supplierId": 10, "quantity": 40},
    {"id": 10, "supplierId": 10, "quantity": 1},
    "not-a-record",
]


class LegacyMigrationTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        self.engine = build_engine("sqlite:///:memory:")
        Base.metadata.create_all(bind=self.engine)
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.db = self.Session()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_normalize_accepts_camel_case(self):
        record = normalize_legacy_record(
            {"productId": "4", "supplierId": 2, "restockLevel": 80, "legacyField": True}
        )
        self.assertEqual(
            record,
            {"product_id": 4, "supplier_id": 2, "restock_level": 80, "quantity": 0},
        )

    def test_migrates_rows_once(self):
        create_inventory(self.db, {"product_id": 3, "supplier_id": 10, "quantity": 12})

        stats = migrate_legacy_inventory(self.db, LEGACY_ROWS)
        self.assertEqual(
            stats,
            {"created": 2, "skipped": 1, "failed": 2, "already_applied": False},
        )

        first = get_inventory(self.db, 1, 10)
        self.assertEqual(first.quantity, 25)
        self.assertEqual(first.low_stock_threshold, 5)
        self.assertEqual(first.status, "IN_STOCK")
        self.assertNotEqual(first.id, 7)

        discontinued = get_inventory(self.db, 2, 10)
        self.assertEqual(discontinued.status, "DISCONTINUED")
        self.assertEqual(discontinued.status_override, "DISCONTINUED")

        self.assertEqual(get_inventory(self.db, 3, 10).quantity, 12)

        migrated = self.db.execute(
            select(InventoryHistory).where(InventoryHistory.action == "migration")
        ).scalars().all()
        self.assertEqual(sorted(entry.product_id for entry in migrated), [1, 2])

        self.assertTrue(migration_applied(self.db))
        again = migrate_legacy_inventory(self.db, LEGACY_ROWS)
        self.assertTrue(again["already_applied"])
        self.assertEqual(again["created"], 0)
        self.assertEqual(len(self.db.execute(select(AppliedMigration)).scalars().all()), 1)

    def test_load_snapshot_formats(self):
        with tempfile.TemporaryDirectory() as tmp:
            wrapped = os.path.join(tmp, "wrapped.json")
            with open(wrapped, "w", encoding="utf-8") as handle:
                json.dump({"inventory": LEGACY_ROWS[:2]}, handle)
            self.assertEqual(len(load_legacy_snapshot(wrapped)), 2)

            plain = os.path.join(tmp, "plain.json")
            with open(plain, "w", encoding="utf-8") as handle:
                json.dump(LEGACY_ROWS[:3], handle)
            self.assertEqual(len(load_legacy_snapshot(plain)), 3)

            broken = os.path.join(tmp, "broken.json")
            with open(broken, "w", encoding="utf-8") as handle:
                handle.write("{not json")
            with self.assertRaises(LegacyMigrationError):
                load_legacy_snapshot(broken)

            with self.assertRaises(LegacyMigrationError):
                load_legacy_snapshot(os.path.join(tmp, "missing.json"))

    def test_run_uses_session_factory(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "snapshot.json")
            with open(path, "w", encoding="utf-8") as handle:
                json.dump(LEGACY_ROWS[:3], handle)

            stats = run_legacy_migration(path, session_factory=self.Session)
            self.assertEqual(stats["created"], 3)

            again = run_legacy_migration(path, session_factory=self.Session)
            self.assertTrue(again["already_applied"])

        self.assertEqual(get_inventory(self.db, 3, 10).quantity, 40)


if __name__ == "__main__":
    unittest.main()
