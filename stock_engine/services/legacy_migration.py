"""One-shot import of the legacy in-memory inventory snapshot.

The legacy store kept inventory in a process-local map keyed by counters that
reset on restart. Its snapshot is imported once into the durable tables with
fresh ids; afterwards the engine never looks at it again.
"""
import json
import logging
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from stock_engine.core.constants import ACTION_MIGRATION, LEGACY_INVENTORY_MIGRATION
from stock_engine.core.exceptions import InventoryConflictError, LegacyMigrationError, PersistenceError
from stock_engine.database import SessionLocal
from stock_engine.models.applied_migration import AppliedMigration
from stock_engine.repositories import for_session
from stock_engine.services.inventory_service import create_inventory

logger = logging.getLogger(__name__)

_LEGACY_FIELD_ALIASES = {
    "productId": "product_id",
    "supplierId": "supplier_id",
    "reservedQuantity": "reserved_quantity",
    "lowStockThreshold": "low_stock_threshold",
    "restockLevel": "restock_level",
}
_LEGACY_FIELDS = (
    "product_id",
    "supplier_id",
    "quantity",
    "reserved_quantity",
    "low_stock_threshold",
    "restock_level",
    "status",
    "location",
    "notes",
    "sku",
)
_MIGRATION_NOTE = "Migrated from legacy in-memory inventory"


def load_legacy_snapshot(path):
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise LegacyMigrationError("Cannot read legacy snapshot {}: {}".format(path, exc)) from exc

    rows = payload.get("inventory") if isinstance(payload, dict) else payload
    if not isinstance(rows, list):
        raise LegacyMigrationError("Legacy snapshot {} has no inventory list".format(path))
    return rows


def normalize_legacy_record(raw):
    if not isinstance(raw, dict):
        raise TypeError("legacy record must be an object")
    record = {}
    for key, value in raw.items():
        key = _LEGACY_FIELD_ALIASES.get(key, key)
        if key in _LEGACY_FIELDS:
            record[key] = value
    record["product_id"] = int(record["product_id"])
    record["supplier_id"] = int(record["supplier_id"])
    record["quantity"] = int(record.get("quantity") or 0)
    return record


def migration_applied(db, name=LEGACY_INVENTORY_MIGRATION):
    stmt = select(AppliedMigration.id).where(AppliedMigration.name == name).limit(1)
    return db.execute(stmt).first() is not None


def migrate_legacy_inventory(db, rows, *, name=LEGACY_INVENTORY_MIGRATION):
    stats = {"created": 0, "skipped": 0, "failed": 0, "already_applied": False}
    if migration_applied(db, name):
        logger.info("Migration %s already applied, skipping", name)
        stats["already_applied"] = True
        return stats

    repos = for_session(db)
    for raw in rows:
        try:
            data = normalize_legacy_record(raw)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed legacy record %r: %s", raw, exc)
            stats["failed"] += 1
            continue

        if repos.inventory.get_by_pair(data["product_id"], data["supplier_id"]) is not None:
            stats["skipped"] += 1
            continue

        try:
            create_inventory(db, data, action=ACTION_MIGRATION, notes=_MIGRATION_NOTE)
        except InventoryConflictError:
            stats["skipped"] += 1
        except PersistenceError:
            stats["failed"] += 1
        else:
            stats["created"] += 1

    try:
        db.add(AppliedMigration(name=name, records=stats["created"]))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to record migration %s", name)
        raise PersistenceError("Migration {} could not be recorded".format(name)) from exc

    logger.info(
        "Migration %s applied: %s created, %s skipped, %s failed",
        name,
        stats["created"],
        stats["skipped"],
        stats["failed"],
    )
    return stats


def run_legacy_migration(path, session_factory=SessionLocal):
    db = session_factory()
    try:
        if migration_applied(db):
            logger.info("Migration %s already applied, skipping", LEGACY_INVENTORY_MIGRATION)
            return {"created": 0, "skipped": 0, "failed": 0, "already_applied": True}
        rows = load_legacy_snapshot(path)
        return migrate_legacy_inventory(db, rows)
    finally:
        db.close()


__all__ = [
    "load_legacy_snapshot",
    "migrate_legacy_inventory",
    "migration_applied",
    "normalize_legacy_record",
    "run_legacy_migration",
]
