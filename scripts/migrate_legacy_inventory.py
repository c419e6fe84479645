import argparse

from stock_engine.core.exceptions import InventoryError
from stock_engine.core.logging import setup_logging
from stock_engine.database import Base, engine
from stock_engine.models import import_all_models
from stock_engine.services.legacy_migration import run_legacy_migration


def parse_args():
    parser = argparse.ArgumentParser(
        description="Import the legacy in-memory inventory snapshot into the database (runs once)."
    )
    parser.add_argument("--path", required=True, help="Path to the legacy JSON snapshot.")
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    try:
        stats = run_legacy_migration(args.path)
    except InventoryError as exc:
        raise SystemExit(f"Migration failed: {exc}") from exc

    if stats["already_applied"]:
        print("Migration already applied, nothing to do.")
        return
    print(
        f"Migration complete: {stats['created']} created, "
        f"{stats['skipped']} skipped, {stats['failed']} failed"
    )


if __name__ == "__main__":
    main()
