from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from stock_engine.database.base import Base


class AppliedMigration(Base):
    __tablename__ = "applied_migrations"

    id = Column(Integer, primary_key=True)
    name = Column(String(80), nullable=False)
    records = Column(Integer, nullable=False, default=0)
    applied_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_applied_migrations_name"),
    )


__all__ = ["AppliedMigration"]
