from stock_engine.database.base import Base
from stock_engine.database.engine import engine
from stock_engine.database.session import SessionLocal

__all__ = ["Base", "engine", "SessionLocal"]
