from typing import Optional

from fastapi import Header

from stock_engine.core.security import resolve_user_id
from stock_engine.database.session import get_db


def current_user_id(
    api_key: Optional[str] = Header(None, alias="X-API-Key"),
    authorization: Optional[str] = Header(None),
) -> Optional[int]:
    return resolve_user_id(api_key, authorization)


__all__ = ["current_user_id", "get_db"]
