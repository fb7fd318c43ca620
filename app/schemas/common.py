from decimal import Decimal
from typing import Any

from pydantic import BaseModel

# 0, .5, 0.25 ... a fraction below one, written as a string
EQUITY_PATTERN = r"^(0|0?\.[0-9]+)$"


def equity_to_str(value: Any) -> Any:
    """
    Render a stored NUMERIC equity as a decimal string.

    Postgres hands back Decimal, SQLite hands back int or float; the API
    always speaks strings.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return value


class DeletedResponse(BaseModel):
    """Schema for delete responses: the key of the removed row"""
    deleted: str
