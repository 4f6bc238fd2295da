"""Helpers for narrowing loosely typed Supabase rows."""
from typing import Any, Optional


def to_number(value: Any, default: float = 0.0) -> float:
    """Numeric columns come back as strings, numbers or None."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def result_rows(result: Any) -> list:
    data = getattr(result, "data", None) if result is not None else None
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return [data]
    return []


def first_row(result: Any) -> Optional[dict]:
    rows = result_rows(result)
    return rows[0] if rows else None
