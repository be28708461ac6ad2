"""Column conversion helpers shared by the SQLite stores."""

import json
from datetime import date, datetime
from typing import Any


def parse_datetime(value: str | None) -> datetime:
    """Parse an ISO timestamp column, falling back to now for bad values."""
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return datetime.utcnow()


def parse_date(value: str | None) -> date:
    if value:
        try:
            return date.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return date.today()


def parse_json(value: str | None, default: Any) -> Any:
    if not value:
        return default
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return default


def dump_combination(option_ids: list[int]) -> str:
    """Canonical text form of an option combination (sorted JSON array)."""
    return json.dumps(sorted(option_ids))


def placeholders(values: list[Any]) -> str:
    return ", ".join("?" for _ in values)
