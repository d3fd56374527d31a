from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Optional


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return to_json(value)
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def to_json(
    obj: Any,
    *,
    exclude: Iterable[str] = (),
    renames: Optional[Mapping[str, str]] = None,
) -> dict:
    """Turn a domain dataclass into a JSON-ready dict with camelCase keys."""
    skip = set(exclude)
    renames = renames or {}
    out: dict = {}
    for f in fields(obj):
        if f.name in skip:
            continue
        key = renames.get(f.name) or camel_case(f.name)
        out[key] = _plain(getattr(obj, f.name))
    return out


def to_json_list(items: Iterable[Any], **kwargs: Any) -> list[dict]:
    return [to_json(item, **kwargs) for item in items]
