from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from flask import request

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses/dates/tuples into JSON-friendly structures."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def require_field(body: dict, name: str) -> Any:
    value = body.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing field: {name}")
    return value


def date_field(body: dict, name: str, *, default: Optional[date] = None) -> date:
    raw = body.get(name)
    if raw in (None, ""):
        if default is None:
            raise ValidationError(f"Missing field: {name}")
        return default
    return parse_iso_date(str(raw))


def date_arg(name: str, *, default: Optional[date] = None) -> date:
    return date_field(request.args, name, default=default)
