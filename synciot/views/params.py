# synciot/views/params.py
from datetime import datetime, timezone
from typing import Optional

from flask import request

from synciot.utils.errors import ValidationError


def int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    """Inteiro da query string; ausente ou inválido vira `default`."""
    raw = request.args.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def float_arg(name: str) -> Optional[float]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValidationError(f"'{name}' must be a number")


def bool_arg(name: str) -> Optional[bool]:
    raw = request.args.get(name)
    if raw is None:
        return None
    return raw.lower() == "true"


def date_arg(name: str) -> Optional[datetime]:
    """Data ISO-8601; com fuso é convertida para UTC sem tzinfo."""
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"'{name}' must be an ISO-8601 date")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
