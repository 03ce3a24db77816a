# synciot/utils/clock.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Instante atual em UTC, sem tzinfo (formato armazenado no banco)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
