# src/utils/dt.py

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Текущее время в UTC (naive, как хранится в колонках DateTime без таймзоны)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
