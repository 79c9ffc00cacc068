# rxmanager/utils/timezone.py
from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from rxmanager.core.config import settings


def now_local() -> datetime:
    """
    Returns a *naive* datetime in settings.TIMEZONE.
    DateTime columns are naive, so tzinfo is dropped after conversion.
    """
    return datetime.now(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None)
