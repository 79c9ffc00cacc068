# rxmanager/services/rx_layout/grouping.py
from __future__ import annotations

from typing import Dict, Iterable, List

from rxmanager.services.rx_layout.errors import RxInputError
from rxmanager.services.rx_layout.entities import ResolvedEntry, TimeOfDay


def group_by_time(
    entries: Iterable[ResolvedEntry]
) -> Dict[TimeOfDay, List[ResolvedEntry]]:
    """
    Bucket entries by time of day, keeping the original entry order inside
    every bucket. An entry tagged morning+night lands in both buckets.

    Tags without entries are absent from the result (no empty lists).
    """
    buckets: Dict[TimeOfDay, List[ResolvedEntry]] = {}
    for idx, entry in enumerate(entries):
        if not entry.times:
            raise RxInputError(
                f"Entry #{idx + 1} ({entry.display_name}) has no time of day")
        for tag in dict.fromkeys(entry.times):
            buckets.setdefault(TimeOfDay.parse(tag), []).append(entry)
    return buckets
