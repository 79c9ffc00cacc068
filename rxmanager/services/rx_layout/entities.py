# rxmanager/services/rx_layout/entities.py
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from rxmanager.services.rx_layout.errors import RxInputError

UNKNOWN_MEDICINE = "Unknown Medicine"
AS_DIRECTED = "As directed"
STANDARD_DOSE = "Standard dose"


def _present(v: Optional[str]) -> bool:
    return bool((v or "").strip())


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"

    @classmethod
    def parse(cls, value: Any) -> "TimeOfDay":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise RxInputError(f"Unknown time of day: {value!r}") from None

    @property
    def label(self) -> str:
        return self.value.upper()


# sections are always laid out in this order
SECTION_ORDER: Tuple[TimeOfDay, ...] = (
    TimeOfDay.MORNING,
    TimeOfDay.AFTERNOON,
    TimeOfDay.NIGHT,
)


class MealRelation(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    NONE = "none"

    @classmethod
    def parse(cls, value: Any) -> "MealRelation":
        if isinstance(value, cls):
            return value
        s = (str(value) if value is not None else "").strip().lower()
        if not s:
            return cls.NONE
        try:
            return cls(s)
        except ValueError:
            raise RxInputError(f"Unknown meal relation: {value!r}") from None

    @property
    def label(self) -> Optional[str]:
        if self is MealRelation.BEFORE:
            return "BEFORE MEAL"
        if self is MealRelation.AFTER:
            return "AFTER MEAL"
        return None


@dataclass(frozen=True)
class ResolvedEntry:
    """
    One prescription line with its catalog data already looked up.

    name/catalog_dosage are None when the medicine no longer exists.
    """
    times: Tuple[TimeOfDay, ...]
    name: Optional[str] = None
    catalog_dosage: Optional[str] = None
    instruction: Optional[str] = None
    meal: MealRelation = MealRelation.NONE
    legacy_dosage: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name.strip() if _present(self.name) else UNKNOWN_MEDICINE

    @property
    def dosage_text(self) -> str:
        # first non-empty source wins, never concatenated
        for v in (self.instruction, self.legacy_dosage, self.catalog_dosage):
            if _present(v):
                return v.strip()
        return AS_DIRECTED

    @property
    def short_label(self) -> str:
        for v in (self.instruction, self.legacy_dosage):
            if _present(v):
                return v.strip()
        return STANDARD_DOSE


@dataclass(frozen=True)
class PrescriptionDocument:
    """Immutable input of one render pass."""
    created_at: datetime
    entries: Tuple[ResolvedEntry, ...] = ()
    rx_number: str = ""

    @property
    def suffix(self) -> str:
        return self.rx_number[-8:]

    @property
    def filename(self) -> str:
        if not self.suffix:
            return "prescription.pdf"
        return f"prescription-{self.suffix}.pdf"


@dataclass(frozen=True)
class Rect:
    """Millimetres, measured from the top-left corner of the page."""
    x: float
    y: float
    w: float
    h: float

    @property
    def bottom(self) -> float:
        return self.y + self.h


@dataclass(frozen=True)
class LayoutCursor:
    page: int = 0
    y: float = 0.0

    def advance(self, dy: float) -> "LayoutCursor":
        return replace(self, y=self.y + dy)

    def next_page(self, top: float) -> "LayoutCursor":
        return LayoutCursor(page=self.page + 1, y=top)


@dataclass(frozen=True)
class DrawOp:
    """One recorded backend call."""
    kind: str  # panel | border | text | new_page
    page: int
    rect: Optional[Rect] = None
    color: Optional[str] = None
    width: Optional[float] = None
    text: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    size: Optional[float] = None
    weight: Optional[str] = None
    align: Optional[str] = None

    def as_dict(self) -> dict:
        out: dict = {"kind": self.kind, "page": self.page}
        for k in ("color", "width", "text", "x", "y", "size", "weight",
                  "align"):
            v = getattr(self, k)
            if v is not None:
                out[k] = v
        if self.rect is not None:
            out["rect"] = {
                "x": self.rect.x,
                "y": self.rect.y,
                "w": self.rect.w,
                "h": self.rect.h,
            }
        return out
