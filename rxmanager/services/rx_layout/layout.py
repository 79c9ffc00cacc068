# rxmanager/services/rx_layout/layout.py
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rxmanager.services.rx_layout.backend import BOLD, NORMAL, RenderBackend
from rxmanager.services.rx_layout.errors import RxLayoutError
from rxmanager.services.rx_layout.grouping import group_by_time
from rxmanager.services.rx_layout.entities import (
    SECTION_ORDER,
    LayoutCursor,
    PrescriptionDocument,
    Rect,
    ResolvedEntry,
    TimeOfDay,
)

logger = logging.getLogger(__name__)

# -------------------------------
# Geometry (mm, top-down)
# -------------------------------
TOP_MARGIN = 20.0
BOTTOM_MARGIN = 20.0
SIDE_MARGIN = 15.0
DOC_HEADER_HEIGHT = 45.0  # title + date + id lines on the first page
FOOTER_OFFSET = 10.0  # footer baseline above the page bottom

SECTION_HEADER_HEIGHT = 25.0
MEDICINE_BLOCK_HEIGHT = 30.0
SECTION_GAP = 10.0
BORDER_WIDTH = 0.7

SECTION_LABEL_X = 25.0
SECTION_LABEL_DY = 13.0
BLOCK_X = 30.0
DOSAGE_DY = 10.0
MEAL_DY = 18.0

# -------------------------------
# Palette
# -------------------------------
INK = "#212121"
MUTED = "#505050"
HEADER = "#3B82F6"
PANEL = "#F5F5F5"
MEAL = "#4CAF50"
ID_GREY = "#787878"
FOOTER_GREY = "#969696"

SECTION_COLORS: Dict[TimeOfDay, str] = {
    TimeOfDay.MORNING: "#FFC107",
    TimeOfDay.AFTERNOON: "#FF9800",
    TimeOfDay.NIGHT: "#3F51B5",
}

DEFAULT_FOOTER = "Generated by Prescription Manager"

# (text, dy, size, weight, color)
BlockLine = Tuple[str, float, float, str, str]


# -------------------------------
# Section layout
# -------------------------------
def section_height(entries: Sequence[Any]) -> float:
    """Fixed-height lines: only the entry count matters, never the text."""
    return SECTION_HEADER_HEIGHT + MEDICINE_BLOCK_HEIGHT * len(entries)


def block_lines(entry: ResolvedEntry) -> List[BlockLine]:
    lines: List[BlockLine] = [
        (entry.display_name, 0.0, 14, BOLD, INK),
        (entry.dosage_text, DOSAGE_DY, 12, NORMAL, MUTED),
    ]
    meal = entry.meal.label
    if meal:
        lines.append((meal, MEAL_DY, 11, BOLD, MEAL))
    return lines


def lay_out_section(backend: RenderBackend,
                    tag: TimeOfDay,
                    entries: Sequence[ResolvedEntry],
                    cursor: LayoutCursor,
                    *,
                    continued: bool = False) -> LayoutCursor:
    """
    Draw one bordered section at cursor.y; returns the cursor moved past it.
    No overflow check here; that is the page breaker's job.
    """
    height = section_height(entries)
    rect = Rect(SIDE_MARGIN, cursor.y,
                backend.page_width() - 2 * SIDE_MARGIN, height)
    color = SECTION_COLORS[tag]

    backend.draw_panel(rect, PANEL)
    backend.draw_border(rect, color, BORDER_WIDTH)

    label = f"{tag.label} (CONT.)" if continued else tag.label
    backend.draw_text(label, SECTION_LABEL_X, cursor.y + SECTION_LABEL_DY, 18,
                      BOLD, color)

    block_y = cursor.y + SECTION_HEADER_HEIGHT
    for entry in entries:
        for text, dy, size, weight, ink in block_lines(entry):
            backend.draw_text(text, BLOCK_X, block_y + dy, size, weight, ink)
        block_y += MEDICINE_BLOCK_HEIGHT

    return cursor.advance(height)


# -------------------------------
# Page-break controller
# -------------------------------
def content_limit(backend: RenderBackend) -> float:
    return backend.page_height() - BOTTOM_MARGIN


def capacity_at(backend: RenderBackend, y: float) -> int:
    """How many medicine blocks a section starting at y can hold."""
    room = content_limit(backend) - y - SECTION_HEADER_HEIGHT
    return max(0, math.floor(room / MEDICINE_BLOCK_HEIGHT))


def break_page(backend: RenderBackend, cursor: LayoutCursor) -> LayoutCursor:
    backend.new_page()
    nxt = cursor.next_page(TOP_MARGIN)
    logger.debug("Page break -> page %s", nxt.page)
    return nxt


def place_section(backend: RenderBackend, tag: TimeOfDay,
                  entries: Sequence[ResolvedEntry],
                  cursor: LayoutCursor) -> LayoutCursor:
    """
    Lay out a whole bucket, breaking pages as needed.

    A section that fits on a fresh page is never split: it either goes at
    cursor.y or on the next page. A section taller than a fresh page fills
    the current page and continues on the following ones.
    """
    fresh = capacity_at(backend, TOP_MARGIN)
    if fresh < 1:
        raise RxLayoutError("Page too small for a single medicine block")

    remaining = list(entries)
    continued = False
    while True:
        if cursor.y + section_height(remaining) <= content_limit(backend):
            cursor = lay_out_section(backend,
                                     tag,
                                     remaining,
                                     cursor,
                                     continued=continued)
            return cursor.advance(SECTION_GAP)

        here = capacity_at(backend, cursor.y)
        if len(remaining) <= fresh or here < 1:
            cursor = break_page(backend, cursor)
            continue

        lay_out_section(backend,
                        tag,
                        remaining[:here],
                        cursor,
                        continued=continued)
        remaining = remaining[here:]
        continued = True
        cursor = break_page(backend, cursor)


# -------------------------------
# Document furniture
# -------------------------------
def format_date_line(document: PrescriptionDocument) -> str:
    d = document.created_at
    return f"Date: {d:%A, %B} {d.day}, {d.year}"


def draw_document_header(backend: RenderBackend,
                         document: PrescriptionDocument,
                         cursor: LayoutCursor) -> LayoutCursor:
    backend.draw_text("Medical Prescription",
                      backend.page_width() / 2,
                      cursor.y + 5,
                      28,
                      BOLD,
                      HEADER,
                      align="center")
    backend.draw_text(format_date_line(document), 20, cursor.y + 25, 14,
                      NORMAL, INK)
    if document.suffix:
        backend.draw_text(f"ID: {document.suffix}", 20, cursor.y + 32, 10,
                          NORMAL, ID_GREY)
    return cursor.advance(DOC_HEADER_HEIGHT)


def draw_footer(backend: RenderBackend, text: str) -> None:
    # always on the current (last) page, even if a section is close by
    backend.draw_text(text,
                      backend.page_width() / 2,
                      backend.page_height() - FOOTER_OFFSET,
                      10,
                      NORMAL,
                      FOOTER_GREY,
                      align="center")


# -------------------------------
# Public API
# -------------------------------
def render_prescription(document: PrescriptionDocument,
                        backend: RenderBackend,
                        *,
                        footer_text: Optional[str] = None) -> Any:
    """
    Run one render pass and return backend.finalize().

    The backend is finalized exactly once, also when layout fails; the
    original error is re-raised and the partial artifact is the caller's
    to discard.
    """
    try:
        buckets = group_by_time(document.entries)

        cursor = draw_document_header(backend, document, LayoutCursor(
            0, TOP_MARGIN))
        sections = 0
        for tag in SECTION_ORDER:
            entries = buckets.get(tag)
            if not entries:
                continue
            cursor = place_section(backend, tag, entries, cursor)
            sections += 1

        draw_footer(backend, footer_text or DEFAULT_FOOTER)
    except Exception:
        logger.exception("Prescription render failed rx=%s",
                         document.rx_number or "draft")
        try:
            backend.finalize()
        except Exception:
            logger.exception("Finalize after failed render also failed")
        raise

    artifact = backend.finalize()
    logger.info("Rendered rx=%s pages=%s sections=%s",
                document.rx_number or "draft", cursor.page + 1, sections)
    return artifact
