# rxmanager/services/rx_layout/backend.py
from __future__ import annotations

from io import BytesIO
from typing import List, Protocol, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from rxmanager.services.rx_layout.errors import RxLayoutError
from rxmanager.services.rx_layout.entities import DrawOp, Rect


BOLD = "bold"
NORMAL = "normal"

PANEL_RADIUS_MM = 3.0

A4_MM: Tuple[float, float] = (A4[0] / mm, A4[1] / mm)


class RenderBackend(Protocol):
    """
    Drawing surface used by the layout engine.

    All coordinates are millimetres from the top-left corner; font sizes
    are points. One backend instance serves exactly one render pass.
    """

    def draw_panel(self, rect: Rect, fill: str) -> None:
        ...

    def draw_border(self, rect: Rect, color: str, width: float) -> None:
        ...

    def draw_text(self,
                  text: str,
                  x: float,
                  y: float,
                  size: float,
                  weight: str,
                  color: str,
                  align: str = "left") -> None:
        ...

    def new_page(self) -> None:
        ...

    def page_width(self) -> float:
        ...

    def page_height(self) -> float:
        ...

    def finalize(self):
        ...


class _OnceMixin:
    _finalized = False

    def _mark_finalized(self) -> None:
        if self._finalized:
            raise RxLayoutError("Backend session already finalized")
        self._finalized = True


# -------------------------------------------------------------------
# ReportLab (PDF bytes)
# -------------------------------------------------------------------
class ReportLabBackend(_OnceMixin):
    FONTS = {BOLD: "Helvetica-Bold", NORMAL: "Helvetica"}

    def __init__(self, *, title: str = "", pagesize=A4):
        self._buf = BytesIO()
        self._c = canvas.Canvas(self._buf, pagesize=pagesize)
        self._W, self._H = pagesize
        if title:
            self._c.setTitle(title)

    def _y(self, y_mm: float) -> float:
        return self._H - y_mm * mm

    def page_width(self) -> float:
        return self._W / mm

    def page_height(self) -> float:
        return self._H / mm

    def draw_panel(self, rect: Rect, fill: str) -> None:
        c = self._c
        c.setFillColor(colors.HexColor(fill))
        c.roundRect(rect.x * mm,
                    self._y(rect.bottom),
                    rect.w * mm,
                    rect.h * mm,
                    PANEL_RADIUS_MM * mm,
                    stroke=0,
                    fill=1)

    def draw_border(self, rect: Rect, color: str, width: float) -> None:
        c = self._c
        c.setStrokeColor(colors.HexColor(color))
        c.setLineWidth(width * mm)
        c.roundRect(rect.x * mm,
                    self._y(rect.bottom),
                    rect.w * mm,
                    rect.h * mm,
                    PANEL_RADIUS_MM * mm,
                    stroke=1,
                    fill=0)

    def draw_text(self,
                  text: str,
                  x: float,
                  y: float,
                  size: float,
                  weight: str,
                  color: str,
                  align: str = "left") -> None:
        c = self._c
        c.setFont(self.FONTS.get(weight, "Helvetica"), size)
        c.setFillColor(colors.HexColor(color))
        if align == "center":
            c.drawCentredString(x * mm, self._y(y), text)
        elif align == "right":
            c.drawRightString(x * mm, self._y(y), text)
        else:
            c.drawString(x * mm, self._y(y), text)

    def new_page(self) -> None:
        self._c.showPage()

    def finalize(self) -> bytes:
        self._mark_finalized()
        self._c.save()
        return self._buf.getvalue()


# -------------------------------------------------------------------
# Recording (plain draw-instruction list)
# -------------------------------------------------------------------
class RecordingBackend(_OnceMixin):
    """Keeps every call as a DrawOp; finalize() hands back the list."""

    def __init__(self, *, width: float = A4_MM[0], height: float = A4_MM[1]):
        self._width = width
        self._height = height
        self._page = 0
        self.ops: List[DrawOp] = []

    def page_width(self) -> float:
        return self._width

    def page_height(self) -> float:
        return self._height

    def draw_panel(self, rect: Rect, fill: str) -> None:
        self.ops.append(DrawOp("panel", self._page, rect=rect, color=fill))

    def draw_border(self, rect: Rect, color: str, width: float) -> None:
        self.ops.append(
            DrawOp("border", self._page, rect=rect, color=color, width=width))

    def draw_text(self,
                  text: str,
                  x: float,
                  y: float,
                  size: float,
                  weight: str,
                  color: str,
                  align: str = "left") -> None:
        self.ops.append(
            DrawOp("text",
                   self._page,
                   text=text,
                   x=x,
                   y=y,
                   size=size,
                   weight=weight,
                   color=color,
                   align=align))

    def new_page(self) -> None:
        self._page += 1
        self.ops.append(DrawOp("new_page", self._page))

    def finalize(self) -> List[DrawOp]:
        self._mark_finalized()
        return list(self.ops)
