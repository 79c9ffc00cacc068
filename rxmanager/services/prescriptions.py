# rxmanager/services/prescriptions.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

from fastapi import HTTPException
from sqlalchemy.orm import Session

from rxmanager.core.config import settings
from rxmanager.models.medicine import Medicine
from rxmanager.models.prescription import Prescription, PrescriptionLine
from rxmanager.schemas.medicine import MedicineOut
from rxmanager.schemas.prescription import (
    PrescriptionCreate,
    PrescriptionDetailOut,
    PrescriptionLineDetailOut,
    PrescriptionSummaryOut,
)
from rxmanager.services.rx_layout import (
    SECTION_ORDER,
    MealRelation,
    PrescriptionDocument,
    RecordingBackend,
    ReportLabBackend,
    ResolvedEntry,
    TimeOfDay,
    group_by_time,
    render_prescription,
)
from rxmanager.utils.timezone import now_local

logger = logging.getLogger(__name__)


# -------------------------------
# Catalog lookups
# -------------------------------
def _catalog(db: Session, ids: Iterable[int]) -> Dict[int, Medicine]:
    wanted = {int(i) for i in ids}
    if not wanted:
        return {}
    rows = db.query(Medicine).filter(Medicine.id.in_(wanted)).all()
    return {m.id: m for m in rows}


def _medicine_out(med: Optional[Medicine]) -> Optional[MedicineOut]:
    return MedicineOut.model_validate(med) if med else None


def _resolve_line(line, med: Optional[Medicine]) -> ResolvedEntry:
    return ResolvedEntry(
        times=tuple(TimeOfDay.parse(t) for t in (line.timing or [])),
        name=med.name if med else None,
        catalog_dosage=med.dosage if med else None,
        instruction=line.instruction,
        meal=MealRelation.parse(line.meal),
        legacy_dosage=line.dosage,
    )


# -------------------------------
# Create / fetch
# -------------------------------
def create_prescription(db: Session,
                        payload: PrescriptionCreate) -> Prescription:
    catalog = _catalog(db, (ln.medicine_id for ln in payload.medicines))
    missing = sorted({
        ln.medicine_id
        for ln in payload.medicines if ln.medicine_id not in catalog
    })
    if missing:
        raise HTTPException(status_code=404,
                            detail=f"Medicine not found: {missing[0]}")

    rx = Prescription(rx_number=uuid4().hex, created_at=now_local())
    for pos, ln in enumerate(payload.medicines):
        rx.lines.append(
            PrescriptionLine(
                position=pos,
                medicine_id=ln.medicine_id,
                timing=list(ln.timing),
                instruction=ln.instruction,
                meal=ln.meal,
                dosage=ln.dosage,
            ))
    db.add(rx)
    db.commit()
    db.refresh(rx)
    logger.info("Prescription created rx=%s lines=%s", rx.rx_number,
                len(rx.lines))
    return rx


def get_prescription_or_404(db: Session, rx_id: int) -> Prescription:
    rx = db.get(Prescription, rx_id)
    if not rx:
        raise HTTPException(status_code=404, detail="Prescription not found")
    return rx


def list_prescriptions(db: Session) -> List[Prescription]:
    return (db.query(Prescription).order_by(Prescription.created_at.desc(),
                                            Prescription.id.desc()).all())


# -------------------------------
# Layout input
# -------------------------------
def resolve_document(db: Session, rx: Prescription) -> PrescriptionDocument:
    catalog = _catalog(db, (ln.medicine_id for ln in rx.lines))
    return PrescriptionDocument(
        rx_number=rx.rx_number,
        created_at=rx.created_at,
        entries=tuple(
            _resolve_line(ln, catalog.get(ln.medicine_id))
            for ln in rx.lines),
    )


def draft_document(db: Session,
                   payload: PrescriptionCreate) -> PrescriptionDocument:
    catalog = _catalog(db, (ln.medicine_id for ln in payload.medicines))
    return PrescriptionDocument(
        created_at=now_local(),
        entries=tuple(
            _resolve_line(ln, catalog.get(ln.medicine_id))
            for ln in payload.medicines),
    )


def prescription_details(db: Session,
                         rx: Prescription) -> PrescriptionDetailOut:
    catalog = _catalog(db, (ln.medicine_id for ln in rx.lines))
    return PrescriptionDetailOut(
        id=rx.id,
        rx_number=rx.rx_number,
        created_at=rx.created_at,
        medicines=[
            PrescriptionLineDetailOut(
                medicine_id=ln.medicine_id,
                timing=list(ln.timing or []),
                instruction=ln.instruction,
                meal=ln.meal,
                dosage=ln.dosage,
                medicine_details=_medicine_out(catalog.get(ln.medicine_id)),
            ) for ln in rx.lines
        ],
    )


def summarize(rx: Prescription) -> PrescriptionSummaryOut:
    entries = [_resolve_line(ln, None) for ln in rx.lines if ln.timing]
    buckets = group_by_time(entries)
    return PrescriptionSummaryOut(
        id=rx.id,
        rx_number=rx.rx_number,
        created_at=rx.created_at,
        medicine_count=len(rx.lines),
        schedule={
            tag.value: [e.short_label for e in buckets[tag]]
            for tag in SECTION_ORDER if tag in buckets
        },
    )


# -------------------------------
# Rendering
# -------------------------------
def _archive(pdf_bytes: bytes, filename: str) -> Path:
    out_dir = Path(settings.STORAGE_DIR).resolve() / "prescriptions"
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / filename
    path.write_bytes(pdf_bytes)
    return path


def build_prescription_pdf(document: PrescriptionDocument) -> Tuple[bytes, str]:
    filename = document.filename
    pdf_bytes = render_prescription(
        document,
        ReportLabBackend(title=filename),
        footer_text=settings.RX_FOOTER_TEXT,
    )
    if settings.RX_PDF_ARCHIVE and document.rx_number:
        logger.info("Archived %s", _archive(pdf_bytes, filename))
    return pdf_bytes, filename


def build_prescription_layout(document: PrescriptionDocument) -> List[dict]:
    ops = render_prescription(
        document,
        RecordingBackend(),
        footer_text=settings.RX_FOOTER_TEXT,
    )
    return [op.as_dict() for op in ops]
