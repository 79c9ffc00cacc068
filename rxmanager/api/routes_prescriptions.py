# rxmanager/api/routes_prescriptions.py
from __future__ import annotations

from io import BytesIO
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from rxmanager.api.deps import get_db
from rxmanager.schemas.prescription import (
    PrescriptionCreate,
    PrescriptionDetailOut,
    PrescriptionOut,
    PrescriptionSummaryOut,
)
from rxmanager.services import prescriptions as svc
from rxmanager.services.rx_layout import PrescriptionDocument, RxInputError

router = APIRouter()


def _pdf_response(document: PrescriptionDocument) -> StreamingResponse:
    try:
        pdf_bytes, filename = svc.build_prescription_pdf(document)
    except RxInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=PrescriptionOut, status_code=201)
def create_prescription(payload: PrescriptionCreate,
                        db: Session = Depends(get_db)):
    return svc.create_prescription(db, payload)


@router.get("", response_model=List[PrescriptionSummaryOut])
def list_prescriptions(db: Session = Depends(get_db)):
    """Newest first."""
    return [svc.summarize(rx) for rx in svc.list_prescriptions(db)]


@router.post("/preview/pdf")
def preview_prescription_pdf(payload: PrescriptionCreate,
                             db: Session = Depends(get_db)):
    """Render a draft without saving it."""
    return _pdf_response(svc.draft_document(db, payload))


@router.get("/{rx_id}", response_model=PrescriptionOut)
def get_prescription(rx_id: int, db: Session = Depends(get_db)):
    return svc.get_prescription_or_404(db, rx_id)


@router.get("/{rx_id}/details", response_model=PrescriptionDetailOut)
def get_prescription_with_medicines(rx_id: int,
                                    db: Session = Depends(get_db)):
    rx = svc.get_prescription_or_404(db, rx_id)
    return svc.prescription_details(db, rx)


@router.get("/{rx_id}/pdf")
def download_prescription_pdf(rx_id: int, db: Session = Depends(get_db)):
    rx = svc.get_prescription_or_404(db, rx_id)
    try:
        document = svc.resolve_document(db, rx)
    except RxInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _pdf_response(document)


@router.get("/{rx_id}/layout")
def get_prescription_layout(rx_id: int, db: Session = Depends(get_db)):
    rx = svc.get_prescription_or_404(db, rx_id)
    try:
        document = svc.resolve_document(db, rx)
        ops = svc.build_prescription_layout(document)
    except RxInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"filename": document.filename, "ops": ops}


@router.delete("/{rx_id}", status_code=204)
def delete_prescription(rx_id: int, db: Session = Depends(get_db)):
    rx = svc.get_prescription_or_404(db, rx_id)
    db.delete(rx)
    db.commit()
    return Response(status_code=204)
