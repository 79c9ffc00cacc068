# rxmanager/api/routes_medicines.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from rxmanager.api.deps import get_db
from rxmanager.models.medicine import Medicine
from rxmanager.schemas.medicine import (
    MedicineCreate,
    MedicineOut,
    MedicineUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(db: Session, medicine_id: int) -> Medicine:
    med = db.get(Medicine, medicine_id)
    if not med:
        raise HTTPException(status_code=404, detail="Medicine not found")
    return med


@router.post("", response_model=MedicineOut, status_code=201)
def create_medicine(payload: MedicineCreate, db: Session = Depends(get_db)):
    med = Medicine(**payload.model_dump())
    db.add(med)
    db.commit()
    db.refresh(med)
    logger.info("Medicine registered id=%s name=%s", med.id, med.name)
    return med


@router.get("", response_model=List[MedicineOut])
def list_medicines(db: Session = Depends(get_db)):
    return db.query(Medicine).order_by(Medicine.name.asc(),
                                       Medicine.id.asc()).all()


@router.get("/{medicine_id}", response_model=MedicineOut)
def get_medicine(medicine_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, medicine_id)


@router.patch("/{medicine_id}", response_model=MedicineOut)
def update_medicine(medicine_id: int,
                    payload: MedicineUpdate,
                    db: Session = Depends(get_db)):
    med = _get_or_404(db, medicine_id)
    changes = payload.model_dump(exclude_none=True)
    if changes:
        for k, v in changes.items():
            setattr(med, k, v)
        db.commit()
        db.refresh(med)
    return med


@router.delete("/{medicine_id}", status_code=204)
def delete_medicine(medicine_id: int, db: Session = Depends(get_db)):
    # prescriptions keep the dangling id and render "Unknown Medicine"
    med = _get_or_404(db, medicine_id)
    db.delete(med)
    db.commit()
    return Response(status_code=204)
