# rxmanager/schemas/medicine.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MedicineType = Literal["tablet", "capsule", "syrup", "injection", "cream",
                       "ointment"]


class MedicineCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=255)
    dosage: str = Field(..., min_length=1, max_length=128)
    type: MedicineType
    manufacturer: str = Field(..., min_length=2, max_length=255)


class MedicineUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=2, max_length=255)
    dosage: Optional[str] = Field(None, min_length=1, max_length=128)
    type: Optional[MedicineType] = None
    manufacturer: Optional[str] = Field(None, min_length=2, max_length=255)


class MedicineOut(BaseModel):
    id: int
    name: str
    dosage: str
    type: str
    manufacturer: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
