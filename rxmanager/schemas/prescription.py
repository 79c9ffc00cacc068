# rxmanager/schemas/prescription.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rxmanager.schemas.medicine import MedicineOut

TimingTag = Literal["morning", "afternoon", "night"]


class PrescriptionLineIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    medicine_id: int
    timing: List[TimingTag] = Field(..., min_length=1)
    instruction: Optional[str] = Field(None, max_length=2000)
    meal: Optional[Literal["before", "after", "none"]] = None
    dosage: Optional[str] = Field(None, max_length=128)  # legacy

    @field_validator("timing")
    @classmethod
    def _dedupe_timing(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))

    @field_validator("meal")
    @classmethod
    def _none_is_absent(cls, v: Optional[str]) -> Optional[str]:
        return None if v == "none" else v

    @field_validator("instruction", "dosage")
    @classmethod
    def _blank_is_absent(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class PrescriptionCreate(BaseModel):
    medicines: List[PrescriptionLineIn] = Field(
        ..., min_length=1, description="Please add at least one medicine")


class PrescriptionLineOut(BaseModel):
    medicine_id: int
    timing: List[str]
    instruction: Optional[str] = None
    meal: Optional[str] = None
    dosage: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PrescriptionOut(BaseModel):
    id: int
    rx_number: str
    created_at: datetime
    medicines: List[PrescriptionLineOut] = Field(default_factory=list,
                                                 validation_alias="lines")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PrescriptionLineDetailOut(PrescriptionLineOut):
    medicine_details: Optional[MedicineOut] = None


class PrescriptionDetailOut(BaseModel):
    id: int
    rx_number: str
    created_at: datetime
    medicines: List[PrescriptionLineDetailOut]


class PrescriptionSummaryOut(BaseModel):
    id: int
    rx_number: str
    created_at: datetime
    medicine_count: int
    # time of day -> short label per medicine (instruction / dosage)
    schedule: Dict[str, List[str]]
