# rxmanager/models/prescription.py
from __future__ import annotations

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    JSON,
    ForeignKey,
)
from sqlalchemy.orm import relationship

from rxmanager.db.base import Base


class Prescription(Base):
    """
    Prescription header. Created once; there is no update path, only delete.

    rx_number is the opaque identity; its last 8 chars name the PDF file.
    """

    __tablename__ = "prescriptions"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
        "mysql_collate": "utf8mb4_unicode_ci",
    }

    id = Column(Integer, primary_key=True, index=True)
    rx_number = Column(String(64), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    lines = relationship(
        "PrescriptionLine",
        back_populates="prescription",
        cascade="all, delete-orphan",
        order_by="PrescriptionLine.position",
    )


class PrescriptionLine(Base):
    """
    One medicine under a Prescription.

    timing: JSON list of "morning" / "afternoon" / "night" (never empty)
    meal: "before" / "after" / NULL
    dosage: legacy per-line dosage, only used as a display fallback
    """

    __tablename__ = "prescription_lines"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
        "mysql_collate": "utf8mb4_unicode_ci",
    }

    id = Column(Integer, primary_key=True, index=True)
    prescription_id = Column(
        Integer,
        ForeignKey("prescriptions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)

    # no FK: deleting a medicine must not touch existing prescriptions
    medicine_id = Column(Integer, nullable=False, index=True)

    timing = Column(JSON, nullable=False)
    instruction = Column(Text, nullable=True)
    meal = Column(String(16), nullable=True)
    dosage = Column(String(128), nullable=True)

    prescription = relationship("Prescription", back_populates="lines")
