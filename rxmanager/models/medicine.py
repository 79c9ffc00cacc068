# rxmanager/models/medicine.py
from __future__ import annotations

from sqlalchemy import Column, Integer, String, DateTime, func

from rxmanager.db.base import Base

MEDICINE_TYPES = (
    "tablet",
    "capsule",
    "syrup",
    "injection",
    "cream",
    "ointment",
)


class Medicine(Base):
    """
    Medicine catalog entry. Prescriptions reference it by id only.
    """

    __tablename__ = "medicines"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
        "mysql_collate": "utf8mb4_unicode_ci",
    }

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    dosage = Column(String(128), nullable=False)
    type = Column(String(32), nullable=False)  # one of MEDICINE_TYPES
    manufacturer = Column(String(255), nullable=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
