from rxmanager.models.medicine import Medicine, MEDICINE_TYPES  # noqa: F401
from rxmanager.models.prescription import (  # noqa: F401
    Prescription, PrescriptionLine,
)
