# rxmanager/services/rx_layout/errors.py
from __future__ import annotations


class RxLayoutError(Exception):
    """Base error for the prescription layout engine."""


class RxInputError(RxLayoutError, ValueError):
    """The prescription handed to the engine breaks its input contract."""
