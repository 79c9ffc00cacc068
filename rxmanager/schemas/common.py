# rxmanager/schemas/common.py
from __future__ import annotations

from typing import Optional
from pydantic import BaseModel


class ApiError(BaseModel):
    msg: str


class ErrorEnvelope(BaseModel):
    """Body of every non-2xx response."""
    status: bool = False
    data: Optional[dict] = None
    error: ApiError
