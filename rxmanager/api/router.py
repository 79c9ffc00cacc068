# rxmanager/api/router.py
from fastapi import APIRouter

from rxmanager.api import routes_medicines, routes_prescriptions

api_router = APIRouter()

api_router.include_router(routes_medicines.router,
                          prefix="/medicines",
                          tags=["medicines"])
api_router.include_router(routes_prescriptions.router,
                          prefix="/prescriptions",
                          tags=["prescriptions"])
