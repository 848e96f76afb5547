"""API v1 router."""

from fastapi import APIRouter

from availability_engine.api.v1.endpoints import assignments, materials, plans

api_router = APIRouter()

api_router.include_router(materials.router, prefix="/materials", tags=["materials"])
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
api_router.include_router(assignments.router, prefix="/assignments", tags=["assignments"])
