"""
API routes for the dashboard.
"""

from fastapi import APIRouter

from finsuite.api import calculations, catalog, insights

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(catalog.router, prefix="/services", tags=["services"])
router.include_router(insights.router, prefix="/insights", tags=["insights"])

# Auth routes are included directly at /api/auth (defined in auth.py with prefix)
