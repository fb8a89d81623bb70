"""
API routes for the underwriting model.
"""

from fastapi import APIRouter

from underwriting.api import calculations

router = APIRouter()

router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
