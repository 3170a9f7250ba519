from fastapi import APIRouter

from .endpoints import calculations, emission_factors

api_router = APIRouter()

api_router.include_router(calculations.router, prefix="/calculations", tags=["calculations"])
api_router.include_router(emission_factors.router, prefix="/emission-factors", tags=["emission-factors"])
