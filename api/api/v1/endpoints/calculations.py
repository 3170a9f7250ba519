"""
Calculations API V1
Emissions calculation for shipments
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.config import settings
from api.core.rate_limit import limiter
from api.schemas import (
    CalculationRequest, CalculationResponse,
    CompareScenariosRequest, CompareScenariosResponse,
)
from api.services.database import get_db
from api.services.emissions_service import EmissionsService

router = APIRouter()


async def get_emissions_service(db: AsyncSession = Depends(get_db)) -> EmissionsService:
    """Dependency injection for emissions service"""
    return EmissionsService(db)


@router.post("", response_model=CalculationResponse)
@limiter.limit(settings.CALCULATION_RATE_LIMIT)
async def calculate_emissions(
    request: Request,
    payload: CalculationRequest,
    service: EmissionsService = Depends(get_emissions_service)
):
    """
    Calculate the emissions footprint of a shipment

    - **distance** / **weight**: km and tonnes, both > 0
    - **weather_condition**: NORMAL, LIGHT_ADVERSE, HEAVY_ADVERSE, SNOW_ICE, EXTREME
    - **capacity_utilization**: percent of capacity used (default 100)
    - **departure_hour** / **day_of_week**: traffic adjustment, both or neither
    """
    result = await service.calculate(payload.to_calculation_input())

    return {
        **result.to_dict(),
        "origin": payload.origin,
        "destination": payload.destination,
        "transport_mode": payload.transport_mode,
        "fuel_type": payload.fuel_type,
        "adjustment_factors": result.adjustment_factors,
        "calculated_at": datetime.utcnow(),
    }


@router.post("/compare", response_model=CompareScenariosResponse)
@limiter.limit(settings.CALCULATION_RATE_LIMIT)
async def compare_scenarios(
    request: Request,
    payload: CompareScenariosRequest,
    service: EmissionsService = Depends(get_emissions_service)
):
    """Compare alternative shipment scenarios (mode shift, fuel, load) with a baseline"""
    return await service.compare_scenarios(
        payload.base.to_calculation_input(),
        [(alt.name, alt.to_calculation_input()) for alt in payload.alternatives]
    )
