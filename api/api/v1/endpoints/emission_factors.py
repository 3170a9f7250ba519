"""
Emission Factors API V1
Read-only access to the factor catalogue
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from api.core.rate_limit import limiter
from api.schemas import EmissionFactorListResponse, EmissionFactorResponse
from api.services.emissions_service import EmissionsService
from carbon.emission_factors import FactorNotFoundError
from .calculations import get_emissions_service

router = APIRouter()


@router.get("", response_model=EmissionFactorListResponse)
@limiter.limit("100/minute")
async def list_emission_factors(
    request: Request,
    transport_mode: Optional[str] = Query(None, description="Filter by transport mode"),
    region: Optional[str] = Query(None, description="Filter by region"),
    service: EmissionsService = Depends(get_emissions_service)
):
    """List emission factors, optionally filtered by mode and region"""
    factors = await service.list_factors(
        transport_mode=transport_mode.upper() if transport_mode else None,
        region=region.upper() if region else None
    )
    return {"items": factors, "total": len(factors)}


@router.get("/{transport_mode}/{fuel_type}", response_model=EmissionFactorResponse)
@limiter.limit("100/minute")
async def get_emission_factor(
    request: Request,
    transport_mode: str,
    fuel_type: str,
    region: Optional[str] = Query(None, description="Region (default from configuration)"),
    service: EmissionsService = Depends(get_emissions_service)
):
    """Get the emission factor for a transport mode and fuel type"""
    try:
        return await service.get_factor(
            transport_mode.upper(),
            fuel_type.upper(),
            region=region.upper() if region else None
        )
    except FactorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
