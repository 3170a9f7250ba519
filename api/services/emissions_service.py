"""
CFIP: Emissions Service

Collega il calcolatore puro al catalogo dei fattori su database.
La sola operazione di I/O per calcolo e' la lettura del fattore.
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from api.config import settings
from api.core.repositories.emission_factor_repository import EmissionFactorRepository
from api.models import EmissionFactorRecord
from carbon.emission_factors import EmissionFactor, FactorNotFoundError, normalize_key_part
from carbon.emissions_calculator import (
    CalculationInput,
    EmissionResult,
    compare_scenarios,
    compute_emissions,
)

logger = structlog.get_logger()


class EmissionsService:
    """
    Emissions calculation against the database factor catalogue.

    Responsabilità:
    - Lookup del fattore per (mode, fuel, region)
    - Calcolo tramite carbon.emissions_calculator
    - Logging strutturato dell'esito
    """

    def __init__(self, db_session: AsyncSession, region: Optional[str] = None):
        self.repo = EmissionFactorRepository(db_session)
        self.region = region or settings.DEFAULT_REGION

    async def get_factor(self, transport_mode, fuel_type, region: Optional[str] = None) -> EmissionFactor:
        """
        Get the emission factor for a mode and fuel (default: service region).

        Raises:
            FactorNotFoundError: no catalogue entry
        """
        region = region or self.region
        record = await self.repo.find_factor(transport_mode, fuel_type, region)
        if record is None:
            logger.warning(
                "emission_factor_not_found",
                transport_mode=normalize_key_part(transport_mode),
                fuel_type=normalize_key_part(fuel_type),
                region=region
            )
            raise FactorNotFoundError(transport_mode, fuel_type, region)
        return record.to_emission_factor()

    async def calculate(self, params: CalculationInput) -> EmissionResult:
        """Calculate emissions for a shipment."""
        factor = await self.get_factor(params.transport_mode, params.fuel_type)
        result = compute_emissions(params, factor)

        logger.info(
            "emissions_calculated",
            transport_mode=factor.transport_mode,
            fuel_type=factor.fuel_type,
            tonne_km=params.tonne_km,
            total_co2e_kg=round(result.total_co2e, 4),
            scope=result.scope
        )
        return result

    async def compare_scenarios(
        self,
        base: CalculationInput,
        alternatives: Sequence[Tuple[str, CalculationInput]]
    ) -> Dict[str, Any]:
        """Compare alternative scenarios against a baseline shipment."""
        base_result = await self.calculate(base)
        alternative_results = []
        for name, params in alternatives:
            alternative_results.append((name, await self.calculate(params)))

        comparison = compare_scenarios(base_result, alternative_results)
        best = comparison["best_alternative"]
        logger.info(
            "scenarios_compared",
            alternatives=len(alternative_results),
            best_scenario=best["scenario_name"] if best else None
        )
        return comparison

    async def list_factors(
        self,
        transport_mode: Optional[str] = None,
        region: Optional[str] = None
    ) -> List[EmissionFactorRecord]:
        return await self.repo.list_factors(transport_mode=transport_mode, region=region)
