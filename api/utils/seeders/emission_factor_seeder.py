"""
Emission Factor Seeder
Popola il catalogo dei fattori di emissione con i valori di riferimento
"""
from typing import Iterable, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.core.repositories.emission_factor_repository import EmissionFactorRepository
from api.models import EmissionFactorRecord
from carbon.emission_factors import DEFAULT_EMISSION_FACTORS, EmissionFactor

logger = structlog.get_logger()


async def seed_emission_factors(
    db: AsyncSession,
    factors: Optional[Iterable[EmissionFactor]] = None
) -> dict:
    """
    Insert catalogue factors whose (mode, fuel, region) key is missing.

    Existing rows are never overwritten, so re-running is safe.
    """
    if factors is None:
        factors = DEFAULT_EMISSION_FACTORS
    factors = list(factors)

    result = await db.execute(
        select(
            EmissionFactorRecord.transport_mode,
            EmissionFactorRecord.fuel_type,
            EmissionFactorRecord.region,
        )
    )
    existing = {tuple(row) for row in result.all()}

    missing = [f for f in factors if f.key not in existing]
    if not missing:
        return {
            "status": "skipped",
            "message": "Emission factors already seeded",
            "inserted": 0,
            "total": len(existing),
        }

    repo = EmissionFactorRepository(db)
    await repo.add_all([EmissionFactorRecord.from_emission_factor(f) for f in missing])

    logger.info(
        "emission_factors_seeded",
        inserted=len(missing),
        total=len(existing) + len(missing)
    )

    return {
        "status": "success",
        "message": "Emission factors seeded",
        "inserted": len(missing),
        "total": len(existing) + len(missing),
    }
