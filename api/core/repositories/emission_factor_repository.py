"""
Emission Factor Repository
Read access to the emission factor catalogue
"""
from enum import Enum
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.models import EmissionFactorRecord
from carbon.emission_factors import DEFAULT_REGION, normalize_key_part
from .base import SQLAlchemyRepository


class EmissionFactorRepository(SQLAlchemyRepository[EmissionFactorRecord]):
    """Repository for EmissionFactorRecord entity"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, EmissionFactorRecord)

    async def find_factor(
        self,
        transport_mode: Union[str, Enum],
        fuel_type: Union[str, Enum],
        region: Union[str, Enum] = DEFAULT_REGION
    ) -> Optional[EmissionFactorRecord]:
        """Get the factor for a (mode, fuel, region) key, or None"""
        result = await self.db.execute(
            select(EmissionFactorRecord).where(
                EmissionFactorRecord.transport_mode == normalize_key_part(transport_mode),
                EmissionFactorRecord.fuel_type == normalize_key_part(fuel_type),
                EmissionFactorRecord.region == normalize_key_part(region),
            )
        )
        return result.scalar_one_or_none()

    async def list_factors(
        self,
        transport_mode: Optional[str] = None,
        region: Optional[str] = None
    ) -> List[EmissionFactorRecord]:
        """List factors ordered by mode and fuel, optionally filtered"""
        query = select(EmissionFactorRecord)
        if transport_mode:
            query = query.where(EmissionFactorRecord.transport_mode == normalize_key_part(transport_mode))
        if region:
            query = query.where(EmissionFactorRecord.region == normalize_key_part(region))
        query = query.order_by(EmissionFactorRecord.transport_mode, EmissionFactorRecord.fuel_type)

        result = await self.db.execute(query)
        return list(result.scalars().all())
