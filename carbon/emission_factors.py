"""
CFIP Emission Factor Catalogue
Reference data for the transport emissions calculator

Features:
- One factor record per (transport mode, fuel type, region)
- CO2 in kg per tonne-km, CH4/N2O in grams per tonne-km
- Pluggable lookup source (in-memory table or database)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

DEFAULT_REGION = "GLOBAL"


class TransportMode(str, Enum):
    """Transport modes with emission factor coverage."""
    TRUCK = "TRUCK"
    RAIL = "RAIL"
    SHIP = "SHIP"
    AIR = "AIR"
    MULTIMODAL = "MULTIMODAL"  # Reserved, no factors


class FuelType(str, Enum):
    """Fuel types. Valid combinations are whatever the catalogue holds."""
    DIESEL = "DIESEL"
    ELECTRIC = "ELECTRIC"
    HYBRID = "HYBRID"
    LNG = "LNG"
    BIODIESEL = "BIODIESEL"
    HEAVY_FUEL_OIL = "HEAVY_FUEL_OIL"
    JET_FUEL = "JET_FUEL"


FactorKey = Tuple[str, str, str]


def normalize_key_part(value: Union[str, Enum]) -> str:
    """Return the plain string form of an enum member or string."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def make_factor_key(
    transport_mode: Union[str, Enum],
    fuel_type: Union[str, Enum],
    region: Union[str, Enum] = DEFAULT_REGION
) -> FactorKey:
    return (
        normalize_key_part(transport_mode),
        normalize_key_part(fuel_type),
        normalize_key_part(region),
    )


@dataclass(frozen=True)
class EmissionFactor:
    """Emission factor record (co2 in kg/t-km, ch4 and n2o in g/t-km)."""
    transport_mode: str
    fuel_type: str
    co2_factor: float
    ch4_factor: Optional[float] = None
    n2o_factor: Optional[float] = None
    region: str = DEFAULT_REGION
    source: Optional[str] = None
    year: Optional[int] = None

    @property
    def key(self) -> FactorKey:
        return make_factor_key(self.transport_mode, self.fuel_type, self.region)


class FactorNotFoundError(LookupError):
    """No emission factor exists for the requested mode, fuel and region."""

    def __init__(
        self,
        transport_mode: Union[str, Enum],
        fuel_type: Union[str, Enum],
        region: Union[str, Enum] = DEFAULT_REGION
    ):
        self.transport_mode = normalize_key_part(transport_mode)
        self.fuel_type = normalize_key_part(fuel_type)
        self.region = normalize_key_part(region)
        super().__init__(
            f"Emission factor not found for {self.transport_mode} - "
            f"{self.fuel_type} (region {self.region})"
        )


class FactorSource(ABC):
    """Read-only lookup of emission factors."""

    @abstractmethod
    def find_factor(
        self,
        transport_mode: Union[str, Enum],
        fuel_type: Union[str, Enum],
        region: Union[str, Enum] = DEFAULT_REGION
    ) -> Optional[EmissionFactor]:
        """Return the matching factor, or None."""

    def get_factor(
        self,
        transport_mode: Union[str, Enum],
        fuel_type: Union[str, Enum],
        region: Union[str, Enum] = DEFAULT_REGION
    ) -> EmissionFactor:
        """
        Return the matching factor.

        Raises:
            FactorNotFoundError: if the catalogue has no such record
        """
        factor = self.find_factor(transport_mode, fuel_type, region)
        if factor is None:
            raise FactorNotFoundError(transport_mode, fuel_type, region)
        return factor


class InMemoryFactorTable(FactorSource):
    """
    Factor source backed by a dict.

    Defaults to the reference catalogue; duplicate keys are rejected so
    every (mode, fuel, region) triple maps to exactly one record.
    """

    def __init__(self, factors: Optional[Iterable[EmissionFactor]] = None):
        if factors is None:
            factors = DEFAULT_EMISSION_FACTORS

        self._factors: Dict[FactorKey, EmissionFactor] = {}
        for factor in factors:
            if factor.key in self._factors:
                raise ValueError(f"Duplicate emission factor for {factor.key}")
            self._factors[factor.key] = factor

    def __len__(self) -> int:
        return len(self._factors)

    def __contains__(self, key) -> bool:
        """Membership by (mode, fuel) or (mode, fuel, region) tuple."""
        if not isinstance(key, tuple) or len(key) not in (2, 3):
            return False
        return make_factor_key(*key) in self._factors

    def find_factor(
        self,
        transport_mode: Union[str, Enum],
        fuel_type: Union[str, Enum],
        region: Union[str, Enum] = DEFAULT_REGION
    ) -> Optional[EmissionFactor]:
        return self._factors.get(make_factor_key(transport_mode, fuel_type, region))

    def list_factors(
        self,
        transport_mode: Optional[Union[str, Enum]] = None,
        region: Optional[Union[str, Enum]] = None
    ) -> List[EmissionFactor]:
        """List factors, optionally filtered by mode and region."""
        factors = list(self._factors.values())
        if transport_mode is not None:
            mode = normalize_key_part(transport_mode)
            factors = [f for f in factors if f.transport_mode == mode]
        if region is not None:
            region_name = normalize_key_part(region)
            factors = [f for f in factors if f.region == region_name]
        return factors


def _factor(mode, fuel, co2, ch4, n2o, source) -> EmissionFactor:
    return EmissionFactor(
        transport_mode=mode.value,
        fuel_type=fuel.value,
        co2_factor=co2,
        ch4_factor=ch4,
        n2o_factor=n2o,
        region=DEFAULT_REGION,
        source=source,
        year=2024,
    )


# Reference catalogue (EPA road, IPCC rail, IMO sea, ICAO air)
DEFAULT_EMISSION_FACTORS: Tuple[EmissionFactor, ...] = (
    # Road
    _factor(TransportMode.TRUCK, FuelType.DIESEL, 0.0970, 0.0015, 0.0032, "EPA"),
    _factor(TransportMode.TRUCK, FuelType.ELECTRIC, 0.0150, 0.0, 0.0, "EPA"),
    _factor(TransportMode.TRUCK, FuelType.HYBRID, 0.0580, 0.0008, 0.0016, "EPA"),
    _factor(TransportMode.TRUCK, FuelType.LNG, 0.0850, 0.0020, 0.0010, "EPA"),
    _factor(TransportMode.TRUCK, FuelType.BIODIESEL, 0.0820, 0.0012, 0.0025, "EPA"),
    # Rail
    _factor(TransportMode.RAIL, FuelType.DIESEL, 0.0300, 0.0008, 0.0015, "IPCC"),
    _factor(TransportMode.RAIL, FuelType.ELECTRIC, 0.0080, 0.0, 0.0, "IPCC"),
    # Sea
    _factor(TransportMode.SHIP, FuelType.HEAVY_FUEL_OIL, 0.0150, 0.0005, 0.0008, "IMO"),
    _factor(TransportMode.SHIP, FuelType.DIESEL, 0.0140, 0.0004, 0.0007, "IMO"),
    _factor(TransportMode.SHIP, FuelType.LNG, 0.0120, 0.0015, 0.0003, "IMO"),
    # Air
    _factor(TransportMode.AIR, FuelType.JET_FUEL, 0.5000, 0.0020, 0.0100, "ICAO"),
)
