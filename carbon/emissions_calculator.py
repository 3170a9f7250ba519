"""
CFIP Transport Emissions Calculator
GHG Protocol Scope 3 transport footprint

Features:
- Per-gas emissions (CO2, CH4, N2O) from tonne-km activity
- Weather, load and traffic adjustments (additive)
- CO2 equivalents with AR5 GWP100
- Radiative forcing uplift for air freight
- Scenario comparison for mode shift analysis
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from carbon.emission_factors import (
    DEFAULT_REGION,
    EmissionFactor,
    FactorSource,
    InMemoryFactorTable,
    TransportMode,
    normalize_key_part,
)

# Global Warming Potentials (100-year, IPCC AR5)
GWP_CH4 = 28
GWP_N2O = 265

# Non-CO2 high altitude effects for aviation
AVIATION_RADIATIVE_FORCING = 2.0

GRAMS_PER_KG = 1000.0
FULL_LOAD_PERCENT = 100.0


class WeatherCondition(str, Enum):
    NORMAL = "NORMAL"
    LIGHT_ADVERSE = "LIGHT_ADVERSE"
    HEAVY_ADVERSE = "HEAVY_ADVERSE"
    SNOW_ICE = "SNOW_ICE"
    EXTREME = "EXTREME"


class EmissionScope(str, Enum):
    """GHG Protocol scopes."""
    SCOPE_1 = "SCOPE_1"
    SCOPE_2 = "SCOPE_2"
    SCOPE_3 = "SCOPE_3"


WEATHER_FACTORS: Dict[str, float] = {
    WeatherCondition.NORMAL.value: 0.0,
    WeatherCondition.LIGHT_ADVERSE.value: 0.03,
    WeatherCondition.HEAVY_ADVERSE.value: 0.05,
    WeatherCondition.SNOW_ICE.value: 0.10,
    WeatherCondition.EXTREME.value: 0.15,
}

# (minimum utilization %, factor), scanned top-down
LOAD_FACTORS: Tuple[Tuple[float, float], ...] = (
    (90, 0.0),
    (80, 0.05),
    (70, 0.10),
    (60, 0.15),
    (50, 0.20),
)
UNDERLOADED_FACTOR = 0.30

WEEKEND_TRAFFIC_FACTOR = 0.05
NIGHT_TRAFFIC_FACTOR = 0.0
PEAK_TRAFFIC_FACTOR = 0.15
MIDDAY_TRAFFIC_FACTOR = 0.05
EVENING_TRAFFIC_FACTOR = 0.10


@dataclass(frozen=True)
class TrafficWindow:
    """Departure slot. day_of_week: 0=Sunday ... 6=Saturday."""
    departure_hour: int
    day_of_week: int

    @property
    def is_weekday(self) -> bool:
        return 1 <= self.day_of_week <= 5


@dataclass(frozen=True)
class CalculationInput:
    """Shipment parameters for one calculation."""
    distance: float  # km
    weight: float  # tonnes
    transport_mode: Union[str, TransportMode]
    fuel_type: Union[str, Enum]
    weather_condition: Optional[Union[str, WeatherCondition]] = None
    capacity_utilization: Optional[float] = None  # percent
    traffic: Optional[TrafficWindow] = None

    @property
    def tonne_km(self) -> float:
        return self.distance * self.weight


@dataclass(frozen=True)
class EmissionBreakdown:
    """Base CO2 and the absolute CO2 added by each adjustment (kg)."""
    base: float
    weather_adjustment: float
    load_adjustment: float
    traffic_adjustment: float

    @property
    def total(self) -> float:
        return (
            self.base
            + self.weather_adjustment
            + self.load_adjustment
            + self.traffic_adjustment
        )


@dataclass(frozen=True)
class EmissionResult:
    """Calculated emissions for a shipment (masses in kg)."""
    co2: float
    ch4: float
    n2o: float
    total_co2e: float
    scope: str
    breakdown: EmissionBreakdown
    emission_factor: float  # co2 factor used, kg/t-km

    @property
    def adjustment_factors(self) -> Dict[str, float]:
        """Fractional factors recovered from the breakdown (0 on a zero base)."""
        base = self.breakdown.base
        if base == 0:
            return {"weather": 0.0, "load": 0.0, "traffic": 0.0}
        return {
            "weather": self.breakdown.weather_adjustment / base,
            "load": self.breakdown.load_adjustment / base,
            "traffic": self.breakdown.traffic_adjustment / base,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "co2": self.co2,
            "ch4": self.ch4,
            "n2o": self.n2o,
            "total_co2e": self.total_co2e,
            "scope": self.scope,
            "breakdown": {
                "base": self.breakdown.base,
                "weather_adjustment": self.breakdown.weather_adjustment,
                "load_adjustment": self.breakdown.load_adjustment,
                "traffic_adjustment": self.breakdown.traffic_adjustment,
            },
            "emission_factor": self.emission_factor,
        }


def get_weather_factor(condition: Optional[Union[str, WeatherCondition]]) -> float:
    """Weather uplift; unknown conditions count as NORMAL."""
    if condition is None:
        return 0.0
    return WEATHER_FACTORS.get(normalize_key_part(condition), 0.0)


def get_load_factor(capacity_percent: Optional[float]) -> float:
    """Penalty for unused capacity. None means fully loaded."""
    if capacity_percent is None:
        capacity_percent = FULL_LOAD_PERCENT

    for threshold, factor in LOAD_FACTORS:
        if capacity_percent >= threshold:
            return factor
    return UNDERLOADED_FACTOR


def get_traffic_factor(hour: int, day_of_week: int) -> float:
    """Congestion uplift for a departure hour (0-23) and weekday (0=Sunday)."""
    if not 1 <= day_of_week <= 5:
        return WEEKEND_TRAFFIC_FACTOR
    if hour >= 22 or hour < 6:
        return NIGHT_TRAFFIC_FACTOR
    if 6 <= hour < 9 or 15 <= hour < 18:
        return PEAK_TRAFFIC_FACTOR
    if 9 <= hour < 15:
        return MIDDAY_TRAFFIC_FACTOR
    return EVENING_TRAFFIC_FACTOR


def determine_scope(transport_mode: Union[str, TransportMode]) -> str:
    """Reporting scope for a shipment. Always Scope 3 (value chain) for now."""
    return EmissionScope.SCOPE_3.value


def compute_emissions(params: CalculationInput, factor: EmissionFactor) -> EmissionResult:
    """
    Calculate emissions for a shipment against a known emission factor.

    Inputs are not validated: zero distance or weight gives zero emissions
    and negative values propagate arithmetically.

    Args:
        params: Shipment parameters
        factor: Emission factor for the shipment's mode and fuel

    Returns:
        EmissionResult with per-gas masses, CO2e total and breakdown
    """
    tonne_km = params.tonne_km

    base_co2 = tonne_km * factor.co2_factor
    base_ch4 = tonne_km * ((factor.ch4_factor or 0.0) / GRAMS_PER_KG)
    base_n2o = tonne_km * ((factor.n2o_factor or 0.0) / GRAMS_PER_KG)

    weather_factor = get_weather_factor(params.weather_condition)
    load_factor = get_load_factor(params.capacity_utilization)
    traffic_factor = 0.0
    if params.traffic is not None:
        traffic_factor = get_traffic_factor(
            params.traffic.departure_hour,
            params.traffic.day_of_week
        )

    # Additive, not compounded; may exceed 1.0
    total_adjustment = weather_factor + load_factor + traffic_factor

    adjusted_co2 = base_co2 * (1 + total_adjustment)
    adjusted_ch4 = base_ch4 * (1 + total_adjustment)
    adjusted_n2o = base_n2o * (1 + total_adjustment)

    total_co2e = adjusted_co2 + adjusted_ch4 * GWP_CH4 + adjusted_n2o * GWP_N2O

    if normalize_key_part(params.transport_mode) == TransportMode.AIR.value:
        total_co2e *= AVIATION_RADIATIVE_FORCING

    return EmissionResult(
        co2=adjusted_co2,
        ch4=adjusted_ch4,
        n2o=adjusted_n2o,
        total_co2e=total_co2e,
        scope=determine_scope(params.transport_mode),
        breakdown=EmissionBreakdown(
            base=base_co2,
            weather_adjustment=base_co2 * weather_factor,
            load_adjustment=base_co2 * load_factor,
            traffic_adjustment=base_co2 * traffic_factor,
        ),
        emission_factor=factor.co2_factor,
    )


def compare_scenarios(
    base: EmissionResult,
    alternatives: Sequence[Tuple[str, EmissionResult]]
) -> Dict[str, Any]:
    """
    Compare alternative scenarios against a baseline.

    Savings are positive when an alternative emits less CO2e than the base.
    """
    compared: List[Dict[str, Any]] = []
    for name, result in alternatives:
        savings = base.total_co2e - result.total_co2e
        savings_pct = (savings / base.total_co2e * 100) if base.total_co2e else 0.0
        compared.append({
            "scenario_name": name,
            "emissions": result.to_dict(),
            "savings_kg": round(savings, 4),
            "savings_percent": round(savings_pct, 2),
        })

    return {
        "base_scenario": base.to_dict(),
        "alternatives": compared,
        "best_alternative": min(compared, key=lambda x: x["emissions"]["total_co2e"])
            if compared else None,
    }


class EmissionsCalculator:
    """
    Transport emissions calculator bound to a factor source.

    The only I/O is the single factor lookup per calculation; everything
    else is pure arithmetic, so one instance can be shared freely.
    """

    def __init__(
        self,
        factor_source: Optional[FactorSource] = None,
        region: str = DEFAULT_REGION
    ):
        """
        Initialize calculator.

        Args:
            factor_source: Emission factor lookup (defaults to the reference table)
            region: Region used for factor lookups
        """
        self.factor_source = factor_source or InMemoryFactorTable()
        self.region = region

    def calculate(self, params: CalculationInput) -> EmissionResult:
        """
        Calculate emissions for a shipment.

        Raises:
            FactorNotFoundError: no factor for the mode/fuel in this region
        """
        factor = self.factor_source.get_factor(
            params.transport_mode,
            params.fuel_type,
            self.region
        )
        return compute_emissions(params, factor)

    def compare_scenarios(
        self,
        base: CalculationInput,
        alternatives: Sequence[Tuple[str, CalculationInput]]
    ) -> Dict[str, Any]:
        """Calculate every scenario, then compare against the base."""
        base_result = self.calculate(base)
        alternative_results = [
            (name, self.calculate(params)) for name, params in alternatives
        ]
        return compare_scenarios(base_result, alternative_results)
