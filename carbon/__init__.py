from carbon.emission_factors import (
    DEFAULT_EMISSION_FACTORS,
    DEFAULT_REGION,
    EmissionFactor,
    FactorNotFoundError,
    FactorSource,
    FuelType,
    InMemoryFactorTable,
    TransportMode,
)
from carbon.emissions_calculator import (
    CalculationInput,
    EmissionBreakdown,
    EmissionResult,
    EmissionScope,
    EmissionsCalculator,
    TrafficWindow,
    WeatherCondition,
    compare_scenarios,
    compute_emissions,
)

__all__ = [
    "DEFAULT_EMISSION_FACTORS",
    "DEFAULT_REGION",
    "EmissionFactor",
    "FactorNotFoundError",
    "FactorSource",
    "FuelType",
    "InMemoryFactorTable",
    "TransportMode",
    "CalculationInput",
    "EmissionBreakdown",
    "EmissionResult",
    "EmissionScope",
    "EmissionsCalculator",
    "TrafficWindow",
    "WeatherCondition",
    "compare_scenarios",
    "compute_emissions",
]
