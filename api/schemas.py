"""
CFIP: Pydantic Schemas
"""
from datetime import datetime
from typing import Optional, List, Dict

from pydantic import BaseModel, Field, field_validator, model_validator

from carbon.emissions_calculator import CalculationInput, TrafficWindow, WeatherCondition


# ==========================================
# CALCULATION SCHEMAS
# ==========================================
class CalculationRequest(BaseModel):
    origin: Optional[str] = Field(None, max_length=200)
    destination: Optional[str] = Field(None, max_length=200)
    distance: float = Field(..., gt=0, description="Distance in km")
    weight: float = Field(..., gt=0, description="Cargo weight in tonnes")
    transport_mode: str = Field(..., min_length=1, max_length=20)
    fuel_type: str = Field(..., min_length=1, max_length=30)
    weather_condition: str = Field(default=WeatherCondition.NORMAL.value, max_length=30)
    capacity_utilization: float = Field(default=100, ge=0, le=100)
    departure_hour: Optional[int] = Field(None, ge=0, le=23)
    day_of_week: Optional[int] = Field(None, ge=0, le=6, description="0=Sunday")

    @field_validator("transport_mode", "fuel_type", "weather_condition")
    @classmethod
    def upper_case(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def check_traffic_pair(self):
        if (self.departure_hour is None) != (self.day_of_week is None):
            raise ValueError("departure_hour and day_of_week must be given together")
        return self

    def to_calculation_input(self) -> CalculationInput:
        traffic = None
        if self.departure_hour is not None and self.day_of_week is not None:
            traffic = TrafficWindow(
                departure_hour=self.departure_hour,
                day_of_week=self.day_of_week
            )
        return CalculationInput(
            distance=self.distance,
            weight=self.weight,
            transport_mode=self.transport_mode,
            fuel_type=self.fuel_type,
            weather_condition=self.weather_condition,
            capacity_utilization=self.capacity_utilization,
            traffic=traffic,
        )


class ScenarioRequest(CalculationRequest):
    name: str = Field(..., min_length=1, max_length=100)


class CompareScenariosRequest(BaseModel):
    base: CalculationRequest
    alternatives: List[ScenarioRequest] = Field(..., min_length=1, max_length=20)


class BreakdownResponse(BaseModel):
    base: float
    weather_adjustment: float
    load_adjustment: float
    traffic_adjustment: float


class EmissionResultResponse(BaseModel):
    co2: float
    ch4: float
    n2o: float
    total_co2e: float
    scope: str
    breakdown: BreakdownResponse
    emission_factor: float


class CalculationResponse(EmissionResultResponse):
    origin: Optional[str]
    destination: Optional[str]
    transport_mode: str
    fuel_type: str
    adjustment_factors: Dict[str, float]
    calculated_at: datetime


class ScenarioComparison(BaseModel):
    scenario_name: str
    emissions: EmissionResultResponse
    savings_kg: float
    savings_percent: float


class CompareScenariosResponse(BaseModel):
    base_scenario: EmissionResultResponse
    alternatives: List[ScenarioComparison]
    best_alternative: Optional[ScenarioComparison]


# ==========================================
# EMISSION FACTOR SCHEMAS
# ==========================================
class EmissionFactorResponse(BaseModel):
    transport_mode: str
    fuel_type: str
    region: str
    co2_factor: float
    ch4_factor: Optional[float]
    n2o_factor: Optional[float]
    source: Optional[str]
    year: Optional[int]

    class Config:
        from_attributes = True


class EmissionFactorListResponse(BaseModel):
    items: List[EmissionFactorResponse]
    total: int


# ==========================================
# SYSTEM SCHEMAS
# ==========================================
class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    database: str
    version: str = "1.0.0"
