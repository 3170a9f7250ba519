"""
Unit tests for Pydantic schemas.
"""
import pytest
from pydantic import ValidationError

from api.schemas import (
    CalculationRequest, CompareScenariosRequest, EmissionFactorResponse, ScenarioRequest
)
from carbon.emission_factors import EmissionFactor
from carbon.emissions_calculator import TrafficWindow
from tests.factories import CalculationRequestFactory, ScenarioRequestFactory


class TestCalculationRequest:
    """Test suite for calculation request schema."""

    @pytest.mark.unit
    def test_defaults(self):
        request = CalculationRequest(distance=100, weight=10, transport_mode="TRUCK", fuel_type="DIESEL")

        assert request.weather_condition == "NORMAL"
        assert request.capacity_utilization == 100
        assert request.departure_hour is None
        assert request.day_of_week is None

    @pytest.mark.unit
    def test_codes_are_upper_cased(self):
        request = CalculationRequestFactory(transport_mode=" truck ", fuel_type="diesel", weather_condition="snow_ice")

        assert request.transport_mode == "TRUCK"
        assert request.fuel_type == "DIESEL"
        assert request.weather_condition == "SNOW_ICE"

    @pytest.mark.unit
    @pytest.mark.parametrize("field,value", [
        ("distance", 0),
        ("distance", -5),
        ("weight", 0),
        ("capacity_utilization", 101),
        ("capacity_utilization", -1),
    ])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            CalculationRequestFactory(**{field: value})

    @pytest.mark.unit
    def test_traffic_fields_must_be_paired(self):
        with pytest.raises(ValidationError):
            CalculationRequestFactory(departure_hour=8)
        with pytest.raises(ValidationError):
            CalculationRequestFactory(day_of_week=3)

    @pytest.mark.unit
    @pytest.mark.parametrize("hour,day", [(24, 1), (-1, 1), (8, 7), (8, -1)])
    def test_traffic_ranges(self, hour, day):
        with pytest.raises(ValidationError):
            CalculationRequestFactory(departure_hour=hour, day_of_week=day)

    @pytest.mark.unit
    def test_to_calculation_input(self):
        params = CalculationRequestFactory(
            distance=250, weight=4, departure_hour=8, day_of_week=2, capacity_utilization=75
        ).to_calculation_input()

        assert params.distance == 250
        assert params.weight == 4
        assert params.transport_mode == "TRUCK"
        assert params.capacity_utilization == 75
        assert params.traffic == TrafficWindow(departure_hour=8, day_of_week=2)

    @pytest.mark.unit
    def test_to_calculation_input_without_traffic(self):
        params = CalculationRequestFactory().to_calculation_input()

        assert params.traffic is None


class TestCompareSchemas:

    @pytest.mark.unit
    def test_scenario_requires_name(self):
        with pytest.raises(ValidationError):
            ScenarioRequest(distance=1, weight=1, transport_mode="RAIL", fuel_type="DIESEL")

    @pytest.mark.unit
    def test_compare_requires_alternatives(self):
        with pytest.raises(ValidationError):
            CompareScenariosRequest(base=CalculationRequestFactory(), alternatives=[])

    @pytest.mark.unit
    def test_compare_request(self):
        request = CompareScenariosRequest(
            base=CalculationRequestFactory(),
            alternatives=[ScenarioRequestFactory(name="Rail", transport_mode="RAIL", fuel_type="ELECTRIC")]
        )

        assert request.alternatives[0].name == "Rail"


class TestEmissionFactorResponse:

    @pytest.mark.unit
    def test_from_core_factor(self):
        factor = EmissionFactor(transport_mode="AIR", fuel_type="JET_FUEL", co2_factor=0.5, source="ICAO", year=2024)

        response = EmissionFactorResponse.model_validate(factor, from_attributes=True)

        assert response.region == "GLOBAL"
        assert response.ch4_factor is None
        assert response.source == "ICAO"
