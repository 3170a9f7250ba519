"""
Test Data Factories - generate valid shipment requests for tests.
"""
import factory

from api.schemas import CalculationRequest, ScenarioRequest


class CalculationRequestFactory(factory.Factory):
    """Factory per creare richieste di calcolo di test."""

    class Meta:
        model = CalculationRequest

    origin = factory.Iterator(['Lusaka', 'Ndola', 'Kitwe', 'Livingstone'])
    destination = factory.Iterator(['Durban', 'Dar es Salaam', 'Walvis Bay', 'Beira'])
    distance = 100.0
    weight = 10.0
    transport_mode = "TRUCK"
    fuel_type = "DIESEL"
    weather_condition = "NORMAL"
    capacity_utilization = 100.0


class ScenarioRequestFactory(CalculationRequestFactory):
    """Factory per scenari alternativi."""

    class Meta:
        model = ScenarioRequest

    name = factory.Sequence(lambda n: f"Scenario {n + 1}")


def calculation_payload(**overrides) -> dict:
    """JSON body for POST /api/v1/calculations."""
    return CalculationRequestFactory(**overrides).model_dump()


def scenario_payload(**overrides) -> dict:
    return ScenarioRequestFactory(**overrides).model_dump()
