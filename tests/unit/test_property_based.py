"""
Property-based tests for the emissions calculator (Hypothesis).
"""
import pytest
from hypothesis import given, strategies as st, settings

from carbon.emission_factors import DEFAULT_EMISSION_FACTORS
from carbon.emissions_calculator import (
    CalculationInput,
    EmissionsCalculator,
    GWP_CH4,
    GWP_N2O,
    TrafficWindow,
    WeatherCondition,
)

CALCULATOR = EmissionsCalculator()

factor_keys = st.sampled_from([(f.transport_mode, f.fuel_type) for f in DEFAULT_EMISSION_FACTORS])
distances = st.floats(min_value=0.1, max_value=20000.0, allow_nan=False, allow_infinity=False)
weights = st.floats(min_value=0.01, max_value=500.0, allow_nan=False, allow_infinity=False)
weather = st.sampled_from([c.value for c in WeatherCondition])
utilization = st.floats(min_value=0.0, max_value=100.0, allow_nan=False)
traffic = st.one_of(
    st.none(),
    st.builds(
        TrafficWindow,
        departure_hour=st.integers(min_value=0, max_value=23),
        day_of_week=st.integers(min_value=0, max_value=6),
    ),
)


def make_input(key, distance, weight, condition="NORMAL", load=100.0, window=None):
    mode, fuel = key
    return CalculationInput(
        distance=distance,
        weight=weight,
        transport_mode=mode,
        fuel_type=fuel,
        weather_condition=condition,
        capacity_utilization=load,
        traffic=window,
    )


class TestCalculatorProperties:

    @given(key=factor_keys, distance=distances, weight=weights,
           condition=weather, load=utilization, window=traffic)
    @settings(max_examples=100)
    @pytest.mark.unit
    def test_breakdown_sums_to_adjusted_co2(self, key, distance, weight, condition, load, window):
        """Proprietà: base + adjustments == co2."""
        result = CALCULATOR.calculate(make_input(key, distance, weight, condition, load, window))

        assert result.breakdown.total == pytest.approx(result.co2, rel=1e-9)

    @given(key=factor_keys, distance=distances, weight=weights,
           condition=weather, load=utilization, window=traffic)
    @settings(max_examples=100)
    @pytest.mark.unit
    def test_gwp_conversion(self, key, distance, weight, condition, load, window):
        """Proprietà: totalCO2e = co2 + 28 ch4 + 265 n2o, doubled for AIR."""
        result = CALCULATOR.calculate(make_input(key, distance, weight, condition, load, window))

        gwp_sum = result.co2 + result.ch4 * GWP_CH4 + result.n2o * GWP_N2O
        multiplier = 2.0 if key[0] == "AIR" else 1.0
        assert result.total_co2e == pytest.approx(multiplier * gwp_sum, rel=1e-9)

    @given(key=factor_keys, distance=distances, weight=weights,
           condition=weather, load=utilization)
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_linear_in_distance(self, key, distance, weight, condition, load):
        single = CALCULATOR.calculate(make_input(key, distance, weight, condition, load))
        double = CALCULATOR.calculate(make_input(key, distance * 2, weight, condition, load))

        assert double.co2 == pytest.approx(single.co2 * 2, rel=1e-9)
        assert double.ch4 == pytest.approx(single.ch4 * 2, rel=1e-9)
        assert double.n2o == pytest.approx(single.n2o * 2, rel=1e-9)
        assert double.total_co2e == pytest.approx(single.total_co2e * 2, rel=1e-9)

    @given(key=factor_keys, distance=distances, weight=weights)
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_linear_in_weight(self, key, distance, weight):
        single = CALCULATOR.calculate(make_input(key, distance, weight))
        double = CALCULATOR.calculate(make_input(key, distance, weight * 2))

        assert double.co2 == pytest.approx(single.co2 * 2, rel=1e-9)
        assert double.total_co2e == pytest.approx(single.total_co2e * 2, rel=1e-9)

    @given(key=factor_keys, distance=distances, weight=weights, load=utilization)
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_weather_monotonic(self, key, distance, weight, load):
        """Proprietà: worse weather never lowers emissions."""
        totals = [
            CALCULATOR.calculate(make_input(key, distance, weight, c.value, load)).total_co2e
            for c in WeatherCondition
        ]

        assert totals == sorted(totals)

    @given(key=factor_keys, distance=distances, weight=weights,
           low=st.floats(min_value=50.0, max_value=100.0),
           high=st.floats(min_value=50.0, max_value=100.0))
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_load_monotonic(self, key, distance, weight, low, high):
        """Proprietà: fuller vehicles never emit more."""
        low, high = min(low, high), max(low, high)
        at_low = CALCULATOR.calculate(make_input(key, distance, weight, load=low))
        at_high = CALCULATOR.calculate(make_input(key, distance, weight, load=high))

        assert at_high.total_co2e <= at_low.total_co2e
