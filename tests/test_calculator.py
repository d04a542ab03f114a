"""Tests for the emission calculator and factor table."""

from __future__ import annotations

import dataclasses

import pytest

from app.footprint.calculator import ActivityInputs, calculate_emissions
from app.footprint.factors import DEFAULT_FACTORS, EmissionFactorTable, TransportType
from app.footprint.features import round2
from app.footprint.models import ActivityCreate


class TestTransport:
    def test_car_gasoline(self):
        result = calculate_emissions(ActivityInputs(transport_type="car_gasoline", transport_distance=100))
        assert result.transport_emissions == 39.00

    def test_car_electric(self):
        result = calculate_emissions(ActivityInputs(transport_type="car_electric", transport_distance=50))
        assert result.transport_emissions == 6.50
        assert result.total_emissions == 6.50

    @pytest.mark.parametrize("mode", ["bike", "walking"])
    def test_zero_emission_modes(self, mode):
        result = calculate_emissions(ActivityInputs(transport_type=mode, transport_distance=1234.5))
        assert result.transport_emissions == 0.0

    def test_enum_member_accepted(self):
        result = calculate_emissions(ActivityInputs(transport_type=TransportType.bus, transport_distance=10))
        assert result.transport_emissions == 0.7

    def test_unknown_type_contributes_zero(self):
        result = calculate_emissions(ActivityInputs(transport_type="rocket", transport_distance=100))
        assert result.transport_emissions == 0.0
        assert result.total_emissions == 0.0

    def test_type_without_distance(self):
        result = calculate_emissions(ActivityInputs(transport_type="car_gasoline"))
        assert result.transport_emissions == 0.0

    def test_distance_without_type(self):
        result = calculate_emissions(ActivityInputs(transport_distance=100))
        assert result.transport_emissions == 0.0


class TestEnergy:
    def test_electricity(self):
        result = calculate_emissions(ActivityInputs(electricity_usage=10, natural_gas_usage=0))
        assert result.energy_emissions == 3.70

    def test_natural_gas(self):
        result = calculate_emissions(ActivityInputs(natural_gas_usage=2))
        assert result.energy_emissions == 10.60

    def test_both(self):
        result = calculate_emissions(ActivityInputs(electricity_usage=10, natural_gas_usage=2))
        assert result.energy_emissions == 14.30


class TestFood:
    def test_beef(self):
        result = calculate_emissions(ActivityInputs(beef_servings=2))
        assert result.food_emissions == round2(30.4 * 0.5 * 2) == 30.40

    def test_chicken(self):
        result = calculate_emissions(ActivityInputs(chicken_servings=3))
        assert result.food_emissions == 2.52

    def test_vegetables(self):
        result = calculate_emissions(ActivityInputs(vegetable_servings=4))
        assert result.food_emissions == 0.6

    def test_no_servings(self):
        result = calculate_emissions(ActivityInputs())
        assert result.food_emissions == 0.0


class TestTotals:
    def test_empty_input_is_all_zero(self):
        result = calculate_emissions(ActivityInputs())
        assert result.model_dump() == {
            "transport_emissions": 0.0,
            "energy_emissions": 0.0,
            "food_emissions": 0.0,
            "total_emissions": 0.0,
        }

    def test_total_is_sum_of_parts(self):
        result = calculate_emissions(
            ActivityInputs(
                transport_type="car_gasoline",
                transport_distance=10,
                electricity_usage=10,
                beef_servings=1,
                chicken_servings=1,
                vegetable_servings=1,
            )
        )
        assert result.transport_emissions == 3.9
        assert result.energy_emissions == 3.7
        assert result.food_emissions == 16.19
        assert result.total_emissions == round2(
            result.transport_emissions + result.energy_emissions + result.food_emissions
        )

    def test_idempotent(self):
        inputs = ActivityInputs(transport_type="train", transport_distance=33.3, natural_gas_usage=1.7)
        assert calculate_emissions(inputs) == calculate_emissions(inputs)

    def test_accepts_request_model(self):
        body = ActivityCreate.model_validate({"transportType": "car_electric", "transportDistance": 50})
        assert calculate_emissions(body).total_emissions == 6.5

    def test_from_mapping(self):
        inputs = ActivityInputs.from_mapping({"beef_servings": 2, "chicken_servings": None})
        assert inputs.chicken_servings == 0
        assert calculate_emissions(inputs).food_emissions == 30.4


class TestFactorTable:
    def test_defaults(self):
        assert DEFAULT_FACTORS.transport_factor(TransportType.car_gasoline) == 0.39
        assert DEFAULT_FACTORS.electricity == 0.37
        assert DEFAULT_FACTORS.natural_gas == 5.3

    def test_table_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_FACTORS.electricity = 1.0  # type: ignore[misc]

    def test_mappings_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_FACTORS.transport[TransportType.bike] = 1.0  # type: ignore[index]

    def test_custom_table(self):
        table = EmissionFactorTable(
            transport={TransportType.bus: 1.0},
            electricity=0.0,
            natural_gas=0.0,
            food=DEFAULT_FACTORS.food,
        )
        assert calculate_emissions(ActivityInputs(transport_type="bus", transport_distance=10), table).transport_emissions == 10.0
        # Modes missing from a custom table contribute nothing
        assert calculate_emissions(ActivityInputs(transport_type="train", transport_distance=10), table).transport_emissions == 0.0

    def test_as_dict(self):
        data = DEFAULT_FACTORS.as_dict()
        assert data["transport"]["car_electric"] == 0.13
        assert data["food"]["beef"] == 30.4
        assert data["serving_kg"]["vegetables"] == 0.15
