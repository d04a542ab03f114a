"""Emission calculator — raw activity inputs to a kg CO2e breakdown.

Pure function of its inputs and the factor table. Inputs are assumed to be
validated already (non-negative numbers, well-formed transport type); nothing
here raises on odd values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from app.footprint.factors import DEFAULT_FACTORS, EmissionFactorTable, FoodType, TransportType
from app.footprint.features import round2
from app.footprint.models import EmissionBreakdown


@dataclass(frozen=True, slots=True)
class ActivityInputs:
    transport_type: str | None = None
    transport_distance: float | None = None
    electricity_usage: float | None = None
    natural_gas_usage: float | None = None
    beef_servings: int = 0
    chicken_servings: int = 0
    vegetable_servings: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ActivityInputs:
        return cls(
            transport_type=data.get("transport_type"),
            transport_distance=data.get("transport_distance"),
            electricity_usage=data.get("electricity_usage"),
            natural_gas_usage=data.get("natural_gas_usage"),
            beef_servings=data.get("beef_servings") or 0,
            chicken_servings=data.get("chicken_servings") or 0,
            vegetable_servings=data.get("vegetable_servings") or 0,
        )


def _transport(
    transport_type: str | TransportType | None,
    distance: float | None,
    factors: EmissionFactorTable,
) -> float:
    if not transport_type or not distance:
        return 0.0
    try:
        kind = TransportType(transport_type)
    except ValueError:
        # Unknown mode contributes nothing
        return 0.0
    return factors.transport_factor(kind) * distance


def _energy(electricity: float | None, natural_gas: float | None, factors: EmissionFactorTable) -> float:
    total = 0.0
    if electricity:
        total += factors.electricity * electricity
    if natural_gas:
        total += factors.natural_gas * natural_gas
    return total


def _food(servings: Mapping[FoodType, int | None], factors: EmissionFactorTable) -> float:
    total = 0.0
    for food, count in servings.items():
        if count:
            total += factors.per_serving(food) * count
    return total


def calculate_emissions(
    inputs: Any,
    factors: EmissionFactorTable = DEFAULT_FACTORS,
) -> EmissionBreakdown:
    """Compute transport/energy/food/total emissions for one activity record.

    `inputs` is anything exposing the raw-input attributes (ActivityInputs,
    the ActivityCreate request model, an ORM Activity row). The total is
    summed from the unrounded parts, then every value is rounded to cents.
    """
    transport = _transport(
        getattr(inputs, "transport_type", None),
        getattr(inputs, "transport_distance", None),
        factors,
    )
    energy = _energy(
        getattr(inputs, "electricity_usage", None),
        getattr(inputs, "natural_gas_usage", None),
        factors,
    )
    food = _food(
        {
            FoodType.beef: getattr(inputs, "beef_servings", 0),
            FoodType.chicken: getattr(inputs, "chicken_servings", 0),
            FoodType.vegetables: getattr(inputs, "vegetable_servings", 0),
        },
        factors,
    )

    return EmissionBreakdown(
        transport_emissions=round2(transport),
        energy_emissions=round2(energy),
        food_emissions=round2(food),
        total_emissions=round2(transport + energy + food),
    )
