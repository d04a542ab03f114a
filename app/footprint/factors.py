"""Emission factor table — configuration only, built once at import.

Values are kg CO2e per unit (EPA 2025 averages). The table is frozen and
shared by every request; pass a different instance to the calculator when a
caller needs other factors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class TransportType(str, Enum):
    car_gasoline = "car_gasoline"
    car_electric = "car_electric"
    bus = "bus"
    train = "train"
    bike = "bike"
    walking = "walking"


class FoodType(str, Enum):
    beef = "beef"
    chicken = "chicken"
    vegetables = "vegetables"


def _frozen(values: dict) -> Mapping:
    return MappingProxyType(dict(values))


@dataclass(frozen=True, slots=True)
class EmissionFactorTable:
    transport: Mapping[TransportType, float]  # per mile (per passenger for bus/train)
    electricity: float  # per kWh
    natural_gas: float  # per therm
    food: Mapping[FoodType, float]  # per kg of food
    serving_kg: Mapping[FoodType, float] = field(
        default_factory=lambda: _frozen(
            {FoodType.beef: 0.5, FoodType.chicken: 0.2, FoodType.vegetables: 0.15}
        )
    )

    def transport_factor(self, transport_type: TransportType) -> float:
        return self.transport.get(transport_type, 0.0)

    def per_serving(self, food: FoodType) -> float:
        """kg CO2e for one serving of `food`."""
        return self.food[food] * self.serving_kg[food]

    def as_dict(self) -> dict:
        return {
            "transport": {t.value: f for t, f in self.transport.items()},
            "energy": {"electricity": self.electricity, "natural_gas": self.natural_gas},
            "food": {f.value: v for f, v in self.food.items()},
            "serving_kg": {f.value: v for f, v in self.serving_kg.items()},
        }


DEFAULT_FACTORS = EmissionFactorTable(
    transport=_frozen(
        {
            TransportType.car_gasoline: 0.39,
            TransportType.car_electric: 0.13,  # US grid average
            TransportType.bus: 0.07,
            TransportType.train: 0.045,
            TransportType.bike: 0.0,
            TransportType.walking: 0.0,
        }
    ),
    electricity=0.37,
    natural_gas=5.3,
    food=_frozen(
        {
            FoodType.beef: 30.4,
            FoodType.chicken: 4.2,
            FoodType.vegetables: 1.0,
        }
    ),
)
