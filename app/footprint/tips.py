"""Hardcoded reduction tips — configuration plus one selection rule."""

from __future__ import annotations

from dataclasses import dataclass

from app.footprint.models import Tip

# Daily-average thresholds (kg CO2e) above which a category earns tips
ENERGY_TIP_THRESHOLD = 1.0
FOOD_TIP_THRESHOLD = 0.5


@dataclass(frozen=True, slots=True)
class TipDefinition:
    title: str
    description: str
    category: str

    def to_model(self) -> Tip:
        return Tip(title=self.title, description=self.description, category=self.category)


TIPS: dict[str, list[TipDefinition]] = {
    "transport": [
        TipDefinition("Use public transportation", "Reduce transport emissions by 45%", "transport"),
        TipDefinition("Consider carpooling", "Share rides to cut emissions in half", "transport"),
    ],
    "energy": [
        TipDefinition("Switch to LED bulbs", "Save 75% energy usage on lighting", "energy"),
        TipDefinition("Unplug devices when not in use", "Eliminate phantom energy consumption", "energy"),
    ],
    "food": [
        TipDefinition("Eat more plant-based meals", "Lower food carbon footprint significantly", "food"),
        TipDefinition("Choose local and seasonal produce", "Reduce food transportation emissions", "food"),
    ],
    "general": [
        TipDefinition("Great job! Keep it up", "Your emissions are below average", "general"),
        TipDefinition(
            "Consider offsetting remaining emissions",
            "Support verified carbon offset projects",
            "general",
        ),
    ],
}


def personalized_tips(by_category: dict[str, float], limit: int = 3) -> list[Tip]:
    """Pick tips for the categories that dominate `by_category`.

    Transport tips when transport is the single largest category; energy and
    food tips when they exceed their thresholds; general tips otherwise.
    """
    transport = by_category.get("transport", 0.0)
    energy = by_category.get("energy", 0.0)
    food = by_category.get("food", 0.0)

    picked: list[TipDefinition] = []
    if transport > energy and transport > food:
        picked.extend(TIPS["transport"])
    if energy > ENERGY_TIP_THRESHOLD:
        picked.extend(TIPS["energy"])
    if food > FOOD_TIP_THRESHOLD:
        picked.extend(TIPS["food"])
    if not picked:
        picked.extend(TIPS["general"])

    return [t.to_model() for t in picked[:limit]]
