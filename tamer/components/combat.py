"""
Combat components - elements, status effects.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from engine.core.component import Component, register_component


class Element(str, Enum):
    """Elemental affinity for abilities and monsters."""
    FIRE = "fire"
    WATER = "water"
    EARTH = "earth"
    WIND = "wind"
    LIGHT = "light"
    DARK = "dark"
    NEUTRAL = "neutral"


class StatusType(str, Enum):
    """Status effect kinds."""
    # Debuffs
    POISON = "poison"
    SLEEP = "sleep"
    SLOW = "slow"
    # Buffs
    REGEN = "regen"
    SHIELD = "shield"
    ATTACK_UP = "attack_up"
    DEFENSE_UP = "defense_up"
    HASTE = "haste"


@register_component
class StatusEffect(Component):
    """
    Static definition of a status effect.

    Attributes:
        id: Definition identifier
        name: Display name
        type: Kind of status
        duration: Turns the effect lasts once applied
        magnitude: Strength of the effect (meaning depends on type)
    """
    id: str
    name: str
    type: StatusType
    duration: int = Field(default=1, ge=1)
    magnitude: float = Field(default=0.0, ge=0)


@register_component
class ActiveStatusEffect(Component):
    """
    A status effect attached to a combatant.

    Attributes:
        effect: The definition being applied
        turns_remaining: Counts down once per processed turn, removed at 0
        applied_by: Combatant id that applied it (attribution only)
    """
    effect: StatusEffect
    turns_remaining: int = Field(ge=0)
    applied_by: str

    @property
    def type(self) -> StatusType:
        return self.effect.type

    def tick(self) -> ActiveStatusEffect:
        """Copy with one turn elapsed."""
        return self.model_copy(update={"turns_remaining": self.turns_remaining - 1})

    @property
    def is_expired(self) -> bool:
        return self.turns_remaining <= 0
