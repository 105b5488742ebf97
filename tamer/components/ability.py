"""
Ability components - static ability definitions and targeting policies.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import Field

from engine.core.component import Component, register_component
from tamer.components.combat import Element, StatusEffect


class AbilityCategory(str, Enum):
    """How an ability resolves."""
    PHYSICAL = "physical"
    MAGICAL = "magical"
    HEALING = "healing"
    STATUS = "status"


class TargetType(str, Enum):
    """Action targeting policies."""
    SINGLE_ENEMY = "single_enemy"
    ALL_ENEMIES = "all_enemies"
    SELF = "self"
    SINGLE_ALLY = "single_ally"
    ALL_ALLIES = "all_allies"
    ADJACENT_ENEMIES = "adjacent_enemies"
    RANDOM_ENEMIES_2 = "random_enemies_2"
    RANDOM_ENEMIES_3 = "random_enemies_3"


_RANDOM_POLICY = re.compile(r"^random_enemies_(\d+)$")


def random_enemy_count(target_type: TargetType) -> Optional[int]:
    """N for random_enemies_N policies, None otherwise."""
    match = _RANDOM_POLICY.match(TargetType(target_type).value)
    return int(match.group(1)) if match else None


@register_component
class Ability(Component):
    """
    Static data for an ability.

    Attributes:
        ability_id: Registry key
        element: Elemental affinity used for effectiveness
        category: physical / magical / healing / status
        power: Base power (heal amount for healing abilities)
        accuracy: Hit chance, 0-100
        mp_cost: MP deducted when used
        target_type: Targeting policy
        status_effect: Optional status attached on hit
        cooldown_turns: Turns before reuse (metadata, 0 = none)
    """
    ability_id: str
    name: str
    description: str = ""
    element: Element = Element.NEUTRAL
    category: AbilityCategory = AbilityCategory.PHYSICAL
    power: int = Field(default=0, ge=0)
    accuracy: int = Field(default=100, ge=0, le=100)
    mp_cost: int = Field(default=0, ge=0)
    target_type: TargetType = TargetType.SINGLE_ENEMY
    status_effect: Optional[StatusEffect] = None
    animation: str = ""
    cooldown_turns: int = Field(default=0, ge=0)

    @property
    def is_damaging(self) -> bool:
        return (
            self.category in (AbilityCategory.PHYSICAL, AbilityCategory.MAGICAL)
            and self.power > 0
        )
