"""
Monster components - species templates and owned monster instances.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from engine.core.component import Component, register_component
from tamer.components.ability import Ability
from tamer.components.combat import Element
from tamer.components.stats import CharacterStats, StatGrowthRates


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


@register_component
class LearnableAbility(Component):
    """An ability a species learns on reaching a level."""
    ability_id: str
    learn_at_level: int = Field(default=1, ge=1)


@register_component
class MonsterSpecies(Component):
    """
    Species template.

    Attributes:
        base_stats: Stats at level 1
        stat_growth: Per-level increases
        abilities: Learnset in learn order
        capture_base_difficulty: 0 (trivial) .. 1 (impossible before clamping)
    """
    species_id: str
    name: str
    description: str = ""
    element: Element = Element.NEUTRAL
    rarity: Rarity = Rarity.COMMON
    base_stats: CharacterStats
    stat_growth: StatGrowthRates = StatGrowthRates()
    abilities: tuple[LearnableAbility, ...] = ()
    capture_base_difficulty: float = Field(default=0.5, ge=0, le=1)
    sprite_key: str = ""


@register_component
class MonsterInstance(Component):
    """A monster owned by the player."""
    instance_id: str
    species_id: str
    nickname: Optional[str] = None
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    stats: CharacterStats
    learned_abilities: tuple[Ability, ...] = ()
    bond_level: int = Field(default=0, ge=0, le=100)
    is_in_squad: bool = False
