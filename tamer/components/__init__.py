"""
Creature-battle components - data-only record definitions.

All components are frozen Pydantic models containing only data.
Logic lives in the battle and progression modules, not in components.
"""

from tamer.components.stats import CharacterStats, StatGrowthRates
from tamer.components.combat import (
    Element,
    StatusType,
    StatusEffect,
    ActiveStatusEffect,
)
from tamer.components.ability import (
    Ability,
    AbilityCategory,
    TargetType,
    random_enemy_count,
)
from tamer.components.item import (
    Item,
    ItemEffect,
    ItemCategory,
    ItemEffectType,
)
from tamer.components.monster import (
    LearnableAbility,
    MonsterSpecies,
    MonsterInstance,
    Rarity,
)

__all__ = [
    # Stats
    "CharacterStats",
    "StatGrowthRates",
    # Combat
    "Element",
    "StatusType",
    "StatusEffect",
    "ActiveStatusEffect",
    # Abilities
    "Ability",
    "AbilityCategory",
    "TargetType",
    "random_enemy_count",
    # Items
    "Item",
    "ItemEffect",
    "ItemCategory",
    "ItemEffectType",
    # Monsters
    "LearnableAbility",
    "MonsterSpecies",
    "MonsterInstance",
    "Rarity",
]
