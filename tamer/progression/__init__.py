"""
Progression module - monster levels, stats and learnsets.
"""

from tamer.progression.growth import (
    calculate_monster_stats,
    get_learned_abilities_at_level,
    create_monster_instance,
    experience_to_next_level,
    add_experience_to_monster,
    heal_monster,
    damage_monster,
    is_monster_alive,
)

__all__ = [
    "calculate_monster_stats",
    "get_learned_abilities_at_level",
    "create_monster_instance",
    "experience_to_next_level",
    "add_experience_to_monster",
    "heal_monster",
    "damage_monster",
    "is_monster_alive",
]
