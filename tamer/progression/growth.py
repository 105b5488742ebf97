"""
Monster growth - stats by level, learnsets and experience.
"""

from __future__ import annotations

import itertools
import logging
import math
from typing import Optional

from tamer.components import (
    Ability,
    CharacterStats,
    MonsterInstance,
    MonsterSpecies,
)
from tamer.config import BattleConfig, DEFAULT_CONFIG
from tamer.registry import Registry

logger = logging.getLogger(__name__)

_instance_counter = itertools.count(1)


def calculate_monster_stats(species: MonsterSpecies, level: int) -> CharacterStats:
    """
    Stats of a species at a level, with HP and MP full.

    Each stat grows by floor(rate * levels gained); luck does not grow.
    """
    gained = level - 1
    base = species.base_stats
    growth = species.stat_growth

    def grow(value: int, rate: float) -> int:
        return value + math.floor(rate * gained)

    max_hp = grow(base.max_hp, growth.hp)
    max_mp = grow(base.max_mp, growth.mp)
    return CharacterStats(
        max_hp=max_hp,
        current_hp=max_hp,
        max_mp=max_mp,
        current_mp=max_mp,
        attack=grow(base.attack, growth.attack),
        defense=grow(base.defense, growth.defense),
        magic_attack=grow(base.magic_attack, growth.magic_attack),
        magic_defense=grow(base.magic_defense, growth.magic_defense),
        speed=grow(base.speed, growth.speed),
        luck=base.luck,
    )


def get_learned_abilities_at_level(
    species: MonsterSpecies,
    level: int,
    registry: Registry,
) -> tuple[Ability, ...]:
    """Abilities known at a level, in learnset order. Unknown ids are dropped."""
    learned = []
    for entry in species.abilities:
        if entry.learn_at_level > level:
            continue
        ability = registry.get_ability(entry.ability_id)
        if ability is None:
            logger.warning(f"{species.species_id} learns unknown ability {entry.ability_id}")
            continue
        learned.append(ability)
    return tuple(learned)


def create_monster_instance(
    species_id: str,
    level: int,
    registry: Registry,
    nickname: Optional[str] = None,
    config: Optional[BattleConfig] = None,
) -> Optional[MonsterInstance]:
    """New monster of a species, or None if the species is unknown."""
    config = config or DEFAULT_CONFIG
    species = registry.get_species(species_id)
    if species is None:
        return None

    level = max(1, min(level, config.max_level))
    return MonsterInstance(
        instance_id=f"monster-{next(_instance_counter)}",
        species_id=species_id,
        nickname=nickname,
        level=level,
        experience=0,
        stats=calculate_monster_stats(species, level),
        learned_abilities=get_learned_abilities_at_level(species, level, registry),
    )


def experience_to_next_level(level: int, config: Optional[BattleConfig] = None) -> int:
    return level * (config or DEFAULT_CONFIG).xp_per_level_step


def add_experience_to_monster(
    monster: MonsterInstance,
    xp_gained: int,
    registry: Registry,
    config: Optional[BattleConfig] = None,
) -> MonsterInstance:
    """
    Add experience, levelling up as many times as it pays for.

    On level-up stats are recomputed keeping the HP and MP ratios, and the
    learnset is refreshed. Monsters at max level gain nothing.
    """
    config = config or DEFAULT_CONFIG
    species = registry.get_species(monster.species_id)
    if species is None or monster.level >= config.max_level:
        return monster

    level = monster.level
    remaining = monster.experience + xp_gained
    while level < config.max_level and remaining >= experience_to_next_level(level, config):
        remaining -= experience_to_next_level(level, config)
        level += 1

    if level == monster.level:
        return monster.model_copy(update={"experience": remaining})

    old = monster.stats
    hp_ratio = old.current_hp / old.max_hp if old.max_hp > 0 else 1.0
    mp_ratio = old.current_mp / old.max_mp if old.max_mp > 0 else 1.0

    fresh = calculate_monster_stats(species, level)
    stats = fresh.model_copy(update={
        "current_hp": min(fresh.max_hp, max(1, math.ceil(fresh.max_hp * hp_ratio))),
        "current_mp": min(fresh.max_mp, math.ceil(fresh.max_mp * mp_ratio)),
    })

    logger.info(f"{monster.nickname or species.name} grew to level {level}")
    return monster.model_copy(update={
        "level": level,
        "experience": remaining,
        "stats": stats,
        "learned_abilities": get_learned_abilities_at_level(species, level, registry),
    })


def heal_monster(monster: MonsterInstance, hp_amount: int, mp_amount: int = 0) -> MonsterInstance:
    """Restore HP and MP, capped at their maximums."""
    stats = monster.stats.with_hp(monster.stats.current_hp + hp_amount)
    stats = stats.with_mp(stats.current_mp + mp_amount)
    return monster.model_copy(update={"stats": stats})


def damage_monster(monster: MonsterInstance, amount: int) -> MonsterInstance:
    stats = monster.stats.with_hp(monster.stats.current_hp - amount)
    return monster.model_copy(update={"stats": stats})


def is_monster_alive(monster: MonsterInstance) -> bool:
    return monster.stats.current_hp > 0
