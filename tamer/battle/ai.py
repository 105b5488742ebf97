"""
Enemy AI - single-ply heuristic action choice.
"""

from __future__ import annotations

from typing import Optional

from engine.core.rng import RandomSource, default_rng
from tamer.components import AbilityCategory, TargetType
from tamer.config import BattleConfig, DEFAULT_CONFIG
from tamer.battle.actions import ActionType, BattleAction
from tamer.battle.actor import Combatant
from tamer.battle.formulas import get_element_multiplier
from tamer.battle.state import Battle


def get_enemy_action(
    battle: Battle,
    enemy: Combatant,
    config: Optional[BattleConfig] = None,
    rng: Optional[RandomSource] = None,
) -> BattleAction:
    """
    Choose an action for a computer-controlled combatant.

    Priority:
    1. Defend when nobody is left to hit
    2. Self-heal when low on HP and a heal is affordable
    3. Best affordable damaging ability (most of the time)
    4. Basic attack on a random living opponent
    """
    config = config or DEFAULT_CONFIG
    rng = rng or default_rng

    targets = [c for c in battle.opponents_of(enemy) if c.is_alive]
    if not targets:
        return BattleAction(type=ActionType.DEFEND, actor_id=enemy.combatant_id)

    mp = enemy.stats.current_mp
    if enemy.hp_ratio < config.ai_heal_threshold:
        for ability in enemy.abilities:
            if ability.category == AbilityCategory.HEALING and mp >= ability.mp_cost:
                return BattleAction(
                    type=ActionType.ABILITY,
                    actor_id=enemy.combatant_id,
                    target_id=enemy.combatant_id,
                    ability_id=ability.ability_id,
                )

    usable = [a for a in enemy.abilities if a.is_damaging and mp >= a.mp_cost]
    if usable and rng.chance(config.ai_ability_chance):
        target = rng.choice(targets)
        target_element = target.resolve_element(config)
        # max() keeps the first of equal scores
        chosen = max(
            usable,
            key=lambda a: a.power * get_element_multiplier(a.element, target_element),
        )
        return BattleAction(
            type=ActionType.ABILITY,
            actor_id=enemy.combatant_id,
            target_id=None if chosen.target_type == TargetType.ALL_ENEMIES else target.combatant_id,
            ability_id=chosen.ability_id,
        )

    target = rng.choice(targets)
    return BattleAction(
        type=ActionType.ATTACK,
        actor_id=enemy.combatant_id,
        target_id=target.combatant_id,
    )
