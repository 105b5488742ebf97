"""
Targeting - resolve which combatants an action affects.

Pure functions over a Battle snapshot. "Enemies" and "allies" are always
relative to the acting combatant.
"""

from __future__ import annotations

from typing import Optional

from engine.core.rng import RandomSource, default_rng
from tamer.components import TargetType, random_enemy_count
from tamer.config import BattleConfig, DEFAULT_CONFIG
from tamer.battle.actor import Combatant
from tamer.battle.state import Battle


_SELECTION_REQUIRED = frozenset({
    TargetType.SINGLE_ENEMY,
    TargetType.SINGLE_ALLY,
    TargetType.ADJACENT_ENEMIES,
})


def _living_enemies(battle: Battle, actor_is_player: bool) -> list[Combatant]:
    squad = battle.enemy_squad if actor_is_player else battle.player_squad
    return [c for c in squad if c.is_alive]


def _living_allies(battle: Battle, actor_is_player: bool) -> list[Combatant]:
    squad = battle.player_squad if actor_is_player else battle.enemy_squad
    return [c for c in squad if c.is_alive]


def get_valid_targets(
    battle: Battle,
    actor_id: str,
    target_type: TargetType,
) -> list[Combatant]:
    """
    Combatants the UI may offer for selection.

    Auto-resolved policies (all_enemies, all_allies) offer nothing to pick.
    """
    actor = battle.find(actor_id)
    if actor is None:
        return []

    target_type = TargetType(target_type)
    if target_type in (TargetType.ALL_ENEMIES, TargetType.ALL_ALLIES):
        return []
    if target_type == TargetType.SELF:
        return [actor]
    if target_type == TargetType.SINGLE_ALLY:
        return _living_allies(battle, actor.is_player)
    # single_enemy, adjacent_enemies, random_enemies_N
    return _living_enemies(battle, actor.is_player)


def resolve_targets(
    battle: Battle,
    target_type: TargetType,
    primary_target_id: Optional[str],
    actor_id: str,
    rng: Optional[RandomSource] = None,
) -> list[str]:
    """
    Ids of every combatant the action affects, in application order.

    Args:
        battle: Snapshot to resolve against
        target_type: Targeting policy
        primary_target_id: Selected target, if any
        actor_id: Acting combatant
        rng: Random source for random_enemies_N policies

    Returns:
        Ordered target ids, empty when nothing can be targeted
    """
    actor = battle.find(actor_id)
    if actor is None:
        return []

    target_type = TargetType(target_type)

    if target_type == TargetType.SINGLE_ENEMY:
        if primary_target_id:
            return [primary_target_id]
        enemies = _living_enemies(battle, actor.is_player)
        return [enemies[0].combatant_id] if enemies else []

    if target_type == TargetType.ALL_ENEMIES:
        return [c.combatant_id for c in _living_enemies(battle, actor.is_player)]

    if target_type == TargetType.ADJACENT_ENEMIES:
        return get_adjacent_enemies(battle, primary_target_id, actor.is_player)

    count = random_enemy_count(target_type)
    if count is not None:
        return get_random_enemies(battle, count, actor.is_player, rng=rng)

    if target_type == TargetType.SELF:
        return [actor_id]

    if target_type == TargetType.SINGLE_ALLY:
        # No fallback; a missing ally pick is not guessed
        return [primary_target_id] if primary_target_id else []

    if target_type == TargetType.ALL_ALLIES:
        return [c.combatant_id for c in _living_allies(battle, actor.is_player)]

    return []


def get_adjacent_enemies(
    battle: Battle,
    primary_target_id: Optional[str],
    actor_is_player: bool,
) -> list[str]:
    """
    Primary target plus its neighbours in the living-enemies list.

    Neighbours are taken from the living list, not formation slots, so the
    cluster closes up as enemies fall. Without a primary the first living
    enemy is used; an unknown or dead primary yields nothing.
    """
    enemies = _living_enemies(battle, actor_is_player)
    if not enemies:
        return []
    if not primary_target_id:
        return get_adjacent_enemies(battle, enemies[0].combatant_id, actor_is_player)

    ids = [c.combatant_id for c in enemies]
    if primary_target_id not in ids:
        return []
    index = ids.index(primary_target_id)

    result = [primary_target_id]
    if index > 0:
        result.append(ids[index - 1])
    if index < len(ids) - 1:
        result.append(ids[index + 1])
    return result


def get_random_enemies(
    battle: Battle,
    count: int,
    actor_is_player: bool,
    rng: Optional[RandomSource] = None,
) -> list[str]:
    """Up to count distinct living enemies, picked by shuffle-and-take."""
    enemies = _living_enemies(battle, actor_is_player)
    if len(enemies) <= count:
        return [c.combatant_id for c in enemies]

    ids = [c.combatant_id for c in enemies]
    (rng or default_rng).shuffle(ids)
    return ids[:count]


def is_valid_target(
    battle: Battle,
    actor_id: str,
    target_id: str,
    target_type: TargetType,
) -> bool:
    """Check if target_id is selectable for the policy."""
    return any(
        c.combatant_id == target_id
        for c in get_valid_targets(battle, actor_id, target_type)
    )


def requires_target_selection(target_type: TargetType) -> bool:
    """True only for policies that need a UI pick."""
    return TargetType(target_type) in _SELECTION_REQUIRED


def get_target_count(
    battle: Battle,
    target_type: TargetType,
    primary_target_id: Optional[str],
    actor_id: str,
    rng: Optional[RandomSource] = None,
) -> int:
    return len(resolve_targets(battle, target_type, primary_target_id, actor_id, rng=rng))


def get_multi_target_damage_multiplier(
    target_count: int,
    config: Optional[BattleConfig] = None,
) -> float:
    """Per-target damage scale: full for one target, reduced for two or more."""
    if target_count <= 1:
        return 1.0
    return (config or DEFAULT_CONFIG).multi_target_multiplier
