"""
Battle formulas - damage, fleeing, capture rate, weighted picks.

Pure functions. Randomness comes from an injected RandomSource.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional, Sequence, TypeVar

from engine.core.rng import RandomSource, default_rng
from tamer.components import Element
from tamer.config import BattleConfig, DEFAULT_CONFIG

T = TypeVar("T")

_F, _W, _E, _A = Element.FIRE, Element.WATER, Element.EARTH, Element.WIND
_L, _D, _N = Element.LIGHT, Element.DARK, Element.NEUTRAL

# attacker element -> defender element -> multiplier
ELEMENT_EFFECTIVENESS: dict[Element, dict[Element, float]] = {
    _F: {_F: 0.5, _W: 0.5, _E: 2.0, _A: 1.0, _L: 1.0, _D: 1.0, _N: 1.0},
    _W: {_F: 2.0, _W: 0.5, _E: 1.0, _A: 0.5, _L: 1.0, _D: 1.0, _N: 1.0},
    _E: {_F: 0.5, _W: 1.0, _E: 0.5, _A: 2.0, _L: 1.0, _D: 1.0, _N: 1.0},
    _A: {_F: 1.0, _W: 2.0, _E: 0.5, _A: 0.5, _L: 1.0, _D: 1.0, _N: 1.0},
    _L: {_F: 1.0, _W: 1.0, _E: 1.0, _A: 1.0, _L: 0.5, _D: 2.0, _N: 1.0},
    _D: {_F: 1.0, _W: 1.0, _E: 1.0, _A: 1.0, _L: 2.0, _D: 0.5, _N: 1.0},
    _N: {_F: 1.0, _W: 1.0, _E: 1.0, _A: 1.0, _L: 1.0, _D: 1.0, _N: 1.0},
}


class DamageRoll(NamedTuple):
    """Outcome of a damage calculation."""
    damage: int
    is_critical: bool


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value into [minimum, maximum]."""
    return min(max(value, minimum), maximum)


def get_element_multiplier(attacker: Element, defender: Element) -> float:
    """Effectiveness of an attacker element against a defender element."""
    return ELEMENT_EFFECTIVENESS[Element(attacker)][Element(defender)]


def calculate_damage(
    attack_stat: int,
    ability_power: int,
    defense_stat: int,
    attacker_element: Element,
    defender_element: Element,
    attacker_luck: int,
    *,
    config: Optional[BattleConfig] = None,
    rng: Optional[RandomSource] = None,
) -> DamageRoll:
    """
    Calculate damage for one hit.

    base = attack * power / max(defense * 0.5, 1), then element
    multiplier, random variance and an optional critical multiplier.

    Returns:
        DamageRoll with damage floored and never below 1
    """
    config = config or DEFAULT_CONFIG
    rng = rng or default_rng

    base_damage = (attack_stat * ability_power) / max(defense_stat * 0.5, 1)
    element_multiplier = get_element_multiplier(attacker_element, defender_element)
    variance = rng.uniform(config.damage_variance_min, config.damage_variance_max)

    crit_rate = config.base_critical_rate + attacker_luck * config.luck_critical_bonus
    is_critical = rng.chance(crit_rate)
    crit_multiplier = config.critical_multiplier if is_critical else 1.0

    damage = math.floor(base_damage * element_multiplier * variance * crit_multiplier)
    return DamageRoll(max(1, damage), is_critical)


def calculate_flee_chance(
    actor_speed: float,
    avg_enemy_speed: float,
    config: Optional[BattleConfig] = None,
) -> float:
    """Chance to escape, linear in the speed difference."""
    config = config or DEFAULT_CONFIG
    chance = config.flee_base_chance + (actor_speed - avg_enemy_speed) * config.flee_speed_factor
    return clamp(chance, config.flee_min_chance, config.flee_max_chance)


def calculate_capture_rate(
    hp_ratio: float,
    species_difficulty: float,
    device_multiplier: float,
    status_bonus: float,
    luck: int,
    config: Optional[BattleConfig] = None,
) -> float:
    """
    Capture probability, clamped to the configured band.

    The band never reaches 0 or 1 so no attempt is certain or hopeless.
    """
    config = config or DEFAULT_CONFIG
    rate = (
        (1 - hp_ratio)
        * (1 - species_difficulty)
        * device_multiplier
        * status_bonus
        * (1 + luck * 0.01)
    )
    return clamp(rate, config.capture_min_rate, config.capture_max_rate)


def weighted_random(
    items: Sequence[T],
    weights: Sequence[float],
    rng: Optional[RandomSource] = None,
) -> T:
    """
    Pick one item with probability proportional to its weight.

    Raises:
        ValueError: On empty input, mismatched lengths or non-positive total
    """
    if not items:
        raise ValueError("weighted_random: items is empty")
    if len(items) != len(weights):
        raise ValueError("weighted_random: items and weights must have same length")

    total_weight = sum(weights)
    if total_weight <= 0:
        raise ValueError("weighted_random: total weight must be positive")

    roll = (rng or default_rng).random() * total_weight
    for item, weight in zip(items, weights):
        roll -= weight
        if roll <= 0:
            return item

    return items[-1]
