"""
Battle actors - participants in combat.
"""

from __future__ import annotations

import itertools
import math
from typing import Iterable, Optional

from engine.core.component import Component, register_component
from tamer.components import (
    Ability,
    ActiveStatusEffect,
    CharacterStats,
    Element,
    MonsterInstance,
    StatusType,
)
from tamer.config import BattleConfig, DEFAULT_CONFIG
from tamer.registry import Registry

_id_counter = itertools.count(1)


@register_component
class Combatant(Component):
    """
    A participant in battle.

    Immutable: every change made by the battle engine produces a new
    Combatant stored in a new Battle snapshot.

    Attributes:
        combatant_id: Unique id within a battle
        is_player: Side flag (player squad vs enemy squad)
        is_monster: True for creatures, False for the human player
        species_id: Species template, for monsters
        element: Declared element of the species, if known
        abilities: Known abilities in learned order
        status_effects: Active status effects
        capturable: Whether a capture device may be thrown at it
    """
    combatant_id: str
    name: str
    is_player: bool
    is_monster: bool = False
    species_id: Optional[str] = None
    element: Optional[Element] = None
    stats: CharacterStats
    abilities: tuple[Ability, ...] = ()
    status_effects: tuple[ActiveStatusEffect, ...] = ()
    capturable: bool = False

    @property
    def is_alive(self) -> bool:
        """Check if combatant is alive."""
        return self.stats.current_hp > 0

    @property
    def hp_ratio(self) -> float:
        return self.stats.hp_ratio

    def has_status(self, status_type: StatusType) -> bool:
        """Check if a status of this kind is attached."""
        return any(se.effect.type == status_type for se in self.status_effects)

    def find_ability(self, ability_id: str) -> Optional[Ability]:
        """Get a known ability by id."""
        for ability in self.abilities:
            if ability.ability_id == ability_id:
                return ability
        return None

    def get_speed(self, config: Optional[BattleConfig] = None) -> int:
        """Speed after slow/haste."""
        config = config or DEFAULT_CONFIG
        speed = self.stats.speed
        for se in self.status_effects:
            if se.effect.type == StatusType.SLOW:
                speed = math.floor(speed * config.slow_speed_multiplier)
            elif se.effect.type == StatusType.HASTE:
                speed = math.floor(speed * config.haste_speed_multiplier)
        return speed

    def get_attack(self, config: Optional[BattleConfig] = None) -> int:
        """Attack after attack_up."""
        config = config or DEFAULT_CONFIG
        attack = self.stats.attack
        for se in self.status_effects:
            if se.effect.type == StatusType.ATTACK_UP:
                attack = math.floor(attack * config.attack_up_multiplier)
        return attack

    def get_defense(self, config: Optional[BattleConfig] = None) -> int:
        """Defense after shield and defense_up."""
        config = config or DEFAULT_CONFIG
        defense = self.stats.defense
        for se in self.status_effects:
            if se.effect.type == StatusType.SHIELD:
                defense = math.floor(defense * config.shield_defense_multiplier)
            elif se.effect.type == StatusType.DEFENSE_UP:
                defense = math.floor(defense * config.defense_up_multiplier)
        return defense

    def get_magic_attack(self, config: Optional[BattleConfig] = None) -> int:
        return self.stats.magic_attack

    def get_magic_defense(self, config: Optional[BattleConfig] = None) -> int:
        return self.stats.magic_defense

    def resolve_element(self, config: Optional[BattleConfig] = None) -> Element:
        """
        Element used when this combatant defends.

        Inferred from the first non-neutral known ability unless the config
        opts into declared elements and one is set.
        """
        config = config or DEFAULT_CONFIG
        if config.use_declared_elements and self.element is not None:
            return self.element
        for ability in self.abilities:
            if ability.element != Element.NEUTRAL:
                return ability.element
        return Element.NEUTRAL


def _next_id(prefix: str) -> str:
    return f"{prefix}-{next(_id_counter)}"


def create_combatant_from_player(
    name: str,
    stats: CharacterStats,
    abilities: Iterable[Ability],
    species_id: Optional[str] = None,
    element: Optional[Element] = None,
) -> Combatant:
    """Create a player-side combatant (the player or a squad monster)."""
    return Combatant(
        combatant_id=_next_id("player"),
        name=name,
        is_player=True,
        is_monster=species_id is not None,
        species_id=species_id,
        element=element,
        stats=stats,
        abilities=tuple(abilities),
        capturable=False,
    )


def create_combatant_from_enemy(
    name: str,
    stats: CharacterStats,
    element: Element,
    abilities: Iterable[Ability],
    capturable: bool = True,
    species_id: Optional[str] = None,
) -> Combatant:
    """Create an enemy-side combatant."""
    return Combatant(
        combatant_id=_next_id("enemy"),
        name=name,
        is_player=False,
        is_monster=True,
        species_id=species_id,
        element=element,
        stats=stats,
        abilities=tuple(abilities),
        capturable=capturable,
    )


def create_combatant_from_monster(
    monster: MonsterInstance,
    is_player: bool,
    registry: Registry,
    capturable: bool = False,
) -> Combatant:
    """
    Bring an owned or wild monster into battle.

    Raises:
        UnknownSpeciesError: If the monster's species is not registered
    """
    species = registry.require_species(monster.species_id)
    name = monster.nickname or species.name
    if is_player:
        return create_combatant_from_player(
            name,
            monster.stats,
            monster.learned_abilities,
            species_id=species.species_id,
            element=species.element,
        )
    return create_combatant_from_enemy(
        name,
        monster.stats,
        species.element,
        monster.learned_abilities,
        capturable=capturable,
        species_id=species.species_id,
    )
