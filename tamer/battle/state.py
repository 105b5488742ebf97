"""
Battle state - the immutable battle snapshot and action results.

A Battle keeps every combatant in a single store keyed by id. The player
squad, enemy squad and turn order are id lists over that store, so one
combatant can never hold different values in different views.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import Field

from engine.core.component import Component, register_component
from tamer.components import MonsterInstance
from tamer.battle.actions import Effectiveness
from tamer.battle.actor import Combatant


class BattleState(str, Enum):
    """Phase of a battle."""
    START = "start"
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"
    ANIMATING = "animating"
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"
    CAPTURE_ATTEMPT = "capture_attempt"

    @property
    def is_terminal(self) -> bool:
        return self in (BattleState.VICTORY, BattleState.DEFEAT, BattleState.FLED)


@register_component
class ItemDrop(Component):
    """An item dropped at the end of a battle."""
    item_id: str
    quantity: int = Field(default=1, ge=1)


@register_component
class BattleRewards(Component):
    """Spoils of a won battle."""
    experience: int = Field(default=0, ge=0)
    gold: int = Field(default=0, ge=0)
    items: tuple[ItemDrop, ...] = ()
    captured_monster: Optional[MonsterInstance] = None


@register_component
class Battle(Component):
    """
    Immutable battle snapshot.

    Every engine operation returns a new Battle; the input is never changed.

    Attributes:
        state: Current phase
        combatants: Store of every combatant, keyed by combatant id
        player_ids: Player squad, in formation order
        enemy_ids: Enemy squad, in formation order
        turn_order_ids: Speed-sorted acting order, fixed at creation
        current_turn_index: Index into turn_order_ids
        turn_count: Round number, starting at 1
        can_flee: False for scripted or boss battles
        background_key: Presentation background reference
        rewards: Filled in by the caller once the battle is won
    """
    state: BattleState = BattleState.START
    combatants: dict[str, Combatant] = Field(default_factory=dict)
    player_ids: tuple[str, ...] = ()
    enemy_ids: tuple[str, ...] = ()
    turn_order_ids: tuple[str, ...] = ()
    current_turn_index: int = Field(default=0, ge=0)
    turn_count: int = Field(default=1, ge=1)
    can_flee: bool = True
    background_key: str = "battle-bg-forest"
    rewards: Optional[BattleRewards] = None

    # Views

    @property
    def player_squad(self) -> tuple[Combatant, ...]:
        return tuple(self.combatants[cid] for cid in self.player_ids)

    @property
    def enemy_squad(self) -> tuple[Combatant, ...]:
        return tuple(self.combatants[cid] for cid in self.enemy_ids)

    @property
    def turn_order(self) -> tuple[Combatant, ...]:
        return tuple(self.combatants[cid] for cid in self.turn_order_ids)

    def allies_of(self, combatant: Combatant) -> tuple[Combatant, ...]:
        """Combatant's own side, dead members included."""
        return self.player_squad if combatant.is_player else self.enemy_squad

    def opponents_of(self, combatant: Combatant) -> tuple[Combatant, ...]:
        """The opposing side, dead members included."""
        return self.enemy_squad if combatant.is_player else self.player_squad

    @property
    def all_enemies_defeated(self) -> bool:
        return all(not c.is_alive for c in self.enemy_squad)

    @property
    def all_players_defeated(self) -> bool:
        return all(not c.is_alive for c in self.player_squad)

    # Lookup and copy-on-write updates

    def find(self, combatant_id: Optional[str]) -> Optional[Combatant]:
        """Get a squad member by id."""
        if combatant_id is None:
            return None
        if combatant_id not in self.player_ids and combatant_id not in self.enemy_ids:
            return None
        return self.combatants.get(combatant_id)

    def replace_combatant(self, combatant: Combatant) -> Battle:
        """
        Copy with one combatant swapped for a new value.

        Raises:
            KeyError: If the combatant is not part of this battle
        """
        if combatant.combatant_id not in self.combatants:
            raise KeyError(f"Combatant not in battle: {combatant.combatant_id}")
        combatants = dict(self.combatants)
        combatants[combatant.combatant_id] = combatant
        return self.model_copy(update={"combatants": combatants})

    def update_combatant(self, combatant_id: str, **changes: Any) -> Battle:
        """Copy with fields of one combatant changed."""
        current = self.combatants[combatant_id]
        return self.replace_combatant(current.model_copy(update=changes))

    def with_state(self, state: BattleState) -> Battle:
        return self.model_copy(update={"state": state})

    def model_copy(self, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False) -> Battle:
        """Copy with its own combatant store, never shared with this snapshot."""
        changes = dict(update or {})
        changes.setdefault("combatants", dict(self.combatants))
        return super().model_copy(update=changes, deep=deep)


@register_component
class ActionResult(Component):
    """
    Outcome of one executed action.

    Attributes:
        battle: Snapshot after the action (unchanged on failures)
        damage: Damage dealt; summed across targets for multi-target hits
        is_critical: True if any hit was critical
        is_effective: Element effectiveness classification
        status_applied: Display name of a status attached by the action
        message: Human-readable description for the battle log
    """
    battle: Battle
    damage: int = 0
    is_critical: bool = False
    is_effective: Effectiveness = Effectiveness.NORMAL
    status_applied: Optional[str] = None
    message: str = ""
