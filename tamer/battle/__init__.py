"""
Battle module - turn-based creature combat.

Provides:
- Combatants and their effective stats
- Immutable battle snapshots and action results
- Damage, flee and capture formulas
- Target resolution for every targeting policy
- The battle engine (turn order, actions, status effects, rewards)
- Enemy AI, capture attempts and in-battle item effects
"""

from tamer.battle.actor import (
    Combatant,
    create_combatant_from_player,
    create_combatant_from_enemy,
    create_combatant_from_monster,
)
from tamer.battle.actions import (
    ActionType,
    BattleAction,
    Effectiveness,
)
from tamer.battle.state import (
    Battle,
    BattleState,
    BattleRewards,
    ItemDrop,
    ActionResult,
)
from tamer.battle.formulas import (
    ELEMENT_EFFECTIVENESS,
    DamageRoll,
    calculate_damage,
    calculate_flee_chance,
    calculate_capture_rate,
    clamp,
    get_element_multiplier,
    weighted_random,
)
from tamer.battle.targeting import (
    get_valid_targets,
    resolve_targets,
    get_adjacent_enemies,
    get_random_enemies,
    is_valid_target,
    requires_target_selection,
    get_target_count,
    get_multi_target_damage_multiplier,
)
from tamer.battle.system import BattleEngine, classify_effectiveness
from tamer.battle.ai import get_enemy_action
from tamer.battle.capture import (
    CaptureAttempt,
    CaptureModifier,
    gather_capture_modifiers,
    attempt_capture,
    attempt_capture_with_roll,
    calculate_shake_count,
    create_captured_monster,
)
from tamer.battle.items import (
    CombatantItemResult,
    ItemUseResult,
    use_item_on_combatant,
)

__all__ = [
    # Actor
    "Combatant",
    "create_combatant_from_player",
    "create_combatant_from_enemy",
    "create_combatant_from_monster",
    # Actions
    "ActionType",
    "BattleAction",
    "Effectiveness",
    # State
    "Battle",
    "BattleState",
    "BattleRewards",
    "ItemDrop",
    "ActionResult",
    # Formulas
    "ELEMENT_EFFECTIVENESS",
    "DamageRoll",
    "calculate_damage",
    "calculate_flee_chance",
    "calculate_capture_rate",
    "clamp",
    "get_element_multiplier",
    "weighted_random",
    # Targeting
    "get_valid_targets",
    "resolve_targets",
    "get_adjacent_enemies",
    "get_random_enemies",
    "is_valid_target",
    "requires_target_selection",
    "get_target_count",
    "get_multi_target_damage_multiplier",
    # System
    "BattleEngine",
    "classify_effectiveness",
    "get_enemy_action",
    # Capture
    "CaptureAttempt",
    "CaptureModifier",
    "gather_capture_modifiers",
    "attempt_capture",
    "attempt_capture_with_roll",
    "calculate_shake_count",
    "create_captured_monster",
    # Items
    "CombatantItemResult",
    "ItemUseResult",
    "use_item_on_combatant",
]
