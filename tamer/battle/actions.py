"""
Battle actions - action requests and result classification.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from engine.core.component import Component, register_component


class ActionType(str, Enum):
    """Types of battle actions."""
    ATTACK = "attack"
    ABILITY = "ability"
    DEFEND = "defend"
    FLEE = "flee"
    CAPTURE = "capture"
    ITEM = "item"


class Effectiveness(str, Enum):
    """Element effectiveness classification, for messages and UI."""
    SUPER = "super"
    NORMAL = "normal"
    WEAK = "weak"


@register_component
class BattleAction(Component):
    """
    A request to act, supplied by the input layer or the enemy AI.

    Attributes:
        type: What to do
        actor_id: Who acts
        target_id: Primary target for targeted actions
        target_ids: Pre-resolved targets for multi-target actions
        ability_id: Ability to use (ability actions)
        item_id: Item to use (item / capture actions)
    """
    type: ActionType
    actor_id: str
    target_id: Optional[str] = None
    target_ids: tuple[str, ...] = ()
    ability_id: Optional[str] = None
    item_id: Optional[str] = None
