"""
Battle item effects - apply an inventory item to one combatant.

Inventory counts belong to the caller. The caller swaps the returned
combatant into the battle with Battle.replace_combatant.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from engine.core.component import Component, register_component
from tamer.components import (
    ActiveStatusEffect,
    Item,
    ItemEffectType,
    StatusEffect,
    StatusType,
)
from tamer.config import BattleConfig, DEFAULT_CONFIG
from tamer.battle.actor import Combatant


@register_component
class ItemUseResult(Component):
    """What using an item did, for the battle log."""
    success: bool
    message: str
    heal_amount: Optional[int] = None
    status_cured: Optional[str] = None
    buff_applied: Optional[str] = None


class CombatantItemResult(NamedTuple):
    combatant: Combatant
    result: ItemUseResult


# Cure magnitudes with a specific target; anything else (or >= 99) cures all
_CURE_ALL_MAGNITUDE = 99
_SPECIFIC_CURES = {
    0: (StatusType.POISON, "Poison"),
    1: (StatusType.SLEEP, "Sleep"),
}


def use_item_on_combatant(
    item: Item,
    target: Combatant,
    config: Optional[BattleConfig] = None,
) -> CombatantItemResult:
    """Apply an item's use effect to a combatant."""
    config = config or DEFAULT_CONFIG
    effect = item.use_effect
    if effect is None:
        return CombatantItemResult(
            target, ItemUseResult(success=False, message=f"{item.name} has no effect.")
        )

    if effect.type == ItemEffectType.HEAL_HP:
        stats = target.stats.with_hp(target.stats.current_hp + int(effect.magnitude))
        healed = stats.current_hp - target.stats.current_hp
        return CombatantItemResult(
            target.model_copy(update={"stats": stats}),
            ItemUseResult(
                success=True,
                message=f"{target.name} recovered {healed} HP!",
                heal_amount=healed,
            ),
        )

    if effect.type == ItemEffectType.HEAL_MP:
        stats = target.stats.with_mp(target.stats.current_mp + int(effect.magnitude))
        restored = stats.current_mp - target.stats.current_mp
        return CombatantItemResult(
            target.model_copy(update={"stats": stats}),
            ItemUseResult(
                success=True,
                message=f"{target.name} recovered {restored} MP!",
                heal_amount=restored,
            ),
        )

    if effect.type == ItemEffectType.CURE_STATUS:
        return _cure_status(item, target)

    if effect.type == ItemEffectType.BUFF:
        return _apply_buff(item, target, config)

    return CombatantItemResult(
        target, ItemUseResult(success=False, message=f"{item.name} cannot be used in battle.")
    )


def _cure_status(item: Item, target: Combatant) -> CombatantItemResult:
    if not target.status_effects:
        return CombatantItemResult(
            target,
            ItemUseResult(success=False, message=f"{target.name} has no status effects to cure."),
        )

    magnitude = item.use_effect.magnitude
    if magnitude >= _CURE_ALL_MAGNITUDE:
        cured_name = "all status effects"
        remaining = ()
    elif magnitude in _SPECIFIC_CURES:
        status_type, cured_name = _SPECIFIC_CURES[int(magnitude)]
        remaining = tuple(se for se in target.status_effects if se.type != status_type)
    else:
        cured_name = "status effects"
        remaining = ()

    return CombatantItemResult(
        target.model_copy(update={"status_effects": remaining}),
        ItemUseResult(
            success=True,
            message=f"{target.name} was cured of {cured_name}!",
            status_cured=cured_name,
        ),
    )


def _buff_kind(item_id: str) -> tuple[StatusType, str]:
    if "shield" in item_id or "defense" in item_id:
        return StatusType.DEFENSE_UP, "Defense Up"
    if "speed" in item_id or "haste" in item_id:
        return StatusType.HASTE, "Haste"
    return StatusType.ATTACK_UP, "Attack Up"


def _apply_buff(item: Item, target: Combatant, config: BattleConfig) -> CombatantItemResult:
    status_type, buff_name = _buff_kind(item.item_id)
    duration = config.item_buff_duration
    buff = ActiveStatusEffect(
        effect=StatusEffect(
            id=status_type.value,
            name=buff_name,
            type=status_type,
            duration=duration,
            magnitude=item.use_effect.magnitude,
        ),
        turns_remaining=duration,
        applied_by=target.combatant_id,
    )
    return CombatantItemResult(
        target.model_copy(update={"status_effects": target.status_effects + (buff,)}),
        ItemUseResult(
            success=True,
            message=f"{target.name} gained {buff_name}!",
            buff_applied=buff_name,
        ),
    )
