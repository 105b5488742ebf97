"""
Item components - inventory item definitions and their use effects.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from engine.core.component import Component, register_component


class ItemCategory(str, Enum):
    CONSUMABLE = "consumable"
    CAPTURE_DEVICE = "capture_device"
    KEY_ITEM = "key_item"
    BREEDING_ITEM = "breeding_item"
    MATERIAL = "material"


class ItemEffectType(str, Enum):
    HEAL_HP = "heal_hp"
    HEAL_MP = "heal_mp"
    CURE_STATUS = "cure_status"
    BUFF = "buff"
    CAPTURE_BOOST = "capture_boost"
    BREEDING_BOOST = "breeding_boost"


@register_component
class ItemEffect(Component):
    """Effect applied when an item is used."""
    type: ItemEffectType
    magnitude: float = Field(default=0.0, ge=0)
    target_type: str = "single_ally"


@register_component
class Item(Component):
    """
    Static data for an inventory item.

    Inventory counts are owned by the caller; battle code only reads
    the effect.
    """
    item_id: str
    name: str
    description: str = ""
    category: ItemCategory = ItemCategory.CONSUMABLE
    use_effect: Optional[ItemEffect] = None
    buy_price: int = Field(default=0, ge=0)
    sell_price: int = Field(default=0, ge=0)

    @property
    def capture_multiplier(self) -> float:
        """Multiplier this item contributes when thrown as a capture device."""
        return self.use_effect.magnitude if self.use_effect else 1.0
