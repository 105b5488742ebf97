"""
Stat components - character stats and per-level growth rates.
"""

from __future__ import annotations

from pydantic import Field, model_validator

from engine.core.component import Component, register_component


@register_component
class CharacterStats(Component):
    """
    Integer stat block shared by players and monsters.

    Attributes:
        max_hp: Maximum HP
        current_hp: Current HP, 0..max_hp
        max_mp: Maximum MP
        current_mp: Current MP, 0..max_mp
        attack: Physical power
        defense: Physical resistance
        magic_attack: Magical power
        magic_defense: Magical resistance
        speed: Turn order priority
        luck: Critical hits and capture odds
    """
    max_hp: int = Field(default=1, ge=0)
    current_hp: int = Field(default=1, ge=0)
    max_mp: int = Field(default=0, ge=0)
    current_mp: int = Field(default=0, ge=0)
    attack: int = Field(default=0, ge=0)
    defense: int = Field(default=0, ge=0)
    magic_attack: int = Field(default=0, ge=0)
    magic_defense: int = Field(default=0, ge=0)
    speed: int = Field(default=0, ge=0)
    luck: int = Field(default=0, ge=0)

    @model_validator(mode='after')
    def _check_pools(self) -> CharacterStats:
        if self.current_hp > self.max_hp:
            raise ValueError("current_hp cannot exceed max_hp")
        if self.current_mp > self.max_mp:
            raise ValueError("current_mp cannot exceed max_mp")
        return self

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    @property
    def hp_ratio(self) -> float:
        """Current HP as a 0-1 ratio."""
        if self.max_hp <= 0:
            return 0.0
        return self.current_hp / self.max_hp

    def with_hp(self, value: int) -> CharacterStats:
        """Copy with current HP clamped into 0..max_hp."""
        return self.model_copy(
            update={"current_hp": max(0, min(value, self.max_hp))}
        )

    def with_mp(self, value: int) -> CharacterStats:
        """Copy with current MP clamped into 0..max_mp."""
        return self.model_copy(
            update={"current_mp": max(0, min(value, self.max_mp))}
        )


@register_component
class StatGrowthRates(Component):
    """Per-level stat increases for a species. Fractions accumulate."""
    hp: float = Field(default=0.0, ge=0)
    mp: float = Field(default=0.0, ge=0)
    attack: float = Field(default=0.0, ge=0)
    defense: float = Field(default=0.0, ge=0)
    magic_attack: float = Field(default=0.0, ge=0)
    magic_defense: float = Field(default=0.0, ge=0)
    speed: float = Field(default=0.0, ge=0)
