"""
Capture - odds and outcome of throwing a capture device at a wild monster.

The displayed modifier list explains the odds to the player; the rate
itself always comes from calculate_capture_rate.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import Field

from engine.core.component import Component, register_component
from engine.core.rng import RandomSource, default_rng
from tamer.components import Item, MonsterInstance, StatusType
from tamer.config import BattleConfig, DEFAULT_CONFIG
from tamer.registry import Registry
from tamer.battle.actor import Combatant
from tamer.battle.formulas import calculate_capture_rate, clamp
from tamer.progression.growth import create_monster_instance

logger = logging.getLogger(__name__)


@register_component
class CaptureModifier(Component):
    """One human-readable line of the capture odds breakdown."""
    source: str
    modifier: float
    reason: str


@register_component
class CaptureAttempt(Component):
    """
    Result of a capture attempt.

    Attributes:
        target: Snapshot of the monster at the time of the throw
        device: Capture device used
        base_success_rate: Rate from the capture formula
        modifiers: Display-only breakdown; never summed into the rate
        final_success_rate: Rate clamped to the configured band
        succeeded: Outcome
    """
    target: Combatant
    device: Item
    base_success_rate: float
    modifiers: tuple[CaptureModifier, ...] = ()
    final_success_rate: float = Field(ge=0, le=1)
    succeeded: bool


def gather_capture_modifiers(
    target: Combatant,
    device: Item,
    player_luck: int,
    config: Optional[BattleConfig] = None,
) -> list[CaptureModifier]:
    """Explain what is helping the capture, for the UI."""
    config = config or DEFAULT_CONFIG
    modifiers = []

    hp_ratio = target.hp_ratio
    if hp_ratio <= config.low_hp_capture_threshold:
        modifiers.append(CaptureModifier(
            source="low_hp",
            modifier=config.low_hp_capture_modifier,
            reason=f"Low HP bonus (HP at {round(hp_ratio * 100)}%)",
        ))

    if target.has_status(StatusType.SLEEP):
        modifiers.append(CaptureModifier(
            source="status_sleep",
            modifier=config.sleep_capture_bonus,
            reason="Target is asleep",
        ))

    multiplier = device.capture_multiplier
    modifiers.append(CaptureModifier(
        source="capture_device",
        modifier=multiplier,
        reason=f"{device.name} ({multiplier:g}x)",
    ))

    if player_luck > 0:
        luck_bonus = 1 + player_luck * 0.01
        modifiers.append(CaptureModifier(
            source="luck",
            modifier=luck_bonus,
            reason=f"Player luck bonus ({round((luck_bonus - 1) * 100)}%)",
        ))

    return modifiers


def _build_attempt(
    target: Combatant,
    device: Item,
    player_luck: int,
    species_difficulty: float,
    roll_outcome,
    config: BattleConfig,
) -> CaptureAttempt:
    status_bonus = config.sleep_capture_bonus if target.has_status(StatusType.SLEEP) else 1.0
    base_rate = calculate_capture_rate(
        target.hp_ratio,
        species_difficulty,
        device.capture_multiplier,
        status_bonus,
        player_luck,
        config,
    )
    final_rate = clamp(base_rate, config.capture_min_rate, config.capture_max_rate)
    succeeded = roll_outcome(final_rate)

    logger.debug(
        f"Capture {target.name} with {device.name}: rate {final_rate:.2f}, "
        f"{'caught' if succeeded else 'escaped'}"
    )
    return CaptureAttempt(
        target=target,
        device=device,
        base_success_rate=base_rate,
        modifiers=tuple(gather_capture_modifiers(target, device, player_luck, config)),
        final_success_rate=final_rate,
        succeeded=succeeded,
    )


def attempt_capture(
    target: Combatant,
    device: Item,
    player_luck: int,
    species_difficulty: float,
    guarantee_success: bool = False,
    config: Optional[BattleConfig] = None,
    rng: Optional[RandomSource] = None,
) -> CaptureAttempt:
    """
    Throw a capture device.

    Args:
        guarantee_success: Always catch (scripted first encounter); no roll is drawn
    """
    rng = rng or default_rng
    return _build_attempt(
        target,
        device,
        player_luck,
        species_difficulty,
        lambda rate: True if guarantee_success else rng.chance(rate),
        config or DEFAULT_CONFIG,
    )


def attempt_capture_with_roll(
    target: Combatant,
    device: Item,
    player_luck: int,
    species_difficulty: float,
    roll: float,
    config: Optional[BattleConfig] = None,
) -> CaptureAttempt:
    """Deterministic capture: succeeds exactly when roll < final rate."""
    return _build_attempt(
        target,
        device,
        player_luck,
        species_difficulty,
        lambda rate: roll < rate,
        config or DEFAULT_CONFIG,
    )


def calculate_shake_count(attempt: CaptureAttempt) -> int:
    """Device shakes to show: 3 on success, fewer the further a miss was."""
    if attempt.succeeded:
        return 3
    if attempt.final_success_rate >= 0.7:
        return 2
    if attempt.final_success_rate >= 0.4:
        return 1
    return 0


def create_captured_monster(
    species_id: str,
    level: int,
    registry: Registry,
    nickname: Optional[str] = None,
    config: Optional[BattleConfig] = None,
) -> Optional[MonsterInstance]:
    """Owned monster for a successful capture, None for an unknown species."""
    return create_monster_instance(species_id, level, registry, nickname=nickname, config=config)
