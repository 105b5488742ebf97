import pytest

from engine.core.rng import RandomSource, ScriptedRandom
from tamer.components import (
    ActiveStatusEffect,
    Item,
    ItemCategory,
    StatusEffect,
    StatusType,
)
from tamer.battle.capture import (
    attempt_capture,
    attempt_capture_with_roll,
    calculate_shake_count,
    create_captured_monster,
    gather_capture_modifiers,
)


def asleep(combatant):
    effect = ActiveStatusEffect(
        effect=StatusEffect(id="sleep", name="Asleep", type=StatusType.SLEEP, duration=2),
        turns_remaining=2,
        applied_by="hero",
    )
    return combatant.model_copy(update={"status_effects": (effect,)})


@pytest.fixture
def wounded(combatant_factory):
    return combatant_factory("wild", max_hp=100, current_hp=20)


def test_roll_is_deterministic(wounded, capture_orb):
    first = attempt_capture_with_roll(wounded, capture_orb, 0, 0.5, 0.3)
    second = attempt_capture_with_roll(wounded, capture_orb, 0, 0.5, 0.3)
    assert first == second


@pytest.mark.parametrize("roll", [0.0, 0.1, 0.39, 0.4, 0.41, 0.9])
def test_success_iff_roll_below_rate(wounded, capture_orb, roll):
    # (1 - 0.2) * (1 - 0.5) = 0.4
    attempt = attempt_capture_with_roll(wounded, capture_orb, 0, 0.5, roll)
    assert attempt.final_success_rate == pytest.approx(0.4)
    assert attempt.succeeded == (roll < attempt.final_success_rate)


def test_sleep_bonus_in_rate(wounded, capture_orb):
    attempt = attempt_capture_with_roll(asleep(wounded), capture_orb, 0, 0.5, 0.5)
    assert attempt.base_success_rate == pytest.approx(0.6)
    assert attempt.succeeded


def test_rate_is_clamped(combatant_factory, capture_orb):
    healthy = combatant_factory("wild")
    attempt = attempt_capture_with_roll(healthy, capture_orb, 0, 0.5, 0.04)
    assert attempt.final_success_rate == pytest.approx(0.05)
    assert attempt.succeeded


def test_modifiers_are_display_only(wounded, capture_orb):
    target = wounded.model_copy(update={"stats": wounded.stats.with_hp(10)})
    attempt = attempt_capture_with_roll(target, capture_orb, 0, 0.5, 0.99)

    assert [m.source for m in attempt.modifiers] == ["low_hp", "capture_device"]
    # The 1.2 low HP line is shown, not multiplied in
    assert attempt.final_success_rate == pytest.approx(0.45)


def test_modifier_order_and_clamp(wounded):
    great_orb = Item(item_id="great_orb", name="Great Orb", category=ItemCategory.CAPTURE_DEVICE,
                     use_effect={"type": "capture_boost", "magnitude": 1.5})
    target = asleep(wounded.model_copy(update={"stats": wounded.stats.with_hp(10)}))

    attempt = attempt_capture_with_roll(target, great_orb, 20, 0.5, 0.99)
    sources = [m.source for m in attempt.modifiers]

    assert sources == ["low_hp", "status_sleep", "capture_device", "luck"]
    # 0.9 * 0.5 * 1.5 * 1.5 * 1.2, clamped
    assert attempt.base_success_rate == pytest.approx(0.95)
    assert attempt.final_success_rate == pytest.approx(0.95)


def test_modifier_reasons(wounded, capture_orb):
    modifiers = gather_capture_modifiers(wounded, capture_orb, 10)
    reasons = {m.source: m.reason for m in modifiers}

    assert reasons["low_hp"] == "Low HP bonus (HP at 20%)"
    assert reasons["capture_device"] == "Capture Orb (1x)"
    assert reasons["luck"] == "Player luck bonus (10%)"
    assert "status_sleep" not in reasons


def test_device_without_effect_counts_as_one(wounded):
    rock = Item(item_id="rock", name="Rock", category=ItemCategory.MATERIAL)
    attempt = attempt_capture_with_roll(wounded, rock, 0, 0.5, 0.0)
    assert attempt.base_success_rate == pytest.approx(0.4)


def test_attempt_capture_uses_rng(wounded, capture_orb):
    assert attempt_capture(wounded, capture_orb, 0, 0.5, rng=ScriptedRandom([0.1])).succeeded
    assert not attempt_capture(wounded, capture_orb, 0, 0.5, rng=ScriptedRandom([0.9])).succeeded


def test_guaranteed_capture(combatant_factory, capture_orb):
    healthy = combatant_factory("wild")
    rng = ScriptedRandom([0.99])
    attempt = attempt_capture(healthy, capture_orb, 0, 0.9, guarantee_success=True, rng=rng)
    assert attempt.succeeded
    assert rng.consumed == 0


def test_capture_rate_statistics(wounded, capture_orb):
    rng = RandomSource(seed=17)
    caught = sum(attempt_capture(wounded, capture_orb, 0, 0.5, rng=rng).succeeded for _ in range(2000))
    assert 0.35 < caught / 2000 < 0.45


@pytest.mark.parametrize("roll, difficulty, expected", [
    (0.0, 0.5, 3),    # success
    (0.99, 0.0, 2),   # rate 0.8
    (0.99, 0.4, 1),   # rate 0.48
    (0.99, 0.8, 0),   # rate 0.16
])
def test_shake_count(wounded, capture_orb, roll, difficulty, expected):
    attempt = attempt_capture_with_roll(wounded, capture_orb, 0, difficulty, roll)
    assert calculate_shake_count(attempt) == expected


def test_create_captured_monster(registry):
    monster = create_captured_monster("umbrat", 4, registry, nickname="Nibbles")
    assert monster.species_id == "umbrat"
    assert monster.level == 4
    assert monster.nickname == "Nibbles"
    assert create_captured_monster("missingno", 4, registry) is None
