import pytest

from engine.core.rng import RandomSource
from tamer.components import (
    Ability,
    AbilityCategory,
    CharacterStats,
    Element,
    Item,
    ItemCategory,
    ItemEffect,
    ItemEffectType,
    StatusEffect,
    StatusType,
    TargetType,
)
from tamer.config import BattleConfig
from tamer.registry import Registry


def make_stats(**overrides) -> CharacterStats:
    """Stat block with sensible defaults; current HP/MP default to full."""
    values = dict(
        max_hp=100, max_mp=30, attack=20, defense=10,
        magic_attack=20, magic_defense=10, speed=10, luck=0,
    )
    values.update(overrides)
    values.setdefault("current_hp", values["max_hp"])
    values.setdefault("current_mp", values["max_mp"])
    return CharacterStats(**values)


def make_combatant(combatant_id, is_player=False, name=None, abilities=(), **stat_overrides):
    """Combatant with a fixed id so tests can refer to it."""
    from tamer.battle.actor import Combatant
    return Combatant(
        combatant_id=combatant_id,
        name=name or combatant_id.title(),
        is_player=is_player,
        is_monster=not is_player,
        stats=make_stats(**stat_overrides),
        abilities=tuple(abilities),
        capturable=not is_player,
    )


@pytest.fixture
def rng():
    """Seeded random source for repeatable statistical tests."""
    return RandomSource(seed=1234)


@pytest.fixture
def config():
    return BattleConfig()


@pytest.fixture(scope="session")
def registry():
    """Registry of the bundled game data."""
    return Registry.load_default()


@pytest.fixture
def fireball():
    return Ability(
        ability_id="fireball",
        name="Fireball",
        element=Element.FIRE,
        category=AbilityCategory.MAGICAL,
        power=50,
        accuracy=100,
        mp_cost=10,
        target_type=TargetType.SINGLE_ENEMY,
    )


@pytest.fixture
def heal():
    return Ability(
        ability_id="heal",
        name="Heal",
        element=Element.LIGHT,
        category=AbilityCategory.HEALING,
        power=40,
        accuracy=100,
        mp_cost=5,
        target_type=TargetType.SINGLE_ALLY,
    )


@pytest.fixture
def poison_sting():
    return Ability(
        ability_id="poison_sting",
        name="Poison Sting",
        element=Element.NEUTRAL,
        category=AbilityCategory.STATUS,
        power=0,
        accuracy=100,
        mp_cost=3,
        target_type=TargetType.SINGLE_ENEMY,
        status_effect=StatusEffect(
            id="poison", name="Poisoned", type=StatusType.POISON, duration=3, magnitude=0.1,
        ),
    )


@pytest.fixture
def capture_orb():
    return Item(
        item_id="capture_orb",
        name="Capture Orb",
        category=ItemCategory.CAPTURE_DEVICE,
        use_effect=ItemEffect(type=ItemEffectType.CAPTURE_BOOST, magnitude=1.0),
    )


@pytest.fixture
def hero(fireball, heal, poison_sting):
    """Player-side combatant knowing a damage, heal and status ability."""
    return make_combatant(
        "hero", is_player=True, speed=20, luck=0,
        abilities=(fireball, heal, poison_sting),
    )


@pytest.fixture
def slime():
    return make_combatant("slime", max_hp=50, speed=5)


@pytest.fixture
def enemies():
    """Three enemies in formation order."""
    return [
        make_combatant("left", speed=5),
        make_combatant("middle", speed=6),
        make_combatant("right", speed=7),
    ]


@pytest.fixture
def engine():
    from tamer.battle.system import BattleEngine
    return BattleEngine(rng=RandomSource(seed=99))


@pytest.fixture
def duel(engine, hero, slime):
    """1v1 battle: hero against a slime."""
    return engine.create_battle([hero], [slime])


@pytest.fixture
def skirmish(engine, hero, enemies):
    """Hero against three enemies."""
    return engine.create_battle([hero], enemies)


@pytest.fixture
def stats_factory():
    return make_stats


@pytest.fixture
def combatant_factory():
    return make_combatant
