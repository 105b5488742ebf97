import logging

import pytest

from tamer.components import CharacterStats, LearnableAbility, MonsterSpecies
from tamer.config import BattleConfig
from tamer.progression.growth import (
    add_experience_to_monster,
    calculate_monster_stats,
    create_monster_instance,
    damage_monster,
    experience_to_next_level,
    get_learned_abilities_at_level,
    heal_monster,
    is_monster_alive,
)
from tamer.registry import Registry


def test_stats_at_level_one_match_base(registry):
    species = registry.require_species("emberpup")
    assert calculate_monster_stats(species, 1) == species.base_stats


def test_stats_grow_with_level(registry):
    stats = calculate_monster_stats(registry.require_species("emberpup"), 5)

    assert stats.max_hp == 63
    assert stats.current_hp == 63
    assert stats.max_mp == 28
    assert stats.attack == 20
    assert stats.magic_attack == 24
    # 13 + floor(1.2 * 4)
    assert stats.speed == 17
    assert stats.luck == 5


def test_learnset_by_level(registry):
    species = registry.require_species("emberpup")

    early = [a.ability_id for a in get_learned_abilities_at_level(species, 1, registry)]
    later = [a.ability_id for a in get_learned_abilities_at_level(species, 5, registry)]

    assert early == ["tackle", "ember"]
    assert later == ["tackle", "ember", "war_cry"]


def test_learnset_skips_unknown_abilities(caplog):
    species = MonsterSpecies(
        species_id="glitch",
        name="Glitch",
        base_stats=CharacterStats(max_hp=10, current_hp=10),
        abilities=(LearnableAbility(ability_id="nothing"),),
    )
    with caplog.at_level(logging.WARNING):
        learned = get_learned_abilities_at_level(species, 1, Registry(species=[species]))

    assert learned == ()
    assert "nothing" in caplog.text


def test_create_monster_instance(registry):
    first = create_monster_instance("tidefin", 4, registry, nickname="Finn")
    second = create_monster_instance("tidefin", 4, registry)

    assert first.instance_id != second.instance_id
    assert first.nickname == "Finn"
    assert first.experience == 0
    assert "slowing_mist" in [a.ability_id for a in first.learned_abilities]


def test_create_clamps_level(registry):
    assert create_monster_instance("tidefin", 0, registry).level == 1
    assert create_monster_instance("tidefin", 99, registry).level == 25


def test_create_unknown_species(registry):
    assert create_monster_instance("missingno", 3, registry) is None


def test_experience_curve():
    assert experience_to_next_level(1) == 100
    assert experience_to_next_level(7) == 700
    assert experience_to_next_level(3, BattleConfig(xp_per_level_step=50)) == 150


def test_experience_without_level_up(registry):
    monster = create_monster_instance("emberpup", 1, registry)
    updated = add_experience_to_monster(monster, 60, registry)

    assert updated.level == 1
    assert updated.experience == 60
    assert updated.stats == monster.stats


@pytest.mark.parametrize("xp, level, leftover", [
    (100, 2, 0),
    (250, 2, 150),
    (300, 3, 0),
])
def test_level_ups(registry, xp, level, leftover):
    monster = create_monster_instance("emberpup", 1, registry)
    updated = add_experience_to_monster(monster, xp, registry)

    assert updated.level == level
    assert updated.experience == leftover


def test_level_up_keeps_hp_ratio(registry):
    monster = damage_monster(create_monster_instance("emberpup", 1, registry), 30)
    updated = add_experience_to_monster(monster, 100, registry)

    # 15/45 of the new 49 max HP, rounded up
    assert updated.stats.max_hp == 49
    assert updated.stats.current_hp == 17


def test_level_up_learns_abilities(registry):
    monster = create_monster_instance("emberpup", 4, registry)
    updated = add_experience_to_monster(monster, 400, registry)

    assert updated.level == 5
    assert "war_cry" in [a.ability_id for a in updated.learned_abilities]


def test_max_level_stops_growth(registry):
    config = BattleConfig(max_level=3)
    monster = create_monster_instance("emberpup", 2, registry, config=config)

    capped = add_experience_to_monster(monster, 10_000, registry, config=config)
    assert capped.level == 3
    assert add_experience_to_monster(capped, 500, registry, config=config) is capped


def test_heal_and_damage(registry):
    monster = create_monster_instance("pebblit", 3, registry)
    max_hp = monster.stats.max_hp

    hurt = damage_monster(monster, 10)
    assert hurt.stats.current_hp == max_hp - 10
    assert heal_monster(hurt, 500).stats.current_hp == max_hp

    fainted = damage_monster(monster, 10_000)
    assert fainted.stats.current_hp == 0
    assert not is_monster_alive(fainted)
    assert is_monster_alive(monster)


def test_heal_restores_mp(registry):
    monster = create_monster_instance("pebblit", 3, registry)
    drained = monster.model_copy(update={"stats": monster.stats.with_mp(0)})

    assert heal_monster(drained, 0, 5).stats.current_mp == 5
