"""
Tamer - creature-collecting battle rules.

Built on the engine package's immutable components, random source and
data loading.

Quick Start:
    from tamer import Registry
    from tamer.battle import BattleEngine, BattleAction, ActionType
    from tamer.battle import create_combatant_from_monster
    from tamer.progression import create_monster_instance

    registry = Registry.load_default()
    hero = create_monster_instance("emberpup", 5, registry)
    wild = create_monster_instance("tidefin", 4, registry)

    engine = BattleEngine()
    battle = engine.create_battle(
        [create_combatant_from_monster(hero, True, registry)],
        [create_combatant_from_monster(wild, False, registry, capturable=True)],
    )
"""

__version__ = "0.1.0"

from tamer.config import BattleConfig, DEFAULT_CONFIG
from tamer.registry import (
    Registry,
    RegistryError,
    UnknownAbilityError,
    UnknownSpeciesError,
    UnknownItemError,
)

__all__ = [
    "BattleConfig",
    "DEFAULT_CONFIG",
    "Registry",
    "RegistryError",
    "UnknownAbilityError",
    "UnknownSpeciesError",
    "UnknownItemError",
]
