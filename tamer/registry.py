"""
Registry - read-only lookup of abilities, species and items.

Built once (usually from a Database) and passed explicitly to whatever
needs reference data.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional

from pydantic import ValidationError

from engine.resources.database import Database
from tamer.components import Ability, Item, MonsterSpecies

logger = logging.getLogger(__name__)

DATA_PATH = Path(__file__).parent / "data"


class RegistryError(LookupError):
    """A required registry entry is missing."""


class UnknownAbilityError(RegistryError):
    pass


class UnknownSpeciesError(RegistryError):
    pass


class UnknownItemError(RegistryError):
    pass


class Registry:
    """Immutable-by-convention store of reference data, keyed by id."""

    def __init__(
        self,
        abilities: Iterable[Ability] = (),
        species: Iterable[MonsterSpecies] = (),
        items: Iterable[Item] = (),
    ):
        self._abilities = {a.ability_id: a for a in abilities}
        self._species = {s.species_id: s for s in species}
        self._items = {i.item_id: i for i in items}

    @classmethod
    def from_database(cls, database: Database) -> Registry:
        """
        Build typed records from a loaded Database.

        Records that pass the JSON schema but fail model validation are
        logged and skipped.
        """
        return cls(
            abilities=_parse_all(database.abilities, Ability),
            species=_parse_all(database.species, MonsterSpecies),
            items=_parse_all(database.items, Item),
        )

    @classmethod
    def load_default(cls) -> Registry:
        """Registry of the bundled game data."""
        database = Database(DATA_PATH)
        database.load_all()
        return cls.from_database(database)

    # Collections

    @property
    def abilities(self) -> Mapping[str, Ability]:
        return dict(self._abilities)

    @property
    def species(self) -> Mapping[str, MonsterSpecies]:
        return dict(self._species)

    @property
    def items(self) -> Mapping[str, Item]:
        return dict(self._items)

    # Lookups

    def get_ability(self, ability_id: str) -> Optional[Ability]:
        return self._abilities.get(ability_id)

    def get_species(self, species_id: str) -> Optional[MonsterSpecies]:
        return self._species.get(species_id)

    def get_item(self, item_id: str) -> Optional[Item]:
        return self._items.get(item_id)

    def require_ability(self, ability_id: str) -> Ability:
        ability = self._abilities.get(ability_id)
        if ability is None:
            raise UnknownAbilityError(f"Unknown ability: {ability_id}")
        return ability

    def require_species(self, species_id: str) -> MonsterSpecies:
        species = self._species.get(species_id)
        if species is None:
            raise UnknownSpeciesError(f"Unknown species: {species_id}")
        return species

    def require_item(self, item_id: str) -> Item:
        item = self._items.get(item_id)
        if item is None:
            raise UnknownItemError(f"Unknown item: {item_id}")
        return item


def _parse_all(records: Mapping[str, dict], model: type) -> list:
    parsed = []
    for record_id, record in records.items():
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            logger.error(f"Invalid {model.__name__} '{record_id}': {e}")
    return parsed
