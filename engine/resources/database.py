"""
Game Database.

Handles loading and validation of static game data (abilities, species, items).
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema


# category folder -> (schema file, id field)
DEFAULT_CATEGORIES: dict[str, tuple[str, str]] = {
    "abilities": ("ability.schema.json", "ability_id"),
    "species": ("species.schema.json", "species_id"),
    "items": ("item.schema.json", "item_id"),
}


class Database:
    """
    Central storage for static game data.

    Expects the layout::

        <data_path>/schemas/<name>.schema.json
        <data_path>/database/<category>/*.json

    Each JSON file holds one record or a list of records. Records that fail
    schema validation are logged and skipped; categories without a schema
    are not loaded at all.
    """

    def __init__(
        self,
        data_path: Path | str,
        categories: Optional[dict[str, tuple[str, str]]] = None,
    ):
        self._data_path = Path(data_path)
        self._categories = dict(categories or DEFAULT_CATEGORIES)
        self._schemas: dict[str, Any] = {}

        # Data stores, keyed by category then record id
        self._stores: dict[str, dict[str, Any]] = {
            name: {} for name in self._categories
        }

        self.logger = logging.getLogger(__name__)

    @property
    def abilities(self) -> dict[str, Any]:
        return self._stores.get("abilities", {})

    @property
    def species(self) -> dict[str, Any]:
        return self._stores.get("species", {})

    @property
    def items(self) -> dict[str, Any]:
        return self._stores.get("items", {})

    def load_all(self) -> None:
        """Load all data from disk."""
        self._load_schemas()

        for folder, (schema_name, id_field) in self._categories.items():
            self._stores[folder] = self._load_category(folder, schema_name, id_field)

        summary = ", ".join(
            f"{len(store)} {name}" for name, store in self._stores.items()
        )
        self.logger.info(f"Loaded {summary}.")

    def _load_schemas(self) -> None:
        """Load JSON schemas."""
        schema_dir = self._data_path / "schemas"
        if not schema_dir.exists():
            self.logger.warning(f"Schema directory not found: {schema_dir}")
            return

        for schema_file in schema_dir.glob("*.schema.json"):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load schema {schema_file}: {e}")

    def _load_category(
        self,
        folder: str,
        schema_name: str,
        id_field: str,
    ) -> dict[str, Any]:
        """Load all JSON files in a category folder."""
        category_dir = self._data_path / "database" / folder
        data_store: dict[str, Any] = {}

        if not category_dir.exists():
            self.logger.warning(f"Data directory not found: {category_dir}")
            return data_store

        schema = self._schemas.get(schema_name)
        if not schema:
            self.logger.warning(f"No schema found for {folder} ({schema_name})")
            return data_store

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load {file_path}: {e}")
                continue

            records = data if isinstance(data, list) else [data]
            for record in records:
                try:
                    jsonschema.validate(instance=record, schema=schema)
                except jsonschema.ValidationError as e:
                    self.logger.error(f"Validation error in {file_path}: {e.message}")
                    continue
                if id_field in record:
                    data_store[record[id_field]] = record

        return data_store

    def get(self, category: str, record_id: str) -> dict[str, Any] | None:
        """Get a raw record by category and id."""
        return self._stores.get(category, {}).get(record_id)

    def get_ability(self, ability_id: str) -> dict[str, Any] | None:
        return self.abilities.get(ability_id)

    def get_species(self, species_id: str) -> dict[str, Any] | None:
        return self.species.get(species_id)

    def get_item(self, item_id: str) -> dict[str, Any] | None:
        return self.items.get(item_id)

