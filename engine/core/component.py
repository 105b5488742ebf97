"""
Component base class for immutable data records.

Components are pure data containers with NO logic that changes them.
Every "mutation" produces a new instance. This separation makes:
- Snapshots safe to share between callers
- Serialization trivial
- Testing easier

Usage:
    class Stats(Component):
        current: int
        maximum: int

    stats = Stats(current=5, maximum=10)
    healed = stats.model_copy(update={"current": 10})
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all data records.

    Components are immutable containers using Pydantic for:
    - Automatic validation
    - JSON serialization
    - Type hints
    - Default values

    IMPORTANT: Components are frozen. Use ``model_copy(update=...)``
    (or the ``evolve`` shortcut) to derive a changed copy.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        # Enum fields keep their members (not raw strings)
        use_enum_values=False,
    )

    # Class variable: component type name (used for serialization)
    _type_name: ClassVar[str] = ""

    @classmethod
    def get_type_name(cls) -> str:
        """Get the component type name for serialization."""
        return cls._type_name or cls.__name__

    def evolve(self, **changes: Any) -> Component:
        """Return a copy with the given fields replaced."""
        return self.model_copy(update=changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible data, tagged with the type name."""
        data = self.model_dump(mode='json')
        data['__type__'] = self.get_type_name()
        return data


# Registry of component types for deserialization
_component_registry: dict[str, type[Component]] = {}


def register_component(cls: type[Component]) -> type[Component]:
    """
    Decorator to register a component type.

    Usage:
        @register_component
        class Stats(Component):
            current: int
            maximum: int
    """
    type_name = cls.get_type_name()
    _component_registry[type_name] = cls
    return cls


def get_component_type(type_name: str) -> type[Component] | None:
    """Get component class by type name."""
    return _component_registry.get(type_name)


def get_all_component_types() -> dict[str, type[Component]]:
    """Get all registered component types."""
    return _component_registry.copy()


def component_from_dict(data: dict[str, Any]) -> Component:
    """
    Rebuild a component from ``Component.to_dict`` output.

    Raises:
        KeyError: If the type tag is missing or not registered
    """
    payload = dict(data)
    type_name = payload.pop('__type__')
    cls = _component_registry.get(type_name)
    if cls is None:
        raise KeyError(f"Unknown component type: {type_name}")
    return cls.model_validate(payload)
