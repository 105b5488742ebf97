"""
Core engine module.

Exports:
- Component, register_component: Immutable record base and registration
- RandomSource, ScriptedRandom: Injectable randomness
"""

from engine.core.component import (
    Component,
    register_component,
    get_component_type,
    get_all_component_types,
    component_from_dict,
)
from engine.core.rng import RandomSource, ScriptedRandom, default_rng

__all__ = [
    # Records
    "Component",
    "register_component",
    "get_component_type",
    "get_all_component_types",
    "component_from_dict",
    # Randomness
    "RandomSource",
    "ScriptedRandom",
    "default_rng",
]
