"""
Engine

Game-agnostic building blocks: immutable data records, injectable
randomness and schema-validated data loading.

Quick Start:
    from engine.core import Component, register_component, RandomSource
    from engine.resources.database import Database

    db = Database("data")
    db.load_all()
    rng = RandomSource(seed=7)
"""

__version__ = "0.1.0"
__author__ = "Developer"

# Re-export core components for convenience
from engine.core import (
    Component,
    register_component,
    RandomSource,
    ScriptedRandom,
)

__all__ = [
    "Component",
    "register_component",
    "RandomSource",
    "ScriptedRandom",
]
