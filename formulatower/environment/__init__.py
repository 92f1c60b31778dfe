# formulatower/environment/__init__.py
"""
Agent-facing environments for Formula Tower.
"""

from .base import Environment
from .gym import GymAdapter
from .formula_tower import FormulaTowerEnv
from .factory import (
    GYM_ID,
    ENVIRONMENT_REGISTRY,
    create_environment,
    register_environment,
    list_registered_environments,
)

__all__ = [
    "Environment",
    "GymAdapter",
    "FormulaTowerEnv",
    "GYM_ID",
    "ENVIRONMENT_REGISTRY",
    "create_environment",
    "register_environment",
    "list_registered_environments",
]
