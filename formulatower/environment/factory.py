# formulatower/environment/factory.py
"""
Environment factory and registration system.
"""

from typing import Callable, Dict, Union

import gymnasium as gym

from .base import Environment
from .gym import GymAdapter

GYM_ID = "FormulaTower-v0"

# Environment registry for dynamic loading
ENVIRONMENT_REGISTRY: Dict[str, Callable] = {}


def register_environment(name: str, factory_func: Callable):
    """
    Register an environment factory function.

    Args:
        name: Environment name (will be lowercased)
        factory_func: Function that returns Environment instance
    """
    ENVIRONMENT_REGISTRY[name.lower()] = factory_func


def create_environment(env_spec: Union[str, Environment], **kwargs) -> Environment:
    """
    Create environment from specification.

    Args:
        env_spec: Either environment name string or Environment instance
        **kwargs: Additional arguments for environment creation

    Returns:
        Environment instance

    Examples:
        # Registered name
        env = create_environment("formula-tower")

        # With custom parameters
        env = create_environment("formula-tower", seconds_per_step=5)

        # Any other gymnasium id
        env = create_environment("FormulaTower-v0")
    """
    if isinstance(env_spec, str):
        env_name = env_spec.lower()
        if env_name in ENVIRONMENT_REGISTRY:
            return ENVIRONMENT_REGISTRY[env_name](**kwargs)
        return GymAdapter(env_spec, **kwargs)

    elif isinstance(env_spec, Environment):
        if kwargs:
            raise ValueError("Cannot pass kwargs when env_spec is already an Environment instance")
        return env_spec

    else:
        raise TypeError(f"env_spec must be str or Environment, got {type(env_spec)}")


def list_registered_environments() -> list[str]:
    """List all registered environment names."""
    return list(ENVIRONMENT_REGISTRY.keys())


def _register_defaults():
    """Register the game with gymnasium and the local registry."""
    if GYM_ID not in gym.registry:
        gym.register(
            id=GYM_ID,
            entry_point="formulatower.environment.formula_tower:FormulaTowerEnv",
        )
    register_environment("formula-tower", lambda **kwargs: GymAdapter(GYM_ID, **kwargs))


# Register defaults on import
_register_defaults()
