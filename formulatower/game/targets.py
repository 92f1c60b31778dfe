"""
Target policies: how the list of round targets is generated.

A policy is any callable ``(count, rng) -> list[int]``. Policies are looked
up by name so configs and the CLI can pick one without importing it.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

TargetPolicy = Callable[[int, np.random.Generator], List[int]]

# Registry type: name -> policy callable
_TARGET_POLICY_REGISTRY: Dict[str, TargetPolicy] = {}

# (last round of the tier, low, high), inclusive ranges
TOWER_TIERS: Tuple[Tuple[Optional[int], int, int], ...] = (
    (10, 700, 1000),
    (20, 1300, 2000),
    (None, 1600, 2000),
)


def register_target_policy(name: str, policy: TargetPolicy) -> None:
    """
    Register a target policy by name.

    Args:
        name: Policy identifier (e.g., "tower", "uniform").
        policy: Callable returning ``count`` integer targets.
    """
    if not callable(policy):
        raise TypeError("policy must be callable and return a list of targets")
    _TARGET_POLICY_REGISTRY[name] = policy


def get_target_policy(name: str) -> TargetPolicy:
    """Look up a registered policy. Raises KeyError with the known names."""
    try:
        return _TARGET_POLICY_REGISTRY[name]
    except KeyError:
        raise KeyError(
            f"Unknown target policy {name!r}. Available: {list_target_policies()}"
        ) from None


def list_target_policies() -> List[str]:
    """List available target policy names."""
    return sorted(_TARGET_POLICY_REGISTRY.keys())


def tiered_targets(
    count: int,
    rng: np.random.Generator,
    tiers: Sequence[Tuple[Optional[int], int, int]] = TOWER_TIERS,
) -> List[int]:
    """
    Targets that get harder as the tower rises.

    Round ``i`` (1-based) draws from the first tier whose last round is
    ``>= i``; a tier ending in ``None`` covers every remaining round.
    """
    targets = []
    for i in range(1, count + 1):
        for last, low, high in tiers:
            if last is None or i <= last:
                targets.append(int(rng.integers(low, high, endpoint=True)))
                break
        else:
            raise ValueError(f"No tier covers round {i}")
    return targets


def uniform_targets(
    count: int,
    rng: np.random.Generator,
    target_range: Tuple[int, int] = (10, 100),
) -> List[int]:
    """Targets drawn uniformly from one inclusive range."""
    low, high = target_range
    return [int(v) for v in rng.integers(low, high, size=count, endpoint=True)]


def generate_targets(
    count: int,
    rng: Optional[np.random.Generator] = None,
    policy: str = "tower",
) -> List[int]:
    """Generate ``count`` targets with a named policy."""
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    rng = rng if rng is not None else np.random.default_rng()
    targets = get_target_policy(policy)(count, rng)
    if len(targets) != count:
        raise ValueError(
            f"Target policy {policy!r} returned {len(targets)} targets, expected {count}"
        )
    return [int(t) for t in targets]


register_target_policy("tower", tiered_targets)
register_target_policy("uniform", uniform_targets)
