"""
Pytest configuration and shared fixtures for Formula Tower tests.
"""

from dataclasses import replace

import numpy as np
import pytest

from formulatower.game import GameConfig, make_pool, new_session, start


@pytest.fixture
def rng():
    """Seeded numpy Generator for reproducible draws."""
    return np.random.default_rng(1234)


@pytest.fixture
def pool():
    """Fresh 1..100 board."""
    return make_pool(100)


@pytest.fixture
def config():
    return GameConfig(target_count=3)


@pytest.fixture
def setup_session(config, rng):
    """Session in SETUP with known targets 14, 20, 30."""
    return replace(new_session(config, rng), targets=(14, 20, 30))


@pytest.fixture
def playing(setup_session):
    """Started session on round 1 (target 14) with the full clock."""
    return start(setup_session).session
