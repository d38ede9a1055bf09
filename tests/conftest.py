"""Shared test fixtures for Tycoon tests."""

import pytest

from tycoon import GameConfig, Player, create_game
from tycoon.io import ScriptedInputProvider


@pytest.fixture
def game_config():
    """Default configuration: fixed seed, no random events, no audit file."""
    return GameConfig(seed=42, enable_random_events=False, enable_logging=False)


@pytest.fixture
def two_players():
    """Two human test players."""
    return [Player(0, "Alice"), Player(1, "Bob")]


@pytest.fixture
def ai_players():
    """Four AI test players."""
    return [
        Player(0, "Alice", is_ai=True),
        Player(1, "Bob", is_ai=True),
        Player(2, "Charlie", is_ai=True),
        Player(3, "Diana", is_ai=True),
    ]


@pytest.fixture
def scripted():
    """Scripted input with empty queues; tests fill them as needed."""
    return ScriptedInputProvider()


@pytest.fixture
def basic_game(game_config, two_players, scripted):
    """Two human players driven by scripted input."""
    return create_game(game_config, two_players, input_provider=scripted)
