"""
Tycoon Engine

A deterministic turn-resolution engine for a simplified property-trading
board game: movement, purchases, single-pass auctions, rent, upgrades,
mortgages and bankruptcy.
"""

from .game import GameState, ResolutionKind, TurnOutcome, create_game
from .player import Player, PlayerState
from .board import Board
from .config import GameConfig
from .ledger import Ledger
from .rent import rent_due

__all__ = [
    "GameState",
    "ResolutionKind",
    "TurnOutcome",
    "create_game",
    "Player",
    "PlayerState",
    "Board",
    "GameConfig",
    "Ledger",
    "rent_due",
]
