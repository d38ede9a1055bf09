"""
Player state and management.
"""

from typing import Dict, Set


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(self, player_id: int, name: str, starting_cash: int, is_ai: bool = False):
        self.player_id = player_id
        self.name = name
        self.cash = starting_cash
        self.position = 0
        self.is_ai = is_ai
        self.is_bankrupt = False
        self.properties: Set[str] = set()
        self.upgrades: Dict[str, int] = {}

    def total_upgrades(self) -> int:
        """Sum of improvement levels across all owned properties."""
        return sum(self.upgrades.values())

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', "
            f"cash={self.cash}, position={self.position}, bankrupt={self.is_bankrupt})"
        )


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(self, player_id: int, name: str, is_ai: bool = False):
        self.player_id = player_id
        self.name = name
        self.is_ai = is_ai

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}', ai={self.is_ai})"
