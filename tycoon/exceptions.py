"""
Custom exception hierarchy for the Tycoon engine.

Ledger operations raise these; the turn engine recovers the player-facing
ones at the call site and lets invariant violations propagate.
"""


class TycoonError(Exception):
    """Base exception for all game-related errors."""


class InvalidActionError(TycoonError):
    """Action is not legal in the current state."""


class InvalidOwnershipError(InvalidActionError):
    """Player acted on a property they do not own."""

    def __init__(self, property_name: str, player_id: int):
        super().__init__(f"Player {player_id} does not own {property_name}")
        self.property_name = property_name
        self.player_id = player_id


class InsufficientFundsError(InvalidActionError):
    """Player cannot afford the requested payment."""

    def __init__(self, player_id: int, required: int, available: int):
        super().__init__(f"Player {player_id} needs ${required} but has ${available}")
        self.player_id = player_id
        self.required = required
        self.available = available


class OutOfRangeInputError(InvalidActionError):
    """A bid or choice from a human player fell outside the valid bounds."""


class AlreadyOwnedError(TycoonError):
    """Purchase attempted on a property that already has an owner."""

    def __init__(self, property_name: str, owner_id: int):
        super().__init__(f"{property_name} is already owned by player {owner_id}")
        self.property_name = property_name
        self.owner_id = owner_id


class LedgerInconsistencyError(TycoonError):
    """Owner map and player owned-sets disagree."""
