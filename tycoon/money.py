"""
Event logging and game statistics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    RANDOM_EVENT = "random_event"
    DICE_ROLL = "dice_roll"
    MOVE = "move"
    LAND = "land"

    PURCHASE = "purchase"
    PURCHASE_DECLINED = "purchase_declined"
    AUCTION_START = "auction_start"
    AUCTION_BID = "auction_bid"
    AUCTION_PASS = "auction_pass"
    AUCTION_END = "auction_end"

    RENT_PAYMENT = "rent_payment"

    UPGRADE = "upgrade"
    MORTGAGE = "mortgage"
    ACTION_FAILED = "action_failed"

    BANKRUPTCY = "bankruptcy"
    END_REQUESTED = "end_requested"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


EventListener = Callable[[GameEvent], None]


class EventLog:
    """Manages the game event log and forwards events to subscribers."""

    def __init__(self):
        self.events: List[GameEvent] = []
        self._listeners: List[EventListener] = []

    def subscribe(self, listener: EventListener) -> None:
        """Register a one-way listener (display sink, audit trail)."""
        self._listeners.append(listener)

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        """Log a game event."""
        event = GameEvent(event_type, player_id, details)
        self.events.append(event)
        for listener in self._listeners:
            listener(event)

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]


@dataclass
class GameStatistics:
    """Running counters for a game."""

    total_turns: int = 0
    total_properties_bought: int = 0
    total_rents_paid: int = 0

    def record_turn(self) -> None:
        self.total_turns += 1

    def record_property_bought(self) -> None:
        self.total_properties_bought += 1

    def record_rent_paid(self) -> None:
        self.total_rents_paid += 1

    def as_dict(self) -> Dict[str, int]:
        return {
            "total_turns": self.total_turns,
            "total_properties_bought": self.total_properties_bought,
            "total_rents_paid": self.total_rents_paid,
        }
