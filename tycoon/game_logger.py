"""
JSONL audit trail for Tycoon game events.

Every engine event is appended to a JSONL file as it happens. The trail is a
pure side channel: it never feeds back into game state.
"""

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional

from tycoon.money import GameEvent

if TYPE_CHECKING:
    from tycoon.game import GameState

logger = logging.getLogger(__name__)


class GameLogger:
    """Logger that writes game events to a JSONL file."""

    def __init__(self, log_file: Optional[str] = None):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file. If None, generates timestamped filename.
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"tycoon_game_{timestamp}.jsonl"

        self.log_file = log_file
        self.event_count = 0
        self._game: Optional["GameState"] = None

        # Create/clear log file
        with open(self.log_file, "w"):
            pass

    def attach(self, game: "GameState") -> None:
        """Write the events already logged by the game, then follow new ones."""
        self._game = game
        for event in game.event_log.get_events():
            self.handle_event(event)
        game.event_log.subscribe(self.handle_event)
        logger.debug("Audit trail for %d players written to %s", len(game.players), self.log_file)

    def handle_event(self, event: GameEvent) -> None:
        """Convert an engine event to a JSON line."""
        fields: Dict[str, Any] = dict(event.details)
        if event.player_id is not None:
            fields["player_id"] = event.player_id
            if self._game is not None and event.player_id in self._game.players:
                fields["player_name"] = self._game.players[event.player_id].name
        if self._game is not None:
            fields["turn_number"] = self._game.turn_number
        self.log_event(event.event_type.value, **fields)

    def log_event(self, event_type: str, **kwargs: Any) -> None:
        """
        Log a game event to JSONL file.

        Args:
            event_type: Type of event (e.g., "game_start", "dice_roll", "purchase")
            **kwargs: Additional event data
        """
        event = {
            "event_id": self.event_count,
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
            **kwargs,
        }

        with open(self.log_file, "a") as f:
            f.write(json.dumps(event, default=str) + "\n")

        self.event_count += 1
