"""Base class for all Tycoon decision providers."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Sequence

from tycoon.io import PostMoveAction

if TYPE_CHECKING:
    from tycoon.auction import Auction
    from tycoon.game import GameState
    from tycoon.player import PlayerState


class Agent(ABC):
    """
    Abstract base class for the decisions a player makes during a turn.

    Human and AI players share this interface; only the decision provider
    behind it differs.

    Attributes:
        player_id: The player's index in the game (0, 1, 2, ...).
        name: The player's display name.
    """

    is_ai = False

    def __init__(self, player_id: int, name: str):
        """
        Initialize the agent.

        Args:
            player_id: The player's index in the game.
            name: The player's display name.
        """
        self.player_id = player_id
        self.name = name

    @abstractmethod
    def wants_to_buy(self, game: "GameState", player: "PlayerState", property_name: str, price: int) -> bool:
        """
        Decide whether to buy an unowned property.

        Args:
            game: The current game state.
            player: The deciding player's account.
            property_name: The property on offer.
            price: The purchase price.

        Returns:
            True to buy, False to send the property to auction.
        """

    @abstractmethod
    def choose_bid(self, game: "GameState", player: "PlayerState", auction: "Auction") -> Optional[int]:
        """
        Choose a bid for the property under auction.

        Returns:
            The bid amount, or None to pass.
        """

    def choose_post_move_action(self, game: "GameState", player: "PlayerState") -> PostMoveAction:
        """Pick the action taken after moving. Defaults to skipping."""
        return PostMoveAction.SKIP

    def choose_property(
        self, game: "GameState", player: "PlayerState", owned: Sequence[str]
    ) -> Optional[str]:
        """Pick an owned property to upgrade or mortgage."""
        return None
