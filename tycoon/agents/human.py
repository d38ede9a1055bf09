"""Human player whose decisions come from an InputProvider."""

from typing import TYPE_CHECKING, Optional, Sequence

from tycoon.agents.base import Agent
from tycoon.io import InputProvider, PostMoveAction

if TYPE_CHECKING:
    from tycoon.auction import Auction
    from tycoon.game import GameState
    from tycoon.player import PlayerState


class HumanAgent(Agent):
    """Forwards every decision to an input provider, single-shot."""

    def __init__(self, player_id: int, name: str, input_provider: InputProvider):
        super().__init__(player_id, name)
        self.input = input_provider

    def wants_to_buy(self, game: "GameState", player: "PlayerState", property_name: str, price: int) -> bool:
        return self.input.request_yes_no(f"{property_name} is available for purchase for ${price}. Buy?")

    def choose_bid(self, game: "GameState", player: "PlayerState", auction: "Auction") -> Optional[int]:
        amount = self.input.request_bid(
            f"{player.name}, enter your bid for {auction.property_name}",
            auction.current_bid,
            player.cash,
        )
        return amount if amount > 0 else None

    def choose_post_move_action(self, game: "GameState", player: "PlayerState") -> PostMoveAction:
        return self.input.request_post_move_action()

    def choose_property(
        self, game: "GameState", player: "PlayerState", owned: Sequence[str]
    ) -> Optional[str]:
        return self.input.request_property_choice(owned)
