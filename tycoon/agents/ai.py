"""Computer player with fixed purchase and bidding heuristics."""

import random
from typing import TYPE_CHECKING, Optional

from tycoon.agents.base import Agent

if TYPE_CHECKING:
    from tycoon.auction import Auction
    from tycoon.game import GameState
    from tycoon.player import PlayerState


class AIAgent(Agent):
    """
    Simple AI that buys whenever it keeps a healthy reserve.

    Buys a property only when its cash exceeds twice the price. In an
    auction it raises the bid by the fixed increment with a configured
    probability, provided it can pay the raised amount.
    """

    is_ai = True

    def __init__(self, player_id: int, name: str, rng: Optional[random.Random] = None):
        """
        Initialize the AI agent.

        Args:
            player_id: The player's index in the game.
            name: The player's display name.
            rng: Source for bidding coin flips. Defaults to one seeded by player_id.
        """
        super().__init__(player_id, name)
        self.rng = rng or random.Random(player_id)

    def wants_to_buy(self, game: "GameState", player: "PlayerState", property_name: str, price: int) -> bool:
        return player.cash > price * 2

    def choose_bid(self, game: "GameState", player: "PlayerState", auction: "Auction") -> Optional[int]:
        if self.rng.random() >= game.config.ai_bid_probability:
            return None
        amount = auction.current_bid + game.config.auction_increment
        if player.cash < amount:
            return None
        return amount
