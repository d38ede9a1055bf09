"""
Auction system for properties.
"""

from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from tycoon.exceptions import OutOfRangeInputError
from tycoon.money import EventLog, EventType
from tycoon.player import PlayerState

if TYPE_CHECKING:
    from tycoon.agents.base import Agent
    from tycoon.game import GameState


class Auction:
    """
    Manages an auction for a property nobody bought.

    Bidding is a single pass over the eligible players in turn order. Each
    player gets exactly one chance to bid; there is no counter-bidding once
    the pass has finished.
    """

    def __init__(
        self,
        property_name: str,
        eligible_player_ids: List[int],
        event_log: EventLog,
        starting_bid: int = 10,
    ):
        self.property_name = property_name
        self.eligible_player_ids = eligible_player_ids.copy()
        self.current_bid = starting_bid
        self.high_bidder: Optional[int] = None
        self.event_log = event_log
        self.bidders_polled = 0
        self.is_complete = False

        self.event_log.log(
            EventType.AUCTION_START,
            property=property_name,
            players=self.eligible_player_ids,
            starting_bid=starting_bid,
        )

    def place_bid(self, player: PlayerState, amount: int) -> None:
        """
        Record a bid.

        A bid is valid when it is at least the current bid and no more than
        the bidder's cash.

        Raises:
            OutOfRangeInputError: the amount is outside those bounds
        """
        if self.is_complete:
            raise OutOfRangeInputError(f"Auction for {self.property_name} is closed")
        if player.player_id not in self.eligible_player_ids:
            raise OutOfRangeInputError(f"Player {player.player_id} is not bidding on {self.property_name}")
        if amount < self.current_bid or amount > player.cash:
            raise OutOfRangeInputError(
                f"Bid ${amount} must be between ${self.current_bid} and ${player.cash}"
            )

        self.current_bid = amount
        self.high_bidder = player.player_id

        self.event_log.log(
            EventType.AUCTION_BID,
            player_id=player.player_id,
            property=self.property_name,
            amount=amount,
        )

    def pass_turn(self, player: PlayerState, reason: str = "pass") -> None:
        """Player passes on bidding."""
        self.event_log.log(
            EventType.AUCTION_PASS,
            player_id=player.player_id,
            property=self.property_name,
            reason=reason,
        )

    def run(self, game: "GameState", bidders: Sequence[Tuple[PlayerState, "Agent"]]) -> Optional[int]:
        """
        Run the single bidding pass and close the auction.

        Invalid bids are treated as passes.

        Returns:
            The winning player ID, or None if nobody bid.
        """
        for player, agent in bidders:
            if player.is_bankrupt:
                continue
            self.bidders_polled += 1
            amount = agent.choose_bid(game, player, self)
            if amount is None:
                self.pass_turn(player)
                continue
            try:
                self.place_bid(player, amount)
            except OutOfRangeInputError as exc:
                self.pass_turn(player, reason=str(exc))

        self.close()
        return self.high_bidder

    def close(self) -> None:
        self.is_complete = True
        self.event_log.log(
            EventType.AUCTION_END,
            player_id=self.high_bidder,
            property=self.property_name,
            winning_bid=self.current_bid if self.high_bidder is not None else None,
            winner=self.high_bidder,
        )

    def get_winner(self) -> Optional[int]:
        """Get the winning player ID, or None if auction incomplete or no bids."""
        if not self.is_complete:
            return None
        return self.high_bidder

    def get_winning_bid(self) -> int:
        """Get the winning bid amount."""
        return self.current_bid
