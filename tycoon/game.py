"""
Main game engine and state management.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from tycoon.agents import AIAgent, Agent, HumanAgent
from tycoon.auction import Auction
from tycoon.board import Board
from tycoon.config import GameConfig
from tycoon.exceptions import InsufficientFundsError, InvalidActionError, InvalidOwnershipError
from tycoon.game_logger import GameLogger
from tycoon.io import InputProvider, PostMoveAction, RandomDice
from tycoon.ledger import Ledger
from tycoon.money import EventLog, EventType, GameStatistics
from tycoon.player import Player, PlayerState
from tycoon.rent import rent_due


class ResolutionKind(Enum):
    """How the space a player landed on was resolved."""

    BOUGHT = "bought"
    AUCTIONED = "auctioned"
    AUCTION_UNSOLD = "auction_unsold"
    RENT_PAID = "rent_paid"
    ORPHANED = "orphaned"
    OWNED_BY_SELF = "owned_by_self"
    NON_PROPERTY = "non_property"
    SKIPPED = "skipped"


@dataclass
class TurnOutcome:
    """Result of a single turn. Not persisted."""

    player_id: int
    kind: ResolutionKind
    roll: Optional[int] = None
    position: Optional[int] = None
    property_name: Optional[str] = None
    amount: int = 0
    counterparty: Optional[int] = None
    random_event: Optional[str] = None
    action: Optional[PostMoveAction] = None
    eliminated: bool = False


class GameState:
    """
    Represents the complete state of a Tycoon game.
    This is the main interface for the game engine.

    The game owns every player account and the ledger; all mutations happen
    inside run_turn, one player at a time.
    """

    def __init__(
        self,
        config: GameConfig,
        players: List[Player],
        agents: Optional[Dict[int, Agent]] = None,
        input_provider: Optional[InputProvider] = None,
        dice: Optional[Callable[[], int]] = None,
    ):
        self.config = config
        self.board = Board(config)
        self.event_log = EventLog()
        self.stats = GameStatistics()

        # Initialize RNG
        self.rng = random.Random(config.seed)

        # Initialize players in turn order
        self.players: Dict[int, PlayerState] = {}
        for player in players:
            if player.player_id in self.players:
                raise ValueError(f"Duplicate player id {player.player_id}")
            self.players[player.player_id] = PlayerState(
                player.player_id, player.name, config.starting_money, is_ai=player.is_ai
            )
        self.turn_order: List[int] = [p.player_id for p in players]

        self.ledger = Ledger(config, self.players)

        self.input_provider = input_provider
        self.agents: Dict[int, Agent] = dict(agents or {})
        for player in players:
            if player.player_id not in self.agents:
                self.agents[player.player_id] = self._default_agent(player)

        if dice is not None:
            self.dice = dice
        elif input_provider is not None:
            self.dice = input_provider.request_die_roll
        else:
            self.dice = RandomDice(rng=self.rng)

        # Game state
        self.current_player_index = 0
        self.end_requested = False
        self.game_over = False
        self.winner: Optional[int] = None

        self.event_log.log(
            EventType.GAME_START,
            players=[p.name for p in players],
            starting_money=config.starting_money,
            seed=config.seed,
        )

    def _default_agent(self, player: Player) -> Agent:
        if player.is_ai:
            return AIAgent(player.player_id, player.name, rng=random.Random(self.rng.randrange(2**32)))
        if self.input_provider is None:
            raise ValueError(f"Human player {player.name} needs an input provider or an explicit agent")
        return HumanAgent(player.player_id, player.name, self.input_provider)

    @property
    def turn_number(self) -> int:
        return self.stats.total_turns

    def get_current_player(self) -> PlayerState:
        """Get the player under the turn cursor."""
        return self.players[self.turn_order[self.current_player_index % len(self.turn_order)]]

    def get_active_players(self) -> List[PlayerState]:
        """Get all non-bankrupt players in turn order."""
        return [self.players[pid] for pid in self.turn_order if not self.players[pid].is_bankrupt]

    def roll_dice(self, player_id: int) -> int:
        """Draw one die roll for a player."""
        roll = self.dice()
        if not 1 <= roll <= 6:
            raise ValueError(f"Die roll out of range: {roll}")
        self.event_log.log(EventType.DICE_ROLL, player_id=player_id, roll=roll)
        return roll

    def move_player(self, player_id: int, spaces: int) -> int:
        """
        Move a player forward by the specified number of spaces.
        Returns the new position.
        """
        player = self.players[player_id]
        old_position = player.position
        player.position = self.board.advance(old_position, spaces)

        self.event_log.log(
            EventType.MOVE,
            player_id=player_id,
            **{"from": old_position, "to": player.position, "spaces": spaces},
        )
        return player.position

    def trigger_random_event(self, player_id: int) -> Optional[str]:
        """
        Apply a random event: gain money, pay a fine, or nothing.
        The fine is only charged to a player who can cover it.
        """
        if not self.config.enable_random_events:
            return None

        player = self.players[player_id]
        roll = self.rng.randrange(3)
        if roll == 0:
            player.cash += self.config.random_event_gain
            outcome = "gain"
            amount = self.config.random_event_gain
        elif roll == 1 and player.cash > self.config.random_event_fine:
            player.cash -= self.config.random_event_fine
            outcome = "fine"
            amount = -self.config.random_event_fine
        else:
            outcome = "none"
            amount = 0

        self.event_log.log(
            EventType.RANDOM_EVENT,
            player_id=player_id,
            outcome=outcome,
            amount=amount,
            new_balance=player.cash,
        )
        return outcome

    def buy_property(self, player_id: int, property_name: str) -> None:
        """
        Player buys an unowned property at the configured cost.

        Raises:
            InsufficientFundsError: player cannot afford the property
            AlreadyOwnedError: property already has an owner
        """
        player = self.players[player_id]
        price = self.config.property_cost
        if player.cash < price:
            raise InsufficientFundsError(player_id, price, player.cash)

        self.ledger.record_purchase(property_name, player_id)
        player.cash -= price
        self.stats.record_property_bought()

        self.event_log.log(
            EventType.PURCHASE,
            player_id=player_id,
            property=property_name,
            price=price,
            new_balance=player.cash,
        )

    def start_auction(self, property_name: str) -> Auction:
        """Start an auction for a property among all active players."""
        eligible_players = [p.player_id for p in self.get_active_players()]
        return Auction(property_name, eligible_players, self.event_log, self.config.auction_start_bid)

    def run_auction(self, property_name: str) -> Auction:
        """Start, run and settle an auction for a property."""
        auction = self.start_auction(property_name)
        bidders = [(self.players[pid], self.agents[pid]) for pid in auction.eligible_player_ids]
        auction.run(self, bidders)
        self.resolve_auction(auction)
        return auction

    def resolve_auction(self, auction: Auction) -> None:
        """
        Finalize an auction by transferring property and money.
        Winner pays the bid amount, not the property cost.
        """
        if not auction.is_complete:
            return

        winner_id = auction.get_winner()
        if winner_id is None:
            # No bids - property remains unowned
            return

        winning_bid = auction.get_winning_bid()
        self.ledger.record_auction_win(auction.property_name, winner_id, winning_bid)
        self.players[winner_id].cash -= winning_bid
        self.stats.record_property_bought()

    def calculate_rent(self, property_name: str) -> int:
        """Rent owed on a property, using its owner's improvement count."""
        prop = self.board.get_property(property_name)
        upgrades = self.ledger.improvement_count(property_name)
        return rent_due(prop.rent_base, upgrades, prop.rent_multiplier)

    def pay_rent(self, payer_id: int, owner_id: int, amount: int, property_name: str) -> None:
        """
        Player pays rent to a property owner.
        The payer may go negative; the bankruptcy check follows.
        """
        payer = self.players[payer_id]
        owner = self.players[owner_id]

        payer.cash -= amount
        owner.cash += amount
        self.stats.record_rent_paid()

        self.event_log.log(
            EventType.RENT_PAYMENT,
            player_id=payer_id,
            owner=owner_id,
            property=property_name,
            amount=amount,
            payer_balance=payer.cash,
            owner_balance=owner.cash,
        )

    def upgrade_property(self, player_id: int, property_name: Optional[str]) -> int:
        """Buy one improvement on an owned property. Returns the new count."""
        if property_name is None:
            raise InvalidOwnershipError("<none>", player_id)
        count = self.ledger.upgrade(property_name, player_id)
        self.event_log.log(
            EventType.UPGRADE,
            player_id=player_id,
            property=property_name,
            cost=self.config.upgrade_cost,
            upgrades=count,
            new_balance=self.players[player_id].cash,
        )
        return count

    def mortgage_property(self, player_id: int, property_name: Optional[str]) -> int:
        """Mortgage an owned property. Returns the cash received."""
        if property_name is None:
            raise InvalidOwnershipError("<none>", player_id)
        refund = self.ledger.mortgage(property_name, player_id)
        self.event_log.log(
            EventType.MORTGAGE,
            player_id=player_id,
            property=property_name,
            value=refund,
            new_balance=self.players[player_id].cash,
        )
        return refund

    def end_game(self, player_id: Optional[int] = None) -> None:
        """Request termination; the rotation loop stops before the next turn."""
        self.end_requested = True
        self.event_log.log(EventType.END_REQUESTED, player_id=player_id)

    def check_bankruptcy(self, player_id: int, stage: str) -> bool:
        """Eliminate a player whose balance is negative. Returns True if eliminated now."""
        player = self.players[player_id]
        if player.is_bankrupt or player.cash >= 0:
            return False

        player.is_bankrupt = True
        self.event_log.log(
            EventType.BANKRUPTCY,
            player_id=player_id,
            stage=stage,
            balance=player.cash,
            properties=sorted(player.properties),
        )
        return True

    def run_turn(self, player_id: int) -> TurnOutcome:
        """
        Resolve one complete turn for a player.

        Phases: random event, movement, space resolution, post-move action
        (humans only), bankruptcy check. Eliminated players are skipped
        without touching any state.
        """
        player = self.players[player_id]
        if player.is_bankrupt or self.game_over:
            return TurnOutcome(player_id, ResolutionKind.SKIPPED, position=player.position)

        self.stats.record_turn()
        self.event_log.log(EventType.TURN_START, player_id=player_id, turn=self.turn_number)

        random_event = self.trigger_random_event(player_id)

        roll = self.roll_dice(player_id)
        position = self.move_player(player_id, roll)

        outcome = TurnOutcome(player_id, ResolutionKind.NON_PROPERTY, roll=roll, position=position,
                              random_event=random_event)
        property_name = self.board.property_at(position)
        if property_name is not None:
            outcome.property_name = property_name
            self.event_log.log(EventType.LAND, player_id=player_id, property=property_name, position=position)
            self._resolve_property(player, property_name, outcome)

        if not player.is_bankrupt and not player.is_ai:
            outcome.action = self._post_move_action(player)

        if self.check_bankruptcy(player_id, stage="post_move"):
            outcome.eliminated = True

        return outcome

    def _resolve_property(self, player: PlayerState, property_name: str, outcome: TurnOutcome) -> None:
        owner_id = self.ledger.owner_of(property_name)

        if owner_id is None:
            self._offer_purchase(player, property_name, outcome)
        elif owner_id == player.player_id:
            outcome.kind = ResolutionKind.OWNED_BY_SELF
        elif self.players[owner_id].is_bankrupt:
            outcome.kind = ResolutionKind.ORPHANED
            outcome.counterparty = owner_id
        else:
            rent = self.calculate_rent(property_name)
            self.pay_rent(player.player_id, owner_id, rent, property_name)
            outcome.kind = ResolutionKind.RENT_PAID
            outcome.amount = rent
            outcome.counterparty = owner_id
            if self.check_bankruptcy(player.player_id, stage="rent"):
                outcome.eliminated = True

    def _offer_purchase(self, player: PlayerState, property_name: str, outcome: TurnOutcome) -> None:
        price = self.config.property_cost
        agent = self.agents[player.player_id]

        if agent.wants_to_buy(self, player, property_name, price):
            try:
                self.buy_property(player.player_id, property_name)
            except InsufficientFundsError as exc:
                self._record_failure(player.player_id, "buy", exc)
            else:
                outcome.kind = ResolutionKind.BOUGHT
                outcome.amount = price
                return
        else:
            self.event_log.log(EventType.PURCHASE_DECLINED, player_id=player.player_id, property=property_name)

        auction = self.run_auction(property_name)
        winner_id = auction.get_winner()
        if winner_id is None:
            outcome.kind = ResolutionKind.AUCTION_UNSOLD
        else:
            outcome.kind = ResolutionKind.AUCTIONED
            outcome.amount = auction.get_winning_bid()
            outcome.counterparty = winner_id

    def _post_move_action(self, player: PlayerState) -> PostMoveAction:
        agent = self.agents[player.player_id]
        action = agent.choose_post_move_action(self, player)

        if action in (PostMoveAction.UPGRADE, PostMoveAction.MORTGAGE):
            owned = sorted(player.properties)
            try:
                if not owned:
                    raise InvalidActionError(f"{player.name} has no properties")
                choice = agent.choose_property(self, player, owned)
                if action == PostMoveAction.UPGRADE:
                    self.upgrade_property(player.player_id, choice)
                else:
                    self.mortgage_property(player.player_id, choice)
            except InvalidActionError as exc:
                self._record_failure(player.player_id, action.name.lower(), exc)
        elif action == PostMoveAction.END:
            self.end_game(player.player_id)

        return action

    def _record_failure(self, player_id: int, action: str, error: Exception) -> None:
        self.event_log.log(
            EventType.ACTION_FAILED,
            player_id=player_id,
            action=action,
            error_type=type(error).__name__,
            error=str(error),
        )

    def _next_active_index(self) -> Optional[int]:
        """Index of the first active player at or after the cursor."""
        count = len(self.turn_order)
        for offset in range(count):
            index = (self.current_player_index + offset) % count
            if not self.players[self.turn_order[index]].is_bankrupt:
                return index
        return None

    def play(self, max_turns: Optional[int] = None) -> List[TurnOutcome]:
        """
        Run turns round-robin until the turn limit, the end request, or no
        active players remain.

        Args:
            max_turns: Turn limit for this call (default: config.turn_limit)

        Returns:
            Outcomes of every turn played
        """
        limit = max_turns if max_turns is not None else self.config.turn_limit
        outcomes: List[TurnOutcome] = []
        reason = "turn_limit"

        while not self.game_over:
            if self.end_requested:
                reason = "end_requested"
                break
            if len(outcomes) >= limit:
                reason = "turn_limit"
                break
            index = self._next_active_index()
            if index is None:
                reason = "no_players"
                break

            self.current_player_index = index
            outcomes.append(self.run_turn(self.turn_order[index]))
            self.current_player_index = (index + 1) % len(self.turn_order)

        if not self.game_over:
            self.finish(reason)
        return outcomes

    def finish(self, reason: str) -> None:
        """Mark the game over and pick the richest active player as winner."""
        active = self.get_active_players()
        self.game_over = True
        self.winner = max(active, key=lambda p: p.cash).player_id if active else None
        self.event_log.log(
            EventType.GAME_END,
            player_id=self.winner,
            reason=reason,
            statistics=self.stats.as_dict(),
        )

    def rankings(self) -> List[PlayerState]:
        """Active players sorted by cash, richest first."""
        return sorted(self.get_active_players(), key=lambda p: p.cash, reverse=True)


def create_game(
    config: GameConfig,
    players: List[Player],
    agents: Optional[Dict[int, Agent]] = None,
    input_provider: Optional[InputProvider] = None,
    dice: Optional[Callable[[], int]] = None,
) -> GameState:
    """
    Create a new game with the specified configuration and players.

    When config.enable_logging is set, a JSONL audit trail is attached.

    Args:
        config: Game configuration
        players: Players in turn order
        agents: Optional decision providers keyed by player id
        input_provider: Source of human decisions (and die rolls, unless dice is given)
        dice: Optional die source returning 1..6

    Returns:
        Initialized GameState
    """
    if len(players) < 1:
        raise ValueError("Game requires at least 1 player")

    game = GameState(config, players, agents=agents, input_provider=input_provider, dice=dice)
    if config.enable_logging:
        GameLogger(config.log_file).attach(game)
    return game
