"""
Tests for property auctions.
"""

import random

import pytest

from tycoon import GameConfig, Player, create_game
from tycoon.agents import AIAgent, Agent, HumanAgent
from tycoon.auction import Auction
from tycoon.exceptions import OutOfRangeInputError
from tycoon.io import ScriptedInputProvider
from tycoon.money import EventLog, EventType
from tycoon.player import PlayerState


class FixedBidAgent(Agent):
    """Bids a fixed amount (or passes with None) and counts how often it is asked."""

    def __init__(self, player_id, name, bid=None):
        super().__init__(player_id, name)
        self.bid = bid
        self.calls = 0

    def wants_to_buy(self, game, player, property_name, price):
        return False

    def choose_bid(self, game, player, auction):
        self.calls += 1
        return self.bid


def test_auction_creation():
    """Auction opens at the fixed starting bid with no bidder."""
    event_log = EventLog()
    auction = Auction("Mediterranean Avenue", [0, 1, 2], event_log)

    assert auction.current_bid == 10
    assert auction.high_bidder is None
    assert not auction.is_complete
    assert event_log.events[-1].event_type == EventType.AUCTION_START


def test_bid_bounds():
    """A bid must be at least the current bid and at most the bidder's cash."""
    auction = Auction("Mediterranean Avenue", [0, 1], EventLog())
    alice = PlayerState(0, "Alice", 100)
    bob = PlayerState(1, "Bob", 30)

    auction.place_bid(alice, 10)
    assert auction.current_bid == 10
    assert auction.high_bidder == 0

    # Equal to the current bid is accepted
    auction.place_bid(bob, 10)
    assert auction.high_bidder == 1

    with pytest.raises(OutOfRangeInputError):
        auction.place_bid(alice, 9)
    with pytest.raises(OutOfRangeInputError):
        auction.place_bid(bob, 31)
    assert auction.current_bid == 10
    assert auction.high_bidder == 1


def test_ineligible_bidder_rejected():
    auction = Auction("Mediterranean Avenue", [0], EventLog())
    with pytest.raises(OutOfRangeInputError):
        auction.place_bid(PlayerState(5, "Mallory", 1000), 50)


def test_single_pass_polls_each_player_once(basic_game):
    """Every active player is asked exactly once, whatever happens."""
    game = basic_game
    agents = [FixedBidAgent(0, "Alice", bid=20), FixedBidAgent(1, "Bob", bid=30)]
    auction = game.start_auction("Baltic Avenue")

    winner = auction.run(game, [(game.players[0], agents[0]), (game.players[1], agents[1])])

    assert winner == 1
    assert auction.is_complete
    assert auction.bidders_polled == 2
    assert [a.calls for a in agents] == [1, 1]
    # No counter-bidding after the pass: Alice never gets a second chance
    assert auction.get_winning_bid() == 30


def test_eliminated_players_do_not_bid(basic_game):
    game = basic_game
    game.players[1].is_bankrupt = True
    agents = [FixedBidAgent(0, "Alice", bid=None), FixedBidAgent(1, "Bob", bid=500)]
    auction = Auction("Baltic Avenue", [0, 1], game.event_log)

    winner = auction.run(game, [(game.players[0], agents[0]), (game.players[1], agents[1])])

    assert winner is None
    assert agents[1].calls == 0
    assert auction.bidders_polled == 1


def test_no_bids_leaves_property_unowned(game_config):
    """Nobody bids: property stays unowned and nobody pays."""
    scripted = ScriptedInputProvider(bids=[0, 0])
    game = create_game(game_config, [Player(0, "Alice"), Player(1, "Bob")], input_provider=scripted)

    auction = game.run_auction("Baltic Avenue")

    assert auction.get_winner() is None
    assert not game.ledger.is_owned("Baltic Avenue")
    assert game.players[0].cash == 1500
    assert game.players[1].cash == 1500


def test_auction_result_transfer(game_config):
    """Winner pays the bid, not the property cost, and becomes the owner."""
    scripted = ScriptedInputProvider(bids=[25, 40])
    game = create_game(game_config, [Player(0, "Alice"), Player(1, "Bob")], input_provider=scripted)

    auction = game.run_auction("Baltic Avenue")

    assert auction.get_winner() == 1
    assert game.ledger.owner_of("Baltic Avenue") == 1
    assert "Baltic Avenue" in game.players[1].properties
    assert game.players[1].upgrades["Baltic Avenue"] == 0
    assert game.players[1].cash == 1500 - 40
    assert game.players[0].cash == 1500
    assert game.stats.total_properties_bought == 1


def test_human_out_of_range_bid_is_a_pass(game_config):
    """Too-low and too-high bids degrade to passes instead of errors."""
    scripted = ScriptedInputProvider(bids=[5, 99999])
    game = create_game(game_config, [Player(0, "Alice"), Player(1, "Bob")], input_provider=scripted)

    auction = game.run_auction("Baltic Avenue")

    assert auction.get_winner() is None
    passes = game.event_log.of_type(EventType.AUCTION_PASS)
    assert len(passes) == 2
    assert not game.ledger.is_owned("Baltic Avenue")


def test_malformed_human_bid_is_a_pass(game_config):
    scripted = ScriptedInputProvider(bids=["lots", 12])
    game = create_game(game_config, [Player(0, "Alice"), Player(1, "Bob")], input_provider=scripted)

    auction = game.run_auction("Baltic Avenue")

    assert auction.get_winner() == 1
    assert auction.get_winning_bid() == 12


def test_ai_always_bidding_raises_by_increment(ai_players):
    """With probability 1, each AI raises the bid by 5 in turn order."""
    config = GameConfig(seed=1, enable_random_events=False, enable_logging=False, ai_bid_probability=1.0)
    game = create_game(config, ai_players)

    auction = game.run_auction("Park Place")

    assert auction.get_winning_bid() == 10 + 4 * 5
    assert auction.get_winner() == 3
    assert game.players[3].cash == 1500 - 30


def test_ai_never_bidding(ai_players):
    config = GameConfig(seed=1, enable_random_events=False, enable_logging=False, ai_bid_probability=0.0)
    game = create_game(config, ai_players)

    auction = game.run_auction("Park Place")

    assert auction.get_winner() is None
    assert not game.ledger.is_owned("Park Place")


def test_ai_does_not_bid_beyond_cash():
    """An AI only raises when it can pay the raised amount."""
    config = GameConfig(ai_bid_probability=1.0, enable_logging=False)
    game = create_game(config, [Player(0, "Alice", is_ai=True)])
    player = game.players[0]
    agent = AIAgent(0, "Alice", rng=random.Random(0))
    auction = Auction("Park Place", [0], game.event_log)

    player.cash = 14
    assert agent.choose_bid(game, player, auction) is None

    player.cash = 15
    assert agent.choose_bid(game, player, auction) == 15


def test_mixed_human_and_ai_bidding():
    """A human can outbid an AI that bid earlier in the same pass."""
    config = GameConfig(enable_random_events=False, enable_logging=False, ai_bid_probability=1.0)
    scripted = ScriptedInputProvider(bids=[50])
    players = [Player(0, "Alice", is_ai=True), Player(1, "Bob")]
    game = create_game(config, players, input_provider=scripted)

    auction = game.run_auction("Boardwalk")

    assert auction.get_winner() == 1
    assert auction.get_winning_bid() == 50
    assert game.players[0].cash == 1500
    assert game.players[1].cash == 1450
    assert isinstance(game.agents[1], HumanAgent)
