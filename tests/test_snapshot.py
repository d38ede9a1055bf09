import json

import pytest
from pydantic import ValidationError

from tycoon import GameConfig, Player, create_game
from tycoon.exceptions import LedgerInconsistencyError
from tycoon.io import ScriptedInputProvider
from tycoon.snapshot import load_game, restore_snapshot, save_game, serialize_snapshot


def test_basic_snapshot_structure(basic_game):
    basic_game.ledger.record_purchase("Boardwalk", 1)
    basic_game.players[1].upgrades["Boardwalk"] = 2

    snap = serialize_snapshot(basic_game)

    # Core keys exist
    assert set(snap.keys()) == {"turn_number", "current_player_id", "end_requested", "players", "statistics"}
    assert snap["current_player_id"] == 0
    assert len(snap["players"]) == 2

    p1 = next(p for p in snap["players"] if p["player_id"] == 1)
    assert set(["player_id", "name", "cash", "position", "is_ai", "is_bankrupt", "properties"]).issubset(p1.keys())
    assert p1["properties"] == [{"name": "Boardwalk", "upgrades": 2}]

    # JSON-serializable
    json.dumps(snap)


def test_restore_reproduces_state(game_config, two_players):
    scripted = ScriptedInputProvider(rolls=[1, 3], answers=[True, True])
    game = create_game(game_config, two_players, input_provider=scripted)
    game.play(max_turns=2)
    game.players[0].upgrades["Mediterranean Avenue"] = 3
    game.players[1].is_bankrupt = True

    restored = restore_snapshot(serialize_snapshot(game), game_config, input_provider=ScriptedInputProvider())

    assert serialize_snapshot(restored) == serialize_snapshot(game)
    assert restored.ledger.owner_of("Mediterranean Avenue") == 0
    assert restored.ledger.owner_of("Baltic Avenue") == 1
    assert restored.calculate_rent("Mediterranean Avenue") == 350
    assert restored.turn_number == 2
    restored.ledger.check_consistency()


def test_restore_rejects_double_claim(game_config):
    data = {
        "players": [
            {"player_id": 0, "name": "A", "cash": 100, "position": 0, "is_ai": True,
             "properties": [{"name": "Boardwalk", "upgrades": 0}]},
            {"player_id": 1, "name": "B", "cash": 100, "position": 0, "is_ai": True,
             "properties": [{"name": "Boardwalk", "upgrades": 1}]},
        ]
    }
    with pytest.raises(LedgerInconsistencyError):
        restore_snapshot(data, game_config)


def test_restore_rejects_unknown_property(game_config):
    data = {"players": [{"player_id": 0, "name": "A", "cash": 100, "position": 0, "is_ai": True,
                         "properties": [{"name": "Nowhere Lane"}]}]}
    with pytest.raises(LedgerInconsistencyError):
        restore_snapshot(data, game_config)


def test_restore_rejects_malformed_snapshot(game_config):
    data = {"players": [{"player_id": 0, "name": "A", "cash": 100, "position": 40}]}
    with pytest.raises(ValidationError):
        restore_snapshot(data, game_config)


def test_save_and_load_file(tmp_path, game_config):
    players = [Player(0, "A", is_ai=True), Player(1, "B", is_ai=True)]
    game = create_game(GameConfig(seed=9, enable_logging=False), players)
    game.play(max_turns=10)
    path = tmp_path / "save.json"

    save_game(game, str(path))
    loaded = load_game(str(path), game_config)

    assert loaded is not None
    assert serialize_snapshot(loaded) == serialize_snapshot(game)


def test_load_missing_file_returns_none(tmp_path, game_config):
    assert load_game(str(tmp_path / "missing.json"), game_config) is None


def test_load_malformed_file_raises(tmp_path, game_config):
    path = tmp_path / "broken.json"
    path.write_text('{"players": "nope"}')

    with pytest.raises(ValidationError):
        load_game(str(path), game_config)


def test_game_saved_after_end_request_resumes(tmp_path, game_config, two_players):
    """Ending a session does not end the saved game: loading it keeps playing."""
    game = create_game(game_config, two_players, input_provider=ScriptedInputProvider(actions=["e"]),
                       dice=lambda: 2)
    assert len(game.play(max_turns=10)) == 1
    path = tmp_path / "save.json"
    save_game(game, str(path))
    assert json.loads(path.read_text())["end_requested"] is True

    loaded = load_game(str(path), game_config, input_provider=ScriptedInputProvider(), dice=lambda: 2)

    assert not loaded.end_requested
    outcomes = loaded.play(max_turns=3)
    assert [o.player_id for o in outcomes] == [1, 0, 1]
    assert loaded.turn_number == 4
