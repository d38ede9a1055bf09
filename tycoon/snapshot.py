"""
Snapshot serialization of GameState.

Produces a JSON-friendly view of the game covering everything needed to
resume it: player identity, balance, position, AI flag, elimination flag,
owned properties with improvement counts, the turn counter and the end flag.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from tycoon.config import GameConfig
from tycoon.exceptions import LedgerInconsistencyError
from tycoon.game import GameState, create_game
from tycoon.io import InputProvider
from tycoon.player import Player

logger = logging.getLogger(__name__)


class PropertyHolding(BaseModel):
    name: str
    upgrades: int = Field(default=0, ge=0)


class PlayerSnapshot(BaseModel):
    player_id: int
    name: str
    cash: int
    position: int = Field(ge=0, lt=40)
    is_ai: bool = False
    is_bankrupt: bool = False
    properties: List[PropertyHolding] = Field(default_factory=list)


class GameSnapshot(BaseModel):
    turn_number: int = 0
    current_player_id: Optional[int] = None
    end_requested: bool = False
    players: List[PlayerSnapshot]
    statistics: Dict[str, int] = Field(default_factory=dict)


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a stable JSON dict."""
    players: List[PlayerSnapshot] = []
    for pid in game.turn_order:
        pstate = game.players[pid]
        players.append(
            PlayerSnapshot(
                player_id=pid,
                name=pstate.name,
                cash=pstate.cash,
                position=pstate.position,
                is_ai=pstate.is_ai,
                is_bankrupt=pstate.is_bankrupt,
                properties=[
                    PropertyHolding(name=name, upgrades=pstate.upgrades.get(name, 0))
                    for name in sorted(pstate.properties)
                ],
            )
        )

    snapshot = GameSnapshot(
        turn_number=game.turn_number,
        current_player_id=game.get_current_player().player_id,
        end_requested=game.end_requested,
        players=players,
        statistics=game.stats.as_dict(),
    )
    return snapshot.model_dump()


def restore_snapshot(
    data: Dict[str, Any],
    config: GameConfig,
    input_provider: Optional[InputProvider] = None,
    **game_kwargs: Any,
) -> GameState:
    """
    Rebuild a GameState from a snapshot dict.

    The end-game request is recorded in the snapshot but belongs to the
    session that made it; a restored game is always resumable.

    Raises:
        pydantic.ValidationError: the snapshot is malformed
        LedgerInconsistencyError: two players claim the same property, or a
            property is not on the board
    """
    snapshot = GameSnapshot.model_validate(data)
    players = [Player(p.player_id, p.name, is_ai=p.is_ai) for p in snapshot.players]
    game = create_game(config, players, input_provider=input_provider, **game_kwargs)

    for psnap in snapshot.players:
        pstate = game.players[psnap.player_id]
        pstate.cash = psnap.cash
        pstate.position = psnap.position
        pstate.is_bankrupt = psnap.is_bankrupt
        for holding in psnap.properties:
            if not game.board.has_property(holding.name):
                raise LedgerInconsistencyError(f"Unknown property in snapshot: {holding.name}")
            owner_id = game.ledger.owner_of(holding.name)
            if owner_id is not None:
                raise LedgerInconsistencyError(
                    f"{holding.name} claimed by players {owner_id} and {psnap.player_id}"
                )
            game.ledger.record_purchase(holding.name, psnap.player_id)
            pstate.upgrades[holding.name] = holding.upgrades

    stats = snapshot.statistics
    game.stats.total_turns = stats.get("total_turns", snapshot.turn_number)
    game.stats.total_properties_bought = stats.get("total_properties_bought", 0)
    game.stats.total_rents_paid = stats.get("total_rents_paid", 0)
    if snapshot.current_player_id in game.turn_order:
        game.current_player_index = game.turn_order.index(snapshot.current_player_id)

    return game


def save_game(game: GameState, path: str) -> None:
    """Write a snapshot of the game to a JSON save file."""
    snapshot = GameSnapshot.model_validate(serialize_snapshot(game))
    Path(path).write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Game saved to %s", path)


def load_game(
    path: str,
    config: GameConfig,
    input_provider: Optional[InputProvider] = None,
    **game_kwargs: Any,
) -> Optional[GameState]:
    """
    Load a game from a JSON save file.

    Returns:
        The restored game, or None if there is no save file.
    """
    save_path = Path(path)
    if not save_path.exists():
        logger.info("No save file found at %s", path)
        return None

    try:
        snapshot = GameSnapshot.model_validate_json(save_path.read_text(encoding="utf-8"))
    except ValidationError:
        logger.exception("Save file %s is malformed", path)
        raise

    game = restore_snapshot(snapshot.model_dump(), config, input_provider=input_provider, **game_kwargs)
    logger.info("Game loaded from %s", path)
    return game
