"""
Property ownership ledger.

The ledger maps each property name to its owner id. Improvement counts live
on the owner's account, so every rent lookup goes through the current owner.
"""

from typing import Dict, Optional

from tycoon.config import GameConfig
from tycoon.exceptions import (
    AlreadyOwnedError,
    InsufficientFundsError,
    InvalidOwnershipError,
    LedgerInconsistencyError,
)
from tycoon.player import PlayerState


class Ledger:
    """Authoritative property -> owner mapping."""

    def __init__(self, config: GameConfig, players: Dict[int, PlayerState]):
        self.config = config
        self.players = players
        self.owners: Dict[str, int] = {}

    def is_owned(self, property_name: str) -> bool:
        """Check if property is owned by any player."""
        return property_name in self.owners

    def owner_of(self, property_name: str) -> Optional[int]:
        return self.owners.get(property_name)

    def record_purchase(self, property_name: str, player_id: int) -> None:
        """
        Assign an unowned property to a player.
        The caller debits the purchase price.
        """
        owner_id = self.owners.get(property_name)
        if owner_id is not None:
            raise AlreadyOwnedError(property_name, owner_id)

        player = self.players[player_id]
        self.owners[property_name] = player_id
        player.properties.add(property_name)
        player.upgrades[property_name] = 0

    def record_auction_win(self, property_name: str, player_id: int, price: int) -> None:
        """Same ownership effect as a purchase; the caller debits ``price``."""
        self.record_purchase(property_name, player_id)

    def improvement_count(self, property_name: str) -> int:
        """Improvement level on a property, read from its current owner."""
        owner_id = self.owners.get(property_name)
        if owner_id is None:
            return 0
        return self.players[owner_id].upgrades.get(property_name, 0)

    def upgrade(self, property_name: str, player_id: int) -> int:
        """
        Buy one improvement level for a property.

        Returns:
            The new improvement count

        Raises:
            InvalidOwnershipError: player does not own the property
            InsufficientFundsError: player cannot pay the upgrade cost
        """
        player = self.players[player_id]
        if self.owners.get(property_name) != player_id:
            raise InvalidOwnershipError(property_name, player_id)

        cost = self.config.upgrade_cost
        if player.cash < cost:
            raise InsufficientFundsError(player_id, cost, player.cash)

        player.cash -= cost
        player.upgrades[property_name] = player.upgrades.get(property_name, 0) + 1
        return player.upgrades[property_name]

    def mortgage(self, property_name: str, player_id: int) -> int:
        """
        Mortgage a property for a fixed refund.

        Ownership, improvement count and rent collection are unchanged.

        Returns:
            Cash credited to the player
        """
        player = self.players[player_id]
        if self.owners.get(property_name) != player_id:
            raise InvalidOwnershipError(property_name, player_id)

        refund = self.config.mortgage_value
        player.cash += refund
        return refund

    def check_consistency(self) -> None:
        """Raise if the owner map and any player's owned-set disagree."""
        for name, owner_id in self.owners.items():
            if name not in self.players[owner_id].properties:
                raise LedgerInconsistencyError(
                    f"{name} is mapped to player {owner_id} but missing from their properties"
                )
        for player_id, player in self.players.items():
            for name in player.properties:
                if self.owners.get(name) != player_id:
                    raise LedgerInconsistencyError(
                        f"Player {player_id} holds {name} but the ledger says {self.owners.get(name)}"
                    )
