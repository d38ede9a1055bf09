"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Configuration for a Tycoon game."""

    starting_money: int = 1500
    property_cost: int = 100
    base_rent: int = 50
    rent_multiplier: int = 2

    upgrade_cost: int = 50
    mortgage_fraction: float = 0.5

    auction_start_bid: int = 10
    auction_increment: int = 5
    ai_bid_probability: float = 0.5

    enable_random_events: bool = True
    random_event_gain: int = 50
    random_event_fine: int = 20

    enable_logging: bool = True
    log_file: str = "game_log.jsonl"

    turn_limit: int = 50

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        for name in (
            "property_cost",
            "base_rent",
            "rent_multiplier",
            "upgrade_cost",
            "auction_start_bid",
            "auction_increment",
            "random_event_gain",
            "random_event_fine",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if not 0.0 <= self.ai_bid_probability <= 1.0:
            raise ValueError("ai_bid_probability must be between 0 and 1")
        if not 0.0 <= self.mortgage_fraction <= 1.0:
            raise ValueError("mortgage_fraction must be between 0 and 1")
        if not isinstance(self.turn_limit, int) or self.turn_limit <= 0:
            raise ValueError(f"turn_limit must be a positive integer, got {self.turn_limit}")

    @property
    def mortgage_value(self) -> int:
        """Cash credited for mortgaging any property."""
        return int(self.property_cost * self.mortgage_fraction)


@dataclass(frozen=True)
class PropertyData:
    """Data for a property space."""

    name: str
    position: int
    rent_base: int
    rent_multiplier: int
