"""
Central application configuration using pydantic-settings.

Environment variables (prefix: TYCOON_) override the game rules used by the
CLI driver, for example:
    TYCOON_STARTING_MONEY      - initial balance (default: 1500)
    TYCOON_PROPERTY_COST       - flat purchase price (default: 100)
    TYCOON_BASE_RENT           - unimproved rent (default: 50)
    TYCOON_RENT_MULTIPLIER     - per-improvement rent factor (default: 2)
    TYCOON_ENABLE_RANDOM_EVENTS- toggle random events (default: true)
    TYCOON_ENABLE_LOGGING      - toggle the JSONL audit trail (default: true)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tycoon.config import GameConfig


class EngineSettings(BaseSettings):
    """Game rule configuration loaded from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="TYCOON_",
    )

    starting_money: int = Field(default=1500, description="Initial balance for every player.")
    property_cost: int = Field(default=100, ge=0, description="Flat purchase price of a property.")
    base_rent: int = Field(default=50, ge=0, description="Rent of an unimproved property.")
    rent_multiplier: int = Field(default=2, ge=0, description="Rent increment factor per improvement.")
    upgrade_cost: int = Field(default=50, ge=0)
    mortgage_fraction: float = Field(default=0.5, ge=0.0, le=1.0)

    auction_start_bid: int = Field(default=10, ge=0)
    auction_increment: int = Field(default=5, ge=0)
    ai_bid_probability: float = Field(default=0.5, ge=0.0, le=1.0)

    enable_random_events: bool = Field(default=True)
    enable_logging: bool = Field(default=True)
    log_file: str = Field(default="game_log.jsonl")

    turn_limit: int = Field(default=50, gt=0)
    seed: Optional[int] = Field(default=None)

    save_file: str = Field(default="savegame.json", description="Path used by --save/--load.")
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept lowercase level names."""
        return value.upper()

    def to_game_config(self) -> GameConfig:
        """Build the engine's GameConfig from these settings."""
        return GameConfig(
            starting_money=self.starting_money,
            property_cost=self.property_cost,
            base_rent=self.base_rent,
            rent_multiplier=self.rent_multiplier,
            upgrade_cost=self.upgrade_cost,
            mortgage_fraction=self.mortgage_fraction,
            auction_start_bid=self.auction_start_bid,
            auction_increment=self.auction_increment,
            ai_bid_probability=self.ai_bid_probability,
            enable_random_events=self.enable_random_events,
            enable_logging=self.enable_logging,
            log_file=self.log_file,
            turn_limit=self.turn_limit,
            seed=self.seed,
        )


@lru_cache
def get_settings() -> EngineSettings:
    """Return cached engine settings instance."""
    return EngineSettings()
