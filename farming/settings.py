"""
Simulation configuration using pydantic-settings.

This module provides typed, environment-based configuration for headless
simulation runs. Game rules themselves live in `farming.config.GameConfig`.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from farming.config import NATIVE_ROSTER, GameConfig


class SimulationSettings(BaseSettings):
    """
    Configuration for simulated games.

    Environment variables (prefix: FARMING_):
        FARMING_SEED        - RNG seed; unset means a fresh seed each run
        FARMING_NUM_GAMES   - Games to play per run (default: 1)
        FARMING_MAX_TURNS   - Turn cap per game (default: 2000)
        FARMING_NUM_PLAYERS - Native farmers seated (default: 4)
        FARMING_LOG_LEVEL   - Logging level name (default: WARNING)
        FARMING_LOG_FILE    - Optional JSONL file for mapped events
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="FARMING_",
    )

    seed: Optional[int] = Field(default=None, description="Seed for the game RNG.")
    num_games: int = Field(default=1, gt=0, description="Number of games to simulate.")
    max_turns: int = Field(default=2000, gt=0, description="Turn cap before a game is abandoned.")
    num_players: int = Field(
        default=4,
        ge=1,
        le=len(NATIVE_ROSTER),
        description="How many native farmers to seat.",
    )
    log_level: str = Field(default="WARNING", description="Python logging level name.")
    log_file: Optional[str] = Field(default=None, description="Append mapped events here as JSON lines.")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        """Accept any case and reject unknown level names."""
        if not value:
            return "WARNING"
        name = str(value).upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {value}")
        return name

    def to_game_config(self, game_index: int = 0) -> GameConfig:
        """Game rules for the ``game_index``-th game of a run."""
        seed = None if self.seed is None else self.seed + game_index
        return GameConfig(seed=seed)


@lru_cache
def get_simulation_settings() -> SimulationSettings:
    """Return cached simulation settings instance."""
    return SimulationSettings()
