"""
Farming Game Engine

A deterministic, seedable implementation of the farm-year board game:
harvests, forced loans, Options to Buy, ridge leases and bankruptcy.
"""

from .board import Board
from .config import GameConfig
from .exceptions import (
    CardNotFoundError,
    DeckExhaustedError,
    FarmingError,
    InsolvencyError,
    InvalidOperationError,
    PlayerNotFoundError,
    RidgeNotFoundError,
    TileNotFoundError,
)
from .game import GameState, create_game, native_players, new_game
from .player import AssetType, Player, PlayerState, PlayerType

__all__ = [
    "Board",
    "GameConfig",
    "GameState",
    "create_game",
    "new_game",
    "native_players",
    "Player",
    "PlayerState",
    "PlayerType",
    "AssetType",
    "FarmingError",
    "PlayerNotFoundError",
    "TileNotFoundError",
    "RidgeNotFoundError",
    "CardNotFoundError",
    "DeckExhaustedError",
    "InsolvencyError",
    "InvalidOperationError",
]
