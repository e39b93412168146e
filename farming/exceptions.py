"""
Custom exception hierarchy for the farming engine.

Provides typed errors that callers can handle consistently. Every
operation that raises one of these leaves the game state unchanged.
"""


class FarmingError(Exception):
    """Base exception for all game-related errors."""


class PlayerNotFoundError(FarmingError, LookupError):
    """Player does not exist."""


class TileNotFoundError(FarmingError, LookupError):
    """Board position is out of range."""


class RidgeNotFoundError(FarmingError, LookupError):
    """Ridge does not exist."""


class CardNotFoundError(FarmingError, LookupError):
    """Card is not in the player's hand."""


class DeckExhaustedError(FarmingError):
    """Both the draw pile and the discard pile are empty."""


class InsolvencyError(FarmingError):
    """A loan would push the player's debt over the ceiling."""


class InvalidOperationError(FarmingError):
    """Operation is not legal in the current state."""
