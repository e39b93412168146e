"""Base class for all farming decision sources."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from farming.cards import Card
    from farming.game import GameState
    from farming.player import AssetType


class Agent(ABC):
    """
    Abstract source of player decisions.

    The engine never reads input itself. Whenever a rule needs a choice
    (accepting a bank loan, bidding at a bankruptcy auction, exercising an
    Option to Buy) it asks the agent registered for that player.

    Attributes:
        player_id: The player's id in the game.
        name: The player's display name.
    """

    def __init__(self, player_id: int, name: str):
        self.player_id = player_id
        self.name = name

    @abstractmethod
    def accept_bank_loan(self, game: "GameState", amount: int) -> bool:
        """
        Decide whether to take the bank's bankruptcy loan.

        Args:
            game: The current game state.
            amount: The loan on offer.

        Returns:
            True to take the loan.
        """

    @abstractmethod
    def bid(
        self, game: "GameState", asset: "AssetType", quantity: int, highest_bid: int
    ) -> Optional[int]:
        """
        Bid on an asset at a bankruptcy auction.

        Returns:
            The bid amount, or None to pass.
        """

    @abstractmethod
    def choose_option(self, game: "GameState", cards: List["Card"]) -> Optional["Card"]:
        """Pick an Option to Buy card to exercise this turn, or None."""

    @abstractmethod
    def confirm_option_loan(self, game: "GameState", card: "Card", shortfall: int) -> bool:
        """Decide whether to borrow ``shortfall`` to exercise ``card``."""
