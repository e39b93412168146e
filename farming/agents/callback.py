"""Agent that forwards decisions to caller-supplied functions."""

from typing import TYPE_CHECKING, Callable, List, Optional

from farming.agents.base import Agent
from farming.cards import Card
from farming.player import AssetType

if TYPE_CHECKING:
    from farming.game import GameState


class CallbackAgent(Agent):
    """
    Bridges a presentation layer to the engine.

    Each decision is delegated to a callable. Missing callables mean
    "decline": no loan, no bid, no option exercised.
    """

    def __init__(
        self,
        player_id: int,
        name: str,
        on_bank_loan: Optional[Callable[[int], bool]] = None,
        on_bid: Optional[Callable[[AssetType, int, int, int], Optional[int]]] = None,
        on_choose_option: Optional[Callable[[List[Card]], Optional[Card]]] = None,
        on_option_loan: Optional[Callable[[Card, int], bool]] = None,
    ):
        super().__init__(player_id, name)
        self.on_bank_loan = on_bank_loan
        self.on_bid = on_bid
        self.on_choose_option = on_choose_option
        self.on_option_loan = on_option_loan

    def accept_bank_loan(self, game: "GameState", amount: int) -> bool:
        if self.on_bank_loan is None:
            return False
        return bool(self.on_bank_loan(amount))

    def bid(
        self, game: "GameState", asset: AssetType, quantity: int, highest_bid: int
    ) -> Optional[int]:
        """Ask for a bid; the callable also receives the bidder's cash."""
        if self.on_bid is None:
            return None
        cash = game.players[self.player_id].cash
        return self.on_bid(asset, quantity, highest_bid, cash)

    def choose_option(self, game: "GameState", cards: List[Card]) -> Optional[Card]:
        if self.on_choose_option is None or not cards:
            return None
        return self.on_choose_option(cards)

    def confirm_option_loan(self, game: "GameState", card: Card, shortfall: int) -> bool:
        if self.on_option_loan is None:
            return False
        return bool(self.on_option_loan(card, shortfall))
