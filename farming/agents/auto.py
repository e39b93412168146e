"""Rule-following agent used for computer players."""

from typing import TYPE_CHECKING, List, Optional

from farming.agents.base import Agent
from farming.cards import Card
from farming.player import AssetType

if TYPE_CHECKING:
    from farming.game import GameState


class AutoAgent(Agent):
    """
    Plays the house rules for computer farmers.

    Always takes a bankruptcy loan on offer, bids a fixed share of its
    cash at auctions, and exercises the first Option to Buy it can pay
    for in cash.
    """

    def accept_bank_loan(self, game: "GameState", amount: int) -> bool:
        return amount > 0

    def bid(
        self, game: "GameState", asset: AssetType, quantity: int, highest_bid: int
    ) -> Optional[int]:
        cash = game.players[self.player_id].cash
        amount = int(cash * game.config.auction_bid_fraction)
        if amount <= highest_bid:
            return None
        return amount

    def choose_option(self, game: "GameState", cards: List[Card]) -> Optional[Card]:
        cash = game.players[self.player_id].cash
        for card in cards:
            if game.option_cost(card) <= cash and game.option_is_legal(self.player_id, card):
                return card
        return None

    def confirm_option_loan(self, game: "GameState", card: Card, shortfall: int) -> bool:
        return False
