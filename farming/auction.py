"""
Bankruptcy resolution: bank loan first, then an asset auction.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from farming.money import EventType
from farming.player import AssetType

if TYPE_CHECKING:
    from farming.game import GameState

logger = logging.getLogger(__name__)


@dataclass
class AuctionLot:
    """Result of auctioning one asset kind."""

    asset: AssetType
    quantity: int
    valuation: int
    winner_id: Optional[int] = None
    winning_bid: int = 0


class BankruptcyAuction:
    """
    Liquidates a player whose cash has gone negative.

    The bank first offers a loan of half the player's cost basis. If no
    loan is taken, each asset kind is offered, most expensive first, to
    every other player in turn. Each bidder gets one sealed bid; the
    highest valid bid takes the whole quantity at that price. Assets that
    draw no bid stay with the bankrupt player. Sale proceeds go to the
    bank, not to the bankrupt player.
    """

    def __init__(self, game: "GameState"):
        self.game = game
        self.event_log = game.event_log

    def loan_offer(self, player_id: int) -> int:
        """Half the cost basis, capped by remaining credit."""
        player = self.game.get_player(player_id)
        offer = player.cost_basis // 2
        return min(offer, self.game.loans.borrowing_capacity(player))

    def attempt_bank_loan(self, player_id: int) -> bool:
        """
        Offer the bankruptcy loan.

        Returns True if the player took it.
        """
        player = self.game.get_player(player_id)
        offer = self.loan_offer(player_id)
        if offer <= 0:
            self.event_log.log(EventType.BANK_LOAN, player_id, offered=0, accepted=False)
            return False

        agent = self.game.agent_for(player_id)
        accepted = agent is not None and agent.accept_bank_loan(self.game, offer)
        self.event_log.log(EventType.BANK_LOAN, player_id, offered=offer, accepted=accepted)
        if not accepted:
            return False

        player.cash += offer
        player.debt += offer
        logger.info("Player %s took bankruptcy loan of %s (debt %s)", player_id, offer, player.debt)
        return True

    def run_auction(self, player_id: int) -> List[AuctionLot]:
        """Auction every asset kind the bankrupt player holds."""
        bankrupt = self.game.get_player(player_id)
        holdings = sorted(
            bankrupt.assets.items(), key=lambda item: item[1].total_cost, reverse=True
        )
        lots = []
        for asset, record in holdings:
            lot = AuctionLot(asset, record.quantity, record.total_cost)
            self.event_log.log(
                EventType.AUCTION_START,
                player_id,
                asset=asset.value,
                quantity=record.quantity,
                valuation=record.total_cost,
            )
            self._collect_bids(player_id, lot)

            if lot.winner_id is None:
                self.event_log.log(
                    EventType.AUCTION_END, player_id, asset=asset.value, winner=None, bid=0
                )
            else:
                winner = self.game.get_player(lot.winner_id)
                winner.cash -= lot.winning_bid
                winner.add_asset(asset, lot.quantity, lot.winning_bid)
                bankrupt.remove_asset(asset)
                logger.info(
                    "Player %s won %s %s from player %s for %s",
                    lot.winner_id,
                    lot.quantity,
                    asset.value,
                    player_id,
                    lot.winning_bid,
                )
                self.event_log.log(
                    EventType.AUCTION_END,
                    player_id,
                    asset=asset.value,
                    quantity=lot.quantity,
                    winner=lot.winner_id,
                    bid=lot.winning_bid,
                )
            lots.append(lot)
        return lots

    def _collect_bids(self, player_id: int, lot: AuctionLot) -> None:
        for other_id, other in self.game.players.items():
            if other_id == player_id or other.cash <= lot.winning_bid:
                continue
            if lot.asset == AssetType.COWS and (
                other.quantity(AssetType.COWS) + lot.quantity > self.game.config.max_cows
            ):
                continue
            agent = self.game.agent_for(other_id)
            if agent is None:
                continue
            bid = agent.bid(self.game, lot.asset, lot.quantity, lot.winning_bid)
            if bid is None or bid <= lot.winning_bid or bid > other.cash:
                continue
            lot.winner_id = other_id
            lot.winning_bid = bid
            self.event_log.log(EventType.AUCTION_BID, other_id, asset=lot.asset.value, bid=bid)

    def check_and_resolve(self, player_id: int) -> bool:
        """
        Run bankruptcy handling if the player's cash is negative.

        Returns True if anything was triggered.
        """
        player = self.game.get_player(player_id)
        if player.cash >= 0:
            return False
        self.event_log.log(EventType.BANKRUPTCY, player_id, cash=player.cash, debt=player.debt)
        logger.info("Player %s is bankrupt with cash %s", player_id, player.cash)
        if self.attempt_bank_loan(player_id):
            return True
        self.run_auction(player_id)
        return True
