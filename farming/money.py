"""
Money management and event logging.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from farming.config import GameConfig
from farming.exceptions import InsolvencyError, InvalidOperationError

if TYPE_CHECKING:
    from farming.player import PlayerState

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    SETUP_DEAL = "setup_deal"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    MOVE = "move"
    PASS_START = "pass_start"
    SIDE_JOB_PAY = "side_job_pay"
    YEAR_ADVANCE = "year_advance"
    LAND = "land"
    TURN_END = "turn_end"

    CARD_DRAW = "card_draw"
    CARD_TO_HAND = "card_to_hand"
    CARD_EFFECT = "card_effect"

    INCOME = "income"
    EXPENSE = "expense"
    INTEREST = "interest"
    FORCED_LOAN = "forced_loan"
    OPTION_LOAN = "option_loan"
    DEBT_PAYMENT = "debt_payment"
    DEBT_ADJUSTED = "debt_adjusted"
    LAND_ADJUSTED = "land_adjusted"

    HARVEST = "harvest"
    HARVEST_SKIPPED = "harvest_skipped"
    OPERATING_EXPENSE = "operating_expense"

    PURCHASE = "purchase"
    OPTION_EXERCISED = "option_exercised"
    OPTION_DECLINED = "option_declined"
    RIDGE_LEASED = "ridge_leased"
    ASSET_LOST = "asset_lost"

    MULTIPLIER_SET = "multiplier_set"
    PERSISTENT_EFFECT_ADDED = "persistent_effect_added"
    SKIP_YEAR = "skip_year"
    DISASTER_ROLL = "disaster_roll"
    COLLECTION = "collection"
    NOTICE = "notice"
    NO_EFFECT = "no_effect"
    EFFECT_FAILED = "effect_failed"

    BANKRUPTCY = "bankruptcy"
    BANK_LOAN = "bank_loan"
    AUCTION_START = "auction_start"
    AUCTION_BID = "auction_bid"
    AUCTION_END = "auction_end"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the game event log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def __len__(self) -> int:
        return len(self.events)

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        """Log a game event."""
        event = GameEvent(event_type, player_id, details)
        self.events.append(event)

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        return self.events[-count:]

    def events_since(self, index: int) -> List[GameEvent]:
        """Get every event appended at or after ``index``."""
        return self.events[index:]

    def clear(self) -> None:
        """Clear the event log."""
        self.events.clear()


def round_amount(value: float) -> int:
    """Round a dollar amount to the nearest integer, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


class LoanResolver:
    """
    The bank side of every payment.

    Expenses that a player cannot cover from cash are financed with a
    forced loan: the shortfall is rounded up to the next loan increment,
    the bank keeps an origination fee, and the full loan is booked as
    debt. No loan may take a player past the debt ceiling.
    """

    def __init__(self, config: GameConfig, event_log: EventLog):
        self.config = config
        self.event_log = event_log

    def interest_due(self, player: "PlayerState") -> int:
        """Interest on current bank notes, never negative."""
        return max(0, round_amount(player.debt * self.config.interest_rate))

    def borrowing_capacity(self, player: "PlayerState") -> int:
        """How much more the player may borrow before hitting the ceiling."""
        return max(0, self.config.debt_ceiling - player.debt)

    def plan_forced_loan(self, player: "PlayerState", required: int) -> Tuple[int, int]:
        """
        Compute the (loan, fee) needed for the player to pay ``required``.

        Returns (0, 0) when cash covers the payment.
        """
        if player.cash >= required:
            return 0, 0
        shortfall = required - player.cash
        increment = self.config.loan_increment
        loan = int(math.ceil(shortfall / increment)) * increment
        fee = round_amount(loan * self.config.loan_fee_rate)
        return loan, fee

    def can_cover(self, player: "PlayerState", required: int) -> bool:
        """Check whether a payment can be made, borrowing if needed."""
        loan, _ = self.plan_forced_loan(player, required)
        return player.debt + loan <= self.config.debt_ceiling

    def handle_forced_loan(self, player: "PlayerState", required: int, reason: str = "") -> int:
        """
        Charge ``required`` to the player, borrowing if cash is short.

        Returns the loan taken (0 if paid from cash).
        Raises InsolvencyError, without touching the player, if the loan
        would exceed the debt ceiling.
        """
        if required <= 0:
            return 0

        loan, fee = self.plan_forced_loan(player, required)
        if loan == 0:
            player.cash -= required
            self.event_log.log(
                EventType.EXPENSE, player.player_id, amount=required, reason=reason, cash=player.cash
            )
            return 0

        if player.debt + loan > self.config.debt_ceiling:
            logger.info(
                "Player %s cannot borrow %s for %s (debt %s, ceiling %s)",
                player.player_id,
                loan,
                reason or "payment",
                player.debt,
                self.config.debt_ceiling,
            )
            raise InsolvencyError(
                f"{player.name} needs a ${loan} loan to pay ${required} but debt "
                f"${player.debt} would exceed the ${self.config.debt_ceiling} ceiling"
            )

        player.cash += loan - fee - required
        player.debt += loan
        logger.info("Player %s forced loan %s (fee %s) for %s", player.player_id, loan, fee, reason)
        self.event_log.log(
            EventType.FORCED_LOAN,
            player.player_id,
            amount=required,
            reason=reason,
            loan=loan,
            fee=fee,
            cash=player.cash,
            debt=player.debt,
        )
        return loan

    def charge_interest(self, player: "PlayerState") -> int:
        """Charge 10% of current debt through the forced-loan path."""
        interest = self.interest_due(player)
        if interest == 0:
            self.event_log.log(EventType.INTEREST, player.player_id, amount=0, debt=player.debt)
            return 0
        self.event_log.log(EventType.INTEREST, player.player_id, amount=interest, debt=player.debt)
        self.handle_forced_loan(player, interest, reason="interest")
        return interest

    def borrow(self, player: "PlayerState", amount: int, reason: str = "") -> None:
        """
        Lend exactly ``amount`` with no origination fee.

        Used for voluntary borrowing such as financing an Option to Buy.
        """
        if amount <= 0:
            return
        if amount > self.borrowing_capacity(player):
            raise InsolvencyError(
                f"{player.name} cannot borrow ${amount}; only "
                f"${self.borrowing_capacity(player)} of credit remains"
            )
        player.cash += amount
        player.debt += amount
        self.event_log.log(
            EventType.OPTION_LOAN, player.player_id, amount=amount, reason=reason, debt=player.debt
        )

    def repay(self, player: "PlayerState", amount: int) -> None:
        """Pay down bank notes from cash."""
        if amount <= 0:
            raise InvalidOperationError("Payment amount must be positive")
        if player.debt <= 0:
            raise InvalidOperationError(f"{player.name} has no debt to pay")
        if player.cash < amount:
            raise InvalidOperationError(
                f"{player.name} has ${player.cash}, not enough to pay ${amount}"
            )
        if amount > player.debt:
            raise InvalidOperationError(
                f"Payment ${amount} exceeds outstanding debt ${player.debt}"
            )
        player.cash -= amount
        player.debt -= amount
        self.event_log.log(
            EventType.DEBT_PAYMENT, player.player_id, amount=amount, cash=player.cash, debt=player.debt
        )
