"""
Harvest income and operating expense calculation.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from farming.cards import Card, Deck
from farming.effects import (
    Expense,
    ExpensePerAsset,
    HarvestType,
    PayIfNoAssetDistribute,
    PayInterest,
)
from farming.exceptions import DeckExhaustedError, InvalidOperationError
from farming.money import EventLog, EventType, LoanResolver, round_amount
from farming.player import AssetType, PlayerState

logger = logging.getLogger(__name__)

HARVEST_ASSETS: Dict[HarvestType, AssetType] = {
    HarvestType.CORN: AssetType.GRAIN,
    HarvestType.WHEAT: AssetType.GRAIN,
    HarvestType.APPLE: AssetType.FRUIT,
    HarvestType.CHERRY: AssetType.FRUIT,
    HarvestType.LIVESTOCK: AssetType.COWS,
    HarvestType.HAY_CUTTING_1: AssetType.HAY,
    HarvestType.HAY_CUTTING_2: AssetType.HAY,
    HarvestType.HAY_CUTTING_3: AssetType.HAY,
    HarvestType.HAY_CUTTING_4: AssetType.HAY,
}

HARVEST_NAMES: Dict[HarvestType, str] = {
    HarvestType.HAY_CUTTING_1: "Hay: First Cutting",
    HarvestType.HAY_CUTTING_2: "Hay: Second Cutting",
    HarvestType.HAY_CUTTING_3: "Hay: Third Cutting",
    HarvestType.HAY_CUTTING_4: "Hay: Fourth Cutting",
    HarvestType.WHEAT: "Wheat",
    HarvestType.CORN: "Corn",
    HarvestType.APPLE: "Apple",
    HarvestType.CHERRY: "Cherry",
    HarvestType.LIVESTOCK: "Livestock Sales",
}

UNITS_PER_BLOCK: Dict[AssetType, int] = {
    AssetType.HAY: 10,
    AssetType.GRAIN: 10,
    AssetType.COWS: 10,
    AssetType.FRUIT: 5,
}

# (base, increment) per die face; income = base + increment * (blocks - 1)
YIELD_TABLES: Dict[AssetType, Tuple[Tuple[int, int], ...]] = {
    AssetType.HAY: ((400, 400), (600, 600), (1000, 1000), (1500, 1500), (2200, 2200), (3000, 3000)),
    AssetType.FRUIT: (
        (2000, 2000), (3500, 3500), (6000, 6000), (9000, 9000), (13000, 13000), (17500, 17500),
    ),
    AssetType.GRAIN: ((800, 800), (1500, 1500), (2500, 2500), (3800, 3800), (5300, 5300), (7000, 7000)),
    AssetType.COWS: ((1400, 1400), (2000, 2000), (2800, 2800), (3800, 3800), (5000, 5000), (7500, 7500)),
}


def harvest_name(harvest_type: HarvestType) -> str:
    return HARVEST_NAMES.get(harvest_type, "No Harvest")


def yield_for(asset: AssetType, quantity: int, roll: int) -> int:
    """Gross harvest income for ``quantity`` units on a 0-5 roll."""
    table = YIELD_TABLES.get(asset)
    if table is None:
        raise InvalidOperationError(f"No yield table for {asset.value}")
    blocks = quantity // UNITS_PER_BLOCK[asset]
    if blocks <= 0:
        return 0
    base, increment = table[roll]
    return base + increment * (blocks - 1)


@dataclass
class HarvestResult:
    """Outcome of one harvest."""

    harvest_type: HarvestType
    asset: Optional[AssetType]
    net_income: int = 0
    expense: int = 0
    gross_income: int = 0
    roll: Optional[int] = None
    expense_card: Optional[Card] = None
    skipped: bool = False


class HarvestManager:
    """
    Computes harvest checks against a player's holdings.

    Owns the Operating Expense deck: one card is drawn per harvest that
    actually happens and discarded afterwards.
    """

    def __init__(
        self,
        operating_cost_deck: Deck,
        rng: random.Random,
        loans: LoanResolver,
        event_log: EventLog,
    ):
        self.operating_cost_deck = operating_cost_deck
        self.rng = rng
        self.loans = loans
        self.event_log = event_log

    def expense_for(self, player: PlayerState, card: Card) -> int:
        """Operating expense owed for a drawn card."""
        effect = card.effect
        if isinstance(effect, Expense):
            return effect.amount
        if isinstance(effect, ExpensePerAsset):
            return player.quantity(effect.asset) * effect.rate
        if isinstance(effect, PayInterest):
            return self.loans.interest_due(player)
        if isinstance(effect, PayIfNoAssetDistribute):
            return 0 if player.has_asset(effect.required_asset) else effect.amount
        return 0

    def calculate_harvest(self, player: PlayerState, harvest_type: HarvestType) -> HarvestResult:
        """
        Work out one harvest for ``player``.

        The player is not charged here; the caller applies income and
        expense. Crop multipliers are reset afterwards.
        """
        if harvest_type == HarvestType.NONE:
            return HarvestResult(harvest_type, None, skipped=True)

        asset = HARVEST_ASSETS[harvest_type]
        quantity = player.quantity(asset)
        if quantity <= 0:
            self.event_log.log(
                EventType.HARVEST_SKIPPED,
                player.player_id,
                harvest=harvest_name(harvest_type),
                asset=asset.value,
            )
            return HarvestResult(harvest_type, asset, skipped=True)

        card = self.operating_cost_deck.draw()
        if card is None:
            raise DeckExhaustedError("Operating Expense deck is empty")

        expense = self.expense_for(player, card)
        self.event_log.log(
            EventType.OPERATING_EXPENSE,
            player.player_id,
            card_id=card.id,
            title=card.title,
            amount=expense,
        )

        # The die is only rolled for a full block of income that will be paid.
        roll = None
        income = 0
        if quantity >= UNITS_PER_BLOCK[asset] and not player.harvest_income_suppressed:
            roll = self.rng.randrange(6)
            gross = yield_for(asset, quantity, roll) * player.crop_multiplier(asset)
            if asset == AssetType.COWS:
                gross *= player.livestock_harvest_multiplier()
            income = round_amount(gross)

        player.reset_crop_multipliers()
        self.operating_cost_deck.discard(card)
        face = None if roll is None else roll + 1

        logger.debug(
            "Harvest %s for player %s: roll=%s income=%s expense=%s",
            harvest_type.value,
            player.player_id,
            face,
            income,
            expense,
        )
        self.event_log.log(
            EventType.HARVEST,
            player.player_id,
            harvest=harvest_name(harvest_type),
            asset=asset.value,
            quantity=quantity,
            roll=face,
            income=income,
            expense=expense,
            net=income - expense,
            suppressed=player.harvest_income_suppressed,
        )
        return HarvestResult(
            harvest_type,
            asset,
            net_income=income - expense,
            expense=expense,
            gross_income=income,
            roll=roll,
            expense_card=card,
        )
