"""
Farmer's Fate, Operating Expense and Option to Buy card system.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from farming.effects import (
    AddPersistentEffect,
    CardSource,
    DrawOperatingExpenseNoHarvest,
    Expense,
    ExpensePerAsset,
    GameEffect,
    Income,
    IncomeIfHas,
    IncomePerAsset,
    LeaseRidge,
    MtStHelensDisaster,
    OneTimeHarvestMultiplier,
    OptionalBuyAsset,
    PayIfNoAssetDistribute,
    PayInterest,
    SkipYear,
    SlaughterCowsWithoutCompensation,
)
from farming.player import AssetType, EffectType

logger = logging.getLogger(__name__)

# Top-of-deck window inspected after an Option to Buy shuffle.
CLUMP_WINDOW = 20
MAX_SHUFFLE_ATTEMPTS = 5
CLUMP_LIMITS: Dict[str, int] = {"ridge": 9, "land": 9, "equipment": 7, "other": 7}

LAND_ASSETS = (AssetType.GRAIN, AssetType.HAY, AssetType.FRUIT)
EQUIPMENT_ASSETS = (AssetType.TRACTOR, AssetType.HARVESTER)


@dataclass(frozen=True)
class Card:
    """A single card. Catalog copies share ``catalog_id`` but never ``id``."""

    id: int
    catalog_id: int
    title: str
    description: str
    description_brief: str
    effect: GameEffect
    source: CardSource
    default_quantity: int = 1

    @property
    def is_option(self) -> bool:
        """Whether the card is held in hand and exercised later."""
        return isinstance(self.effect, (OptionalBuyAsset, LeaseRidge))

    def __repr__(self) -> str:
        return f"Card({self.id}, '{self.title}')"


def classify_option_card(card: Card) -> str:
    """Bucket an Option to Buy card for the anti-clump check."""
    effect = card.effect
    if isinstance(effect, LeaseRidge):
        return "ridge"
    if isinstance(effect, OptionalBuyAsset):
        if effect.asset in LAND_ASSETS:
            return "land"
        if effect.asset in EQUIPMENT_ASSETS:
            return "equipment"
    return "other"


def is_clumped(cards: List[Card]) -> bool:
    """Check whether the top of a pile breaks the clump limits."""
    if len(cards) < CLUMP_WINDOW:
        return False
    counts = {bucket: 0 for bucket in CLUMP_LIMITS}
    for card in cards[:CLUMP_WINDOW]:
        counts[classify_option_card(card)] += 1
    return any(counts[bucket] > limit for bucket, limit in CLUMP_LIMITS.items())


class Deck:
    """A deck of cards that can be shuffled and drawn from."""

    def __init__(self, cards: List[Card], rng: random.Random, anti_clump: bool = False):
        self.draw_pile: List[Card] = cards.copy()
        self.discard_pile: List[Card] = []
        self.rng = rng
        self.anti_clump = anti_clump
        self.last_shuffle_attempts = 0
        self.shuffle()

    def __len__(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile)

    def shuffle(self) -> None:
        """
        Shuffle the draw pile.

        Anti-clump decks are reshuffled, up to five attempts, while the
        top twenty cards break the clump limits. The last attempt stands.
        """
        if not self.draw_pile:
            self.last_shuffle_attempts = 0
            return

        if not self.anti_clump or len(self.draw_pile) < CLUMP_WINDOW:
            self.rng.shuffle(self.draw_pile)
            self.last_shuffle_attempts = 1
            return

        for attempt in range(1, MAX_SHUFFLE_ATTEMPTS + 1):
            self.rng.shuffle(self.draw_pile)
            self.last_shuffle_attempts = attempt
            if not is_clumped(self.draw_pile):
                return
        logger.debug("Accepted clumped shuffle after %s attempts", MAX_SHUFFLE_ATTEMPTS)

    def draw(self) -> Optional[Card]:
        """
        Draw a card from the deck.
        If the draw pile is empty, shuffle the discard pile back in.
        Returns None only when both piles are empty.
        """
        if not self.draw_pile:
            if not self.discard_pile:
                return None
            self.draw_pile = self.discard_pile
            self.discard_pile = []
            self.shuffle()

        return self.draw_pile.pop(0)

    def discard(self, card: Card) -> None:
        """Put a card on the discard pile."""
        self.discard_pile.append(card)

    def card_ids(self) -> List[int]:
        """Ids of every card in either pile."""
        return [c.id for c in self.draw_pile] + [c.id for c in self.discard_pile]


def _card(
    catalog_id: int,
    title: str,
    description: str,
    brief: str,
    effect: GameEffect,
    source: CardSource,
    quantity: int = 1,
) -> Card:
    return Card(catalog_id, catalog_id, title, description, brief, effect, source, quantity)


def expand_catalog(catalog: List[Card]) -> List[Card]:
    """Make ``default_quantity`` copies of each catalog card with unique ids."""
    cards = []
    for entry in catalog:
        for copy in range(entry.default_quantity):
            cards.append(
                Card(
                    entry.catalog_id * 10 + copy,
                    entry.catalog_id,
                    entry.title,
                    entry.description,
                    entry.description_brief,
                    entry.effect,
                    entry.source,
                    entry.default_quantity,
                )
            )
    return cards


def operating_expense_catalog() -> List[Card]:
    """Operating Expense cards, drawn once per harvest."""
    src = CardSource.OPERATING_COST
    return [
        _card(100, "Fertilizer Bill", "Fertilizer Bill. Pay $100 per Grain acre.",
              "Pay $100 per Grain acre.", ExpensePerAsset(AssetType.GRAIN, 100), src, 2),
        _card(101, "Fuel Bill", "Fuel Bill. Pay $1,000.", "Pay $1,000.", Expense(1000), src, 2),
        _card(102, "Electric Bill for Irrigation", "Electric Bill for Irrigation. Pay $500.",
              "Pay $500.", Expense(500), src),
        _card(103, "Custom Hire - No Tractor", "Pay $2,000 if you do not own a Tractor.",
              "Pay $2,000 without a Tractor.",
              PayIfNoAssetDistribute(AssetType.TRACTOR, 2000), src, 2),
        _card(104, "Custom Hire - No Harvester", "Pay $2,000 if you do not own a Harvester.",
              "Pay $2,000 without a Harvester.",
              PayIfNoAssetDistribute(AssetType.HARVESTER, 2000), src, 2),
        _card(105, "Parts Bill", "Parts Bill. Pay $500.", "Pay $500.", Expense(500), src, 2),
        _card(106, "Wire Worm in Grain", "Wire Worm in Grain. Pay $100 per Grain acre to fumigate.",
              "Pay $100 per Grain acre.", ExpensePerAsset(AssetType.GRAIN, 100), src),
        _card(107, "Equipment Breakdown", "Equipment Breakdown. Pay $500.", "Pay $500.",
              Expense(500), src, 2),
        _card(108, "Feed Bill", "Feed Bill. Pay $100 per cow.", "Pay $100 per cow.",
              ExpensePerAsset(AssetType.COWS, 100), src),
        _card(109, "Farmowner's Insurance", "Farmowner's Insurance. Pay $1,500.", "Pay $1,500.",
              Expense(1500), src),
        _card(110, "Seed Bill", "Seed Bill. Pay $3,000.", "Pay $3,000.", Expense(3000), src, 2),
        _card(111, "Farm Taxes", "Farm Taxes. Pay $1,500.", "Pay $1,500.", Expense(1500), src),
        _card(112, "Interest on Bank Notes", "Pay 10% on Bank Notes on hand.",
              "Pay 10% interest.", PayInterest(), src, 2),
        _card(113, "Veterinary Bill", "Veterinary Bill. Pay $500 per cow.", "Pay $500 per cow.",
              ExpensePerAsset(AssetType.COWS, 500), src),
        _card(114, "Equipment in Shop", "Equipment in the shop. Pay $1,000 for the delay.",
              "Pay $1,000.", Expense(1000), src, 2),
    ]


def farmer_fate_catalog() -> List[Card]:
    """Farmer's Fate cards, resolved as soon as they are drawn."""
    src = CardSource.FARMER_FATE
    return [
        _card(200, "Calves Market Jump",
              "Held some of your calves and the market jumped. Collect $2,000 if you have cows.",
              "Collect $2,000 if you have cows.", IncomeIfHas(AssetType.COWS, 2000), src),
        _card(201, "Federal Crop Disaster",
              "Federal Crop Disaster payment saves your bacon. Collect $100 per Grain acre.",
              "Collect $100 per Grain acre.", IncomePerAsset(AssetType.GRAIN, 100), src),
        _card(202, "Bad at Taxes",
              "IRS garnishes your income after finding errors on your tax return. Draw an "
              "Operating Expense card during Harvest but do not roll for Harvest income.",
              "No income for you this year - only Operating Expenses!",
              DrawOperatingExpenseNoHarvest(), src),
        _card(205, "Drought Year",
              "Drought year! Go to the 2nd week of January. Do not collect your $5,000 "
              "year's wages.",
              "Drought year! Skip to 2nd week of January.", SkipYear(), src, 2),
        _card(206, "Truckers Strike",
              "Truckers strike delays Fruit in transport, lots of spoilage. Pay $1,000 per "
              "Fruit acre.",
              "Pay $1,000 per Fruit acre.", ExpensePerAsset(AssetType.FRUIT, 1000), src),
        _card(207, "Uncle Bert's Legacy",
              "Uncle Bert dies and leaves you 10 acres of Hay, if you can raise the $10,000 "
              "cash to pay Inheritance Tax and small remaining mortgage.",
              "Inherit 10 acres of Hay for $10,000.",
              OptionalBuyAsset(AssetType.HAY, 10, 10000), src),
        _card(208, "Premium Hay Sale",
              "Rich folks from the city pay you a premium for your best hay to feed their "
              "show horses. Collect $100 per Hay acre.",
              "Collect $100 per Hay acre.", IncomePerAsset(AssetType.HAY, 100), src),
        _card(209, "Weed Infestation",
              "Windy spring, didn't get your wheat sprayed. Weeds cut your wheat crop in half.",
              "Weeds cut your wheat crop in half.",
              OneTimeHarvestMultiplier(AssetType.GRAIN, 0.5), src),
        _card(210, "Cherry Market Crash",
              "A talk show scare crashes the national cherry market. Cut your cherry crop in "
              "half if you haven't already harvested this year.",
              "Cut your cherry crop in half.",
              OneTimeHarvestMultiplier(AssetType.FRUIT, 0.5), src),
        _card(211, "Income Taxes Due", "Income taxes due. Pay $7,000.", "Pay $7,000.",
              Expense(7000), src),
        _card(212, "Mt. St. Helens Disaster",
              "Mt. St. Helens blows. You are luckily out of the ash path and your ash-free hay "
              "jumps in price! Collect $500 per Hay acre. Other players roll: odd escapes, even "
              "pays $100 per acre of crops to clean up.",
              "Volcano! Collect $500 per Hay acre. Others roll to escape or pay.",
              MtStHelensDisaster(), src),
        _card(213, "Cut Worms",
              "Cut worms eat sprouting Fruit buds. EPA bans control spray. Pay $800 per Fruit "
              "acre.",
              "Pay $800 per Fruit acre.", ExpensePerAsset(AssetType.FRUIT, 800), src),
        _card(214, "Prime Rate Hike",
              "Banks raise Prime Rate. Pay 10% of outstanding loan balance as additional "
              "interest.",
              "Pay 10% of outstanding loan balance.", PayInterest(), src),
        _card(215, "PCB Contamination",
              "Contaminated feed. State Ag Inspector requires you slaughter all cows (not cows "
              "on leased ridges) with no reimbursement.",
              "Slaughter cows without compensation.", SlaughterCowsWithoutCompensation(), src),
        _card(216, "Cattle Management Bonus",
              "Sharp management sends yearling weights soaring. Receive a 50% bonus on your "
              "Livestock Harvest check each of the next two years.",
              "50% livestock bonus for 2 years.",
              AddPersistentEffect(EffectType.LIVESTOCK_HARVEST_BONUS, 1.5, 2), src),
        _card(217, "Tractor Hire Bill", "Custom hire bill due. If you have no Tractor pay $3,000.",
              "Pay $3,000 to hire a tractor.",
              PayIfNoAssetDistribute(AssetType.TRACTOR, 3000), src, 2),
        _card(219, "Russian Wheat Sale", "Russian sale boosts wheat prices. Collect $2,000.",
              "Collect $2,000.", Income(2000), src),
        _card(220, "Apple Maggot Fly",
              "The Apple Maggot Fly is found in an insect trap in your Fruit. Pay $500 per "
              "Fruit acre.",
              "Pay $500 per Fruit acre.", ExpensePerAsset(AssetType.FRUIT, 500), src),
        _card(221, "Grain Embargo",
              "A Grain Embargo hits while you wait for the custom harvester. Pay $2,500 if you "
              "don't own your own Harvester.",
              "Pay $2,500 without a Harvester.",
              PayIfNoAssetDistribute(AssetType.HARVESTER, 2500), src),
        _card(222, "Marketing Co-op Success",
              "Marketing Co-op holds out for higher price. Processor gives in! Collect $1,000.",
              "Collect $1,000.", Income(1000), src),
    ]


def option_to_buy_catalog() -> List[Card]:
    """Option to Buy cards, kept in hand until exercised."""
    src = CardSource.OPTION_TO_BUY
    return [
        _card(300, "Livestock Auction", "Livestock auction: 10 pregnant cows at $500 each. "
              "Total $5,000.", "Buy 10 cows for $5,000.",
              OptionalBuyAsset(AssetType.COWS, 10, 5000), src, 6),
        _card(301, "Buy Grain Land", "Neighbor sells out 10 acres of Grain at $2,000 per acre. "
              "Total $20,000.", "Buy 10 acres of Grain for $20,000.",
              OptionalBuyAsset(AssetType.GRAIN, 10, 20000), src, 5),
        _card(302, "Buy Fruit Land", "Neighbor goes broke: 5 acres of Fruit at $5,000 per acre. "
              "Total $25,000.", "Buy 5 acres of Fruit for $25,000.",
              OptionalBuyAsset(AssetType.FRUIT, 5, 25000), src, 6),
        _card(303, "Buy Used Tractor", "Equipment sale: old but usable tractor. Total $10,000.",
              "Buy a used tractor for $10,000.",
              OptionalBuyAsset(AssetType.TRACTOR, 1, 10000), src, 3),
        _card(304, "Buy Used Harvester", "Equipment sale: old but usable harvester. "
              "Total $10,000.", "Buy a used harvester for $10,000.",
              OptionalBuyAsset(AssetType.HARVESTER, 1, 10000), src, 3),
        _card(305, "Lease Toppenish Ridge", "Lease Toppenish Ridge for lifetime at $25,000 and "
              "buy 50 pregnant cows to stock it at $500 each. Total $50,000.",
              "Lease Toppenish Ridge with 50 cows for $50,000.",
              LeaseRidge("Toppenish", 50000, 50), src, 3),
        _card(306, "Lease Rattlesnake Ridge", "Lease Rattlesnake Ridge for lifetime at $15,000 "
              "and buy 30 pregnant cows to stock it at $500 each. Total $30,000.",
              "Lease Rattlesnake Ridge with 30 cows for $30,000.",
              LeaseRidge("Rattlesnake", 30000, 30), src, 3),
        _card(307, "Lease Ahtanum Ridge", "Lease Ahtanum Ridge for lifetime at $10,000 and buy "
              "20 pregnant cows to stock it at $500 each. Total $20,000.",
              "Lease Ahtanum Ridge with 20 cows for $20,000.",
              LeaseRidge("Ahtanum", 20000, 20), src, 3),
        _card(308, "Lease Cascade Ridge", "Lease Cascade Ridge for lifetime at $20,000 and buy "
              "40 pregnant cows to stock it at $500 each. Total $40,000.",
              "Lease Cascade Ridge with 40 cows for $40,000.",
              LeaseRidge("Cascade", 40000, 40), src, 3),
        _card(309, "Buy Hay Land", "Neighbor sells out 10 acres of Hay at $2,000 per acre. "
              "Total $20,000.", "Buy 10 acres of Hay for $20,000.",
              OptionalBuyAsset(AssetType.HAY, 10, 20000), src, 5),
    ]


def create_operating_expense_deck(rng: random.Random) -> Deck:
    """Create a shuffled Operating Expense deck."""
    return Deck(expand_catalog(operating_expense_catalog()), rng)


def create_farmer_fate_deck(rng: random.Random) -> Deck:
    """Create a shuffled Farmer's Fate deck."""
    return Deck(expand_catalog(farmer_fate_catalog()), rng)


def create_option_to_buy_deck(rng: random.Random) -> Deck:
    """Create an Option to Buy deck shuffled with the anti-clump check."""
    return Deck(expand_catalog(option_to_buy_catalog()), rng, anti_clump=True)
