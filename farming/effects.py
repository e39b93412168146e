"""
Effect definitions for board tiles and cards.

Every effect is a small frozen dataclass. Card effects derive from
GameEffect and tile effects from TileEffect; the handful that can appear
in both places derive from both.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from farming.player import AssetType, EffectType


class CardSource(Enum):
    """The deck a card belongs to."""

    FARMER_FATE = "farmer_fate"
    OPERATING_COST = "operating_cost"
    OPTION_TO_BUY = "option_to_buy"


class HarvestType(Enum):
    """Harvest windows on the board."""

    NONE = "none"
    HAY_CUTTING_1 = "hay_cutting_1"
    HAY_CUTTING_2 = "hay_cutting_2"
    HAY_CUTTING_3 = "hay_cutting_3"
    HAY_CUTTING_4 = "hay_cutting_4"
    WHEAT = "wheat"
    CORN = "corn"
    APPLE = "apple"
    CHERRY = "cherry"
    LIVESTOCK = "livestock"


@dataclass(frozen=True)
class GameEffect:
    """Base class for card effects."""


@dataclass(frozen=True)
class TileEffect:
    """Base class for board tile effects."""


# Effects shared by cards and tiles


@dataclass(frozen=True)
class ExpensePerAsset(GameEffect, TileEffect):
    asset: AssetType
    rate: int


@dataclass(frozen=True)
class PayInterest(GameEffect, TileEffect):
    pass


@dataclass(frozen=True)
class SkipYear(GameEffect, TileEffect):
    pass


@dataclass(frozen=True)
class OneTimeHarvestMultiplier(GameEffect, TileEffect):
    asset: AssetType
    multiplier: float


@dataclass(frozen=True)
class Special(GameEffect, TileEffect):
    description: str


# Card effects


@dataclass(frozen=True)
class Income(GameEffect):
    amount: int


@dataclass(frozen=True)
class Expense(GameEffect):
    amount: int


@dataclass(frozen=True)
class BuyAsset(GameEffect):
    asset: AssetType
    quantity: int
    cost: int


@dataclass(frozen=True)
class IncomePerAsset(GameEffect):
    asset: AssetType
    rate: int


@dataclass(frozen=True)
class IncomePerLandAcre(GameEffect):
    rate: int


@dataclass(frozen=True)
class AdjustDebt(GameEffect):
    amount: int


@dataclass(frozen=True)
class AdjustLand(GameEffect):
    acres: int


@dataclass(frozen=True)
class CollectFromOthersIfHas(GameEffect):
    asset: AssetType
    amount: int


@dataclass(frozen=True)
class PayIfNoAssetDistribute(GameEffect):
    required_asset: AssetType
    amount: int


@dataclass(frozen=True)
class IncomeIfHas(GameEffect):
    asset: AssetType
    amount: int


@dataclass(frozen=True)
class SuppressHarvestIncome(GameEffect):
    pass


@dataclass(frozen=True)
class DrawOperatingExpenseNoHarvest(GameEffect):
    pass


@dataclass(frozen=True)
class AddPersistentEffect(GameEffect):
    effect_type: EffectType
    multiplier: float
    years: int


@dataclass(frozen=True)
class SlaughterCowsWithoutCompensation(GameEffect):
    pass


@dataclass(frozen=True)
class LeaseRidge(GameEffect):
    ridge_name: str
    cost: int
    cow_count: int


@dataclass(frozen=True)
class OptionalBuyAsset(GameEffect):
    asset: AssetType
    quantity: int
    cost: int


@dataclass(frozen=True)
class MtStHelensDisaster(GameEffect):
    bonus_asset: AssetType = AssetType.HAY
    bonus_per_acre: int = 500
    cleanup_per_acre: int = 100
    affected_assets: Tuple[AssetType, ...] = (AssetType.HAY, AssetType.GRAIN, AssetType.FRUIT)


# Tile effects


@dataclass(frozen=True)
class NoEffect(TileEffect):
    pass


@dataclass(frozen=True)
class DrawCard(TileEffect):
    source: CardSource


@dataclass(frozen=True)
class GainCash(TileEffect):
    amount: int


@dataclass(frozen=True)
class PayCash(TileEffect):
    amount: int


@dataclass(frozen=True)
class GoToTile(TileEffect):
    index: int


@dataclass(frozen=True)
class DoubleYieldForCrop(TileEffect):
    asset: AssetType


@dataclass(frozen=True)
class GoToTileAndGainCash(TileEffect):
    index: int
    amount: int


@dataclass(frozen=True)
class GainCashIfAsset(TileEffect):
    asset: AssetType
    amount: int


@dataclass(frozen=True)
class PayCashIfAsset(TileEffect):
    asset: AssetType
    amount: int


@dataclass(frozen=True)
class HarvestBonusPerAcre(TileEffect):
    asset: AssetType
    bonus: int


@dataclass(frozen=True)
class MoveAndHarvestIfAsset(TileEffect):
    asset: AssetType
    destination: int
    bonus: int
    harvest_type: HarvestType
