"""
The 49-tile farm-year board.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from farming.effects import (
    CardSource,
    DoubleYieldForCrop,
    DrawCard,
    GainCash,
    GainCashIfAsset,
    GoToTile,
    GoToTileAndGainCash,
    HarvestBonusPerAcre,
    HarvestType,
    MoveAndHarvestIfAsset,
    NoEffect,
    OneTimeHarvestMultiplier,
    PayCash,
    PayCashIfAsset,
    PayInterest,
    SkipYear,
    TileEffect,
)
from farming.exceptions import TileNotFoundError
from farming.player import AssetType


class TileType(Enum):
    """Broad category of a tile, used for display."""

    FARMER_FATE = "farmer_fate"
    SPECIAL_EVENT = "special_event"
    PAY_INTEREST = "pay_interest"
    PAY_IF_ASSET_OWNED = "pay_if_asset_owned"
    DOUBLE_YIELD = "double_yield"
    COLLECT_BONUS = "collect_bonus"
    JUMP_TO_TILE = "jump_to_tile"
    PAY_FEES = "pay_fees"
    OPTION_TO_BUY = "option_to_buy"
    SKIP_YEAR = "skip_year"
    HARVEST_EVENT = "harvest_event"
    BLANK = "blank"


@dataclass(frozen=True)
class BoardTile:
    """One week (or holiday) of the farm year."""

    index: int
    name: str
    tile_type: TileType
    harvest_type: HarvestType
    effect: TileEffect
    description: str = ""
    description_brief: str = ""

    def __repr__(self) -> str:
        return f"BoardTile(index={self.index}, name='{self.name}')"


T = TileType
H = HarvestType
A = AssetType
OTB = CardSource.OPTION_TO_BUY
FATE = CardSource.FARMER_FATE


def _tiles() -> List[BoardTile]:
    return [
        BoardTile(0, "Christmas Vacation", T.SPECIAL_EVENT, H.NONE, GainCash(1000),
                  "COLLECT $1000 Christmas bonus!", "COLLECT $1000."),
        BoardTile(1, "January Week 1", T.PAY_INTEREST, H.NONE, PayInterest(),
                  "PAY 10% interest on Bank Notes.", "PAY 10% interest."),
        BoardTile(2, "January Week 2", T.OPTION_TO_BUY, H.NONE, DrawCard(OTB),
                  "Hibernate. Draw O.T.B.", "Draw O.T.B."),
        BoardTile(3, "January Week 3", T.PAY_IF_ASSET_OWNED, H.NONE, PayCashIfAsset(A.COWS, 500),
                  "Bitter cold spell. PAY $500 if you own cows.", "PAY $500 if you own cows."),
        BoardTile(4, "January Week 4", T.DOUBLE_YIELD, H.NONE, DoubleYieldForCrop(A.HAY),
                  "Beautiful Days! Double all your Hay harvests this year.",
                  "Double all your Hay harvests this year."),
        BoardTile(5, "February Week 1", T.COLLECT_BONUS, H.NONE, GainCash(1000),
                  "Warm snap, you're in the field 2 weeks early. COLLECT $1000.", "COLLECT $1000."),
        BoardTile(6, "February Week 2", T.FARMER_FATE, H.NONE, DrawCard(FATE),
                  "Stuck in a muddy canal. Draw Farmer's Fate.", "Draw Farmer's Fate."),
        BoardTile(7, "February Week 3", T.JUMP_TO_TILE, H.NONE, GoToTile(14),
                  "Ground thaws. Start planting early crops. Go to Spring Planting.",
                  "Go to Spring Planting."),
        BoardTile(8, "February Week 4", T.OPTION_TO_BUY, H.NONE, DrawCard(OTB),
                  "Rainy day. Draw O.T.B.", "Draw O.T.B."),
        BoardTile(9, "March Week 1", T.PAY_FEES, H.NONE, PayCash(2000),
                  "Becomes obvious your wheat has winter killed. PAY $2000 to replant.",
                  "PAY $2000 to replant."),
        BoardTile(10, "March Week 2", T.PAY_FEES, H.NONE, PayCash(500),
                  "Start plowing late. PAY $500.", "PAY $500."),
        BoardTile(11, "Hurt Back", T.SKIP_YEAR, H.NONE, SkipYear(),
                  "Hurt your back. Skip a year.", "Skip a year."),
        BoardTile(12, "March Week 4", T.PAY_IF_ASSET_OWNED, H.NONE, PayCashIfAsset(A.FRUIT, 2000),
                  "Frost forces you to heat fruit. PAY $2000 if you own fruit.",
                  "PAY $2000 if you own fruit."),
        BoardTile(13, "April Week 1", T.OPTION_TO_BUY, H.NONE, DrawCard(OTB),
                  "Done plowing. Take a day off. Draw O.T.B.", "Draw O.T.B."),
        BoardTile(14, "Spring Planting", T.DOUBLE_YIELD, H.NONE, DoubleYieldForCrop(A.GRAIN),
                  "Plant corn on time. Double corn yield this year.", "Double corn yield this year."),
        BoardTile(15, "April Week 2", T.PAY_FEES, H.NONE, PayCash(500),
                  "More rain. Field work shut down. PAY $500.", "PAY $500."),
        BoardTile(16, "April Week 3", T.PAY_FEES, H.NONE, PayCash(1000),
                  "Equipment breakdown. PAY $1000.", "PAY $1000."),
        BoardTile(17, "May Week 1", T.COLLECT_BONUS, H.NONE, GainCash(500),
                  "The whole valley is green. COLLECT $500.", "COLLECT $500."),
        BoardTile(18, "May Week 2", T.PAY_FEES, H.NONE, PayCash(500),
                  "Windstorm makes you replant corn. PAY $500.", "PAY $500."),
        BoardTile(19, "May Week 3", T.COLLECT_BONUS, H.HAY_CUTTING_1, GainCash(1000),
                  "Cut your hay just right. COLLECT $1000 bonus.", "COLLECT $1000 bonus."),
        BoardTile(20, "May Week 4", T.OPTION_TO_BUY, H.HAY_CUTTING_1, DrawCard(OTB),
                  "Memorial Day weekend. Draw O.T.B.", "Draw O.T.B."),
        BoardTile(21, "June Week 1", T.HARVEST_EVENT, H.HAY_CUTTING_1,
                  OneTimeHarvestMultiplier(A.HAY, 0.5),
                  "Rain storm ruins unbaled hay. Cut your harvest check in half.",
                  "Cut your harvest check in half."),
        BoardTile(22, "June Week 2", T.COLLECT_BONUS, H.HAY_CUTTING_1, GainCash(500),
                  "Good growing weather. COLLECT $500 bonus.", "COLLECT $500 bonus."),
        BoardTile(23, "June Week 3", T.HARVEST_EVENT, H.CHERRY,
                  OneTimeHarvestMultiplier(A.FRUIT, 0.5),
                  "Rain splits your cherries. Cut your harvest check in half.",
                  "Cut your harvest check in half."),
        BoardTile(24, "June Week 4", T.FARMER_FATE, H.CHERRY, DrawCard(FATE),
                  "Dust storm. Draw Farmer's Fate.", "Draw Farmer's Fate."),
        BoardTile(25, "Independence Day Bash", T.BLANK, H.CHERRY, NoEffect(),
                  "Independence Day Bash", "Independence Day Bash"),
        BoardTile(26, "July Week 1", T.DOUBLE_YIELD, H.HAY_CUTTING_2, DoubleYieldForCrop(A.HAY),
                  "Good weather for your second cutting of hay. Double Hay harvest check.",
                  "Double Hay harvest check."),
        BoardTile(27, "July Week 2", T.OPTION_TO_BUY, H.HAY_CUTTING_2, DrawCard(OTB),
                  "Hot! Wish you were in the mountains! Draw O.T.B.", "Draw O.T.B."),
        BoardTile(28, "July Week 3", T.JUMP_TO_TILE, H.HAY_CUTTING_2, GoToTile(37),
                  "It's a cooker! 114 in the shade. Wipe your brow and go to Harvest Moon after "
                  "getting Hay check.",
                  "Go to Harvest Moon after getting Hay check."),
        BoardTile(29, "July Week 4", T.HARVEST_EVENT, H.WHEAT, HarvestBonusPerAcre(A.GRAIN, 50),
                  "85 degrees, wheat heads filling out beautifully. Add $50 per acre to your "
                  "harvest check.",
                  "Add $50 per acre to your harvest check."),
        BoardTile(30, "August Week 1", T.JUMP_TO_TILE, H.WHEAT, GoToTileAndGainCash(8, 5000),
                  "You're right on time and working like a pro. Go to the fourth week of "
                  "February. COLLECT your year's wage of $5000.",
                  "COLLECT your year's wage of $5000."),
        BoardTile(31, "August Week 2", T.COLLECT_BONUS, H.WHEAT,
                  GainCashIfAsset(A.HARVESTER, 1000),
                  "Storm clouds brewing. COLLECT $1000 if you have a Harvester.",
                  "COLLECT $1000 if you have a Harvester."),
        BoardTile(32, "August Week 3", T.COLLECT_BONUS, H.WHEAT, GainCash(500),
                  "Finish wheat harvesting with no breakdowns. COLLECT $500.", "COLLECT $500."),
        BoardTile(33, "August Week 4", T.HARVEST_EVENT, H.WHEAT, HarvestBonusPerAcre(A.GRAIN, -50),
                  "Rain sprouts unharvested wheat. Cut price $50 per acre on harvest check.",
                  "Cut price $50 per acre on harvest check."),
        BoardTile(34, "September Week 1", T.JUMP_TO_TILE, H.HAY_CUTTING_3,
                  MoveAndHarvestIfAsset(A.TRACTOR, 45, 1000, H.APPLE),
                  "Tractor owners: bale Hay, then go to third week of November. COLLECT $1000 "
                  "there, then harvest your fruit.",
                  "Tractor owners: go to third week of November, COLLECT $1000, harvest fruit."),
        BoardTile(35, "September Week 2", T.OPTION_TO_BUY, H.HAY_CUTTING_3, DrawCard(OTB),
                  "Sunny skies at the County Fair. Draw O.T.B.", "Draw O.T.B."),
        BoardTile(36, "September Week 3", T.HARVEST_EVENT, H.LIVESTOCK,
                  OneTimeHarvestMultiplier(A.COWS, 0.5),
                  "Market collapse. Cut livestock check in half.", "Cut livestock check in half."),
        BoardTile(37, "Harvest Moon", T.COLLECT_BONUS, H.LIVESTOCK, GainCash(500),
                  "Harvest Moon smiles on you. COLLECT $500.", "COLLECT $500."),
        BoardTile(38, "September Week 4", T.PAY_IF_ASSET_OWNED, H.LIVESTOCK,
                  PayCashIfAsset(A.FRUIT, 2000),
                  "Codling Moth damage to apples lowers fruit grade. PAY $2000 if you own fruit.",
                  "PAY $2000 if you own fruit."),
        BoardTile(39, "October Week 1", T.COLLECT_BONUS, H.LIVESTOCK, GainCash(500),
                  "Indian Summer. COLLECT $500.", "COLLECT $500."),
        BoardTile(40, "October Week 2", T.FARMER_FATE, H.HAY_CUTTING_4, DrawCard(FATE),
                  "Good Pheasant Hunting. Draw Farmer's Fate.", "Draw Farmer's Fate."),
        BoardTile(41, "October Week 3", T.OPTION_TO_BUY, H.HAY_CUTTING_4, DrawCard(OTB),
                  "Park your baler for the Winter. Draw O.T.B.", "Draw O.T.B."),
        BoardTile(42, "October Week 4", T.FARMER_FATE, H.APPLE, DrawCard(FATE),
                  "Annual Deer Hunt. Draw Farmer's Fate.", "Draw Farmer's Fate."),
        BoardTile(43, "November Week 1", T.OPTION_TO_BUY, H.APPLE, DrawCard(OTB),
                  "Irrigation Season over. Draw O.T.B.", "Draw O.T.B."),
        BoardTile(44, "November Week 2", T.COLLECT_BONUS, H.APPLE, GainCash(500),
                  "Good weather, harvest winding up. COLLECT $500.", "COLLECT $500."),
        BoardTile(45, "November Week 3", T.COLLECT_BONUS, H.CORN, GainCash(1000),
                  "Good weather holding. COLLECT $1000.", "COLLECT $1000."),
        BoardTile(46, "November Week 4", T.PAY_IF_ASSET_OWNED, H.CORN,
                  PayCashIfAsset(A.FRUIT, 1000),
                  "Early freeze kills fruit buds. PAY $1000 if you have Fruit.",
                  "PAY $1000 if you have Fruit."),
        BoardTile(47, "December Week 1", T.COLLECT_BONUS, H.CORN, GainCash(500),
                  "Cold and dry, perfect Field Corn Harvesting. COLLECT $500.", "COLLECT $500."),
        BoardTile(48, "December Week 2", T.FARMER_FATE, H.CORN, DrawCard(FATE),
                  "First Snow. Draw Farmer's Fate.", "Draw Farmer's Fate."),
    ]


class Board:
    """The farm-year board. Immutable after construction."""

    def __init__(self):
        self.tiles: Tuple[BoardTile, ...] = tuple(_tiles())

    def __len__(self) -> int:
        return len(self.tiles)

    def get_tile(self, index: int) -> BoardTile:
        """Get the tile at ``index``."""
        if not 0 <= index < len(self.tiles):
            raise TileNotFoundError(f"No tile at position {index}")
        return self.tiles[index]
