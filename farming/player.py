"""
Player state and the per-player asset ledger.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from farming.config import GameConfig
from farming.money import round_amount

if TYPE_CHECKING:
    from farming.cards import Card


class AssetType(Enum):
    """Kinds of holdings a farmer can own."""

    GRAIN = "grain"
    HAY = "hay"
    COWS = "cows"
    FRUIT = "fruit"
    TRACTOR = "tractor"
    HARVESTER = "harvester"


# Scoreboard value per unit held.
ASSET_UNIT_VALUES: Dict[AssetType, int] = {
    AssetType.GRAIN: 2000,
    AssetType.HAY: 2000,
    AssetType.COWS: 500,
    AssetType.FRUIT: 5000,
    AssetType.TRACTOR: 10000,
    AssetType.HARVESTER: 10000,
}

HARVESTABLE_ASSETS = (AssetType.GRAIN, AssetType.HAY, AssetType.FRUIT, AssetType.COWS)


class EffectType(Enum):
    """Kinds of multi-year effects."""

    LIVESTOCK_HARVEST_BONUS = "livestock_harvest_bonus"


class PlayerType(Enum):
    """Who makes a player's decisions."""

    HUMAN = "human"
    AI = "ai"


@dataclass
class AssetRecord:
    """Quantity, cost basis and cumulative income for one asset kind."""

    quantity: int = 0
    total_cost: int = 0
    total_income: int = 0


@dataclass
class PersistentEffect:
    """A multiplier that lasts a number of years."""

    effect_type: EffectType
    multiplier: float
    years_remaining: int


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(
        self,
        player_id: int,
        name: str,
        config: GameConfig,
        player_type: PlayerType = PlayerType.AI,
        color: Optional[str] = None,
    ):
        self.player_id = player_id
        self.name = name
        self.player_type = player_type
        self.color = color

        self.cash = config.starting_cash
        self.debt = config.starting_debt
        self.land = config.starting_land
        self.position = config.starting_position
        self.year = config.starting_year

        self.assets: Dict[AssetType, AssetRecord] = {}
        self.crop_yield_multipliers: Dict[AssetType, float] = {}
        self.persistent_effects: List[PersistentEffect] = []
        self.hand: List["Card"] = []

        self.total_ridge_value = 0
        self.eligible_for_side_job_pay = True
        self.harvest_income_suppressed = False
        self.turns_taken = 0

    @property
    def is_ai(self) -> bool:
        return self.player_type == PlayerType.AI

    @property
    def total_asset_value(self) -> int:
        """Scoreboard value of every holding."""
        return sum(
            ASSET_UNIT_VALUES[asset] * max(record.quantity, 0)
            for asset, record in self.assets.items()
        )

    @property
    def net_worth(self) -> int:
        return self.cash - self.debt + self.total_asset_value + self.total_ridge_value

    @property
    def total_income(self) -> int:
        return sum(record.total_income for record in self.assets.values())

    @property
    def cost_basis(self) -> int:
        """Sum of what was paid for every holding."""
        return sum(record.total_cost for record in self.assets.values())

    def quantity(self, asset: AssetType) -> int:
        """Units held of ``asset`` (0 when there is no record)."""
        record = self.assets.get(asset)
        return record.quantity if record else 0

    def has_asset(self, asset: AssetType) -> bool:
        """Whether a ledger record exists for ``asset``."""
        return asset in self.assets

    def add_asset(self, asset: AssetType, quantity: int, cost: int) -> None:
        """Add units and their cost to the ledger."""
        record = self.assets.setdefault(asset, AssetRecord())
        record.quantity += quantity
        record.total_cost += cost

    def sell_asset(self, asset: AssetType, quantity: int, price_per_unit: int) -> int:
        """
        Sell up to ``quantity`` units, recording the proceeds as income.

        Returns the number of units actually sold. The record is dropped
        once its quantity reaches zero.
        """
        record = self.assets.get(asset)
        if record is None:
            return 0
        sold = min(quantity, record.quantity)
        record.quantity -= sold
        record.total_income += sold * price_per_unit
        if record.quantity <= 0:
            del self.assets[asset]
        return sold

    def remove_asset(self, asset: AssetType) -> Optional[AssetRecord]:
        """Take the whole record out of the ledger."""
        return self.assets.pop(asset, None)

    def add_income(self, asset: AssetType, amount: int) -> None:
        """Credit income to an existing record."""
        record = self.assets.get(asset)
        if record is not None:
            record.total_income += amount

    def crop_multiplier(self, asset: AssetType) -> float:
        return self.crop_yield_multipliers.get(asset, 1.0)

    def set_crop_multiplier(self, asset: AssetType, multiplier: float) -> None:
        self.crop_yield_multipliers[asset] = multiplier

    def reset_crop_multipliers(self) -> None:
        self.crop_yield_multipliers.clear()

    def apply_one_time_multiplier(self, asset: AssetType, multiplier: float) -> bool:
        """
        Set a one-circuit harvest multiplier for a harvestable asset.

        A penalty (multiplier below 1.0) also scales income already
        recorded for the asset. Returns False for equipment, which is
        left untouched.
        """
        if asset not in HARVESTABLE_ASSETS:
            return False
        self.set_crop_multiplier(asset, multiplier)
        record = self.assets.get(asset)
        if multiplier < 1.0 and record is not None and record.total_income > 0:
            record.total_income = round_amount(record.total_income * multiplier)
        return True

    def add_persistent_effect(self, effect: PersistentEffect) -> None:
        self.persistent_effects.append(effect)

    def livestock_harvest_multiplier(self) -> float:
        """Product of every active livestock bonus."""
        multiplier = 1.0
        for effect in self.persistent_effects:
            if effect.effect_type == EffectType.LIVESTOCK_HARVEST_BONUS:
                multiplier *= effect.multiplier
        return multiplier

    def advance_year(self) -> None:
        """Move to the next year and age persistent effects."""
        self.year += 1
        for effect in self.persistent_effects:
            effect.years_remaining -= 1
        self.persistent_effects = [e for e in self.persistent_effects if e.years_remaining > 0]

    def skip_year(self) -> None:
        self.year += 1

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', "
            f"cash={self.cash}, debt={self.debt}, position={self.position}, "
            f"net_worth={self.net_worth})"
        )


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(
        self,
        player_id: int,
        name: str,
        player_type: PlayerType = PlayerType.AI,
        color: Optional[str] = None,
    ):
        self.player_id = player_id
        self.name = name
        self.player_type = player_type
        self.color = color

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}', type={self.player_type.value})"
