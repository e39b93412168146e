"""
Effect resolution for board tiles and cards.

The engine holds no state of its own. Each call dispatches on the effect's
class, mutates the game it was built for, and returns the events it
appended to the game log, in order.
"""

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Type

from farming.board import BoardTile
from farming.cards import Card
from farming.effects import (
    AddPersistentEffect,
    AdjustDebt,
    AdjustLand,
    BuyAsset,
    CardSource,
    CollectFromOthersIfHas,
    DoubleYieldForCrop,
    DrawCard,
    DrawOperatingExpenseNoHarvest,
    Expense,
    ExpensePerAsset,
    GainCash,
    GainCashIfAsset,
    GameEffect,
    GoToTile,
    GoToTileAndGainCash,
    HarvestBonusPerAcre,
    HarvestType,
    Income,
    IncomeIfHas,
    IncomePerAsset,
    IncomePerLandAcre,
    LeaseRidge,
    MoveAndHarvestIfAsset,
    MtStHelensDisaster,
    NoEffect,
    OneTimeHarvestMultiplier,
    OptionalBuyAsset,
    PayCash,
    PayCashIfAsset,
    PayIfNoAssetDistribute,
    PayInterest,
    SkipYear,
    SlaughterCowsWithoutCompensation,
    Special,
    SuppressHarvestIncome,
    TileEffect,
)
from farming.exceptions import DeckExhaustedError, InsolvencyError, InvalidOperationError
from farming.harvest import HarvestResult
from farming.money import EventType, GameEvent
from farming.player import AssetType, PersistentEffect, PlayerState

if TYPE_CHECKING:
    from farming.game import GameState

logger = logging.getLogger(__name__)

# Tiles reached through GoToTile are resolved, but their own jumps are not followed.
MAX_TILE_CHAIN_DEPTH = 1


class EffectEngine:
    """Interprets TileEffect and GameEffect values against a GameState."""

    def __init__(self, game: "GameState"):
        self.game = game
        self.event_log = game.event_log
        self.loans = game.loans

        self._tile_handlers: Dict[Type[TileEffect], Callable] = {
            NoEffect: self._tile_no_effect,
            DrawCard: self._tile_draw_card,
            GainCash: self._tile_gain_cash,
            PayCash: self._tile_pay_cash,
            SkipYear: self._skip_year,
            GoToTile: self._tile_go_to,
            Special: self._special,
            ExpensePerAsset: self._expense_per_asset,
            DoubleYieldForCrop: self._tile_double_yield,
            PayInterest: self._pay_interest,
            GoToTileAndGainCash: self._tile_go_to_and_gain,
            GainCashIfAsset: self._tile_gain_if_asset,
            HarvestBonusPerAcre: self._tile_harvest_bonus,
            MoveAndHarvestIfAsset: self._tile_move_and_harvest,
            OneTimeHarvestMultiplier: self._one_time_multiplier,
            PayCashIfAsset: self._tile_pay_if_asset,
        }
        self._card_handlers: Dict[Type[GameEffect], Callable] = {
            Income: self._card_income,
            Expense: self._card_expense,
            BuyAsset: self._card_buy_asset,
            ExpensePerAsset: self._expense_per_asset,
            IncomePerAsset: self._card_income_per_asset,
            IncomePerLandAcre: self._card_income_per_acre,
            AdjustDebt: self._card_adjust_debt,
            AdjustLand: self._card_adjust_land,
            Special: self._special,
            CollectFromOthersIfHas: self._card_collect_from_others,
            PayIfNoAssetDistribute: self._card_pay_if_no_asset,
            IncomeIfHas: self._card_income_if_has,
            SuppressHarvestIncome: self._card_suppress_harvest,
            DrawOperatingExpenseNoHarvest: self._card_suppress_harvest,
            SkipYear: self._skip_year,
            AddPersistentEffect: self._card_add_persistent,
            SlaughterCowsWithoutCompensation: self._card_slaughter_cows,
            PayInterest: self._pay_interest,
            OneTimeHarvestMultiplier: self._one_time_multiplier,
            LeaseRidge: self._card_lease_ridge,
            OptionalBuyAsset: self._card_optional_buy,
            MtStHelensDisaster: self._card_mt_st_helens,
        }

    # ------------------------------------------------------------------
    # Entry points

    def resolve_tile(self, player_id: int, tile: BoardTile, depth: int = 0) -> List[GameEvent]:
        """
        Resolve the tile a player landed on.

        The tile's harvest (if any) runs first, then its effect. A harvest
        that cannot be settled is recorded and the effect still resolves.
        """
        start = len(self.event_log)
        player = self.game.get_player(player_id)
        self.event_log.log(
            EventType.LAND, player_id, position=tile.index, tile=tile.name, depth=depth
        )
        if tile.harvest_type != HarvestType.NONE:
            try:
                self.process_harvest(player_id, tile.harvest_type)
            except (DeckExhaustedError, InsolvencyError) as exc:
                logger.warning("Harvest failed for player %s on %s: %s", player_id, tile.name, exc)
                self.event_log.log(
                    EventType.EFFECT_FAILED, player_id, tile=tile.name, error=str(exc)
                )

        handler = self._tile_handlers.get(type(tile.effect))
        if handler is None:
            raise InvalidOperationError(f"Unhandled tile effect {tile.effect!r}")
        handler(player, tile.effect, depth)
        return self.event_log.events_since(start)

    def apply_card_effect(self, player_id: int, card: Card) -> List[GameEvent]:
        """Resolve a card's effect for the player who drew it."""
        start = len(self.event_log)
        player = self.game.get_player(player_id)
        self.event_log.log(
            EventType.CARD_EFFECT,
            player_id,
            card_id=card.id,
            title=card.title,
            text=card.description_brief,
        )
        handler = self._card_handlers.get(type(card.effect))
        if handler is None:
            raise InvalidOperationError(f"Unhandled card effect {card.effect!r}")
        handler(player, card.effect, card)
        return self.event_log.events_since(start)

    def process_harvest(self, player_id: int, harvest_type: HarvestType) -> HarvestResult:
        """
        Harvest for a player and settle the check.

        Gross income is banked first, then the operating expense is
        charged through the forced-loan path.
        """
        player = self.game.get_player(player_id)
        result = self.game.harvest_manager.calculate_harvest(player, harvest_type)
        if result.skipped:
            return result

        player.cash += result.gross_income
        if result.asset is not None:
            player.add_income(result.asset, result.gross_income)
        if result.expense > 0:
            self.loans.handle_forced_loan(player, result.expense, reason="operating expense")
        return result

    # ------------------------------------------------------------------
    # Shared handlers

    def _charge(self, player: PlayerState, amount: int, reason: str) -> None:
        self.loans.handle_forced_loan(player, amount, reason=reason)

    def _skip_year(self, player: PlayerState, effect: SkipYear, _context) -> None:
        player.skip_year()
        player.position = self.game.config.skip_year_position
        self.event_log.log(
            EventType.SKIP_YEAR, player.player_id, year=player.year, position=player.position
        )

    def _special(self, player: PlayerState, effect: Special, _context) -> None:
        self.event_log.log(EventType.NOTICE, player.player_id, text=effect.description)

    def _expense_per_asset(self, player: PlayerState, effect: ExpensePerAsset, _context) -> None:
        quantity = player.quantity(effect.asset)
        total = quantity * effect.rate
        if total <= 0:
            self.event_log.log(
                EventType.NO_EFFECT, player.player_id, reason=f"no {effect.asset.value}"
            )
            return
        self._charge(player, total, f"{effect.rate} per {effect.asset.value} x {quantity}")

    def _pay_interest(self, player: PlayerState, effect: PayInterest, _context) -> None:
        self.loans.charge_interest(player)

    def _one_time_multiplier(
        self, player: PlayerState, effect: OneTimeHarvestMultiplier, _context
    ) -> None:
        if player.apply_one_time_multiplier(effect.asset, effect.multiplier):
            self.event_log.log(
                EventType.MULTIPLIER_SET,
                player.player_id,
                asset=effect.asset.value,
                multiplier=effect.multiplier,
            )
        else:
            self.event_log.log(
                EventType.NO_EFFECT,
                player.player_id,
                reason=f"{effect.asset.value} is not harvested",
            )

    # ------------------------------------------------------------------
    # Tile handlers

    def _tile_no_effect(self, player: PlayerState, effect: NoEffect, depth: int) -> None:
        self.event_log.log(EventType.NO_EFFECT, player.player_id)

    def _tile_draw_card(self, player: PlayerState, effect: DrawCard, depth: int) -> None:
        card = self.game.draw_card(effect.source)
        self.event_log.log(
            EventType.CARD_DRAW,
            player.player_id,
            source=effect.source.value,
            card_id=card.id,
            title=card.title,
        )
        if effect.source == CardSource.OPTION_TO_BUY:
            player.hand.append(card)
            self.event_log.log(
                EventType.CARD_TO_HAND, player.player_id, card_id=card.id, title=card.title
            )
            return

        deck = self.game.deck_for(effect.source)
        try:
            if effect.source == CardSource.FARMER_FATE:
                self.apply_card_effect(player.player_id, card)
            else:
                amount = self.game.harvest_manager.expense_for(player, card)
                self._charge(player, amount, card.title)
        finally:
            deck.discard(card)

    def _tile_gain_cash(self, player: PlayerState, effect: GainCash, depth: int) -> None:
        player.cash += effect.amount
        self.event_log.log(EventType.INCOME, player.player_id, amount=effect.amount, cash=player.cash)

    def _tile_pay_cash(self, player: PlayerState, effect: PayCash, depth: int) -> None:
        self._charge(player, effect.amount, "tile")

    def _tile_go_to(self, player: PlayerState, effect: GoToTile, depth: int) -> None:
        destination = self.game.board.get_tile(effect.index)
        player.position = destination.index
        self.event_log.log(
            EventType.MOVE, player.player_id, position=destination.index, tile=destination.name
        )
        if depth >= MAX_TILE_CHAIN_DEPTH:
            return
        self.resolve_tile(player.player_id, destination, depth + 1)

    def _tile_double_yield(self, player: PlayerState, effect: DoubleYieldForCrop, depth: int) -> None:
        player.set_crop_multiplier(effect.asset, 2.0)
        self.event_log.log(
            EventType.MULTIPLIER_SET, player.player_id, asset=effect.asset.value, multiplier=2.0
        )

    def _tile_go_to_and_gain(self, player: PlayerState, effect: GoToTileAndGainCash, depth: int) -> None:
        destination = self.game.board.get_tile(effect.index)
        player.position = destination.index
        player.cash += effect.amount
        self.event_log.log(
            EventType.MOVE, player.player_id, position=destination.index, tile=destination.name
        )
        self.event_log.log(EventType.INCOME, player.player_id, amount=effect.amount, cash=player.cash)

    def _tile_gain_if_asset(self, player: PlayerState, effect: GainCashIfAsset, depth: int) -> None:
        if player.quantity(effect.asset) <= 0:
            self.event_log.log(
                EventType.NO_EFFECT, player.player_id, reason=f"no {effect.asset.value}"
            )
            return
        player.cash += effect.amount
        self.event_log.log(EventType.INCOME, player.player_id, amount=effect.amount, cash=player.cash)

    def _tile_pay_if_asset(self, player: PlayerState, effect: PayCashIfAsset, depth: int) -> None:
        if player.quantity(effect.asset) <= 0:
            self.event_log.log(
                EventType.NO_EFFECT, player.player_id, reason=f"no {effect.asset.value}"
            )
            return
        self._charge(player, effect.amount, f"owns {effect.asset.value}")

    def _tile_harvest_bonus(self, player: PlayerState, effect: HarvestBonusPerAcre, depth: int) -> None:
        quantity = player.quantity(effect.asset)
        total = quantity * effect.bonus
        # Only bonuses are paid; a negative rate leaves the player untouched.
        if total <= 0:
            self.event_log.log(
                EventType.NO_EFFECT,
                player.player_id,
                reason=f"no bonus for {quantity} {effect.asset.value}",
            )
            return
        player.cash += total
        self.event_log.log(
            EventType.INCOME,
            player.player_id,
            amount=total,
            reason=f"{effect.bonus} per {effect.asset.value} x {quantity}",
            cash=player.cash,
        )

    def _tile_move_and_harvest(
        self, player: PlayerState, effect: MoveAndHarvestIfAsset, depth: int
    ) -> None:
        if player.quantity(effect.asset) <= 0:
            self.event_log.log(
                EventType.NO_EFFECT, player.player_id, reason=f"no {effect.asset.value}"
            )
            return
        destination = self.game.board.get_tile(effect.destination)
        player.position = destination.index
        player.cash += effect.bonus
        self.event_log.log(
            EventType.MOVE, player.player_id, position=destination.index, tile=destination.name
        )
        self.event_log.log(EventType.INCOME, player.player_id, amount=effect.bonus, cash=player.cash)
        self.process_harvest(player.player_id, effect.harvest_type)

    # ------------------------------------------------------------------
    # Card handlers

    def _card_income(self, player: PlayerState, effect: Income, card: Card) -> None:
        player.cash += effect.amount
        self.event_log.log(EventType.INCOME, player.player_id, amount=effect.amount, cash=player.cash)

    def _card_expense(self, player: PlayerState, effect: Expense, card: Card) -> None:
        self._charge(player, effect.amount, card.title)

    def _card_buy_asset(self, player: PlayerState, effect: BuyAsset, card: Card) -> None:
        total = effect.quantity * effect.cost
        if player.cash < total:
            raise InvalidOperationError(
                f"{player.name} needs ${total} to buy {effect.asset.value} but has ${player.cash}"
            )
        self.game.check_cow_cap(player, effect.asset, effect.quantity)
        player.cash -= total
        player.add_asset(effect.asset, effect.quantity, total)
        self.event_log.log(
            EventType.PURCHASE,
            player.player_id,
            asset=effect.asset.value,
            quantity=effect.quantity,
            cost=total,
        )

    def _card_income_per_asset(self, player: PlayerState, effect: IncomePerAsset, card: Card) -> None:
        quantity = player.quantity(effect.asset)
        total = quantity * effect.rate
        if total <= 0:
            self.event_log.log(
                EventType.NO_EFFECT, player.player_id, reason=f"no {effect.asset.value}"
            )
            return
        player.cash += total
        player.add_income(effect.asset, total)
        self.event_log.log(EventType.INCOME, player.player_id, amount=total, cash=player.cash)

    def _card_income_per_acre(self, player: PlayerState, effect: IncomePerLandAcre, card: Card) -> None:
        total = player.land * effect.rate
        player.cash += total
        self.event_log.log(EventType.INCOME, player.player_id, amount=total, cash=player.cash)

    def _card_adjust_debt(self, player: PlayerState, effect: AdjustDebt, card: Card) -> None:
        new_debt = player.debt + effect.amount
        if new_debt > self.game.config.debt_ceiling:
            raise InsolvencyError(
                f"{player.name}'s debt would reach ${new_debt}, over the ceiling"
            )
        player.debt = max(0, new_debt)
        self.event_log.log(EventType.DEBT_ADJUSTED, player.player_id, amount=effect.amount, debt=player.debt)

    def _card_adjust_land(self, player: PlayerState, effect: AdjustLand, card: Card) -> None:
        player.land = max(0, player.land + effect.acres)
        self.event_log.log(EventType.LAND_ADJUSTED, player.player_id, acres=effect.acres, land=player.land)

    def _card_collect_from_others(
        self, player: PlayerState, effect: CollectFromOthersIfHas, card: Card
    ) -> None:
        collected = 0
        for other in self.game.players.values():
            if other.player_id == player.player_id or not other.has_asset(effect.asset):
                continue
            if self.loans.can_cover(other, effect.amount):
                self._charge(other, effect.amount, card.title)
                collected += effect.amount
            elif other.cash > 0:
                collected += other.cash
                self.event_log.log(
                    EventType.EXPENSE, other.player_id, amount=other.cash, reason=card.title, cash=0
                )
                other.cash = 0
        player.cash += collected
        self.event_log.log(
            EventType.COLLECTION, player.player_id, amount=collected, cash=player.cash
        )

    def _card_pay_if_no_asset(
        self, player: PlayerState, effect: PayIfNoAssetDistribute, card: Card
    ) -> None:
        if player.has_asset(effect.required_asset):
            self.event_log.log(
                EventType.NO_EFFECT, player.player_id, reason=f"owns {effect.required_asset.value}"
            )
            return
        self._charge(player, effect.amount, card.title)

    def _card_income_if_has(self, player: PlayerState, effect: IncomeIfHas, card: Card) -> None:
        if not player.has_asset(effect.asset):
            self.event_log.log(
                EventType.NO_EFFECT, player.player_id, reason=f"no {effect.asset.value}"
            )
            return
        player.cash += effect.amount
        self.event_log.log(EventType.INCOME, player.player_id, amount=effect.amount, cash=player.cash)

    def _card_suppress_harvest(self, player: PlayerState, effect: GameEffect, card: Card) -> None:
        player.harvest_income_suppressed = True
        self.event_log.log(EventType.NOTICE, player.player_id, text=card.description_brief)

    def _card_add_persistent(self, player: PlayerState, effect: AddPersistentEffect, card: Card) -> None:
        player.add_persistent_effect(
            PersistentEffect(effect.effect_type, effect.multiplier, effect.years)
        )
        self.event_log.log(
            EventType.PERSISTENT_EFFECT_ADDED,
            player.player_id,
            effect=effect.effect_type.value,
            multiplier=effect.multiplier,
            years=effect.years,
        )

    def _card_slaughter_cows(
        self, player: PlayerState, effect: SlaughterCowsWithoutCompensation, card: Card
    ) -> None:
        record = player.remove_asset(AssetType.COWS)
        if record is None:
            self.event_log.log(EventType.NO_EFFECT, player.player_id, reason="no cows")
            return
        self.event_log.log(
            EventType.ASSET_LOST, player.player_id, asset=AssetType.COWS.value, quantity=record.quantity
        )

    def _card_lease_ridge(self, player: PlayerState, effect: LeaseRidge, card: Card) -> None:
        self.event_log.log(
            EventType.NOTICE,
            player.player_id,
            text=f"{effect.ridge_name} Ridge can be leased with an Option to Buy",
        )

    def _card_optional_buy(self, player: PlayerState, effect: OptionalBuyAsset, card: Card) -> None:
        """Farmer's Fate purchases are settled on the spot; others wait in hand."""
        if card.source != CardSource.FARMER_FATE:
            self.event_log.log(EventType.NOTICE, player.player_id, text=card.description_brief)
            return

        shortfall = max(0, effect.cost - player.cash)
        if shortfall > self.loans.borrowing_capacity(player):
            self.event_log.log(
                EventType.OPTION_DECLINED,
                player.player_id,
                card_id=card.id,
                reason="cannot raise the cash",
            )
            return
        try:
            self.game.check_cow_cap(player, effect.asset, effect.quantity)
        except InvalidOperationError as exc:
            self.event_log.log(
                EventType.OPTION_DECLINED, player.player_id, card_id=card.id, reason=str(exc)
            )
            return

        self.loans.borrow(player, shortfall, reason=card.title)
        player.cash -= effect.cost
        player.add_asset(effect.asset, effect.quantity, effect.cost)
        self.event_log.log(
            EventType.PURCHASE,
            player.player_id,
            asset=effect.asset.value,
            quantity=effect.quantity,
            cost=effect.cost,
        )

    def _card_mt_st_helens(self, player: PlayerState, effect: MtStHelensDisaster, card: Card) -> None:
        bonus = player.quantity(effect.bonus_asset) * effect.bonus_per_acre
        if bonus > 0:
            player.cash += bonus
            self.event_log.log(EventType.INCOME, player.player_id, amount=bonus, cash=player.cash)

        for other in self.game.players.values():
            if other.player_id == player.player_id:
                continue
            roll = self.game.rng.randint(1, 6)
            hit = roll % 2 == 0
            acres = sum(other.quantity(asset) for asset in effect.affected_assets)
            cost = acres * effect.cleanup_per_acre if hit else 0
            self.event_log.log(
                EventType.DISASTER_ROLL, other.player_id, roll=roll, hit=hit, cost=cost
            )
            if cost <= 0:
                continue
            try:
                self._charge(other, cost, card.title)
            except InsolvencyError as exc:
                logger.warning("Player %s could not pay cleanup: %s", other.player_id, exc)
                self.event_log.log(EventType.EFFECT_FAILED, other.player_id, error=str(exc))
