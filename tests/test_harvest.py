"""
Tests for harvest income, operating expenses and harvest multipliers.
"""

import pytest

from farming import AssetType, DeckExhaustedError
from farming.effects import HarvestType
from farming.harvest import yield_for
from farming.money import EventType
from farming.player import EffectType, PersistentEffect

FUEL_BILL = 101
CUSTOM_HIRE_NO_TRACTOR = 103
FEED_BILL = 108


def test_yield_table_blocks():
    assert yield_for(AssetType.HAY, 10, 0) == 400
    assert yield_for(AssetType.HAY, 20, 0) == 800
    assert yield_for(AssetType.HAY, 29, 5) == 6000
    assert yield_for(AssetType.FRUIT, 5, 2) == 6000
    assert yield_for(AssetType.FRUIT, 4, 5) == 0


def test_harvest_banks_income_then_pays_expense(basic_game, stack_deck):
    player = basic_game.players[0]
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)
    cash = player.cash

    result = basic_game.engine.process_harvest(0, HarvestType.HAY_CUTTING_1)

    expected = yield_for(AssetType.HAY, 10, result.roll)
    assert result.gross_income == expected
    assert result.expense == 1000
    assert result.net_income == expected - 1000
    assert player.cash == cash + expected - 1000
    assert player.assets[AssetType.HAY].total_income == expected


def test_harvest_expense_can_force_a_loan(basic_game, stack_deck):
    player = basic_game.players[0]
    player.cash = 0
    player.harvest_income_suppressed = True
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FEED_BILL)
    player.add_asset(AssetType.COWS, 20, 0)

    result = basic_game.engine.process_harvest(0, HarvestType.LIVESTOCK)

    assert result.expense == 2000
    assert player.debt == 5000
    assert player.cash == 5000 - 1000 - 2000


def test_no_asset_skips_harvest_and_draws_nothing(basic_game):
    deck = basic_game.harvest_manager.operating_cost_deck
    draw_pile = list(deck.draw_pile)
    cash = basic_game.players[0].cash

    result = basic_game.engine.process_harvest(0, HarvestType.CHERRY)

    assert result.skipped
    assert result.gross_income == 0
    assert result.expense == 0
    assert deck.draw_pile == draw_pile
    assert basic_game.players[0].cash == cash
    assert basic_game.event_log.get_recent_events(1)[0].event_type == EventType.HARVEST_SKIPPED


def test_crop_multiplier_applies_once(basic_game, stack_deck):
    player = basic_game.players[0]
    player.set_crop_multiplier(AssetType.HAY, 2.0)
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)

    result = basic_game.engine.process_harvest(0, HarvestType.HAY_CUTTING_1)

    assert result.gross_income == 2 * yield_for(AssetType.HAY, 10, result.roll)
    assert player.crop_multiplier(AssetType.HAY) == 1.0


def test_livestock_bonus_scales_cow_income(basic_game, stack_deck):
    player = basic_game.players[0]
    player.add_asset(AssetType.COWS, 10, 0)
    player.add_persistent_effect(PersistentEffect(EffectType.LIVESTOCK_HARVEST_BONUS, 1.5, 2))
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)

    result = basic_game.engine.process_harvest(0, HarvestType.LIVESTOCK)

    assert result.gross_income == int(yield_for(AssetType.COWS, 10, result.roll) * 1.5)


def test_suppressed_income_still_draws_expense(basic_game, stack_deck):
    player = basic_game.players[0]
    player.harvest_income_suppressed = True
    deck = basic_game.harvest_manager.operating_cost_deck
    card = stack_deck(deck, FUEL_BILL)
    cash = player.cash

    result = basic_game.engine.process_harvest(0, HarvestType.WHEAT)

    assert result.gross_income == 0
    assert result.expense == 1000
    assert result.expense_card == card
    assert card in deck.discard_pile
    assert player.cash == cash - 1000


def test_custom_hire_charged_only_without_equipment(basic_game, stack_deck):
    player = basic_game.players[0]
    deck = basic_game.harvest_manager.operating_cost_deck
    card = stack_deck(deck, CUSTOM_HIRE_NO_TRACTOR)

    assert basic_game.harvest_manager.expense_for(player, card) == 2000
    player.add_asset(AssetType.TRACTOR, 1, 10000)
    assert basic_game.harvest_manager.expense_for(player, card) == 0


def test_exhausted_expense_deck_raises(basic_game):
    deck = basic_game.harvest_manager.operating_cost_deck
    deck.draw_pile.clear()
    deck.discard_pile.clear()

    with pytest.raises(DeckExhaustedError):
        basic_game.engine.process_harvest(0, HarvestType.HAY_CUTTING_1)


def test_harvest_event_reports_one_based_roll(basic_game, stack_deck):
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)

    result = basic_game.engine.process_harvest(0, HarvestType.HAY_CUTTING_2)

    harvest = [e for e in basic_game.event_log.get_events() if e.event_type == EventType.HARVEST][-1]
    assert harvest.details["roll"] == result.roll + 1
    assert 1 <= harvest.details["roll"] <= 6


def test_partial_block_draws_expense_without_rolling(basic_game, stack_deck):
    player = basic_game.players[0]
    player.remove_asset(AssetType.HAY)
    player.add_asset(AssetType.HAY, 5, 0)
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)
    rng_state = basic_game.rng.getstate()
    cash = player.cash

    result = basic_game.engine.process_harvest(0, HarvestType.HAY_CUTTING_1)

    assert basic_game.rng.getstate() == rng_state
    assert result.roll is None
    assert result.gross_income == 0
    assert result.expense == 1000
    assert player.cash == cash - 1000
    harvest = [e for e in basic_game.event_log.get_events() if e.event_type == EventType.HARVEST][-1]
    assert harvest.details["roll"] is None


def test_suppressed_income_does_not_roll(basic_game, stack_deck):
    basic_game.players[0].harvest_income_suppressed = True
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)
    rng_state = basic_game.rng.getstate()

    result = basic_game.engine.process_harvest(0, HarvestType.WHEAT)

    assert basic_game.rng.getstate() == rng_state
    assert result.roll is None
