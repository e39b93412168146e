"""
Tests for board layout and tile effect resolution.
"""

import pytest

from farming import AssetType, Board, TileNotFoundError
from farming.effects import HarvestType
from farming.money import EventType

RUSSIAN_WHEAT_SALE = 219
FUEL_BILL = 101


def _land(game, player_id, index):
    return game.engine.resolve_tile(player_id, game.board.get_tile(index))


def _types(events):
    return [e.event_type for e in events]


def test_board_has_49_tiles():
    board = Board()
    assert len(board) == 49
    assert [t.index for t in board.tiles] == list(range(49))
    assert board.get_tile(0).name == "Christmas Vacation"
    assert board.get_tile(14).name == "Spring Planting"


def test_tile_out_of_range():
    with pytest.raises(TileNotFoundError):
        Board().get_tile(49)
    with pytest.raises(TileNotFoundError):
        Board().get_tile(-1)


def test_early_tiles_have_no_harvest():
    board = Board()
    assert all(board.get_tile(i).harvest_type == HarvestType.NONE for i in range(19))
    assert board.get_tile(19).harvest_type == HarvestType.HAY_CUTTING_1
    assert board.get_tile(48).harvest_type == HarvestType.CORN


def test_christmas_bonus(basic_game):
    _land(basic_game, 0, 0)
    assert basic_game.players[0].cash == 6000


def test_interest_tile(basic_game):
    player = basic_game.players[0]
    player.debt = 10000

    _land(basic_game, 0, 1)

    assert player.cash == 4000


def test_pay_if_asset_tile_skips_without_asset(basic_game):
    events = _land(basic_game, 0, 3)

    assert basic_game.players[0].cash == 5000
    assert EventType.NO_EFFECT in _types(events)


def test_pay_if_asset_tile_charges_owner(basic_game):
    basic_game.players[0].add_asset(AssetType.COWS, 10, 5000)

    _land(basic_game, 0, 3)

    assert basic_game.players[0].cash == 4500


def test_double_yield_tile(basic_game):
    _land(basic_game, 0, 4)
    assert basic_game.players[0].crop_multiplier(AssetType.HAY) == 2.0


def test_go_to_tile_resolves_destination_once(basic_game):
    """February Week 3 jumps to Spring Planting, whose own effect applies."""
    player = basic_game.players[0]

    events = _land(basic_game, 0, 7)

    assert player.position == 14
    assert player.crop_multiplier(AssetType.GRAIN) == 2.0
    lands = [e for e in events if e.event_type == EventType.LAND]
    assert [e.details["depth"] for e in lands] == [0, 1]


def test_pay_cash_tile_with_forced_loan(basic_game):
    player = basic_game.players[0]
    player.cash = 500

    _land(basic_game, 0, 9)

    assert player.debt == 5000
    assert player.cash == 500 + 4000 - 2000


def test_skip_year_tile(basic_game):
    player = basic_game.players[0]
    player.position = 11

    _land(basic_game, 0, 11)

    assert player.year == 2
    assert player.position == 2


def test_draw_option_to_buy_goes_to_hand(basic_game):
    player = basic_game.players[0]
    before = len(player.hand)
    deck_size = len(basic_game.option_to_buy_deck)

    events = _land(basic_game, 0, 2)

    assert len(player.hand) == before + 1
    assert len(basic_game.option_to_buy_deck) == deck_size - 1
    assert EventType.CARD_TO_HAND in _types(events)


def test_draw_farmer_fate_applies_and_discards(basic_game, stack_deck):
    card = stack_deck(basic_game.farmer_fate_deck, RUSSIAN_WHEAT_SALE)
    size = len(basic_game.farmer_fate_deck)

    _land(basic_game, 0, 6)

    assert basic_game.players[0].cash == 7000
    assert basic_game.farmer_fate_deck.discard_pile[-1] == card
    assert len(basic_game.farmer_fate_deck) == size


def test_harvest_runs_before_tile_effect(basic_game, stack_deck):
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)

    events = _land(basic_game, 0, 19)

    types = _types(events)
    assert types.index(EventType.HARVEST) < types.index(EventType.INCOME)


def test_go_to_tile_and_gain_cash_does_not_resolve_destination(basic_game):
    player = basic_game.players[0]
    player.remove_asset(AssetType.GRAIN)
    hand = len(player.hand)

    _land(basic_game, 0, 30)

    assert player.position == 8
    assert player.cash == 10000
    assert len(player.hand) == hand


def test_gain_cash_if_asset(basic_game):
    player = basic_game.players[0]
    player.remove_asset(AssetType.GRAIN)

    _land(basic_game, 0, 31)
    assert player.cash == 5000

    player.add_asset(AssetType.HARVESTER, 1, 10000)
    _land(basic_game, 0, 31)
    assert player.cash == 6000


def test_negative_harvest_bonus_is_not_charged(basic_game, stack_deck):
    """Rain-sprouted wheat leaves only the operating expense to pay."""
    player = basic_game.players[0]
    player.harvest_income_suppressed = True
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)

    events = _land(basic_game, 0, 33)

    assert player.cash == 5000 - 1000
    assert _types(events)[-1] == EventType.NO_EFFECT


def test_failed_harvest_still_resolves_tile(basic_game, stack_deck):
    """An unpayable operating expense does not cost the tile's own bonus."""
    player = basic_game.players[0]
    player.cash = 0
    player.debt = 50000
    player.harvest_income_suppressed = True
    deck = basic_game.harvest_manager.operating_cost_deck
    card = stack_deck(deck, FUEL_BILL)

    events = _land(basic_game, 0, 19)

    types = _types(events)
    assert EventType.EFFECT_FAILED in types
    assert types.index(EventType.EFFECT_FAILED) < types.index(EventType.INCOME)
    assert player.cash == 1000
    assert player.debt == 50000
    assert card in deck.discard_pile


def test_positive_harvest_bonus(basic_game, stack_deck):
    player = basic_game.players[0]
    player.harvest_income_suppressed = True
    stack_deck(basic_game.harvest_manager.operating_cost_deck, FUEL_BILL)

    _land(basic_game, 0, 29)

    assert player.cash == 5000 - 1000 + 500


def test_move_and_harvest_requires_tractor(basic_game):
    player = basic_game.players[0]
    player.remove_asset(AssetType.HAY)
    player.position = 34

    _land(basic_game, 0, 34)
    assert player.position == 34

    player.add_asset(AssetType.TRACTOR, 1, 10000)
    _land(basic_game, 0, 34)
    assert player.position == 45
    assert player.cash == 6000


def test_livestock_market_collapse_sets_multiplier(basic_game):
    _land(basic_game, 0, 36)
    assert basic_game.players[0].crop_multiplier(AssetType.COWS) == 0.5


def test_independence_day_has_no_effect(basic_game):
    player = basic_game.players[0]
    player.remove_asset(AssetType.GRAIN)

    events = _land(basic_game, 0, 25)

    assert EventType.NO_EFFECT in _types(events)
    assert player.cash == 5000
