"""
Tests for exercising Option to Buy cards, ridge leases and the cow cap.
"""

import pytest

from farming import (
    AssetType,
    CardNotFoundError,
    InsolvencyError,
    InvalidOperationError,
)
from farming.cards import Card, expand_catalog, farmer_fate_catalog
from farming.effects import CardSource, LeaseRidge, OptionalBuyAsset
from farming.money import EventType


def option(card_id, effect):
    return Card(card_id, card_id // 10, "Test Option", "", "", effect, CardSource.OPTION_TO_BUY)


def give(game, player_id, card):
    game.players[player_id].hand.append(card)
    return card


def test_exercise_with_cash(basic_game):
    player = basic_game.players[0]
    player.cash = 30000
    card = give(basic_game, 0, option(9090, OptionalBuyAsset(AssetType.HAY, 10, 20000)))

    basic_game.exercise_option(0, card.id)

    assert player.cash == 10000
    assert player.quantity(AssetType.HAY) == 20
    assert player.assets[AssetType.HAY].total_cost == 20000
    assert card not in player.hand
    assert card in basic_game.option_to_buy_deck.discard_pile


def test_shortfall_requires_confirmation(basic_game):
    player = basic_game.players[0]
    player.cash = 6000
    card = give(basic_game, 0, option(9090, OptionalBuyAsset(AssetType.HAY, 10, 20000)))

    with pytest.raises(InvalidOperationError):
        basic_game.exercise_option(0, card.id)

    assert player.cash == 6000
    assert card in player.hand


def test_confirmed_loan_has_no_fee(basic_game):
    player = basic_game.players[0]
    player.cash = 6000
    card = give(basic_game, 0, option(9090, OptionalBuyAsset(AssetType.HAY, 10, 20000)))

    basic_game.exercise_option(0, card.id, confirm_loan=True)

    assert player.debt == 14000
    assert player.cash == 0
    assert player.quantity(AssetType.HAY) == 20


def test_full_price_can_be_financed(basic_game):
    """A player with no cash may borrow the whole price."""
    player = basic_game.players[0]
    player.cash = 0
    card = give(basic_game, 0, option(9000, OptionalBuyAsset(AssetType.COWS, 10, 5000)))

    terms = basic_game.option_loan_terms(0, card.id)
    assert terms.shortfall == 5000
    assert not terms.can_pay_cash
    assert terms.can_finance

    basic_game.exercise_option(0, card.id, confirm_loan=True)

    assert player.debt == 5000
    assert player.cash == 0
    assert player.quantity(AssetType.COWS) == 10
    assert card not in player.hand


def test_loan_terms_report_ceiling(basic_game):
    player = basic_game.players[0]
    player.cash = 0
    player.debt = 46000
    card = give(basic_game, 0, option(9000, OptionalBuyAsset(AssetType.COWS, 10, 5000)))

    terms = basic_game.option_loan_terms(0, card.id)

    assert not terms.can_finance
    assert "ceiling" in terms.reason


def test_loan_over_ceiling_rejected(basic_game):
    player = basic_game.players[0]
    player.cash = 5000
    player.debt = 40000
    card = give(basic_game, 0, option(9090, OptionalBuyAsset(AssetType.HAY, 10, 20000)))

    with pytest.raises(InsolvencyError):
        basic_game.exercise_option(0, card.id, confirm_loan=True)

    assert player.debt == 40000
    assert player.cash == 5000


def test_option_window_closes_after_spring_planting(basic_game):
    player = basic_game.players[0]
    player.cash = 30000
    card = give(basic_game, 0, option(9090, OptionalBuyAsset(AssetType.HAY, 10, 20000)))

    player.position = 14
    assert basic_game.can_exercise_option(0)
    player.position = 15
    assert not basic_game.can_exercise_option(0)

    with pytest.raises(InvalidOperationError):
        basic_game.exercise_option(0, card.id)
    assert player.cash == 30000


def test_cow_cap(basic_game):
    player = basic_game.players[0]
    player.cash = 20000
    player.add_asset(AssetType.COWS, 15, 7500)
    card = give(basic_game, 0, option(9000, OptionalBuyAsset(AssetType.COWS, 10, 5000)))

    with pytest.raises(InvalidOperationError):
        basic_game.exercise_option(0, card.id)

    assert player.quantity(AssetType.COWS) == 15
    assert player.cash == 20000


def test_cow_cap_allows_exactly_twenty(basic_game):
    player = basic_game.players[0]
    player.add_asset(AssetType.COWS, 10, 5000)
    card = give(basic_game, 0, option(9000, OptionalBuyAsset(AssetType.COWS, 10, 5000)))

    basic_game.exercise_option(0, card.id)

    assert player.quantity(AssetType.COWS) == 20


def test_card_not_in_hand(basic_game):
    with pytest.raises(CardNotFoundError):
        basic_game.exercise_option(0, 123456)


def test_non_option_card_rejected(basic_game):
    player = basic_game.players[0]
    fate_card = expand_catalog(farmer_fate_catalog())[0]
    player.hand.append(fate_card)

    with pytest.raises(InvalidOperationError):
        basic_game.exercise_option(0, fate_card.id)


def test_lease_ridge(basic_game):
    player = basic_game.players[0]
    player.cash = 25000
    card = give(basic_game, 0, option(9070, LeaseRidge("Ahtanum", 20000, 20)))

    basic_game.exercise_option(0, card.id)

    ridge = basic_game.get_ridge("Ahtanum")
    assert ridge.leased_by == 0
    assert ridge.cow_count == 20
    assert player.total_ridge_value == 20000
    assert player.cash == 5000
    assert basic_game.player_ridges(0) == [ridge]
    assert ridge not in basic_game.available_ridges()
    assert basic_game.ridge_status("Ahtanum").lessee_name == "Alice"


def test_ridge_cannot_be_leased_twice(basic_game):
    basic_game.players[0].cash = 25000
    basic_game.players[1].cash = 25000
    first = give(basic_game, 0, option(9070, LeaseRidge("Ahtanum", 20000, 20)))
    second = give(basic_game, 1, option(9071, LeaseRidge("Ahtanum", 20000, 20)))
    basic_game.exercise_option(0, first.id)

    with pytest.raises(InvalidOperationError):
        basic_game.exercise_option(1, second.id)

    assert basic_game.players[1].cash == 25000
    assert basic_game.players[1].total_ridge_value == 0


def test_ridge_cows_do_not_count_toward_cap(basic_game):
    player = basic_game.players[0]
    player.cash = 50000
    player.add_asset(AssetType.COWS, 20, 10000)
    card = give(basic_game, 0, option(9080, LeaseRidge("Cascade", 40000, 40)))

    basic_game.exercise_option(0, card.id)

    assert basic_game.ridge_cow_count("Cascade") == 40
    assert player.quantity(AssetType.COWS) == 20


def test_auto_agent_exercises_affordable_option(basic_game):
    player = basic_game.players[0]
    player.hand.clear()
    player.cash = 6000
    give(basic_game, 0, option(9090, OptionalBuyAsset(AssetType.HAY, 10, 20000)))
    cheap = give(basic_game, 0, option(9000, OptionalBuyAsset(AssetType.COWS, 10, 5000)))

    exercised = basic_game.offer_options(0)

    assert exercised == cheap
    assert player.quantity(AssetType.COWS) == 10
    assert player.cash == 1000


def test_offer_options_outside_window(basic_game):
    player = basic_game.players[0]
    player.position = 20
    player.cash = 100000

    assert basic_game.offer_options(0) is None
    assert player.cash == 100000


def test_option_exercised_event(basic_game):
    player = basic_game.players[0]
    player.cash = 30000
    card = give(basic_game, 0, option(9090, OptionalBuyAsset(AssetType.HAY, 10, 20000)))

    basic_game.exercise_option(0, card.id)

    event = basic_game.event_log.get_recent_events(1)[0]
    assert event.event_type == EventType.OPTION_EXERCISED
    assert event.details["card_id"] == card.id
    assert event.details["loan"] == 0
