"""
Tests for game setup, turn resolution, passing the start tile and winning.
"""

import pytest

from farming import (
    AssetType,
    GameConfig,
    InvalidOperationError,
    Player,
    PlayerNotFoundError,
    RidgeNotFoundError,
    create_game,
    native_players,
    new_game,
)
from farming.config import NATIVE_ROSTER
from farming.game import GamePhase
from farming.money import EventType


def test_create_game_rejects_empty_roster(game_config):
    with pytest.raises(ValueError):
        create_game(game_config, [])


def test_create_game_rejects_duplicate_ids(game_config):
    with pytest.raises(ValueError):
        create_game(game_config, [Player(0, "Alice"), Player(0, "Bob")])


def test_setup_deals_option_cards(four_player_game):
    game = four_player_game
    for player in game.players.values():
        assert len(player.hand) == 2
        assert all(card.is_option for card in player.hand)
    assert len(game.option_to_buy_deck) == 40 - 8


def test_turn_order_is_a_permutation(four_player_game):
    assert sorted(four_player_game.turn_order) == [0, 1, 2, 3]


def test_turn_order_unshuffled(four_players):
    game = create_game(GameConfig(seed=1, shuffle_turn_order=False), four_players)
    assert game.turn_order == [0, 1, 2, 3]
    assert game.current_player().player_id == 0
    game.end_turn()
    assert game.current_player().player_id == 1


def test_end_turn_wraps(basic_game):
    first = basic_game.current_player().player_id
    basic_game.end_turn()
    basic_game.end_turn()
    assert basic_game.current_player().player_id == first
    assert basic_game.turn_number == 2


def test_roll_die_range(basic_game):
    rolls = {basic_game.roll_die() for _ in range(200)}
    assert rolls == {1, 2, 3, 4, 5, 6}


def test_resolve_turn_moves_and_returns_events(basic_game):
    events = basic_game.resolve_turn(0, 5)

    assert basic_game.players[0].position == 5
    types = [e.event_type for e in events]
    assert types[0] == EventType.TURN_START
    assert EventType.DICE_ROLL in types
    assert EventType.MOVE in types
    assert types[-1] == EventType.TURN_END
    assert basic_game.players[0].cash == 6000


def test_resolve_turn_rejects_bad_roll(basic_game):
    with pytest.raises(InvalidOperationError):
        basic_game.resolve_turn(0, 0)


def test_unknown_player(basic_game):
    with pytest.raises(PlayerNotFoundError):
        basic_game.resolve_turn(7, 3)
    with pytest.raises(LookupError):
        basic_game.get_player(7)


def test_unknown_ridge(basic_game):
    with pytest.raises(RidgeNotFoundError):
        basic_game.get_ridge("Yakima")


def test_every_lap_pays_side_job(basic_game):
    """Side job pay and the Christmas bonus arrive from the first lap on."""
    player = basic_game.players[0]
    assert player.eligible_for_side_job_pay
    player.position = 47

    events = basic_game.resolve_turn(0, 2)

    assert player.year == 2
    assert EventType.SIDE_JOB_PAY in [e.event_type for e in events]
    assert player.cash == 5000 + 5000 + 1000

    player.position = 47
    basic_game.resolve_turn(0, 2)

    assert player.year == 3
    assert player.cash == 11000 + 5000 + 1000


def test_passing_start_without_landing_pays_side_job(basic_game):
    player = basic_game.players[0]
    player.position = 47

    events = basic_game.resolve_turn(0, 3)

    assert player.position == 1
    side_job = [e for e in events if e.event_type == EventType.SIDE_JOB_PAY]
    assert len(side_job) == 1
    assert side_job[0].details["amount"] == 5000


def test_passing_start_resets_crop_multipliers(basic_game):
    player = basic_game.players[0]
    player.set_crop_multiplier(AssetType.HAY, 2.0)
    player.position = 48

    basic_game.resolve_turn(0, 3)

    assert player.position == 2
    assert player.crop_multiplier(AssetType.HAY) == 1.0


def test_exhausted_deck_is_recorded_not_raised(basic_game):
    deck = basic_game.farmer_fate_deck
    deck.draw_pile.clear()
    deck.discard_pile.clear()

    events = basic_game.resolve_turn(0, 6)

    assert basic_game.players[0].position == 6
    failed = [e for e in events if e.event_type == EventType.EFFECT_FAILED]
    assert len(failed) == 1


def test_insolvency_is_recorded_not_raised(basic_game):
    player = basic_game.players[0]
    player.cash = 0
    player.debt = 50000

    events = basic_game.resolve_turn(0, 9)

    assert player.debt == 50000
    assert EventType.EFFECT_FAILED in [e.event_type for e in events]


def test_winning_net_worth_ends_game(basic_game):
    player = basic_game.players[0]
    player.cash = 249000

    basic_game.resolve_turn(0, 5)

    assert basic_game.game_over
    assert basic_game.winner() is player
    assert basic_game.has_won(0)
    assert EventType.GAME_END in [e.event_type for e in basic_game.event_log.get_events()]


def test_phase_follows_position(basic_game):
    player = basic_game.current_player()
    for position, phase in [
        (0, GamePhase.SPRING_PLANTING),
        (14, GamePhase.SPRING_PLANTING),
        (15, GamePhase.EARLY_SUMMER),
        (26, GamePhase.LATE_SUMMER),
        (48, GamePhase.END_OF_YEAR),
    ]:
        player.position = position
        assert basic_game.phase == phase


def test_native_players_roster():
    players = native_players(3)
    assert [p.name for p in players] == [e.name for e in NATIVE_ROSTER[:3]]
    assert players[0].color == "Red"
    with pytest.raises(ValueError):
        native_players(7)


def test_new_game_defaults_to_full_roster():
    game = new_game(config=GameConfig(seed=5))
    assert len(game.players) == 6
    assert len(game.option_to_buy_deck) == 40 - 12


def test_scoreboard_sorted_by_net_worth(basic_game):
    basic_game.players[1].cash = 90000

    rows = basic_game.scoreboard()

    assert [row.player_id for row in rows] == [1, 0]
    assert rows[0].net_worth == basic_game.players[1].net_worth
    assert rows[1].assets == {"hay": 10, "grain": 10}


def test_simulated_game_keeps_invariants():
    """Play a seeded AI game and check the money rules hold every turn."""
    game = create_game(GameConfig(seed=11), native_players(4))
    for _ in range(300):
        if game.game_over:
            break
        pid = game.current_player().player_id
        game.resolve_turn(pid, game.roll_die())
        if not game.game_over:
            game.offer_options(pid)
        for player in game.players.values():
            assert player.debt <= game.config.debt_ceiling
            assert player.quantity(AssetType.COWS) <= game.config.max_cows
        total_cards = (
            len(game.option_to_buy_deck)
            + sum(len(p.hand) for p in game.players.values())
        )
        assert total_cards == 40
        assert len(game.farmer_fate_deck) == 22
        assert len(game.harvest_manager.operating_cost_deck) == 24
        game.end_turn()
