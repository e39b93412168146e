"""Shared test fixtures for farming engine tests."""

import pytest

from farming import GameConfig, Player, create_game


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def two_players():
    """Two test players."""
    return [Player(0, "Alice"), Player(1, "Bob")]


@pytest.fixture
def four_players():
    """Four test players."""
    return [
        Player(0, "Alice"),
        Player(1, "Bob"),
        Player(2, "Charlie"),
        Player(3, "Diana"),
    ]


@pytest.fixture
def basic_game(game_config, two_players):
    """Basic game with two players and fixed seed."""
    return create_game(game_config, two_players)


@pytest.fixture
def four_player_game(game_config, four_players):
    """Game with four players and fixed seed."""
    return create_game(game_config, four_players)


@pytest.fixture
def stack_deck():
    """
    Move the first copy of a catalog card to the top of a deck's draw pile.

    Returns the card that will be drawn next.
    """

    def _stack(deck, catalog_id):
        for pile in (deck.draw_pile, deck.discard_pile):
            for card in pile:
                if card.catalog_id == catalog_id:
                    pile.remove(card)
                    deck.draw_pile.insert(0, card)
                    return card
        raise AssertionError(f"Catalog card {catalog_id} is not in the deck")

    return _stack
