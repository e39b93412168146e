"""
Tests for player decision sources.
"""

from farming import AssetType, GameConfig, Player, PlayerType, create_game
from farming.agents import AutoAgent, CallbackAgent
from farming.cards import Card
from farming.effects import CardSource, OptionalBuyAsset


def test_ai_players_get_auto_agents(basic_game):
    assert isinstance(basic_game.agent_for(0), AutoAgent)
    assert isinstance(basic_game.agent_for(1), AutoAgent)


def test_human_players_need_an_agent():
    players = [Player(0, "Alice", PlayerType.HUMAN), Player(1, "Bob")]
    game = create_game(GameConfig(seed=1), players)
    assert game.agent_for(0) is None
    assert game.offer_options(0) is None


def test_auto_agent_bids_share_of_cash(basic_game):
    agent = basic_game.agent_for(1)

    assert agent.bid(basic_game, AssetType.HAY, 10, 0) == 4000
    assert agent.bid(basic_game, AssetType.HAY, 10, 4000) is None
    assert agent.accept_bank_loan(basic_game, 100)
    assert not agent.accept_bank_loan(basic_game, 0)


def test_callback_agent_declines_by_default(basic_game):
    agent = CallbackAgent(0, "Alice")

    assert not agent.accept_bank_loan(basic_game, 5000)
    assert agent.bid(basic_game, AssetType.HAY, 10, 0) is None
    assert agent.choose_option(basic_game, basic_game.hand(0)) is None
    assert not agent.confirm_option_loan(basic_game, basic_game.hand(0)[0], 1000)


def test_callback_agent_confirms_option_loan(two_players):
    card = Card(9090, 909, "Buy Hay", "", "", OptionalBuyAsset(AssetType.HAY, 10, 20000),
                CardSource.OPTION_TO_BUY)
    seen = []

    def confirm(chosen, shortfall):
        seen.append(shortfall)
        return True

    agent = CallbackAgent(
        0, "Alice", on_choose_option=lambda cards: card, on_option_loan=confirm
    )
    game = create_game(GameConfig(seed=2), two_players, {0: agent})
    player = game.players[0]
    player.hand.append(card)
    player.cash = 8000

    assert game.offer_options(0) == card
    assert seen == [12000]
    assert player.debt == 12000
    assert player.quantity(AssetType.HAY) == 20


def test_unfinanceable_choice_is_declined(two_players):
    card = Card(9090, 909, "Buy Hay", "", "", OptionalBuyAsset(AssetType.HAY, 10, 20000),
                CardSource.OPTION_TO_BUY)
    agent = CallbackAgent(
        0, "Alice", on_choose_option=lambda cards: card, on_option_loan=lambda c, s: True
    )
    game = create_game(GameConfig(seed=2), two_players, {0: agent})
    player = game.players[0]
    player.hand.append(card)
    player.cash = 1000
    player.debt = 40000

    assert game.offer_options(0) is None
    assert player.debt == 40000
    assert card in player.hand
