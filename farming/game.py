"""
Main game engine and state management.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from farming.agents import Agent, AutoAgent
from farming.auction import BankruptcyAuction
from farming.board import Board
from farming.cards import (
    Card,
    Deck,
    create_farmer_fate_deck,
    create_operating_expense_deck,
    create_option_to_buy_deck,
)
from farming.config import GameConfig, NATIVE_ROSTER
from farming.effects import CardSource, LeaseRidge, OptionalBuyAsset
from farming.engine import EffectEngine
from farming.exceptions import (
    CardNotFoundError,
    DeckExhaustedError,
    InsolvencyError,
    InvalidOperationError,
    PlayerNotFoundError,
    RidgeNotFoundError,
)
from farming.harvest import HarvestManager
from farming.money import EventLog, EventType, GameEvent, LoanResolver
from farming.player import AssetType, Player, PlayerState, PlayerType
from farming.ridge import Ridge, create_ridges
from farming.schemas import RidgeStatus, ScoreboardEntry

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Season of the farm year, taken from the current player's position."""

    SPRING_PLANTING = "spring_planting"
    EARLY_SUMMER = "early_summer"
    LATE_SUMMER = "late_summer"
    END_OF_YEAR = "end_of_year"


# Last board index belonging to each phase.
PHASE_BOUNDARIES = (
    (14, GamePhase.SPRING_PLANTING),
    (25, GamePhase.EARLY_SUMMER),
    (39, GamePhase.LATE_SUMMER),
    (48, GamePhase.END_OF_YEAR),
)


@dataclass
class OptionLoanTerms:
    """What exercising an Option to Buy would cost a player."""

    card_id: int
    cost: int
    cash: int
    shortfall: int
    can_pay_cash: bool
    can_finance: bool
    reason: str = ""


class GameState:
    """
    Represents the complete state of a farming game.
    This is the main interface for the game engine.
    """

    def __init__(
        self,
        config: GameConfig,
        players: List[Player],
        agents: Optional[Dict[int, Agent]] = None,
    ):
        self.config = config
        self.board = Board()
        self.event_log = EventLog()
        self.loans = LoanResolver(config, self.event_log)

        # One stream drives every shuffle, roll and disaster check.
        self.rng = random.Random(config.seed)

        self.players: Dict[int, PlayerState] = {}
        for player in players:
            state = PlayerState(
                player.player_id, player.name, config, player.player_type, player.color
            )
            state.add_asset(AssetType.HAY, config.starter_hay, 0)
            state.add_asset(AssetType.GRAIN, config.starter_grain, 0)
            self.players[player.player_id] = state

        self.harvest_manager = HarvestManager(
            create_operating_expense_deck(self.rng), self.rng, self.loans, self.event_log
        )
        self.farmer_fate_deck = create_farmer_fate_deck(self.rng)
        self.option_to_buy_deck = create_option_to_buy_deck(self.rng)
        self.ridges: Dict[str, Ridge] = {ridge.name: ridge for ridge in create_ridges()}

        self.turn_order: List[int] = [p.player_id for p in players]
        if config.shuffle_turn_order:
            self.rng.shuffle(self.turn_order)
        self.current_turn_index = 0
        self.turn_number = 0
        self.game_over = False
        self.winner_id: Optional[int] = None

        self.agents: Dict[int, Agent] = {}
        for pid, state in self.players.items():
            if agents and pid in agents:
                self.agents[pid] = agents[pid]
            elif state.player_type == PlayerType.AI:
                self.agents[pid] = AutoAgent(pid, state.name)

        self.engine = EffectEngine(self)
        self.auction = BankruptcyAuction(self)

        self.event_log.log(
            EventType.GAME_START,
            details={
                "players": [p.name for p in players],
                "turn_order": list(self.turn_order),
                "starting_cash": config.starting_cash,
                "seed": config.seed,
            },
        )
        self._deal_option_cards()

    def _deal_option_cards(self) -> None:
        for pid in self.turn_order:
            player = self.players[pid]
            for _ in range(self.config.otb_cards_per_player):
                card = self.option_to_buy_deck.draw()
                if card is None:
                    break
                player.hand.append(card)
                self.event_log.log(EventType.SETUP_DEAL, pid, card_id=card.id, title=card.title)

    # ------------------------------------------------------------------
    # Lookups

    def get_player(self, player_id: int) -> PlayerState:
        """Get a player's state or raise PlayerNotFoundError."""
        player = self.players.get(player_id)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} does not exist")
        return player

    def agent_for(self, player_id: int) -> Optional[Agent]:
        return self.agents.get(player_id)

    def get_ridge(self, name: str) -> Ridge:
        ridge = self.ridges.get(name)
        if ridge is None:
            raise RidgeNotFoundError(f"No ridge named {name}")
        return ridge

    def deck_for(self, source: CardSource) -> Deck:
        if source == CardSource.FARMER_FATE:
            return self.farmer_fate_deck
        if source == CardSource.OPTION_TO_BUY:
            return self.option_to_buy_deck
        return self.harvest_manager.operating_cost_deck

    def draw_card(self, source: CardSource) -> Card:
        """Draw from the given deck, raising DeckExhaustedError when it is empty."""
        card = self.deck_for(source).draw()
        if card is None:
            raise DeckExhaustedError(f"The {source.value} deck is empty")
        return card

    @property
    def phase(self) -> GamePhase:
        position = self.current_player().position
        for last_index, phase in PHASE_BOUNDARIES:
            if position <= last_index:
                return phase
        return GamePhase.END_OF_YEAR

    # ------------------------------------------------------------------
    # Turn flow

    def current_player(self) -> PlayerState:
        """Get the player whose turn it is."""
        return self.players[self.turn_order[self.current_turn_index % len(self.turn_order)]]

    def roll_die(self) -> int:
        return self.rng.randint(1, 6)

    def end_turn(self) -> None:
        """Pass the turn to the next player in order."""
        self.current_turn_index = (self.current_turn_index + 1) % len(self.turn_order)
        self.turn_number += 1

    def resolve_turn(self, player_id: int, roll: int) -> List[GameEvent]:
        """
        Move a player by ``roll`` and resolve where they land.

        Returns the events recorded during the turn. A deck running dry or
        a loan the bank refuses ends the tile's resolution early; the move
        itself stands and the failure is recorded.
        """
        if roll < 1:
            raise InvalidOperationError(f"Roll must be positive, got {roll}")
        player = self.get_player(player_id)
        start = len(self.event_log)

        player.turns_taken += 1
        self.event_log.log(EventType.TURN_START, player_id, turn=self.turn_number, year=player.year)
        self.event_log.log(EventType.DICE_ROLL, player_id, roll=roll)

        board_len = len(self.board)
        total = player.position + roll
        if total >= board_len:
            self._pass_start(player)

        player.position = total % board_len
        tile = self.board.get_tile(player.position)
        self.event_log.log(
            EventType.MOVE,
            player_id,
            position=tile.index,
            tile=tile.name,
            text=tile.description,
        )

        try:
            self.engine.resolve_tile(player_id, tile)
        except (DeckExhaustedError, InsolvencyError) as exc:
            logger.warning("Turn effect failed for player %s on %s: %s", player_id, tile.name, exc)
            self.event_log.log(EventType.EFFECT_FAILED, player_id, tile=tile.name, error=str(exc))

        for pid in list(self.players):
            self.auction.check_and_resolve(pid)

        self._check_winner(player_id)
        self.event_log.log(
            EventType.TURN_END, player_id, cash=player.cash, debt=player.debt, net_worth=player.net_worth
        )
        return self.event_log.events_since(start)

    def _pass_start(self, player: PlayerState) -> None:
        player.advance_year()
        self.event_log.log(EventType.PASS_START, player.player_id)
        self.event_log.log(EventType.YEAR_ADVANCE, player.player_id, year=player.year)
        if player.eligible_for_side_job_pay:
            player.cash += self.config.side_job_pay
            self.event_log.log(
                EventType.SIDE_JOB_PAY, player.player_id, amount=self.config.side_job_pay, cash=player.cash
            )
        player.eligible_for_side_job_pay = True
        player.harvest_income_suppressed = False
        player.reset_crop_multipliers()

    def _check_winner(self, player_id: int) -> None:
        if self.game_over or not self.has_won(player_id):
            return
        self.game_over = True
        self.winner_id = player_id
        logger.info("Player %s won with net worth %s", player_id, self.players[player_id].net_worth)
        self.event_log.log(
            EventType.GAME_END, player_id, net_worth=self.players[player_id].net_worth
        )

    def has_won(self, player_id: int) -> bool:
        return self.get_player(player_id).net_worth >= self.config.winning_net_worth

    def winner(self) -> Optional[PlayerState]:
        if self.winner_id is None:
            return None
        return self.players[self.winner_id]

    # ------------------------------------------------------------------
    # Options to Buy

    def can_exercise_option(self, player_id: int) -> bool:
        """Options may only be exercised early in the year."""
        return self.get_player(player_id).position <= self.config.option_window_end

    def option_cards(self, player_id: int) -> List[Card]:
        return [card for card in self.get_player(player_id).hand if card.is_option]

    @staticmethod
    def option_cost(card: Card) -> int:
        if not card.is_option:
            raise InvalidOperationError(f"{card.title} is not an Option to Buy")
        return card.effect.cost

    def check_cow_cap(self, player: PlayerState, asset: AssetType, quantity: int) -> None:
        if asset != AssetType.COWS:
            return
        if player.quantity(AssetType.COWS) + quantity > self.config.max_cows:
            raise InvalidOperationError(
                f"{player.name} may own at most {self.config.max_cows} cows"
            )

    def _validate_option(self, player: PlayerState, card: Card) -> None:
        effect = card.effect
        if isinstance(effect, OptionalBuyAsset):
            self.check_cow_cap(player, effect.asset, effect.quantity)
        elif isinstance(effect, LeaseRidge):
            ridge = self.get_ridge(effect.ridge_name)
            if ridge.is_leased():
                raise InvalidOperationError(
                    f"{ridge.name} Ridge is already leased by player {ridge.leased_by}"
                )
            if effect.cow_count != ridge.initial_cow_count:
                raise InvalidOperationError(
                    f"{ridge.name} Ridge must be stocked with {ridge.initial_cow_count} cows"
                )
        else:
            raise InvalidOperationError(f"{card.title} is not an Option to Buy")

    def option_is_legal(self, player_id: int, card: Card) -> bool:
        """Whether the card could be exercised now, money aside."""
        player = self.get_player(player_id)
        if not self.can_exercise_option(player_id):
            return False
        try:
            self._validate_option(player, card)
        except (InvalidOperationError, RidgeNotFoundError):
            return False
        return True

    def _find_in_hand(self, player: PlayerState, card_id: int) -> Card:
        for card in player.hand:
            if card.id == card_id:
                return card
        raise CardNotFoundError(f"Card {card_id} is not in {player.name}'s hand")

    def option_loan_terms(self, player_id: int, card_id: int) -> OptionLoanTerms:
        """Work out how an Option to Buy would be paid for."""
        player = self.get_player(player_id)
        card = self._find_in_hand(player, card_id)
        cost = self.option_cost(card)
        shortfall = max(0, cost - player.cash)

        reason = ""
        can_finance = shortfall <= self.loans.borrowing_capacity(player)
        if not can_finance:
            reason = f"a ${shortfall} loan would exceed the debt ceiling"
        return OptionLoanTerms(
            card_id, cost, player.cash, shortfall, shortfall == 0, can_finance, reason
        )

    def exercise_option(self, player_id: int, card_id: int, confirm_loan: bool = False) -> None:
        """
        Exercise an Option to Buy held in hand.

        Everything is validated first; a rejected call changes nothing.
        When cash is short the caller must confirm the loan, which is
        booked without an origination fee.
        """
        player = self.get_player(player_id)
        card = self._find_in_hand(player, card_id)
        if not card.is_option:
            raise InvalidOperationError(f"{card.title} is not an Option to Buy")
        if not self.can_exercise_option(player_id):
            raise InvalidOperationError(
                f"Options can only be exercised through tile {self.config.option_window_end}"
            )
        self._validate_option(player, card)

        terms = self.option_loan_terms(player_id, card_id)
        if terms.shortfall > 0:
            if not confirm_loan:
                raise InvalidOperationError(
                    f"{card.title} costs ${terms.cost}; a ${terms.shortfall} loan must be confirmed"
                )
            if not terms.can_finance:
                raise InsolvencyError(f"Cannot finance {card.title}: {terms.reason}")

        self.loans.borrow(player, terms.shortfall, reason=card.title)
        player.cash -= terms.cost

        effect = card.effect
        if isinstance(effect, OptionalBuyAsset):
            player.add_asset(effect.asset, effect.quantity, effect.cost)
            self.event_log.log(
                EventType.PURCHASE,
                player_id,
                asset=effect.asset.value,
                quantity=effect.quantity,
                cost=effect.cost,
            )
        else:
            ridge = self.ridges[effect.ridge_name]
            ridge.lease(player_id, effect.cow_count)
            player.total_ridge_value += effect.cost
            self.event_log.log(
                EventType.RIDGE_LEASED,
                player_id,
                ridge=ridge.name,
                cows=ridge.cow_count,
                cost=effect.cost,
            )

        player.hand.remove(card)
        self.option_to_buy_deck.discard(card)
        self.event_log.log(
            EventType.OPTION_EXERCISED,
            player_id,
            card_id=card.id,
            title=card.title,
            loan=terms.shortfall,
            cash=player.cash,
        )

    def offer_options(self, player_id: int) -> Optional[Card]:
        """
        Let the player's agent exercise one Option to Buy.

        Returns the exercised card, if any.
        """
        agent = self.agent_for(player_id)
        if agent is None or not self.can_exercise_option(player_id):
            return None
        cards = self.option_cards(player_id)
        if not cards:
            return None
        card = agent.choose_option(self, cards)
        if card is None:
            return None

        terms = self.option_loan_terms(player_id, card.id)
        if not terms.can_finance:
            self.event_log.log(
                EventType.OPTION_DECLINED, player_id, card_id=card.id, reason=terms.reason
            )
            return None
        confirm = terms.shortfall == 0 or agent.confirm_option_loan(self, card, terms.shortfall)
        if not confirm:
            return None
        self.exercise_option(player_id, card.id, confirm_loan=terms.shortfall > 0)
        return card

    # ------------------------------------------------------------------
    # Money

    def pay_down_debt(self, player_id: int, amount: int) -> None:
        """Repay bank notes from cash."""
        self.loans.repay(self.get_player(player_id), amount)

    # ------------------------------------------------------------------
    # Read-only queries

    def scoreboard_entry(self, player_id: int) -> ScoreboardEntry:
        player = self.get_player(player_id)
        return ScoreboardEntry(
            player_id=player.player_id,
            name=player.name,
            cash=player.cash,
            debt=player.debt,
            land=player.land,
            position=player.position,
            year=player.year,
            assets={asset.value: record.quantity for asset, record in player.assets.items()},
            total_asset_value=player.total_asset_value,
            total_ridge_value=player.total_ridge_value,
            net_worth=player.net_worth,
            total_income=player.total_income,
            turns_taken=player.turns_taken,
            hand_size=len(player.hand),
        )

    def scoreboard(self) -> List[ScoreboardEntry]:
        """Every player's scoreboard row, richest first."""
        rows = [self.scoreboard_entry(pid) for pid in self.players]
        return sorted(rows, key=lambda row: row.net_worth, reverse=True)

    def ridge_status(self, name: str) -> RidgeStatus:
        ridge = self.get_ridge(name)
        lessee = self.players.get(ridge.leased_by) if ridge.leased_by is not None else None
        return RidgeStatus(
            name=ridge.name,
            cost=ridge.cost,
            capacity=ridge.initial_cow_count,
            cow_count=ridge.cow_count,
            leased_by=ridge.leased_by,
            lessee_name=lessee.name if lessee else None,
        )

    def all_ridge_status(self) -> List[RidgeStatus]:
        return [self.ridge_status(name) for name in self.ridges]

    def player_ridges(self, player_id: int) -> List[Ridge]:
        self.get_player(player_id)
        return [r for r in self.ridges.values() if r.leased_by == player_id]

    def available_ridges(self) -> List[Ridge]:
        return [r for r in self.ridges.values() if not r.is_leased()]

    def ridge_cow_count(self, name: str) -> int:
        return self.get_ridge(name).cow_count

    def hand(self, player_id: int) -> List[Card]:
        return list(self.get_player(player_id).hand)


def create_game(
    config: GameConfig,
    players: List[Player],
    agents: Optional[Dict[int, Agent]] = None,
) -> GameState:
    """
    Create a new game with the specified configuration and players.

    Args:
        config: Game configuration
        players: Roster of players (ids must be unique)
        agents: Optional decision sources keyed by player id; computer
            players without one get an AutoAgent

    Returns:
        Initialized GameState
    """
    if len(players) < 1:
        raise ValueError("Game requires at least 1 player")
    ids = [p.player_id for p in players]
    if len(set(ids)) != len(ids):
        raise ValueError("Player ids must be unique")

    return GameState(config, players, agents)


def native_players(count: int, player_type: PlayerType = PlayerType.AI) -> List[Player]:
    """The first ``count`` farmers of the native roster."""
    if not 1 <= count <= len(NATIVE_ROSTER):
        raise ValueError(f"Between 1 and {len(NATIVE_ROSTER)} native players are available")
    return [
        Player(i, entry.name, player_type, entry.color)
        for i, entry in enumerate(NATIVE_ROSTER[:count])
    ]


def new_game(
    players: Optional[List[Player]] = None,
    config: Optional[GameConfig] = None,
    agents: Optional[Dict[int, Agent]] = None,
) -> GameState:
    """Start a game, defaulting to the full native roster."""
    return create_game(config or GameConfig(), players or native_players(len(NATIVE_ROSTER)), agents)
