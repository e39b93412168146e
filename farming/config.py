"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class GameConfig:
    """Configuration for a farming game."""

    starting_cash: int = 5000
    starting_debt: int = 0
    starting_land: int = 20
    starting_year: int = 1
    starting_position: int = 0

    starter_hay: int = 10
    starter_grain: int = 10

    side_job_pay: int = 5000
    winning_net_worth: int = 250_000

    debt_ceiling: int = 50_000
    loan_increment: int = 5000
    loan_fee_rate: float = 0.20
    interest_rate: float = 0.10

    max_cows: int = 20
    otb_cards_per_player: int = 2
    option_window_end: int = 14

    auction_bid_fraction: float = 0.80
    skip_year_position: int = 2

    shuffle_turn_order: bool = True
    seed: Optional[int] = None


@dataclass
class RosterEntry:
    """A named farmer available for setup."""

    name: str
    color: str


NATIVE_ROSTER: List[RosterEntry] = [
    RosterEntry("Roza Ray", "Red"),
    RosterEntry("Harrah Harry", "Brown"),
    RosterEntry("Toppenish Tom", "Green"),
    RosterEntry("Satus Sam", "Blue"),
    RosterEntry("Sunnyside Sidney", "White"),
    RosterEntry("Wapato Willie", "Yellow"),
]


@dataclass
class RidgeData:
    """Data for a leasable ridge."""

    name: str
    cost: int
    cow_capacity: int


RIDGES: List[RidgeData] = [
    RidgeData("Toppenish", 25000, 50),
    RidgeData("Ahtanum", 10000, 20),
    RidgeData("Cascade", 20000, 40),
    RidgeData("Rattlesnake", 15000, 30),
]
