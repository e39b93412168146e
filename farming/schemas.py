from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ScoreboardEntry(BaseModel):
    player_id: int
    name: str
    cash: int
    debt: int
    land: int
    position: int
    year: int
    assets: Dict[str, int] = Field(default_factory=dict)
    total_asset_value: int
    total_ridge_value: int
    net_worth: int
    total_income: int = 0
    turns_taken: int = 0
    hand_size: int = 0


class RidgeStatus(BaseModel):
    name: str
    cost: int
    capacity: int
    cow_count: int
    leased_by: Optional[int] = None
    lessee_name: Optional[str] = None


class DeckCounts(BaseModel):
    cards_remaining: int
    discard_count: int


class HandCard(BaseModel):
    card_id: int
    title: str
    description: str
    cost: Optional[int] = None


class GameSnapshot(BaseModel):
    turn_number: int
    current_player_id: int
    phase: str
    game_over: bool
    winner_id: Optional[int] = None
    turn_order: List[int]
    players: List[ScoreboardEntry]
    hands: Dict[int, List[HandCard]] = Field(default_factory=dict)
    ridges: List[RidgeStatus]
    decks: Dict[str, DeckCounts]
