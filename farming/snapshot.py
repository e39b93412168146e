"""
Public snapshot serialization of GameState.

Produces a sanitized, UI-friendly view of the current game without
exposing hidden information (e.g., deck order).
"""

from __future__ import annotations

from typing import Any, Dict

from farming.effects import CardSource
from farming.game import GameState
from farming.schemas import DeckCounts, GameSnapshot, HandCard


def build_snapshot(game: GameState) -> GameSnapshot:
    """Build the typed snapshot model.

    The snapshot includes:
    - turn number, current player, season and win state
    - every player's scoreboard row and Option to Buy hand
    - ridge leases
    - deck counts (remaining / discard) only
    """
    hands = {
        pid: [
            HandCard(
                card_id=card.id,
                title=card.title,
                description=card.description_brief,
                cost=game.option_cost(card) if card.is_option else None,
            )
            for card in player.hand
        ]
        for pid, player in sorted(game.players.items())
    }
    decks = {
        source.value: DeckCounts(
            cards_remaining=len(game.deck_for(source).draw_pile),
            discard_count=len(game.deck_for(source).discard_pile),
        )
        for source in CardSource
    }
    return GameSnapshot(
        turn_number=game.turn_number,
        current_player_id=game.current_player().player_id,
        phase=game.phase.value,
        game_over=game.game_over,
        winner_id=game.winner_id,
        turn_order=list(game.turn_order),
        players=[game.scoreboard_entry(pid) for pid in sorted(game.players)],
        hands=hands,
        ridges=game.all_ridge_status(),
        decks=decks,
    )


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict."""
    return build_snapshot(game).model_dump(mode="json")
