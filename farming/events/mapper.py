"""
Projection of internal EventLog entries into public forms.

The engine records GameEvent objects where:
- event_type is money.EventType
- player_id is optional
- details holds a flat payload (GAME_START nests it under "details")

This module turns those into stable JSON-friendly dicts and into the
human-readable lines a terminal front end prints. Nothing here touches
game state.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from farming.money import EventType, GameEvent


def _flatten_details(details: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize nested details payloads from engine logs."""
    if not details:
        return {}
    if "details" in details and isinstance(details["details"], dict):
        return details["details"]
    return details


def map_event(event: GameEvent) -> Dict[str, Any]:
    """
    Map a single GameEvent to a canonical JSON dict.

    Returns:
        dict with keys: event_type (str), player_id (optional), and the
        event's payload fields
    """
    base: Dict[str, Any] = {"event_type": event.event_type.value}
    if event.player_id is not None:
        base["player_id"] = event.player_id
    base.update(_flatten_details(event.details))
    return base


def map_events(events: Iterable[GameEvent]) -> List[Dict[str, Any]]:
    """Map a sequence of GameEvents to canonical dicts."""
    return [map_event(e) for e in events]


def _money(value: Any) -> str:
    return f"${value:,}" if isinstance(value, int) else f"${value}"


_Renderer = Callable[[str, Dict[str, Any]], str]

_RENDERERS: Dict[EventType, _Renderer] = {
    EventType.GAME_START: lambda who, d: f"Game started with {', '.join(d.get('players', []))}.",
    EventType.SETUP_DEAL: lambda who, d: f"{who} was dealt {d.get('title')}.",
    EventType.TURN_START: lambda who, d: f"{who}'s turn (year {d.get('year')}).",
    EventType.DICE_ROLL: lambda who, d: f"{who} rolled a {d.get('roll')}.",
    EventType.MOVE: lambda who, d: f"{who} moved to {d.get('tile')}.",
    EventType.PASS_START: lambda who, d: f"{who} passed Christmas Vacation.",
    EventType.YEAR_ADVANCE: lambda who, d: f"Year advanced to {d.get('year')}.",
    EventType.SIDE_JOB_PAY: lambda who, d: f"{who} collected {_money(d.get('amount'))} side job pay.",
    EventType.LAND: lambda who, d: f"{who} landed on {d.get('tile')}.",
    EventType.TURN_END: lambda who, d: (
        f"{who} ends the turn with {_money(d.get('cash'))} cash, "
        f"{_money(d.get('debt'))} debt, net worth {_money(d.get('net_worth'))}."
    ),
    EventType.CARD_DRAW: lambda who, d: f"{who} drew {d.get('title')}.",
    EventType.CARD_TO_HAND: lambda who, d: f"{who} keeps {d.get('title')} for later.",
    EventType.CARD_EFFECT: lambda who, d: f"{d.get('title')}: {d.get('text')}",
    EventType.INCOME: lambda who, d: f"{who} gained {_money(d.get('amount'))}.",
    EventType.EXPENSE: lambda who, d: f"{who} paid {_money(d.get('amount'))}.",
    EventType.INTEREST: lambda who, d: (
        f"{who} owes {_money(d.get('amount'))} interest on {_money(d.get('debt'))} of notes."
    ),
    EventType.FORCED_LOAN: lambda who, d: (
        f"{who} borrowed {_money(d.get('loan'))} (bank fee {_money(d.get('fee'))}) "
        f"to pay {_money(d.get('amount'))}. Debt is now {_money(d.get('debt'))}."
    ),
    EventType.OPTION_LOAN: lambda who, d: f"{who} borrowed {_money(d.get('amount'))}.",
    EventType.DEBT_PAYMENT: lambda who, d: (
        f"{who} paid down {_money(d.get('amount'))} of debt. Debt is now {_money(d.get('debt'))}."
    ),
    EventType.DEBT_ADJUSTED: lambda who, d: f"{who}'s debt is now {_money(d.get('debt'))}.",
    EventType.LAND_ADJUSTED: lambda who, d: f"{who} now farms {d.get('land')} acres.",
    EventType.HARVEST: lambda who, d: (
        f"{d.get('harvest')}: {who} "
        + (f"rolled {d['roll']} for " if d.get("roll") is not None else "earned ")
        + f"{_money(d.get('income'))}, "
        f"expenses {_money(d.get('expense'))}, net {_money(d.get('net'))}."
    ),
    EventType.HARVEST_SKIPPED: lambda who, d: (
        f"{who} has no {d.get('asset')} to harvest. No operating expense drawn."
    ),
    EventType.OPERATING_EXPENSE: lambda who, d: (
        f"Operating expense: {d.get('title')} - {_money(d.get('amount'))}."
    ),
    EventType.PURCHASE: lambda who, d: (
        f"{who} bought {d.get('quantity')} {d.get('asset')} for {_money(d.get('cost'))}."
    ),
    EventType.OPTION_EXERCISED: lambda who, d: f"{who} exercised {d.get('title')}.",
    EventType.OPTION_DECLINED: lambda who, d: f"{who} passed on the offer: {d.get('reason')}.",
    EventType.RIDGE_LEASED: lambda who, d: (
        f"{who} leased {d.get('ridge')} Ridge with {d.get('cows')} cows."
    ),
    EventType.ASSET_LOST: lambda who, d: f"{who} lost {d.get('quantity')} {d.get('asset')}.",
    EventType.MULTIPLIER_SET: lambda who, d: (
        f"{who}'s {d.get('asset')} harvest multiplier is x{d.get('multiplier')}."
    ),
    EventType.PERSISTENT_EFFECT_ADDED: lambda who, d: (
        f"{who} gets a x{d.get('multiplier')} livestock bonus for {d.get('years')} years."
    ),
    EventType.SKIP_YEAR: lambda who, d: f"{who} skips to year {d.get('year')}.",
    EventType.DISASTER_ROLL: lambda who, d: (
        f"{who} rolled {d.get('roll')}: "
        + (f"hit by ash, cleanup {_money(d.get('cost'))}." if d.get("hit") else "escaped.")
    ),
    EventType.COLLECTION: lambda who, d: f"{who} collected {_money(d.get('amount'))} in total.",
    EventType.NOTICE: lambda who, d: str(d.get("text", "")),
    EventType.NO_EFFECT: lambda who, d: (
        f"No effect for {who}" + (f" ({d['reason']})." if d.get("reason") else ".")
    ),
    EventType.EFFECT_FAILED: lambda who, d: f"Could not resolve effect for {who}: {d.get('error')}",
    EventType.BANKRUPTCY: lambda who, d: f"{who} is bankrupt with {_money(d.get('cash'))} cash!",
    EventType.BANK_LOAN: lambda who, d: (
        f"Bank offered {who} {_money(d.get('offered'))}: "
        + ("accepted." if d.get("accepted") else "no loan.")
    ),
    EventType.AUCTION_START: lambda who, d: (
        f"Auctioning {who}'s {d.get('quantity')} {d.get('asset')} "
        f"(cost basis {_money(d.get('valuation'))})."
    ),
    EventType.AUCTION_BID: lambda who, d: f"{who} bid {_money(d.get('bid'))}.",
    EventType.AUCTION_END: lambda who, d: (
        f"No bids for {d.get('asset')}."
        if d.get("winner") is None
        else f"Player {d.get('winner')} won {d.get('asset')} for {_money(d.get('bid'))}."
    ),
    EventType.GAME_END: lambda who, d: f"{who} wins with net worth {_money(d.get('net_worth'))}!",
}


def render_event(event: GameEvent, names: Optional[Mapping[int, str]] = None) -> str:
    """Render one event as a line of text."""
    if event.player_id is None:
        who = "Bank"
    elif names and event.player_id in names:
        who = names[event.player_id]
    else:
        who = f"Player {event.player_id}"
    renderer = _RENDERERS.get(event.event_type)
    details = _flatten_details(event.details)
    if renderer is None:
        return f"{who}: {event.event_type.value} {details}"
    return renderer(who, details)


def render_events(
    events: Iterable[GameEvent], names: Optional[Mapping[int, str]] = None
) -> List[str]:
    """Render a sequence of events, preserving order."""
    return [render_event(e, names) for e in events]
