"""Public projections of engine events."""

from farming.events.mapper import map_event, map_events, render_event, render_events

__all__ = ["map_event", "map_events", "render_event", "render_events"]
