"""Decision sources for farming players."""

from farming.agents.base import Agent
from farming.agents.auto import AutoAgent
from farming.agents.callback import CallbackAgent

__all__ = ["Agent", "AutoAgent", "CallbackAgent"]
