"""Testing fakes – in-memory store double and event-loop helpers."""
from fflags.testing.fakes.loop import settle_loop, wait_until
from fflags.testing.fakes.store import InMemoryFlagStore

__all__ = ["InMemoryFlagStore", "settle_loop", "wait_until"]
