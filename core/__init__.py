"""
Core utilities and modules.

Public API:
    - SessionState: Render session states
    - SessionStateMachine: Validated state transitions with timing
    - EventBus: Synchronous publish/subscribe for session notifications

Usage:
    from core.event_bus import EventBus

    bus = EventBus()
    bus.subscribe("done", lambda data: print(data))
    bus.publish("done", {"passes": 3})
"""

from core.event_bus import EventBus
from core.state_machine import (
    InvalidTransitionError,
    SessionState,
    SessionStateMachine,
)

__all__ = [
    "EventBus",
    "InvalidTransitionError",
    "SessionState",
    "SessionStateMachine",
]
