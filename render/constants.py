"""
Render Constants

Enums and small helpers shared by the render session components.

Note: Tunable values (pass duration, tick interval, capture settings) live
in config/settings.py. This file only holds enums and utility functions.
"""

from enum import Enum
from typing import Optional, Union

# =============================================================================
# RENDER METHOD
# =============================================================================


class RenderMethod(Enum):
    """
    How the speakers are driven during a session.

    The method only affects the total duration estimate:
    - ALL_AT_ONCE: every speaker plays at once, one pass per profile
    - ONE_BY_ONE: speakers play in turn for a fixed length each
    """

    ALL_AT_ONCE = "all_at_once"
    ONE_BY_ONE = "one_by_one"


def parse_render_method(value: Union[str, RenderMethod]) -> Optional[RenderMethod]:
    """
    Resolve a method name or enum to a RenderMethod.

    Returns:
        The matching RenderMethod, or None if the value is not recognized

    Example:
        parse_render_method("one_by_one") -> RenderMethod.ONE_BY_ONE
        parse_render_method("OneByOne") -> RenderMethod.ONE_BY_ONE
    """
    if isinstance(value, RenderMethod):
        return value
    if not isinstance(value, str):
        return None

    normalized = value.strip().lower().replace("-", "_")
    for method in RenderMethod:
        if normalized in (method.value, method.value.replace("_", "")):
            return method
    return None


# =============================================================================
# SESSION EVENTS
# =============================================================================


class SessionEvent(Enum):
    """
    Notifications published by RenderSession.

    Payload is a dict, see RenderSession for the keys of each event.
    """

    SESSION_STARTED = "session_started"
    PASS_STARTED = "pass_started"
    TIMER_TICK = "timer_tick"
    TIMER_EXPIRED = "timer_expired"
    SESSION_COMPLETED = "session_completed"
    SESSION_STOPPED = "session_stopped"


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def format_duration(seconds: float) -> str:
    """
    Format duration in seconds to human-readable string.

    Example:
        format_duration(630) -> "10:30"
        format_duration(8) -> "0:08"
    """
    seconds = max(0.0, seconds)
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"
