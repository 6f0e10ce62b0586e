import logging
import time
from enum import Enum
from typing import Callable, Dict, Optional


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"


# COMPLETED and STOPPED only leave through IDLE (acknowledged on next start)
ALLOWED_TRANSITIONS = {
    SessionState.IDLE: {SessionState.RUNNING},
    SessionState.RUNNING: {SessionState.COMPLETED, SessionState.STOPPED},
    SessionState.COMPLETED: {SessionState.IDLE},
    SessionState.STOPPED: {SessionState.IDLE},
}


class InvalidTransitionError(Exception):
    """Raised when a transition is not in ALLOWED_TRANSITIONS"""


class SessionStateMachine:
    """
    State holder for a render session.
    Validates transitions and notifies a listener on every change.
    """

    def __init__(self):
        self.current_state = SessionState.IDLE
        self.previous_state: Optional[SessionState] = None
        self.state_start_time = time.time()
        self.transition_count = 0
        self.logger = logging.getLogger(__name__)

        # Called with (old_state, new_state)
        self.on_state_change: Callable[[SessionState, SessionState], None] = (
            lambda old, new: None
        )

        self.logger.debug("Session state machine initialized in IDLE state")

    def get_current_state(self) -> SessionState:
        """Get the current session state"""
        return self.current_state

    def get_state_duration(self) -> float:
        """Get how long we've been in the current state (seconds)"""
        return time.time() - self.state_start_time

    def can_transition_to(self, new_state: SessionState) -> bool:
        return new_state in ALLOWED_TRANSITIONS[self.current_state]

    def is_running(self) -> bool:
        return self.current_state == SessionState.RUNNING

    def can_start(self) -> bool:
        """True from any non-running state"""
        return self.current_state != SessionState.RUNNING

    def transition_to(self, new_state: SessionState, reason: str = ""):
        """
        Transition to a new state with logging and listener notification

        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        if not self.can_transition_to(new_state):
            raise InvalidTransitionError(
                f"Cannot transition {self.current_state.value} -> {new_state.value}",
            )

        old_state = self.current_state
        self.previous_state = old_state
        self.current_state = new_state
        self.state_start_time = time.time()
        self.transition_count += 1

        log_msg = f"State transition: {old_state.value} -> {new_state.value}"
        if reason:
            log_msg += f" ({reason})"
        self.logger.info(log_msg)

        try:
            self.on_state_change(old_state, new_state)
        except Exception as e:
            self.logger.error(f"Error in state change callback: {e}")

    def acknowledge(self):
        """Return a finished session (COMPLETED/STOPPED) to IDLE"""
        if self.current_state in (SessionState.COMPLETED, SessionState.STOPPED):
            self.transition_to(SessionState.IDLE, "acknowledged")

    def get_status_info(self) -> Dict:
        """Get detailed status information for debugging/monitoring"""
        return {
            "current_state": self.current_state.value,
            "previous_state": (
                self.previous_state.value if self.previous_state else None
            ),
            "state_duration": self.get_state_duration(),
            "transition_count": self.transition_count,
        }
