"""
Render Session

Runs a full HRTF comparison session: one timed, recorded pass per profile,
advancing automatically until the last profile has been rendered once.

This is the high-level controller the service and any UI talk to.

SOLID Principles:
- Single Responsibility: Only orchestrates the session lifecycle
- Open/Closed: Observers subscribe to SessionEvent notifications
- Dependency Inversion: Collaborators are injected through interfaces
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from config.settings import (
    DEFAULT_RENDER_METHOD,
    PASS_DURATION,
    PASS_LENGTH_CONSTANT,
)
from core.event_bus import EventBus
from core.state_machine import SessionState, SessionStateMachine
from render.constants import (
    RenderMethod,
    SessionEvent,
    format_duration,
    parse_render_method,
)
from render.controllers.countdown_timer import CountdownTimer
from render.controllers.profile_sequencer import ProfileSequencer
from render.controllers.recording_controller import RecordingController
from render.errors import AlreadyRenderingError, InvalidArgumentError
from render.interfaces.audio_source_interface import AudioSourceInterface
from render.interfaces.profile_renderer_interface import ProfileRendererInterface
from render.models.pass_record import PassRecord
from render.utils.render_utils import estimate_total_duration

# Renderer index of the system default profile, selected between sessions
DEFAULT_PROFILE_INDEX = 0


class RenderSession:
    """
    Session orchestrator.

    States: IDLE -> RUNNING -> COMPLETED | STOPPED -> (IDLE on next start)

    Features:
    - Timed pass per profile, auto-advance on timer expiry
    - One capture per pass, never overlapping
    - Manual stop at any time
    - Stale timer notifications discarded by generation
    - Notifications through subscribe()

    Usage:
        session = RenderSession(renderer, sources, recorder, timer, sequencer)
        session.subscribe(SessionEvent.SESSION_COMPLETED, on_done)
        session.start_render()

        # Audio thread
        session.feed_samples(block)

        # Abort early
        session.stop_render()
    """

    def __init__(
        self,
        renderer: ProfileRendererInterface,
        sources: AudioSourceInterface,
        recorder: RecordingController,
        timer: CountdownTimer,
        sequencer: ProfileSequencer,
        event_bus: Optional[EventBus] = None,
        pass_duration: float = PASS_DURATION,
        render_method: Union[str, RenderMethod] = DEFAULT_RENDER_METHOD,
        pass_length_constant: float = PASS_LENGTH_CONSTANT,
    ):
        """
        Initialize render session.

        Args:
            renderer: Spatial audio engine (profile selection)
            sources: Audio sources rewound and played each pass
            recorder: Capture lifecycle for each pass
            timer: Countdown for each pass
            sequencer: Profiles of this session
            event_bus: Notification bus, or None for a private one
            pass_duration: Seconds per pass
            render_method: Total duration estimation policy
            pass_length_constant: Per-speaker length for ONE_BY_ONE

        Raises:
            InvalidArgumentError: If pass_duration <= 0
        """
        if pass_duration <= 0:
            raise InvalidArgumentError(f"Invalid pass duration: {pass_duration}")

        self.logger = logging.getLogger(__name__)
        self.renderer = renderer
        self.sources = sources
        self.recorder = recorder
        self.timer = timer
        self.sequencer = sequencer
        self.events = event_bus or EventBus()

        # Serializes every transition handler (caller and timer threads)
        self._lock = threading.RLock()
        self._machine = SessionStateMachine()

        # Session values
        self._pass_duration = pass_duration
        self._render_method = self._resolve_method(render_method)
        self._pass_length_constant = pass_length_constant
        self._estimated_total: float = 0
        self._elapsed_in_pass = 0
        self._elapsed_total = 0
        self._timer_generation: Optional[int] = None

        # Pass bookkeeping (current or most recent session only)
        self._passes: List[PassRecord] = []
        self._current_pass: Optional[PassRecord] = None
        self._samples_dropped_idle = 0

        self.timer.on_tick = self._handle_timer_tick
        self.timer.on_expired = self._handle_timer_expired

        self.logger.info(
            f"Render Session initialized ({self.sequencer.get_count()} profile(s), "
            f"{format_duration(pass_duration)} per pass)",
        )

    # =========================================================================
    # CONTROL
    # =========================================================================

    def start_render(self) -> None:
        """
        Start a session from the current profile.

        Valid from IDLE, COMPLETED and STOPPED.

        Raises:
            AlreadyRenderingError: If a session is already running
            CaptureError: If the first capture cannot be started
        """
        with self._lock:
            if self._machine.is_running():
                self.logger.warning("Cannot start - session already rendering")
                raise AlreadyRenderingError("Session already rendering")

            self._reset_session_values()
            previous_passes = self._passes
            self._passes = []

            if not self.timer.has_ever_started():
                self._estimated_total = estimate_total_duration(
                    self._render_method,
                    self._pass_duration,
                    self.sequencer.get_count(),
                    self.sources.get_source_count(),
                    self._pass_length_constant,
                )

            self.logger.info(
                f"Starting render session: {self.sequencer.get_count()} profile(s), "
                f"estimated {format_duration(self._estimated_total)}",
            )

            try:
                self._begin_pass()
            except Exception:
                # Roll back to the state before the call
                self.sources.stop()
                self.renderer.select_profile(DEFAULT_PROFILE_INDEX)
                self._reset_session_values()
                self._passes = previous_passes
                raise

            self._machine.acknowledge()
            self._machine.transition_to(SessionState.RUNNING, "render started")
            self._timer_generation = self.timer.begin(self._pass_duration)

            self.events.publish(
                SessionEvent.SESSION_STARTED,
                {
                    "profile_count": self.sequencer.get_count(),
                    "pass_duration": self._pass_duration,
                    "estimated_total": self._estimated_total,
                },
            )
            self._publish_pass_started()

    def continue_render(self) -> bool:
        """
        Finish the current pass and move on, as a timer expiry would.

        Completes the session when the current profile is the last one.

        Returns:
            True if the session advanced or completed, False if not rendering
        """
        with self._lock:
            if not self._machine.is_running():
                self.logger.warning("Cannot continue - not rendering")
                return False

            self._timer_generation = None
            self._continue(pass_completed=False)
            return True

    def stop_render(self) -> bool:
        """
        Abort the running session.

        Returns:
            True if a session was stopped, False if not rendering
        """
        with self._lock:
            if not self._machine.is_running():
                self.logger.debug("Stop ignored - not rendering")
                return False

            self.logger.info("Stopping render session...")
            self._finish(SessionState.STOPPED, "manual stop", pass_completed=False)
            return True

    def toggle_render(self) -> bool:
        """
        Start when idle, stop when rendering.

        Returns:
            True if rendering after the toggle
        """
        with self._lock:
            if self._machine.is_running():
                self.stop_render()
            else:
                self.start_render()
            return self.is_rendering()

    def toggle_audio(self) -> bool:
        """
        Preview playback on/off outside a session.

        Returns:
            False while rendering (sources belong to the session), else True
        """
        with self._lock:
            if self._machine.is_running():
                self.logger.warning("Cannot toggle audio while rendering")
                return False

            if self.sources.is_playing():
                self.sources.stop()
            else:
                self.sources.reset_and_play()
            return True

    def set_render_method(self, method: Union[str, RenderMethod]) -> None:
        """
        Choose the total duration estimation policy for the next session.

        Raises:
            AlreadyRenderingError: If a session is running
        """
        with self._lock:
            if self._machine.is_running():
                raise AlreadyRenderingError("Cannot change render method while rendering")
            self._render_method = self._resolve_method(method)

    def set_pass_duration(self, seconds: float) -> None:
        """
        Change the pass length. Applies from the next pass on; the
        session's total estimate is not recomputed.

        Raises:
            InvalidArgumentError: If seconds <= 0
        """
        if seconds <= 0:
            raise InvalidArgumentError(f"Invalid pass duration: {seconds}")
        with self._lock:
            self._pass_duration = seconds

    def feed_samples(self, samples: Sequence[float]) -> bool:
        """
        Entry point for the audio pipeline thread.

        Never blocks: samples arriving outside a running session are dropped.

        Returns:
            True if the samples were captured
        """
        if self._machine.current_state != SessionState.RUNNING:
            self._samples_dropped_idle += 1
            return False
        return self.recorder.feed_samples(samples)

    # =========================================================================
    # NOTIFICATIONS
    # =========================================================================

    def subscribe(
        self,
        event: SessionEvent,
        callback: Callable[[Dict[str, Any]], None],
    ) -> Callable[[], bool]:
        """
        Register for a session notification.

        Returns:
            A function that cancels the subscription

        Example:
            cancel = session.subscribe(SessionEvent.TIMER_TICK, refresh)
            ...
            cancel()
        """
        return self.events.subscribe(event, callback)

    def unsubscribe(
        self,
        event: SessionEvent,
        callback: Callable[[Dict[str, Any]], None],
    ) -> bool:
        return self.events.unsubscribe(event, callback)

    # =========================================================================
    # OBSERVERS
    # =========================================================================

    def is_rendering(self) -> bool:
        return self._machine.is_running()

    def is_timing(self) -> bool:
        return self.timer.is_active()

    def time_left_in_pass(self) -> float:
        return self.timer.get_remaining() if self.timer.is_active() else 0

    def time_left_total(self) -> float:
        """Seconds left in the session, 0 when no estimate is available"""
        if self._estimated_total <= 0:
            return 0
        return max(0, self._estimated_total - self._elapsed_total)

    def current_profile_name(self) -> str:
        return self.sequencer.get_current_name()

    def is_last_profile(self) -> bool:
        return self.sequencer.is_last()

    def profile_count(self) -> int:
        return self.sequencer.get_count()

    def get_state(self) -> SessionState:
        return self._machine.get_current_state()

    def get_pass_duration(self) -> float:
        return self._pass_duration

    def get_render_method(self) -> Union[str, RenderMethod]:
        return self._render_method

    def get_estimated_total_duration(self) -> float:
        return self._estimated_total

    def get_elapsed_in_pass(self) -> int:
        return self._elapsed_in_pass

    def get_elapsed_total(self) -> int:
        return self._elapsed_total

    def get_generation(self) -> int:
        return self.timer.generation

    def get_pass_history(self) -> List[PassRecord]:
        return list(self._passes)

    # =========================================================================
    # TIMER HANDLERS
    # =========================================================================

    def _handle_timer_tick(self, generation: int, remaining: float) -> None:
        with self._lock:
            if not self._is_current(generation):
                self.logger.debug(f"Discarding stale tick (generation {generation})")
                return

            self._elapsed_in_pass += 1
            self._elapsed_total += 1

            self.events.publish(
                SessionEvent.TIMER_TICK,
                {
                    "generation": generation,
                    "remaining": remaining,
                    "time_left_total": self.time_left_total(),
                },
            )

    def _handle_timer_expired(self, generation: int) -> None:
        with self._lock:
            if not self._is_current(generation):
                self.logger.debug(f"Discarding stale expiry (generation {generation})")
                return

            self._timer_generation = None
            self.logger.info(
                f"Pass finished: {self.sequencer.get_current_name()} "
                f"({self.sequencer.get_current_index() + 1}/{self.sequencer.get_count()})",
            )
            self.events.publish(
                SessionEvent.TIMER_EXPIRED,
                {
                    "generation": generation,
                    "index": self.sequencer.get_current_index(),
                    "profile_name": self.sequencer.get_current_name(),
                },
            )
            self._continue(pass_completed=True)

    def _is_current(self, generation: int) -> bool:
        return self._machine.is_running() and generation == self._timer_generation

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def _continue(self, pass_completed: bool) -> None:
        if self.sequencer.is_last():
            self._finish(
                SessionState.COMPLETED,
                "last profile rendered",
                pass_completed=pass_completed,
            )
        else:
            self._advance_pass(pass_completed)

    def _advance_pass(self, pass_completed: bool) -> None:
        # Stop must complete before the next start, then the timer
        self._end_pass(completed=pass_completed)
        self.sequencer.advance()

        try:
            self._begin_pass()
        except Exception as e:
            self.logger.error(f"Failed to start next pass: {e}")
            self._finish(SessionState.STOPPED, "pass start failed", pass_completed=False)
            raise

        self._timer_generation = self.timer.begin(self._pass_duration)
        self._publish_pass_started()

    def _begin_pass(self) -> None:
        """Rewind sources, apply the current profile, start its capture"""
        name = self.sequencer.get_current_name()

        self.sources.reset_and_play()
        self.renderer.select_profile(self.sequencer.get_renderer_index())
        self.recorder.start(name)

        self._elapsed_in_pass = 0
        self._current_pass = PassRecord(
            index=self.sequencer.get_current_index(),
            profile_name=name,
        )
        self._passes.append(self._current_pass)

        self.logger.info(
            f"Rendering {name} "
            f"({self.sequencer.get_current_index() + 1}/{self.sequencer.get_count()}, "
            f"{format_duration(self._pass_duration)})",
        )

    def _end_pass(self, completed: bool) -> None:
        self.recorder.stop()
        samples = self.recorder.get_samples_written()
        if self._current_pass is not None:
            self._current_pass.finish(samples, completed)
            self._current_pass = None

    def _finish(self, final_state: SessionState, reason: str, pass_completed: bool) -> None:
        """Shared tail of completion and manual stop"""
        self.timer.stop()
        self._timer_generation = None
        self._end_pass(completed=pass_completed)
        self.sources.stop()
        self.sequencer.reset()
        self.renderer.select_profile(DEFAULT_PROFILE_INDEX)

        self._machine.transition_to(final_state, reason)

        summary = {
            "state": final_state.value,
            "reason": reason,
            "passes": [record.to_dict() for record in self._passes],
            "elapsed_total": self._elapsed_total,
        }
        self._log_session_summary(reason)
        self._reset_session_values()

        event = (
            SessionEvent.SESSION_COMPLETED
            if final_state == SessionState.COMPLETED
            else SessionEvent.SESSION_STOPPED
        )
        self.events.publish(event, summary)

    def _reset_session_values(self) -> None:
        self._estimated_total = 0
        self._elapsed_in_pass = 0
        self._elapsed_total = 0

    def _publish_pass_started(self) -> None:
        self.events.publish(
            SessionEvent.PASS_STARTED,
            {
                "generation": self._timer_generation,
                "index": self.sequencer.get_current_index(),
                "profile_name": self.sequencer.get_current_name(),
            },
        )

    def _resolve_method(self, method: Union[str, RenderMethod]) -> Union[str, RenderMethod]:
        resolved = parse_render_method(method)
        if resolved is None:
            self.logger.warning(
                f"Unknown render method {method!r} - total duration will not be estimated",
            )
            return method
        return resolved

    def _log_session_summary(self, reason: str) -> None:
        self.logger.info("=" * 60)
        self.logger.info(f"Render session ended ({reason}): {len(self._passes)} pass(es)")
        for record in self._passes:
            self.logger.info(f"  {record}")
        self.logger.info("=" * 60)

    # =========================================================================
    # STATUS AND INFO
    # =========================================================================

    def get_status(self) -> Dict[str, Any]:
        """
        Get complete session status.

        Returns:
            Dictionary with status information
        """
        method = self._render_method
        return {
            "state": self.get_state().value,
            "current_profile": self.current_profile_name(),
            "profile_index": self.sequencer.get_current_index(),
            "profile_count": self.profile_count(),
            "is_last_profile": self.is_last_profile(),
            "pass_duration": self._pass_duration,
            "render_method": method.value if isinstance(method, RenderMethod) else method,
            "time_left_in_pass": self.time_left_in_pass(),
            "time_left_total": self.time_left_total(),
            "estimated_total": self._estimated_total,
            "generation": self.get_generation(),
            "passes": len(self._passes),
            "samples_dropped_idle": self._samples_dropped_idle,
            "recorder": self.recorder.get_status(),
        }

    def get_session_info(self) -> str:
        """
        Get human-readable session information.

        Returns:
            Formatted string with session details
        """
        if not self.is_rendering():
            return f"No active render session (state: {self.get_state().value})"

        status = self.get_status()
        info = [
            f"State: {status['state']}",
            f"Profile: {status['current_profile']} "
            f"({status['profile_index'] + 1}/{status['profile_count']})",
            f"Pass time left: {format_duration(status['time_left_in_pass'])}",
        ]

        if status["estimated_total"] > 0:
            info.append(f"Session time left: {format_duration(status['time_left_total'])}")
        else:
            info.append("Session time left: unknown")

        return "\n".join(info)

    def cleanup(self) -> None:
        """
        Stop any running session and release collaborators.

        Always call this when done with session!
        """
        self.logger.info("Cleaning up Render Session")

        self.stop_render()
        self.timer.stop()
        self.sources.stop()
        self.recorder.cleanup()

        self.logger.info("Render Session cleanup complete")
