"""
Render Module

Automated HRTF comparison sessions: one timed, recorded rendering pass per
profile, advancing on its own until every profile has been rendered once.

Provides in-memory mocks for tests and dry runs, and a WAV capture backend
for real sessions.

Public API:
    - RenderSession: Session orchestrator (start/stop/continue, observers)
    - CountdownTimer: Generation-tagged countdown
    - ProfileSequencer: Cyclic profile cursor
    - RecordingController: Idempotent capture lifecycle
    - RenderFactory / create_render_session: Wiring helpers
    - SessionEvent, SessionState, RenderMethod: Enumerations
    - RenderError and subclasses: Error taxonomy

Usage:
    from render import SessionEvent, create_render_session

    session = create_render_session(["kemar.sofa", "fabian.sofa"])
    session.subscribe(SessionEvent.SESSION_COMPLETED, lambda s: print(s))
    session.start_render()
"""

from core.state_machine import SessionState
from render.constants import RenderMethod, SessionEvent, format_duration
from render.controllers.countdown_timer import CountdownTimer
from render.controllers.profile_sequencer import ProfileSequencer
from render.controllers.recording_controller import RecordingController
from render.controllers.render_session import RenderSession
from render.errors import (
    AlreadyRecordingError,
    AlreadyRenderingError,
    EmptySequenceError,
    InvalidArgumentError,
    RenderError,
)
from render.factory import RenderFactory, create_render_session
from render.interfaces.audio_capture_interface import (
    AudioCaptureInterface,
    CaptureError,
)
from render.utils.render_utils import estimate_total_duration, load_profile_names

__all__ = [
    "AlreadyRecordingError",
    "AlreadyRenderingError",
    "AudioCaptureInterface",
    "CaptureError",
    "CountdownTimer",
    "EmptySequenceError",
    "InvalidArgumentError",
    "ProfileSequencer",
    "RecordingController",
    "RenderError",
    "RenderFactory",
    "RenderMethod",
    "RenderSession",
    "SessionEvent",
    "SessionState",
    "create_render_session",
    "estimate_total_duration",
    "format_duration",
    "load_profile_names",
]
