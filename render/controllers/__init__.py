"""
Render Controllers Package

High-level controllers that orchestrate a render session.
"""

from render.controllers.countdown_timer import CountdownTimer
from render.controllers.profile_sequencer import ProfileSequencer
from render.controllers.recording_controller import RecordingController
from render.controllers.render_session import RenderSession

# Public API
__all__ = [
    "CountdownTimer",
    "ProfileSequencer",
    "RecordingController",
    "RenderSession",
]
