"""
Render Interfaces Package

Exposes abstract interfaces for the session's external collaborators.
"""

from render.interfaces.audio_capture_interface import (
    AudioCaptureInterface,
    CaptureError,
    CaptureProcessError,
)
from render.interfaces.audio_source_interface import (
    AudioSourceInterface,
    SampleSink,
)
from render.interfaces.profile_renderer_interface import ProfileRendererInterface

# Public API
__all__ = [
    # Interfaces
    "AudioCaptureInterface",
    "AudioSourceInterface",
    "ProfileRendererInterface",
    "SampleSink",
    # Exceptions
    "CaptureError",
    "CaptureProcessError",
]
