"""
Render Implementations Package

Exposes concrete implementations of the collaborator interfaces.
"""

from render.implementations.mock_audio_source import MockAudioSource
from render.implementations.mock_capture import MockCapture
from render.implementations.mock_renderer import MockRenderer
from render.implementations.wave_capture import WaveFileCapture

# Public API
__all__ = [
    "MockAudioSource",
    "MockCapture",
    "MockRenderer",
    "WaveFileCapture",
]
