"""
Render Factory

Factory pattern for creating capture backends and wiring complete render
sessions. Single place that decides which implementation is used.
"""

import logging
from pathlib import Path
from typing import Literal, Optional, Sequence, Union

from config.settings import (
    CAPTURE_OUTPUT_DIR,
    DEFAULT_RENDER_METHOD,
    PASS_DURATION,
    TIMER_TICK_INTERVAL,
)
from core.event_bus import EventBus
from render.constants import RenderMethod
from render.controllers.countdown_timer import CountdownTimer
from render.controllers.profile_sequencer import ProfileSequencer
from render.controllers.recording_controller import RecordingController
from render.controllers.render_session import RenderSession
from render.implementations.mock_audio_source import MockAudioSource
from render.implementations.mock_capture import MockCapture
from render.implementations.mock_renderer import MockRenderer
from render.implementations.wave_capture import WaveFileCapture
from render.interfaces.audio_capture_interface import AudioCaptureInterface
from render.interfaces.audio_source_interface import AudioSourceInterface
from render.interfaces.profile_renderer_interface import ProfileRendererInterface

# Type alias for better type hints
CaptureMode = Literal["auto", "wave", "mock"]


class RenderFactory:
    """
    Factory for creating capture implementations.

    Usage:
        # Auto-detect (WAV files if the output directory is writable)
        capture = RenderFactory.create_capture()

        # Force mock mode (useful for testing)
        capture = RenderFactory.create_capture(mode="mock")

        # Force WAV capture (raises error if not available)
        capture = RenderFactory.create_capture(mode="wave", output_dir=path)
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_capture(
        cls,
        mode: CaptureMode = "auto",
        output_dir: Path = CAPTURE_OUTPUT_DIR,
    ) -> AudioCaptureInterface:
        """
        Create an audio capture instance.

        Args:
            mode: "auto" (detect), "wave" (force WAV), "mock" (force mock)
            output_dir: Directory for WAV captures

        Returns:
            AudioCaptureInterface implementation

        Raises:
            RuntimeError: If mode="wave" but the output directory is unusable
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Capture")
            return MockCapture()

        capture = WaveFileCapture(output_dir)

        if mode == "wave":
            if not capture.is_available():
                raise RuntimeError(f"WAV capture requested but {output_dir} is not writable")
            cls._logger.info("Creating WAV Capture (forced)")
            return capture

        # mode == "auto" - WAV first, fall back to mock
        if capture.is_available():
            cls._logger.info("Creating WAV Capture (auto-detected)")
            return capture

        cls._logger.warning(f"{output_dir} not writable, using Mock Capture")
        return MockCapture()

    @classmethod
    def create_session(
        cls,
        renderer: ProfileRendererInterface,
        sources: AudioSourceInterface,
        capture: AudioCaptureInterface,
        pass_duration: float = PASS_DURATION,
        render_method: Union[str, RenderMethod] = DEFAULT_RENDER_METHOD,
        tick_interval: float = TIMER_TICK_INTERVAL,
        auto_tick: bool = True,
        event_bus: Optional[EventBus] = None,
    ) -> RenderSession:
        """
        Wire a RenderSession around the given collaborators.

        The profile list is read from the renderer, its entry 0 being the
        system default. The sources' sample sink is pointed at the session.

        Raises:
            EmptySequenceError: If the renderer has no custom profile
        """
        sequencer = ProfileSequencer(renderer.get_profile_names(), has_default=True)
        session = RenderSession(
            renderer=renderer,
            sources=sources,
            recorder=RecordingController(capture),
            timer=CountdownTimer(tick_interval=tick_interval, auto_tick=auto_tick),
            sequencer=sequencer,
            event_bus=event_bus,
            pass_duration=pass_duration,
            render_method=render_method,
        )
        sources.set_sample_sink(session.feed_samples)
        return session


# Convenience functions for quick creation

def create_render_session(
    profile_names: Sequence[str],
    force_mock: bool = False,
    fast_mode: bool = False,
    output_dir: Path = CAPTURE_OUTPUT_DIR,
    pass_duration: float = PASS_DURATION,
    render_method: Union[str, RenderMethod] = DEFAULT_RENDER_METHOD,
    source_count: int = 1,
) -> RenderSession:
    """
    Quick session creation with the built-in renderer and sources.

    Args:
        profile_names: Custom profile names (default entry is added)
        force_mock: If True, capture in memory instead of WAV files
        fast_mode: If True, the timer is driven manually (tick()) and no
                   audio is streamed
        output_dir: Directory for WAV captures
        pass_duration: Seconds per pass
        render_method: Total duration estimation policy
        source_count: Number of simulated speakers

    Returns:
        Ready-to-start RenderSession

    Example:
        # Normal usage
        session = create_render_session(["a.sofa", "b.sofa"])

        # Fast tests
        session = create_render_session(names, force_mock=True, fast_mode=True)
    """
    return RenderFactory.create_session(
        renderer=MockRenderer(profile_names),
        sources=MockAudioSource(source_count=source_count, simulate_stream=not fast_mode),
        capture=RenderFactory.create_capture(
            mode="mock" if force_mock else "auto",
            output_dir=output_dir,
        ),
        pass_duration=pass_duration,
        render_method=render_method,
        auto_tick=not fast_mode,
    )
