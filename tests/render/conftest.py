"""
Render Test Configuration and Fixtures

Shared fixtures for render module tests.
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from render.controllers.countdown_timer import CountdownTimer
from render.controllers.profile_sequencer import ProfileSequencer
from render.controllers.recording_controller import RecordingController
from render.controllers.render_session import RenderSession
from render.implementations.mock_audio_source import MockAudioSource
from render.implementations.mock_capture import MockCapture
from render.implementations.mock_renderer import MockRenderer

# =============================================================================
# CAPTURE FIXTURES
# =============================================================================


@pytest.fixture
def mock_capture():
    """
    Provide in-memory MockCapture.

    Usage:
        def test_capture(mock_capture):
            mock_capture.start_capture("kemar.sofa")
    """
    capture = MockCapture()
    yield capture
    capture.cleanup()


@pytest.fixture
def recording_controller(mock_capture):
    """
    Provide RecordingController over the mock capture.

    Usage:
        def test_recorder(recording_controller):
            recording_controller.start("kemar.sofa")
    """
    controller = RecordingController(mock_capture)
    yield controller
    controller.cleanup()


# =============================================================================
# COLLABORATOR FIXTURES
# =============================================================================


@pytest.fixture
def profile_names():
    """Renderer profile list: system default followed by three custom profiles"""
    return ["Default", "kemar.sofa", "fabian.sofa", "cipic_003.sofa"]


@pytest.fixture
def mock_renderer(profile_names):
    return MockRenderer(profile_names, include_default=False)


@pytest.fixture
def mock_source():
    """Mock sources that produce no samples on their own"""
    sources = MockAudioSource(source_count=4, simulate_stream=False)
    yield sources
    sources.stop()


@pytest.fixture
def manual_timer():
    """
    Provide a CountdownTimer driven by tick() calls only.

    Usage:
        def test_countdown(manual_timer):
            manual_timer.begin(3)
            manual_timer.tick()
    """
    timer = CountdownTimer(auto_tick=False)
    yield timer
    timer.stop()


@pytest.fixture
def sequencer(profile_names):
    return ProfileSequencer(profile_names, has_default=True)


# =============================================================================
# RENDER SESSION FIXTURES
# =============================================================================


@pytest.fixture
def render_session(mock_renderer, mock_source, recording_controller, manual_timer, sequencer):
    """
    Provide RenderSession with a manual timer and 8 second passes.

    Passes advance only when the test ticks the timer (or calls
    continue_render()), so the tests control time completely.

    Usage:
        def test_session(render_session, manual_timer):
            render_session.start_render()
            for _ in range(8):
                manual_timer.tick()
    """
    session = RenderSession(
        renderer=mock_renderer,
        sources=mock_source,
        recorder=recording_controller,
        timer=manual_timer,
        sequencer=sequencer,
        pass_duration=8,
        render_method="all_at_once",
        pass_length_constant=8,
    )
    mock_source.set_sample_sink(session.feed_samples)
    yield session
    session.cleanup()


# =============================================================================
# TEMPORARY FILE/DIRECTORY FIXTURES
# =============================================================================


@pytest.fixture
def temp_capture_dir():
    """
    Provide temporary directory for capture files.

    Directory is automatically cleaned up after test.
    """
    temp_dir = Path(tempfile.mkdtemp())

    yield temp_dir

    # Cleanup
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


# =============================================================================
# CALLBACK TRACKING FIXTURES
# =============================================================================


@pytest.fixture
def callback_tracker():
    """
    Provide helper for tracking callback calls.

    Usage:
        def test_callback(render_session, callback_tracker):
            render_session.subscribe(SessionEvent.PASS_STARTED, callback_tracker.track)
            # ... start session ...
            assert callback_tracker.was_called()
    """

    class CallbackTracker:
        def __init__(self):
            self.calls = []

        def track(self, *args, **kwargs):
            """Record a callback invocation"""
            self.calls.append({"args": args, "kwargs": kwargs})

        def was_called(self) -> bool:
            return len(self.calls) > 0

        def get_call_count(self) -> int:
            return len(self.calls)

        def get_last_call(self):
            """Get arguments from last call"""
            return self.calls[-1] if self.calls else None

        def get_all_calls(self):
            return self.calls.copy()

        def reset(self):
            self.calls.clear()

    return CallbackTracker()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """
    Configure pytest with custom markers for render tests.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "unit_integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
