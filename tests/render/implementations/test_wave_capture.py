"""
WAV Capture Tests

Tests for WaveFileCapture showing:
- One valid WAV file per capture
- Float to 16-bit conversion
- Availability detection

To run:
    pytest tests/render/implementations/test_wave_capture.py -v
"""

import wave

import numpy as np
import pytest

from render.implementations.wave_capture import WaveFileCapture

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def wave_capture(temp_capture_dir):
    capture = WaveFileCapture(temp_capture_dir, sample_rate=8000, channels=2)
    yield capture
    capture.cleanup()


# =============================================================================
# CAPTURE TESTS
# =============================================================================


@pytest.mark.unit
def test_wave_capture_available(wave_capture):
    assert wave_capture.is_available() is True


@pytest.mark.unit
def test_wave_capture_creates_output_dir(temp_capture_dir):
    """Test the output directory is created when missing."""
    capture = WaveFileCapture(temp_capture_dir / "nested" / "captures")

    assert capture.is_available() is True
    assert (temp_capture_dir / "nested" / "captures").is_dir()


@pytest.mark.unit
def test_wave_capture_writes_valid_file(wave_capture):
    """Test a finished capture is a readable WAV with the written frames."""
    wave_capture.start_capture("kemar.sofa")
    output_file = wave_capture.get_output_file()

    # 100 stereo frames
    written = wave_capture.write_samples(np.zeros(200, dtype=np.float32))
    wave_capture.stop_capture()

    assert written == 200
    assert output_file.exists()
    assert output_file.suffix == ".wav"
    assert "kemar" in output_file.name

    with wave.open(str(output_file), "rb") as wav:
        assert wav.getnchannels() == 2
        assert wav.getsampwidth() == 2
        assert wav.getframerate() == 8000
        assert wav.getnframes() == 100


@pytest.mark.unit
def test_wave_capture_sample_values(wave_capture):
    """Test floats are scaled and clipped to 16-bit PCM."""
    wave_capture.start_capture("a")
    output_file = wave_capture.get_output_file()
    wave_capture.write_samples([0.0, 1.0, -1.0, 2.0])
    wave_capture.stop_capture()

    with wave.open(str(output_file), "rb") as wav:
        frames = np.frombuffer(wav.readframes(wav.getnframes()), dtype="<i2")

    assert list(frames) == [0, 32767, -32767, 32767]


@pytest.mark.unit
def test_wave_capture_one_file_per_pass(wave_capture, temp_capture_dir):
    """Test consecutive captures never share a file."""
    for label in ("a.sofa", "a.sofa", "b.sofa"):
        wave_capture.start_capture(label)
        wave_capture.write_samples([0.1, 0.1])
        wave_capture.stop_capture()

    assert len(list(temp_capture_dir.glob("*.wav"))) == 3


@pytest.mark.unit
def test_wave_capture_cannot_start_twice(wave_capture):
    assert wave_capture.start_capture("a") is True
    assert wave_capture.start_capture("b") is False


@pytest.mark.unit
def test_wave_capture_stop_when_idle(wave_capture):
    assert wave_capture.stop_capture() is False
    assert wave_capture.write_samples([0.1]) == 0


@pytest.mark.unit
def test_wave_capture_output_file_cleared_after_stop(wave_capture):
    wave_capture.start_capture("a")
    wave_capture.stop_capture()

    assert wave_capture.get_output_file() is None
    assert wave_capture.is_capturing() is False
