"""
Mock Audio Source and Renderer Tests

To run:
    pytest tests/render/implementations/test_mock_sources.py -v
"""

import threading

import numpy as np
import pytest

from render.implementations.mock_audio_source import MockAudioSource
from render.implementations.mock_renderer import MockRenderer

# =============================================================================
# AUDIO SOURCE TESTS
# =============================================================================


@pytest.mark.unit
def test_source_reset_and_play(mock_source):
    mock_source.reset_and_play()

    assert mock_source.is_playing() is True
    assert mock_source.get_play_count() == 1
    assert mock_source.get_source_count() == 4

    mock_source.stop()
    assert mock_source.is_playing() is False


@pytest.mark.unit
def test_source_block_shape():
    """Test blocks are interleaved and within [-1, 1]."""
    sources = MockAudioSource(channels=2, block_size=64)

    block = sources.next_block()

    assert block.shape == (128,)
    assert np.all(np.abs(block) <= 1.0)
    # Channels carry the same tone
    assert np.array_equal(block[0::2], block[1::2])


@pytest.mark.unit
def test_source_rewinds_on_reset():
    """Test reset_and_play() restarts the tone from the beginning."""
    sources = MockAudioSource(block_size=32)
    first = sources.next_block()
    sources.next_block()

    sources.reset_and_play()

    assert np.array_equal(sources.next_block(), first)
    sources.stop()


@pytest.mark.slow
def test_source_streams_into_sink():
    """Test simulated streaming delivers blocks to the sink."""
    received = threading.Event()
    blocks = []

    def sink(samples):
        blocks.append(samples)
        received.set()

    sources = MockAudioSource(simulate_stream=True, sample_rate=8000, block_size=80)
    sources.set_sample_sink(sink)
    sources.reset_and_play()

    assert received.wait(timeout=2.0)
    sources.stop()

    assert len(blocks) >= 1
    assert sources.is_playing() is False


# =============================================================================
# RENDERER TESTS
# =============================================================================


@pytest.mark.unit
def test_renderer_prepends_default():
    renderer = MockRenderer(["a.sofa", "b.sofa"])

    assert renderer.get_profile_names() == ["Default", "a.sofa", "b.sofa"]
    assert renderer.get_active_profile_index() == 0


@pytest.mark.unit
def test_renderer_keeps_existing_default():
    renderer = MockRenderer(["Default", "a.sofa"])

    assert renderer.get_profile_names() == ["Default", "a.sofa"]


@pytest.mark.unit
def test_renderer_select_profile(mock_renderer):
    mock_renderer.select_profile(2)

    assert mock_renderer.get_active_profile_index() == 2
    assert mock_renderer.get_active_profile_name() == "fabian.sofa"
    assert mock_renderer.get_selection_history() == [2]


@pytest.mark.unit
@pytest.mark.parametrize("index", [-1, 4])
def test_renderer_select_out_of_range(mock_renderer, index):
    with pytest.raises(IndexError):
        mock_renderer.select_profile(index)

    assert mock_renderer.get_active_profile_index() == 0
