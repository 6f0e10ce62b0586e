"""
Mock Audio Source Implementation

Simulated speakers for testing and dry runs. Optionally streams a test
tone into the registered sample sink from a background thread, the way
an audio engine's output callback would.
"""

import logging
import threading
from typing import Optional

import numpy as np

from config.settings import CAPTURE_CHANNELS, CAPTURE_SAMPLE_RATE, SOURCE_BLOCK_SIZE
from render.interfaces.audio_source_interface import AudioSourceInterface, SampleSink

TONE_FREQUENCY = 440.0  # Hz
TONE_AMPLITUDE = 0.25


class MockAudioSource(AudioSourceInterface):
    """
    Mock audio sources.

    Usage:
        sources = MockAudioSource(source_count=4)
        sources.reset_and_play()

        # With a streamed test tone
        sources = MockAudioSource(simulate_stream=True)
        sources.set_sample_sink(session.feed_samples)
        sources.reset_and_play()   # Blocks start arriving in the sink
    """

    def __init__(
        self,
        source_count: int = 1,
        simulate_stream: bool = False,
        sample_rate: int = CAPTURE_SAMPLE_RATE,
        channels: int = CAPTURE_CHANNELS,
        block_size: int = SOURCE_BLOCK_SIZE,
    ):
        """
        Initialize mock sources.

        Args:
            source_count: Number of speakers reported
            simulate_stream: If True, deliver tone blocks in real time.
                             If False, no samples are produced.
            sample_rate: Frames per second of the streamed tone
            channels: Interleaved channels per frame
            block_size: Frames per delivered block
        """
        self.logger = logging.getLogger(__name__)
        self.source_count = source_count
        self.simulate_stream = simulate_stream
        self.sample_rate = sample_rate
        self.channels = channels
        self.block_size = block_size

        self._is_playing = False
        self._sink: Optional[SampleSink] = None
        self._play_count = 0
        self._frame_position = 0

        self._stream_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

        self.logger.info(
            f"Mock Audio Source initialized ({source_count} source(s), "
            f"simulate_stream: {simulate_stream})",
        )

    def reset_and_play(self) -> None:
        self._stop_stream()
        self._frame_position = 0
        self._is_playing = True
        self._play_count += 1
        self.logger.debug("[MOCK] Sources rewound and playing")

        if self.simulate_stream:
            self._stop_event.clear()
            self._stream_thread = threading.Thread(
                target=self._stream_worker,
                daemon=True,
                name="MockAudioSource-Stream",
            )
            self._stream_thread.start()

    def stop(self) -> None:
        self._stop_stream()
        self._is_playing = False
        self._frame_position = 0

    def is_playing(self) -> bool:
        return self._is_playing

    def get_source_count(self) -> int:
        return self.source_count

    def set_sample_sink(self, sink: Optional[SampleSink]) -> None:
        self._sink = sink

    def get_play_count(self) -> int:
        """Number of reset_and_play() calls so far"""
        return self._play_count

    def next_block(self) -> np.ndarray:
        """
        Generate the next interleaved tone block and advance the position.
        """
        frames = np.arange(self._frame_position, self._frame_position + self.block_size)
        self._frame_position += self.block_size
        tone = TONE_AMPLITUDE * np.sin(2 * np.pi * TONE_FREQUENCY * frames / self.sample_rate)
        return np.repeat(tone.astype(np.float32), self.channels)

    def _stop_stream(self) -> None:
        if self._stream_thread and self._stream_thread.is_alive():
            self._stop_event.set()
            if self._stream_thread is not threading.current_thread():
                self._stream_thread.join(timeout=2.0)
        self._stream_thread = None

    def _stream_worker(self) -> None:
        """Deliver one block per block period until stopped"""
        block_period = self.block_size / self.sample_rate

        while not self._stop_event.wait(block_period):
            sink = self._sink
            if sink is None:
                continue
            try:
                sink(self.next_block())
            except Exception as e:
                self.logger.error(f"[MOCK] Error in sample sink: {e}")

    def __del__(self):
        """Destructor - ensure the stream thread stops"""
        self._stop_event.set()
