"""
WAV File Capture Implementation

Writes each pass to its own 16-bit PCM WAV file. Float samples from the
render pipeline are clipped to [-1, 1] and scaled to int16 on the way in.
"""

import logging
import os
import threading
import wave
from pathlib import Path
from typing import Optional, Sequence

from config.settings import (
    CAPTURE_CHANNELS,
    CAPTURE_OUTPUT_DIR,
    CAPTURE_SAMPLE_RATE,
    CAPTURE_SAMPLE_WIDTH,
)
from render.interfaces.audio_capture_interface import (
    AudioCaptureInterface,
    CaptureError,
    CaptureProcessError,
)
from render.utils.render_utils import float_to_pcm16, generate_pass_filename


class WaveFileCapture(AudioCaptureInterface):
    """
    One WAV file per pass.

    Usage:
        capture = WaveFileCapture(Path("./captures"))
        capture.start_capture("kemar.sofa")
        capture.write_samples(block)   # interleaved floats
        capture.stop_capture()         # file closed and valid
    """

    def __init__(
        self,
        output_dir: Path = CAPTURE_OUTPUT_DIR,
        sample_rate: int = CAPTURE_SAMPLE_RATE,
        channels: int = CAPTURE_CHANNELS,
    ):
        """
        Initialize WAV capture.

        Args:
            output_dir: Directory for capture files (created on first start)
            sample_rate: Frames per second written to the header
            channels: Interleaved channel count
        """
        self.logger = logging.getLogger(__name__)
        self.output_dir = Path(output_dir)
        self.sample_rate = sample_rate
        self.channels = channels

        self._lock = threading.Lock()
        self._wav: Optional[wave.Wave_write] = None
        self._output_file: Optional[Path] = None
        self._samples_written = 0

        self.logger.info(
            f"WAV Capture initialized ({output_dir}, {sample_rate} Hz, "
            f"{channels} ch)",
        )

    def start_capture(self, label: str) -> bool:
        with self._lock:
            if self._wav is not None:
                self.logger.error("Already capturing")
                return False

            try:
                self.output_dir.mkdir(parents=True, exist_ok=True)
                output_file = generate_pass_filename(self.output_dir, label)
                wav = wave.open(str(output_file), "wb")
                wav.setnchannels(self.channels)
                wav.setsampwidth(CAPTURE_SAMPLE_WIDTH)
                wav.setframerate(self.sample_rate)
            except (OSError, wave.Error) as e:
                raise CaptureError(f"Cannot open capture file: {e}") from e

            self._wav = wav
            self._output_file = output_file
            self._samples_written = 0

        self.logger.info(f"Capturing to {output_file.name}")
        return True

    def stop_capture(self) -> bool:
        with self._lock:
            if self._wav is None:
                return False

            wav, output_file = self._wav, self._output_file
            self._wav = None
            self._output_file = None
            try:
                wav.close()
            except (OSError, wave.Error) as e:
                raise CaptureProcessError(f"Error finalizing {output_file}: {e}") from e

        frames = self._samples_written // max(1, self.channels)
        self.logger.info(
            f"Capture saved: {output_file.name} "
            f"({frames / self.sample_rate:.1f}s)",
        )
        return True

    def write_samples(self, samples: Sequence[float]) -> int:
        with self._lock:
            if self._wav is None:
                return 0
            try:
                self._wav.writeframes(float_to_pcm16(samples))
            except (OSError, wave.Error) as e:
                raise CaptureProcessError(f"Error writing samples: {e}") from e
            self._samples_written += len(samples)
            return len(samples)

    def is_capturing(self) -> bool:
        return self._wav is not None

    def get_output_file(self) -> Optional[Path]:
        return self._output_file

    def is_available(self) -> bool:
        """Available if the output directory exists (or can be made) and is writable"""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.warning(f"Capture directory unavailable: {e}")
            return False
        return os.access(self.output_dir, os.W_OK)

    def cleanup(self) -> None:
        try:
            self.stop_capture()
        except CaptureError as e:
            self.logger.error(f"Error during capture cleanup: {e}")
