"""
Recording Controller

Wraps an audio capture backend with idempotent start/stop and a
non-blocking sample path for the audio producer thread.

SOLID Principles:
- Single Responsibility: Only manages the capture lifecycle
- Dependency Inversion: Depends on AudioCaptureInterface
"""

import logging
import threading
from typing import Any, Dict, Optional, Sequence

from render.errors import AlreadyRecordingError
from render.interfaces.audio_capture_interface import (
    AudioCaptureInterface,
    CaptureError,
)


class RecordingController:
    """
    Start/stop/feed coordination for one capture at a time.

    Usage:
        recorder = RecordingController(MockCapture())
        recorder.start("kemar.sofa")
        recorder.feed_samples(block)   # From the audio thread
        recorder.stop()
        recorder.stop()                # No-op, returns False
    """

    def __init__(self, capture: AudioCaptureInterface):
        """
        Initialize recording controller.

        Args:
            capture: Capture backend that stores the samples
        """
        self.logger = logging.getLogger(__name__)
        self.capture = capture

        # Held during start/stop; feed_samples never waits on it
        self._lock = threading.Lock()
        self._is_recording = False
        self._current_label: Optional[str] = None

        # Counters
        self._samples_written = 0
        self._dropped_buffers = 0
        self._recordings_started = 0

        self.logger.info("Recording Controller initialized")

    def start(self, label: str) -> None:
        """
        Start capturing a new pass.

        Args:
            label: Pass label handed to the capture backend

        Raises:
            AlreadyRecordingError: If a capture is already active
            CaptureError: If the backend refuses to start
        """
        with self._lock:
            if self._is_recording:
                raise AlreadyRecordingError(
                    f"Already recording {self._current_label!r}",
                )

            if not self.capture.start_capture(label):
                raise CaptureError(f"Capture backend failed to start for {label!r}")

            self._is_recording = True
            self._current_label = label
            self._samples_written = 0
            self._recordings_started += 1

        self.logger.info(f"Recording started: {label}")

    def stop(self) -> bool:
        """
        Stop and finalize the current capture.

        Returns:
            True if a capture was stopped, False if not recording
        """
        with self._lock:
            if not self._is_recording:
                return False

            label = self._current_label
            try:
                self.capture.stop_capture()
            except Exception as e:
                self.logger.error(f"Error finalizing capture {label!r}: {e}")
            finally:
                self._is_recording = False
                self._current_label = None

        self.logger.info(
            f"Recording stopped: {label} ({self._samples_written} samples)",
        )
        return True

    def feed_samples(self, samples: Sequence[float]) -> bool:
        """
        Append samples to the current capture.

        Dropped (not buffered) when not recording or while a start/stop
        holds the controller.

        Returns:
            True if the samples were written
        """
        if not self._is_recording:
            self._dropped_buffers += 1
            return False

        if not self._lock.acquire(blocking=False):
            self._dropped_buffers += 1
            return False

        try:
            if not self._is_recording:
                self._dropped_buffers += 1
                return False
            self._samples_written += self.capture.write_samples(samples)
            return True
        except Exception as e:
            self.logger.error(f"Error writing samples: {e}")
            self._dropped_buffers += 1
            return False
        finally:
            self._lock.release()

    def is_recording(self) -> bool:
        return self._is_recording

    def get_current_label(self) -> Optional[str]:
        return self._current_label

    def get_samples_written(self) -> int:
        """Samples written to the current (or last) capture, final once stop() returns"""
        return self._samples_written

    def get_dropped_buffers(self) -> int:
        return self._dropped_buffers

    def get_status(self) -> Dict[str, Any]:
        return {
            "is_recording": self._is_recording,
            "label": self._current_label,
            "samples_written": self._samples_written,
            "dropped_buffers": self._dropped_buffers,
            "recordings_started": self._recordings_started,
            "output_file": (
                str(self.capture.get_output_file())
                if self.capture.get_output_file() else None
            ),
        }

    def cleanup(self) -> None:
        """Stop any capture and release the backend"""
        self.logger.info("Cleaning up Recording Controller")
        self.stop()
        self.capture.cleanup()
