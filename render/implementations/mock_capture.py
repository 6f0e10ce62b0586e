"""
Mock Audio Capture Implementation

In-memory capture for testing and dry runs without touching the disk.

This is a "Fake" (test double) - it has working logic but stores
samples in lists instead of files.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from render.interfaces.audio_capture_interface import (
    AudioCaptureInterface,
    CaptureError,
)


@dataclass
class CapturedPass:
    """Samples captured between one start and stop"""

    label: str
    samples: List[float] = field(default_factory=list)
    finalized: bool = False


class MockCapture(AudioCaptureInterface):
    """
    Mock audio capture for testing.

    Keeps every capture in memory and logs each start/stop call so tests
    can check ordering (no overlapping captures).

    Usage:
        capture = MockCapture()
        capture.start_capture("kemar.sofa")
        capture.write_samples([0.0, 0.1])
        capture.stop_capture()
        capture.get_captures()[0].samples   # [0.0, 0.1]
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        self._current: Optional[CapturedPass] = None
        self._captures: List[CapturedPass] = []
        self._call_log: List[Tuple[str, str]] = []

        # Configuration for test scenarios
        self._should_fail_start = False
        self._should_refuse_start = False

        self.logger.info("Mock Capture initialized")

    def start_capture(self, label: str) -> bool:
        if self._current is not None:
            self.logger.error("[MOCK] Already capturing")
            return False

        if self._should_fail_start:
            self.logger.error("[MOCK] Simulated start failure")
            raise CaptureError("Simulated capture failure")

        if self._should_refuse_start:
            self.logger.error("[MOCK] Simulated start refusal")
            return False

        self._current = CapturedPass(label=label)
        self._captures.append(self._current)
        self._call_log.append(("start", label))
        self.logger.info(f"[MOCK] Capture started: {label}")
        return True

    def stop_capture(self) -> bool:
        if self._current is None:
            self.logger.warning("[MOCK] Not capturing")
            return False

        self._current.finalized = True
        self._call_log.append(("stop", self._current.label))
        self.logger.info(
            f"[MOCK] Capture finalized: {self._current.label} "
            f"({len(self._current.samples)} samples)",
        )
        self._current = None
        return True

    def write_samples(self, samples: Sequence[float]) -> int:
        if self._current is None:
            return 0
        self._current.samples.extend(samples)
        return len(samples)

    def is_capturing(self) -> bool:
        return self._current is not None

    def get_output_file(self) -> Optional[Path]:
        """Mock capture never writes files"""
        return None

    def is_available(self) -> bool:
        """Mock capture is always available"""
        return True

    def cleanup(self) -> None:
        self.logger.debug("[MOCK] Cleanup")
        if self._current is not None:
            self.stop_capture()

    # =========================================================================
    # TESTING HELPER METHODS (not part of AudioCaptureInterface)
    # =========================================================================

    def simulate_start_failure(self) -> None:
        """Raise CaptureError on the next start_capture() call"""
        self._should_fail_start = True

    def simulate_start_refusal(self) -> None:
        """Return False from the next start_capture() calls"""
        self._should_refuse_start = True

    def reset_test_config(self) -> None:
        self._should_fail_start = False
        self._should_refuse_start = False

    def get_captures(self) -> List[CapturedPass]:
        return list(self._captures)

    def get_call_log(self) -> List[Tuple[str, str]]:
        """("start" | "stop", label) in call order"""
        return list(self._call_log)
