"""
Audio Capture Interface

Abstract interface for capturing the rendered output of each pass.
Defines the contract that any capture backend must follow.

High-level code (RecordingController) depends on this abstraction,
not on a particular file format or audio API.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence


class AudioCaptureInterface(ABC):
    """
    Abstract base class for audio capture backends.

    One capture corresponds to one rendering pass. The backend decides how
    samples are stored; the session only starts, feeds and stops it.
    """

    @abstractmethod
    def start_capture(self, label: str) -> bool:
        """
        Begin a new capture.

        Must be NON-BLOCKING apart from opening the destination.

        Args:
            label: Human-readable pass label (usually the profile name)

        Returns:
            True if capture started, False otherwise

        Raises:
            CaptureError: If the destination cannot be opened
        """
        pass

    @abstractmethod
    def stop_capture(self) -> bool:
        """
        Finalize the current capture (flush and close).

        Returns:
            True if a capture was finalized, False if none was running
        """
        pass

    @abstractmethod
    def write_samples(self, samples: Sequence[float]) -> int:
        """
        Append interleaved float samples in [-1.0, 1.0].

        Called from the audio producer thread. Must not block for long.

        Returns:
            Number of samples written (0 if not capturing)
        """
        pass

    @abstractmethod
    def is_capturing(self) -> bool:
        """Check if a capture is currently open"""
        pass

    @abstractmethod
    def get_output_file(self) -> Optional[Path]:
        """
        Get destination of the current capture.

        Returns:
            Path if capturing to a file, None otherwise
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this backend can be used (destination writable, etc.)"""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """
        Finalize any open capture and release resources.

        This should never raise exceptions.
        """
        pass


class CaptureError(Exception):
    """
    Exception raised for capture backend errors.

    Examples:
    - Output directory not writable
    - Audio device disappeared
    """
    pass


class CaptureProcessError(CaptureError):
    """Error while writing or finalizing a capture"""
    pass
