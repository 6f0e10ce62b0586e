"""
Audio Source Interface

Contract for the playback side of a session: the speakers/sources whose
output gets spatialized. The session rewinds and plays them at the start
of every pass and stops them when the session ends.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

SampleSink = Callable[[Sequence[float]], None]


class AudioSourceInterface(ABC):
    """Abstract base class for audio sources."""

    @abstractmethod
    def reset_and_play(self) -> None:
        """Rewind every source to its start position and play"""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop playback and rewind. Safe to call when not playing."""
        pass

    @abstractmethod
    def is_playing(self) -> bool:
        pass

    @abstractmethod
    def get_source_count(self) -> int:
        """Number of speakers in the scene"""
        pass

    @abstractmethod
    def set_sample_sink(self, sink: Optional[SampleSink]) -> None:
        """
        Register where rendered output blocks are delivered.

        The sink is called from the audio producer thread and must not block.
        """
        pass
