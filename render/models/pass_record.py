"""
Pass Record Model

Bookkeeping for one rendering pass. Kept in memory for the current or
most recent session only; summarized in the log when the session ends.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class PassRecord:
    """One timed pass against a single profile."""

    index: int
    profile_name: str
    started_at: float = field(default_factory=time.time)
    ended_at: Optional[float] = None
    samples_captured: int = 0
    completed: bool = False  # True when the pass ran until timer expiry

    def finish(self, samples_captured: int, completed: bool) -> None:
        self.ended_at = time.time()
        self.samples_captured = samples_captured
        self.completed = completed

    @property
    def duration(self) -> float:
        end = self.ended_at if self.ended_at is not None else time.time()
        return end - self.started_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "profile_name": self.profile_name,
            "duration": round(self.duration, 3),
            "samples_captured": self.samples_captured,
            "completed": self.completed,
        }

    def __str__(self) -> str:
        status = "complete" if self.completed else "interrupted"
        return (
            f"#{self.index + 1} {self.profile_name}: "
            f"{self.duration:.1f}s, {self.samples_captured} samples ({status})"
        )
