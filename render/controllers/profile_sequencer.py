"""
Profile Sequencer

Owns the ordered list of HRTF profiles cycled through by a session and
the position within it.
"""

import logging
from typing import List, Sequence

from render.errors import EmptySequenceError


class ProfileSequencer:
    """
    Cyclic cursor over the profiles of a session.

    The renderer's list starts with its system default profile, which is
    never rendered as a pass. With has_default=True that entry is dropped
    from the cycle and get_renderer_index() maps back to engine indices.

    Usage:
        sequencer = ProfileSequencer(["Default", "a.sofa", "b.sofa"])
        sequencer.get_current_name()   # "a.sofa"
        sequencer.advance()
        sequencer.is_last()            # True
        sequencer.advance()            # wraps back to "a.sofa"
    """

    def __init__(self, profile_names: Sequence[str], has_default: bool = True):
        """
        Args:
            profile_names: Profile identifiers in engine order
            has_default: Whether entry 0 is the system default profile

        Raises:
            EmptySequenceError: If no profile is left to cycle through
        """
        self.logger = logging.getLogger(__name__)
        self._offset = 1 if has_default else 0
        self._names: tuple = tuple(profile_names[self._offset:])

        if not self._names:
            raise EmptySequenceError("No profiles to render")

        self._current_index = 0
        self.logger.info(f"Profile sequencer loaded with {len(self._names)} profile(s)")

    def is_last(self) -> bool:
        return self._current_index == len(self._names) - 1

    def advance(self) -> int:
        """
        Move to the next profile, wrapping to the first after the last.

        Returns:
            New current index
        """
        if self.is_last():
            self._current_index = 0
        else:
            self._current_index += 1
        return self._current_index

    def reset(self) -> None:
        self._current_index = 0

    def get_current_index(self) -> int:
        return self._current_index

    def get_current_name(self) -> str:
        return self._names[self._current_index]

    def get_renderer_index(self) -> int:
        """Index of the current profile in the renderer's own list"""
        return self._current_index + self._offset

    def get_count(self) -> int:
        return len(self._names)

    def get_names(self) -> List[str]:
        return list(self._names)
