"""
Mock Profile Renderer Implementation

Stand-in for the spatial audio engine. Holds the profile list and the
active index, and remembers every selection for tests.
"""

import logging
from typing import List, Sequence

from config.settings import DEFAULT_PROFILE_NAME
from render.interfaces.profile_renderer_interface import ProfileRendererInterface


class MockRenderer(ProfileRendererInterface):
    """
    Profile renderer without an audio engine.

    Usage:
        renderer = MockRenderer(["a.sofa", "b.sofa"])
        renderer.get_profile_names()   # ["Default", "a.sofa", "b.sofa"]
        renderer.select_profile(2)
    """

    def __init__(
        self,
        profile_names: Sequence[str],
        include_default: bool = True,
        default_name: str = DEFAULT_PROFILE_NAME,
    ):
        """
        Args:
            profile_names: Custom profiles, in engine order
            include_default: Prepend the engine's system default entry
            default_name: Name of that default entry
        """
        self.logger = logging.getLogger(__name__)
        names = list(profile_names)
        if include_default and (not names or names[0] != default_name):
            names.insert(0, default_name)

        self._names = names
        self._active_index = 0
        self._selection_history: List[int] = []

    def get_profile_names(self) -> List[str]:
        return list(self._names)

    def select_profile(self, index: int) -> None:
        if not 0 <= index < len(self._names):
            raise IndexError(f"Profile index out of range: {index}")
        self._active_index = index
        self._selection_history.append(index)
        self.logger.debug(f"[MOCK] Active profile: {self._names[index]}")

    def get_active_profile_index(self) -> int:
        return self._active_index

    def get_active_profile_name(self) -> str:
        return self._names[self._active_index]

    def get_selection_history(self) -> List[int]:
        """Every index passed to select_profile(), in order"""
        return list(self._selection_history)
