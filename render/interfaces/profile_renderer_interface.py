"""
Profile Renderer Interface

Contract for the spatial audio engine that applies HRTF profiles.
The session only needs the list of profile names and a way to select
the active one by index; spatialization itself happens elsewhere.
"""

from abc import ABC, abstractmethod
from typing import List


class ProfileRendererInterface(ABC):
    """
    Abstract base class for HRTF rendering engines.

    Index 0 of get_profile_names() is the engine's system default profile.
    """

    @abstractmethod
    def get_profile_names(self) -> List[str]:
        """
        Get all profile names known to the engine, in engine order.

        Returns:
            List of profile identifiers (e.g. SOFA file names)
        """
        pass

    @abstractmethod
    def select_profile(self, index: int) -> None:
        """
        Make the profile at index the active one.

        Raises:
            IndexError: If index is out of range
        """
        pass

    @abstractmethod
    def get_active_profile_index(self) -> int:
        """Get index of the profile currently applied"""
        pass
