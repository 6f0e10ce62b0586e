"""
Render Utilities

Shared utility functions for render sessions: duration estimation,
capture file naming, profile discovery and sample conversion.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Sequence, Union

import numpy as np

from config.settings import (
    CAPTURE_FILENAME_EXTENSION,
    CAPTURE_FILENAME_PATTERN,
    DEFAULT_PROFILE_NAME,
    PROFILE_FILE_EXTENSION,
)
from render.constants import RenderMethod, parse_render_method

logger = logging.getLogger(__name__)

PCM16_SCALE = 32767


def estimate_total_duration(
    method: Union[str, RenderMethod],
    pass_duration: float,
    profile_count: int,
    speaker_count: int,
    pass_length_constant: float,
) -> float:
    """
    Estimate how long a whole session will take.

    The two methods are not equivalent: ALL_AT_ONCE scales
    with the pass duration, ONE_BY_ONE uses the fixed per-speaker length.

    Args:
        method: RenderMethod or its name
        pass_duration: Seconds per profile pass
        profile_count: Number of profiles in the cycle
        speaker_count: Number of speakers in the scene
        pass_length_constant: Fixed per-speaker length (ONE_BY_ONE)

    Returns:
        Estimated seconds, or 0 if the method is unknown (no estimate)

    Example:
        estimate_total_duration(RenderMethod.ALL_AT_ONCE, 8, 3, 1, 8) -> 24
        estimate_total_duration(RenderMethod.ONE_BY_ONE, 8, 3, 4, 8) -> 32
    """
    resolved = parse_render_method(method)

    if resolved == RenderMethod.ALL_AT_ONCE:
        return pass_duration * profile_count
    if resolved == RenderMethod.ONE_BY_ONE:
        return speaker_count * pass_length_constant

    logger.warning(f"Unknown render method {method!r}, no duration estimate")
    return 0


def safe_filename(name: str) -> str:
    """
    Make a profile name usable as part of a filename.

    Example:
        safe_filename("KEMAR small.sofa") -> "KEMAR_small"
    """
    stem = Path(name).stem if Path(name).suffix else name
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", stem).strip("._")
    return cleaned or "profile"


def generate_pass_filename(
    base_path: Path,
    label: str,
    format_string: str = CAPTURE_FILENAME_PATTERN,
    extension: str = CAPTURE_FILENAME_EXTENSION,
) -> Path:
    """
    Generate a timestamped capture filename for one pass.

    Adds a numeric suffix when a file with the same name already exists
    (two passes started within the same second).

    Example:
        generate_pass_filename(Path("/captures"), "kemar.sofa")
        # Returns: /captures/pass_2025-01-15_143022_kemar.wav
    """
    timestamp = datetime.now().strftime(format_string)
    stem = f"{timestamp}_{safe_filename(label)}"

    candidate = base_path / f"{stem}{extension}"
    counter = 1
    while candidate.exists():
        candidate = base_path / f"{stem}_{counter}{extension}"
        counter += 1
    return candidate


def load_profile_names(
    profile_dir: Path,
    extension: str = PROFILE_FILE_EXTENSION,
    default_name: str = DEFAULT_PROFILE_NAME,
) -> List[str]:
    """
    List profile files in a directory, default entry first.

    Returns:
        [default_name, *sorted file names], or [default_name] if the
        directory does not exist
    """
    if not profile_dir.is_dir():
        logger.warning(f"Profile directory not found: {profile_dir}")
        return [default_name]

    files = sorted(
        p.name for p in profile_dir.iterdir()
        if p.is_file() and p.suffix.lower() == extension.lower()
    )
    logger.info(f"Found {len(files)} profile(s) in {profile_dir}")
    return [default_name, *files]


def float_to_pcm16(samples: Sequence[float]) -> bytes:
    """
    Convert float samples in [-1.0, 1.0] to little-endian 16-bit PCM.

    Out-of-range values are clipped.
    """
    data = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    return (data * PCM16_SCALE).astype("<i2").tobytes()
