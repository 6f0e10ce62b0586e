"""
Render Utilities Package

Exposes shared utility functions for render sessions.
"""

from render.utils.render_utils import (
    estimate_total_duration,
    float_to_pcm16,
    generate_pass_filename,
    load_profile_names,
    safe_filename,
)

# Public API
__all__ = [
    "estimate_total_duration",
    "float_to_pcm16",
    "generate_pass_filename",
    "load_profile_names",
    "safe_filename",
]
