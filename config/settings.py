"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Machine-specific paths and overrides belong in .env, NOT here
- Import these settings in modules: from config.settings import PASS_DURATION
- Keep values generic and independent of any particular audio engine
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

# Seconds each HRTF profile is rendered for (one pass)
PASS_DURATION = float(os.getenv("PASS_DURATION", "8.0"))

# Fixed per-speaker pass length used by the one-by-one estimate (seconds)
PASS_LENGTH_CONSTANT = 8.0

# Total duration estimation policy: "all_at_once" or "one_by_one"
DEFAULT_RENDER_METHOD = os.getenv("RENDER_METHOD", "all_at_once")

# Countdown granularity (seconds). Tests shrink this, production never should.
TIMER_TICK_INTERVAL = 1.0

# =============================================================================
# PROFILE CONFIGURATION
# =============================================================================

# Name of the system default HRTF. Always entry 0 of the renderer's list
# and never rendered as a pass.
DEFAULT_PROFILE_NAME = "Default"

# Directory scanned for custom profiles
PROFILE_DIR = Path(os.getenv("PROFILE_DIR", "./hrtf"))
PROFILE_FILE_EXTENSION = ".sofa"

# =============================================================================
# CAPTURE CONFIGURATION
# =============================================================================

CAPTURE_OUTPUT_DIR = Path(os.getenv("CAPTURE_OUTPUT_DIR", "./captures"))
CAPTURE_SAMPLE_RATE = int(os.getenv("CAPTURE_SAMPLE_RATE", "48000"))  # Hz
CAPTURE_CHANNELS = 2  # Binaural output
CAPTURE_SAMPLE_WIDTH = 2  # bytes (16-bit PCM)

# strftime pattern, the profile label is appended
CAPTURE_FILENAME_PATTERN = "pass_%Y-%m-%d_%H%M%S"
CAPTURE_FILENAME_EXTENSION = ".wav"

# Frames per block delivered by the simulated audio source
SOURCE_BLOCK_SIZE = 1024

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = os.getenv("LOG_DIR", "/var/log/hrtf-render")
LOG_SERVICE_FILE = "render-service.log"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_BACKUP_COUNT = 7  # days
