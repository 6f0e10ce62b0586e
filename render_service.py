"""
Render Service

Command-line entry point that runs one unattended HRTF comparison session.

Architecture:
- RenderFactory wires renderer, sources, capture and timer
- RenderSession drives the passes on its own timer thread
- This service only starts the session, reports progress and
  waits for it to end

State Flow:
    IDLE → RUNNING → COMPLETED
              ↓
           STOPPED (SIGINT/SIGTERM)

Usage:
    python render_service.py --profile-dir ./hrtf --pass-duration 8
    python render_service.py --profiles kemar.sofa fabian.sofa --mock
"""

import argparse
import logging
import logging.handlers
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional, Sequence

from config.settings import (
    CAPTURE_OUTPUT_DIR,
    DEFAULT_RENDER_METHOD,
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_LEVEL,
    LOG_SERVICE_FILE,
    PASS_DURATION,
    PROFILE_DIR,
    TIMER_TICK_INTERVAL,
)
from render import (
    RenderError,
    RenderFactory,
    RenderMethod,
    RenderSession,
    SessionEvent,
    format_duration,
    load_profile_names,
)
from render.implementations.mock_audio_source import MockAudioSource
from render.implementations.mock_renderer import MockRenderer

# Seconds between progress lines while waiting for the session
PROGRESS_INTERVAL = 1.0


class RenderService:
    """
    Main service coordinator.

    Usage:
        service = RenderService(["Default", "a.sofa", "b.sofa"])
        service.run()  # Blocks until the session completes or is stopped
    """

    def __init__(
        self,
        profile_names: Sequence[str],
        pass_duration: float = PASS_DURATION,
        render_method: str = DEFAULT_RENDER_METHOD,
        output_dir: Path = CAPTURE_OUTPUT_DIR,
        force_mock: bool = False,
        tick_interval: float = TIMER_TICK_INTERVAL,
        install_signal_handlers: bool = True,
    ):
        """
        Initialize the service and wire the session.

        Args:
            profile_names: Renderer profile list, system default first
            pass_duration: Seconds per pass
            render_method: Total duration estimation policy
            output_dir: Directory for WAV captures
            force_mock: Capture in memory instead of WAV files
            tick_interval: Countdown tick length (seconds)
            install_signal_handlers: Stop the session on SIGINT/SIGTERM
        """
        self.logger = logging.getLogger(__name__)
        self.logger.info("Initializing Render Service...")

        self.renderer = MockRenderer(profile_names, include_default=False)
        self.sources = MockAudioSource(simulate_stream=True)
        capture = RenderFactory.create_capture(
            mode="mock" if force_mock else "auto",
            output_dir=output_dir,
        )

        self.session: RenderSession = RenderFactory.create_session(
            renderer=self.renderer,
            sources=self.sources,
            capture=capture,
            pass_duration=pass_duration,
            render_method=render_method,
            tick_interval=tick_interval,
        )

        self._finished = threading.Event()
        self.final_state: Optional[str] = None
        self._setup_callbacks()

        if install_signal_handlers:
            signal.signal(signal.SIGTERM, self._signal_handler)
            signal.signal(signal.SIGINT, self._signal_handler)

        self.logger.info("Render Service initialized successfully")

    def _setup_callbacks(self):
        """Wire session notifications to service handlers."""
        self.session.subscribe(SessionEvent.PASS_STARTED, self._handle_pass_started)
        self.session.subscribe(SessionEvent.SESSION_COMPLETED, self._handle_session_end)
        self.session.subscribe(SessionEvent.SESSION_STOPPED, self._handle_session_end)

    def run(self, timeout: Optional[float] = None) -> bool:
        """
        Run one session to its end.

        Args:
            timeout: Give up waiting after this many seconds (None = no limit)

        Returns:
            True if the session completed, False if it was stopped
        """
        self.logger.info("Starting render session...")
        self._finished.clear()
        self.session.start_render()

        try:
            waited = 0.0
            while not self._finished.wait(PROGRESS_INTERVAL):
                waited += PROGRESS_INTERVAL
                self.logger.debug(self.session.get_session_info())
                if timeout is not None and waited >= timeout:
                    self.logger.warning("Session timed out, stopping")
                    self.session.stop_render()
                    break
        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
            self.session.stop_render()
        finally:
            self._shutdown()

        return self.final_state == "completed"

    def _handle_pass_started(self, data: dict):
        self.logger.info(
            f"Pass {data['index'] + 1}/{self.session.profile_count()}: "
            f"{data['profile_name']} "
            f"(session time left: {format_duration(self.session.time_left_total())})",
        )

    def _handle_session_end(self, summary: dict):
        self.final_state = summary["state"]
        self.logger.info(
            f"Session {summary['state']}: {len(summary['passes'])} pass(es) rendered",
        )
        self._finished.set()

    def _signal_handler(self, signum, _frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            _frame: Current stack frame (unused, required by signal API)
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received signal {signal_name}, stopping session...")
        self.session.stop_render()

    def _shutdown(self):
        """Graceful shutdown: stop the session and release collaborators."""
        self.logger.info("Shutting down Render Service...")
        self.session.cleanup()
        self.logger.info("Render Service shutdown complete")


def setup_logging(level: str = LOG_LEVEL):
    """
    Setup logging with rotation.

    Logs to both console and file with rotation:
    - Daily rotation
    - Keep LOG_BACKUP_COUNT days of logs
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    log_format = logging.Formatter(
        "%(asctime)s %(levelname)s %(message)s | %(name)s",
    )

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(log_format)
    logger.addHandler(console_handler)

    log_file = Path(LOG_DIR) / LOG_SERVICE_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        # Fallback to local logs directory if LOG_DIR not writable
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / LOG_SERVICE_FILE
        logger.warning(f"Cannot write to {log_file}, using fallback: {fallback_log}")

        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(fallback_log),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )

    file_handler.setLevel(level)
    file_handler.setFormatter(log_format)
    logger.addHandler(file_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render spatial audio through every HRTF profile, "
        "recording one capture per profile.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --profile-dir ./hrtf
  %(prog)s --profiles kemar.sofa fabian.sofa --pass-duration 4 --mock
        """,
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--profile-dir",
        type=Path,
        default=PROFILE_DIR,
        help=f"Directory of profile files (default: {PROFILE_DIR})",
    )
    source.add_argument(
        "--profiles",
        nargs="+",
        metavar="NAME",
        help="Profile names to render, in order",
    )
    parser.add_argument(
        "--pass-duration",
        type=float,
        default=PASS_DURATION,
        help=f"Seconds per profile (default: {PASS_DURATION})",
    )
    parser.add_argument(
        "--method",
        choices=[method.value for method in RenderMethod],
        default=DEFAULT_RENDER_METHOD,
        help="Total duration estimation policy",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=CAPTURE_OUTPUT_DIR,
        help=f"Directory for WAV captures (default: {CAPTURE_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Capture in memory, write no files",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def resolve_profile_names(args: argparse.Namespace) -> List[str]:
    """Renderer profile list (default entry first) from parsed arguments"""
    if args.profiles:
        return MockRenderer(args.profiles).get_profile_names()
    return load_profile_names(args.profile_dir)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the service.

    Sets up logging and runs one session.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("HRTF Render Service Starting")
    logger.info("=" * 60)

    try:
        service = RenderService(
            resolve_profile_names(args),
            pass_duration=args.pass_duration,
            render_method=args.method,
            output_dir=args.output_dir,
            force_mock=args.mock,
        )
        completed = service.run()
    except RenderError as e:
        logger.error(f"Cannot run session: {e}")
        return 2
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        return 1

    return 0 if completed else 130


if __name__ == "__main__":
    sys.exit(main())
