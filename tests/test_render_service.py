"""
Render Service Tests

Tests for the command-line service showing:
- Argument parsing
- One unattended session end to end
- Logging setup with fallback

To run:
    pytest tests/test_render_service.py -v
"""

import logging
import logging.handlers

import pytest

import render_service
from render_service import RenderService, build_parser, resolve_profile_names

# =============================================================================
# ARGUMENT TESTS
# =============================================================================


@pytest.mark.unit
def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.profiles is None
    assert args.mock is False
    assert args.method == render_service.DEFAULT_RENDER_METHOD


@pytest.mark.unit
def test_parser_profiles_and_options():
    args = build_parser().parse_args(
        ["--profiles", "a.sofa", "b.sofa", "--pass-duration", "4", "--method", "one_by_one"],
    )

    assert args.profiles == ["a.sofa", "b.sofa"]
    assert args.pass_duration == 4.0
    assert args.method == "one_by_one"


@pytest.mark.unit
def test_parser_rejects_unknown_method():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--method", "spiral"])


@pytest.mark.unit
def test_resolve_profile_names_from_list():
    args = build_parser().parse_args(["--profiles", "a.sofa"])

    assert resolve_profile_names(args) == ["Default", "a.sofa"]


@pytest.mark.unit
def test_resolve_profile_names_from_dir(tmp_path):
    (tmp_path / "kemar.sofa").touch()
    args = build_parser().parse_args(["--profile-dir", str(tmp_path)])

    assert resolve_profile_names(args) == ["Default", "kemar.sofa"]


# =============================================================================
# SERVICE TESTS
# =============================================================================


@pytest.mark.unit_integration
def test_service_runs_session_to_completion():
    service = RenderService(
        ["Default", "a.sofa", "b.sofa"],
        pass_duration=2,
        force_mock=True,
        tick_interval=0.01,
        install_signal_handlers=False,
    )

    assert service.run(timeout=5) is True
    assert service.final_state == "completed"
    assert service.renderer.get_active_profile_index() == 0


@pytest.mark.unit_integration
def test_service_timeout_stops_session():
    service = RenderService(
        ["Default", "a.sofa"],
        pass_duration=1000,
        force_mock=True,
        install_signal_handlers=False,
    )

    assert service.run(timeout=1) is False
    assert service.final_state == "stopped"


@pytest.mark.unit_integration
def test_service_signal_stops_session():
    service = RenderService(
        ["Default", "a.sofa"],
        pass_duration=1000,
        force_mock=True,
        install_signal_handlers=False,
    )
    service.session.start_render()

    service._signal_handler(15, None)

    assert service.session.is_rendering() is False
    assert service.final_state == "stopped"
    service.session.cleanup()


@pytest.mark.unit
def test_main_without_profiles_fails(tmp_path, monkeypatch):
    """Test an empty profile directory is reported, not raised."""
    monkeypatch.setattr(render_service, "setup_logging", lambda level: None)

    exit_code = render_service.main(["--profile-dir", str(tmp_path), "--mock"])

    assert exit_code == 2


@pytest.mark.slow
def test_main_runs_session(monkeypatch):
    monkeypatch.setattr(render_service, "setup_logging", lambda level: None)
    # Keep pytest's own SIGINT handling
    monkeypatch.setattr(render_service.signal, "signal", lambda signum, handler: None)

    exit_code = render_service.main(
        ["--profiles", "a.sofa", "--pass-duration", "1", "--mock"],
    )

    assert exit_code == 0


# =============================================================================
# LOGGING TESTS
# =============================================================================


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers[len(handlers):]:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.mark.unit
def test_setup_logging_writes_to_log_dir(tmp_path, monkeypatch, clean_root_logger):
    monkeypatch.setattr(render_service, "LOG_DIR", str(tmp_path))

    render_service.setup_logging("DEBUG")

    file_handlers = [
        h for h in clean_root_logger.handlers
        if isinstance(h, logging.handlers.TimedRotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(tmp_path / render_service.LOG_SERVICE_FILE)


@pytest.mark.unit
def test_setup_logging_falls_back_to_local_dir(tmp_path, monkeypatch, clean_root_logger):
    monkeypatch.setattr(render_service, "LOG_DIR", str(tmp_path / "missing"))
    monkeypatch.chdir(tmp_path)

    render_service.setup_logging("INFO")

    assert (tmp_path / "logs").is_dir()
