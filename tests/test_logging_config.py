"""
Tests for the logging setup used by season_demo.py.
"""

import logging
import logging.handlers

import pytest

from logging_config import (
    CORE_PACKAGES,
    ColoredFormatter,
    setup_core_logging,
    setup_development_logging,
    setup_logging,
    setup_schedule_debug_logging,
    setup_schedule_logging,
    setup_simulation_logging,
)


@pytest.fixture
def restore_root_logger():
    """Remove the handlers setup_logging installed and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def reset_core_levels():
    """Return every package logger to NOTSET after a preset test."""
    yield
    for name in CORE_PACKAGES + ("scheduling.week_assigner", "scheduling.matchup_builder"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handlers_created(self, tmp_path, restore_root_logger):
        setup_logging(level="DEBUG", log_dir=str(tmp_path), enable_console=False)

        logging.getLogger("scheduling").error("schedule failed")
        for handler in restore_root_logger.handlers:
            handler.flush()

        names = sorted(path.name for path in tmp_path.iterdir())
        assert names == ["gridiron_season.log", "gridiron_season_debug.log", "gridiron_season_error.log"]
        assert "schedule failed" in (tmp_path / "gridiron_season_error.log").read_text(encoding="utf-8")

    def test_console_only(self, tmp_path, restore_root_logger):
        setup_logging(level="WARNING", log_dir=str(tmp_path / "unused"), enable_file=False, format_style="simple")

        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, ColoredFormatter)
        assert not (tmp_path / "unused").exists()

    def test_unknown_level(self, restore_root_logger):
        with pytest.raises(ValueError):
            setup_logging(level="LOUD", enable_file=False)

    def test_colored_formatter_restores_levelname(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)

        output = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "\033[32m" in output
        assert record.levelname == "INFO"


class TestPresets:
    """Tests for the package presets the demo selects from."""

    def test_simulation_preset(self, reset_core_levels):
        setup_simulation_logging()

        assert logging.getLogger("game_simulation").level == logging.WARNING

    def test_core_preset(self, reset_core_levels):
        setup_core_logging("ERROR")

        assert logging.getLogger("playoff_system").level == logging.ERROR
        assert logging.getLogger("season").level == logging.ERROR

    def test_schedule_preset(self, reset_core_levels):
        setup_schedule_logging("debug")

        assert logging.getLogger("scheduling").level == logging.DEBUG
        assert logging.getLogger("scheduling.week_assigner").level == logging.DEBUG

    def test_development_preset(self, tmp_path, restore_root_logger, reset_core_levels):
        setup_development_logging(log_dir=str(tmp_path))

        assert restore_root_logger.level == logging.DEBUG
        assert logging.getLogger("game_simulation").level == logging.INFO
        assert (tmp_path / "gridiron_season_debug.log").exists()

    def test_schedule_debug_preset(self, tmp_path, restore_root_logger, reset_core_levels):
        setup_schedule_debug_logging(log_dir=str(tmp_path))

        assert logging.getLogger("scheduling").level == logging.DEBUG
        assert logging.getLogger("season").level == logging.INFO
