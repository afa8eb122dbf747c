"""
Logging Configuration for Gridiron Season

Central logging setup for the season core. Library modules only ever call
``logging.getLogger(__name__)``; nothing in the core configures the root
logger on import. Applications (the demo script, a UI, a test harness) call
one of the setup functions below once at startup.

Usage Example:
    from logging_config import setup_logging, setup_simulation_logging

    setup_logging(level="INFO", log_dir="logs", enable_console=True)
    setup_simulation_logging("WARNING")

Log Files Created (when file output is enabled):
- logs/gridiron_season.log: Main log (INFO+)
- logs/gridiron_season_debug.log: Debug log (DEBUG+), schedule repair detail lands here
- logs/gridiron_season_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backups.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional


DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "gridiron_season"

# Top-level packages of the season core, used by the module presets
CORE_PACKAGES = (
    "season_calendar",
    "league",
    "scheduling",
    "playoff_system",
    "game_simulation",
    "season",
)


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output.

    Wraps the level name in ANSI color codes. The record is restored after
    formatting so file handlers sharing the record see the plain name.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        levelname = record.levelname
        if levelname not in self.COLORS:
            return super().format(record)

        record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def _level(level: str) -> int:
    """Translate a level name to its numeric value, rejecting unknown names."""
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def _rotating_handler(
    log_dir: str,
    suffix: str,
    level: int,
    log_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    filename = f"{LOG_FILE_PREFIX}{suffix}.log"
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, filename),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    format_style: str = "detailed",
    colored_console: bool = True
) -> None:
    """
    Setup application-wide logging configuration.

    Call once at application startup. Existing root handlers are replaced.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to the console
        enable_file: Whether to write rotating log files
        max_bytes: Maximum size per log file before rotation
        backup_count: Number of rotated files to keep
        format_style: "detailed" or "simple" file format
        colored_console: Whether console level names are colored

    Raises:
        ValueError: If ``level`` is not a known log level name
    """
    numeric_level = _level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    log_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        formatter_cls = ColoredFormatter if colored_console else logging.Formatter
        console_handler.setFormatter(formatter_cls(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(
            _rotating_handler(log_dir, "", logging.INFO, log_format, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_debug", logging.DEBUG, DETAILED_FORMAT, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_error", logging.ERROR, DETAILED_FORMAT, max_bytes, backup_count)
        )

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def configure_module_logger(module_name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configure logging for a specific module or package.

    Args:
        module_name: Logger name (e.g., "scheduling.week_assigner")
        level: Log level for this logger (None = inherit)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(_level(level))

    return logger


# ========== Module Presets ==========

def setup_schedule_logging(level: str = "INFO") -> None:
    """Configure the schedule generator and its week assigner."""
    configure_module_logger("scheduling", level=level)
    configure_module_logger("scheduling.week_assigner", level=level)
    configure_module_logger("scheduling.matchup_builder", level=level)


def setup_simulation_logging(level: str = "WARNING") -> None:
    """
    Configure the game engine.

    The engine logs per-game detail at DEBUG, which is noisy across a full
    season, so the preset defaults to WARNING.
    """
    configure_module_logger("game_simulation", level=level)


def setup_core_logging(level: str = "INFO") -> None:
    """Apply one level to every package of the season core."""
    for package in CORE_PACKAGES:
        configure_module_logger(package, level=level)


# ========== Quick Setup Presets ==========

def setup_development_logging(log_dir: str = "logs") -> None:
    """DEBUG to colored console and files, detailed format."""
    setup_logging(
        level="DEBUG",
        log_dir=log_dir,
        enable_console=True,
        enable_file=True,
        format_style="detailed"
    )
    setup_simulation_logging("INFO")


def setup_schedule_debug_logging(log_dir: str = "logs") -> None:
    """INFO everywhere, with the scheduler's repair passes at DEBUG."""
    setup_logging(level="DEBUG", log_dir=log_dir, enable_console=True, enable_file=True)
    setup_core_logging("INFO")
    setup_schedule_logging("DEBUG")
