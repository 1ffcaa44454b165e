# src/todolist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (opening the task file), runs the
console REPL and flushes the working copy back to the file on exit.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_api import flush_working_copy
from ..tasks.task_store import TaskStoreError, TaskStoreStartupError

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Final save of the working copy; errors are logged, not raised."""
    try:
        flush_working_copy(state)
    except (TaskStoreError, ValueError):
        logger.exception("Failed to save tasks during shutdown.")


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(
        log_dir=settings.data_dir, log_name=settings.app_name, console_level=console_level
    )

    logger.info("Starting %s (log file %s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except TaskStoreStartupError as e:
        logger.critical("Cannot open task file: %s", e)
        sys.exit(1)

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
