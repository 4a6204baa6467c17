# src/nameless_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the display clock in a background thread (always; it only redraws in place on a TTY),
- the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.ticker import start_clock_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # The console shows the task list; only problems go to stderr there.
    setup_logging(log_dir=settings.data_dir, file_level=settings.log_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    # "now" must keep moving even when the clock line is not redrawn in place.
    state.clock_runner = start_clock_in_background(
        state.view.tick, interval_seconds=settings.tick_seconds
    )

    try:
        run_console_loop(state)
    finally:
        if state.clock_runner is not None:
            state.clock_runner.stop()
            state.clock_runner.join(timeout=5.0)
        state.view.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
