# src/nameless_todo/tasks/ticker.py

from __future__ import annotations

"""
Display clock.

A small loop that refreshes the "current time" used for urgency and
countdown labels. It never touches the task store.
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ..core.ports import Clock, now_local

logger = logging.getLogger(__name__)

TickHandler = Callable[[datetime], None]


async def run_clock(
        on_tick: TickHandler,
        *,
        interval_seconds: float = 1.0,
        clock: Clock = now_local,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Call on_tick(clock()) right away, then every interval_seconds.

    To stop the clock, cancel the coroutine or set stop_event.
    A failing on_tick is logged and the clock keeps ticking.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while stop_event is None or not stop_event.is_set():
        try:
            on_tick(clock())
        except Exception:
            logger.exception("Clock tick handler failed")

        if stop_event is None:
            await asyncio.sleep(sleep_s)
            continue

        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)


@dataclass(slots=True)
class ClockRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            # Loop already closed.
            logger.debug("Clock loop already stopped.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_clock_in_background(
        on_tick: TickHandler,
        *,
        interval_seconds: float = 1.0,
        clock: Clock = now_local,
) -> ClockRunner | None:
    """
    Run the clock on its own event loop in a daemon thread.

    The console REPL blocks on input(), so the clock cannot share its thread.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_clock(on_tick, interval_seconds=interval_seconds, clock=clock, stop_event=stop_event)
            )
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="display-clock", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Clock thread did not initialize properly.")
        return None

    logger.info("Display clock started (interval=%.2fs).", interval_seconds)
    return ClockRunner(thread=t, loop=loop, stop_event=stop_event)
