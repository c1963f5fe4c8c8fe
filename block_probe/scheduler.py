"""
Tick-driven timer and script-event bus.

Mirrors the slice of the host ``system`` object the input detector relies on,
so the detector can run outside the game (tools, tests, replays).
"""
import heapq
import itertools
import logging
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger("block_probe.scheduler")

ScriptEventListener = Callable[[str, str], None]


class TickSystem:
    """Advance-by-hand tick counter with one-shot timers."""

    def __init__(self, start_tick: int = 0) -> None:
        self.current_tick = int(start_tick)
        self._queue: List[Tuple[int, int]] = []
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._handles = itertools.count(1)
        self._listeners: List[ScriptEventListener] = []

    def run_timeout(self, callback: Callable[[], None], ticks: int = 1) -> int:
        """Run *callback* after *ticks* ticks and return a handle for ``clear_run``."""
        handle = next(self._handles)
        due = self.current_tick + max(int(ticks), 1)
        self._callbacks[handle] = callback
        heapq.heappush(self._queue, (due, handle))
        return handle

    def clear_run(self, handle: int) -> None:
        """Cancel a pending timer; unknown or already fired handles are ignored."""
        self._callbacks.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def advance(self, ticks: int = 1) -> None:
        """Step the clock one tick at a time, firing timers as they come due."""
        for _ in range(int(ticks)):
            self.current_tick += 1
            while self._queue and self._queue[0][0] <= self.current_tick:
                _, handle = heapq.heappop(self._queue)
                callback = self._callbacks.pop(handle, None)
                if callback is not None:
                    callback()

    def subscribe_script_event(self, listener: ScriptEventListener) -> None:
        self._listeners.append(listener)

    def send_script_event(self, event_id: str, message: str) -> None:
        logger.debug("script event %s: %s", event_id, message)
        for listener in list(self._listeners):
            listener(event_id, message)
