from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from game.errors import TimerOverlapError


TAG_PRE_STIMULUS = "pre_stimulus"
TAG_RESPONSE_WINDOW = "response_window"


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass(eq=False)
class TimerHandle:
    tag: str
    due_ms: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    @property
    def pending(self) -> bool:
        return not self.cancelled and not self.fired


class TrialClock:
    """
    Cooperative timers. Nothing runs on its own: the owner calls poll()
    (once per frame) and every due timer fires there, in due order.
    At most one pending timer per tag.
    """

    def __init__(self, time_source: Optional[Callable[[], float]] = None) -> None:
        self._time_source = time_source or monotonic_ms
        self._timers: List[TimerHandle] = []

    def now_ms(self) -> float:
        return float(self._time_source())

    def schedule(self, tag: str, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if any(t.tag == tag for t in self._timers):
            raise TimerOverlapError(tag)
        handle = TimerHandle(tag=tag, due_ms=self.now_ms() + max(0.0, delay_ms), callback=callback)
        self._timers.append(handle)
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is None or not handle.pending:
            return
        handle.cancelled = True
        self._timers.remove(handle)

    def cancel_all(self) -> None:
        for handle in self._timers:
            handle.cancelled = True
        self._timers.clear()

    def pending(self) -> List[TimerHandle]:
        return list(self._timers)

    def poll(self) -> int:
        fired = 0
        while True:
            now = self.now_ms()
            due = [t for t in self._timers if t.due_ms <= now]
            if not due:
                return fired
            handle = min(due, key=lambda t: t.due_ms)
            # снимаем до вызова: callback может сразу поставить таймер с тем же тегом
            self._timers.remove(handle)
            handle.fired = True
            fired += 1
            handle.callback()
