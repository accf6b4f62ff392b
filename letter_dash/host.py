import time
from typing import Callable, Optional
from config import FRAME_MS


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class Handle:
    __slots__ = ("callback", "due_ms", "cancelled")

    def __init__(self, callback: Callable[[], None], due_ms: float):
        self.callback = callback
        self.due_ms = due_ms
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FrameLoop:
    """
    Single-threaded cooperative loop.
    Frame callbacks run once on the next frame; deferred calls run once their due time passes.
    Everything runs on the thread that calls run()/run_once().
    """
    def __init__(self, frame_ms: float = FRAME_MS, clock: Callable[[], float] = monotonic_ms):
        self.frame_ms = frame_ms
        self._clock = clock
        self._frames: list[Handle] = []
        self._timers: list[Handle] = []
        self._stop = False

    def now_ms(self) -> float:
        return self._clock()

    def request_frame(self, callback: Callable[[], None]) -> Handle:
        h = Handle(callback, 0.0)
        self._frames.append(h)
        return h

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Handle:
        h = Handle(callback, self.now_ms() + max(0.0, delay_ms))
        self._timers.append(h)
        return h

    def pending(self) -> int:
        return sum(1 for h in self._frames + self._timers if not h.cancelled)

    def run_once(self):
        now = self.now_ms()
        due = [h for h in self._timers if h.due_ms <= now]
        self._timers = [h for h in self._timers if h.due_ms > now and not h.cancelled]
        for h in sorted(due, key=lambda h: h.due_ms):
            if not h.cancelled:
                h.callback()

        # callbacks requested during this frame wait for the next one
        frames, self._frames = self._frames, []
        for h in frames:
            if not h.cancelled:
                h.callback()

    def stop(self):
        self._stop = True

    def run(self, poll: Optional[Callable[[], None]] = None):
        self._stop = False
        while not self._stop:
            started = time.monotonic()
            if poll:
                poll()
            self.run_once()
            left = self.frame_ms / 1000.0 - (time.monotonic() - started)
            if left > 0:
                time.sleep(left)
