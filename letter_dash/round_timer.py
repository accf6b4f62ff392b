from typing import Callable, Optional
from host import FrameLoop, Handle


class RoundTimer:
    """
    Single-shot countdown polled once per frame so the remaining fraction can be
    sampled continuously. Delivers at most one timeout per start().
    """
    def __init__(self, loop: FrameLoop, on_timeout: Callable[[], None]):
        self.loop = loop
        self.on_timeout = on_timeout
        self.running = False
        self.started_at = 0.0
        self.duration_ms = 0.0
        self._stopped_at: Optional[float] = None
        self._frame: Optional[Handle] = None

    def start(self, now_ms: float, duration_ms: float):
        self.cancel()
        self.started_at = now_ms
        self.duration_ms = duration_ms
        self._stopped_at = None
        self.running = True
        self._frame = self.loop.request_frame(self._tick)

    def cancel(self):
        if self.running:
            self._stopped_at = self.loop.now_ms()
        self.running = False
        if self._frame:
            self._frame.cancel()
            self._frame = None

    def elapsed_ms(self) -> float:
        if not self.duration_ms:
            return 0.0
        end = self.loop.now_ms() if self._stopped_at is None else self._stopped_at
        return max(0.0, end - self.started_at)

    def remaining_fraction(self) -> float:
        if not self.duration_ms:
            return 1.0
        return max(0.0, 1.0 - self.elapsed_ms() / self.duration_ms)

    def _tick(self):
        self._frame = None
        if not self.running:
            return
        if self.loop.now_ms() - self.started_at >= self.duration_ms:
            self.running = False
            self._stopped_at = self.started_at + self.duration_ms
            self.on_timeout()
            return
        self._frame = self.loop.request_frame(self._tick)
