from typing import Callable, Optional
from config import MELODY, TEMPO_MS
from host import FrameLoop, Handle
from ld_types import AudioEngine
from audio import SimpleaudioEngine


class AudioLoopScheduler:
    """
    Background melody: one note every `tempo_ms`, looping over `melody`.
    Lives across sessions. The engine is built on the first start() so it
    follows a user action, and is kept (not torn down) by stop().
    """
    def __init__(self, loop: FrameLoop,
                 engine_factory: Callable[[], AudioEngine] = SimpleaudioEngine,
                 melody: Optional[list[float]] = None, tempo_ms: float = TEMPO_MS,
                 enabled: bool = True):
        self.loop = loop
        self.engine_factory = engine_factory
        self.melody = list(melody or MELODY)
        self.tempo_ms = tempo_ms
        self.enabled = enabled
        self.state = "stopped"   # stopped -> starting -> playing -> stopped
        self.step_index = 0
        self.engine: Optional[AudioEngine] = None
        self._timer: Optional[Handle] = None

    @property
    def playing(self) -> bool:
        return self.state == "playing"

    def set_enabled(self, on: bool):
        self.enabled = bool(on)
        if not self.enabled:
            self.stop()

    def start(self) -> bool:
        """Start the loop. Returns False when disabled, already playing, or audio is unavailable."""
        if not self.enabled or self.state != "stopped":
            return False
        self.state = "starting"
        try:
            if self.engine is None:
                self.engine = self.engine_factory()
            if self.engine.state == "suspended":
                self.engine.resume()
        except Exception as e:
            print(f"[WARN] Music unavailable, playing without audio: {e}")
            self.state = "stopped"
            return False

        self.state = "playing"
        self.step_index = 0
        self._timer = self.loop.call_later(self.tempo_ms, self._tick)
        return True

    def _tick(self):
        self._timer = None
        if not self.playing or not self.enabled:
            return
        freq = self.melody[self.step_index % len(self.melody)]
        self.step_index = (self.step_index + 1) % len(self.melody)
        try:
            self.engine.play_tone(freq)
        except Exception as e:
            print(f"[WARN] Note dropped: {e}")
        self._timer = self.loop.call_later(self.tempo_ms, self._tick)

    def stop(self):
        if self._timer:
            self._timer.cancel()
            self._timer = None
        if self.state == "playing" and self.engine is not None:
            try:
                self.engine.silence()
            except Exception as e:
                print(f"[WARN] Could not silence audio: {e}")
        self.state = "stopped"

    def close(self):
        self.stop()
        if self.engine is not None:
            self.engine.close()
            self.engine = None
