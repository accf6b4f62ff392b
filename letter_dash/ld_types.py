from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class Phase(Enum):
    IDLE = "idle"
    ROUND_ACTIVE = "round_active"
    RESOLVING = "resolving"
    LEVEL_TRANSITION = "level_transition"
    FINISHED = "finished"
    GAME_OVER = "game_over"


TERMINAL_PHASES = (Phase.FINISHED, Phase.GAME_OVER)


@dataclass(frozen=True)
class Snapshot:
    level: int
    score: int
    streak: int
    attempts_left: int
    correct_in_level: int
    allowed_ms: int
    target: Optional[str]
    phase: Phase


@dataclass(frozen=True)
class Summary:
    score: int
    level: int
    attempts_left: int
    finished: bool   # False -> game over
    new_best: bool = False


class SessionListener:
    """Receives session events. Override only what you need."""
    def round_started(self, target: str) -> None: ...
    def hit(self, gain: int, reaction_ms: float) -> None: ...
    def miss(self, reason: str, target: str, attempts_left: int) -> None: ...
    def level_up(self, level: int, allowed_ms: int) -> None: ...
    def finished(self, summary: Summary) -> None: ...
    def game_over(self, summary: Summary) -> None: ...
    def changed(self, snapshot: Snapshot) -> None: ...


class AudioEngine(Protocol):
    state: str   # "suspended" | "running" | "closed"
    def resume(self) -> None: ...
    def play_tone(self, freq_hz: float) -> None: ...
    def silence(self) -> None: ...
    def close(self) -> None: ...


class ScoreStore(Protocol):
    def report(self, score: int) -> bool: ...
