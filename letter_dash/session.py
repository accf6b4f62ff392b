import random
from typing import Optional
from config import GameConfig
from host import FrameLoop, Handle
from ld_types import Phase, Snapshot, Summary, SessionListener, ScoreStore
from music import AudioLoopScheduler
from policy import gain, next_allowed_ms
from round_timer import RoundTimer


class GameSession:
    """
    Round/progression state machine. One instance per game window; start()/restart()
    begin a fresh session on the same instance.

    Only one round is live at a time: input is unlocked exactly while the round timer
    runs. Resolution (submit or timeout) locks input and cancels the timer before
    touching any counter, so a round resolves at most once.
    """
    def __init__(self, loop: FrameLoop, config: Optional[GameConfig] = None,
                 music: Optional[AudioLoopScheduler] = None,
                 best_store: Optional[ScoreStore] = None,
                 rng: Optional[random.Random] = None):
        self.loop = loop
        self.config = config or GameConfig()
        self.music = music
        self.best_store = best_store
        self.rng = rng or random.Random()
        self.timer = RoundTimer(loop, self._on_timeout)
        self.listeners: list[SessionListener] = []

        self.phase = Phase.IDLE
        self.running = False
        self.input_locked = True
        self.level = 1
        self.score = 0
        self.streak = 0
        self.attempts_left = self.config.attempts_max
        self.correct_in_level = 0
        self.allowed_ms = self.config.start_time_ms
        self.target: Optional[str] = None
        self.round_started_at = 0.0
        self.new_best = False
        self._last_target: Optional[str] = None
        self._pending: Optional[Handle] = None

    # ---- observers ----
    def add_listener(self, listener: SessionListener):
        self.listeners.append(listener)

    def _emit(self, event: str, *args):
        for l in self.listeners:
            getattr(l, event)(*args)

    def _changed(self):
        self._emit("changed", self.snapshot())

    def snapshot(self) -> Snapshot:
        return Snapshot(level=self.level, score=self.score, streak=self.streak,
                        attempts_left=self.attempts_left, correct_in_level=self.correct_in_level,
                        allowed_ms=self.allowed_ms, target=self.target, phase=self.phase)

    def summary(self) -> Summary:
        return Summary(score=self.score, level=self.level, attempts_left=self.attempts_left,
                       finished=self.phase == Phase.FINISHED, new_best=self.new_best)

    def remaining_fraction(self) -> float:
        return self.timer.remaining_fraction()

    # ---- lifecycle ----
    def start(self) -> bool:
        if self.running:
            return False
        cfg = self.config
        self.running = True
        self.level = 1
        self.score = 0
        self.streak = 0
        self.attempts_left = cfg.attempts_max
        self.correct_in_level = 0
        self.allowed_ms = cfg.start_time_ms
        self.new_best = False
        self._last_target = None

        # best effort, a session never waits on audio
        if self.music:
            self.music.start()

        self.begin_round()
        return True

    def restart(self) -> bool:
        self.running = False
        self.timer.cancel()
        self._cancel_pending()
        if self.music:
            self.music.stop()
        return self.start()

    def begin_round(self):
        if not self.running:
            return
        self._cancel_pending()
        choices = [c for c in self.config.alphabet if c != self._last_target]
        self.target = self.rng.choice(choices)
        self._last_target = self.target
        self.phase = Phase.ROUND_ACTIVE
        self.input_locked = False
        self.round_started_at = self.loop.now_ms()
        self.timer.start(self.round_started_at, self.allowed_ms)
        self._emit("round_started", self.target)
        self._changed()

    def _cancel_pending(self):
        if self._pending:
            self._pending.cancel()
            self._pending = None

    def _schedule_next_round(self, delay_ms: float):
        self._cancel_pending()
        self._pending = self.loop.call_later(delay_ms, self.begin_round)

    # ---- input ----
    def submit(self, letter: str) -> bool:
        """Resolve the live round with `letter`. Returns False when the call was ignored."""
        if not self.running or self.input_locked:
            return False
        reaction_ms = self.loop.now_ms() - self.round_started_at
        self.input_locked = True
        self.timer.cancel()
        self.phase = Phase.RESOLVING

        if str(letter or "").upper() != self.target:
            self._miss("wrong")
        elif reaction_ms >= self.allowed_ms:
            # expired before the next timer frame could notice
            self._miss("timeout")
        else:
            self._hit(reaction_ms)
        return True

    def _on_timeout(self):
        if not self.running or self.input_locked:
            return
        self.input_locked = True
        self.phase = Phase.RESOLVING
        self._miss("timeout")

    # ---- resolution ----
    def _hit(self, reaction_ms: float):
        cfg = self.config
        points = gain(reaction_ms, self.allowed_ms, self.streak)
        self.score += points
        self.streak += 1
        self.correct_in_level += 1
        self._emit("hit", points, reaction_ms)

        if self.correct_in_level < cfg.correct_per_level:
            self._changed()
            self._schedule_next_round(cfg.hit_delay_ms)
        elif self.level >= cfg.max_level:
            self._end(Phase.FINISHED)
        else:
            self._level_up()
            self._schedule_next_round(cfg.level_delay_ms)

    def _level_up(self):
        cfg = self.config
        self.level += 1
        self.correct_in_level = 0
        self.allowed_ms = next_allowed_ms(self.allowed_ms, cfg.min_time_ms, cfg.decay_factor)
        self.phase = Phase.LEVEL_TRANSITION
        self._emit("level_up", self.level, self.allowed_ms)
        self._changed()

    def _miss(self, reason: str):
        self.attempts_left = max(0, self.attempts_left - 1)
        self.streak = 0
        self._emit("miss", reason, self.target, self.attempts_left)

        if self.attempts_left == 0:
            self._end(Phase.GAME_OVER)
        else:
            self._changed()
            self._schedule_next_round(self.config.miss_delay_ms)

    def _end(self, phase: Phase):
        self.running = False
        self.timer.cancel()
        self._cancel_pending()
        if self.music:
            self.music.stop()
        self.input_locked = True
        self.target = None
        self.phase = phase

        if self.best_store is not None:
            self.new_best = self.best_store.report(self.score)

        summary = self.summary()
        self._emit("finished" if phase == Phase.FINISHED else "game_over", summary)
        self._changed()
