import random
import pytest
from config import GameConfig
from host import FrameLoop
from ld_types import SessionListener
from music import AudioLoopScheduler
from session import GameSession


class ManualClock:
    """Stands in for host.monotonic_ms(); tests move it forward by hand, in ms."""
    def __init__(self):
        self.t = 0
    def __call__(self):
        return self.t


class FakeEngine:
    def __init__(self, fail_resume=False):
        self.state = "suspended"
        self.fail_resume = fail_resume
        self.resumes = 0
        self.tones = []
        self.silenced = 0
        self.closed = False

    def resume(self):
        self.resumes += 1
        if self.fail_resume:
            raise RuntimeError("blocked: no user gesture")
        self.state = "running"

    def play_tone(self, freq_hz):
        self.tones.append(freq_hz)

    def silence(self):
        self.silenced += 1

    def close(self):
        self.closed = True
        self.state = "closed"


class Recorder(SessionListener):
    def __init__(self):
        self.events = []
    def round_started(self, target): self.events.append(("round_started", target))
    def hit(self, gain, reaction_ms): self.events.append(("hit", gain, reaction_ms))
    def miss(self, reason, target, attempts_left): self.events.append(("miss", reason, target, attempts_left))
    def level_up(self, level, allowed_ms): self.events.append(("level_up", level, allowed_ms))
    def finished(self, summary): self.events.append(("finished", summary))
    def game_over(self, summary): self.events.append(("game_over", summary))

    def kinds(self):
        return [e[0] for e in self.events]


class MemoryStore:
    def __init__(self, best=0):
        self.best = best
        self.reports = []
    def report(self, score):
        self.reports.append(score)
        if score > self.best:
            self.best = score
            return True
        return False


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def loop(clock):
    return FrameLoop(frame_ms=10, clock=clock)


@pytest.fixture
def advance(clock, loop):
    """advance(ms): move the clock forward in 10 ms frames, running the loop after each."""
    def _advance(ms, step=10):
        end = clock.t + ms
        while clock.t < end:
            clock.t = min(end, clock.t + step)
            loop.run_once()
    return _advance


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def music(loop, engine):
    return AudioLoopScheduler(loop, engine_factory=lambda: engine)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_session(loop, music, recorder, store):
    def _make(**overrides):
        s = GameSession(loop, GameConfig(**overrides).validate(), music=music,
                        best_store=store, rng=random.Random(1234))
        s.add_listener(recorder)
        return s
    return _make


@pytest.fixture
def session(make_session):
    return make_session()
