import random
import sys
from config import GameConfig
from ld_types import Phase, SessionListener, Snapshot, Summary
from share import make_share_payload, share_text, x_intent_url

BAR_W = 20
TRACK_W = 30


def timer_bar(fraction: float, width: int = BAR_W) -> str:
    filled = int(round(max(0.0, min(1.0, fraction)) * width))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def runner_track(correct_in_level: int, correct_per_level: int, width: int = TRACK_W) -> str:
    p = min(1.0, correct_in_level / correct_per_level)
    x = int(round((width - 1) * p))
    return "|" + "." * x + "R" + "." * (width - 1 - x) + "|F"


def pad_letters(target: str, alphabet: str, size: int, rng: random.Random) -> list[str]:
    """The target plus distinct decoys from `alphabet`, shuffled."""
    decoys = rng.sample([c for c in alphabet if c != target], size - 1)
    letters = [target] + decoys
    rng.shuffle(letters)
    return letters


def level_dots(level: int, max_level: int) -> str:
    out = []
    for i in range(1, max_level + 1):
        if i < level: out.append("x")
        elif i == level: out.append(f"[{i}]")
        else: out.append(str(i))
    return " ".join(out) + " F"


class ConsoleView(SessionListener):
    """Prints one line per event and keeps a status line (target + timer bar) refreshed."""
    def __init__(self, config: GameConfig, player: str = "", out=None, rng: random.Random | None = None):
        self.config = config
        self.player = player
        self.out = out or sys.stdout
        self.snap: Snapshot | None = None
        self._status = ""
        self.rng = rng or random.Random()
        self.pad: list[str] = []

    def log(self, msg: str):
        self.out.write("\r" + " " * len(self._status) + "\r" + msg + "\n")
        self._status = ""
        self.out.flush()

    def draw(self, fraction: float):
        s = self.snap
        if s is None or s.phase in (Phase.IDLE, Phase.FINISHED, Phase.GAME_OVER):
            return
        line = (f"L{s.level} {runner_track(s.correct_in_level, self.config.correct_per_level)} "
                f"target: {s.target or '-'} pad: {' '.join(self.pad)} {timer_bar(fraction)} "
                f"score {s.score} streak {s.streak} lives {s.attempts_left}/{self.config.attempts_max}")
        if line != self._status:
            self.out.write("\r" + line.ljust(len(self._status)))
            self.out.flush()
            self._status = line

    def changed(self, snapshot: Snapshot):
        self.snap = snapshot

    def round_started(self, target: str):
        self.pad = pad_letters(target, self.config.alphabet, self.config.pad_size, self.rng)

    def hit(self, gain: int, reaction_ms: float):
        self.log(f"Nice! +{gain} (reaction {int(reaction_ms)}ms)")

    def miss(self, reason: str, target: str, attempts_left: int):
        msg = "Too slow!" if reason == "timeout" else f'Wrong (need "{target}")'
        self.log(f"{msg} - attempts left: {attempts_left}")

    def level_up(self, level: int, allowed_ms: int):
        self.log(f"Level up! Welcome to Level {level}. Time per letter: {allowed_ms}ms")
        self.log(level_dots(level, self.config.max_level))

    def finished(self, summary: Summary):
        self._ending(summary, "Finished! Try again to beat your score.")

    def game_over(self, summary: Summary):
        self._ending(summary, "Game over. Try again.")

    def _ending(self, summary: Summary, note: str):
        self.log(note)
        if summary.new_best:
            self.log(f"New local best! {summary.score}")
        payload = make_share_payload(summary, self.player)
        self.log(share_text(payload))
        self.log(f"Share on X: {x_intent_url(payload)}")
