from dataclasses import dataclass

ALPHABET = "ASDFGHJKLQWERTYUIOPZXCVBNM"

# Round timing (ms)
START_TIME_MS = 1600
MIN_TIME_MS = 420
TIME_DECAY_PER_LEVEL = 0.95

PAD_SIZE = 6
ATTEMPTS_MAX = 6
CORRECT_PER_LEVEL = 10
MAX_LEVEL = 10

# Scoring
BASE_POINTS = 10
SPEED_DIVISOR = 10
STREAK_MULTIPLIER = 3

# Pauses before the next round (ms)
HIT_DELAY_MS = 260
LEVEL_DELAY_MS = 420
MISS_DELAY_MS = 420

# Host loop
FRAME_MS = 1000 / 60

# Music loop
SR = 44100
MASTER_GAIN = 0.06
TEMPO_MS = 160
NOTE_PEAK = 0.25
NOTE_ATTACK_MS = 10
NOTE_DECAY_MS = 140
NOTE_MS = 160
MELODY = [
    523.25, 659.25, 783.99, 659.25,  # C5 E5 G5 E5
    587.33, 659.25, 880.00, 659.25,  # D5 E5 A5 E5
    523.25, 659.25, 783.99, 659.25,
    493.88, 587.33, 659.25, 587.33,  # B4 D5 E5 D5
]

BEST_KEY = "letter_dash_best_v2"
BEST_FILE = "~/.letter_dash_best.json"


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class GameConfig:
    alphabet: str = ALPHABET
    start_time_ms: int = START_TIME_MS
    min_time_ms: int = MIN_TIME_MS
    decay_factor: float = TIME_DECAY_PER_LEVEL
    pad_size: int = PAD_SIZE
    attempts_max: int = ATTEMPTS_MAX
    correct_per_level: int = CORRECT_PER_LEVEL
    max_level: int = MAX_LEVEL
    hit_delay_ms: int = HIT_DELAY_MS
    level_delay_ms: int = LEVEL_DELAY_MS
    miss_delay_ms: int = MISS_DELAY_MS

    def validate(self) -> "GameConfig":
        """Raise ConfigurationError on the first bad value, else return self."""
        letters = set(self.alphabet)
        if len(letters) < 2 or len(letters) != len(self.alphabet):
            raise ConfigurationError("alphabet needs at least 2 distinct letters, no repeats")
        if self.max_level < 1:
            raise ConfigurationError(f"max_level must be >= 1 (got {self.max_level})")
        if self.attempts_max < 1:
            raise ConfigurationError(f"attempts_max must be >= 1 (got {self.attempts_max})")
        if self.correct_per_level < 1:
            raise ConfigurationError(f"correct_per_level must be >= 1 (got {self.correct_per_level})")
        if self.min_time_ms <= 0 or self.min_time_ms > self.start_time_ms:
            raise ConfigurationError(
                f"need 0 < min_time_ms <= start_time_ms (got {self.min_time_ms}, {self.start_time_ms})")
        if not 0 < self.decay_factor <= 1:
            raise ConfigurationError(f"decay_factor must be in (0, 1] (got {self.decay_factor})")
        if not 1 <= self.pad_size <= len(self.alphabet):
            raise ConfigurationError(f"pad_size must be in 1..{len(self.alphabet)} (got {self.pad_size})")
        return self
