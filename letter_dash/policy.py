import math
from config import BASE_POINTS, SPEED_DIVISOR, STREAK_MULTIPLIER


def next_allowed_ms(previous_ms: int, min_time_ms: int, decay_factor: float) -> int:
    return max(min_time_ms, math.floor(previous_ms * decay_factor))


def gain(reaction_ms: float, allowed_ms: int, streak_before: int,
         base: int = BASE_POINTS, speed_divisor: int = SPEED_DIVISOR,
         streak_multiplier: int = STREAK_MULTIPLIER) -> int:
    """Points for one hit. `streak_before` is the streak before counting this hit."""
    speed_bonus = max(0, math.floor((allowed_ms - reaction_ms) / speed_divisor))
    streak_bonus = streak_before * streak_multiplier
    return base + speed_bonus + streak_bonus
