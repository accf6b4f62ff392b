import pytest
from config import GameConfig, ConfigurationError, ALPHABET


def test_default_settings():
    cfg = GameConfig().validate()
    assert cfg.alphabet == ALPHABET
    assert len(set(cfg.alphabet)) == 26
    assert (cfg.start_time_ms, cfg.min_time_ms, cfg.decay_factor) == (1600, 420, 0.95)
    assert (cfg.attempts_max, cfg.correct_per_level, cfg.max_level, cfg.pad_size) == (6, 10, 10, 6)


@pytest.mark.parametrize("overrides", [
    {"alphabet": "A", "pad_size": 1},
    {"alphabet": "AAB", "pad_size": 2},
    {"max_level": 0},
    {"attempts_max": 0},
    {"correct_per_level": 0},
    {"min_time_ms": 2000},
    {"min_time_ms": 0},
    {"decay_factor": 0},
    {"decay_factor": 1.2},
    {"pad_size": 27},
])
def test_invalid_settings_rejected(overrides):
    with pytest.raises(ConfigurationError):
        GameConfig(**overrides).validate()
