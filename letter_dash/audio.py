import math
import numpy as np
from typing import Optional
from config import SR, MASTER_GAIN, NOTE_PEAK, NOTE_ATTACK_MS, NOTE_DECAY_MS, NOTE_MS

FLOOR = 0.0001   # exponential ramps can't reach 0


class AudioUnavailable(RuntimeError):
    pass


def envelope(n: int, attack_ms=NOTE_ATTACK_MS, decay_ms=NOTE_DECAY_MS, peak=NOTE_PEAK):
    """Exponential rise to `peak` over attack_ms, then exponential fall back to FLOOR at decay_ms."""
    t_ms = np.arange(n) / SR * 1000.0
    up = FLOOR * (peak / FLOOR) ** np.clip(t_ms / attack_ms, 0.0, 1.0)
    down = peak * (FLOOR / peak) ** np.clip((t_ms - attack_ms) / (decay_ms - attack_ms), 0.0, 1.0)
    return np.where(t_ms < attack_ms, up, down)


def triangle_tone(freq, duration_ms=NOTE_MS):
    n = int(SR * (duration_ms / 1000.0))
    phase = np.arange(n) / SR * freq
    wave = 2.0 * np.abs(2.0 * (phase - np.floor(phase + 0.5))) - 1.0
    mono = (wave * envelope(n)).astype(np.float32)
    return mono


def to_pcm(mono: np.ndarray, gain=MASTER_GAIN):
    stereo = np.stack([mono, mono], axis=1)
    return (stereo * 32767 * gain).astype(np.int16)


def freq_to_midi(freq: float) -> int:
    return int(round(69 + 12 * math.log2(freq / 440.0)))


class SimpleaudioEngine:
    """Speaker output. Starts suspended; resume() checks a device can actually play."""
    def __init__(self, gain=MASTER_GAIN):
        try:
            import simpleaudio as sa
        except ImportError as e:
            raise AudioUnavailable(f"simpleaudio not installed: {e}") from e
        self._sa = sa
        self.gain = gain
        self.state = "suspended"

    def resume(self):
        if self.state == "closed":
            raise AudioUnavailable("engine closed")
        try:
            silent = np.zeros((int(SR * 0.01), 2), dtype=np.int16)
            self._sa.play_buffer(silent, 2, 2, SR)
        except Exception as e:
            raise AudioUnavailable(f"no audio output: {e}") from e
        self.state = "running"

    def play_tone(self, freq_hz: float):
        # play_buffer returns immediately; the buffer ends on its own
        self._sa.play_buffer(to_pcm(triangle_tone(freq_hz), self.gain), 2, 2, SR)

    def silence(self):
        self._sa.stop_all()

    def close(self):
        if self.state != "closed":
            self.silence()
        self.state = "closed"


class MidiOutEngine:
    """Sends the melody to a MIDI output (synth module, IAC bus, ...)."""
    def __init__(self, output_name: str, channel: int = 0, velocity: int = 90):
        import mido
        self._mido = mido
        self.channel = channel
        self.velocity = velocity
        self._last_note: Optional[int] = None
        try:
            self.port = mido.open_output(output_name)
        except Exception as e:
            raise AudioUnavailable(f"Could not open MIDI out '{output_name}': {e}") from e
        print(f"Sending MIDI to: {output_name}")
        self.state = "running"

    def resume(self):
        if self.state == "closed":
            raise AudioUnavailable("MIDI output closed")

    def play_tone(self, freq_hz: float):
        self.silence()
        note = freq_to_midi(freq_hz)
        self.port.send(self._mido.Message('note_on', channel=self.channel, note=note, velocity=self.velocity))
        self._last_note = note

    def silence(self):
        if self._last_note is not None:
            self.port.send(self._mido.Message('note_off', channel=self.channel, note=self._last_note, velocity=0))
            self._last_note = None

    def close(self):
        if self.state == "closed":
            return
        try:
            self.silence()
            self.port.close()
        except Exception as e:
            print(f"[WARN] Closing MIDI out failed: {e}")
        self.state = "closed"
