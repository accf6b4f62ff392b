import time
import serial, serial.tools.list_ports
from typing import Optional
from ld_types import SessionListener, Summary


def find_serial(name_like: Optional[str]) -> Optional[str]:
    if not name_like:
        return None
    s = name_like.lower()
    for p in serial.tools.list_ports.comports():
        combo = (p.device + " " + (p.description or "")).lower()
        if s in combo:
            return p.device
    if name_like.startswith("/dev/") or name_like.upper().startswith("COM"):
        return name_like
    return None


class ArduinoNotifier(SessionListener):
    """
    One byte per event:
      'G' -> hit       (GREEN)
      'Y' -> level up  (YELLOW)
      'R' -> miss / game over (RED)
    """
    def __init__(self, port: Optional[str], baud: int = 115200, settle_s: float = 2.0):
        self.ser = None
        if port:
            try:
                self.ser = serial.Serial(port, baudrate=baud, timeout=0)
                time.sleep(settle_s)  # board resets when the port opens
                print(f"Arduino connected on {port} @ {baud} baud")
            except Exception as e:
                print(f"[WARN] Could not open Arduino serial '{port}': {e}")

    def _send(self, code: bytes):
        if not self.ser: return
        try: self.ser.write(code)
        except Exception as e:
            print(f"[WARN] Serial write failed: {e}")

    def hit(self, gain: int, reaction_ms: float): self._send(b'G')
    def level_up(self, level: int, allowed_ms: int): self._send(b'Y')
    def miss(self, reason: str, target: str, attempts_left: int): self._send(b'R')
    def finished(self, summary: Summary): self._send(b'G')
    def game_over(self, summary: Summary): self._send(b'R')

    def close(self):
        if self.ser:
            try: self.ser.close()
            except Exception as e:
                print(f"[WARN] Closing serial failed: {e}")
            self.ser = None
