import json
from pathlib import Path
from config import BEST_FILE, BEST_KEY


class BestScoreStore:
    """Highest final score ever, as one integer in a small JSON file."""
    def __init__(self, path=BEST_FILE, key: str = BEST_KEY):
        self.path = Path(path).expanduser()
        self.key = key

    def load(self) -> int:
        try:
            data = json.loads(self.path.read_text())
            return int(data.get(self.key, 0))
        except (OSError, ValueError, TypeError, AttributeError):
            return 0

    def report(self, score: int) -> bool:
        """Store `score` if it beats the saved best. Returns True on a new best."""
        if score <= self.load():
            return False
        try:
            self.path.write_text(json.dumps({self.key: int(score)}))
        except OSError as e:
            print(f"[WARN] Could not save best score to {self.path}: {e}")
        return True
