import curses


class CursesKeys:
    """Non-blocking key reader on a curses screen (nodelay + getch)."""
    def __init__(self, stdscr):
        self.stdscr = stdscr
        stdscr.nodelay(1)
        stdscr.keypad(True)  # arrows/F-keys arrive as one KEY_* code, not an ESC sequence

    def read_pending(self) -> list[str]:
        keys = []
        while True:
            key = self.stdscr.getch()
            if key == -1:
                break
            if 0 <= key < 256:
                keys.append(chr(key))
        return keys


class ScreenOut:
    """File-like writer onto a scrolling curses window, so print() and the view land on screen."""
    def __init__(self, win):
        self.win = win
        win.scrollok(True)

    def write(self, text: str) -> int:
        try:
            self.win.addstr(text)
        except curses.error:
            pass  # raised after writing the bottom-right cell
        return len(text)

    def flush(self):
        self.win.refresh()


def letter_of(key: str) -> str:
    """A-Z key (either case) -> upper-case letter, anything else -> ''."""
    up = key.upper() if key and len(key) == 1 else ""
    return up if "A" <= up <= "Z" else ""
