#!/usr/bin/env python3
import argparse, curses, random, signal, sys
from contextlib import redirect_stdout
from functools import partial
from config import (GameConfig, ConfigurationError, ALPHABET, START_TIME_MS, MIN_TIME_MS,
                    TIME_DECAY_PER_LEVEL, PAD_SIZE, ATTEMPTS_MAX, CORRECT_PER_LEVEL, MAX_LEVEL, BEST_FILE)
from audio import MidiOutEngine, SimpleaudioEngine
from best import BestScoreStore
from host import FrameLoop
from keys import CursesKeys, ScreenOut, letter_of
from music import AudioLoopScheduler
from notifier import ArduinoNotifier, find_serial
from session import GameSession
from view import ConsoleView

KEY_START, KEY_RESTART, KEY_MUSIC, KEY_QUIT = "1", "2", "3", "0"

STOP = False
def _on_sigint(signum, frame):
    global STOP
    STOP = True


def build_config(args) -> GameConfig:
    return GameConfig(alphabet=args.alphabet.upper(), start_time_ms=args.start_ms,
                      min_time_ms=args.min_ms, decay_factor=args.decay, pad_size=args.pad_size,
                      attempts_max=args.attempts, correct_per_level=args.per_level,
                      max_level=args.max_level).validate()


def handle_key(key: str, session: GameSession, music: AudioLoopScheduler, view: ConsoleView):
    if key == KEY_START:
        session.start()
    elif key == KEY_RESTART:
        session.restart()
    elif key == KEY_MUSIC:
        music.set_enabled(not music.enabled)
        view.log("Music enabled." if music.enabled else "Music disabled.")
    elif key == KEY_QUIT:
        session.loop.stop()
    else:
        letter = letter_of(key)
        if letter and session.running:
            session.submit(letter)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Letter Dash: press the shown letter before the timer runs out.")
    ap.add_argument("--name", default="", help="Player name used in the share text")
    ap.add_argument("--alphabet", default=ALPHABET, help="Letters to draw targets from")
    ap.add_argument("--start-ms", type=int, default=START_TIME_MS, help=f"Time per letter at level 1 (default {START_TIME_MS})")
    ap.add_argument("--min-ms", type=int, default=MIN_TIME_MS, help=f"Lowest time per letter (default {MIN_TIME_MS})")
    ap.add_argument("--decay", type=float, default=TIME_DECAY_PER_LEVEL, help=f"Time factor per level-up (default {TIME_DECAY_PER_LEVEL})")
    ap.add_argument("--pad-size", type=int, default=PAD_SIZE, help=f"Letters shown in the pad row (default {PAD_SIZE})")
    ap.add_argument("--attempts", type=int, default=ATTEMPTS_MAX, help=f"Misses allowed (default {ATTEMPTS_MAX})")
    ap.add_argument("--per-level", type=int, default=CORRECT_PER_LEVEL, help=f"Hits to clear a level (default {CORRECT_PER_LEVEL})")
    ap.add_argument("--max-level", type=int, default=MAX_LEVEL, help=f"Final level (default {MAX_LEVEL})")
    ap.add_argument("--seed", type=int, help="Seed for the letter draw")
    ap.add_argument("--no-music", action="store_true", help="Start with music disabled")
    ap.add_argument("--midi-out", help="Play the music on this MIDI output instead of the speaker")
    ap.add_argument("--serial", help="Arduino serial (full path or substring, e.g. 'usbmodem', 'COM5')")
    ap.add_argument("--baud", type=int, default=115200, help="Arduino baud (default 115200)")
    ap.add_argument("--best-file", default=BEST_FILE, help=f"Where the best score is kept (default {BEST_FILE})")
    args = ap.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"Invalid settings: {e}")
        return 2

    loop = FrameLoop()
    engine_factory = partial(MidiOutEngine, args.midi_out) if args.midi_out else SimpleaudioEngine
    music = AudioLoopScheduler(loop, engine_factory=engine_factory, enabled=not args.no_music)
    best = BestScoreStore(args.best_file)
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(loop, config, music=music, best_store=best, rng=rng)

    view = ConsoleView(config, player=args.name)
    session.add_listener(view)

    notifier = None
    if args.serial:
        port = find_serial(args.serial)
        if not port:
            print("[WARN] Serial port not found. Proceeding without Arduino.")
        else:
            notifier = ArduinoNotifier(port, args.baud)
            session.add_listener(notifier)

    signal.signal(signal.SIGINT, _on_sigint)

    def play(stdscr):
        curses.curs_set(0)
        screen = ScreenOut(stdscr)
        view.out = screen
        keys = CursesKeys(stdscr)

        def poll():
            if STOP:
                loop.stop()
                return
            for key in keys.read_pending():
                handle_key(key, session, music, view)
            view.draw(session.remaining_fraction())

        with redirect_stdout(screen):
            view.log(f"Best: {best.load()}")
            view.log("Press 1 to start, 2 to restart, 3 to toggle music, 0 to quit. Then type the letters.")
            loop.run(poll)

    try:
        curses.wrapper(play)
    finally:
        session.timer.cancel()
        music.close()
        if notifier: notifier.close()

    return 0

if __name__ == "__main__":
    sys.exit(main())
