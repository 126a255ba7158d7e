# main.py
from __future__ import annotations
import argparse
import datetime
import logging
import os
import sys
import threading
from typing import Optional, Sequence

from .config import CFG, Config, SETTINGS_FILE, load_settings, with_overrides
from .errors import TerminalTooSmall, format_fault
from .game import SnakeGame

logger = logging.getLogger("termsnake")


def configure_logging(path: Optional[str], level: str = "INFO") -> None:
    """Log to a file; the terminal belongs to the game while it runs."""
    handler: logging.Handler
    if path:
        handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def report_fault(exc: BaseException, where: str = "main") -> None:
    stamp = datetime.datetime.now().strftime("%A, %B %d, %Y at %H:%M:%S")
    logger.critical(">>> Unhandled exception in %s on %s <<<\n%s", where, stamp, format_fault(exc))


def install_fault_hooks() -> None:
    def _thread_hook(args: threading.ExceptHookArgs) -> None:
        if args.exc_value is not None:
            name = args.thread.name if args.thread is not None else "thread"
            report_fault(args.exc_value, where=name)

    def _hook(exc_type, exc_value, exc_tb) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        report_fault(exc_value)

    sys.excepthook = _hook
    threading.excepthook = _thread_hook


# ---------- Frontends ----------
def run_terminal(cfg: Config, threaded_input: bool, bell: bool) -> None:
    import curses
    import locale
    from .curses_frontend import CursesInput, CursesSurface
    from .controls import ThreadedInput
    from .sound import SilentTone, TerminalBell

    # block glyphs need a UTF-8 locale
    locale.setlocale(locale.LC_ALL, "")
    # ESC would otherwise wait a full second for an escape sequence
    os.environ.setdefault("ESCDELAY", "25")

    def _main(stdscr) -> None:
        rows, cols = stdscr.getmaxyx()
        if rows < cfg.height + 2 or cols < cfg.width + 2:
            raise TerminalTooSmall(
                f"terminal is {cols}x{rows}, the board needs {cfg.width + 2}x{cfg.height + 2}"
            )
        surface = CursesSurface(stdscr)
        game = SnakeGame(surface, source=None, cfg=cfg, tone=TerminalBell() if bell else SilentTone())
        source = CursesInput(stdscr, lock=game.drawer.lock)
        reader = None
        if threaded_input:
            reader = ThreadedInput(source).start()
            game.source = reader
        else:
            game.source = source
        try:
            game.run()
        finally:
            if reader is not None:
                reader.stop()

    # curses.wrapper restores the terminal (and the cursor) on any exit
    curses.wrapper(_main)


def run_window(cfg: Config, settings_path: str, sound: bool) -> None:
    import pygame # type: ignore
    from .pygame_frontend import PygameInput, PygameSurface
    from .sound import PygameTone, SilentTone

    pygame.init()
    try:
        surface = PygameSurface(cfg.width, cfg.height, load_settings(settings_path))
        tone = PygameTone() if sound else SilentTone()
        SnakeGame(surface, PygameInput(), cfg=cfg, tone=tone).run()
    finally:
        pygame.quit()


# ---------- Main ----------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termsnake", description="Snake Jr. for the terminal")
    parser.add_argument("--width", type=int, default=None, help=f"board width in cells (default {CFG.width})")
    parser.add_argument("--height", type=int, default=None, help=f"board height in cells (default {CFG.height})")
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument(
        "--frontend",
        choices=["terminal", "window"],
        default="terminal",
        help="terminal: curses in this terminal; window: a pygame window",
    )
    parser.add_argument(
        "--threaded-input",
        action="store_true",
        help="read keys on a dedicated thread (terminal frontend only)",
    )
    parser.add_argument("--mute", action="store_true", help="no game-over tone")
    parser.add_argument("--settings", default=SETTINGS_FILE, help="font settings file (window frontend)")
    parser.add_argument("--log-file", default="termsnake.log", help="log file path, '' to disable")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    install_fault_hooks()

    cfg = with_overrides(CFG, width=args.width, height=args.height, seed=args.seed)
    if cfg.width < 1 or cfg.height < 1:
        print("Board must be at least 1x1", file=sys.stderr)
        return 2
    logger.info("Starting %s frontend on a %dx%d board", args.frontend, cfg.width, cfg.height)

    try:
        if args.frontend == "window":
            run_window(cfg, args.settings, sound=not args.mute)
        else:
            run_terminal(cfg, args.threaded_input, bell=not args.mute)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    except TerminalTooSmall as e:
        logger.error("%s", e)
        print(f"Cannot start: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        report_fault(e)
        print(format_fault(e), file=sys.stderr)
        return 1

    logger.info("Bye")
    return 0


if __name__ == "__main__":
    sys.exit(main())
