# errors.py
from __future__ import annotations
import traceback


class SnakeError(Exception):
    """Base class for faults raised by the game's collaborators."""


class RenderFailure(SnakeError):
    """Drawing on the display surface failed. Non-fatal: the tick goes on."""


class InputReadFailure(SnakeError):
    """Reading the keyboard failed. Non-fatal: treated as no input."""


class TerminalTooSmall(SnakeError):
    """The terminal cannot fit the board plus its border."""


def format_fault(exc: BaseException) -> str:
    """
    Render an uncaught fault with its origin, message and trace, followed by
    each inner cause in the chain.
    """
    lines = []
    seen = set()
    current: BaseException | None = exc
    label = "Error"
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        tb = traceback.extract_tb(current.__traceback__)
        origin = f"{tb[-1].filename}:{tb[-1].lineno} in {tb[-1].name}" if tb else "<unknown>"
        trace = "".join(traceback.format_list(tb)).rstrip() or "  <no trace>"
        lines.append(f"{label} Source....: {type(current).__module__}.{type(current).__qualname__} at {origin}")
        lines.append(f"{label} Message...: {current}")
        lines.append(f"{label} Trace.....:\n{trace}")
        current = current.__cause__ or current.__context__
        label = "Inner"
    return "\n".join(lines)
