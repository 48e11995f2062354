"""Console input helper with readline history and command completion.

Enables arrow-key editing, tab completion of command names and command
history for the node shell by configuring GNU readline when it is available.
History is persisted to a file across runs.
"""
from __future__ import annotations

import atexit
import os
from typing import Iterable, List, Optional


HISTORY_FILE = os.path.expanduser("~/.nodesim_history")
_readline = None  # type: ignore


def _ensure_history_dir(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def make_completer(names: Iterable[str]):
    """Return a readline completer over ``names`` for the first word."""
    choices: List[str] = sorted(set(names))

    def complete(text: str, state: int) -> Optional[str]:
        matches = [n for n in choices if n.startswith(text)]
        return matches[state] if state < len(matches) else None

    return complete


def init_readline(
    history_file: Optional[str] = None,
    history_length: int = 1000,
    commands: Iterable[str] = (),
) -> None:
    """Initialize readline: history persistence and command completion.

    Safe no-op if readline is unavailable.
    """
    global _readline
    try:
        import readline  # type: ignore
    except ImportError:
        _readline = None
        return
    _readline = readline

    path = history_file or HISTORY_FILE
    try:
        _ensure_history_dir(path)
        if os.path.exists(path):
            _readline.read_history_file(path)
    except OSError:
        # Non-fatal if history can't be read
        pass

    _readline.set_history_length(history_length)
    _readline.set_completer(make_completer(commands))
    _readline.parse_and_bind("tab: complete")

    def _save_history() -> None:
        try:
            _readline.write_history_file(path)  # type: ignore[attr-defined]
        except OSError:
            pass

    atexit.register(_save_history)


def read_command(prompt: str = ">>> ") -> str:
    """Read one command line, adding it to history if readline is active."""
    line = input(prompt)
    if _readline is not None:
        # Avoid duplicate immediate entries
        hlen = _readline.get_current_history_length()
        last = _readline.get_history_item(hlen) if hlen else None
        if line and line != last:
            _readline.add_history(line)
    return line


__all__ = ["init_readline", "read_command", "make_completer", "HISTORY_FILE"]
