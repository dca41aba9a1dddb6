"""Deduplicated text pools and their on-disk form.

A pool is written as two files of equal line count: the originals, one
unit per line, and a stub of blank lines the translator fills in.  Newlines
inside a unit are written as the two characters ``\\#``.
"""

import logging
import os

from .config import LogMessages, ProcessingMode
from .errors import IOFailure, PoolMismatch

log = logging.getLogger(__name__)

NEWLINE_TOKEN = "\\#"


def escape_line(text: str) -> str:
    return text.replace("\n", NEWLINE_TOKEN)


def unescape_line(line: str) -> str:
    return line.replace(NEWLINE_TOKEN, "\n")


class TextPool:
    """Insertion-ordered set of unique, non-empty strings."""

    def __init__(self, items=()):
        self._items = {}
        self.update(items)

    def add(self, text: str) -> bool:
        """Add *text*; returns False for empty or already-present strings."""
        if not text or text in self._items:
            return False
        self._items[text] = None
        return True

    def update(self, items):
        for text in items:
            self.add(text)

    def __contains__(self, text) -> bool:
        return text in self._items

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"TextPool({list(self._items)!r})"

    def lines(self) -> list:
        """Escaped lines, one per unit."""
        return [escape_line(text) for text in self._items]


# ── File helpers ──────────────────────────────────────────────────────

def read_text(path: str) -> str:
    # Only "\n" ends a pool line; a "\r" inside a unit stays in the unit
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise IOFailure(f"File is not valid UTF-8: {exc.reason}", path) from exc
    except OSError as exc:
        raise IOFailure(f"Cannot read file: {exc.strerror or exc}", path) from exc


def write_text(path: str, content: str):
    try:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as exc:
        raise IOFailure(f"Cannot write file: {exc.strerror or exc}", path) from exc


def read_pool_lines(path: str) -> list:
    """Raw (still escaped) lines of a pool file."""
    return read_text(path).split("\n")


def pool_paths(directory: str, stem: str) -> tuple:
    """Return (original_path, translation_path) for a pool called *stem*."""
    return (os.path.join(directory, f"{stem}.txt"),
            os.path.join(directory, f"{stem}_trans.txt"))


def write_pool(pool: TextPool, original_path: str, translation_path: str,
               mode: ProcessingMode = ProcessingMode.DEFAULT,
               messages: LogMessages = LogMessages()) -> int:
    """Write *pool* and its blank translation stub.

    Default mode leaves an existing pool untouched.  Force mode overwrites
    it.  In append mode existing original/translation pairs are kept as they
    are and only units not already present are added, with blank
    translations.

    Returns:
        Number of units newly written.
    """
    originals = pool.lines()
    translations = [""] * len(originals)

    if mode is ProcessingMode.DEFAULT and (
            os.path.exists(original_path) or os.path.exists(translation_path)):
        log.warning("%s %s", original_path, messages.already_parsed)
        return 0

    if mode is ProcessingMode.APPEND:
        if os.path.isfile(original_path) and os.path.isfile(translation_path):
            old_originals = read_pool_lines(original_path)
            old_translations = read_pool_lines(translation_path)
            if len(old_originals) != len(old_translations):
                raise PoolMismatch(original_path, translation_path,
                                   len(old_originals), len(old_translations))
            if old_originals == [""]:
                old_originals, old_translations = [], []
            known = set(old_originals)
            added = [line for line in originals if line not in known]
            write_text(original_path, "\n".join(old_originals + added))
            write_text(translation_path,
                       "\n".join(old_translations + [""] * len(added)))
            return len(added)
        log.warning("%s (%s)", messages.not_parsed, original_path)

    write_text(original_path, "\n".join(originals))
    write_text(translation_path, "\n".join(translations))
    return len(originals)
