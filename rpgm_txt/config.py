"""Run options for the engine.

Passed explicitly into every entry point; nothing here is process-global.
"""

import enum
from dataclasses import dataclass, field
from typing import Optional

CORPORA = ("maps", "other", "system", "plugins")
SHUFFLE_LEVELS = (0, 1, 2)


class ProcessingMode(enum.Enum):
    DEFAULT = "default"   # write new pools, leave existing ones alone
    FORCE = "force"       # overwrite pools and stubs
    APPEND = "append"     # keep existing pairs, add unseen units


@dataclass(frozen=True)
class LogMessages:
    """User-facing progress strings; swap for a localized set."""
    read: str = "Parsed file"
    write: str = "Wrote file"
    already_parsed: str = ("file already exists. If you want to forcefully "
                           "re-read all files, use --force flag, or --append if "
                           "you want append new text to already existing files.")
    not_parsed: str = ("Files aren't already parsed. "
                       "Continuing as if --append flag was omitted.")
    plugins_skipped: str = "Plugins are only written for games with a plugin profile."


@dataclass
class EngineConfig:
    romanize: bool = False
    shuffle_level: int = 0
    mode: ProcessingMode = ProcessingMode.DEFAULT
    custom_parsing: bool = True
    disabled: frozenset = frozenset()
    workers: Optional[int] = None
    seed: int = 69
    log_files: bool = False
    messages: LogMessages = field(default_factory=LogMessages)

    def __post_init__(self):
        if self.shuffle_level not in SHUFFLE_LEVELS:
            raise ValueError(
                f"shuffle_level must be one of {SHUFFLE_LEVELS}, "
                f"got {self.shuffle_level!r}")
        self.disabled = frozenset(self.disabled)
        unknown = self.disabled.difference(CORPORA)
        if unknown:
            raise ValueError(f"Unknown corpora: {', '.join(sorted(unknown))}")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if isinstance(self.mode, str):
            self.mode = ProcessingMode(self.mode)

    def enabled(self, corpus: str) -> bool:
        return corpus not in self.disabled
