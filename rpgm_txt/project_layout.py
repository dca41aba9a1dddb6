"""Where a project's files live on disk.

Originals are read from ``original/`` (or the game's own ``data/`` folder),
pools live under ``translation/`` and translated documents are written to
``output/``.
"""

import os
import re
from dataclasses import dataclass
from typing import Optional

from .errors import IOFailure

# Searched in order; "original" is a copy kept by the user, the rest are
# the places a game ships its data folder.
ORIGINAL_DIR_CANDIDATES = (
    "original",
    "data",
    "Data",
    os.path.join("www", "data"),
    os.path.join("www", "Data"),
)

MAP_FILE_RE = re.compile(r"^Map\d.*\.json$")

# Entity files never processed: maps, engine tables and System.json
EXCLUDED_ENTITY_PREFIXES = ("Map", "Tilesets", "Animations", "States", "System")

SYSTEM_FILE = "System.json"
PLUGINS_FILE = "plugins.json"


@dataclass(frozen=True)
class ProjectLayout:
    input_dir: str
    output_dir: str
    original_dir: str

    @classmethod
    def resolve(cls, input_dir: str,
                output_dir: Optional[str] = None) -> "ProjectLayout":
        """Locate the original data folder of a project.

        Raises:
            IOFailure: when none of the candidate folders exists.
        """
        input_dir = os.path.abspath(input_dir)
        output_dir = os.path.abspath(output_dir) if output_dir else input_dir
        for name in ORIGINAL_DIR_CANDIDATES:
            candidate = os.path.join(input_dir, name)
            if os.path.isdir(candidate):
                return cls(input_dir, output_dir, candidate)
        raise IOFailure("No original or data directory found", input_dir)

    # ── Pools ─────────────────────────────────────────────────────────

    @property
    def translation_dir(self) -> str:
        return os.path.join(self.output_dir, "translation")

    @property
    def maps_dir(self) -> str:
        return os.path.join(self.translation_dir, "maps")

    @property
    def other_dir(self) -> str:
        return os.path.join(self.translation_dir, "other")

    @property
    def plugins_dir(self) -> str:
        # Prepared by hand next to the input, not produced by extraction
        return os.path.join(self.input_dir, "translation", "plugins")

    @property
    def plugins_path(self) -> str:
        return os.path.join(self.plugins_dir, PLUGINS_FILE)

    # ── Outputs ───────────────────────────────────────────────────────

    @property
    def output_data_dir(self) -> str:
        return os.path.join(self.output_dir, "output", "data")

    @property
    def output_js_dir(self) -> str:
        return os.path.join(self.output_dir, "output", "js")

    # ── Originals ─────────────────────────────────────────────────────

    @property
    def system_path(self) -> str:
        return os.path.join(self.original_dir, SYSTEM_FILE)

    def original_path(self, filename: str) -> str:
        return os.path.join(self.original_dir, filename)

    def _json_files(self) -> list:
        try:
            names = os.listdir(self.original_dir)
        except OSError as exc:
            raise IOFailure(f"Cannot list directory: {exc.strerror or exc}",
                            self.original_dir) from exc
        return sorted(name for name in names
                      if name.endswith(".json")
                      and os.path.isfile(self.original_path(name)))

    def list_map_files(self) -> list:
        return [name for name in self._json_files() if MAP_FILE_RE.match(name)]

    def list_entity_files(self) -> list:
        return [name for name in self._json_files()
                if not name.startswith(EXCLUDED_ENTITY_PREFIXES)]


def entity_stem(filename: str) -> str:
    """Pool name of an entity file: ``Actors.json`` -> ``actors``."""
    return os.path.splitext(filename)[0].lower()
