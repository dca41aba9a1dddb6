"""Extraction of translatable text from parsed data documents.

Every method here works on already-loaded JSON and returns the pool keys it
found, in document order.  Reading files, running documents in parallel and
writing the pools is the job of :mod:`rpgm_txt.engine`.
"""

from typing import Optional

from .classifier import (
    DEFAULT_PROFILE, DocumentKind, Field, TitleProfile, code_key, field_piece,
)
from .romanizer import normalize
from .schema import (
    entity_records, is_event_list_file, iter_event_command_lists,
    iter_map_command_lists, iter_system_slots, map_display_name,
)
from .sequence import scan_command_list
from .text_pool import TextPool


class CorpusExtractor:
    """Collects pool keys from maps, entity collections and System.json."""

    def __init__(self, profile: TitleProfile = DEFAULT_PROFILE,
                 romanize: bool = False):
        self.profile = profile
        self.romanize = romanize

    def extract_command_list(self, cmd_list: list, kind: DocumentKind,
                             filename: str = "") -> list:
        """Keys of every accepted unit in one command list."""
        keys = []
        for unit in scan_command_list(cmd_list, kind, self.profile):
            key = code_key(self.profile, unit.category, unit.text,
                           filename, self.romanize)
            if key is not None:
                keys.append(key)
        return keys

    # ── Maps ──────────────────────────────────────────────────────────

    def extract_map(self, data, filename: str = "") -> list:
        keys = []
        for cmd_list in iter_map_command_lists(data):
            keys.extend(self.extract_command_list(
                cmd_list, DocumentKind.MAP, filename))
        return keys

    def extract_display_name(self, data) -> Optional[str]:
        return normalize(map_display_name(data), self.romanize) or None

    # ── Entity collections ────────────────────────────────────────────

    def extract_entities(self, filename: str, data) -> TextPool:
        """Pool of one entity file (Actors.json, CommonEvents.json, ...)."""
        pool = TextPool()
        if is_event_list_file(filename):
            for cmd_list in iter_event_command_lists(filename, data):
                pool.update(self.extract_command_list(
                    cmd_list, DocumentKind.EVENT_LIST, filename))
            return pool

        for _, record in entity_records(data):
            for fld in Field:
                value = record.get(fld.value)
                if not isinstance(value, str):
                    continue
                piece = field_piece(self.profile, fld, value, filename)
                if piece is not None:
                    pool.add(normalize(piece, self.romanize))
        return pool

    # ── System ────────────────────────────────────────────────────────

    def extract_system(self, data) -> TextPool:
        pool = TextPool()
        for container, key in iter_system_slots(data):
            pool.add(normalize(container[key], self.romanize))
        return pool
