"""Writing translations back into freshly loaded original documents.

The walk mirrors :class:`rpgm_txt.extractor.CorpusExtractor` step for step
and computes keys through the same functions.  Text whose key has no
translation is left exactly as it was.
"""

from dataclasses import dataclass

from .classifier import (
    DEFAULT_PROFILE, DocumentKind, Field, TitleProfile, code_key, field_piece,
)
from .romanizer import normalize
from .schema import (
    entity_records, is_event_list_file, iter_event_command_lists,
    iter_map_command_lists, iter_system_slots, map_display_name,
)
from .sequence import scan_command_list, write_unit


@dataclass
class InjectStats:
    replaced: int = 0
    missed: int = 0

    def __iadd__(self, other: "InjectStats") -> "InjectStats":
        self.replaced += other.replaced
        self.missed += other.missed
        return self


class CorpusInjector:
    """Applies translation maps to maps, entity collections and System.json."""

    def __init__(self, profile: TitleProfile = DEFAULT_PROFILE,
                 romanize: bool = False):
        self.profile = profile
        self.romanize = romanize

    @staticmethod
    def _lookup(translations: dict, key, stats: InjectStats):
        """Translation for *key*, or None when there is nothing to change.

        A translation identical to its key counts as a hit but changes
        nothing, so the original formatting survives untouched.
        """
        translated = translations.get(key)
        if translated is None:
            stats.missed += 1
            return None
        stats.replaced += 1
        if translated == key:
            return None
        return translated

    def inject_command_list(self, cmd_list: list, kind: DocumentKind,
                            translations: dict,
                            filename: str = "") -> InjectStats:
        stats = InjectStats()
        # Units are read from the untouched list before anything is written.
        for unit in scan_command_list(cmd_list, kind, self.profile):
            key = code_key(self.profile, unit.category, unit.text,
                           filename, self.romanize)
            if key is None:
                continue
            translated = self._lookup(translations, key, stats)
            if translated is not None:
                write_unit(cmd_list, unit, translated)
        return stats

    # ── Maps ──────────────────────────────────────────────────────────

    def inject_map(self, data, translations: dict, names: dict = None,
                   filename: str = "") -> InjectStats:
        stats = InjectStats()
        if names:
            key = normalize(map_display_name(data), self.romanize)
            if key:
                translated = self._lookup(names, key, stats)
                if translated is not None:
                    data["displayName"] = translated
        for cmd_list in iter_map_command_lists(data):
            stats += self.inject_command_list(
                cmd_list, DocumentKind.MAP, translations, filename)
        return stats

    # ── Entity collections ────────────────────────────────────────────

    def inject_entities(self, filename: str, data,
                        translations: dict) -> InjectStats:
        stats = InjectStats()
        if is_event_list_file(filename):
            for cmd_list in iter_event_command_lists(filename, data):
                stats += self.inject_command_list(
                    cmd_list, DocumentKind.EVENT_LIST, translations, filename)
            return stats

        for _, record in entity_records(data):
            for fld in Field:
                value = record.get(fld.value)
                if not isinstance(value, str):
                    continue
                piece = field_piece(self.profile, fld, value, filename)
                if piece is None:
                    continue
                key = normalize(piece, self.romanize)
                translated = self._lookup(translations, key, stats)
                if translated is None:
                    continue
                if piece == value.strip():
                    record[fld.value] = translated
                else:
                    # Sub-match of the attribute: swap just that part
                    record[fld.value] = value.replace(piece, translated, 1)
        return stats

    # ── System ────────────────────────────────────────────────────────

    def inject_system(self, data, translations: dict) -> InjectStats:
        stats = InjectStats()
        # Materialize first: assignments must not disturb the walk.
        for container, key in list(iter_system_slots(data)):
            text_key = normalize(container[key], self.romanize)
            if not text_key:
                continue
            translated = self._lookup(translations, text_key, stats)
            if translated is not None:
                container[key] = translated
        return stats
