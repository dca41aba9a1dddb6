"""Command classification and per-title acceptance rules.

A command node's ``code`` decides what kind of text it carries.  Which of
that text is worth translating can differ per game, so acceptance goes
through a table of title profiles: one :class:`TitleProfile` per detected
game, with the ``None`` entry as the fallback used for every other title.
New titles are added by registering another profile, not by branching here.
"""

import enum
from dataclasses import dataclass, field
from typing import Callable, Optional

from .romanizer import normalize

# RPG Maker event command codes that carry text
CODE_SHOW_TEXT = 401         # Show Text line, parameters[0] is text
CODE_SCROLL_TEXT = 405       # Scroll Text line (credits), parameters[0] is text
CODE_SHOW_CHOICES = 102      # Show Choices, parameters[0] is a list of strings
CODE_WHEN_CHOICE = 402       # When [choice], parameters[1] is the choice text
CODE_PLUGIN_COMMAND = 356    # Plugin Command (MV), parameters[0] is the command
CODE_CHANGE_NICKNAME = 324   # Change Actor Nickname, parameters[1] is the nickname


class Category(enum.Enum):
    DIALOGUE = "dialogue"
    CHOICE = "choice"
    SYSTEM_TEXT = "system_text"
    CREDITS = "credits"
    NICKNAME = "nickname"
    UNRECOGNIZED = "unrecognized"


# Categories whose consecutive nodes form one logical unit
MERGEABLE = frozenset({Category.DIALOGUE, Category.CREDITS})


class DocumentKind(enum.Enum):
    MAP = "map"
    EVENT_LIST = "event_list"    # CommonEvents.json / Troops.json
    ENTITY = "entity"            # flat records: Actors, Items, ...
    SYSTEM = "system"


class Field(enum.Enum):
    """Flat text attributes of entity records."""
    NAME = "name"
    NICKNAME = "nickname"
    DESCRIPTION = "description"
    NOTE = "note"


class GameTitle(enum.Enum):
    TERMINA = "termina"


_MAP_CODES = {
    CODE_SHOW_TEXT: Category.DIALOGUE,
    CODE_SHOW_CHOICES: Category.CHOICE,
    CODE_WHEN_CHOICE: Category.CHOICE,
    CODE_PLUGIN_COMMAND: Category.SYSTEM_TEXT,
    CODE_CHANGE_NICKNAME: Category.NICKNAME,
}

CODE_TABLE = {
    DocumentKind.MAP: _MAP_CODES,
    DocumentKind.EVENT_LIST: {**_MAP_CODES, CODE_SCROLL_TEXT: Category.CREDITS},
}

# Where the text payload lives, by code
PAYLOAD_INDEX = {CODE_WHEN_CHOICE: 1, CODE_CHANGE_NICKNAME: 1}


def payload_index(code: int) -> int:
    return PAYLOAD_INDEX.get(code, 0)


# A rule takes (text, filename) and returns the piece of text to translate,
# or None to reject it.  The piece is usually the text itself.
Rule = Callable[[str, str], Optional[str]]


def accept_all(text: str, filename: str) -> Optional[str]:
    return text


@dataclass(frozen=True)
class TitleProfile:
    """Acceptance rules for one game title.

    A category or field missing from the rule tables is not translated at
    all for that title.
    """
    name: str
    code_rules: dict = field(default_factory=dict)
    field_rules: dict = field(default_factory=dict)
    plugin_names: frozenset = frozenset()

    def accepts_category(self, category: Category) -> bool:
        return category in self.code_rules

    def accept_code(self, category: Category, text: str,
                    filename: str = "") -> Optional[str]:
        rule = self.code_rules.get(category)
        if rule is None:
            return None
        return rule(text, filename)

    def accept_field(self, fld: Field, text: str,
                     filename: str = "") -> Optional[str]:
        rule = self.field_rules.get(fld)
        if rule is None:
            return None
        return rule(text, filename)


def classify(code: int, document_kind: DocumentKind,
             profile: Optional[TitleProfile] = None) -> Category:
    """Map a command *code* found in a *document_kind* to its category.

    With a *profile*, categories the profile never translates come back as
    ``UNRECOGNIZED`` so callers skip them outright.
    """
    category = CODE_TABLE.get(document_kind, {}).get(code, Category.UNRECOGNIZED)
    if profile is not None and category is not Category.UNRECOGNIZED:
        if not profile.accepts_category(category):
            return Category.UNRECOGNIZED
    return category


# ── Profiles ──────────────────────────────────────────────────────────

_DEFAULT_CODE_RULES = {
    Category.DIALOGUE: accept_all,
    Category.CREDITS: accept_all,
    Category.CHOICE: accept_all,
    Category.NICKNAME: accept_all,
}

_DEFAULT_FIELD_RULES = {
    Field.NAME: accept_all,
    Field.NICKNAME: accept_all,
    Field.DESCRIPTION: accept_all,
    Field.NOTE: accept_all,
}

DEFAULT_PROFILE = TitleProfile(
    name="default",
    code_rules=_DEFAULT_CODE_RULES,
    field_rules=_DEFAULT_FIELD_RULES,
)


_TERMINA_MENU_CATEGORIES = (
    "<Menu Category: Items>",
    "<Menu Category: Food>",
    "<Menu Category: Healing>",
    "<Menu Category: Body bag>",
)


def _termina_plugin_command(text: str, filename: str) -> Optional[str]:
    if text.startswith("GabText"):
        return text
    if text.startswith("choice_text") and not text.endswith("????"):
        return text
    return None


def _termina_note(text: str, filename: str) -> Optional[str]:
    if filename.startswith("Items"):
        for tag in _TERMINA_MENU_CATEGORIES:
            if tag in text:
                return tag
        return None
    if filename.startswith("Classes"):
        return text
    if filename.startswith("Armors") and not text.startswith("///"):
        return text
    return None


TERMINA_PROFILE = TitleProfile(
    name="termina",
    code_rules={**_DEFAULT_CODE_RULES,
                Category.SYSTEM_TEXT: _termina_plugin_command},
    field_rules={**_DEFAULT_FIELD_RULES, Field.NOTE: _termina_note},
    plugin_names=frozenset({
        "YEP_BattleEngineCore",
        "YEP_OptionsCore",
        "SRD_NameInputUpgrade",
        "YEP_KeyboardConfig",
        "YEP_ItemCore",
        "YEP_X_ItemDiscard",
        "YEP_EquipCore",
        "YEP_ItemSynthesis",
        "ARP_CommandIcons",
        "YEP_X_ItemCategories",
        "Olivia_OctoBattle",
    }),
)

PROFILES: dict = {
    None: DEFAULT_PROFILE,
    GameTitle.TERMINA: TERMINA_PROFILE,
}

# Lower-cased substring of System.json gameTitle -> title
TITLE_MARKERS = {
    "termina": GameTitle.TERMINA,
}


def register_profile(title, profile: TitleProfile, marker: str = ""):
    """Add a title profile; *marker* enables detection from gameTitle."""
    PROFILES[title] = profile
    if marker:
        TITLE_MARKERS[marker.lower()] = title


def detect_title(game_title: str) -> Optional[GameTitle]:
    lowered = game_title.lower()
    for marker, title in TITLE_MARKERS.items():
        if marker in lowered:
            return title
    return None


def get_profile(title: Optional[GameTitle]) -> TitleProfile:
    return PROFILES.get(title, DEFAULT_PROFILE)


# ── Keys ──────────────────────────────────────────────────────────────
# Both passes go through these two functions, so a unit that was pooled on
# extraction produces the very same key on injection.

def code_key(profile: TitleProfile, category: Category, text: str,
             filename: str = "", romanize: bool = False) -> Optional[str]:
    """Lookup key for command text, or None when it is not translated."""
    text = text.strip()
    if not text:
        return None
    piece = profile.accept_code(category, text, filename)
    if piece is None:
        return None
    return normalize(piece, romanize) or None


def field_piece(profile: TitleProfile, fld: Field, text: str,
                filename: str = "") -> Optional[str]:
    """Part of an entity attribute to translate: the trimmed value or a
    sub-match of it.  None when the attribute is not translated."""
    text = text.strip()
    if not text:
        return None
    piece = profile.accept_field(fld, text, filename)
    if not piece:
        return None
    return piece
