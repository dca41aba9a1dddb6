"""Substitution of CJK punctuation by Latin equivalents.

Japanese games quote with 「」 and punctuate with 。、？ and friends.  With
romanization enabled both passes key the text pools on the substituted form,
so it must be applied on extraction and injection alike or every lookup
misses.
"""

# Single code point -> replacement.  Everything else is left alone.
ROMANIZE_TABLE = {
    "。": ".",
    "、": ",",
    "・": "·",
    "゠": "–",
    "＝": "—",
    "…": "...",
    "「": "'",
    "」": "'",
    "〈": "'",
    "〉": "'",
    "『": '"',
    "』": '"',
    "《": '"',
    "》": '"',
    "（": "(",
    "〔": "(",
    "｟": "(",
    "〘": "(",
    "）": ")",
    "〕": ")",
    "｠": ")",
    "〙": ")",
    "｛": "{",
    "｝": "}",
    "［": "[",
    "【": "[",
    "〖": "[",
    "〚": "[",
    "］": "]",
    "】": "]",
    "〗": "]",
    "〛": "]",
    "〜": "~",
    "？": "?",
}

_TRANSLATE = str.maketrans(ROMANIZE_TABLE)


def romanize_string(text: str) -> str:
    """Replace CJK punctuation in *text* in a single pass.

    The ellipsis expands to three periods; the output never contains a
    character from the table, so applying it twice is the same as once.
    """
    return text.translate(_TRANSLATE)


def normalize(text: str, romanize: bool = False) -> str:
    """Build the lookup key for *text*: trimmed, optionally romanized."""
    text = text.strip()
    if romanize:
        text = romanize_string(text)
    return text
