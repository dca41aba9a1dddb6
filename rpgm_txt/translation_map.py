"""Lookup from original text to translated text, built from a pool pair."""

from typing import Optional

from .errors import PoolMismatch
from .text_pool import read_pool_lines, unescape_line


def build_translation_map(originals: list, translations: list,
                          unescape: bool = True, strip: bool = True,
                          original_path: Optional[str] = None,
                          translation_path: Optional[str] = None) -> dict:
    """Zip pool lines into a ``{original: translation}`` dict.

    Originals are used verbatim as keys (they were normalized when the pool
    was extracted); translations are trimmed.  Blank translations are
    untranslated lines and get no entry.  A duplicated original keeps the
    last translation.

    Raises:
        PoolMismatch: when the two line lists differ in length.
    """
    if len(originals) != len(translations):
        raise PoolMismatch(original_path, translation_path,
                           len(originals), len(translations))

    mapping = {}
    for original, translated in zip(originals, translations):
        if unescape:
            original = unescape_line(original)
            translated = unescape_line(translated)
        if strip:
            translated = translated.strip()
        if not original or not translated:
            continue
        mapping[original] = translated
    return mapping


def load_translation_map(original_path: str, translation_path: str,
                         unescape: bool = True, strip: bool = True) -> dict:
    """Read a pool pair from disk and build its translation map."""
    return build_translation_map(
        read_pool_lines(original_path), read_pool_lines(translation_path),
        unescape=unescape, strip=strip,
        original_path=original_path, translation_path=translation_path,
    )
