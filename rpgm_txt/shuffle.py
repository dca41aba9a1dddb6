"""Deliberate scrambling of translations for verification runs.

Writing a game with shuffled translations shows at a glance which strings
the writer actually replaced: anything still in the original language was
missed.  Never used for a real translation.
"""

import random
import re

_WORD_RE = re.compile(r"\S+")


def shuffle_words(text: str, rng: random.Random) -> str:
    """Permute the whitespace-delimited words of *text*, keeping spacing."""
    words = _WORD_RE.findall(text)
    rng.shuffle(words)
    return _WORD_RE.sub(lambda m: words.pop(), text)


def shuffle_translation_map(mapping: dict, level: int,
                            rng: random.Random) -> dict:
    """Return a copy of *mapping* with its values scrambled.

    Level 1 hands every key another key's translation; level 2 also
    shuffles the words inside each translation.  Level 0 returns the
    mapping unchanged.
    """
    if level <= 0:
        return mapping
    keys = list(mapping)
    values = list(mapping.values())
    rng.shuffle(values)
    if level >= 2:
        values = [shuffle_words(value, rng) for value in values]
    return dict(zip(keys, values))
