"""
Romanized-to-Bengali equivalence table.

Maps each romanized sound (a digraph or a single Latin letter) to the
Bengali graphemes it may be written with. Vowel signs, conjunct
fragments (hasanta + consonant, reph) and an empty alternative for the
implicit vowel are all part of the table, so that one romanized query
accepts every plausible spelling of a title.

Escapes are used because many entries are combining marks, and because
the precomposed nukta letters (U+09DC, U+09DD, U+09DF) must not be
confused with their decomposed forms.
"""

from typing import Dict, Tuple


# Two-letter sounds. Tried before single letters.
DIGRAPHS: Dict[str, Tuple[str, ...]] = {
    "sh": ("\u09b6", "\u09b7", "\u09b8"),           # sha, ssa, sa
    "th": ("\u09a5", "\u09a0"),                     # tha, ttha
    "ph": ("\u09ab",),                              # pha
    "gh": ("\u0998",),                              # gha
    "kh": ("\u0996", "\u0995\u09cd\u09b7"),         # kha, k+ssa conjunct
    "dh": ("\u09a7", "\u09a2"),                     # dha, ddha
    "ch": ("\u099a", "\u099b"),                     # ca, cha
    "bh": ("\u09ad",),                              # bha
    "jh": ("\u099d",),                              # jha
    "ng": ("\u0982", "\u0999"),                     # anusvara, nga
}

VOWELS: Dict[str, Tuple[str, ...]] = {
    # the inherent vowel is usually not written at all
    "a": ("\u0985", "\u0986", "\u09be", ""),
    "e": ("\u098f", "\u09c7", "\u0987", "\u09bf"),
    "i": ("\u0987", "\u0988", "\u09bf", "\u09c0", "\u09c8"),
    "o": ("\u0993", "\u09cb", "\u0985", "\u09cc", "\u09c1"),
    "u": ("\u0989", "\u098a", "\u09c1", "\u09c2"),
}

CONSONANTS: Dict[str, Tuple[str, ...]] = {
    "k": ("\u0995", "\u0996"),
    "g": ("\u0997",),
    "c": ("\u099a", "\u0995", "\u09b8"),
    "j": ("\u099c", "\u09af", "\u09cd\u099c"),
    "t": ("\u099f", "\u09a4", "\u09ce", "\u0983"),
    "d": ("\u09a1", "\u09a6"),
    # dental, retroflex, palatal and velar nasals, anusvara
    "n": ("\u09a8", "\u09a3", "\u099e", "\u0999", "\u0982"),
    "p": ("\u09aa",),
    "f": ("\u09ab",),
    "b": ("\u09ac", "\u09ad"),
    "m": ("\u09ae",),
    # ra, rra, rha, vocalic r sign, ra-phala, reph
    "r": ("\u09b0", "\u09dc", "\u09dd", "\u09c3", "\u09cd\u09b0", "\u09b0\u09cd"),
    "l": ("\u09b2",),
    "s": ("\u09b8", "\u09b6", "\u09b7"),
    "h": ("\u09b9", "\u0983"),
    # yya, ya, ya-phala
    "y": ("\u09df", "\u09af", "\u09cd\u09af"),
    "v": ("\u09ad", "\u09ac"),
    "w": ("\u09ac", "\u0993"),
    "z": ("\u099c", "\u09af"),
}

SINGLES: Dict[str, Tuple[str, ...]] = {**VOWELS, **CONSONANTS}

DIGRAPH_LENGTH = 2


def lookup_digraph(pair: str) -> Tuple[str, ...]:
    """Return the alternatives for a two-letter sound, or () if none."""
    return DIGRAPHS.get(pair, ())


def lookup_single(char: str) -> Tuple[str, ...]:
    """Return the alternatives for a single letter, or () if none."""
    return SINGLES.get(char, ())
