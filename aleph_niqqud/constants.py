"""Hebrew Unicode constants and the Nakdimon model tables."""

from __future__ import annotations

DEFAULT_MAX_LEN = 10000
DEFAULT_DEBOUNCE_SECONDS = 0.3
DEFAULT_MODEL_FILENAME = "nakdimon.pt"

# Diacritic code point range stripped before prediction (cantillation included)
DIACRITIC_FIRST = 0x0591
DIACRITIC_LAST = 0x05C7
LETTER_FIRST = 0x05D0
LETTER_LAST = 0x05EA

MASK = "\0"
LIGATURE_PLACEHOLDER = "H"
UNKNOWN_PLACEHOLDER = "O"
DIGIT_PLACEHOLDER = "5"

MASK_INDEX = 0
UNKNOWN_INDEX = 2

# Marks
RAFE = "\u05bf"
SHVA = "\u05b0"
REDUCED_SEGOL = "\u05b1"
REDUCED_PATAKH = "\u05b2"
REDUCED_KAMATZ = "\u05b3"
HIRIK = "\u05b4"
TZEIRE = "\u05b5"
SEGOL = "\u05b6"
PATAKH = "\u05b7"
KAMATZ = "\u05b8"
HOLAM = "\u05b9"
HOLAM_HASER = "\u05ba"
KUBUTZ = "\u05bb"
DAGESH = "\u05bc"
SHIN_DOT = "\u05c1"
SIN_DOT = "\u05c2"

PUNCTUATION = " !\"'(),-.:;?"
HEBREW_LETTERS = "".join(chr(code) for code in range(LETTER_FIRST, LETTER_LAST + 1))

# Index layout is fixed by the trained model: 0 mask, 1-3 placeholders,
# 4-15 punctuation, 16-42 letters (final forms included).
LETTERS_TABLE = (
    MASK,
    LIGATURE_PLACEHOLDER,
    UNKNOWN_PLACEHOLDER,
    DIGIT_PLACEHOLDER,
    *PUNCTUATION,
    *HEBREW_LETTERS,
)

NIQQUD_TABLE = (
    MASK,
    RAFE,
    SHVA,
    REDUCED_SEGOL,
    REDUCED_PATAKH,
    REDUCED_KAMATZ,
    HIRIK,
    TZEIRE,
    SEGOL,
    PATAKH,
    KAMATZ,
    HOLAM,
    HOLAM_HASER,
    KUBUTZ,
    DAGESH,
    PATAKH,
)
DAGESH_TABLE = (MASK, RAFE, DAGESH)
SIN_TABLE = (MASK, RAFE, SHIN_DOT, SIN_DOT)

# First class index that materializes a mark (0 = MASK, 1 = RAFE)
FIRST_EMITTING_CLASS = 2

DAGESH_LETTERS = frozenset("בגדהוזטיכלמנספצקשת" + "ךף")
SIN_LETTERS = frozenset("ש")
NIQQUD_LETTERS = frozenset("אבגדהוזחטיכלמנסעפצקרשת" + "ךן")

FINAL_FORMS = {"ך": "כ", "ם": "מ", "ן": "נ", "ף": "פ", "ץ": "צ"}
DASHES = frozenset("\u05be‒–—―−")
APOSTROPHES = frozenset("´‘’")
DOUBLE_QUOTES = frozenset("“”״")
LIGATURES = frozenset("װױײ")
ELLIPSIS = "…"
