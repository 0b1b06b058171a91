"""Domain logic for alphabet handling, chunking and decoding."""

from .alphabet import (
    DEFAULT_ALPHABET,
    Alphabet,
    decode,
    encode,
    is_niqqud,
    normalize,
    strip_diacritics,
)
from .decoding import argmax, join_chunks, merge
from .splitting import split_by_length

__all__ = [
    "Alphabet",
    "DEFAULT_ALPHABET",
    "argmax",
    "decode",
    "encode",
    "is_niqqud",
    "join_chunks",
    "merge",
    "normalize",
    "split_by_length",
    "strip_diacritics",
]
