"""Model alphabet: character normalization, symbol indices and diacritic stripping."""

from __future__ import annotations

from typing import Iterable

from ..constants import (
    APOSTROPHES,
    DAGESH_LETTERS,
    DASHES,
    DIACRITIC_FIRST,
    DIACRITIC_LAST,
    DIGIT_PLACEHOLDER,
    DOUBLE_QUOTES,
    ELLIPSIS,
    FINAL_FORMS,
    LETTERS_TABLE,
    LIGATURE_PLACEHOLDER,
    LIGATURES,
    MASK,
    NIQQUD_LETTERS,
    SIN_LETTERS,
    UNKNOWN_INDEX,
    UNKNOWN_PLACEHOLDER,
)

_BRACKETS = {"[": "(", "]": ")"}


class Alphabet:
    """Fixed symbol table shared by the encoder and the decoder.

    ``normalize`` folds any character onto one of the table symbols and never
    fails. ``encode``/``decode`` translate between symbols and model indices.
    With ``fold_final_forms`` the five final letters are folded onto their
    regular forms before lookup instead of using their own indices.
    """

    def __init__(
        self,
        symbols: Iterable[str] = LETTERS_TABLE,
        *,
        fold_final_forms: bool = False,
    ) -> None:
        self.symbols: tuple[str, ...] = tuple(symbols)
        self.fold_final_forms = bool(fold_final_forms)
        self._index = {
            symbol: index for index, symbol in enumerate(self.symbols) if symbol != MASK
        }
        self.dagesh_letters = DAGESH_LETTERS
        self.sin_letters = SIN_LETTERS
        self.niqqud_letters = NIQQUD_LETTERS

    def __len__(self) -> int:
        return len(self.symbols)

    def normalize(self, char: str) -> str:
        if self.fold_final_forms and char in FINAL_FORMS:
            return FINAL_FORMS[char]
        if char in self._index:
            return char
        if char in FINAL_FORMS:
            return FINAL_FORMS[char]
        if char in ("\n", "\t"):
            return " "
        if char in DASHES:
            return "-"
        if char in _BRACKETS:
            return _BRACKETS[char]
        if char in APOSTROPHES:
            return "'"
        if char in DOUBLE_QUOTES:
            return '"'
        if len(char) == 1 and char.isdecimal():
            return DIGIT_PLACEHOLDER
        if char == ELLIPSIS:
            return ","
        if char in LIGATURES:
            return LIGATURE_PLACEHOLDER
        return UNKNOWN_PLACEHOLDER

    def encode(self, symbol: str) -> int:
        return self._index.get(symbol, UNKNOWN_INDEX)

    def decode(self, index: int) -> str:
        if index < 0:
            raise IndexError(f"symbol index out of range: {index}")
        return self.symbols[index]

    def encode_text(self, text: str) -> list[int]:
        return [self.encode(self.normalize(char)) for char in text]


DEFAULT_ALPHABET = Alphabet()


def normalize(char: str) -> str:
    return DEFAULT_ALPHABET.normalize(char)


def encode(symbol: str) -> int:
    return DEFAULT_ALPHABET.encode(symbol)


def decode(index: int) -> str:
    return DEFAULT_ALPHABET.decode(index)


def is_niqqud(char: str) -> bool:
    """True for a single code point in the Hebrew points and accents block."""
    return len(char) == 1 and DIACRITIC_FIRST <= ord(char) <= DIACRITIC_LAST


def strip_diacritics(text: str) -> str:
    """Remove niqqud, dagesh, shin/sin dots and cantillation marks."""
    return "".join(char for char in text if not is_niqqud(char))
