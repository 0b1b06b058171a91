"""Decode per-position class scores back onto the original letters."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..constants import (
    DAGESH_TABLE,
    FIRST_EMITTING_CLASS,
    MASK_INDEX,
    NIQQUD_TABLE,
    SIN_TABLE,
)
from .alphabet import DEFAULT_ALPHABET, Alphabet
from .splitting import ends_at_word_boundary


def argmax(scores) -> np.ndarray:
    """Class index per position; ties go to the lowest index."""
    return np.asarray(scores).argmax(axis=-1)


def _channel_classes(scores, seq_len: int, table: Sequence[str]) -> np.ndarray:
    rows = np.asarray(scores)[:seq_len, : len(table)]
    return argmax(rows)


def merge(
    letters: str,
    normalized_indices: Sequence[int],
    niqqud,
    dagesh,
    sin,
    seq_len: int,
    *,
    alphabet: Alphabet = DEFAULT_ALPHABET,
) -> str:
    """Rebuild vocalized text from the three channel score arrays.

    Marks are appended per letter in the order dagesh, shin/sin dot, vowel,
    and only for letters eligible for that channel.
    """
    seq_len = min(seq_len, len(letters), len(normalized_indices))
    niqqud_classes = _channel_classes(niqqud, seq_len, NIQQUD_TABLE)
    dagesh_classes = _channel_classes(dagesh, seq_len, DAGESH_TABLE)
    sin_classes = _channel_classes(sin, seq_len, SIN_TABLE)

    result: list[str] = []
    for i in range(seq_len):
        if normalized_indices[i] == MASK_INDEX:
            break
        letter = letters[i]
        result.append(letter)
        if letter in alphabet.dagesh_letters:
            dagesh_class = int(dagesh_classes[i])
            if dagesh_class >= FIRST_EMITTING_CLASS:
                result.append(DAGESH_TABLE[dagesh_class])
        if letter in alphabet.sin_letters:
            sin_class = int(sin_classes[i])
            if sin_class >= FIRST_EMITTING_CLASS:
                result.append(SIN_TABLE[sin_class])
        if letter in alphabet.niqqud_letters:
            niqqud_class = int(niqqud_classes[i])
            if niqqud_class >= FIRST_EMITTING_CLASS:
                result.append(NIQQUD_TABLE[niqqud_class])
    return "".join(result)


def join_chunks(outputs: Sequence[str], chunks: Sequence[str]) -> str:
    """Join decoded chunks and collapse the doubled boundary spaces.

    A chunk cut at a space already carries that space, so the separator turns
    it into a pair that the collapse folds back. A chunk cut mid-word by the
    length fallback is glued to the next one without a separator.
    """
    parts: list[str] = []
    for index, output in enumerate(outputs):
        if index > 0:
            previous = chunks[index - 1] if index - 1 < len(chunks) else ""
            if ends_at_word_boundary(previous):
                parts.append(" ")
        parts.append(output)
    return "".join(parts).replace("  ", " ")
