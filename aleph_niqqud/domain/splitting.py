"""Length-bounded chunking at word boundaries."""

from __future__ import annotations

import logging

logger = logging.getLogger("aleph_niqqud")


def split_by_length(text: str, max_length: int) -> list[str]:
    """Split text into chunks strictly shorter than ``max_length``.

    A full chunk is cut right after its most recent space, which stays at the
    end of the emitted chunk. A window without any space is cut at exactly
    ``max_length - 1`` characters. Joining the chunks gives back ``text``.
    """
    if max_length <= 1:
        return [text]
    window = max_length - 1
    chunks: list[str] = []
    current: list[str] = []
    last_space: int | None = None
    forced_cuts = 0
    for char in text:
        if char == " ":
            last_space = len(current)
        current.append(char)
        if len(current) == window:
            if last_space is None:
                cutoff = window
                forced_cuts += 1
            else:
                cutoff = last_space + 1
            chunks.append("".join(current[:cutoff]))
            current = current[cutoff:]
            last_space = None
    if current:
        chunks.append("".join(current))
    if len(chunks) > 1:
        logger.debug(
            "Length split: max_length=%s chunks=%s forced_cuts=%s",
            max_length,
            len(chunks),
            forced_cuts,
        )
    return chunks


def ends_at_word_boundary(chunk: str) -> bool:
    return chunk.endswith(" ")
