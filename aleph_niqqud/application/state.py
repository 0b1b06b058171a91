"""Vocalization orchestration over the segmenter, model and decoder."""
from __future__ import annotations

import threading
import time

from ..domain.alphabet import DEFAULT_ALPHABET, Alphabet, strip_diacritics
from ..domain.decoding import join_chunks, merge
from ..domain.splitting import split_by_length
from .ports import NiqqudPredictorPort


class NiqqudState:
    def __init__(
        self,
        predictor: NiqqudPredictorPort,
        logger,
        *,
        alphabet: Alphabet = DEFAULT_ALPHABET,
    ) -> None:
        self.predictor = predictor
        self.logger = logger
        self.alphabet = alphabet

    @property
    def max_len(self) -> int:
        return self.predictor.max_len

    def vocalize(
        self,
        text: str,
        cancel_event: threading.Event | None = None,
    ) -> str | None:
        """Vocalize already stripped text; ``None`` means the run was cancelled."""
        chunks = split_by_length(text, self.max_len)
        outputs: list[str] = []
        started = time.perf_counter()
        for index, chunk in enumerate(chunks):
            if cancel_event is not None and cancel_event.is_set():
                self.logger.debug("Vocalize cancelled before chunk %s/%s", index + 1, len(chunks))
                return None
            indices = self.alphabet.encode_text(chunk)
            niqqud, dagesh, sin = self.predictor.predict(indices)
            outputs.append(
                merge(
                    chunk,
                    indices,
                    niqqud,
                    dagesh,
                    sin,
                    len(indices),
                    alphabet=self.alphabet,
                )
            )
        self.logger.debug(
            "Vocalized chars=%s chunks=%s elapsed=%.3fs",
            len(text),
            len(chunks),
            time.perf_counter() - started,
        )
        return join_chunks(outputs, chunks)

    def add_niqqud(
        self,
        text: str,
        cancel_event: threading.Event | None = None,
    ) -> str | None:
        # The model expects a space after the final word
        clean_text = strip_diacritics(text) + " "
        result = self.vocalize(clean_text, cancel_event)
        if result is None:
            return None
        return result.strip(" \t")
