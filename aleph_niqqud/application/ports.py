"""Application-level ports for prediction and vocalization flows."""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np


class NiqqudPredictorPort(Protocol):
    """Port abstraction over the sequence labeling model."""

    max_len: int

    def predict(
        self,
        indices: Sequence[int],
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]: ...


class NiqqudPort(Protocol):
    """Port abstraction for synchronous vocalization."""

    def add_niqqud(self, text: str) -> str: ...

    def remove_niqqud(self, text: str) -> str: ...
