"""Local single-process implementation of the synchronous niqqud port."""

from __future__ import annotations

from typing import Callable

from ..domain.alphabet import strip_diacritics
from .ports import NiqqudPort
from .state import NiqqudState


class LocalNiqqudApi(NiqqudPort):
    """Adapt NiqqudState to an explicit application port."""

    def __init__(self, *, state_provider: Callable[[], NiqqudState | None]) -> None:
        self._state_provider = state_provider

    def _state(self) -> NiqqudState:
        state = self._state_provider()
        if state is None:
            raise RuntimeError("App state is not initialized.")
        return state

    def add_niqqud(self, text: str) -> str:
        if not text:
            return ""
        return self._state().add_niqqud(text) or ""

    def remove_niqqud(self, text: str) -> str:
        return strip_diacritics(text)
