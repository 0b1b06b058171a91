"""Typed failures surfaced by the niqqud pipeline."""

from __future__ import annotations


class NiqqudError(Exception):
    """Base class for request-scoped niqqud failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PredictionError(NiqqudError):
    """The model could not produce a prediction for a request."""


class ModelLoadError(PredictionError):
    """The model artifact could not be acquired or initialized."""

    def __init__(self, cause: str = "") -> None:
        message = "Failed to load the niqqud model."
        if cause:
            message = f"{message} {cause}"
        super().__init__(message)
        self.cause = cause
