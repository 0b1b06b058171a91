"""Shared fakes for the niqqud test suite."""

from __future__ import annotations

import threading

import numpy as np
import pytest

from aleph_niqqud.constants import DAGESH_TABLE, NIQQUD_TABLE, SIN_TABLE


class RecordingLogger:
    def __init__(self):
        self._lock = threading.Lock()
        self.debugs = []
        self.infos = []
        self.warnings = []
        self.exceptions = []

    def _record(self, bucket, message, args):
        with self._lock:
            bucket.append(message % args if args else message)

    def debug(self, message, *args):
        self._record(self.debugs, message, args)

    def info(self, message, *args):
        self._record(self.infos, message, args)

    def warning(self, message, *args):
        self._record(self.warnings, message, args)

    def exception(self, message, *args):
        self._record(self.exceptions, message, args)


def one_hot_rows(classes, n_classes, rows=None):
    """Score matrix whose argmax per row is ``classes[row]`` (0 past the end)."""
    rows = len(classes) if rows is None else rows
    scores = np.zeros((rows, n_classes), dtype=np.float32)
    scores[:, 0] = 0.5
    for row, cls in enumerate(classes[:rows]):
        scores[row, cls] = 1.0
    return scores


class ScriptedPredictor:
    """Predictor returning the same class for every position of a channel."""

    def __init__(self, max_len, *, niqqud=0, dagesh=0, sin=0):
        self.max_len = max_len
        self.classes = {"niqqud": niqqud, "dagesh": dagesh, "sin": sin}
        self.calls = []
        self.on_call = None

    def predict(self, indices):
        self.calls.append(list(indices))
        if self.on_call is not None:
            self.on_call(len(self.calls))
        return (
            one_hot_rows([self.classes["niqqud"]] * self.max_len, len(NIQQUD_TABLE)),
            one_hot_rows([self.classes["dagesh"]] * self.max_len, len(DAGESH_TABLE)),
            one_hot_rows([self.classes["sin"]] * self.max_len, len(SIN_TABLE)),
        )


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def scripted_predictor():
    return ScriptedPredictor


@pytest.fixture
def score_rows():
    return one_hot_rows
