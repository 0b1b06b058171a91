"""Model acquisition and invocation for the Nakdimon predictor."""
from __future__ import annotations

import os
import threading
from typing import Callable, Mapping, Sequence

import numpy as np
import torch
from huggingface_hub import hf_hub_download

from ..constants import MASK_INDEX
from ..errors import ModelLoadError, PredictionError

CHANNELS = ("niqqud", "dagesh", "sin")

ModelLoader = Callable[[str, str], Callable[[torch.Tensor], object]]


def load_torchscript(path: str, device: str):
    return torch.jit.load(path, map_location=device).eval()


class ModelManager:
    """Own the process-wide model instance and marshal predictions.

    The model is loaded on first use, exactly once, behind a lock. A failed
    load is remembered and reported on every later call.
    """

    def __init__(
        self,
        model_path: str,
        max_len: int,
        cuda_available: bool,
        logger,
        *,
        use_gpu: bool = True,
        repo_id: str = "",
        model_filename: str = "",
        loader: ModelLoader | None = None,
    ) -> None:
        self.model_path = model_path
        self.max_len = max_len
        self.device = "cuda" if use_gpu and cuda_available else "cpu"
        self.repo_id = repo_id
        self.model_filename = model_filename or os.path.basename(model_path)
        self.logger = logger
        self.loader = loader or load_torchscript
        self._model = None
        self._load_error: ModelLoadError | None = None
        self._model_lock = threading.Lock()
        self.logger.info("Niqqud model will load on demand (device=%s)", self.device)

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def _resolve_artifact(self) -> str:
        if os.path.isfile(self.model_path):
            return self.model_path
        if not self.repo_id:
            raise FileNotFoundError(f"Model file not found: {self.model_path}")
        self.logger.info("Downloading %s from %s", self.model_filename, self.repo_id)
        return hf_hub_download(repo_id=self.repo_id, filename=self.model_filename)

    def get_model(self):
        model = self._model
        if model is not None:
            return model
        with self._model_lock:
            if self._model is not None:
                return self._model
            if self._load_error is not None:
                raise self._load_error
            self.logger.info("Loading niqqud model on %s", self.device)
            try:
                path = self._resolve_artifact()
                self._model = self.loader(path, self.device)
            except Exception as exc:
                self.logger.exception("Failed to load niqqud model")
                self._load_error = ModelLoadError(str(exc))
                raise self._load_error from exc
            self.logger.info("Niqqud model ready on %s", self.device)
            return self._model

    def prewarm(self) -> bool:
        try:
            self.get_model()
        except ModelLoadError:
            return False
        return True

    def pad(self, indices: Sequence[int]) -> list[int]:
        if len(indices) > self.max_len:
            raise PredictionError(
                f"Input of {len(indices)} symbols exceeds model length {self.max_len}."
            )
        return list(indices) + [MASK_INDEX] * (self.max_len - len(indices))

    def predict(self, indices: Sequence[int]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return niqqud, dagesh and sin scores shaped ``[max_len, classes]``."""
        model = self.get_model()
        padded = self.pad(indices)
        try:
            inputs = torch.tensor([padded], dtype=torch.long, device=self.device)
            with torch.inference_mode():
                outputs = model(inputs)
            return self._unpack(outputs)
        except PredictionError:
            raise
        except Exception as exc:
            self.logger.exception("Niqqud model invocation failed")
            raise PredictionError(str(exc) or type(exc).__name__) from exc

    def _unpack(self, outputs) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        if isinstance(outputs, Mapping):
            missing = [name for name in CHANNELS if name not in outputs]
            if missing:
                raise PredictionError("Model output missing.")
            channels = [outputs[name] for name in CHANNELS]
        elif isinstance(outputs, (tuple, list)) and len(outputs) == len(CHANNELS):
            channels = list(outputs)
        else:
            raise PredictionError("Model output missing.")
        arrays = []
        for name, channel in zip(CHANNELS, channels):
            if isinstance(channel, torch.Tensor):
                channel = channel.detach().float().cpu().numpy()
            array = np.asarray(channel, dtype=np.float32)
            if array.ndim == 3:
                array = array[0]
            if array.ndim != 2 or array.shape[0] < self.max_len:
                raise PredictionError(
                    f"Unexpected {name} output shape {tuple(array.shape)}."
                )
            arrays.append(array)
        return arrays[0], arrays[1], arrays[2]
