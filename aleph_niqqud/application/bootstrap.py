"""Application bootstrap assembly for the model, pipeline and controller."""
from __future__ import annotations

from dataclasses import dataclass
import threading
from typing import Callable

from ..config import AppConfig
from ..domain.alphabet import Alphabet
from ..integrations.model_manager import ModelLoader, ModelManager
from .controller import GenerationController, GenerationResult
from .local_api import LocalNiqqudApi
from .state import NiqqudState


@dataclass(frozen=True)
class AppServices:
    model_manager: ModelManager
    alphabet: Alphabet
    app_state: NiqqudState
    controller: GenerationController
    api: LocalNiqqudApi


def _prewarm_in_background(model_manager: ModelManager, logger) -> threading.Thread:
    def _runner() -> None:
        if model_manager.prewarm():
            logger.info("Niqqud model prewarm finished")
        else:
            logger.warning("Niqqud model prewarm failed; generation will report the error")

    thread = threading.Thread(target=_runner, name="niqqud-prewarm", daemon=True)
    thread.start()
    return thread


def initialize_app_services(
    *,
    config: AppConfig,
    cuda_available: bool,
    logger,
    observer: Callable[[GenerationResult], None] | None = None,
    dispatch: Callable[[Callable[[], None]], None] | None = None,
    loader: ModelLoader | None = None,
) -> AppServices:
    """Construct all runtime services and return a typed service bundle."""
    model_manager = ModelManager(
        config.model_path,
        config.max_len,
        cuda_available,
        logger,
        use_gpu=config.use_gpu,
        repo_id=config.repo_id,
        model_filename=config.model_filename,
        loader=loader,
    )
    alphabet = Alphabet(fold_final_forms=config.fold_final_forms)
    app_state = NiqqudState(model_manager, logger, alphabet=alphabet)
    controller = GenerationController(
        app_state,
        logger,
        debounce_seconds=config.debounce_seconds,
        observer=observer,
        dispatch=dispatch,
    )
    api = LocalNiqqudApi(state_provider=lambda: app_state)

    if config.prewarm_enabled:
        _prewarm_in_background(model_manager, logger)

    logger.debug(
        "Services ready: max_len=%s debounce=%.2fs fold_final_forms=%s",
        config.max_len,
        config.debounce_seconds,
        config.fold_final_forms,
    )
    return AppServices(
        model_manager=model_manager,
        alphabet=alphabet,
        app_state=app_state,
        controller=controller,
        api=api,
    )
