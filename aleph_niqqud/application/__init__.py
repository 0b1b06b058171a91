"""Application layer orchestration."""

from .bootstrap import AppServices, initialize_app_services
from .controller import (
    GenerationController,
    GenerationRequest,
    GenerationResult,
    GenerationStatus,
)
from .local_api import LocalNiqqudApi
from .ports import NiqqudPort, NiqqudPredictorPort
from .state import NiqqudState

__all__ = [
    "AppServices",
    "GenerationController",
    "GenerationRequest",
    "GenerationResult",
    "GenerationStatus",
    "LocalNiqqudApi",
    "NiqqudPort",
    "NiqqudPredictorPort",
    "NiqqudState",
    "initialize_app_services",
]
