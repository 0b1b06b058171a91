"""Integrations for external services and libraries."""

from .model_manager import ModelManager, load_torchscript

__all__ = [
    "ModelManager",
    "load_torchscript",
]
