"""Hebrew niqqud restoration on top of the Nakdimon sequence labeling model."""

__version__ = "0.1.0"
