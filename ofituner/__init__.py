"""Cost-model selection of collective algorithms and protocols, with region geometry and registration-key helpers."""

__version__ = "0.1.0"

__all__ = ["constants", "geometry", "memreg", "model"]