"""Infrastructure layer implementations."""

from almacen.infrastructure import clock, storage

__all__ = ["storage", "clock"]
