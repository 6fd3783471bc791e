"""In-memory storage primitives shared by the memory repository providers."""

from .collection import InMemoryCollection

__all__ = ["InMemoryCollection"]
