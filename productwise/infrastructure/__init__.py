"""Infrastructure layer implementations."""

from productwise.infrastructure import export, storage

__all__ = ["storage", "export"]
