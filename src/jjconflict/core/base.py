"""Base classes for configuration models.

This module contains the foundational classes used throughout
jjconflict:
- Closeable Protocol for resource cleanup
- BaseCloseable for automatic cleanup cascade
- BaseConfig for configuration models

These are extracted into a separate module to avoid circular
dependencies between config.py and log.py.
"""

from __future__ import annotations

import sys
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Closeable(Protocol):
    """Protocol for objects that support close()."""

    def close(self) -> None:
        """Clean up resources."""
        ...


class BaseCloseable(BaseModel):
    """Base class providing automatic cleanup of Closeable children.

    Any Pydantic model inheriting from BaseCloseable:
    - Becomes a context manager (supports 'with' statement)
    - Walks its fields on close() and closes each Closeable child
    - Keeps closing remaining children even if some fail

    Cleanup cascade:
    Config.close() → Logger.close() → Sink.close()
    """

    def close(self):
        """Close all closeable child objects.

        Errors from individual children are written to stderr and
        the remaining children are still closed.
        """
        for field_name in self.__class__.model_fields:
            child = getattr(self, field_name, None)
            if child is None:
                continue

            if isinstance(child, Closeable):
                try:
                    child.close()
                except Exception as e:
                    msg = f"Warning: Error closing {field_name}: {e}"
                    print(msg, file=sys.stderr)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # noqa: U100
        """Context manager exit - close all children."""
        self.close()
        return False


class BaseConfig(BaseCloseable):
    """Base class for all configuration sections.

    Semantic marker: a model deriving from this was loaded from
    YAML/env/CLI.
    """
    pass


__all__ = ["Closeable", "BaseCloseable", "BaseConfig"]
