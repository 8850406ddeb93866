"""Engine error types."""

from __future__ import annotations

from typing import Any


class ValidationError(ValueError):
    """Raised when engine input violates a documented range or reference."""

    def __init__(self, message: str, *, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value
