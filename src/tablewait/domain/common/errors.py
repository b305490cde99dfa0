from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when an engine is called with input it cannot evaluate."""
