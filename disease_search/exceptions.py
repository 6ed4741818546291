"""Exceptions raised at the engine boundary."""

from typing import Any, Dict, List, Optional


class InvalidSearchConfigError(ValueError):
    """Raised when a configuration update would break scoring invariants."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []
