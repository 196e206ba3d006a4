"""
Core Exceptions

Custom exceptions for the CTA engine.
"""

from typing import Any


class CTAEngineError(Exception):
    """Base class for engine errors. Carries a human-readable message."""

    def __init__(self, message: str = "CTA engine error"):
        self.message = message
        super().__init__(self.message)


class ConfigValidationError(CTAEngineError):
    """
    Raised when a candidate document fails schema validation.

    The editor never raises this; it records the errors and keeps the last
    valid document live. Callers that want exceptions use
    `ensure_valid_config()`.

    Attributes:
        errors: List of {"path": ..., "message": ...} dicts
    """

    def __init__(self, errors: list[dict[str, Any]], message: str | None = None):
        self.errors = errors
        if message is None:
            message = "; ".join(
                f"{e['path']}: {e['message']}" if e.get("path") else e["message"]
                for e in errors
            ) or "Invalid configuration"
        super().__init__(message)


class UnknownComponentTypeError(CTAEngineError):
    """Raised when creating a component whose type is not in the closed set."""

    def __init__(self, component_type: str):
        self.component_type = component_type
        super().__init__(f"Unknown component type: {component_type}")


class ComponentNotFoundError(CTAEngineError):
    """Raised when an editor operation targets a component id not in the document."""

    def __init__(self, component_id: str):
        self.component_id = component_id
        super().__init__(f"Component not found: {component_id}")


class InvalidPropertyPathError(CTAEngineError):
    """Raised for empty or malformed dotted property paths."""

    def __init__(self, path: str, reason: str = "malformed path"):
        self.path = path
        super().__init__(f"Invalid property path '{path}': {reason}")
