"""
Configuration Validator

Validates candidate CTA documents and merges partial patches into them.

Provides:
- validate_config: Structured result instead of an exception
- ensure_valid_config: Same check, raising ConfigValidationError
- deep_merge: Non-mutating recursive merge (lists replaced wholesale)
- dump_config_text / apply_config_text: Hand-edited JSON round-trip
- order_components: Sort by stored order and re-stamp positions 1..N
- normalize_config: Fill generator defaults and re-stamp component orders
- default_config: The document a new CTA starts from
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError
from pydantic_core import ErrorDetails

from cta_engine.config import get_settings
from cta_engine.core.exceptions import ConfigValidationError
from cta_engine.models.contracts.cta import CTAConfig, config_to_dict

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating a candidate document."""

    ok: bool
    config: CTAConfig | None = None
    errors: list[dict[str, str]] = field(default_factory=list)
    message: str | None = None


def error_details_to_list(errors: list[ErrorDetails]) -> list[dict[str, str]]:
    """Flatten pydantic error details into {path, message} dicts."""
    return [
        {
            "path": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", "validation error"),
        }
        for error in errors
    ]


def format_validation_errors(errors: list[dict[str, str]]) -> str:
    """
    Format validation errors into a readable message.

    Args:
        errors: List of {"path": ..., "message": ...} dicts

    Returns:
        Human-readable error message string
    """
    messages = []
    for error in errors:
        if error.get("path"):
            messages.append(f"{error['path']}: {error['message']}")
        else:
            messages.append(error["message"])
    return "; ".join(messages)


def _failure(errors: list[dict[str, str]]) -> ValidationResult:
    return ValidationResult(
        ok=False, errors=errors, message=format_validation_errors(errors)
    )


def validate_config(candidate: CTAConfig | Mapping[str, Any]) -> ValidationResult:
    """
    Validate a candidate document.

    Args:
        candidate: A CTAConfig or its JSON form (either key spelling)

    Returns:
        ValidationResult. On success `config` holds a freshly validated
        document; on failure `errors` lists every problem found.
    """
    if isinstance(candidate, CTAConfig):
        candidate = config_to_dict(candidate)

    if not isinstance(candidate, Mapping):
        return _failure(
            [{"path": "", "message": "Configuration must be a JSON object"}]
        )

    try:
        config = CTAConfig.model_validate(dict(candidate))
    except ValidationError as e:
        result = _failure(error_details_to_list(e.errors()))
        logger.debug(f"Config validation failed: {result.message}")
        return result

    return ValidationResult(ok=True, config=config)


def ensure_valid_config(candidate: CTAConfig | Mapping[str, Any]) -> CTAConfig:
    """
    Validate a candidate document, raising on failure.

    Raises:
        ConfigValidationError: If the candidate is invalid
    """
    result = validate_config(candidate)
    if not result.ok:
        raise ConfigValidationError(result.errors, f"Invalid configuration: {result.message}")
    return result.config


def deep_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge `patch` into a copy of `base`.

    For each key in the patch: when both sides are dicts, merge recursively;
    otherwise the patch value replaces the base value. Lists are replaced
    wholesale, never merged by index. Neither input is modified.
    """
    merged = dict(base)
    for key, value in patch.items():
        existing = merged.get(key)
        if isinstance(value, Mapping) and isinstance(existing, Mapping):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


# -----------------------------------------------------------------------------
# Text round-trip
# -----------------------------------------------------------------------------


def dump_config_text(config: CTAConfig, indent: int | None = None) -> str:
    """Serialize a document to JSON text for hand editing."""
    if indent is None:
        indent = get_settings().json_indent
    return json.dumps(config_to_dict(config), indent=indent or None, ensure_ascii=False)


def apply_config_text(text: str, base: CTAConfig) -> ValidationResult:
    """
    Apply hand-edited JSON text on top of the last valid document.

    The parsed object is deep-merged over `base` and the merge is validated.
    Components of the merge are put into their stored order and re-stamped.
    Malformed text yields a failed result; `base` is never modified.
    """
    try:
        patch = json.loads(text)
    except json.JSONDecodeError as e:
        logger.info(f"Rejected malformed configuration text: {e}")
        return _failure(
            [{"path": "", "message": f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}"}]
        )

    if not isinstance(patch, dict):
        return _failure(
            [{"path": "", "message": "Configuration text must be a JSON object"}]
        )

    merged = deep_merge(config_to_dict(base), patch)
    if isinstance(merged.get("components"), list):
        merged["components"] = order_components(merged["components"])
    return validate_config(merged)


# -----------------------------------------------------------------------------
# Defaults & normalization
# -----------------------------------------------------------------------------


def restamp_orders(components: list[Any]) -> list[Any]:
    """Copy components with `order` set to their 1-based position."""
    stamped = []
    for index, component in enumerate(components, start=1):
        if isinstance(component, Mapping):
            stamped.append({**component, "order": index})
        else:
            stamped.append(component.model_copy(update={"order": index}))
    return stamped


def order_components(components: list[Any]) -> list[Any]:
    """
    Sort components by their stored order and re-stamp them 1..N.

    Position breaks ties and components without a numeric order go last.
    A list holding anything but components is returned as is.
    """
    if not all(isinstance(c, (Mapping, BaseModel)) for c in components):
        return list(components)

    def sort_key(item: tuple[int, Any]) -> tuple[float, int]:
        position, component = item
        if isinstance(component, Mapping):
            order = component.get("order")
        else:
            order = getattr(component, "order", None)
        if isinstance(order, (int, float)) and not isinstance(order, bool):
            return (order, position)
        return (float("inf"), position)

    ordered = [component for _, component in sorted(enumerate(components), key=sort_key)]
    return restamp_orders(ordered)


def normalize_config(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Fill the defaults a generated document may leave out.

    - `enabled` defaults to True (generated documents are meant to show)
    - A secondary button without an action gets "none"
    - A "link" secondary button without a URL gets "#"
    - Components are sorted by their stored order and re-stamped 1..N
    """
    normalized = copy.deepcopy(dict(data))

    if normalized.get("enabled") is None:
        normalized["enabled"] = True

    secondary = normalized.get("secondaryButton")
    if isinstance(secondary, dict):
        if not secondary.get("action"):
            secondary["action"] = "none"
        if secondary["action"] == "link" and not secondary.get("url"):
            secondary["url"] = "#"

    components = normalized.get("components")
    if isinstance(components, list):
        normalized["components"] = order_components(components)

    return normalized


def default_config() -> CTAConfig:
    """The document a new CTA screen starts from (disabled, no components)."""
    return CTAConfig.model_validate(
        {
            "version": "1.0",
            "enabled": False,
            "layout": {"style": "card", "position": "center"},
            "components": [],
            "primaryButton": {
                "id": "btn_1",
                "text": "Start Chat",
                "variant": "solid",
                "predefinedMessage": "Hi! I need help.",
                "actionLabel": "Start Chat",
            },
        }
    )
