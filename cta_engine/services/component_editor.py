"""
Component Editor

State machine behind the visual CTA editor.

Every operation reads the working document (the draft when the last edit
failed validation, otherwise the validated config), builds a modified copy,
validates it and replaces the editor state in one assignment:
- Valid: the copy becomes the config, the draft and errors are cleared,
  change listeners are notified
- Invalid: the config stays live for rendering, the copy is kept as the
  draft and the errors are recorded (whole-document message under "_root")

Structural operations (add, remove, duplicate, move) re-stamp every
component's order to its 1-based position. Whole-document replacements
(construction, update_config, apply_json_text) first sort the components by
their stored order, so array position always matches render order.
"""

import copy
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Literal, Mapping
from uuid import uuid4

from pydantic.alias_generators import to_camel

from cta_engine.core.exceptions import (
    ComponentNotFoundError,
    InvalidPropertyPathError,
    UnknownComponentTypeError,
)
from cta_engine.models.contracts.cta import (
    COMPONENT_TYPES,
    ComponentStyle,
    CTAComponent,
    CTAConfig,
    config_to_dict,
)
from cta_engine.models.contracts.cta_schema import (
    PROPERTY_CATEGORIES,
    PropertyFieldDefinition,
)
from cta_engine.services.component_metadata import get_component_metadata
from cta_engine.services.config_validator import (
    ValidationResult,
    apply_config_text,
    default_config,
    dump_config_text,
    ensure_valid_config,
    order_components,
    restamp_orders,
    validate_config,
)
from cta_engine.services.property_path import PropertyPath, get_at_path, set_at_path

logger = logging.getLogger(__name__)

ROOT_ERROR_KEY = "_root"

DEFAULT_EXPANDED_GROUPS: frozenset[str] = frozenset({"content", "appearance"})

DEFAULT_OVERLAY_COLOR = "rgba(0, 0, 0, 1)"

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

STYLE_KEYS: frozenset[str] = frozenset(to_camel(name) for name in ComponentStyle.model_fields)

# Managed by the editor itself, never set through a property path.
_RESERVED_FIELDS = frozenset({"id", "type", "order"})

ChangeListener = Callable[[CTAConfig], None]


@dataclass(frozen=True)
class EditorState:
    """Snapshot of the editor. Replaced wholesale, never mutated."""

    config: CTAConfig
    draft: dict[str, Any] | None = None
    selected_component_id: str | None = None
    expanded_groups: frozenset[str] = DEFAULT_EXPANDED_GROUPS
    validation_errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldView:
    """One editable field resolved against a component."""

    path: str
    definition: PropertyFieldDefinition
    value: Any


@dataclass(frozen=True)
class PanelGroup:
    """A property group of the selected component."""

    category: str
    label: str
    expanded: bool
    fields: list[FieldView]


def field_path(category: str, key: str) -> str:
    """
    Path of a metadata field on a component.

    Content fields live under props. Appearance, layout and advanced fields
    live under style, unless the key is not a style field at all
    (dividerColor, badgeStyle, container layout/columns).
    """
    if category != "content" and key in STYLE_KEYS:
        return f"style.{key}"
    return f"props.{key}"


def new_component_id(component_type: str) -> str:
    return f"{component_type}_{uuid4().hex[:8]}"


def _wire_path(path: str | PropertyPath) -> PropertyPath:
    parsed = PropertyPath.parse(path)
    if parsed.head in _RESERVED_FIELDS:
        raise InvalidPropertyPathError(str(parsed), f"'{parsed.head}' cannot be edited")
    return PropertyPath(
        tuple(to_camel(s) if "_" in s else s for s in parsed.segments)
    )


class ComponentEditor:
    """
    Editor for one CTA configuration document.

    Args:
        initial_config: Starting document (a CTAConfig, its JSON form, or None
            for the default document). Must be valid.

    Raises:
        ConfigValidationError: If initial_config is invalid
    """

    def __init__(self, initial_config: CTAConfig | Mapping[str, Any] | None = None):
        if initial_config is None:
            config = default_config()
        else:
            config = ensure_valid_config(initial_config)
            config = config.model_copy(
                update={"components": order_components(config.components)}
            )

        first_id = config.components[0].id if config.components else None
        self._state = EditorState(config=config, selected_component_id=first_id)
        self._listeners: list[ChangeListener] = []

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def config(self) -> CTAConfig:
        """The last validated document."""
        return self._state.config

    @property
    def draft(self) -> dict[str, Any] | None:
        return self._state.draft

    @property
    def validation_errors(self) -> dict[str, str]:
        return dict(self._state.validation_errors)

    @property
    def working_config(self) -> dict[str, Any]:
        """JSON form of the document the next edit applies to."""
        if self._state.draft is not None:
            return self._state.draft
        return config_to_dict(self._state.config)

    @property
    def selected_component_id(self) -> str | None:
        return self._state.selected_component_id

    @property
    def selected_component(self) -> CTAComponent | None:
        """The selected component from the validated document, if any."""
        selected = self._state.selected_component_id
        if selected is None:
            return None
        for component in self._state.config.components:
            if component.id == selected:
                return component
        return None

    def on_change(self, listener: ChangeListener) -> ChangeListener:
        """Register a callback receiving each newly validated document."""
        self._listeners.append(listener)
        return listener

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _components(self, document: Mapping[str, Any]) -> list[dict[str, Any]]:
        return list(document.get("components") or [])

    def _index_of(self, components: list[dict[str, Any]], component_id: str) -> int:
        for index, component in enumerate(components):
            if component.get("id") == component_id:
                return index
        raise ComponentNotFoundError(component_id)

    def _commit(self, document: dict[str, Any], **state_updates: Any) -> ValidationResult:
        """Validate a candidate and replace the state in one step."""
        components = document.get("components")
        if isinstance(components, list):
            document = {**document, "components": order_components(components)}

        result = validate_config(document)

        if result.ok:
            self._state = replace(
                self._state,
                config=result.config,
                draft=None,
                validation_errors={},
                **state_updates,
            )
            for listener in self._listeners:
                listener(result.config)
        else:
            logger.warning(f"Config validation error: {result.message}")
            errors = {e["path"]: e["message"] for e in result.errors if e["path"]}
            errors[ROOT_ERROR_KEY] = result.message
            self._state = replace(
                self._state,
                draft=document,
                validation_errors=errors,
                **state_updates,
            )
        return result

    def _with_components(
        self, document: Mapping[str, Any], components: list[dict[str, Any]]
    ) -> dict[str, Any]:
        return {**document, "components": restamp_orders(components)}

    # -------------------------------------------------------------------------
    # Selection & panel state
    # -------------------------------------------------------------------------

    def select_component(self, component_id: str | None) -> None:
        """Select a component, or clear the selection with None."""
        if component_id is not None:
            self._index_of(self._components(self.working_config), component_id)
        self._state = replace(self._state, selected_component_id=component_id)

    def toggle_group(self, category: str) -> None:
        """Expand or collapse a property group category."""
        if category not in PROPERTY_CATEGORIES:
            raise ValueError(f"Unknown property category: {category}")
        expanded = set(self._state.expanded_groups)
        if category in expanded:
            expanded.remove(category)
        else:
            expanded.add(category)
        self._state = replace(self._state, expanded_groups=frozenset(expanded))

    # -------------------------------------------------------------------------
    # Structural operations
    # -------------------------------------------------------------------------

    def add_component(
        self,
        component_type: str,
        after_id: str | None = None,
        use_defaults: bool = False,
    ) -> str:
        """
        Add a component and select it.

        Args:
            component_type: One of the document component types
            after_id: Insert right after this component (appends when absent
                or not found)
            use_defaults: Seed props and style from the type's metadata

        Returns:
            The new component's id

        Raises:
            UnknownComponentTypeError: If the type is not a component type
        """
        if component_type not in COMPONENT_TYPES:
            raise UnknownComponentTypeError(component_type)

        document = self.working_config
        components = self._components(document)

        taken = {c.get("id") for c in components}
        component_id = new_component_id(component_type)
        while component_id in taken:
            component_id = new_component_id(component_type)

        props: dict[str, Any] = {}
        style: dict[str, Any] = {}
        if use_defaults:
            metadata = get_component_metadata(component_type)
            if metadata is not None:
                props = copy.deepcopy(metadata.default_props)
                style = copy.deepcopy(metadata.default_style)

        new_component = {
            "id": component_id,
            "type": component_type,
            "order": len(components) + 1,
            "visible": True,
            "props": props,
            "style": style,
        }

        position = len(components)
        if after_id is not None:
            for index, component in enumerate(components):
                if component.get("id") == after_id:
                    position = index + 1
                    break
        components.insert(position, new_component)

        self._commit(
            self._with_components(document, components),
            selected_component_id=component_id,
        )
        logger.debug(f"Added component {component_id} at position {position + 1}")
        return component_id

    def remove_component(self, component_id: str) -> None:
        """Remove a component; a removed selection falls back to the first component."""
        document = self.working_config
        components = self._components(document)
        index = self._index_of(components, component_id)
        del components[index]

        selected = self._state.selected_component_id
        if selected == component_id:
            selected = components[0]["id"] if components else None

        self._commit(
            self._with_components(document, components),
            selected_component_id=selected,
        )

    def duplicate_component(self, component_id: str) -> str:
        """
        Insert a deep copy with a fresh id right after the original and select it.

        Returns:
            The duplicate's id
        """
        document = self.working_config
        components = self._components(document)
        index = self._index_of(components, component_id)
        original = components[index]

        taken = {c.get("id") for c in components}
        duplicate_id = new_component_id(original["type"])
        while duplicate_id in taken:
            duplicate_id = new_component_id(original["type"])

        duplicate = copy.deepcopy(original)
        duplicate["id"] = duplicate_id
        components.insert(index + 1, duplicate)

        self._commit(
            self._with_components(document, components),
            selected_component_id=duplicate_id,
        )
        return duplicate_id

    def move_component(self, component_id: str, direction: Literal["up", "down"]) -> bool:
        """
        Swap a component with its neighbor.

        Returns:
            False (and nothing changes) when the component is already at
            that end of the list
        """
        if direction not in ("up", "down"):
            raise ValueError(f"Invalid direction: {direction}")

        document = self.working_config
        components = self._components(document)
        index = self._index_of(components, component_id)

        if direction == "up" and index == 0:
            return False
        if direction == "down" and index == len(components) - 1:
            return False

        target = index - 1 if direction == "up" else index + 1
        components[index], components[target] = components[target], components[index]
        self._commit(self._with_components(document, components))
        return True

    def toggle_component_visibility(self, component_id: str) -> None:
        """Flip a component's visible flag."""
        document = self.working_config
        components = self._components(document)
        index = self._index_of(components, component_id)
        component = components[index]
        components[index] = {**component, "visible": not component.get("visible", True)}
        self._commit({**document, "components": components})

    # -------------------------------------------------------------------------
    # Property edits
    # -------------------------------------------------------------------------

    def update_component_property(
        self, component_id: str, path: str | PropertyPath, value: Any
    ) -> ValidationResult:
        """
        Set a value at a dotted path on a component (e.g. "props.title",
        "style.textColor") and re-validate the whole document.

        Missing intermediate records are created. Path segments may use
        either key spelling.
        """
        wire = _wire_path(path)
        document = self.working_config
        components = self._components(document)
        index = self._index_of(components, component_id)
        components[index] = set_at_path(components[index], wire, value)
        return self._commit({**document, "components": components})

    def update_component_style(
        self, component_id: str, style_key: str, value: Any
    ) -> ValidationResult:
        """Shortcut for update_component_property(id, "style.<key>", value)."""
        return self.update_component_property(component_id, f"style.{style_key}", value)

    def update_config(self, document: CTAConfig | Mapping[str, Any]) -> ValidationResult:
        """Replace the whole document (container-level edits)."""
        if isinstance(document, CTAConfig):
            document = config_to_dict(document)
        return self._commit(copy.deepcopy(dict(document)))

    def _update_section(self, path: str, value: Any) -> ValidationResult:
        return self._commit(set_at_path(self.working_config, _wire_path(path), value))

    def update_layout(self, field_name: str, value: Any) -> ValidationResult:
        """Set one layout field (style, position, width, componentGap, ...)."""
        return self._update_section(f"layout.{field_name}", value)

    def update_theme(self, field_name: str, value: Any) -> ValidationResult:
        """Set one theme color."""
        return self._update_section(f"theme.{field_name}", value)

    def update_settings(self, field_name: str, value: Any) -> ValidationResult:
        """Set one behavior setting (dismissible, ...)."""
        return self._update_section(f"settings.{field_name}", value)

    def update_overlay(self, field_name: str, value: Any) -> ValidationResult:
        """Set one background overlay field (enabled, color, opacity)."""
        return self._update_section(f"layout.backgroundOverlay.{field_name}", value)

    def touch_overlay_opacity(self, opacity: float) -> ValidationResult:
        """Set the overlay opacity; touching the opacity enables the overlay."""
        document = self.working_config
        overlay = dict(get_at_path(document, "layout.backgroundOverlay", {}))
        overlay["enabled"] = True
        overlay["opacity"] = opacity
        overlay.setdefault("color", DEFAULT_OVERLAY_COLOR)
        return self._commit(set_at_path(document, "layout.backgroundOverlay", overlay))

    # -------------------------------------------------------------------------
    # Field-level validation & commit
    # -------------------------------------------------------------------------

    def validate_property(self, path: str | PropertyPath, value: Any) -> str | None:
        """
        Field-level check run before a value is committed.

        Empty values pass (required-ness is the schema's concern). Color
        paths must hold a #RRGGBB hex color.
        """
        if value is None or value == "":
            return None

        leaf = PropertyPath.parse(path).leaf
        is_color = leaf == "color" or leaf.endswith("Color") or leaf.endswith("_color")
        if is_color and isinstance(value, str) and not HEX_COLOR_PATTERN.match(value):
            return "Invalid hex color format (use #RRGGBB)"
        return None

    def _field_error(self, path: str, message: str) -> None:
        errors = dict(self._state.validation_errors)
        errors[path] = message
        self._state = replace(self._state, validation_errors=errors)

    def commit_field(
        self,
        component_id: str,
        path: str,
        raw_value: Any,
        definition: PropertyFieldDefinition,
    ) -> bool:
        """
        Commit the transient value of an input field when it loses focus.

        - number: parsed; unparseable input falls back to the current value;
          clamped to min/max
        - color: "#" added when missing; invalid hex is discarded and the
          error recorded under the field path
        - select: values outside the options are discarded
        - text/textarea: trimmed to max_length

        Returns:
            True when the document was updated
        """
        components = self._components(self.working_config)
        current = get_at_path(
            components[self._index_of(components, component_id)], _wire_path(path)
        )

        if definition.kind == "number":
            value = self._coerce_number(raw_value, current, definition)
        elif definition.kind == "color":
            value = raw_value.strip() if isinstance(raw_value, str) else raw_value
            if isinstance(value, str) and value and not value.startswith("#"):
                value = f"#{value}"
            error = self.validate_property(path, value)
            if error:
                self._field_error(path, error)
                return False
            value = value or None
        elif definition.kind == "select":
            allowed = [option.value for option in definition.options or []]
            if raw_value not in allowed:
                self._field_error(path, f"Value must be one of: {', '.join(map(str, allowed))}")
                return False
            value = raw_value
        elif definition.kind == "toggle":
            if isinstance(raw_value, str):
                value = raw_value.strip().lower() in ("true", "1", "yes", "on")
            else:
                value = bool(raw_value)
        elif definition.kind in ("text", "textarea"):
            value = "" if raw_value is None else str(raw_value)
            if definition.max_length is not None:
                value = value[: definition.max_length]
        else:
            value = raw_value

        if value == current:
            return False

        result = self.update_component_property(component_id, path, value)
        return result.ok

    @staticmethod
    def _coerce_number(
        raw_value: Any, current: Any, definition: PropertyFieldDefinition
    ) -> int | float:
        try:
            number = float(raw_value)
        except (TypeError, ValueError):
            number = current if isinstance(current, (int, float)) else 0
        if number != number:  # NaN
            number = current if isinstance(current, (int, float)) else 0

        if definition.min is not None and number < definition.min:
            number = definition.min
        if definition.max is not None and number > definition.max:
            number = definition.max
        if isinstance(number, float) and number.is_integer():
            return int(number)
        return number

    # -------------------------------------------------------------------------
    # Text round-trip
    # -------------------------------------------------------------------------

    def dump_text(self, indent: int | None = None) -> str:
        """JSON text of the validated document, for the raw editor view."""
        return dump_config_text(self._state.config, indent)

    def apply_json_text(self, text: str) -> ValidationResult:
        """
        Apply hand-edited JSON over the last validated document.

        On failure the live document and any draft stay as they were and the
        message is recorded under "_root".
        """
        result = apply_config_text(text, self._state.config)
        if not result.ok:
            self._field_error(ROOT_ERROR_KEY, result.message)
            return result

        selected = self._state.selected_component_id
        if selected is not None and all(c.id != selected for c in result.config.components):
            selected = result.config.components[0].id if result.config.components else None

        self._state = replace(
            self._state,
            config=result.config,
            draft=None,
            validation_errors={},
            selected_component_id=selected,
        )
        for listener in self._listeners:
            listener(result.config)
        return result

    # -------------------------------------------------------------------------
    # Property panel
    # -------------------------------------------------------------------------

    def property_panel(self, component_id: str | None = None) -> list[PanelGroup]:
        """
        Resolve a component's metadata into editable field groups.

        Defaults to the selected component. Misconfigured field definitions
        are logged and left out.
        """
        component_id = component_id or self._state.selected_component_id
        if component_id is None:
            return []

        components = self._components(self.working_config)
        component = components[self._index_of(components, component_id)]
        metadata = get_component_metadata(component.get("type", ""))
        if metadata is None:
            return []

        groups = []
        for group in metadata.property_groups:
            fields = []
            for key, definition in group.properties.items():
                reason = definition.is_misconfigured()
                if reason:
                    logger.error(
                        f"Skipping field '{key}' of {metadata.type}.{group.category}: {reason}"
                    )
                    continue
                path = field_path(group.category, key)
                fields.append(
                    FieldView(path=path, definition=definition, value=get_at_path(component, path))
                )
            groups.append(
                PanelGroup(
                    category=group.category,
                    label=group.label,
                    expanded=group.category in self._state.expanded_groups,
                    fields=fields,
                )
            )
        return groups
