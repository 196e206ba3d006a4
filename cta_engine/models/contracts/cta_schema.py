"""
Property-Schema Descriptor Contracts

Metadata describing which fields the property editor exposes for each
component type. Pure data: nothing here holds runtime state.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

PropertyFieldKind = Literal[
    "text",
    "textarea",
    "color",
    "number",
    "select",
    "toggle",
    "array",
    "object",
]

PropertyCategory = Literal["content", "appearance", "layout", "advanced"]

PROPERTY_CATEGORIES: tuple[str, ...] = ("content", "appearance", "layout", "advanced")


class SelectOption(BaseModel):
    """Select option definition."""

    value: str | int | float = Field(description="Option value")
    label: str = Field(description="Option display label")


class PropertyFieldDefinition(BaseModel):
    """Definition of one editable field."""

    kind: PropertyFieldKind = Field(description="Editor widget kind")
    label: str = Field(description="Field label")
    description: str | None = Field(default=None, description="Help text")
    placeholder: str | None = Field(default=None, description="Input placeholder")
    required: bool = Field(default=False, description="Whether a value is required")
    min: float | None = Field(default=None, description="Minimum (number fields)")
    max: float | None = Field(default=None, description="Maximum (number fields)")
    step: float | None = Field(default=None, description="Step (number fields)")
    max_length: int | None = Field(default=None, description="Maximum text length")
    options: list[SelectOption] | None = Field(
        default=None, description="Choices (select fields)"
    )
    properties: dict[str, PropertyFieldDefinition] | None = Field(
        default=None, description="Item schema (array and object fields)"
    )

    def is_misconfigured(self) -> str | None:
        """Return a reason when the definition cannot be rendered, else None."""
        if self.kind == "select" and not self.options:
            return "select field missing options"
        if self.kind in ("array", "object") and not self.properties:
            return f"{self.kind} field missing properties schema"
        return None


class PropertyGroup(BaseModel):
    """A named group of fields under one category."""

    category: PropertyCategory = Field(description="Group category")
    label: str = Field(description="Group label")
    properties: dict[str, PropertyFieldDefinition] = Field(
        default_factory=dict, description="Fields keyed by property name"
    )


class ComponentTypeMetadata(BaseModel):
    """Editor metadata for one component type."""

    type: str = Field(description="Component type tag")
    label: str = Field(description="Display name")
    icon: str = Field(default="", description="Icon shown in the component list")
    description: str = Field(default="", description="Short description")
    property_groups: list[PropertyGroup] = Field(default_factory=list)
    default_props: dict[str, Any] = Field(default_factory=dict)
    default_style: dict[str, Any] = Field(default_factory=dict)

    def group(self, category: str) -> PropertyGroup | None:
        """Get the property group for a category."""
        for group in self.property_groups:
            if group.category == category:
                return group
        return None


PropertyFieldDefinition.model_rebuild()
