"""
Render Output Contracts

The renderer produces a host-neutral visual tree. A hosting UI layer maps
each RenderNode onto its own widgets; `html_writer` maps it onto HTML.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RenderNode(BaseModel):
    """One node of the rendered visual tree."""

    tag: str = Field(description="Element kind, e.g. 'div', 'h1', 'button'")
    component_id: str | None = Field(
        default=None, description="Source component id (top-level nodes only)"
    )
    component_type: str | None = Field(default=None, description="Source component type")
    class_name: str = Field(default="", description="CSS classes")
    style: dict[str, Any] = Field(default_factory=dict, description="Concrete CSS properties")
    text: str | None = Field(default=None, description="Plain text content")
    html: str | None = Field(
        default=None, description="Pre-sanitized markup content (emitted verbatim)"
    )
    attrs: dict[str, str] = Field(default_factory=dict, description="Element attributes")
    children: list[RenderNode] = Field(default_factory=list)

    def find(self, class_name: str) -> list[RenderNode]:
        """Find descendants (including self) carrying a CSS class."""
        found: list[RenderNode] = []
        if class_name in self.class_name.split():
            found.append(self)
        for child in self.children:
            found.extend(child.find(class_name))
        return found


class RenderedScreen(BaseModel):
    """A fully composed CTA screen, painted bottom to top."""

    class_name: str = Field(description="Root CSS classes")
    style: dict[str, Any] = Field(default_factory=dict, description="Root CSS properties")
    layers: list[RenderNode] = Field(
        default_factory=list,
        description="Background layers, bottom first (fill, then overlay)",
    )
    components: list[RenderNode] = Field(
        default_factory=list, description="Foreground component stack in order"
    )
    stack_style: dict[str, Any] = Field(
        default_factory=dict, description="Foreground stack CSS (carries the component gap)"
    )
    dismiss: RenderNode | None = Field(default=None, description="Dismiss control")


RenderNode.model_rebuild()
