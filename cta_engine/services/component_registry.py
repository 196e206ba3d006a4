"""
Component Type Registry

Closed mapping from a component type tag to its renderer and its
property-schema metadata. button_group is not registered here; the
renderer dispatches it directly.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from cta_engine.models.contracts.cta import CTAConfig
from cta_engine.models.contracts.cta_render import RenderNode
from cta_engine.models.contracts.cta_schema import ComponentTypeMetadata
from cta_engine.services import cta_components
from cta_engine.services.component_metadata import COMPONENT_METADATA

logger = logging.getLogger(__name__)

ComponentRenderer = Callable[..., RenderNode | None]


@dataclass(frozen=True)
class RegistryEntry:
    """Renderer and schema for one component type."""

    renderer: ComponentRenderer
    schema: ComponentTypeMetadata


class ComponentRegistry:
    """
    Registry of renderable component types.

    Lookups are plain dict accesses; the set of types is fixed when the
    registry is built.
    """

    def __init__(self, entries: dict[str, RegistryEntry]):
        self._entries = dict(entries)

    def resolve(self, component_type: str) -> RegistryEntry | None:
        """Get the entry for a type, or None when the type is not registered."""
        return self._entries.get(component_type)

    def is_valid_type(self, component_type: str) -> bool:
        """Check whether a type has a registered renderer."""
        return component_type in self._entries

    def available_types(self) -> list[str]:
        """Registered type tags, in registration order."""
        return list(self._entries)

    def render_component(self, component, document: CTAConfig) -> RenderNode | None:
        """
        Render one component through its registered renderer.

        Unknown types and renderer failures are logged and render nothing,
        so one bad component never stops its siblings from rendering.
        """
        entry = self.resolve(component.type)
        if entry is None:
            logger.warning(f"Unknown CTA component type: {component.type}")
            return None

        try:
            return entry.renderer(component, document)
        except Exception as e:
            logger.error(
                f"Failed to render component {component.id} ({component.type}): {e}",
                exc_info=True,
            )
            return None


def _build_default_registry() -> ComponentRegistry:
    renderers: dict[str, ComponentRenderer] = {
        "header": cta_components.render_header,
        "description": cta_components.render_description,
        "feature_list": cta_components.render_feature_list,
        "form": cta_components.render_form,
        "badge": cta_components.render_badge,
        "divider": cta_components.render_divider,
        "container": cta_components.render_container,
        "richtext": cta_components.render_richtext,
        "custom_html": cta_components.render_custom_html,
    }
    return ComponentRegistry(
        {
            component_type: RegistryEntry(
                renderer=renderer, schema=COMPONENT_METADATA[component_type]
            )
            for component_type, renderer in renderers.items()
        }
    )


registry = _build_default_registry()


def get_registry() -> ComponentRegistry:
    """Get the default component registry."""
    return registry
