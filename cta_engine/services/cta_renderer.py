"""
CTA Renderer

Turns a validated CTA document into a host-neutral visual tree.

Composition, bottom to top:
1. Background fill layer (image and/or pattern)
2. Optional translucent overlay (only when enabled)
3. Foreground component stack, sorted by order
4. Dismiss control (dismissible documents outside banner/sidebar layouts)

A button_group component always suppresses the legacy primary/secondary
pair; without one, the legacy pair renders once after the components.
"""

import logging
from typing import Any, Mapping

from cta_engine.config import get_settings
from cta_engine.models.contracts.cta import CTAConfig, has_button_group
from cta_engine.models.contracts.cta_render import RenderedScreen, RenderNode
from cta_engine.services.component_registry import ComponentRegistry, get_registry
from cta_engine.services.config_validator import ensure_valid_config
from cta_engine.services.cta_components import render_button_group, render_legacy_buttons
from cta_engine.services.style_mapper import background_pattern, format_px

logger = logging.getLogger(__name__)

NON_DISMISSIBLE_STYLES = frozenset({"banner", "sidebar"})

DEFAULT_OVERLAY_COLOR = "#000000"
DEFAULT_OVERLAY_OPACITY = 0.5

PATTERN_SIZES = {"dots": "20px 20px", "grid": "20px 20px"}


def _as_config(document: CTAConfig | Mapping[str, Any]) -> CTAConfig:
    if isinstance(document, CTAConfig):
        return document
    return ensure_valid_config(document)


class CTARenderer:
    """
    Renders CTA documents through a component registry.

    Args:
        registry: Registry used for the uniform component types
    """

    def __init__(self, registry: ComponentRegistry | None = None):
        self.registry = registry or get_registry()

    # -------------------------------------------------------------------------
    # Foreground stack
    # -------------------------------------------------------------------------

    def _render_button_group(self, component, document: CTAConfig) -> RenderNode | None:
        try:
            return render_button_group(component, document)
        except Exception as e:
            logger.error(f"Failed to render button group {component.id}: {e}", exc_info=True)
            return None

    def render(self, document: CTAConfig | Mapping[str, Any]) -> list[RenderNode]:
        """
        Render the foreground component stack.

        Returns:
            Nodes in display order; empty for a disabled document
        """
        config = _as_config(document)
        if not config.enabled:
            return []

        nodes: list[RenderNode] = []
        for component in sorted(config.components, key=lambda c: c.order):
            if not component.visible:
                continue
            if component.type == "button_group":
                node = self._render_button_group(component, config)
            else:
                node = self.registry.render_component(component, config)
            if node is not None:
                nodes.append(node)

        if not has_button_group(config):
            legacy = render_legacy_buttons(config)
            if legacy is not None:
                nodes.append(legacy)

        return nodes

    # -------------------------------------------------------------------------
    # Screen composition
    # -------------------------------------------------------------------------

    def _fill_layer(self, config: CTAConfig) -> RenderNode | None:
        layout = config.layout
        if layout is None:
            return None

        images = []
        sizes = []
        pattern = background_pattern(layout.background_pattern)
        if pattern:
            images.append(pattern)
            sizes.append(PATTERN_SIZES.get(layout.background_pattern, "auto"))
        if layout.background_image:
            images.append(f"url({layout.background_image})")
            sizes.append("cover")
        if not images:
            return None

        return RenderNode(
            tag="div",
            class_name="cta-background-fill",
            style={
                "position": "absolute",
                "top": "0",
                "right": "0",
                "bottom": "0",
                "left": "0",
                "backgroundImage": ", ".join(images),
                "backgroundSize": ", ".join(sizes),
                "backgroundPosition": "center",
                "pointerEvents": "none",
            },
        )

    def _overlay_layer(self, config: CTAConfig) -> RenderNode | None:
        overlay = config.layout.background_overlay if config.layout else None
        if overlay is None or not overlay.enabled:
            return None

        return RenderNode(
            tag="div",
            class_name="cta-background-overlay",
            style={
                "position": "absolute",
                "top": "0",
                "right": "0",
                "bottom": "0",
                "left": "0",
                "backgroundColor": overlay.color or DEFAULT_OVERLAY_COLOR,
                "opacity": (
                    overlay.opacity if overlay.opacity is not None else DEFAULT_OVERLAY_OPACITY
                ),
                "pointerEvents": "none",
            },
        )

    def _dismiss(self, config: CTAConfig) -> RenderNode | None:
        style = config.layout.style if config.layout else "card"
        if config.settings is None or not config.settings.dismissible:
            return None
        if style in NON_DISMISSIBLE_STYLES:
            return None

        return RenderNode(
            tag="button",
            class_name="cta-dismiss",
            style={
                "position": "absolute",
                "top": "12px",
                "right": "12px",
                "background": "none",
                "border": "none",
                "fontSize": "24px",
                "cursor": "pointer",
                "opacity": 0.6,
                "padding": "4px",
                "zIndex": 2,
            },
            text="✕",
            attrs={
                "type": "button",
                "aria-label": "Close",
                "title": "Close",
                "data-action": "close",
            },
        )

    def render_screen(self, document: CTAConfig | Mapping[str, Any]) -> RenderedScreen | None:
        """
        Compose the full CTA screen.

        Returns:
            RenderedScreen, or None when the document is disabled
        """
        config = _as_config(document)
        if not config.enabled:
            return None

        settings = get_settings()
        layout = config.layout
        theme = config.theme

        style_name = layout.style if layout else "card"
        position = layout.position if layout else "center"
        width = layout.width if layout else "wide"
        gap = layout.component_gap if layout and layout.component_gap is not None else (
            settings.default_component_gap
        )

        root_style = {
            "position": "relative",
            "overflow": "hidden",
            "backgroundColor": (
                theme.background_color if theme and theme.background_color
                else settings.default_background_color
            ),
            "color": (
                theme.text_color if theme and theme.text_color
                else settings.default_text_color
            ),
        }

        layers = [
            layer
            for layer in (self._fill_layer(config), self._overlay_layer(config))
            if layer is not None
        ]

        return RenderedScreen(
            class_name=(
                f"cta-view cta-layout-{style_name} cta-position-{position} cta-width-{width}"
            ),
            style=root_style,
            layers=layers,
            components=self.render(config),
            stack_style={
                "position": "relative",
                "zIndex": 1,
                "display": "flex",
                "flexDirection": "column",
                "gap": format_px(gap),
            },
            dismiss=self._dismiss(config),
        )


_default_renderer = CTARenderer()


def render(document: CTAConfig | Mapping[str, Any]) -> list[RenderNode]:
    """Render the foreground component stack with the default registry."""
    return _default_renderer.render(document)


def render_screen(document: CTAConfig | Mapping[str, Any]) -> RenderedScreen | None:
    """Compose the full CTA screen with the default registry."""
    return _default_renderer.render_screen(document)
