"""
HTML Writer

Serializes rendered CTA trees into an HTML fragment with inline styles.
Text and attribute values are escaped; sanitized markup (RenderNode.html)
is embedded as-is.
"""

import html
import logging
import re
from typing import Any, Mapping

from cta_engine.models.contracts.cta import CTAConfig
from cta_engine.models.contracts.cta_render import RenderedScreen, RenderNode
from cta_engine.services.cta_renderer import render_screen

logger = logging.getLogger(__name__)

VOID_TAGS = frozenset({"br", "hr", "img"})

_UPPER = re.compile(r"(?<!^)([A-Z])")


def css_property_name(name: str) -> str:
    """camelCase style key -> kebab-case CSS property ("backgroundColor" -> "background-color")."""
    if name.startswith("--"):
        return name
    return _UPPER.sub(r"-\1", name).lower()


def style_to_css(style: Mapping[str, Any]) -> str:
    """Inline CSS declaration list for a style dict."""
    declarations = []
    for key, value in style.items():
        if value is None or value == "":
            continue
        declarations.append(f"{css_property_name(key)}: {value}")
    return "; ".join(declarations)


def _open_tag(tag: str, class_name: str, style: Mapping[str, Any], attrs: Mapping[str, str]) -> str:
    parts = [tag]
    if class_name:
        parts.append(f'class="{html.escape(class_name, quote=True)}"')
    css = style_to_css(style)
    if css:
        parts.append(f'style="{html.escape(css, quote=True)}"')
    for name, value in attrs.items():
        parts.append(f'{name}="{html.escape(str(value), quote=True)}"')
    return "<" + " ".join(parts) + ">"


def node_to_html(node: RenderNode) -> str:
    """Serialize one node and its children."""
    attrs = dict(node.attrs)
    if node.component_id:
        attrs.setdefault("data-component-id", node.component_id)

    opening = _open_tag(node.tag, node.class_name, node.style, attrs)
    if node.tag in VOID_TAGS:
        return opening

    inner = []
    if node.text is not None:
        inner.append(html.escape(node.text))
    if node.html:
        inner.append(node.html)
    inner.extend(node_to_html(child) for child in node.children)
    return f"{opening}{''.join(inner)}</{node.tag}>"


def screen_to_html(screen: RenderedScreen) -> str:
    """Serialize a composed screen: layers, then the component stack, then dismiss."""
    body = [node_to_html(layer) for layer in screen.layers]
    stack = "".join(node_to_html(node) for node in screen.components)
    body.append(f"{_open_tag('div', 'cta-stack', screen.stack_style, {})}{stack}</div>")
    if screen.dismiss is not None:
        body.append(node_to_html(screen.dismiss))
    return f"{_open_tag('div', screen.class_name, screen.style, {})}{''.join(body)}</div>"


def render_html(document: CTAConfig | Mapping[str, Any]) -> str:
    """
    Render a document to an HTML fragment.

    Returns:
        The fragment, or "" for a disabled document
    """
    screen = render_screen(document)
    if screen is None:
        logger.debug("Document disabled, nothing to render")
        return ""
    return screen_to_html(screen)
