"""
Style Mapper

Converts a component's style override record into concrete CSS properties:
- Numeric spacing and typography fields render in pixels ("10px")
- Colors, flex/grid keywords and unitless numbers pass through verbatim
- Gradients and background patterns are synthesized, never stored

Every function here is pure.
"""

import logging
from typing import Any, Mapping
from urllib.parse import quote

from pydantic.alias_generators import to_camel

from cta_engine.models.contracts.cta import ComponentStyle, GradientStyle

logger = logging.getLogger(__name__)

CSSValue = str | int | float
ConcreteStyle = dict[str, CSSValue]

# (style key, css property, kind). Order is the emission order; textColor
# comes after color so an explicit textColor wins.
#   "str": emitted when a non-empty string
#   "num": emitted verbatim when present
#   "px":  emitted as "<n>px" when present
_STYLE_FIELDS: tuple[tuple[str, str, str], ...] = (
    # Colors & opacity
    ("backgroundColor", "backgroundColor", "str"),
    ("color", "color", "str"),
    ("textColor", "color", "str"),
    ("borderColor", "borderColor", "str"),
    ("opacity", "opacity", "num"),
    # Borders
    ("border", "border", "str"),
    ("borderWidth", "borderWidth", "num"),
    ("borderRadius", "borderRadius", "num"),
    ("borderStyle", "borderStyle", "str"),
    # Shadows & effects
    ("boxShadow", "boxShadow", "str"),
    ("textShadow", "textShadow", "str"),
    ("filter", "filter", "str"),
    # Spacing
    ("padding", "padding", "px"),
    ("paddingTop", "paddingTop", "px"),
    ("paddingRight", "paddingRight", "px"),
    ("paddingBottom", "paddingBottom", "px"),
    ("paddingLeft", "paddingLeft", "px"),
    ("margin", "margin", "px"),
    ("marginTop", "marginTop", "px"),
    ("marginRight", "marginRight", "px"),
    ("marginBottom", "marginBottom", "px"),
    ("marginLeft", "marginLeft", "px"),
    ("gap", "gap", "px"),
    # Typography
    ("fontSize", "fontSize", "px"),
    ("fontWeight", "fontWeight", "num"),
    ("fontStyle", "fontStyle", "str"),
    ("lineHeight", "lineHeight", "num"),
    ("letterSpacing", "letterSpacing", "px"),
    ("textAlign", "textAlign", "str"),
    ("textDecoration", "textDecoration", "str"),
    ("textTransform", "textTransform", "str"),
    ("wordBreak", "wordBreak", "str"),
    ("whiteSpace", "whiteSpace", "str"),
    # Sizing
    ("width", "width", "str"),
    ("height", "height", "str"),
    ("minWidth", "minWidth", "str"),
    ("minHeight", "minHeight", "str"),
    ("maxWidth", "maxWidth", "str"),
    ("maxHeight", "maxHeight", "str"),
    ("aspectRatio", "aspectRatio", "str"),
    # Display & flex
    ("display", "display", "str"),
    ("flexDirection", "flexDirection", "str"),
    ("flexWrap", "flexWrap", "str"),
    ("flexGrow", "flexGrow", "num"),
    ("flexShrink", "flexShrink", "num"),
    ("flexBasis", "flexBasis", "str"),
    ("flex", "flex", "str"),
    ("alignItems", "alignItems", "str"),
    ("alignContent", "alignContent", "str"),
    ("justifyContent", "justifyContent", "str"),
    ("alignSelf", "alignSelf", "str"),
    # Grid
    ("gridTemplateColumns", "gridTemplateColumns", "str"),
    ("gridTemplateRows", "gridTemplateRows", "str"),
    ("gridAutoFlow", "gridAutoFlow", "str"),
    ("gridAutoColumns", "gridAutoColumns", "str"),
    ("gridAutoRows", "gridAutoRows", "str"),
    ("gridGap", "gridGap", "px"),
    ("gridColumnGap", "gridColumnGap", "px"),
    ("gridRowGap", "gridRowGap", "px"),
    ("gridColumn", "gridColumn", "str"),
    ("gridRow", "gridRow", "str"),
    # Positioning
    ("position", "position", "str"),
    ("top", "top", "str"),
    ("right", "right", "str"),
    ("bottom", "bottom", "str"),
    ("left", "left", "str"),
    ("zIndex", "zIndex", "num"),
    # Overflow
    ("overflow", "overflow", "str"),
    ("overflowX", "overflowX", "str"),
    ("overflowY", "overflowY", "str"),
    # Transforms
    ("transform", "transform", "str"),
    ("transformOrigin", "transformOrigin", "str"),
    # Transitions & interaction
    ("transition", "transition", "str"),
    ("cursor", "cursor", "str"),
    # Background
    ("backgroundSize", "backgroundSize", "str"),
    ("backgroundPosition", "backgroundPosition", "str"),
    ("backgroundRepeat", "backgroundRepeat", "str"),
    ("backgroundAttachment", "backgroundAttachment", "str"),
)

DEFAULT_PATTERN_COLOR = "rgba(0, 0, 0, 0.1)"

PATTERN_NAMES: tuple[str, ...] = ("dots", "grid", "waves", "stripes")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_px(value: int | float) -> str:
    """Render a number in pixels, dropping a redundant ".0"."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}px"


def _normalize(style: ComponentStyle | Mapping[str, Any] | None) -> dict[str, Any]:
    """Bring any accepted style input into a camelCase dict."""
    if style is None:
        return {}
    if isinstance(style, ComponentStyle):
        return style.model_dump(by_alias=True, exclude_none=True)
    if not isinstance(style, Mapping):
        logger.warning(f"Ignoring style of unsupported type {type(style).__name__}")
        return {}
    normalized: dict[str, Any] = {}
    for key, value in style.items():
        if not isinstance(key, str):
            continue
        normalized[to_camel(key) if "_" in key else key] = value
    return normalized


def apply_style(style: ComponentStyle | Mapping[str, Any] | None) -> ConcreteStyle:
    """
    Convert a style override record into concrete CSS properties.

    Args:
        style: A ComponentStyle, a plain dict (camelCase or snake_case keys), or None

    Returns:
        Dict of CSS properties keyed by camelCase property name. Empty input
        yields an empty dict; unknown fields and values of the wrong type are
        skipped.
    """
    values = _normalize(style)
    if not values:
        return {}

    css: ConcreteStyle = {}
    for key, prop, kind in _STYLE_FIELDS:
        value = values.get(key)
        if value is None:
            continue
        if kind == "str":
            if isinstance(value, str) and value:
                css[prop] = value
        elif kind == "num":
            if _is_number(value):
                css[prop] = value
        elif kind == "px":
            if _is_number(value):
                css[prop] = format_px(value)

    gradient = values.get("gradient")
    if isinstance(gradient, (Mapping, GradientStyle)):
        gradient_values = _normalize(gradient)
        if gradient_values.get("enabled"):
            gradient_css = build_gradient(gradient_values)
            if gradient_css:
                css["backgroundImage"] = gradient_css

    return css


def build_gradient(gradient: GradientStyle | Mapping[str, Any]) -> str | None:
    """
    Build a CSS gradient.

    Linear is the default type with a 90 degree default angle. Returns None
    when either color stop is missing.
    """
    values = _normalize(gradient)
    start = values.get("startColor")
    end = values.get("endColor")
    if not start or not end:
        return None

    if values.get("type") == "radial":
        return f"radial-gradient(circle, {start}, {end})"

    angle = values.get("angle")
    if not _is_number(angle):
        angle = 90
    if isinstance(angle, float) and angle.is_integer():
        angle = int(angle)
    return f"linear-gradient({angle}deg, {start}, {end})"


def background_pattern(pattern: str | None, color: str | None = None) -> str | None:
    """
    Build a CSS background image for a pattern from the fixed catalog.

    Args:
        pattern: One of "dots", "grid", "waves", "stripes" ("none" or unknown -> None)
        color: Pattern color (defaults to a faint black)
    """
    if not pattern or pattern == "none":
        return None

    c = color or DEFAULT_PATTERN_COLOR

    if pattern == "dots":
        return f"radial-gradient(circle, {c} 1px, transparent 1px)"
    if pattern == "grid":
        return (
            f"linear-gradient(0deg, {c} 1px, transparent 1px), "
            f"linear-gradient(90deg, {c} 1px, transparent 1px)"
        )
    if pattern == "waves":
        encoded = quote(c, safe="~()*!.'")
        return (
            "url(\"data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
            "viewBox='0 0 1200 120'%3E%3Cpath d='M0,50 Q300,0 600,50 T1200,50 "
            f"L1200,120 L0,120 Z' fill='{encoded}'/%3E%3C/svg%3E\")"
        )
    if pattern == "stripes":
        return (
            f"repeating-linear-gradient(45deg, transparent, transparent 10px, "
            f"{c} 10px, {c} 20px)"
        )

    logger.warning(f"Unknown background pattern: {pattern}")
    return None


def compose_style(*layers: Mapping[str, CSSValue] | None) -> ConcreteStyle:
    """Merge concrete styles left to right; later layers win."""
    composed: ConcreteStyle = {}
    for layer in layers:
        if layer:
            composed.update(layer)
    return composed
