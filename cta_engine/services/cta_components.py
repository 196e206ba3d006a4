"""
CTA Component Renderers

One function per component type, each turning a component into a RenderNode.
Every renderer takes `(component, document)` and returns a node or None
(nothing to show, e.g. a description without text).

Theme defaults sit underneath the component's own style overrides. Divider,
badge, container, richtext and custom_html derive extra values from their
props (line color and margin, shape class, layout, sanitized markup).

Button groups and the legacy primary/secondary pair are rendered here too,
but they are dispatched by the renderer, not the registry.
"""

import logging
from typing import Any

from cta_engine.config import get_settings
from cta_engine.models.contracts.cta import (
    BadgeComponent,
    ButtonGroupComponent,
    ContainerComponent,
    CTAButton,
    CTAConfig,
    CTASecondaryButton,
    CustomHtmlComponent,
    DescriptionComponent,
    DividerComponent,
    FeatureListComponent,
    FormComponent,
    HeaderComponent,
    RichTextComponent,
)
from cta_engine.models.contracts.cta_render import RenderNode
from cta_engine.services.html_sanitizer import sanitize_html
from cta_engine.services.style_mapper import ConcreteStyle, apply_style, compose_style, format_px

logger = logging.getLogger(__name__)

FORM_PLACEHOLDER_TEXT = "Form component - Coming soon"


# -----------------------------------------------------------------------------
# Shared helpers
# -----------------------------------------------------------------------------


def theme_defaults(document: CTAConfig) -> ConcreteStyle:
    """Component-level defaults taken from the document theme."""
    theme = document.theme
    if theme is None or not theme.text_color:
        return {}
    return {"color": theme.text_color}


def primary_color(document: CTAConfig) -> str:
    theme = document.theme
    if theme is not None and theme.primary_color:
        return theme.primary_color
    return get_settings().default_primary_color


def _component_style(component: Any, document: CTAConfig) -> ConcreteStyle:
    return compose_style(theme_defaults(document), apply_style(component.style))


def _root(component: Any, class_name: str, style: ConcreteStyle, **kwargs) -> RenderNode:
    return RenderNode(
        tag=kwargs.pop("tag", "div"),
        component_id=component.id,
        component_type=component.type,
        class_name=class_name,
        style=style,
        **kwargs,
    )


def _markup(html: str | None) -> str:
    settings = get_settings()
    if not settings.sanitize_custom_html:
        return html or ""
    return sanitize_html(html, max_length=settings.max_html_length)


# -----------------------------------------------------------------------------
# Uniform renderers
# -----------------------------------------------------------------------------


def render_header(component: HeaderComponent, document: CTAConfig) -> RenderNode:
    props = component.props
    style = _component_style(component, document)
    class_name = "cta-header"
    if props.background_image_url:
        class_name = "cta-header cta-header-with-bg"
        style["backgroundImage"] = f"url({props.background_image_url})"

    children = []
    if props.title:
        children.append(RenderNode(tag="h1", class_name="cta-header-title", text=props.title))
    if props.subtitle:
        children.append(
            RenderNode(tag="p", class_name="cta-header-subtitle", text=props.subtitle)
        )
    return _root(component, class_name, style, children=children)


def render_description(
    component: DescriptionComponent, document: CTAConfig
) -> RenderNode | None:
    props = component.props
    if not props.description:
        return None

    style = _component_style(component, document)
    class_name = "cta-description"
    if props.background_image_url:
        class_name = "cta-description cta-description-with-bg"
        style["backgroundImage"] = f"url({props.background_image_url})"
    return _root(component, class_name, style, text=props.description)


def render_feature_list(
    component: FeatureListComponent, document: CTAConfig
) -> RenderNode | None:
    features = component.props.features or []
    if not features:
        return None

    items = []
    for feature in features:
        children = []
        if feature.icon:
            children.append(
                RenderNode(tag="span", class_name="cta-feature-icon", text=feature.icon)
            )
        if feature.title:
            children.append(
                RenderNode(tag="div", class_name="cta-feature-title", text=feature.title)
            )
        if feature.description:
            children.append(
                RenderNode(
                    tag="div",
                    class_name="cta-feature-description",
                    text=feature.description,
                )
            )
        items.append(
            RenderNode(
                tag="div",
                class_name="cta-feature-item",
                style=apply_style(feature.style),
                children=children,
            )
        )

    return _root(
        component,
        "cta-feature-list",
        _component_style(component, document),
        children=items,
    )


def render_form(component: FormComponent, document: CTAConfig) -> RenderNode:
    # No form fields yet; shows a placeholder.
    props = component.props
    children = []
    if props.title:
        children.append(RenderNode(tag="h3", class_name="cta-form-title", text=props.title))
    children.append(
        RenderNode(
            tag="p",
            style={"textAlign": "center", "color": "#999", "fontSize": "14px"},
            text=FORM_PLACEHOLDER_TEXT,
        )
    )
    return _root(component, "cta-form", _component_style(component, document), children=children)


# -----------------------------------------------------------------------------
# Renderers with derived props
# -----------------------------------------------------------------------------


def render_badge(component: BadgeComponent, document: CTAConfig) -> RenderNode:
    props = component.props
    shape = props.badge_style or "circle"
    style = compose_style(
        _component_style(component, document),
        {
            "display": "flex",
            "flexDirection": "column",
            "alignItems": "center",
            "justifyContent": "center",
            "gap": "8px",
        },
    )

    children = []
    if props.icon:
        children.append(
            RenderNode(
                tag="div",
                class_name="badge-icon",
                style={"fontSize": "32px", "lineHeight": 1},
                text=props.icon,
            )
        )
    if props.title:
        children.append(
            RenderNode(
                tag="div",
                class_name="badge-title",
                style={"fontWeight": 600, "fontSize": "14px"},
                text=props.title,
            )
        )
    if props.description:
        children.append(
            RenderNode(
                tag="div",
                class_name="badge-description",
                style={"fontSize": "12px", "opacity": 0.8},
                text=props.description,
            )
        )
    return _root(component, f"cta-badge badge-{shape}", style, children=children)


def render_divider(component: DividerComponent, document: CTAConfig) -> RenderNode:
    # The theme text color is not a line color, so only overrides apply here.
    props = component.props
    custom = apply_style(component.style)
    line_color = (
        custom.get("borderColor")
        or custom.get("color")
        or props.divider_color
        or get_settings().default_divider_color
    )

    style: ConcreteStyle = {
        "width": "100%",
        "height": "1px",
        "backgroundColor": line_color,
        "borderStyle": props.divider_style or "solid",
        "borderColor": line_color,
        "borderWidth": "1px 0 0 0",
        "opacity": custom.get("opacity", 0.5),
    }
    if "margin" not in custom:
        style["margin"] = "16px 0"
    style.update(custom)
    return _root(component, "cta-divider", style)


def render_container(component: ContainerComponent, document: CTAConfig) -> RenderNode:
    props = component.props
    layout = props.layout or "column"
    columns = props.columns or 3
    raw_gap = component.style.gap if component.style else None
    gap = format_px(raw_gap) if raw_gap is not None else "16px"

    if layout == "grid":
        layout_style: ConcreteStyle = {
            "display": "grid",
            "gridTemplateColumns": f"repeat({columns}, 1fr)",
            "gap": gap,
        }
    else:
        layout_style = {
            "display": "flex",
            "flexDirection": "row" if layout == "row" else "column",
            "gap": gap,
        }

    style = compose_style(
        _component_style(component, document), layout_style, {"width": "100%"}
    )
    return _root(component, f"cta-container cta-container-{layout}", style)


def render_richtext(component: RichTextComponent, document: CTAConfig) -> RenderNode | None:
    content = component.props.html_content
    if not content:
        return None
    style = compose_style(_component_style(component, document), {"width": "100%"})
    return _root(component, "cta-richtext", style, html=_markup(content))


def render_custom_html(component: CustomHtmlComponent, document: CTAConfig) -> RenderNode:
    return _root(
        component,
        "cta-custom-html",
        _component_style(component, document),
        html=_markup(component.props.html_content),
    )


# -----------------------------------------------------------------------------
# Buttons (dispatched by the renderer, not the registry)
# -----------------------------------------------------------------------------


def _variant_style(variant: str, color: str) -> ConcreteStyle:
    if variant == "outline":
        return {
            "backgroundColor": "transparent",
            "color": color,
            "border": f"1px solid {color}",
        }
    if variant == "ghost":
        return {"backgroundColor": "transparent", "color": color, "border": "none"}
    return {"backgroundColor": color, "color": "#ffffff", "border": "none"}


def render_button(
    button: CTAButton | CTASecondaryButton,
    document: CTAConfig,
    default_variant: str = "solid",
) -> RenderNode:
    """Render one action button. Its action travels in data-* attributes."""
    variant = getattr(button, "variant", None) or default_variant
    action_label = getattr(button, "action_label", None)

    attrs = {
        "type": "button",
        "data-action": button.action,
        "aria-label": action_label or button.text,
    }
    if action_label:
        attrs["title"] = action_label
    if button.action == "link" and button.url:
        attrs["data-url"] = button.url
    message = getattr(button, "predefined_message", None)
    if button.action == "message" and message:
        attrs["data-message"] = message

    style = compose_style(
        _variant_style(variant, primary_color(document)),
        apply_style(getattr(button, "style", None)),
    )
    return RenderNode(
        tag="button",
        class_name=f"cta-button {variant}",
        style=style,
        text=button.text,
        attrs=attrs,
    )


def render_button_group(component: ButtonGroupComponent, document: CTAConfig) -> RenderNode:
    """Render a button_group component; the first button is the primary action."""
    buttons = component.props.buttons or []
    children = [
        render_button(button, document, default_variant="solid" if i == 0 else "outline")
        for i, button in enumerate(buttons)
    ]
    return _root(
        component,
        "cta-button-group",
        apply_style(component.style),
        children=children,
    )


def render_legacy_buttons(document: CTAConfig) -> RenderNode | None:
    """Render the legacy top-level primary/secondary pair, if there is a primary."""
    if document.primary_button is None:
        return None

    children = [render_button(document.primary_button, document)]
    if document.secondary_button is not None:
        children.append(
            render_button(document.secondary_button, document, default_variant="outline")
        )
    return RenderNode(
        tag="div",
        class_name="cta-button-group cta-button-group-legacy",
        children=children,
    )
