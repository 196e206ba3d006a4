"""
Component Metadata

Property-schema descriptors for each component type: which fields the
property editor shows, grouped by category, plus the default props and
style a freshly added component may be seeded with.

Field keys are wire (camelCase) names. Content fields live under a
component's `props`; appearance and layout fields live under its `style`
unless the key is not a style field (e.g. a badge's `badgeStyle`).
"""

import logging

from cta_engine.models.contracts.cta_schema import (
    ComponentTypeMetadata,
    PropertyFieldDefinition,
    PropertyGroup,
    SelectOption,
)

logger = logging.getLogger(__name__)


def _field(kind: str, label: str, **kwargs) -> PropertyFieldDefinition:
    return PropertyFieldDefinition(kind=kind, label=label, **kwargs)


def _options(*pairs: tuple[str, str]) -> list[SelectOption]:
    return [SelectOption(value=value, label=label) for value, label in pairs]


def _spacing(label: str, max_value: float = 100) -> PropertyFieldDefinition:
    return _field("number", label, min=0, max=max_value, step=4)


# -----------------------------------------------------------------------------
# Shared field sets
# -----------------------------------------------------------------------------


def _text_fields() -> dict[str, PropertyFieldDefinition]:
    return {
        "textColor": _field(
            "color", "Text Color",
            description="Override theme text color for this component",
        ),
        "fontSize": _field("number", "Font Size", min=10, max=72, step=1),
        "fontWeight": _field("number", "Font Weight", min=100, max=900, step=100),
        "textAlign": _field(
            "select", "Text Align",
            options=_options(
                ("left", "Left"), ("center", "Center"),
                ("right", "Right"), ("justify", "Justify"),
            ),
        ),
    }


def _layout_fields() -> dict[str, PropertyFieldDefinition]:
    return {
        "display": _field(
            "select", "Display",
            options=_options(
                ("block", "Block"), ("flex", "Flex"),
                ("grid", "Grid"), ("inline-block", "Inline Block"),
            ),
        ),
        "flexDirection": _field(
            "select", "Flex Direction",
            options=_options(
                ("row", "Row (horizontal)"),
                ("column", "Column (vertical)"),
                ("row-reverse", "Row Reverse"),
                ("column-reverse", "Column Reverse"),
            ),
        ),
        "gap": _spacing("Gap (px)"),
        "padding": _spacing("Padding (px)"),
        "marginBottom": _spacing("Margin Bottom (px)"),
    }


def _background_fields() -> dict[str, PropertyFieldDefinition]:
    return {
        "backgroundColor": _field(
            "color", "Background Color", description="Override theme background color"
        ),
    }


# -----------------------------------------------------------------------------
# Per-type metadata
# -----------------------------------------------------------------------------

_HEADER = ComponentTypeMetadata(
    type="header",
    label="Header",
    icon="📋",
    description="Title and subtitle section",
    default_props={"title": "Welcome!", "subtitle": "How can we help you today?"},
    default_style={"textAlign": "center", "marginBottom": 24},
    property_groups=[
        PropertyGroup(
            category="content",
            label="Content",
            properties={
                "title": _field(
                    "text", "Title", required=True, max_length=100,
                    placeholder="Enter title...",
                ),
                "subtitle": _field(
                    "textarea", "Subtitle", max_length=200,
                    placeholder="Enter subtitle...",
                ),
            },
        ),
        PropertyGroup(
            category="appearance",
            label="Appearance",
            properties={**_text_fields(), **_background_fields()},
        ),
        PropertyGroup(category="layout", label="Layout", properties=_layout_fields()),
    ],
)

_DESCRIPTION = ComponentTypeMetadata(
    type="description",
    label="Description",
    icon="📝",
    description="Text paragraph section",
    default_props={"description": "Add your description here..."},
    default_style={"marginBottom": 16},
    property_groups=[
        PropertyGroup(
            category="content",
            label="Content",
            properties={
                "description": _field(
                    "textarea", "Description", required=True, max_length=500,
                    placeholder="Enter description...",
                ),
            },
        ),
        PropertyGroup(
            category="appearance",
            label="Appearance",
            properties={
                **_text_fields(),
                **_background_fields(),
                "lineHeight": _field("number", "Line Height", min=1, max=3, step=0.1),
            },
        ),
        PropertyGroup(category="layout", label="Layout", properties=_layout_fields()),
    ],
)

_FEATURE_LIST = ComponentTypeMetadata(
    type="feature_list",
    label="Feature List",
    icon="⭐",
    description="Grid or list of features with icons",
    default_props={
        "features": [
            {"icon": "📅", "title": "Feature 1", "description": "Description 1"},
            {"icon": "💬", "title": "Feature 2", "description": "Description 2"},
            {"icon": "🎯", "title": "Feature 3", "description": "Description 3"},
        ]
    },
    default_style={
        "display": "grid",
        "gridTemplateColumns": "repeat(3, 1fr)",
        "gap": 20,
        "marginBottom": 32,
    },
    property_groups=[
        PropertyGroup(
            category="content",
            label="Content",
            properties={
                "features": _field(
                    "array", "Features",
                    description="List of features to display",
                    properties={
                        "icon": _field("text", "Icon (emoji)", max_length=10, placeholder="📅"),
                        "title": _field("text", "Title", required=True, max_length=50),
                        "description": _field("textarea", "Description", max_length=150),
                    },
                ),
            },
        ),
        PropertyGroup(
            category="appearance",
            label="Appearance",
            properties={**_text_fields(), **_background_fields()},
        ),
        PropertyGroup(
            category="layout",
            label="Layout",
            properties={
                "display": _field(
                    "select", "Display",
                    options=_options(("grid", "Grid"), ("flex", "Flex (list)")),
                ),
                "gridTemplateColumns": _field(
                    "text", "Grid Columns",
                    description='e.g., "repeat(3, 1fr)" for 3 columns',
                    placeholder="repeat(3, 1fr)",
                ),
                "gap": _spacing("Gap (px)"),
            },
        ),
    ],
)

_FORM = ComponentTypeMetadata(
    type="form",
    label="Form",
    icon="📨",
    description="Contact form (coming soon)",
    default_props={"title": "Get in touch"},
    property_groups=[
        PropertyGroup(
            category="content",
            label="Content",
            properties={
                "title": _field("text", "Title", max_length=100),
                "description": _field("textarea", "Description", max_length=300),
            },
        ),
    ],
)

_BUTTON_GROUP = ComponentTypeMetadata(
    type="button_group",
    label="Button Group",
    icon="🔘",
    description="Group of action buttons",
    default_props={
        "buttons": [
            {
                "id": "btn_1",
                "text": "Click me",
                "variant": "solid",
                "action": "message",
                "predefinedMessage": "Hello!",
            }
        ]
    },
    default_style={
        "display": "flex",
        "flexDirection": "row",
        "gap": 12,
        "justifyContent": "center",
    },
    property_groups=[
        PropertyGroup(
            category="content",
            label="Content",
            properties={
                "buttons": _field(
                    "array", "Buttons",
                    description="Action buttons in this group",
                    properties={
                        "text": _field("text", "Button Text", required=True, max_length=50),
                        "variant": _field(
                            "select", "Style",
                            options=_options(
                                ("solid", "Solid"), ("outline", "Outline"), ("ghost", "Ghost")
                            ),
                        ),
                        "action": _field(
                            "select", "Action",
                            options=_options(
                                ("message", "Send Message"),
                                ("link", "Open Link"),
                                ("close", "Close"),
                                ("custom", "Custom"),
                            ),
                        ),
                        "predefinedMessage": _field(
                            "textarea", "Message to Send",
                            description='For "Send Message" action', max_length=200,
                        ),
                        "url": _field(
                            "text", "URL",
                            description='For "Open Link" action', placeholder="https://...",
                        ),
                    },
                ),
            },
        ),
        PropertyGroup(
            category="layout",
            label="Layout",
            properties={
                "flexDirection": _field(
                    "select", "Direction",
                    options=_options(
                        ("row", "Horizontal (row)"), ("column", "Vertical (column)")
                    ),
                ),
                "gap": _spacing("Gap (px)", max_value=50),
                "justifyContent": _field(
                    "select", "Alignment",
                    options=_options(
                        ("flex-start", "Start"),
                        ("center", "Center"),
                        ("flex-end", "End"),
                        ("space-between", "Space Between"),
                    ),
                ),
            },
        ),
    ],
)

_BADGE = ComponentTypeMetadata(
    type="badge",
    label="Badge",
    icon="🏷️",
    description="Small label or tag",
    default_props={"icon": "✨"},
    default_style={"padding": 8, "borderRadius": 12},
    property_groups=[
        PropertyGroup(
            category="content",
            label="Content",
            properties={
                "title": _field(
                    "text", "Text", required=True, max_length=30,
                    placeholder="Badge text...",
                ),
                "icon": _field("text", "Icon (emoji)", max_length=10, placeholder="✨"),
            },
        ),
        PropertyGroup(
            category="appearance",
            label="Appearance",
            properties={
                **_text_fields(),
                **_background_fields(),
                "badgeStyle": _field(
                    "select", "Style",
                    options=_options(
                        ("circle", "Circle"), ("rounded", "Rounded"), ("square", "Square")
                    ),
                ),
            },
        ),
    ],
)

_DIVIDER = ComponentTypeMetadata(
    type="divider",
    label="Divider",
    icon="➖",
    description="Horizontal line separator",
    default_style={"marginTop": 16, "marginBottom": 16},
    property_groups=[
        PropertyGroup(
            category="appearance",
            label="Appearance",
            properties={
                "dividerStyle": _field(
                    "select", "Style",
                    options=_options(
                        ("solid", "Solid"), ("dashed", "Dashed"), ("dotted", "Dotted")
                    ),
                ),
                "dividerColor": _field("color", "Color"),
                "borderWidth": _field("number", "Thickness (px)", min=1, max=10, step=1),
            },
        ),
        PropertyGroup(
            category="layout",
            label="Layout",
            properties={
                "marginTop": _spacing("Margin Top (px)"),
                "marginBottom": _spacing("Margin Bottom (px)"),
            },
        ),
    ],
)

_CONTAINER = ComponentTypeMetadata(
    type="container",
    label="Container",
    icon="📦",
    description="Layout wrapper for grouping components",
    default_props={"layout": "column"},
    default_style={"padding": 16},
    property_groups=[
        PropertyGroup(
            category="layout",
            label="Layout",
            properties={
                "layout": _field(
                    "select", "Layout Type",
                    options=_options(
                        ("column", "Column (vertical)"),
                        ("row", "Row (horizontal)"),
                        ("grid", "Grid"),
                    ),
                ),
                "columns": _field(
                    "number", "Grid Columns",
                    description="For grid layout only", min=1, max=6, step=1,
                ),
                "gap": _spacing("Gap (px)"),
                "padding": _spacing("Padding (px)"),
            },
        ),
        PropertyGroup(
            category="appearance",
            label="Appearance",
            properties={
                **_background_fields(),
                "borderRadius": _field(
                    "number", "Border Radius (px)", min=0, max=50, step=4
                ),
            },
        ),
    ],
)

_CUSTOM_HTML = ComponentTypeMetadata(
    type="custom_html",
    label="Custom HTML",
    icon="⚙️",
    description="Custom HTML content (edit in JSON only)",
    default_props={"htmlContent": "<div>Custom HTML here</div>"},
    property_groups=[
        PropertyGroup(
            category="content",
            label="Content",
            properties={
                "htmlContent": _field(
                    "textarea", "HTML Content",
                    description="Warning: HTML is sanitized for security",
                    max_length=5000,
                    placeholder="<div>Your HTML here</div>",
                ),
            },
        ),
    ],
)

_RICHTEXT = ComponentTypeMetadata(
    type="richtext",
    label="Rich Text",
    icon="📄",
    description="Rich formatted text (edit in JSON only)",
    default_props={"htmlContent": "<p>Rich text content</p>"},
    property_groups=[
        PropertyGroup(
            category="content",
            label="Content",
            properties={
                "htmlContent": _field(
                    "textarea", "HTML Content",
                    max_length=5000,
                    placeholder="<p>Your content here</p>",
                ),
            },
        ),
    ],
)

COMPONENT_METADATA: dict[str, ComponentTypeMetadata] = {
    meta.type: meta
    for meta in (
        _HEADER,
        _DESCRIPTION,
        _FEATURE_LIST,
        _FORM,
        _BUTTON_GROUP,
        _BADGE,
        _DIVIDER,
        _CONTAINER,
        _CUSTOM_HTML,
        _RICHTEXT,
    )
}


def get_component_metadata(component_type: str) -> ComponentTypeMetadata | None:
    """Get editor metadata for a component type, or None when it has none."""
    metadata = COMPONENT_METADATA.get(component_type)
    if metadata is None:
        logger.error(f"No property metadata for component type: {component_type}")
    return metadata


def all_component_metadata() -> list[ComponentTypeMetadata]:
    """All metadata entries, in palette order."""
    return list(COMPONENT_METADATA.values())
