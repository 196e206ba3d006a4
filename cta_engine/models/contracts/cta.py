"""
CTA Configuration Contracts

Pydantic models for the CTA (call-to-action) configuration document.

This module is the single source of truth for:
- The style override record (ComponentStyle)
- Component types and their props (HeaderComponent, FeatureListComponent, etc.)
- The document root (CTAConfig) with layout, theme, settings and legacy buttons

Python attributes are snake_case. The JSON form stored by callers is camelCase
("backgroundColor", "componentGap"); both spellings are accepted on input.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# -----------------------------------------------------------------------------
# Literal Types
# -----------------------------------------------------------------------------

ComponentType = Literal[
    "header",
    "description",
    "form",
    "button_group",
    "feature_list",
    "badge",
    "divider",
    "container",
    "richtext",
    "custom_html",
]

COMPONENT_TYPES: tuple[str, ...] = (
    "header",
    "description",
    "form",
    "button_group",
    "feature_list",
    "badge",
    "divider",
    "container",
    "richtext",
    "custom_html",
)

LayoutStyle = Literal["banner", "card", "modal", "sidebar"]

LayoutPosition = Literal["top", "center", "bottom"]

LayoutWidth = Literal["full", "wide", "narrow"]

BackgroundPattern = Literal["none", "dots", "grid", "waves", "stripes"]

ButtonVariant = Literal["solid", "outline", "ghost"]

ButtonAction = Literal["message", "link", "close", "custom"]

SecondaryButtonAction = Literal["close", "link", "none"]

BadgeShape = Literal["circle", "rounded", "square"]

DividerStyle = Literal["solid", "dashed", "dotted"]

ContainerLayout = Literal["column", "row", "grid"]

OverflowValue = Literal["visible", "hidden", "scroll", "auto"]


# -----------------------------------------------------------------------------
# Base Models
# -----------------------------------------------------------------------------


class CTAModel(BaseModel):
    """Base for CTA contracts: camelCase wire names, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictCTAModel(CTAModel):
    """CTA contract that rejects unknown fields."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class PropsBase(CTAModel):
    """
    Base for component props.

    Every field is optional so a freshly added component validates with empty
    props. Unknown keys are kept as-is, older stored documents carry fields
    (e.g. "title" on every component) that only some types read.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


# -----------------------------------------------------------------------------
# Style Override Record
# -----------------------------------------------------------------------------


class GradientStyle(StrictCTAModel):
    """Gradient fill, synthesized into a CSS background image."""

    enabled: bool = Field(description="Whether the gradient is applied")
    type: Literal["linear", "radial"] | None = Field(
        default=None, description="Gradient type (linear when absent)"
    )
    angle: float | None = Field(
        default=None, description="Angle in degrees for linear gradients (default 90)"
    )
    start_color: str | None = Field(default=None, description="First color stop")
    end_color: str | None = Field(default=None, description="Last color stop")


class ComponentStyle(StrictCTAModel):
    """
    Per-component style overrides.

    An absent field means "inherit the default", never zero.
    """

    # Colors & opacity
    background_color: str | None = None
    color: str | None = Field(default=None, description="Text color (alias for textColor)")
    text_color: str | None = None
    border_color: str | None = None
    opacity: float | None = Field(default=None, ge=0, le=1)

    # Borders
    border_width: float | None = None
    border_radius: float | None = None
    border_style: Literal[
        "solid", "dashed", "dotted", "double", "groove", "ridge", "inset", "outset"
    ] | None = None
    border: str | None = Field(default=None, description='Shorthand, e.g. "1px solid #ccc"')

    # Shadows & effects
    box_shadow: str | None = None
    text_shadow: str | None = None
    filter: str | None = None

    # Spacing (pixels)
    padding: float | None = None
    padding_top: float | None = None
    padding_right: float | None = None
    padding_bottom: float | None = None
    padding_left: float | None = None
    margin: float | None = None
    margin_top: float | None = None
    margin_right: float | None = None
    margin_bottom: float | None = None
    margin_left: float | None = None
    gap: float | None = None

    # Typography
    font_size: float | None = None
    font_weight: int | None = None
    font_style: Literal["normal", "italic", "oblique"] | None = None
    line_height: float | None = None
    letter_spacing: float | None = None
    text_align: Literal["left", "center", "right", "justify"] | None = None
    text_decoration: Literal["none", "underline", "overline", "line-through"] | None = None
    text_transform: Literal["none", "uppercase", "lowercase", "capitalize"] | None = None
    word_break: Literal["normal", "break-all", "keep-all", "break-word"] | None = None
    white_space: Literal["normal", "nowrap", "pre", "pre-wrap", "pre-line"] | None = None

    # Sizing
    width: str | None = None
    height: str | None = None
    min_width: str | None = None
    min_height: str | None = None
    max_width: str | None = None
    max_height: str | None = None
    aspect_ratio: str | None = None

    # Display & flex
    display: Literal[
        "block", "inline", "inline-block", "flex", "inline-flex", "grid", "inline-grid", "none"
    ] | None = None
    flex_direction: Literal["row", "row-reverse", "column", "column-reverse"] | None = None
    flex_wrap: Literal["wrap", "nowrap", "wrap-reverse"] | None = None
    flex_grow: float | None = None
    flex_shrink: float | None = None
    flex_basis: str | None = None
    flex: str | None = Field(default=None, description='Shorthand, e.g. "1 1 auto"')
    align_items: Literal["flex-start", "flex-end", "center", "stretch", "baseline"] | None = None
    align_content: Literal[
        "flex-start", "flex-end", "center", "space-between", "space-around",
        "space-evenly", "stretch",
    ] | None = None
    justify_content: Literal[
        "flex-start", "flex-end", "center", "space-between", "space-around", "space-evenly"
    ] | None = None
    align_self: Literal[
        "auto", "flex-start", "flex-end", "center", "stretch", "baseline"
    ] | None = None

    # Grid
    grid_template_columns: str | None = None
    grid_template_rows: str | None = None
    grid_auto_flow: Literal["row", "column", "dense"] | None = None
    grid_auto_columns: str | None = None
    grid_auto_rows: str | None = None
    grid_gap: float | None = None
    grid_column_gap: float | None = None
    grid_row_gap: float | None = None
    grid_column: str | None = None
    grid_row: str | None = None

    # Positioning
    position: Literal["static", "relative", "absolute", "fixed", "sticky"] | None = None
    top: str | None = None
    right: str | None = None
    bottom: str | None = None
    left: str | None = None
    z_index: int | None = None

    # Overflow
    overflow: OverflowValue | None = None
    overflow_x: OverflowValue | None = None
    overflow_y: OverflowValue | None = None

    # Transforms
    transform: str | None = None
    transform_origin: str | None = None

    # Transitions & interaction
    transition: str | None = None
    cursor: Literal[
        "auto", "pointer", "default", "text", "wait", "help", "move",
        "not-allowed", "grab", "grabbing",
    ] | None = None

    # Background
    background_size: Literal["auto", "cover", "contain"] | None = None
    background_position: str | None = None
    background_repeat: Literal["repeat", "no-repeat", "repeat-x", "repeat-y"] | None = None
    background_attachment: Literal["scroll", "fixed", "local"] | None = None

    # Gradient
    gradient: GradientStyle | None = None


# -----------------------------------------------------------------------------
# Buttons
# -----------------------------------------------------------------------------


class CTAButton(CTAModel):
    """Action button, used in button groups and as the legacy primary button."""

    id: str = Field(description="Button identifier")
    text: str = Field(description="Button label")
    variant: ButtonVariant | None = Field(
        default=None, description="Visual variant (solid for a lead button, outline after)"
    )
    action: ButtonAction = Field(default="message", description="What a click does")
    predefined_message: str | None = Field(
        default=None, description="Message sent when action is 'message'"
    )
    url: str | None = Field(default=None, description="Target when action is 'link'")
    action_label: str | None = Field(default=None, description="Accessible label")
    style: ComponentStyle | None = Field(default=None, description="Button style overrides")


class CTASecondaryButton(CTAModel):
    """Legacy top-level secondary button."""

    id: str = Field(description="Button identifier")
    text: str = Field(description="Button label")
    action: SecondaryButtonAction = Field(description="What a click does")
    url: str | None = Field(default=None, description="Target when action is 'link'")


# -----------------------------------------------------------------------------
# Component Props Models
# -----------------------------------------------------------------------------


class HeaderProps(PropsBase):
    """Props for header component."""

    title: str | None = None
    subtitle: str | None = None
    background_image_url: str | None = None


class DescriptionProps(PropsBase):
    """Props for description component."""

    description: str | None = None
    background_image_url: str | None = None


class FeatureItem(CTAModel):
    """A single entry of a feature list."""

    icon: str | None = Field(default=None, description="Icon (usually an emoji)")
    title: str = Field(description="Feature title")
    description: str = Field(description="Feature description")
    style: ComponentStyle | None = None


class FeatureListProps(PropsBase):
    """Props for feature_list component."""

    features: list[FeatureItem] | None = None


class FormProps(PropsBase):
    """Props for form component (placeholder, no fields yet)."""

    title: str | None = None
    description: str | None = None


class ButtonGroupProps(PropsBase):
    """Props for button_group component."""

    buttons: list[CTAButton] | None = None


class BadgeProps(PropsBase):
    """Props for badge component."""

    icon: str | None = None
    title: str | None = None
    description: str | None = None
    badge_style: BadgeShape | None = None


class DividerProps(PropsBase):
    """Props for divider component."""

    divider_style: DividerStyle | None = None
    divider_color: str | None = None


class ContainerProps(PropsBase):
    """Props for container component."""

    layout: ContainerLayout | None = None
    columns: int | None = Field(default=None, ge=1, description="Grid columns (grid layout)")


class RichTextProps(PropsBase):
    """Props for richtext component."""

    html_content: str | None = None


class CustomHtmlProps(PropsBase):
    """Props for custom_html component."""

    html_content: str | None = None


# -----------------------------------------------------------------------------
# Component Models
# -----------------------------------------------------------------------------


class ComponentBase(StrictCTAModel):
    """Base fields shared by all components."""

    id: str = Field(description="Unique component identifier within the document")
    order: int = Field(description="1-based position in the document")
    visible: bool = Field(default=True, description="Whether the component renders")
    style: ComponentStyle | None = Field(default=None, description="Style overrides")


class HeaderComponent(ComponentBase):
    """Title and subtitle section."""

    type: Literal["header"] = Field(default="header", description="Component type")
    props: HeaderProps = Field(default_factory=HeaderProps)


class DescriptionComponent(ComponentBase):
    """Text paragraph section."""

    type: Literal["description"] = Field(default="description", description="Component type")
    props: DescriptionProps = Field(default_factory=DescriptionProps)


class FeatureListComponent(ComponentBase):
    """Grid or list of features with icons."""

    type: Literal["feature_list"] = Field(default="feature_list", description="Component type")
    props: FeatureListProps = Field(default_factory=FeatureListProps)


class FormComponent(ComponentBase):
    """Form placeholder."""

    type: Literal["form"] = Field(default="form", description="Component type")
    props: FormProps = Field(default_factory=FormProps)


class ButtonGroupComponent(ComponentBase):
    """Group of action buttons."""

    type: Literal["button_group"] = Field(default="button_group", description="Component type")
    props: ButtonGroupProps = Field(default_factory=ButtonGroupProps)


class BadgeComponent(ComponentBase):
    """Icon with optional text."""

    type: Literal["badge"] = Field(default="badge", description="Component type")
    props: BadgeProps = Field(default_factory=BadgeProps)


class DividerComponent(ComponentBase):
    """Horizontal separator."""

    type: Literal["divider"] = Field(default="divider", description="Component type")
    props: DividerProps = Field(default_factory=DividerProps)


class ContainerComponent(ComponentBase):
    """Layout wrapper (column, row or grid)."""

    type: Literal["container"] = Field(default="container", description="Component type")
    props: ContainerProps = Field(default_factory=ContainerProps)


class RichTextComponent(ComponentBase):
    """Rich formatted text."""

    type: Literal["richtext"] = Field(default="richtext", description="Component type")
    props: RichTextProps = Field(default_factory=RichTextProps)


class CustomHtmlComponent(ComponentBase):
    """Sanitized custom markup."""

    type: Literal["custom_html"] = Field(default="custom_html", description="Component type")
    props: CustomHtmlProps = Field(default_factory=CustomHtmlProps)


# -----------------------------------------------------------------------------
# Discriminated Union of All Components
# -----------------------------------------------------------------------------

CTAComponent = Annotated[
    Union[
        HeaderComponent,
        DescriptionComponent,
        FeatureListComponent,
        FormComponent,
        ButtonGroupComponent,
        BadgeComponent,
        DividerComponent,
        ContainerComponent,
        RichTextComponent,
        CustomHtmlComponent,
    ],
    Field(discriminator="type"),
]


# -----------------------------------------------------------------------------
# Document Sections
# -----------------------------------------------------------------------------


class BackgroundOverlay(CTAModel):
    """Translucent layer painted between the background fill and the components."""

    enabled: bool = Field(default=False, description="Whether the overlay paints")
    color: str | None = Field(default=None, description="Overlay color")
    opacity: float | None = Field(default=None, ge=0, le=1, description="Overlay opacity")


class CTALayout(CTAModel):
    """Screen-level layout settings."""

    style: LayoutStyle = Field(default="card", description="Presentation style")
    position: LayoutPosition = Field(default="center", description="Vertical position")
    width: LayoutWidth = Field(default="wide", description="Width preset")
    component_gap: float | None = Field(
        default=None, ge=0, le=100, description="Gap between components in pixels"
    )
    background_image: str | None = Field(default=None, description="Background image URL")
    background_pattern: BackgroundPattern | None = Field(
        default=None, description="Background pattern from the fixed catalog"
    )
    background_overlay: BackgroundOverlay | None = Field(
        default=None, description="Overlay above the background fill"
    )


class CTATheme(CTAModel):
    """Theme colors applied as defaults under per-component overrides."""

    primary_color: str | None = None
    background_color: str | None = None
    text_color: str | None = None
    accent_color: str | None = None


class CTASettings(CTAModel):
    """Behavior settings."""

    auto_show_after_seconds: float | None = None
    dismissible: bool = True
    show_once_per_session: bool = False


class CTAGeneration(CTAModel):
    """Provenance of an AI-generated document."""

    prompt: str
    model: str
    timestamp: str


class CTAConfig(CTAModel):
    """
    The CTA configuration document.

    `primary_button`/`secondary_button` are the legacy representation of the
    screen's actions. A `button_group` component supersedes them whenever one
    is present.
    """

    version: str = Field(default="1.0", description="Document version")
    enabled: bool = Field(default=False, description="Whether the CTA screen shows")
    layout: CTALayout | None = None
    components: list[CTAComponent] = Field(default_factory=list)
    primary_button: CTAButton | None = Field(
        default=None, description="Legacy primary button (use a button_group component)"
    )
    secondary_button: CTASecondaryButton | None = Field(
        default=None, description="Legacy secondary button (use a button_group component)"
    )
    theme: CTATheme | None = None
    generated_by: CTAGeneration | None = None
    settings: CTASettings | None = None

    @model_validator(mode="after")
    def check_unique_component_ids(self) -> "CTAConfig":
        seen: set[str] = set()
        for component in self.components:
            if component.id in seen:
                raise ValueError(f"Duplicate component id: {component.id}")
            seen.add(component.id)
        return self


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def config_to_dict(config: CTAConfig) -> dict[str, Any]:
    """Dump a document to its JSON form (camelCase keys, absent fields omitted)."""
    return config.model_dump(mode="json", by_alias=True, exclude_none=True)


def has_button_group(config: CTAConfig) -> bool:
    """Check whether the document carries a button_group component."""
    return any(c.type == "button_group" for c in config.components)
