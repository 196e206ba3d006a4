"""
CTA Engine Models

Pydantic contracts:
    from cta_engine.models import CTAConfig, ComponentStyle
    from cta_engine.models.contracts.cta import CTAConfig  # Granular access

Editor metadata and render output:
    from cta_engine.models import ComponentTypeMetadata, RenderNode
"""

from cta_engine.models.contracts.cta import (
    COMPONENT_TYPES,
    BackgroundOverlay,
    BadgeComponent,
    ButtonGroupComponent,
    ComponentStyle,
    ContainerComponent,
    CTAButton,
    CTAComponent,
    CTAConfig,
    CTAGeneration,
    CTALayout,
    CTASecondaryButton,
    CTASettings,
    CTATheme,
    CustomHtmlComponent,
    DescriptionComponent,
    DividerComponent,
    FeatureItem,
    FeatureListComponent,
    FormComponent,
    GradientStyle,
    HeaderComponent,
    RichTextComponent,
    config_to_dict,
    has_button_group,
)
from cta_engine.models.contracts.cta_render import RenderedScreen, RenderNode
from cta_engine.models.contracts.cta_schema import (
    PROPERTY_CATEGORIES,
    ComponentTypeMetadata,
    PropertyFieldDefinition,
    PropertyGroup,
    SelectOption,
)

__all__ = [
    "COMPONENT_TYPES",
    "PROPERTY_CATEGORIES",
    "BackgroundOverlay",
    "BadgeComponent",
    "ButtonGroupComponent",
    "ComponentStyle",
    "ComponentTypeMetadata",
    "ContainerComponent",
    "CTAButton",
    "CTAComponent",
    "CTAConfig",
    "CTAGeneration",
    "CTALayout",
    "CTASecondaryButton",
    "CTASettings",
    "CTATheme",
    "CustomHtmlComponent",
    "DescriptionComponent",
    "DividerComponent",
    "FeatureItem",
    "FeatureListComponent",
    "FormComponent",
    "GradientStyle",
    "HeaderComponent",
    "PropertyFieldDefinition",
    "PropertyGroup",
    "RenderNode",
    "RenderedScreen",
    "RichTextComponent",
    "SelectOption",
    "config_to_dict",
    "has_button_group",
]
