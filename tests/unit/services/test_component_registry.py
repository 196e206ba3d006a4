"""
Unit tests for the component type registry.

Tests cover:
- The closed set of registered types
- Resolution to renderer + schema
- Failure containment in render_component
"""

from cta_engine.models.contracts.cta import CTAConfig, HeaderComponent
from cta_engine.models.contracts.cta_render import RenderNode
from cta_engine.services.component_metadata import COMPONENT_METADATA
from cta_engine.services.component_registry import (
    ComponentRegistry,
    RegistryEntry,
    get_registry,
)

REGISTERED = [
    "header",
    "description",
    "feature_list",
    "form",
    "badge",
    "divider",
    "container",
    "richtext",
    "custom_html",
]


class TestRegistryLookup:
    """Closed mapping from type tag to renderer and schema"""

    def test_available_types(self):
        assert get_registry().available_types() == REGISTERED

    def test_every_registered_type_is_valid(self):
        registry = get_registry()
        assert all(registry.is_valid_type(t) for t in REGISTERED)

    def test_button_group_and_menu_are_outside_the_registry(self):
        registry = get_registry()
        assert registry.is_valid_type("button_group") is False
        assert registry.is_valid_type("menu") is False
        assert registry.resolve("button_group") is None

    def test_resolve_returns_renderer_and_schema(self):
        entry = get_registry().resolve("divider")
        assert isinstance(entry, RegistryEntry)
        assert callable(entry.renderer)
        assert entry.schema is COMPONENT_METADATA["divider"]

    def test_unknown_type_resolves_to_none(self):
        assert get_registry().resolve("carousel") is None


class TestRenderComponent:
    """Per-component failures never escape"""

    def test_unregistered_type_warns_and_renders_nothing(self, caplog):
        registry = ComponentRegistry({})
        component = HeaderComponent(id="h1", order=1)
        assert registry.render_component(component, CTAConfig(enabled=True)) is None
        assert "Unknown CTA component type: header" in caplog.text

    def test_renderer_exception_is_contained(self, caplog):
        def broken(component, document):
            raise RuntimeError("boom")

        registry = ComponentRegistry(
            {"header": RegistryEntry(renderer=broken, schema=COMPONENT_METADATA["header"])}
        )
        component = HeaderComponent(id="h1", order=1)
        assert registry.render_component(component, CTAConfig(enabled=True)) is None
        assert "Failed to render component h1 (header): boom" in caplog.text

    def test_dispatches_to_registered_renderer(self):
        calls = []

        def fake(component, document):
            calls.append((component.id, document.version))
            return RenderNode(tag="div", component_id=component.id)

        registry = ComponentRegistry(
            {"header": RegistryEntry(renderer=fake, schema=COMPONENT_METADATA["header"])}
        )
        node = registry.render_component(HeaderComponent(id="h1", order=1), CTAConfig())
        assert node.component_id == "h1"
        assert calls == [("h1", "1.0")]
