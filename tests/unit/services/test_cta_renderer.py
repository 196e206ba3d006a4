"""
Unit tests for the CTA renderer.

Tests cover:
- Foreground stack ordering and visibility
- Button group vs legacy button precedence
- Per-component renderers
- Screen composition (layers, gap, dismiss)
"""

import pytest

from cta_engine.config import get_settings
from cta_engine.models.contracts.cta import CTAConfig
from cta_engine.models.contracts.cta_render import RenderNode
from cta_engine.services.component_metadata import COMPONENT_METADATA
from cta_engine.services.component_registry import (
    ComponentRegistry,
    RegistryEntry,
    get_registry,
)
from cta_engine.services.cta_components import FORM_PLACEHOLDER_TEXT
from cta_engine.services.cta_renderer import CTARenderer, render, render_screen


def _component(component_id, component_type, order, **extra):
    return {"id": component_id, "type": component_type, "order": order, **extra}


def _document(components, **extra):
    return CTAConfig.model_validate({"enabled": True, "components": components, **extra})


class TestRenderStack:
    def test_disabled_document_renders_nothing(self, sample_config_dict):
        sample_config_dict["enabled"] = False
        assert render(sample_config_dict) == []
        assert render_screen(sample_config_dict) is None

    def test_sample_document(self, sample_config):
        nodes = render(sample_config)

        assert [n.component_id for n in nodes] == ["header_1", "description_1", "features_1", None]
        assert "cta-button-group-legacy" in nodes[-1].class_name.split()

    def test_components_render_in_order_field_order(self):
        document = _document(
            [
                _component("b", "description", 2, props={"description": "second"}),
                _component("a", "description", 1, props={"description": "first"}),
            ]
        )
        assert [n.text for n in render(document)] == ["first", "second"]

    def test_invisible_components_are_skipped(self):
        document = _document(
            [
                _component("a", "divider", 1),
                _component("b", "divider", 2, visible=False),
            ]
        )
        assert [n.component_id for n in render(document)] == ["a"]

    def test_components_with_nothing_to_show_are_omitted(self):
        document = _document(
            [
                _component("a", "description", 1),
                _component("b", "feature_list", 2, props={"features": []}),
                _component("c", "richtext", 3),
            ]
        )
        assert render(document) == []

    def test_one_failing_component_does_not_stop_the_rest(self, sample_config, caplog):
        def broken(component, document):
            raise ValueError("bad description")

        entries = {t: get_registry().resolve(t) for t in get_registry().available_types()}
        entries["description"] = RegistryEntry(
            renderer=broken, schema=COMPONENT_METADATA["description"]
        )
        nodes = CTARenderer(ComponentRegistry(entries)).render(sample_config)

        assert [n.component_id for n in nodes][:2] == ["header_1", "features_1"]
        assert "Failed to render component description_1" in caplog.text


class TestButtonPrecedence:
    """A button_group always supersedes the legacy pair"""

    def _group(self, **extra):
        return _component(
            "buttons_1",
            "button_group",
            10,
            props={
                "buttons": [
                    {"id": "b1", "text": "Chat", "action": "message", "predefinedMessage": "Hi"},
                    {"id": "b2", "text": "Docs", "action": "link", "url": "https://example.com"},
                ]
            },
            **extra,
        )

    def test_group_renders_once_without_legacy_pair(self, sample_config_dict):
        sample_config_dict["components"].append(self._group())
        nodes = render(sample_config_dict)

        groups = [n for n in nodes if "cta-button-group" in n.class_name.split()]
        assert len(groups) == 1
        assert groups[0].component_id == "buttons_1"
        assert not any("cta-button-group-legacy" in n.class_name for n in nodes)

    def test_group_button_variants(self, sample_config_dict):
        sample_config_dict["components"].append(self._group())
        group = render(sample_config_dict)[-1]

        first, second = group.children
        assert first.class_name == "cta-button solid"
        assert first.attrs["data-message"] == "Hi"
        assert second.class_name == "cta-button outline"
        assert second.attrs["data-url"] == "https://example.com"

    def test_hidden_group_still_suppresses_legacy_pair(self, sample_config_dict):
        sample_config_dict["components"].append(self._group(visible=False))
        nodes = render(sample_config_dict)
        assert not any("cta-button-group" in n.class_name for n in nodes)

    def test_legacy_pair(self, sample_config):
        legacy = render(sample_config)[-1]
        primary, secondary = legacy.children

        assert primary.class_name == "cta-button solid"
        assert primary.style["backgroundColor"] == "#2563eb"
        assert primary.attrs == {
            "type": "button",
            "data-action": "message",
            "aria-label": "Start Chat",
            "data-message": "Hi! I need help.",
        }
        assert secondary.class_name == "cta-button outline"
        assert secondary.attrs["data-action"] == "close"
        assert secondary.style["border"] == "1px solid #2563eb"

    def test_no_primary_button_no_legacy_group(self):
        assert render(_document([])) == []


class TestComponentRenderers:
    def test_header(self, sample_config):
        header = render(sample_config)[0]

        assert header.class_name == "cta-header"
        assert header.component_type == "header"
        assert header.style == {"color": "#111827", "textAlign": "center", "marginBottom": "24px"}
        assert [c.text for c in header.children] == ["Welcome!", "How can we help?"]
        assert header.children[0].tag == "h1"

    def test_header_background_image(self):
        document = _document(
            [_component("h", "header", 1, props={"title": "T", "backgroundImageUrl": "bg.png"})]
        )
        header = render(document)[0]
        assert header.class_name == "cta-header cta-header-with-bg"
        assert header.style["backgroundImage"] == "url(bg.png)"

    def test_component_style_overrides_theme(self):
        document = _document(
            [_component("d", "description", 1, props={"description": "x"},
                        style={"textColor": "#ff0000"})],
            theme={"textColor": "#111111"},
        )
        assert render(document)[0].style["color"] == "#ff0000"

    def test_feature_list(self, sample_config):
        features = render(sample_config)[2]
        items = features.find("cta-feature-item")
        assert len(items) == 2
        assert [i.find("cta-feature-title")[0].text for i in items] == ["Book", "Chat"]

    def test_form_placeholder(self):
        form = render(_document([_component("f", "form", 1, props={"title": "Contact"})]))[0]
        assert form.find("cta-form-title")[0].text == "Contact"
        assert form.children[-1].text == FORM_PLACEHOLDER_TEXT

    def test_badge_shape(self):
        badges = render(
            _document(
                [
                    _component("a", "badge", 1, props={"icon": "✨", "title": "New"}),
                    _component("b", "badge", 2, props={"badgeStyle": "square"}),
                ]
            )
        )
        assert badges[0].class_name == "cta-badge badge-circle"
        assert badges[0].style["gap"] == "8px"
        assert badges[1].class_name == "cta-badge badge-square"

    def test_divider_defaults(self):
        divider = render(_document([_component("d", "divider", 1)]))[0]
        assert divider.style["backgroundColor"] == "#e5e7eb"
        assert divider.style["margin"] == "16px 0"
        assert divider.style["opacity"] == 0.5
        assert divider.style["borderStyle"] == "solid"

    def test_divider_ignores_theme_text_color(self):
        divider = render(
            _document([_component("d", "divider", 1)], theme={"textColor": "#111111"})
        )[0]
        assert "color" not in divider.style

    def test_divider_custom_color_and_spacing(self):
        divider = render(
            _document(
                [
                    _component(
                        "d", "divider", 1,
                        props={"dividerColor": "#00ff00", "dividerStyle": "dashed"},
                        style={"marginTop": 4, "opacity": 1},
                    )
                ]
            )
        )[0]
        assert divider.style["borderColor"] == "#00ff00"
        assert divider.style["borderStyle"] == "dashed"
        assert divider.style["marginTop"] == "4px"
        assert divider.style["opacity"] == 1

    @pytest.mark.parametrize(
        "props,expected",
        [
            ({}, {"display": "flex", "flexDirection": "column", "gap": "16px"}),
            ({"layout": "row"}, {"display": "flex", "flexDirection": "row", "gap": "16px"}),
            ({"layout": "grid", "columns": 2},
             {"display": "grid", "gridTemplateColumns": "repeat(2, 1fr)", "gap": "16px"}),
        ],
    )
    def test_container_layouts(self, props, expected):
        container = render(_document([_component("c", "container", 1, props=props)]))[0]
        assert expected.items() <= container.style.items()
        assert container.style["width"] == "100%"

    def test_container_explicit_gap(self):
        container = render(
            _document([_component("c", "container", 1, style={"gap": 0})])
        )[0]
        assert container.style["gap"] == "0px"

    def test_custom_html_is_sanitized(self):
        node = render(
            _document(
                [_component("h", "custom_html", 1,
                            props={"htmlContent": "<p onclick='x()'>Hi</p><script>x()</script>"})]
            )
        )[0]
        assert node.class_name == "cta-custom-html"
        assert node.html == "<p>Hi</p>"

    def test_richtext_is_sanitized(self):
        node = render(
            _document([_component("r", "richtext", 1, props={"htmlContent": "<em>ok</em><iframe></iframe>"})])
        )[0]
        assert node.html == "<em>ok</em>"

    def test_sanitizing_can_be_disabled(self, monkeypatch):
        monkeypatch.setenv("CTA_SANITIZE_CUSTOM_HTML", "false")
        get_settings.cache_clear()
        node = render(
            _document([_component("h", "custom_html", 1, props={"htmlContent": "<b onclick='x'>b</b>"})])
        )[0]
        assert node.html == "<b onclick='x'>b</b>"


class TestRenderScreen:
    def test_root(self, sample_config):
        screen = render_screen(sample_config)

        assert screen.class_name == (
            "cta-view cta-layout-card cta-position-center cta-width-wide"
        )
        assert screen.style["backgroundColor"] == "#ffffff"
        assert screen.style["color"] == "#111827"
        assert len(screen.components) == 4

    def test_component_gap(self, sample_config):
        assert render_screen(sample_config).stack_style["gap"] == "24px"

    def test_default_gap(self):
        assert render_screen(_document([])).stack_style["gap"] == "16px"

    def test_no_background_no_layers(self, sample_config):
        assert render_screen(sample_config).layers == []

    def test_fill_then_overlay(self):
        screen = render_screen(
            _document(
                [],
                layout={
                    "backgroundPattern": "dots",
                    "backgroundImage": "https://example.com/bg.png",
                    "backgroundOverlay": {"enabled": True, "opacity": 0.3},
                },
            )
        )

        fill, overlay = screen.layers
        assert fill.class_name == "cta-background-fill"
        assert fill.style["backgroundImage"].startswith("radial-gradient(circle")
        assert fill.style["backgroundImage"].endswith("url(https://example.com/bg.png)")
        assert fill.style["backgroundSize"] == "20px 20px, cover"
        assert overlay.class_name == "cta-background-overlay"
        assert overlay.style["opacity"] == 0.3
        assert overlay.style["backgroundColor"] == "#000000"

    def test_disabled_overlay_is_not_painted(self):
        screen = render_screen(
            _document(
                [],
                layout={"backgroundImage": "bg.png",
                        "backgroundOverlay": {"enabled": False, "opacity": 0.9}},
            )
        )
        assert [layer.class_name for layer in screen.layers] == ["cta-background-fill"]

    def test_overlay_default_opacity(self):
        screen = render_screen(
            _document([], layout={"backgroundOverlay": {"enabled": True, "color": "#123456"}})
        )
        assert screen.layers[0].style["opacity"] == 0.5
        assert screen.layers[0].style["backgroundColor"] == "#123456"

    def test_dismiss_shown_for_dismissible_card(self, sample_config):
        dismiss = render_screen(sample_config).dismiss
        assert dismiss.attrs["data-action"] == "close"
        assert dismiss.text == "✕"

    @pytest.mark.parametrize("style", ["banner", "sidebar"])
    def test_no_dismiss_for_banner_or_sidebar(self, sample_config_dict, style):
        sample_config_dict["layout"]["style"] = style
        assert render_screen(sample_config_dict).dismiss is None

    def test_no_dismiss_without_settings(self, sample_config_dict):
        del sample_config_dict["settings"]
        assert render_screen(sample_config_dict).dismiss is None

    def test_no_dismiss_when_not_dismissible(self, sample_config_dict):
        sample_config_dict["settings"]["dismissible"] = False
        assert render_screen(sample_config_dict).dismiss is None


class TestRenderNode:
    def test_find_matches_class_tokens(self):
        node = RenderNode(
            tag="div",
            class_name="outer",
            children=[RenderNode(tag="span", class_name="inner-item"),
                      RenderNode(tag="span", class_name="inner")],
        )
        assert [n.tag for n in node.find("inner")] == ["span"]
        assert node.find("outer") == [node]
