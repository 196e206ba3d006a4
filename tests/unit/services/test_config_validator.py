"""
Unit tests for the configuration validator.

Tests cover:
- validate_config / ensure_valid_config
- deep_merge semantics
- Hand-edited text round-trip
- Component ordering (order_components)
- normalize_config and default_config
"""

import json

import pytest

from cta_engine.core.exceptions import ConfigValidationError
from cta_engine.models.contracts.cta import config_to_dict
from cta_engine.services.config_validator import (
    apply_config_text,
    deep_merge,
    default_config,
    dump_config_text,
    ensure_valid_config,
    normalize_config,
    order_components,
    restamp_orders,
    validate_config,
)


class TestValidateConfig:
    def test_valid_document(self, sample_config_dict):
        result = validate_config(sample_config_dict)
        assert result.ok is True
        assert result.errors == []
        assert result.config.components[0].props.title == "Welcome!"

    def test_validated_model_is_accepted(self, sample_config):
        result = validate_config(sample_config)
        assert result.ok is True
        assert config_to_dict(result.config) == config_to_dict(sample_config)
        assert result.config is not sample_config

    def test_unknown_style_key_is_rejected(self, sample_config_dict):
        sample_config_dict["components"][0]["style"]["sparkle"] = True
        result = validate_config(sample_config_dict)

        assert result.ok is False
        assert result.config is None
        assert any(e["path"].endswith("style.sparkle") for e in result.errors)
        assert "sparkle" in result.message

    def test_unknown_component_type_is_rejected(self, sample_config_dict):
        sample_config_dict["components"][0]["type"] = "carousel"
        result = validate_config(sample_config_dict)
        assert result.ok is False

    def test_duplicate_component_ids_are_rejected(self, sample_config_dict):
        sample_config_dict["components"][1]["id"] = "header_1"
        result = validate_config(sample_config_dict)
        assert result.ok is False
        assert "Duplicate component id: header_1" in result.message

    def test_out_of_range_gap_is_rejected(self, sample_config_dict):
        sample_config_dict["layout"]["componentGap"] = 500
        result = validate_config(sample_config_dict)
        assert result.ok is False
        assert result.errors[0]["path"] == "layout.componentGap"

    def test_non_object_candidate(self):
        result = validate_config(["not", "a", "document"])
        assert result.ok is False
        assert result.message == "Configuration must be a JSON object"

    def test_props_keep_unknown_keys(self, sample_config_dict):
        """Stored documents may carry props only some types read"""
        sample_config_dict["components"][1]["props"]["title"] = "Legacy title"
        result = validate_config(sample_config_dict)
        assert result.ok is True
        dumped = config_to_dict(result.config)
        assert dumped["components"][1]["props"]["title"] == "Legacy title"


class TestEnsureValidConfig:
    def test_raises_with_structured_errors(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            ensure_valid_config({"components": [{"id": "x", "type": "header"}]})

        assert exc_info.value.errors
        assert exc_info.value.message.startswith("Invalid configuration:")

    def test_returns_config(self, sample_config_dict):
        assert ensure_valid_config(sample_config_dict).enabled is True


class TestDeepMerge:
    def test_nested_records_merge(self):
        assert deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}}) == {"a": {"x": 1, "y": 3}}

    def test_lists_are_replaced_wholesale(self):
        assert deep_merge({"a": {"z": [9]}}, {"a": {"z": [1, 2]}}) == {"a": {"z": [1, 2]}}

    def test_scalar_replaces_record(self):
        assert deep_merge({"a": {"x": 1}}, {"a": None}) == {"a": None}

    def test_record_replaces_scalar(self):
        assert deep_merge({"a": 1}, {"a": {"x": 1}}) == {"a": {"x": 1}}

    def test_inputs_are_not_mutated(self):
        base = {"a": {"x": 1, "list": [1]}, "b": 2}
        patch = {"a": {"x": 5, "list": [2]}, "c": {"d": 1}}
        merged = deep_merge(base, patch)

        assert base == {"a": {"x": 1, "list": [1]}, "b": 2}
        assert patch == {"a": {"x": 5, "list": [2]}, "c": {"d": 1}}
        merged["c"]["d"] = 99
        assert patch["c"]["d"] == 1


class TestTextRoundTrip:
    def test_dump_is_camel_case_json(self, sample_config):
        text = dump_config_text(sample_config)
        data = json.loads(text)
        assert data["layout"]["componentGap"] == 24
        assert "primaryButton" in data
        assert text.startswith("{\n  ")

    def test_dump_then_apply_is_identity(self, sample_config):
        result = apply_config_text(dump_config_text(sample_config), sample_config)
        assert result.ok is True
        assert config_to_dict(result.config) == config_to_dict(sample_config)

    def test_partial_text_merges_over_base(self, sample_config):
        result = apply_config_text('{"layout": {"style": "modal"}}', sample_config)

        assert result.ok is True
        assert result.config.layout.style == "modal"
        assert result.config.layout.component_gap == 24
        assert len(result.config.components) == 3

    def test_malformed_text_reports_error(self, sample_config):
        before = sample_config.model_copy(deep=True)
        result = apply_config_text('{"layout": {"style": ', sample_config)

        assert result.ok is False
        assert result.message.startswith("Invalid JSON at line 1")
        assert sample_config == before

    def test_non_object_text_reports_error(self, sample_config):
        result = apply_config_text("[1, 2, 3]", sample_config)
        assert result.ok is False
        assert result.message == "Configuration text must be a JSON object"

    def test_schema_violation_in_text(self, sample_config):
        result = apply_config_text('{"layout": {"style": "floating"}}', sample_config)
        assert result.ok is False
        assert result.errors[0]["path"] == "layout.style"

    def test_text_components_take_their_stored_order(self, sample_config):
        text = json.dumps(
            {
                "components": [
                    {"id": "late", "type": "divider", "order": 7},
                    {"id": "early", "type": "divider", "order": 3},
                ]
            }
        )
        result = apply_config_text(text, sample_config)

        assert result.ok is True
        assert [(c.id, c.order) for c in result.config.components] == [("early", 1), ("late", 2)]


class TestNormalizeConfig:
    def test_enabled_defaults_to_true(self):
        assert normalize_config({})["enabled"] is True
        assert normalize_config({"enabled": False})["enabled"] is False

    def test_secondary_button_defaults(self):
        normalized = normalize_config(
            {"secondaryButton": {"id": "b2", "text": "More", "action": "link"}}
        )
        assert normalized["secondaryButton"]["url"] == "#"

        normalized = normalize_config({"secondaryButton": {"id": "b2", "text": "Later"}})
        assert normalized["secondaryButton"]["action"] == "none"

    def test_orders_are_restamped_in_stored_order(self):
        normalized = normalize_config(
            {
                "components": [
                    {"id": "c", "type": "divider", "order": 30},
                    {"id": "a", "type": "header", "order": 2},
                    {"id": "b", "type": "form", "order": 7},
                ]
            }
        )
        assert [(c["id"], c["order"]) for c in normalized["components"]] == [
            ("a", 1),
            ("b", 2),
            ("c", 3),
        ]
        assert validate_config(normalized).ok is True

    def test_input_is_not_mutated(self):
        data = {"components": [{"id": "a", "type": "header", "order": 5}]}
        normalize_config(data)
        assert data["components"][0]["order"] == 5

    def test_restamp_orders_on_models(self, sample_config):
        reversed_components = list(reversed(sample_config.components))
        stamped = restamp_orders(reversed_components)
        assert [c.order for c in stamped] == [1, 2, 3]
        assert stamped[0].id == "features_1"
        assert sample_config.components[0].order == 1


class TestDefaultConfig:
    def test_default_document(self):
        config = default_config()
        assert config.version == "1.0"
        assert config.enabled is False
        assert config.components == []
        assert config.layout.style == "card"
        assert config.layout.position == "center"
        assert config.primary_button.text == "Start Chat"
        assert config.primary_button.predefined_message == "Hi! I need help."


class TestOrderComponents:
    def test_sorted_and_restamped(self):
        ordered = order_components(
            [
                {"id": "b", "type": "divider", "order": 2},
                {"id": "a", "type": "divider", "order": 1},
            ]
        )
        assert [(c["id"], c["order"]) for c in ordered] == [("a", 1), ("b", 2)]

    def test_ties_keep_position_and_missing_orders_go_last(self):
        ordered = order_components(
            [
                {"id": "x", "type": "divider"},
                {"id": "a", "type": "divider", "order": 4},
                {"id": "b", "type": "divider", "order": 4},
            ]
        )
        assert [c["id"] for c in ordered] == ["a", "b", "x"]
        assert [c["order"] for c in ordered] == [1, 2, 3]

    def test_models(self, sample_config):
        shuffled = [
            c.model_copy(update={"order": o})
            for c, o in zip(sample_config.components, [9, 5, 1])
        ]
        ordered = order_components(shuffled)
        assert [c.id for c in ordered] == ["features_1", "description_1", "header_1"]
        assert [c.order for c in ordered] == [1, 2, 3]

    def test_non_component_entries_left_for_validation(self):
        components = [{"id": "a", "type": "divider", "order": 3}, "junk"]
        assert order_components(components) == components
