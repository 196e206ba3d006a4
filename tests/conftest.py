"""
Pytest fixtures for CTA engine tests.

This module provides:
1. Settings isolation (environment-driven settings cache is reset per test)
2. Common document fixtures (JSON form and validated form)
3. Editor fixtures
"""

from typing import Any

import pytest

from cta_engine.config import get_settings
from cta_engine.models.contracts.cta import CTAConfig
from cta_engine.services.component_editor import ComponentEditor


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch):
    """Give every test fresh settings with no CTA_* overrides."""
    monkeypatch.setenv("CTA_ENVIRONMENT", "testing")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_config_dict() -> dict[str, Any]:
    """A small enabled document in its JSON (camelCase) form."""
    return {
        "version": "1.0",
        "enabled": True,
        "layout": {"style": "card", "position": "center", "width": "wide", "componentGap": 24},
        "theme": {"primaryColor": "#2563eb", "backgroundColor": "#ffffff", "textColor": "#111827"},
        "settings": {"dismissible": True},
        "components": [
            {
                "id": "header_1",
                "type": "header",
                "order": 1,
                "visible": True,
                "props": {"title": "Welcome!", "subtitle": "How can we help?"},
                "style": {"textAlign": "center", "marginBottom": 24},
            },
            {
                "id": "description_1",
                "type": "description",
                "order": 2,
                "visible": True,
                "props": {"description": "We answer in minutes."},
            },
            {
                "id": "features_1",
                "type": "feature_list",
                "order": 3,
                "visible": True,
                "props": {
                    "features": [
                        {"icon": "📅", "title": "Book", "description": "Schedule a call"},
                        {"icon": "💬", "title": "Chat", "description": "Talk to us"},
                    ]
                },
            },
        ],
        "primaryButton": {
            "id": "btn_1",
            "text": "Start Chat",
            "variant": "solid",
            "action": "message",
            "predefinedMessage": "Hi! I need help.",
        },
        "secondaryButton": {"id": "btn_2", "text": "Not now", "action": "close"},
    }


@pytest.fixture
def sample_config(sample_config_dict) -> CTAConfig:
    """The sample document, validated."""
    return CTAConfig.model_validate(sample_config_dict)


@pytest.fixture
def editor(sample_config) -> ComponentEditor:
    """Editor over the sample document."""
    return ComponentEditor(sample_config)


@pytest.fixture
def empty_editor() -> ComponentEditor:
    """Editor over an enabled document with no components."""
    return ComponentEditor({"enabled": True, "components": []})
