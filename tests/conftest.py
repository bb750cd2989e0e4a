# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - breach_payload   → a realistic breach-API body
# - clean_env        → strips leakview variables from the environment
# - app_config       → AppConfig pointing at tmp_path, with a token
# (FakeSession / FakeResponse live in helpers.py)
# ==============================================

import pytest

from leakview.config import AppConfig, ApiConfig, HandoffConfig, TrackingConfig, reset_config


ENV_VARS = (
    "LEAKVIEW_API_URL",
    "LEAKOSINT_API_KEY",
    "LEAKVIEW_SEARCH_LIMIT",
    "LEAKVIEW_SEARCH_LANG",
    "LEAKVIEW_TIMEOUT_SECONDS",
    "DISCORD_WEBHOOK_URL",
    "LEAKVIEW_HANDOFF_DIR",
    "LEAKVIEW_SITE_NAME",
)


@pytest.fixture
def breach_payload():
    """A body shaped like the breach API: sources with nested data arrays."""
    return {
        "List": {
            "Adobe": {
                "Data": [
                    {"Email": "john@example.com", "Password": "hunter2", "Hint": "n/a"},
                ],
                "InfoLeak": "In October 2013, 153 million Adobe accounts were breached.",
                "NumOfResults": 1,
            },
        },
        "NumOfDatabase": 1,
        "NumOfResults": 1,
        "price": 0.002,
        "search time": 0.12,
    }


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield monkeypatch
    reset_config()


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(
        api=ApiConfig(base_url="https://api.test/", token="secret-token"),
        tracking=TrackingConfig(webhook_url=None),
        handoff=HandoffConfig(storage_dir=str(tmp_path / "handoff")),
    )
