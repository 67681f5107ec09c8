import pytest
from pydantic import ValidationError

from src.utils.config_loader import DEFAULT_BACKEND_URL, load_settings


def test_defaults_when_environment_is_empty():
    settings = load_settings({})

    assert settings.backend_url == DEFAULT_BACKEND_URL
    assert settings.internal_api_key is None
    assert settings.has_api_key is False
    assert settings.port == 8080
    assert settings.public_base_url == "http://localhost:8080"
    assert settings.integrations_mode == "real"
    assert settings.payments.enabled is False
    assert settings.payments.price == "$0.50"


def test_environment_overrides():
    settings = load_settings(
        {
            "CLOUDFLARE_BACKEND": "https://pool.internal/",
            "INTERNAL_API_KEY": "k",
            "PORT": "9000",
            "BASE_URL": "https://public.example.com/",
            "INTEGRATIONS_MODE": "MOCK",
            "PAYMENTS_ENABLED": "true",
            "FACILITATOR_URL": "https://facilitator.test/",
        }
    )

    assert settings.backend_url == "https://pool.internal"
    assert settings.internal_api_key == "k"
    assert settings.port == 9000
    assert settings.public_base_url == "https://public.example.com"
    assert settings.integrations_mode == "mock"
    assert settings.payments.enabled is True
    assert settings.payments.facilitator_url == "https://facilitator.test"


def test_invalid_port_fails_fast():
    with pytest.raises(ValidationError):
        load_settings({"PORT": "eighty"})


def test_settings_are_immutable():
    settings = load_settings({"INTERNAL_API_KEY": "k"})
    with pytest.raises(ValidationError):
        settings.internal_api_key = "other"


def test_non_ascii_api_key_fails_fast():
    with pytest.raises(ValidationError):
        load_settings({"INTERNAL_API_KEY": "clé"})
