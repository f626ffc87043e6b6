"""Tests for config/settings.py."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from config.settings import Settings, get_settings


class TestSettings:
    @pytest.mark.unit()
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.resource_backend == "kubernetes"
        assert settings.kubeconfig_path is None
        assert settings.in_cluster is False
        assert settings.request_timeout_seconds == 30.0
        assert settings.store_retry_attempts == 3
        assert settings.field_manager == "elastic-operator"
        assert settings.log_level == "INFO"

    @pytest.mark.unit()
    def test_env_overrides(self) -> None:
        env = {
            "RESOURCE_BACKEND": "memory",
            "IN_CLUSTER": "true",
            "REQUEST_TIMEOUT_SECONDS": "5",
            "STORE_RETRY_ATTEMPTS": "7",
            "KUBE_CONTEXT": "kind-dev",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.resource_backend == "memory"
        assert settings.in_cluster is True
        assert settings.request_timeout_seconds == 5.0
        assert settings.store_retry_attempts == 7
        assert settings.kube_context == "kind-dev"

    @pytest.mark.unit()
    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("RESOURCE_BACKEND", "etcd"),
            ("REQUEST_TIMEOUT_SECONDS", "0"),
            ("STORE_RETRY_ATTEMPTS", "0"),
            ("STORE_RETRY_ATTEMPTS", "11"),
        ],
    )
    def test_invalid_values_rejected(self, name: str, value: str) -> None:
        with patch.dict(os.environ, {name: value}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    @pytest.mark.unit()
    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
