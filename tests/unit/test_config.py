"""Tests for environment profiles and suite settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from storefront_qa.config import (
    PROFILES,
    Endpoints,
    EnvironmentProfile,
    SitePaths,
    SuiteSettings,
    get_active_profile,
    get_profile,
    get_settings,
    load_config,
)
from storefront_qa.errors import ConfigValidationError, ErrorCode


class TestProfiles:
    """Tests for the four fixed environment profiles."""

    @pytest.mark.parametrize(
        ("env", "base_url", "timeout_ms", "max_response_time_ms", "retries"),
        [
            ("local", "http://localhost:3000/api", 5000, 1000, 1),
            ("dev", "https://dev-api.example.com", 10000, 2000, 2),
            ("staging", "https://staging-api.example.com", 10000, 2000, 2),
            ("production", "https://api.example.com", 15000, 3000, 3),
        ],
    )
    def test_profile_values(
        self, env: str, base_url: str, timeout_ms: int, max_response_time_ms: int, retries: int
    ) -> None:
        profile = get_profile(env)
        assert profile.name == env
        assert profile.base_url == base_url
        assert profile.timeout_ms == timeout_ms
        assert profile.max_response_time_ms == max_response_time_ms
        assert profile.auth_retry_attempts == retries

    def test_each_env_resolves_to_its_own_profile_object(self) -> None:
        for name, profile in PROFILES.items():
            assert get_profile(name) is profile

    def test_unset_env_means_dev(self) -> None:
        assert get_profile(None) is PROFILES["dev"]
        assert get_profile("") is PROFILES["dev"]

    def test_env_name_is_case_insensitive(self) -> None:
        assert get_profile(" Staging ") is PROFILES["staging"]

    def test_unknown_env_raises(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            get_profile("qa")
        assert "Unknown API_ENV 'qa'" in str(exc_info.value)
        assert exc_info.value.error_code == ErrorCode.INVALID_CONFIG

    def test_profiles_are_frozen(self) -> None:
        with pytest.raises(PydanticValidationError):
            PROFILES["dev"].timeout_ms = 1

    def test_timeout_seconds(self) -> None:
        assert PROFILES["production"].timeout_seconds == 15.0

    def test_profile_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(PydanticValidationError):
            EnvironmentProfile(
                name="dev",
                base_url="https://x",
                timeout_ms=0,
                max_response_time_ms=1,
                auth_retry_attempts=0,
            )


class TestSuiteSettings:
    """Tests for SuiteSettings and load_config."""

    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = load_config()
        assert settings.api_env == "dev"
        assert settings.site_url == "https://practicesoftwaretesting.com"
        assert settings.strict_locators is False
        assert settings.profile is PROFILES["dev"]

    def test_api_env_from_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("API_ENV", "local")
        assert load_config().profile is PROFILES["local"]

    def test_unknown_api_env_fails_at_load(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("API_ENV", "nowhere")
        with pytest.raises(ConfigValidationError):
            load_config()

    def test_yaml_file_is_read(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "storefront.yaml"
        config_file.write_text("api_env: staging\nsite_url: https://shop.test/\nui_timeout_ms: 2500\n")

        settings = load_config(config_file)

        assert settings.profile is PROFILES["staging"]
        assert settings.site_url == "https://shop.test"
        assert settings.ui_timeout_ms == 2500

    def test_environment_wins_over_yaml(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "storefront.yaml"
        config_file.write_text("api_env: staging\nstrict_locators: false\n")
        clean_env.setenv("API_ENV", "production")
        clean_env.setenv("STOREFRONT_QA_STRICT_LOCATORS", "yes")

        settings = load_config(config_file)

        assert settings.api_env == "production"
        assert settings.strict_locators is True

    def test_missing_yaml_file_is_ignored(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        settings = load_config(tmp_path / "absent.yaml")
        assert settings.api_env == "dev"

    def test_malformed_yaml_raises(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("api_env: [unclosed\n")
        with pytest.raises(ConfigValidationError, match="Invalid YAML"):
            load_config(config_file)

    def test_non_mapping_yaml_raises(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- dev\n- staging\n")
        with pytest.raises(ConfigValidationError, match="must contain a mapping"):
            load_config(config_file)

    def test_get_settings_is_cached(self, clean_env: pytest.MonkeyPatch) -> None:
        first = get_settings()
        clean_env.setenv("API_ENV", "local")
        assert get_settings() is first
        get_settings.cache_clear()
        assert get_active_profile() is PROFILES["local"]

    def test_site_path(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = SuiteSettings(site_url="https://shop.test/")
        assert settings.site_path(SitePaths.LOGIN) == "https://shop.test/auth/login"
        assert settings.site_path("") == "https://shop.test"


class TestEndpoints:
    def test_resource_paths(self) -> None:
        assert Endpoints.user(2) == "/users/2"
        assert Endpoints.product("abc") == "/products/abc"
        assert Endpoints.order(1001) == "/orders/1001"

    def test_site_paths(self) -> None:
        assert SitePaths.REGISTER == "/register"
        assert SitePaths.CART == "/checkout"
        assert SitePaths.LEGACY_CART == "/cart"
