"""Environment profiles, suite settings and loading."""

from __future__ import annotations

import functools
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront_qa.errors.base import ConfigValidationError

EnvironmentName = Literal["local", "dev", "staging", "production"]

DEFAULT_ENVIRONMENT: EnvironmentName = "dev"
CONFIG_PATH_ENV = "STOREFRONT_QA_CONFIG"


class EnvironmentProfile(BaseModel):
    """Fixed tuning for one target environment."""

    model_config = ConfigDict(frozen=True)

    name: EnvironmentName
    base_url: str
    timeout_ms: int = Field(gt=0)
    max_response_time_ms: int = Field(gt=0)
    auth_retry_attempts: int = Field(ge=0)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


PROFILES: dict[str, EnvironmentProfile] = {
    "local": EnvironmentProfile(
        name="local",
        base_url="http://localhost:3000/api",
        timeout_ms=5000,
        max_response_time_ms=1000,
        auth_retry_attempts=1,
    ),
    "dev": EnvironmentProfile(
        name="dev",
        base_url="https://dev-api.example.com",
        timeout_ms=10000,
        max_response_time_ms=2000,
        auth_retry_attempts=2,
    ),
    "staging": EnvironmentProfile(
        name="staging",
        base_url="https://staging-api.example.com",
        timeout_ms=10000,
        max_response_time_ms=2000,
        auth_retry_attempts=2,
    ),
    "production": EnvironmentProfile(
        name="production",
        base_url="https://api.example.com",
        timeout_ms=15000,
        max_response_time_ms=3000,
        auth_retry_attempts=3,
    ),
}


def get_profile(env: str | None = None) -> EnvironmentProfile:
    """Resolve an environment name to its profile.

    Args:
        env: One of ``local``, ``dev``, ``staging``, ``production``.
            ``None`` or an empty string selects ``dev``.

    Raises:
        ConfigValidationError: If the name is not a known environment.
    """
    name = (env or DEFAULT_ENVIRONMENT).strip().lower()
    try:
        return PROFILES[name]
    except KeyError:
        raise ConfigValidationError(
            f"Unknown API_ENV '{env}'. Valid: {', '.join(PROFILES)}",
            field="api_env",
            value=env,
            expected=" | ".join(PROFILES),
        ) from None


class SuiteSettings(BaseSettings):
    """Settings for a test run, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_QA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_env: str = Field(
        default=DEFAULT_ENVIRONMENT,
        validation_alias=AliasChoices("API_ENV", "STOREFRONT_QA_API_ENV"),
    )
    site_url: str = "https://practicesoftwaretesting.com"
    site_api_url: str = "https://practicesoftwaretesting.com/api"
    artifacts_dir: str = "test-results"
    strict_locators: bool = False
    ui_timeout_ms: int = 10000
    run_e2e: bool = Field(
        default=False,
        validation_alias=AliasChoices("STOREFRONT_QA_E2E", "run_e2e"),
    )

    @field_validator("site_url", "site_api_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v

    @property
    def profile(self) -> EnvironmentProfile:
        return get_profile(self.api_env)

    def site_path(self, path: str = "") -> str:
        """Absolute storefront URL for a site path such as ``/auth/login``."""
        if not path:
            return self.site_url
        return f"{self.site_url}/{path.lstrip('/')}"


def load_config(config_path: str | Path | None = None) -> SuiteSettings:
    """Load settings from an optional YAML file and the environment.

    Priority: env vars > config file > defaults. The environment name is
    validated here so an unknown ``API_ENV`` fails at startup.

    Raises:
        ConfigValidationError: If the YAML is malformed or names an
            unknown environment.
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                try:
                    loaded = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigValidationError(f"Invalid YAML in {config_path}: {e}") from e
            if not isinstance(loaded, dict):
                raise ConfigValidationError(f"{config_path} must contain a mapping")
            config_data = loaded

    config_data.update(_get_env_overrides())

    settings = SuiteSettings(**config_data)
    get_profile(settings.api_env)
    return settings


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_mappings = {
        "API_ENV": "api_env",
        "STOREFRONT_QA_SITE_URL": "site_url",
        "STOREFRONT_QA_SITE_API_URL": "site_api_url",
        "STOREFRONT_QA_ARTIFACTS_DIR": "artifacts_dir",
        "STOREFRONT_QA_UI_TIMEOUT_MS": ("ui_timeout_ms", int),
        "STOREFRONT_QA_STRICT_LOCATORS": (
            "strict_locators",
            lambda x: x.lower() in ("true", "1", "yes"),
        ),
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            if isinstance(config_key, tuple):
                key, converter = config_key
                overrides[key] = converter(value)
            else:
                overrides[config_key] = value

    return overrides


@functools.lru_cache(maxsize=1)
def get_settings() -> SuiteSettings:
    """Settings for this process, loaded once on first use."""
    return load_config(os.environ.get(CONFIG_PATH_ENV))


def get_active_profile() -> EnvironmentProfile:
    return get_settings().profile
