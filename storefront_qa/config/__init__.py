"""Configuration for storefront-qa."""

from storefront_qa.config.endpoints import Endpoints, SitePaths
from storefront_qa.config.settings import (
    DEFAULT_ENVIRONMENT,
    PROFILES,
    EnvironmentProfile,
    SuiteSettings,
    get_active_profile,
    get_profile,
    get_settings,
    load_config,
)

__all__ = [
    "DEFAULT_ENVIRONMENT",
    "Endpoints",
    "EnvironmentProfile",
    "PROFILES",
    "SitePaths",
    "SuiteSettings",
    "get_active_profile",
    "get_profile",
    "get_settings",
    "load_config",
]
