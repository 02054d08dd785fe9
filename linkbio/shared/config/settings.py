# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Sections read their own aliased variables from the environment / .env
_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


class ApiConfig(BaseSettings):
    base_url: str = Field("http://localhost:3333", alias="API_URL")
    timeout: float = Field(15.0, ge=0.1, alias="API_TIMEOUT")

    model_config = _SECTION_CONFIG

    @field_validator("base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class TokenConfig(BaseSettings):
    # cookie: both tokens in cookies; memory: access token lives only in memory
    strategy: Literal["cookie", "memory"] = Field("cookie", alias="TOKEN_STRATEGY")
    access_ttl: int = Field(60 * 30, ge=1, alias="ACCESS_TOKEN_TTL")
    refresh_ttl: int = Field(60 * 60 * 24, ge=1, alias="REFRESH_TOKEN_TTL")
    cookie_path: str = Field("/", alias="TOKEN_COOKIE_PATH")

    model_config = _SECTION_CONFIG


class RoutesConfig(BaseSettings):
    landing: str = Field("/", alias="LANDING_PATH")
    dashboard: str = Field("/dash", alias="DASHBOARD_PATH")
    public_profile_prefix: str = Field("/user/", alias="PUBLIC_PROFILE_PREFIX")
    restore_delay_ms: int = Field(1500, ge=0, alias="RESTORE_DELAY_MS")

    model_config = _SECTION_CONFIG


class ResilienceConfig(BaseSettings):
    max_retries: int = Field(2, ge=0, alias="RESILIENCE_RETRIES")
    backoff_base: float = Field(0.2, ge=0.0, alias="RESILIENCE_BACKOFF_BASE")
    backoff_cap: float = Field(2.0, ge=0.0, alias="RESILIENCE_BACKOFF_CAP")
    circuit_fail_threshold: int = Field(5, ge=1, alias="RESILIENCE_CIRCUIT_THRESHOLD")
    circuit_reset_timeout: float = Field(30.0, ge=1.0, alias="RESILIENCE_CIRCUIT_RESET")

    model_config = _SECTION_CONFIG


class SecurityConfig(BaseSettings):
    # Cookie security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")

    # CSRF protection
    enable_csrf: bool = Field(False, alias="ENABLE_CSRF")

    # Rate limiting
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, alias="RL_WINDOW")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_CONFIG

    @field_validator(
        "cookie_secure", "enable_csrf", "enable_rate_limit", "enable_hsts", mode="before"
    )
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _api_config_factory() -> ApiConfig:
    return ApiConfig()  # type: ignore[call-arg]


def _token_config_factory() -> TokenConfig:
    return TokenConfig()  # type: ignore[call-arg]


def _routes_config_factory() -> RoutesConfig:
    return RoutesConfig()  # type: ignore[call-arg]


def _resilience_config_factory() -> ResilienceConfig:
    return ResilienceConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    api: ApiConfig = Field(default_factory=_api_config_factory)
    tokens: TokenConfig = Field(default_factory=_token_config_factory)
    routes: RoutesConfig = Field(default_factory=_routes_config_factory)
    resilience: ResilienceConfig = Field(default_factory=_resilience_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.security.enable_csrf:
            warnings.append("⚠️  CSRF protection is DISABLED")
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if not self.api.base_url.startswith("https://"):
            warnings.append("⚠️  API_URL is not served over HTTPS")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "load_config"]
