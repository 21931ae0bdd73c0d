# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ALLOWED_ORIGINS = [
    "http://127.0.0.1:5500",
    "http://localhost:5500",
    "http://localhost:3000",
]

_NESTED_SETTINGS = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///staffdesk.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _NESTED_SETTINGS


class SessionConfig(BaseSettings):
    ttl_seconds: int = Field(3600, ge=1, alias="SESSION_TTL_SECONDS")
    cookie_name: str = Field("sid", min_length=1, alias="SESSION_COOKIE_NAME")

    model_config = _NESTED_SETTINGS


class AdminConfig(BaseSettings):
    username: str = Field("admin", min_length=1, alias="ADMIN_USERNAME")
    # Seeding at startup only happens when a password is configured.
    password: str | None = Field(None, alias="ADMIN_PASSWORD")

    model_config = _NESTED_SETTINGS


class ObservabilityConfig(BaseSettings):
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")

    model_config = _NESTED_SETTINGS

    @field_validator("metrics_enabled", mode="before")
    @classmethod
    def _parse_flag(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class SecurityConfig(BaseSettings):
    # Cookie security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS), alias="ALLOWED_ORIGINS"
    )

    # Rate limiting
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, ge=1, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, ge=0.1, alias="RL_WINDOW")
    # Only set behind a reverse proxy that overwrites X-Forwarded-For.
    trust_proxy_headers: bool = Field(False, alias="TRUST_PROXY_HEADERS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    # werkzeug hash method, e.g. "scrypt" or "pbkdf2:sha256:600000"
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")

    model_config = _NESTED_SETTINGS

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator(
        "cookie_secure",
        "enable_rate_limit",
        "trust_proxy_headers",
        "enable_hsts",
        mode="before",
    )
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @field_validator("cookie_samesite")
    @classmethod
    def _check_samesite(cls, value: str) -> str:
        normalized = value.capitalize()
        if normalized not in ("Strict", "Lax", "None"):
            raise ValueError("COOKIE_SAMESITE must be Strict, Lax or None")
        return normalized


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _admin_config_factory() -> AdminConfig:
    return AdminConfig()  # type: ignore[call-arg]


def _observability_config_factory() -> ObservabilityConfig:
    return ObservabilityConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    session: SessionConfig = Field(default_factory=_session_config_factory)
    admin: AdminConfig = Field(default_factory=_admin_config_factory)
    observability: ObservabilityConfig = Field(default_factory=_observability_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")
        if self.admin.password:
            warnings.append("⚠️  ADMIN_PASSWORD is set; seed once and remove it")

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
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AdminConfig",
    "AppConfig",
    "DatabaseConfig",
    "ObservabilityConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
