# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AdminConfig,
    AppConfig,
    DatabaseConfig,
    ObservabilityConfig,
    SecurityConfig,
    SessionConfig,
    load_config,
)

__all__ = [
    "AdminConfig",
    "AppConfig",
    "DatabaseConfig",
    "ObservabilityConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
