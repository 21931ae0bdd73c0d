# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .clock import Clock, ensure_utc, utcnow

__all__ = ["Clock", "ensure_utc", "utcnow"]
