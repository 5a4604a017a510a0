"""Application configuration with environment variable overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class Config:
    """Immutable CLI defaults; command-line flags take precedence."""

    output_format: str = "text"
    log_level: str = "WARNING"
    fail_on_error: bool = False

    @classmethod
    def from_env(cls) -> Config:
        """Create a Config instance, overriding defaults with env vars."""
        return cls(
            output_format=os.environ.get("PROBLEM_MATCHER_OUTPUT", "text").lower(),
            log_level=os.environ.get("PROBLEM_MATCHER_LOG_LEVEL", "WARNING").upper(),
            fail_on_error=os.environ.get(
                "PROBLEM_MATCHER_FAIL_ON_ERROR", ""
            ).lower() in _TRUTHY,
        )
