"""Configuration for scan runs."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from k8s_danger_scan.models import OutputFormat

ENV_INCLUDE_MEDIUM = "K8S_DANGER_SCAN_INCLUDE_MEDIUM"
ENV_LOG_LEVEL = "K8S_DANGER_SCAN_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


@dataclass
class ScanConfig:
    """Options controlling severity filtering, output and logging."""

    # Report MEDIUM findings too (default: HIGH only)
    include_medium: bool = False

    output_format: OutputFormat = OutputFormat.HUMAN

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: dict, environ: Mapping[str, str] | None = None) -> "ScanConfig":
        """Create config from dictionary, falling back to environment variables."""
        env = os.environ if environ is None else environ

        include_medium = data.get("include_medium")
        if include_medium is None:
            include_medium = _env_flag(env.get(ENV_INCLUDE_MEDIUM))

        output_format = data.get("output_format", OutputFormat.HUMAN)
        if not isinstance(output_format, OutputFormat):
            output_format = OutputFormat(str(output_format).lower())

        log_level = data.get("log_level") or env.get(ENV_LOG_LEVEL) or "WARNING"

        return cls(
            include_medium=bool(include_medium),
            output_format=output_format,
            log_level=str(log_level).upper(),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ScanConfig":
        """Create config from environment variables only."""
        return cls.from_dict({}, environ=environ)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "include_medium": self.include_medium,
            "output_format": self.output_format.value,
            "log_level": self.log_level,
        }
