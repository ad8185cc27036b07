"""
Scanner configuration.

Loaded from environment variables (``SCANNER_*``), a JSON/YAML file, or
built directly. The CLI loads a ``.env`` file before calling ``from_env``.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

import yaml

from .errors import ConfigError

# =============================================================================
# IGNORE PATTERNS
# =============================================================================
DEFAULT_IGNORE_DIRS: Set[str] = {
    # Version control
    ".git", ".svn", ".hg",
    # Dependencies
    "node_modules", "bower_components", "jspm_packages",
    # Build output
    "dist", "build", "out", ".next", ".nuxt", ".output", ".svelte-kit",
    ".vercel", ".netlify", ".turbo",
    # Caches and coverage
    "coverage", ".cache", ".parcel-cache",
    # IDE/OS
    ".vscode", ".idea", ".DS_Store",
}

DEFAULT_TIMEOUT_MS = 30000


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class ScannerConfig:
    """
    Scanner configuration with sensible defaults.

    ``base_url`` and ``login_url`` override the inferred values when set.
    """
    ignore_dirs: Set[str] = field(default_factory=set)
    max_file_size_mb: float = 2
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    base_url: Optional[str] = None
    login_url: Optional[str] = None
    inject_defaults: bool = True

    def __post_init__(self):
        if not self.ignore_dirs:
            self.ignore_dirs = DEFAULT_IGNORE_DIRS.copy()

    @classmethod
    def from_env(cls) -> "ScannerConfig":
        """Load configuration from environment variables."""
        extra_ignores = os.getenv("SCANNER_IGNORE_DIRS", "")
        ignore_dirs = DEFAULT_IGNORE_DIRS | {d.strip() for d in extra_ignores.split(",") if d.strip()}
        try:
            max_file_size_mb = float(os.getenv("SCANNER_MAX_FILE_SIZE", 2))
            timeout_ms = int(os.getenv("SCANNER_TIMEOUT", DEFAULT_TIMEOUT_MS))
        except ValueError as e:
            raise ConfigError(f"Invalid numeric scanner setting in environment: {e}") from e
        return cls(
            ignore_dirs=ignore_dirs,
            max_file_size_mb=max_file_size_mb,
            timeout_ms=timeout_ms,
            base_url=os.getenv("SCANNER_BASE_URL") or None,
            login_url=os.getenv("SCANNER_LOGIN_URL") or None,
            inject_defaults=_env_flag("SCANNER_INJECT_DEFAULTS", "true"),
        )

    @classmethod
    def from_file(cls, path: str) -> "ScannerConfig":
        """Load configuration from a JSON or YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.endswith((".yaml", ".yml")):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must contain a mapping")

        if "ignore_dirs" in data and isinstance(data["ignore_dirs"], list):
            data["ignore_dirs"] = set(data["ignore_dirs"])

        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ignore_dirs": sorted(self.ignore_dirs),
            "max_file_size_mb": self.max_file_size_mb,
            "timeout_ms": self.timeout_ms,
            "base_url": self.base_url,
            "login_url": self.login_url,
            "inject_defaults": self.inject_defaults,
        }
