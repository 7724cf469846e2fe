"""
Environment-based configuration.

Environment Variables:
- TRAWLER_ENCODING: Text encoding for every file read (default: utf-8)
- TRAWLER_EXCLUDED_DIRS: Comma-separated directory names to prune. Replaces the
                         default list (node_modules, out) when set.
- TRAWLER_EXCLUDE: Comma-separated gitwildmatch patterns matched against entry
                   names, e.g. "*.gen.lang,generated/"
- TRAWLER_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default: INFO)
"""

import codecs
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from trawler.errors import ConfigError
from trawler.file_system import DEFAULT_ENCODING
from trawler.ignore_defaults import DEFAULT_EXCLUDED_DIRECTORIES


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _parse_log_level(value: str) -> int:
    level = getattr(logging, value.strip().upper(), None)
    if not isinstance(level, int):
        raise ConfigError(f"Invalid TRAWLER_LOG_LEVEL: {value!r}")
    return level


def _parse_encoding(value: str) -> str:
    try:
        return codecs.lookup(value.strip()).name
    except LookupError:
        raise ConfigError(f"Unknown TRAWLER_ENCODING: {value!r}") from None


@dataclass(frozen=True)
class TrawlerConfig:
    """Settings shared by every workspace initialization."""

    encoding: str = DEFAULT_ENCODING
    excluded_directories: tuple[str, ...] = DEFAULT_EXCLUDED_DIRECTORIES
    exclude_patterns: tuple[str, ...] = ()
    log_level: int = logging.INFO

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TrawlerConfig":
        """
        Build a config from TRAWLER_* variables; unset variables keep defaults.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Raises:
            ConfigError: If an encoding or log level is not recognized
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if env.get("TRAWLER_ENCODING"):
            kwargs["encoding"] = _parse_encoding(env["TRAWLER_ENCODING"])
        if "TRAWLER_EXCLUDED_DIRS" in env:
            kwargs["excluded_directories"] = _split_list(env["TRAWLER_EXCLUDED_DIRS"])
        if env.get("TRAWLER_EXCLUDE"):
            kwargs["exclude_patterns"] = _split_list(env["TRAWLER_EXCLUDE"])
        if env.get("TRAWLER_LOG_LEVEL"):
            kwargs["log_level"] = _parse_log_level(env["TRAWLER_LOG_LEVEL"])

        return cls(**kwargs)
