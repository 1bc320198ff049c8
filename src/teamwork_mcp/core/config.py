from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from dotenv import load_dotenv

from .toolsets import METHOD_ALL, Method, is_registered

DEFAULT_API_URL = "https://teamwork.com"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Invalid startup configuration; ``problems`` lists every issue found."""

    def __init__(self, problems: Iterable[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


def _get_bool_env(name: str, default: bool) -> bool:
    """Parse a boolean environment variable with a safe default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _split_csv_env(name: str) -> List[str]:
    return _split_csv(os.getenv(name, ""))


def parse_methods(raw: str | Iterable[str]) -> Tuple[Method, ...]:
    """
    Turn a comma separated (or pre-split) method list into Methods.
    Every name must be registered; all unknown names are reported together.
    An empty list means every toolset.
    """
    names = _split_csv(raw) if isinstance(raw, str) else [n.strip() for n in raw]
    names = [n for n in names if n]
    if not names:
        return (METHOD_ALL,)

    invalid = [n for n in names if not is_registered(n)]
    if invalid:
        raise ConfigError(f"invalid toolset method: {n!r}" for n in invalid)
    return tuple(Method(n) for n in names)


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load the Teamwork API URL and bearer token from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    api_url = os.getenv("TW_MCP_API_URL", "").strip() or DEFAULT_API_URL
    bearer_token = os.getenv("TW_MCP_BEARER_TOKEN", "").strip()
    return api_url, bearer_token


@dataclass(frozen=True)
class ServerConfig:
    """Startup configuration shared by the stdio and HTTP entry points."""

    api_url: str = DEFAULT_API_URL
    bearer_token: Optional[str] = None
    toolsets: Tuple[Method, ...] = (METHOD_ALL,)
    read_only: bool = False
    allow_delete: bool = False
    log_level: str = "INFO"
    version: str = "dev"
    timeout_seconds: float = 10.0

    @property
    def user_agent(self) -> str:
        return f"Teamwork MCP/{self.version}"

    @classmethod
    def from_env(cls, *, use_dotenv: bool = True, **overrides) -> "ServerConfig":
        """
        Build the configuration from ``TW_MCP_*`` variables.
        Keyword overrides (CLI flags) win over the environment when not None.
        """
        api_url, bearer_token = load_env_config(use_dotenv=use_dotenv)

        raw_toolsets = overrides.pop("toolsets", None)
        if raw_toolsets is None:
            raw_toolsets = _split_csv_env("TW_MCP_TOOLSETS")

        log_level = (
            overrides.pop("log_level", None) or os.getenv("TW_MCP_LOG_LEVEL", "INFO")
        ).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError([f"invalid log level: {log_level!r}"])

        timeout_raw = os.getenv("TW_MCP_TIMEOUT_S", "").strip()
        try:
            timeout_seconds = float(timeout_raw) if timeout_raw else cls.timeout_seconds
        except ValueError:
            raise ConfigError([f"invalid TW_MCP_TIMEOUT_S: {timeout_raw!r}"]) from None

        values = dict(
            api_url=api_url.rstrip("/"),
            bearer_token=bearer_token or None,
            toolsets=parse_methods(raw_toolsets),
            read_only=_get_bool_env("TW_MCP_READ_ONLY", False),
            allow_delete=_get_bool_env("TW_MCP_ALLOW_DELETE", False),
            log_level=log_level,
            version=os.getenv("TW_MCP_VERSION", "dev").strip().lstrip("v") or "dev",
            timeout_seconds=timeout_seconds,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = [
    "ConfigError",
    "ServerConfig",
    "parse_methods",
    "load_env_config",
    "DEFAULT_API_URL",
    "LOG_LEVELS",
]
