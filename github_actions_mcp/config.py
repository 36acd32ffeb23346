"""
Process configuration, resolved once at startup.

Command-line flags take precedence over environment variables. The resulting
Config is passed explicitly to the client; nothing reads the environment
after startup.
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT_MS = 30_000

TOKEN_ENV_VARS = ("GITHUB_PERSONAL_ACCESS_TOKEN", "GITHUB_TOKEN")
BASE_URL_ENV = "GITHUB_API_URL"
TIMEOUT_ENV = "GITHUB_ACTIONS_MCP_TIMEOUT_MS"
LOG_FILE_ENV = "GITHUB_ACTIONS_MCP_LOG_FILE"
LOG_LEVEL_ENV = "GITHUB_ACTIONS_MCP_LOG_LEVEL"


class ConfigError(Exception):
  pass


@dataclass(frozen=True)
class Config:
  token: str
  base_url: str = DEFAULT_BASE_URL
  timeout_ms: int = DEFAULT_TIMEOUT_MS
  log_file: str | None = None
  log_level: str = "INFO"

  def __repr__(self) -> str:
    return (
      f"Config(token='***', base_url={self.base_url!r}, timeout_ms={self.timeout_ms}, "
      f"log_file={self.log_file!r}, log_level={self.log_level!r})"
    )

  @property
  def timeout_seconds(self) -> float:
    return self.timeout_ms / 1000

  @classmethod
  def from_argv(
    cls,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
  ) -> Config:
    """Build a Config from CLI flags, falling back to the environment."""
    environ = os.environ if environ is None else environ
    args, _unknown = _build_parser().parse_known_args(argv)

    token = args.token or next((environ[k] for k in TOKEN_ENV_VARS if environ.get(k)), None)
    if not token:
      raise ConfigError(
        "GITHUB_PERSONAL_ACCESS_TOKEN environment variable is not set "
        "and no --token was given."
      )

    base_url = (args.base_url or environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL).rstrip("/")
    if not base_url.startswith(("https://", "http://")):
      raise ConfigError(f"Invalid base URL: {base_url}")

    raw_timeout = args.timeout_ms if args.timeout_ms is not None else environ.get(TIMEOUT_ENV)
    timeout_ms = DEFAULT_TIMEOUT_MS if raw_timeout in (None, "") else _parse_timeout(raw_timeout)

    log_level = (args.log_level or environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
      raise ConfigError(f"Unknown log level: {log_level}")

    return cls(
      token=token,
      base_url=base_url,
      timeout_ms=timeout_ms,
      log_file=args.log_file or environ.get(LOG_FILE_ENV) or None,
      log_level=log_level,
    )


def _parse_timeout(raw: str | int) -> int:
  try:
    value = int(raw)
  except (TypeError, ValueError):
    raise ConfigError(f"Invalid timeout: {raw!r}") from None
  if value <= 0:
    raise ConfigError(f"Invalid timeout: {raw!r} (must be positive)")
  return value


def _build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="github-actions-mcp",
    description="MCP server exposing GitHub Actions workflows, runs and jobs as tools.",
  )
  parser.add_argument("--token", help="GitHub personal access token")
  parser.add_argument("--base-url", help=f"GitHub API base URL (default {DEFAULT_BASE_URL})")
  parser.add_argument("--timeout-ms", help="Per-request deadline in milliseconds")
  parser.add_argument("--log-file", help="Also write logs to this file (truncated on start)")
  parser.add_argument("--log-level", help="Logging level (default INFO)")
  return parser
