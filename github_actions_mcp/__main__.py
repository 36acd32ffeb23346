"""
Entry point for the GitHub Actions MCP server.

Run with: python -m github_actions_mcp --token=<token>
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Any

from .config import Config, ConfigError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

log = logging.getLogger("github_actions_mcp")


def configure_logging(config: Config) -> None:
  """Apply the configured level and add the optional log file."""
  root = logging.getLogger()
  root.setLevel(config.log_level)
  if config.log_file:
    path = Path(config.log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    log.info("Log file initialized at %s", path)


def _excepthook(exc_type: type[BaseException], exc: BaseException, tb: Any) -> None:
  log.critical("Uncaught exception, exiting", exc_info=(exc_type, exc, tb))


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
  # Background task failures are logged; the server keeps serving.
  exc = context.get("exception")
  log.error("Unhandled error in event loop: %s", context.get("message"), exc_info=exc)


def _on_sigterm(signum: int, _frame: Any) -> None:
  log.info("Received %s. Exiting gracefully.", signal.Signals(signum).name)
  sys.exit(0)


async def _serve(config: Config) -> None:
  from .server import run_server

  asyncio.get_running_loop().set_exception_handler(_loop_exception_handler)
  await run_server(config)


def main(argv: list[str] | None = None) -> None:
  logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stderr)
  log.info("Initializing GitHub Actions MCP server...")

  try:
    config = Config.from_argv(argv)
    configure_logging(config)
  except (ConfigError, OSError) as e:
    log.critical("FATAL: %s", e)
    sys.exit(1)
  log.info("GitHub token found.")

  sys.excepthook = _excepthook
  signal.signal(signal.SIGTERM, _on_sigterm)

  try:
    asyncio.run(_serve(config))
  except KeyboardInterrupt:
    log.info("Received SIGINT. Exiting gracefully.")
  except Exception:
    log.exception("FATAL error while running server")
    sys.exit(1)


if __name__ == "__main__":
  main()
