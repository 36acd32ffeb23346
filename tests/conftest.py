"""Shared fixtures: a GhClient whose PyGithub requester is a mock."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from github_actions_mcp.client.gh_client import GhClient, set_client
from github_actions_mcp.config import Config


@pytest.fixture
def config() -> Config:
  return Config(token="test-token", timeout_ms=2000)


@pytest.fixture
def requester() -> MagicMock:
  mock = MagicMock(name="requester")
  mock.requestJsonAndCheck.return_value = ({}, None)
  return mock


@pytest.fixture
def client(config: Config, requester: MagicMock) -> GhClient:
  gh_client = GhClient(config)
  gh_client._gh = MagicMock(name="github")
  gh_client._gh.requester = requester
  return gh_client


@pytest.fixture
def installed_client(client: GhClient):
  set_client(client)
  yield client
  set_client(None)
