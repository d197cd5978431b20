"""Shared fixtures: a sample document and a recording transport."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import pytest
from click.testing import CliRunner

from gqlcli.commands import build_cli
from gqlcli.loader import parse_document
from gqlcli.logs import LOGGER_NAME

SAMPLE_DOCUMENT = """\
# Fetch one user.
query GetUser(
  # user id
  $id: Int!
  # include inactive users
  $active: Boolean = true
) {
  user(id: $id, active: $active) { name }
}

# Create a user.
mutation AddUser(
  # user name
  $name: String!
  # free-form note
  $_1: String
) {
  addUser(name: $name, note: $_1) { id }
}

subscription OnUser {
  userChanged { id }
}
# Users API.
"""


class StubTransport:
    """Records execute() calls instead of sending them."""

    def __init__(self, payload: bytes = b'{"user":{"name":"alice"}}', error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def execute(
        self,
        query: str,
        variables: Mapping[str, Any],
        operation_name: str | None = None,
    ) -> bytes:
        self.calls.append({
            "query": query,
            "variables": dict(variables),
            "operation_name": operation_name,
        })
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture(autouse=True)
def _reset_gqlcli_logger():
    """Undo setup_logging() so caplog sees gqlcli records in every test."""
    logger = logging.getLogger(LOGGER_NAME)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_document():
    return parse_document(SAMPLE_DOCUMENT, "users.gql")


@pytest.fixture
def transport():
    return StubTransport()


@pytest.fixture
def cli(sample_document, transport):
    return build_cli(sample_document, transport)


@pytest.fixture
def runner():
    return CliRunner()
