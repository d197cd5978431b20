"""Naming conventions shared by the document loader and the command builder.

Positional variables
  A variable named ``_`` or ``_<digits>`` (``_``, ``_1``, ``_2``, ...) is bound
  to positional command-line arguments instead of becoming a flag:

    query GetUser(
      # user id
      $_1: String!
    ) { user(id: $_1) { name } }

  ``gqlcli GetUser alice`` sends ``{"_": ["alice"], "_1": "alice"}``.

Root command name
  Derived from the document file name:

    .gql               -> gqlcli
    users.gql          -> users
    conf/api.graphql   -> api
"""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import Sequence

_POSITIONAL_RE = re.compile(r"_[0-9]*")

# Suffixes stripped from the document file name
_DOCUMENT_SUFFIXES = (".gql", ".graphql")
_FALLBACK_NAME = "gqlcli"


def is_positional(variable: str) -> bool:
    """True for variable names reserved for positional arguments."""
    return _POSITIONAL_RE.fullmatch(variable) is not None


def positional_key(index: int) -> str:
    """Variable name of the ``index``-th (0-based) positional argument."""
    return f"_{index + 1}"


def comment_text(lines: Sequence[str] | None) -> str:
    """Concatenate comment lines in order, without separators."""
    if not lines:
        return ""
    return "".join(lines)


def command_name(document_path: str) -> str:
    """Derive the root command name from the document path."""
    name = PurePath(document_path).name.lstrip(".")
    for suffix in _DOCUMENT_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    if name in ("gql", "graphql"):
        name = ""
    return name or _FALLBACK_NAME
