"""Load and parse the GraphQL document.

Reads the document file, parses it with graphql-core and extracts the parts
the command builder needs: operations, their variables, and the ``#``
comments attached to each.

graphql-core drops comments from the AST but keeps them in the token list,
so comments are recovered by walking the tokens:

- operation / variable comment: the run of comment tokens directly before
  the node's first token
- document comment: the run of comment tokens directly before EOF
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from graphql import GraphQLSyntaxError, Source, parse, print_ast
from graphql.language import (
    BooleanValueNode,
    DocumentNode,
    EnumValueNode,
    FloatValueNode,
    FragmentDefinitionNode,
    IntValueNode,
    ListTypeNode,
    NonNullTypeNode,
    NullValueNode,
    OperationDefinitionNode,
    StringValueNode,
    Token,
    TokenKind,
    VariableDefinitionNode,
)

from .errors import ConfigError, DocumentError


@dataclass(frozen=True)
class VariableDefinition:
    name: str
    type_name: str
    non_null: bool = False
    default: str | None = None
    comment: tuple[str, ...] = ()
    is_list: bool = False


@dataclass(frozen=True)
class OperationDefinition:
    name: str
    kind: str
    variables: tuple[VariableDefinition, ...] = ()
    comment: tuple[str, ...] = ()


@dataclass(frozen=True)
class Document:
    source: str
    operations: tuple[OperationDefinition, ...] = ()
    comment: tuple[str, ...] = ()
    name: str = ""


class _Comments:
    """Index over a parsed document's token list."""

    def __init__(self, first: Token) -> None:
        self.tokens: list[Token] = []
        token: Token | None = first
        while token is not None:
            self.tokens.append(token)
            token = token.next
        self._index = {id(t): i for i, t in enumerate(self.tokens)}

    def before(self, token: Token) -> tuple[str, ...]:
        """Comment lines directly preceding ``token``."""
        end = self._index.get(id(token))
        if end is None:
            return ()
        start = end
        while start > 0 and self.tokens[start - 1].kind == TokenKind.COMMENT:
            start -= 1
        return tuple(t.value or "" for t in self.tokens[start:end])

    def trailing(self) -> tuple[str, ...]:
        """Comment lines after the last definition."""
        return self.before(self.tokens[-1])


def raw_value(node: Any) -> str:
    """Raw text of a default value literal (strings unquoted)."""
    if isinstance(node, BooleanValueNode):
        return "true" if node.value else "false"
    if isinstance(node, NullValueNode):
        return "null"
    if isinstance(node, (StringValueNode, IntValueNode, FloatValueNode, EnumValueNode)):
        return node.value
    return print_ast(node)


def _unwrap_type(node: Any) -> tuple[str, bool, bool]:
    """Return (type name, non-null, is list) for a variable type node."""
    non_null = isinstance(node, NonNullTypeNode)
    inner = node.type if non_null else node
    if isinstance(inner, ListTypeNode):
        return print_ast(node), non_null, True
    return inner.name.value, non_null, False


def _variable(node: VariableDefinitionNode, comments: _Comments) -> VariableDefinition:
    type_name, non_null, is_list = _unwrap_type(node.type)
    default = None
    if node.default_value is not None:
        default = raw_value(node.default_value)
    return VariableDefinition(
        name=node.variable.name.value,
        type_name=type_name,
        non_null=non_null,
        default=default,
        comment=comments.before(node.loc.start_token) if node.loc else (),
        is_list=is_list,
    )


def _operation(node: OperationDefinitionNode, comments: _Comments) -> OperationDefinition:
    return OperationDefinition(
        name=node.name.value if node.name else "",
        kind=node.operation.value,
        variables=tuple(_variable(v, comments) for v in node.variable_definitions or ()),
        comment=comments.before(node.loc.start_token) if node.loc else (),
    )


def parse_document(text: str, name: str = "") -> Document:
    """Parse document source text.

    Fragments are allowed (they stay in the source sent to the server);
    type system definitions are rejected.
    """
    try:
        ast: DocumentNode = parse(Source(text, name or "GraphQL request"))
    except GraphQLSyntaxError as exc:
        raise DocumentError(str(exc)) from exc

    comments = _Comments(ast.loc.start_token)
    operations = []
    for definition in ast.definitions:
        if isinstance(definition, OperationDefinitionNode):
            operations.append(_operation(definition, comments))
        elif not isinstance(definition, FragmentDefinitionNode):
            raise DocumentError(f"unexpected {definition.kind} in query document {name}".rstrip())

    return Document(
        source=text,
        operations=tuple(operations),
        comment=comments.trailing(),
        name=name,
    )


def load_document(path: str | Path) -> Document:
    """Read and parse the document at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to read {path}: {exc}") from exc
    return parse_document(text, str(path))
