"""Exception hierarchy for gqlcli.

Everything the CLI expects to go wrong derives from GqlCliError, so the
entry point can log it once and exit non-zero. click's own usage errors are
left to click.
"""

from __future__ import annotations


class GqlCliError(Exception):
    """Base class for expected gqlcli failures."""


class ConfigError(GqlCliError):
    """Invalid environment settings or an unreadable document file."""


# ---------------------------------------------------------------------------
# Document compilation
# ---------------------------------------------------------------------------

class DocumentError(GqlCliError):
    """The document cannot be turned into commands."""


class UnsupportedVariableTypeError(DocumentError):
    """A variable is declared with a type no flag can represent."""

    def __init__(self, operation: str, variable: str, type_name: str) -> None:
        self.operation = operation
        self.variable = variable
        self.type_name = type_name
        super().__init__(
            f"operation {operation or '<anonymous>'}: variable ${variable}"
            f" has unsupported type {type_name}"
        )


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class DispatchError(GqlCliError):
    """Running a synthesized command failed."""


class SubscriptionNotImplementedError(DispatchError):
    """Subscription operations cannot be dispatched."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"subscriptions not implemented yet: {operation}")


class TransportError(DispatchError):
    """The request did not reach the endpoint or came back unusable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class GraphQLResponseError(TransportError):
    """The endpoint answered with a non-empty ``errors`` list."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__("graphql: " + "; ".join(messages))
