"""Assemble request variables and send one operation through the transport."""

from __future__ import annotations

import logging
from typing import IO, Any, Mapping, Protocol, Sequence

from .errors import SubscriptionNotImplementedError
from .loader import Document, OperationDefinition
from .naming import positional_key

logger = logging.getLogger(__name__)

_DISPATCHED_KINDS = ("query", "mutation")


class Transport(Protocol):
    async def execute(
        self,
        query: str,
        variables: Mapping[str, Any],
        operation_name: str | None = None,
    ) -> bytes:
        ...


def assemble_variables(flag_values: Mapping[str, Any], args: Sequence[str]) -> dict[str, Any]:
    """Merge flag values with positional arguments.

    ``_`` holds all positional arguments, ``_1``, ``_2``, ... each one.
    Unset options (value None) are left out so the server sees them as absent.
    """
    variables = {name: value for name, value in flag_values.items() if value is not None}
    positional = [str(arg) for arg in args]
    variables["_"] = positional
    for index, arg in enumerate(positional):
        variables[positional_key(index)] = arg
    return variables


async def dispatch(
    transport: Transport,
    document: Document,
    operation: OperationDefinition,
    variables: Mapping[str, Any],
    out: IO[bytes],
) -> None:
    """Execute ``operation`` and write the raw payload plus a newline to ``out``.

    Subscriptions fail before anything is sent. Transport errors propagate.
    """
    if operation.kind not in _DISPATCHED_KINDS:
        raise SubscriptionNotImplementedError(operation.name)

    logger.debug("dispatching operation", extra={"operation": operation.name})
    payload = await transport.execute(document.source, variables, operation.name or None)
    out.write(payload)
    out.write(b"\n")
    out.flush()
