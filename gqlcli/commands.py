"""Build the click command tree from a parsed document.

One subcommand per named operation, in document order. The anonymous
operation, if any, configures the root group itself: its comment becomes the
root description, its variables become root options, and invoking the root
without a subcommand dispatches it.

Help output groups subcommands by operation kind:

    Query commands:
      GetUser   Fetch one user.
    Mutation commands:
      AddUser   Create a user.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import IO, Any

import click

from .dispatch import Transport, assemble_variables, dispatch
from .errors import DocumentError
from .loader import Document, OperationDefinition
from .naming import comment_text, command_name
from .variables import build_flags

logger = logging.getLogger(__name__)

CATEGORIES = ("query", "mutation", "subscription")

# click parameter name of the variadic positional argument
ARGS_PARAM = "_"
_ARGS_METAVAR = "[ARGS]..."


def _stdout() -> IO[bytes]:
    sys.stdout.flush()
    return sys.stdout.buffer


def _run(
    transport: Transport,
    document: Document,
    operation: OperationDefinition,
    flag_values: dict[str, Any],
    args: Any,
) -> None:
    variables = assemble_variables(flag_values, args or ())
    asyncio.run(dispatch(transport, document, operation, variables, _stdout()))


class OperationCommand(click.Command):
    """Subcommand bound to one named operation."""

    def __init__(self, operation: OperationDefinition, args_usage: str = "", **kwargs: Any) -> None:
        super().__init__(operation.name, **kwargs)
        self.operation = operation
        self.category = operation.kind
        self.args_usage = args_usage


class OperationGroup(click.Group):
    """Root command; keeps document order and lists commands by category."""

    def __init__(
        self,
        name: str,
        operation: OperationDefinition | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, invoke_without_command=True, **kwargs)
        self.operation = operation
        # Root options are optional to click so subcommands keep working;
        # these are enforced only when the root dispatches.
        self.required_flags: set[str] = set()

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        commands = []
        for name in self.list_commands(ctx):
            cmd = self.get_command(ctx, name)
            if cmd is None or cmd.hidden:
                continue
            commands.append((name, cmd))
        if not commands:
            return

        limit = formatter.width - 6 - max(len(name) for name, _ in commands)
        for category in CATEGORIES:
            rows = [
                (name, cmd.get_short_help_str(limit))
                for name, cmd in commands
                if getattr(cmd, "category", "") == category
            ]
            if rows:
                with formatter.section(f"{category.capitalize()} commands"):
                    formatter.write_dl(rows)

    def check_required(self, ctx: click.Context) -> None:
        """Raise click.MissingParameter for unset required root options."""
        for param in self.params:
            if param.name in self.required_flags and ctx.params.get(param.name) is None:
                raise click.MissingParameter(ctx=ctx, param=param)


def build_command(
    operation: OperationDefinition,
    document: Document,
    transport: Transport,
) -> OperationCommand:
    """Synthesize the subcommand for one named operation."""
    args_usage: list[str] = []
    params: list[click.Parameter] = list(build_flags(operation.variables, args_usage, operation.name))
    usage = "".join(args_usage)
    params.append(click.Argument([ARGS_PARAM], nargs=-1, metavar=usage.strip() or _ARGS_METAVAR))

    def action(**values: Any) -> None:
        args = values.pop(ARGS_PARAM, ())
        _run(transport, document, operation, values, args)

    return OperationCommand(
        operation,
        args_usage=usage,
        params=params,
        callback=action,
        help=comment_text(operation.comment),
    )


def _augment_root(group: OperationGroup, operation: OperationDefinition) -> None:
    if operation.comment:
        group.help = comment_text(operation.comment)

    # The root takes no positional arguments, so positional variables only
    # ever see an empty `_`.
    flags = build_flags(operation.variables, [], operation.name)
    for flag in flags:
        if flag.required:
            group.required_flags.add(flag.name)
            flag.required = False
    group.params.extend(flags)
    group.operation = operation


def build_cli(document: Document, transport: Transport, name: str | None = None) -> OperationGroup:
    """Build the root group with one subcommand per named operation."""
    if name is None:
        name = command_name(document.name)

    group = OperationGroup(name, help=comment_text(document.comment))

    def root_action(**values: Any) -> None:
        ctx = click.get_current_context()
        if ctx.invoked_subcommand is not None:
            return
        if group.operation is None:
            click.echo(ctx.get_help())
            ctx.exit(0)
        group.check_required(ctx)
        _run(transport, document, group.operation, values, ())

    group.callback = root_action

    for operation in document.operations:
        logger.debug("parsing operation", extra={"operation": operation.name})
        if not operation.name:
            if group.operation is not None:
                raise DocumentError(f"multiple anonymous operations in {document.name or 'document'}")
            _augment_root(group, operation)
            continue
        if operation.name in group.commands:
            raise DocumentError(f"duplicate operation {operation.name} in {document.name or 'document'}")
        group.add_command(build_command(operation, document, transport))

    return group


def describe_cli(group: click.Group) -> dict[str, Any]:
    """Plain-data description of a built command tree (for comparison and debugging)."""

    def _params(cmd: click.Command) -> list[dict[str, Any]]:
        return [
            {
                "name": p.name,
                "type": p.type.name,
                "required": p.required,
                "default": p.default,
                "help": getattr(p, "help", None),
            }
            for p in cmd.params
            if isinstance(p, click.Option)
        ]

    return {
        "name": group.name,
        "help": group.help,
        "params": _params(group),
        "required": sorted(getattr(group, "required_flags", ())),
        "commands": [
            {
                "name": name,
                "category": getattr(cmd, "category", ""),
                "help": cmd.help,
                "args_usage": getattr(cmd, "args_usage", ""),
                "params": _params(cmd),
            }
            for name, cmd in group.commands.items()
        ],
    }
