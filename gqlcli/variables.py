"""Turn operation variables into click options.

Handles:
- Positional variables ($_, $_1, $_2, ...): no option, comment goes to the
  command's argument usage
- String / ID -> text option
- Int / Int64 -> integer option
- Float -> float option
- Boolean -> boolean value option (``--flag true``)
- Default literals: always make the option optional; an unparseable literal
  is logged and ignored
- Anything else (input objects, enums, custom scalars, lists) is rejected
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import click

from .errors import UnsupportedVariableTypeError
from .loader import VariableDefinition
from .naming import comment_text, is_positional

logger = logging.getLogger(__name__)

# GraphQL type name -> click parameter type
FLAG_TYPES: dict[str, click.ParamType] = {
    "String": click.STRING,
    "ID": click.STRING,
    "Int": click.INT,
    "Int64": click.INT,
    "Float": click.FLOAT,
    "Boolean": click.BOOL,
}


def _parse_int(raw: str) -> int:
    return int(raw, 10)


def _parse_bool(raw: str) -> bool:
    value = raw.lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"invalid boolean literal: {raw!r}")


# Default literal parsers; types missing here keep the literal as text
_DEFAULT_PARSERS: dict[str, Callable[[str], Any]] = {
    "Int": _parse_int,
    "Int64": _parse_int,
    "Float": float,
    "Boolean": _parse_bool,
}


def parse_default(variable: VariableDefinition) -> Any:
    """Convert a variable's default literal to the option's default value.

    Returns None (no default) when the literal does not parse.
    """
    if variable.default is None:
        return None
    parser = _DEFAULT_PARSERS.get(variable.type_name)
    if parser is None:
        return variable.default
    try:
        return parser(variable.default)
    except ValueError as exc:
        logger.warning(
            "failed to parse default value",
            extra={"variable": variable.name, "value": variable.default, "error": str(exc)},
        )
        return None


def build_flag(
    variable: VariableDefinition,
    args_usage: list[str],
    operation: str = "",
) -> list[click.Option]:
    """Build the option for one variable.

    Returns an empty list for positional variables, whose comment is
    appended to ``args_usage`` instead.
    """
    if is_positional(variable.name):
        logger.debug("skip arg variable", extra={"variable": variable.name})
        args_usage.append(comment_text(variable.comment))
        return []

    flag_type = None if variable.is_list else FLAG_TYPES.get(variable.type_name)
    if flag_type is None:
        raise UnsupportedVariableTypeError(operation, variable.name, variable.type_name)

    has_default = variable.default is not None
    default = parse_default(variable)

    return [
        click.Option(
            [f"--{variable.name}", variable.name],
            type=flag_type,
            required=variable.non_null and not has_default,
            default=default,
            show_default=default is not None,
            help=comment_text(variable.comment),
        )
    ]


def build_flags(
    variables: tuple[VariableDefinition, ...],
    args_usage: list[str],
    operation: str = "",
) -> list[click.Option]:
    """Build options for all variables of an operation, in order."""
    flags: list[click.Option] = []
    for variable in variables:
        flags.extend(build_flag(variable, args_usage, operation))
    return flags
