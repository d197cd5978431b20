"""Entry point: python -m gqlcli

Reads the GraphQL document named by GQL_CONF, builds one subcommand per
operation and runs the one selected on the command line.
"""

from __future__ import annotations

import sys
from typing import Mapping, Sequence

import click

from .commands import build_cli
from .config import Settings
from .errors import ConfigError, DocumentError, GqlCliError
from .loader import load_document
from .logs import setup_logging
from .transport import GraphQLTransport


def main(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    try:
        settings = Settings.from_env(environ)
        logger = setup_logging(settings)
    except ConfigError as exc:
        click.echo(f"failed to set logging: {exc}", err=True)
        return 1

    fields = {"config": settings.config}

    logger.debug("reading config", extra=fields)
    try:
        document = load_document(settings.config)
    except ConfigError as exc:
        logger.error("failed to read config file", extra={**fields, "error": str(exc)})
        return 1
    except DocumentError as exc:
        logger.error("failed to parse query", extra={**fields, "error": str(exc)})
        return 1

    logger.debug("building cli", extra=fields)
    transport = GraphQLTransport(settings.url, timeout=settings.timeout)
    try:
        cli = build_cli(document, transport, settings.command_name)
    except DocumentError as exc:
        logger.error("failed to parse query", extra={**fields, "error": str(exc)})
        return 1

    logger.debug("executing cli", extra=fields)
    try:
        rv = cli.main(
            args=list(argv) if argv is not None else None,
            prog_name=settings.command_name,
            standalone_mode=False,
        )
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        logger.error("failed to run command", extra={**fields, "error": "interrupted"})
        return 1
    except GqlCliError as exc:
        logger.error("failed to run command", extra={**fields, "error": str(exc)})
        return 1
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    sys.exit(main())
