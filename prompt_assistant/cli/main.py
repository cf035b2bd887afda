# -*- coding: utf-8 -*-
"""prompt-assistant command line entry point."""
from __future__ import annotations

import os

import click

from ..constant import DEFAULT_HOST, DEFAULT_PORT, LOG_LEVEL_ENV
from .app_cmd import app_cmd
from .providers_cmd import providers_group


@click.group()
@click.option(
    "--host",
    default=DEFAULT_HOST,
    show_default=True,
    help="API host",
)
@click.option(
    "--port",
    default=DEFAULT_PORT,
    type=int,
    show_default=True,
    help="API port",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help=f"Log level (default: ${LOG_LEVEL_ENV} or info)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    host: str,
    port: int,
    log_level: str | None,
) -> None:
    """Prompt assistant backend: providers and model listings."""
    ctx.ensure_object(dict)
    ctx.obj["host"] = host
    ctx.obj["port"] = port
    if log_level:
        os.environ[LOG_LEVEL_ENV] = log_level


cli.add_command(app_cmd)
cli.add_command(providers_group)


if __name__ == "__main__":
    cli()
