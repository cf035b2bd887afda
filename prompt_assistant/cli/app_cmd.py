# -*- coding: utf-8 -*-
"""Run the HTTP API server."""
from __future__ import annotations

import click
import uvicorn

from ..app import setup_logging


@click.command("app")
@click.option("--reload", is_flag=True, help="Reload on code changes (dev)")
@click.pass_context
def app_cmd(ctx: click.Context, reload: bool) -> None:
    """Start the API server on the global --host/--port."""
    setup_logging()
    uvicorn.run(
        "prompt_assistant.app:create_app",
        factory=True,
        host=ctx.obj["host"],
        port=ctx.obj["port"],
        reload=reload,
    )
