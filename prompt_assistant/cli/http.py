# -*- coding: utf-8 -*-
from __future__ import annotations

import json
from typing import Any, Optional

import click
import httpx

from ..constant import DEFAULT_HOST, DEFAULT_PORT

DEFAULT_BASE_URL = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"


def client(base_url: str) -> httpx.Client:
    return httpx.Client(base_url=base_url.rstrip("/"), timeout=30.0)


def print_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def resolve_base_url(ctx: click.Context, base_url: Optional[str]) -> str:
    """Resolve base_url with priority:
    1) command --base-url
    2) global --host/--port
    """
    if base_url:
        return base_url.rstrip("/")
    host = (ctx.obj or {}).get("host", DEFAULT_HOST)
    port = (ctx.obj or {}).get("port", DEFAULT_PORT)
    return f"http://{host}:{port}"


def raise_for_api_error(r: httpx.Response) -> None:
    """Turn an API error response into a ClickException with its detail."""
    if r.status_code < 400:
        return
    try:
        detail = r.json().get("detail", r.text)
    except ValueError:
        detail = r.text
    raise click.ClickException(f"{r.status_code}: {detail}")
