# -*- coding: utf-8 -*-
"""CLI commands for managing providers via HTTP API (/providers, /models)."""
from __future__ import annotations

from typing import Optional, Tuple

import click

from .http import client, print_json, raise_for_api_error, resolve_base_url

_BASE_URL_HELP = "Override the API address, e.g. http://127.0.0.1:8088"


def _echo_provider(p: dict) -> None:
    kind = "built-in" if p.get("builtin") else "custom"
    mark = "✓" if p.get("available") else "✗"
    click.echo(f"\n{'─' * 44}")
    click.echo(f"  {p['name']} ({p['id']}) [{kind}] [{mark}]")
    click.echo(f"{'─' * 44}")
    config = p.get("config") or {}
    for key in ("type", "env_var", "base_url", "api_key"):
        if config.get(key):
            click.echo(f"  {key:16s}: {config[key]}")
    if not p.get("available") and p.get("unavailable_reason"):
        click.echo(f"  {'unavailable':16s}: {p['unavailable_reason']}")


@click.group("providers")
def providers_group() -> None:
    """Manage AI providers via the HTTP API.

    \b
    Examples:
      prompt-assistant providers list
      prompt-assistant providers add my-llm --name "My LLM" \\
          --type openai_compatible --endpoint http://localhost:8000/v1
      prompt-assistant providers filter my-llm model-a model-b
      prompt-assistant providers models openai --refresh
      prompt-assistant providers delete my-llm
    """


@providers_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@click.option("--base-url", default=None, help=_BASE_URL_HELP)
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool, base_url: Optional[str]):
    """Show built-in and custom providers."""
    base_url = resolve_base_url(ctx, base_url)
    with client(base_url) as c:
        r = c.get("/providers")
        raise_for_api_error(r)
        data = r.json()
    if as_json:
        print_json(data)
        return
    click.echo("\n=== Providers ===")
    for p in data["providers"]:
        _echo_provider(p)
    click.echo()


@providers_group.command("add")
@click.argument("provider_id")
@click.option("--name", required=True, help="Display name")
@click.option(
    "--type",
    "type_",
    type=click.Choice(["api_key", "openai_compatible", "cli"]),
    default="openai_compatible",
    show_default=True,
    help="Provider kind",
)
@click.option("--env-var", default="", help="Env var holding the API key")
@click.option("--api-key", default="", help="Inline API key")
@click.option("--endpoint", default="", help="Provider API base URL")
@click.option(
    "--model",
    "models",
    multiple=True,
    help="Static model id (repeatable)",
)
@click.option(
    "--dynamic/--static",
    default=False,
    help="Whether models are listed from the API",
)
@click.option("--base-url", default=None, help=_BASE_URL_HELP)
@click.pass_context
def add_cmd(
    ctx: click.Context,
    provider_id: str,
    name: str,
    type_: str,
    env_var: str,
    api_key: str,
    endpoint: str,
    models: Tuple[str, ...],
    dynamic: bool,
    base_url: Optional[str],
) -> None:
    """Add a custom provider.

    \b
    PROVIDER_ID  lowercase letters, digits and dashes (2-32 chars).
    """
    payload = {
        "id": provider_id,
        "name": name,
        "config": {
            "type": type_,
            "env_var": env_var,
            "api_key": api_key,
            "base_url": endpoint,
        },
        "supports_dynamic_models": dynamic,
        "models": [{"id": m, "label": m} for m in models],
    }
    base_url = resolve_base_url(ctx, base_url)
    with client(base_url) as c:
        r = c.post("/providers", json=payload)
        raise_for_api_error(r)
    click.echo(f"✓ Added provider {provider_id}")


@providers_group.command("delete")
@click.argument("provider_id")
@click.option("--base-url", default=None, help=_BASE_URL_HELP)
@click.pass_context
def delete_cmd(
    ctx: click.Context,
    provider_id: str,
    base_url: Optional[str],
) -> None:
    """Delete a custom provider and its model filter."""
    base_url = resolve_base_url(ctx, base_url)
    with client(base_url) as c:
        r = c.delete(f"/providers/{provider_id}")
        raise_for_api_error(r)
    click.echo(f"✓ Deleted provider {provider_id}")


@providers_group.command("test")
@click.argument("provider_id")
@click.option("--base-url", default=None, help=_BASE_URL_HELP)
@click.pass_context
def test_cmd(
    ctx: click.Context,
    provider_id: str,
    base_url: Optional[str],
) -> None:
    """Check whether a provider is configured."""
    base_url = resolve_base_url(ctx, base_url)
    with client(base_url) as c:
        r = c.post(f"/providers/{provider_id}/test")
        raise_for_api_error(r)
        data = r.json()
    if data["success"]:
        click.echo(f"✓ {data['message']}")
    else:
        click.echo(click.style(f"✗ {data['message']}", fg="red"))
        raise SystemExit(1)


@providers_group.command("filter")
@click.argument("provider_id")
@click.argument("model_ids", nargs=-1)
@click.option("--clear", is_flag=True, help="Remove the filter")
@click.option("--base-url", default=None, help=_BASE_URL_HELP)
@click.pass_context
def filter_cmd(
    ctx: click.Context,
    provider_id: str,
    model_ids: Tuple[str, ...],
    clear: bool,
    base_url: Optional[str],
) -> None:
    """Show or set the models shown for a provider.

    \b
    Without MODEL_IDS the current filter is printed; with --clear
    the filter is removed.
    """
    base_url = resolve_base_url(ctx, base_url)
    with client(base_url) as c:
        if model_ids or clear:
            r = c.put(
                f"/providers/{provider_id}/filtered-models",
                json={"model_ids": [] if clear else list(model_ids)},
            )
        else:
            r = c.get(f"/providers/{provider_id}/filtered-models")
        raise_for_api_error(r)
        print_json(r.json())


@providers_group.command("models")
@click.argument("provider_id")
@click.option("--refresh", is_flag=True, help="Bypass the model cache")
@click.option("--all", "show_all", is_flag=True, help="Ignore the filter")
@click.option("--base-url", default=None, help=_BASE_URL_HELP)
@click.pass_context
def models_cmd(
    ctx: click.Context,
    provider_id: str,
    refresh: bool,
    show_all: bool,
    base_url: Optional[str],
) -> None:
    """List a provider's models."""
    base_url = resolve_base_url(ctx, base_url)
    with client(base_url) as c:
        if show_all:
            r = c.get(f"/providers/{provider_id}/available-models")
        else:
            r = c.get(
                "/models",
                params={
                    "provider": provider_id,
                    "refresh": str(refresh).lower(),
                },
            )
        raise_for_api_error(r)
        print_json(r.json())


@providers_group.command("rescan")
@click.option("--base-url", default=None, help=_BASE_URL_HELP)
@click.pass_context
def rescan_cmd(ctx: click.Context, base_url: Optional[str]) -> None:
    """Clear the model cache and re-list every available provider."""
    base_url = resolve_base_url(ctx, base_url)
    with client(base_url) as c:
        r = c.post("/providers/rescan")
        raise_for_api_error(r)
        print_json(r.json())


@providers_group.command("clear-cache")
@click.argument("provider_id", required=False, default=None)
@click.option("--base-url", default=None, help=_BASE_URL_HELP)
@click.pass_context
def clear_cache_cmd(
    ctx: click.Context,
    provider_id: Optional[str],
    base_url: Optional[str],
) -> None:
    """Clear cached model lists (one provider or all)."""
    params = {"provider": provider_id} if provider_id else {}
    base_url = resolve_base_url(ctx, base_url)
    with client(base_url) as c:
        r = c.delete("/models/cache", params=params)
        raise_for_api_error(r)
    click.echo(f"✓ Cleared model cache for {provider_id or 'all providers'}")
