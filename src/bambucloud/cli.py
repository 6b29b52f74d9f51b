"""Thin CLI wrapper over :class:`bambucloud.Client`.

Credentials are never stored: every command logs in again, reading the
account from ``--email``/``--password`` or ``BAMBU_EMAIL``/``BAMBU_PASSWORD``
and prompting for whatever is missing.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog
import typer
from rich.console import Console
from rich.syntax import Syntax

from bambucloud.client import Client
from bambucloud.exceptions import BambuCloudError
from bambucloud.region import Region, endpoints_for

T = TypeVar("T")

app = typer.Typer(help="Query the Bambu Lab printer cloud.", invoke_without_command=True)


@dataclass(frozen=True)
class _Options:
    region: Region
    email: str | None
    password: str | None


@app.callback()
def main(
    ctx: typer.Context,
    email: str | None = typer.Option(None, envvar="BAMBU_EMAIL", help="Bambu Lab account email"),
    password: str | None = typer.Option(
        None, envvar="BAMBU_PASSWORD", help="Bambu Lab account password"
    ),
    region: Region = typer.Option(
        Region.OTHER, envvar="BAMBU_REGION", case_sensitive=False, help="Account region"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP traffic to stderr"),
) -> None:
    """Query the Bambu Lab printer cloud."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)
    _configure_logging(verbose)
    ctx.obj = _Options(region=region, email=email, password=password)


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    # Resolved per logger so a replaced sys.stderr is picked up
    return structlog.PrintLogger(sys.stderr)


def _configure_logging(verbose: bool) -> None:
    """Send library logs to stderr so stdout stays parseable."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=_stderr_logger,
    )


def _print_json(obj: object) -> None:
    """Print JSON, syntax-highlighted when stdout is a TTY, compact otherwise."""
    if sys.stdout.isatty():
        Console().print(Syntax(json.dumps(obj, indent=2), "json"))
    else:
        typer.echo(json.dumps(obj))


def _with_client(ctx: typer.Context, action: Callable[[Client], Awaitable[T]]) -> T:
    """Log in, run *action* and exit with an error message on failure."""
    opts: _Options = ctx.obj
    email = opts.email or typer.prompt("Email")
    password = opts.password or typer.prompt("Password", hide_input=True)

    async def run() -> T:
        async with await Client.login(opts.region, email, password) as client:
            return await action(client)

    try:
        return asyncio.run(run())
    except BambuCloudError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def hosts(ctx: typer.Context) -> None:
    """Show the API and MQTT hosts used for the selected region."""
    opts: _Options = ctx.obj
    endpoints = endpoints_for(opts.region)
    typer.echo(f"Region:       {opts.region}")
    typer.echo(f"User service: {endpoints.user_service}")
    typer.echo(f"IoT service:  {endpoints.iot_service}")
    typer.echo(f"MQTT host:    {endpoints.mqtt_host}")


@app.command()
def profile(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the account profile."""
    account = _with_client(ctx, lambda client: client.get_profile())
    if as_json:
        _print_json(account.model_dump(mode="json"))
        return
    typer.echo(f"{account.name} <{account.email}> (uid {account.uid})")
    typer.echo(f"  Printers: {', '.join(account.product_models) or '-'}")
    typer.echo(f"  Filament: {account.personal.task_weight_sum} g")


@app.command()
def devices(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the printers bound to the account."""
    found = _with_client(ctx, lambda client: client.get_devices())
    if as_json:
        _print_json([d.model_dump(mode="json") for d in found])
        return
    if not found:
        typer.echo("No devices found.", err=True)
        raise typer.Exit(1)
    for dev in found:
        status = "online" if dev.online else "offline"
        typer.echo(f"  {dev.name} - {dev.dev_product_name} ({status}, {dev.print_status})")
        typer.echo(f"        ID: {dev.dev_id}")


@app.command()
def tasks(
    ctx: typer.Context,
    device: str | None = typer.Option(None, "--device", "-d", help="Only tasks of this device ID"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List recent print tasks (at most 500)."""
    found = _with_client(ctx, lambda client: client.get_tasks(device))
    if as_json:
        _print_json([t.model_dump(mode="json") for t in found])
        return
    if not found:
        typer.echo("No tasks found.", err=True)
        return
    for task in found:
        started = task.start_time.strftime("%Y-%m-%d %H:%M")
        typer.echo(f"  [{started}] {task.title} on {task.device_name} ({task.weight} g)")


@app.command("camera-url")
def camera_url(
    ctx: typer.Context,
    dev_id: str = typer.Argument(..., help="Device ID (see `devices`)"),
) -> None:
    """Print a one-time camera streaming URL for a printer."""
    typer.echo(_with_client(ctx, lambda client: client.get_camera_url(dev_id)))
