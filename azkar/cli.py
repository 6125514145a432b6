"""
Azkar CLI Interface
Command line interface implemented using Typer
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

import typer

from azkar.config.loader import get_config
from azkar.core.bridge import HttpBridge
from azkar.core.coordinator import ViewCoordinator, ViewSnapshot
from azkar.core.interval_sync import display_seconds
from azkar.core.logger import get_logger, setup_logging
from azkar.core.units import to_seconds
from azkar.models.entities import IntervalDisplay, Unit

logger = get_logger(__name__)

app = typer.Typer(help="Azkar reminder: manage phrases and the notification interval")

T = TypeVar("T")


def _make_bridge() -> HttpBridge:
    config = get_config()
    return HttpBridge(
        config.get("client.base_url", "http://127.0.0.1:8765"),
        timeout=float(config.get("client.timeout", 10.0)),
    )


def _with_view(action: Callable[[ViewCoordinator], Awaitable[T]]) -> T:
    """Open a view against the dev server, run ``action``, always tear down"""

    async def runner() -> T:
        bridge = _make_bridge()
        try:
            async with ViewCoordinator(bridge) as view:
                if view.state is None:
                    typer.echo("Could not reach the store, is `azkar serve` running?", err=True)
                    raise typer.Exit(1)
                return await action(view)
        finally:
            await bridge.aclose()

    return asyncio.run(runner())


def _print_snapshot(snapshot: ViewSnapshot) -> None:
    status = "paused" if snapshot.is_paused else "active"
    typer.echo(f"Today's azkar: {snapshot.daily_count} ({status})")
    typer.echo(f"Interval: {snapshot.interval_value} {snapshot.interval_unit}")
    typer.echo(f"Start at login: {'on' if snapshot.autostart else 'off'}")
    for row in snapshot.rows:
        typer.echo(f"  [{row.id}] {row.text}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Server host address"),
    port: Optional[int] = typer.Option(None, help="Server port"),
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
    debug: bool = typer.Option(False, help="Enable debug mode"),
):
    """Start the development store server"""
    import uvicorn

    config = get_config(config_file)
    setup_logging()
    host = host or config.get("server.host", "127.0.0.1")
    port = port or int(config.get("server.port", 8765))

    logger.info(f"Starting Azkar API server on {host}:{port}")
    uvicorn.run(
        "azkar.app:app",
        host=host,
        port=port,
        reload=debug,
        log_level="debug" if debug else "info",
    )


@app.command()
def show():
    """Print the current state"""

    async def action(view: ViewCoordinator) -> None:
        _print_snapshot(view.snapshot())

    _with_view(action)


@app.command()
def add(text: str = typer.Argument(..., help="Phrase text")):
    """Add a phrase"""

    async def action(view: ViewCoordinator) -> bool:
        view.items.set_new_item_text(text)
        return await view.items.add()

    if not _with_view(action):
        typer.echo("Phrase not added", err=True)
        raise typer.Exit(1)
    typer.echo("Added")


@app.command()
def edit(
    phrase_id: str = typer.Argument(..., help="Phrase id"),
    text: str = typer.Argument(..., help="New text"),
):
    """Replace a phrase's text"""

    async def action(view: ViewCoordinator) -> bool:
        if not view.items.begin_edit(phrase_id):
            return False
        view.items.update_draft(text)
        return await view.items.save()

    if not _with_view(action):
        typer.echo("Phrase not updated", err=True)
        raise typer.Exit(1)
    typer.echo("Updated")


@app.command()
def remove(phrase_id: str = typer.Argument(..., help="Phrase id")):
    """Remove a phrase"""

    async def action(view: ViewCoordinator) -> bool:
        return await view.items.remove(phrase_id)

    if not _with_view(action):
        typer.echo("Phrase not removed", err=True)
        raise typer.Exit(1)
    typer.echo("Removed")


def _interval_rejection(value: str, unit: Unit) -> str:
    seconds = display_seconds(IntervalDisplay(raw_input=value, unit=unit))
    if seconds is None:
        return f"{value!r} is not a number"
    if to_seconds(seconds, Unit.SECONDS) < 1:
        return f"{value} {unit.value} is less than one second"
    return "the store did not accept the update"


@app.command()
def interval(
    value: str = typer.Argument(..., help="Interval value, e.g. 1.5"),
    unit: Unit = typer.Option(Unit.MINUTES, help="Unit of VALUE"),
):
    """Set the notification interval"""

    async def action(view: ViewCoordinator) -> Optional[str]:
        view.interval.set_unit(unit)
        if await view.interval.type_value(value) is None:
            return None
        return f"{view.interval.raw_input} {view.interval.unit.value}"

    shown = _with_view(action)
    if shown is None:
        typer.echo(f"Interval not changed: {_interval_rejection(value, unit)}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Interval: {shown}")


class Switch(str, Enum):
    ON = "on"
    OFF = "off"


@app.command()
def autostart(switch: Switch = typer.Argument(..., help="on or off")):
    """Enable or disable start at login"""
    enable = switch == Switch.ON

    async def action(view: ViewCoordinator) -> bool:
        if view.client.autostart == enable:
            return True
        return await view.toggle_autostart()

    if not _with_view(action):
        raise typer.Exit(1)
    typer.echo(f"Start at login: {'on' if enable else 'off'}")


@app.command()
def pause():
    """Pause or resume notifications"""

    async def action(view: ViewCoordinator) -> Optional[bool]:
        state = await view.toggle_pause()
        return None if state is None else state.is_paused

    paused = _with_view(action)
    if paused is None:
        raise typer.Exit(1)
    typer.echo("Paused" if paused else "Resumed")


@app.command()
def watch():
    """Print the state every time the store reports a change (Ctrl+C to stop)"""

    async def action(view: ViewCoordinator) -> None:
        view.client.subscribe(lambda state: _print_snapshot(view.snapshot()))
        await asyncio.Event().wait()

    try:
        _with_view(action)
    except KeyboardInterrupt:
        logger.info("Watch stopped")


def main():
    """Main function"""
    app()


if __name__ == "__main__":
    main()
