import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
cli_app = typer.Typer(name="statusboard", help="Statusboard operator CLI")

_STATUS_STYLE = {
    "OPERATIONAL": "cyan",
    "DEGRADED": "yellow",
    "OFFLINE": "red",
    "MAINTENANCE": "magenta",
}
_SEVERITY_STYLE = {"INFO": "dim", "WARN": "yellow", "CRIT": "bold red"}


def _run_async(coro):
    """Run async code from sync CLI context."""
    return asyncio.run(coro)


def _make_engine(config: str | None):
    from statusboard.services.telemetry.engine import DashboardEngine

    return DashboardEngine(config_source=config)


def _print_services(engine) -> None:
    table = Table(title=f"Services ({engine.mode.value})")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Latency", justify="right")
    table.add_column("Uptime", justify="right")
    table.add_column("Region")

    for svc in engine.services:
        style = _STATUS_STYLE[svc.status.value]
        latency = "---" if svc.latency == 0 and svc.status.value == "OFFLINE" else f"{svc.latency} ms"
        table.add_row(
            svc.id,
            escape(svc.name),
            f"[{style}]{svc.status.value}[/{style}]",
            latency,
            f"{svc.uptime:.2f}%",
            escape(svc.region),
        )

    console.print(table)
    status = engine.global_status.value
    console.print(f"\n  System integrity: [bold {_STATUS_STYLE[status]}]{status}[/bold {_STATUS_STYLE[status]}]\n")


def _print_events(engine, lang: str) -> None:
    for entry in engine.events:
        style = _SEVERITY_STYLE[entry.severity.value]
        line = escape(f"{entry.timestamp} [{entry.severity.value}] {entry.message.render(lang)}")
        console.print(f"[{style}]{line}[/{style}]")


@cli_app.command("snapshot")
def snapshot(
    config: str = typer.Option(None, "--config", help="Config URL or path (defaults to STATUSBOARD_CONFIG_URL)"),
    lang: str = typer.Option("en", "--lang", help="Event log locale: 'en' or 'zh'"),
):
    """Resolve config, run a single cycle and print the service table."""
    async def _snapshot():
        engine = _make_engine(config)
        try:
            await engine.refresh()
        finally:
            await engine.stop()
        return engine

    engine = _run_async(_snapshot())
    _print_services(engine)
    _print_events(engine, lang)


@cli_app.command("watch")
def watch(
    seconds: float = typer.Option(10.0, "--seconds", min=0.0, help="How long to run the engine"),
    config: str = typer.Option(None, "--config", help="Config URL or path (defaults to STATUSBOARD_CONFIG_URL)"),
    lang: str = typer.Option("en", "--lang", help="Event log locale: 'en' or 'zh'"),
):
    """Run the engine for a while, then print the final state and event log."""
    async def _watch():
        engine = _make_engine(config)
        await engine.start()
        try:
            await asyncio.sleep(seconds)
        finally:
            await engine.stop()
        return engine

    engine = _run_async(_watch())
    _print_services(engine)
    _print_events(engine, lang)


@cli_app.command("normalize")
def normalize(
    token: str = typer.Argument(help="Upstream status token"),
):
    """Print the canonical status for an upstream status token."""
    from statusboard.config import settings
    from statusboard.services.telemetry.normalizer import normalize_status, parse_status_setting

    status = normalize_status(token, parse_status_setting(settings.statusboard_empty_status_default))
    console.print(f"[{_STATUS_STYLE[status.value]}]{status.value}[/{_STATUS_STYLE[status.value]}]")


def main():
    cli_app()


if __name__ == "__main__":
    main()
