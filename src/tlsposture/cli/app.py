"""Main CLI application using Typer."""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tlsposture.version import __version__
from tlsposture.core.config import get_settings
from tlsposture.core.exceptions import (
    ConfigurationError,
    ConnectivityError,
    EvaluationTimeoutError,
    ValidationError,
)
from tlsposture.core.logging import setup_logging

app = typer.Typer(
    name="tlsposture",
    help="tlsposture - TLS and certificate posture evaluation",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"tlsposture version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """tlsposture - TLS and certificate posture evaluation."""
    setup_logging()


@app.command()
def check(
    domain: Annotated[str, typer.Argument(help="Target hostname or https:// URL")],
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", help="TLS port (default: DEFAULT_PORT setting)", min=1, max=65535),
    ] = None,
    format_type: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json"),
    ] = "table",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the JSON report to a file"),
    ] = None,
    no_ciphers: Annotated[
        bool,
        typer.Option("--no-ciphers", help="Skip cipher suite enumeration"),
    ] = False,
    no_hsts: Annotated[
        bool,
        typer.Option("--no-hsts", help="Skip the HSTS header request"),
    ] = False,
) -> None:
    """
    Evaluate the TLS posture of a host.

    Examples:
        tlsposture check example.com
        tlsposture check https://example.com/login --format json
        tlsposture check example.com --port 8443 --no-ciphers
    """
    from tlsposture.cli.formatters import format_json, format_report
    from tlsposture.cli.formatters.json_fmt import export_json
    from tlsposture.models import EvaluationOptions, TargetHost
    from tlsposture.scanners.tls import TLSPostureScanner

    try:
        target = TargetHost.from_input(domain, port=port or get_settings().default_port)
    except ValidationError as e:
        console.print(f"[red]Invalid domain: {e.message}[/red]")
        raise typer.Exit(1) from None

    options = EvaluationOptions(
        enumerate_ciphers=False if no_ciphers else None,
        check_hsts=False if no_hsts else None,
    )
    scanner = TLSPostureScanner()

    with console.status(f"[bold green]Evaluating {target.identifier}...[/bold green]"):
        try:
            report = asyncio.run(scanner.scan(target, options))
        except ValidationError as e:
            console.print(f"[red]Invalid domain: {e.message}[/red]")
            raise typer.Exit(1) from None
        except ConnectivityError as e:
            console.print(f"[red]Cannot connect to host: {e.message}[/red]")
            raise typer.Exit(1) from None
        except EvaluationTimeoutError as e:
            console.print(f"[red]{e.message}[/red]")
            raise typer.Exit(1) from None
        except Exception as e:
            console.print(f"[red]Evaluation failed: {e}[/red]")
            raise typer.Exit(1) from None

    if output:
        export_json(report, output)
        console.print(f"[green]Report saved to {output}[/green]")

    if format_type == "json":
        format_json(console, report)
    else:
        format_report(console, report)


@app.command()
def config(
    show: Annotated[
        bool,
        typer.Option("--show", "-s", help="Show current configuration"),
    ] = False,
    validate: Annotated[
        bool,
        typer.Option("--validate", help="Validate configuration"),
    ] = False,
) -> None:
    """Manage configuration settings."""
    if validate:
        get_settings.cache_clear()
        try:
            get_settings()
        except ConfigurationError as e:
            console.print("[red]Configuration errors:[/red]")
            for error in e.details["errors"]:
                field = ".".join(str(part) for part in error["loc"]) or "settings"
                console.print(f"  - {field}: {error['msg']}")
            raise typer.Exit(1) from None
        console.print("[green]Configuration is valid[/green]")
        if not show:
            return

    settings = get_settings()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("API Host", settings.api_host)
    table.add_row("API Port", str(settings.api_port))
    table.add_row("Log Level", settings.log_level)
    table.add_row("Log Format", settings.log_format)
    table.add_row("Default Port", str(settings.default_port))
    table.add_row("Probe Timeout", f"{settings.probe_timeout:g}s")
    table.add_row("Evaluation Timeout", f"{settings.get_evaluation_timeout():g}s")
    table.add_row("DNS Timeout", f"{settings.dns_timeout:g}s")
    table.add_row("HTTP Timeout", f"{settings.http_timeout:g}s")
    table.add_row("Cipher Enumeration", "on" if settings.cipher_enumeration_enabled else "off")
    table.add_row("Enumeration Concurrency", str(settings.cipher_enumeration_concurrency))
    table.add_row("HSTS Check", "on" if settings.hsts_check_enabled else "off")

    console.print(table)


@app.command()
def serve(
    host: Annotated[
        str,
        typer.Option("--host", "-h", help="Host to bind to"),
    ] = "0.0.0.0",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to bind to"),
    ] = 8000,
    reload: Annotated[
        bool,
        typer.Option("--reload", "-r", help="Enable auto-reload for development"),
    ] = False,
) -> None:
    """Start the REST API server."""
    import uvicorn

    console.print(
        Panel(
            f"[bold blue]Starting API Server[/bold blue]\n"
            f"Host: [green]{host}[/green]\n"
            f"Port: [green]{port}[/green]\n"
            f"Docs: [cyan]http://{host}:{port}/docs[/cyan]",
            title="API Server",
        )
    )

    uvicorn.run(
        "tlsposture.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
