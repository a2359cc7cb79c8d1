"""Table formatter for CLI output."""

from datetime import datetime
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tlsposture.models import PostureReport

GRADE_STYLES = {
    "A+": "bold green",
    "A": "green",
    "B": "blue",
    "C": "yellow",
    "D": "orange1",
    "E": "red",
    "F": "bold red",
}

SEVERITY_COLORS = {
    "critical": "red",
    "high": "orange1",
    "medium": "yellow",
    "low": "green",
    "none": "white",
}


def _format_date(date_value: Any) -> str:
    """Safely format a date value to string."""
    if date_value is None:
        return "N/A"
    if isinstance(date_value, datetime):
        return str(date_value.date())
    return str(date_value)


def _flag(value: bool | None, good_when: bool = True) -> str:
    if value is None:
        return "[dim]not measured[/dim]"
    color = "green" if value == good_when else "red"
    return f"[{color}]{'Yes' if value else 'No'}[/{color}]"


def format_report(console: Console, report: PostureReport) -> None:
    """Format and display a posture report as tables."""
    grading = report.grading
    style = GRADE_STYLES.get(grading.grade, "white")

    console.print()
    console.print(
        Panel(
            f"Target: [cyan]{report.domain}:{report.port}[/cyan]\n"
            f"Grade: [{style}]{grading.grade}[/{style}] "
            f"({grading.score}/100, {grading.security_level})",
            title="TLS Posture",
        )
    )

    _format_certificate(console, report)
    _format_protocols(console, report)
    _format_cipher(console, report)
    _format_details(console, report)
    _format_simulations(console, report)
    _format_recommendations(console, report)


def _format_certificate(console: Console, report: PostureReport) -> None:
    cert = report.certificate
    table = Table(title="Certificate", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Subject", cert.subject or "N/A")
    table.add_row("Issuer", cert.issuer or "N/A")

    expiry = _format_date(cert.not_after)
    days = cert.days_remaining
    if days < 30:
        expiry = f"[red]{expiry} ({days} days)[/red]"
    elif days < 90:
        expiry = f"[yellow]{expiry} ({days} days)[/yellow]"
    else:
        expiry = f"{expiry} ({days} days)"
    table.add_row("Expires", expiry)

    key = f"{cert.key_algorithm or 'Unknown'} {cert.key_size or '?'} bits"
    table.add_row("Key", key)
    table.add_row("Signature", cert.signature_algorithm or "N/A")
    table.add_row("Self-signed", "Yes" if cert.is_self_signed else "No")
    table.add_row("Chain length", str(cert.chain_length))
    if cert.subject_alt_names:
        table.add_row("SANs", ", ".join(cert.subject_alt_names[:5]))
    table.add_row("SHA-256", cert.fingerprint_sha256)

    console.print(table)


def _format_protocols(console: Console, report: PostureReport) -> None:
    table = Table(title="Protocol Versions", show_header=True)
    table.add_column("Version", style="cyan")
    table.add_column("Supported")
    table.add_column("Cipher")
    table.add_column("Latency")
    table.add_column("Error", style="dim")

    for result in report.tls_versions.values():
        deprecated = result.version.value in ("TLSv1", "TLSv1.1")
        supported = _flag(result.supported, good_when=not deprecated)
        latency = f"{result.latency_ms:.0f} ms" if result.latency_ms is not None else ""
        table.add_row(
            result.name,
            supported,
            result.cipher.name if result.cipher else "",
            latency if result.supported else "",
            result.error or "",
        )

    console.print(table)
    analysis = report.protocol_analysis
    console.print(f"Protocol score: [bold]{analysis.score}[/bold]/100")


def _format_cipher(console: Console, report: PostureReport) -> None:
    analysis = report.cipher_analysis
    details = analysis.details
    console.print(
        f"\n[bold]Cipher:[/bold] {details.name or 'N/A'} "
        f"({details.bits or '?'} bits, {details.key_exchange or '?'}) "
        f"rating [bold]{analysis.rating}[/bold], score {analysis.score}/100"
    )
    if report.supported_ciphers:
        table = Table(title="Accepted Cipher Suites", show_header=True)
        table.add_column("Version", style="cyan")
        table.add_column("Suites")
        for version, suites in report.supported_ciphers.items():
            table.add_row(version, "\n".join(suites) or "[dim]none from sample[/dim]")
        console.print(table)


def _format_details(console: Console, report: PostureReport) -> None:
    details = report.protocol_details
    table = Table(title="Protocol Details", show_header=True)
    table.add_column("Feature", style="cyan")
    table.add_column("Value")

    hsts = _flag(details.hsts)
    if details.hsts and details.hsts_max_age is not None:
        hsts += f" (max-age={details.hsts_max_age})"
    table.add_row("HSTS", hsts)
    table.add_row("Compression", _flag(details.compression, good_when=False))
    table.add_row("ALPN", details.alpn or "[dim]none[/dim]")
    table.add_row("OCSP stapling", _flag(details.ocsp_stapling))
    table.add_row("Heartbeat", _flag(details.heartbeat, good_when=False))
    table.add_row("Secure renegotiation", _flag(details.secure_renegotiation))

    console.print(table)


def _format_simulations(console: Console, report: PostureReport) -> None:
    if not report.handshake_simulations:
        return

    table = Table(title="Handshake Simulation", show_header=True)
    table.add_column("Client", style="cyan")
    table.add_column("Protocol")
    table.add_column("Result")
    table.add_column("Cipher")

    for sim in report.handshake_simulations:
        outcome = "[green]Success[/green]" if sim.success else f"[red]{sim.reason}[/red]"
        table.add_row(sim.client, sim.protocol.display_name, outcome, sim.cipher or "")

    console.print(table)


def _format_recommendations(console: Console, report: PostureReport) -> None:
    if not report.recommendations:
        console.print("\n[green]No recommendations[/green]")
        return

    console.print(f"\n[bold]Recommendations ({len(report.recommendations)}):[/bold]")
    for rec in report.recommendations:
        color = SEVERITY_COLORS.get(rec.severity.value, "white")
        console.print(f"  [{color}]{rec.severity.value.upper()}[/{color}]: {rec.issue}")
        console.print(f"    [dim]{rec.remediation}[/dim]")
