"""Local validation, hashing, and catalog CLI commands."""

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ura_validator.config import get_settings
from ura_validator.platform_api.runtime import build_runtime
from ura_validator.validation.domains import DOMAIN_PROFILES, parse_domain
from ura_validator.validation.errors import ConfigError, MalformedPayloadError
from ura_validator.validation.models import ValidationOutcome, ValidationRequest
from ura_validator.validation.proof import data_hash

console = Console()


def _load_payload(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read payload from {path}: {e}[/red]")
        raise typer.Exit(1)


def _render_outcome(outcome: ValidationOutcome) -> None:
    verdict = outcome.verdict
    verdict_label = "[bold green]VALID[/bold green]" if verdict.is_valid else "[bold red]INVALID[/bold red]"
    border = "green" if verdict.is_valid else "red"
    panel_content = (
        f"{verdict_label}\n\n"
        f"[cyan]Confidence:[/cyan] {verdict.confidence:.2f}\n"
        f"[cyan]Timestamp:[/cyan]  {verdict.timestamp}"
    )
    if outcome.proof is not None:
        panel_content += (
            f"\n[cyan]Data hash:[/cyan]  {outcome.proof.data_hash}"
            f"\n[cyan]Proof hash:[/cyan] {outcome.proof.proof_hash}"
        )
    if verdict.errors:
        panel_content += f"\n[red]Errors:[/red]     {'; '.join(verdict.errors)}"
    console.print(Panel(panel_content, title="Verdict", border_style=border))
    console.print(Panel(json.dumps(dict(verdict.details), indent=2, default=str), title="Details", border_style="cyan"))


async def _validate(domain: str, payload: Any, rule_set_id: str | None) -> ValidationOutcome:
    runtime = build_runtime(get_settings())
    resolved = parse_domain(domain)
    request = ValidationRequest(
        payload=payload,
        rule_set_id=rule_set_id or DOMAIN_PROFILES[resolved].default_rule_set_id,
        domain=resolved,
    )
    return await runtime.engine.validate(request)


def validate(
    domain: str = typer.Argument(..., help="Validation type, e.g. DEFI_KYC or web3-social"),
    payload_file: Path = typer.Argument(..., help="JSON file holding the payload"),
    rule_set: str = typer.Option(None, "--rule-set", "-r", help="Rule set ID (defaults to the domain default)"),
) -> None:
    """Validate a payload locally and print the verdict and proof."""
    payload = _load_payload(payload_file)
    try:
        outcome = asyncio.run(_validate(domain, payload, rule_set))
    except ConfigError as e:
        console.print(f"[red]{e.code}: {e.message}[/red]")
        raise typer.Exit(1)
    _render_outcome(outcome)
    if not outcome.verdict.is_valid:
        raise typer.Exit(2)


def hash_payload(
    payload_file: Path = typer.Argument(..., help="JSON file holding the payload"),
) -> None:
    """Print the canonical data hash of a payload."""
    payload = _load_payload(payload_file)
    try:
        console.print(data_hash(payload))
    except MalformedPayloadError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)


def domains() -> None:
    """List validation types and their default rule sets."""
    table = Table(title="Validation Types", border_style="cyan")
    table.add_column("Type", style="bold cyan")
    table.add_column("Default Rule Set", style="yellow")
    table.add_column("Capabilities", style="white")
    for profile in DOMAIN_PROFILES.values():
        table.add_row(profile.domain.value, profile.default_rule_set_id, ", ".join(profile.capabilities))
    console.print(table)


def rulesets(
    domain: str = typer.Option(None, "--domain", "-d", help="Only show rule sets for this validation type"),
) -> None:
    """List the seeded rule sets and their thresholds."""
    runtime = build_runtime(get_settings())
    try:
        resolved = parse_domain(domain) if domain else None
    except ConfigError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)

    table = Table(title="Rule Sets", border_style="cyan")
    table.add_column("ID", style="bold cyan")
    table.add_column("Type", style="yellow")
    table.add_column("Active", justify="center")
    table.add_column("Parameters", style="dim")
    for record in runtime.registry.list(resolved):
        parameters = ", ".join(f"{key}={value}" for key, value in record.thresholds.items())
        active = "[green]yes[/green]" if record.active else "[red]no[/red]"
        table.add_row(record.id, record.domain.value, active, parameters)
    console.print(table)
