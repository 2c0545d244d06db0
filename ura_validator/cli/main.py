"""URA Validator CLI - Main entry point."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ura_validator.cli.validation_commands import domains, hash_payload, rulesets, validate
from ura_validator.config import Settings, get_settings
from ura_validator.validation.domains import DOMAIN_PROFILES

app = typer.Typer(
    name="ura",
    help="URA Validator - validation as a service CLI",
    no_args_is_help=True,
)

app.command("validate")(validate)
app.command("hash")(hash_payload)
app.command("domains")(domains)
app.command("rulesets")(rulesets)

console = Console()


def _status_rows(settings: Settings) -> list[tuple[str, str, str]]:
    if settings.ai_configured:
        ai_status = "[green]Connected[/green]"
    elif not settings.ai_enabled:
        ai_status = "[yellow]Disabled[/yellow]"
    else:
        ai_status = "[red]Missing API Key[/red]"
    tracing_on = bool(settings.langsmith_api_key) and settings.langsmith_tracing
    return [
        ("AI Provider (xAI)", ai_status, f"{settings.xai_model}, timeout {settings.ai_timeout_seconds:g}s"),
        (
            "LangSmith Tracing",
            "[green]Enabled[/green]" if tracing_on else "[yellow]Disabled[/yellow]",
            settings.langsmith_project,
        ),
        (
            "Attestation",
            "[green]Remote[/green]" if settings.attestation_base_url else "[cyan]In-memory[/cyan]",
            settings.attestation_base_url or "local ledger",
        ),
        ("Sanctions List", "[green]Loaded[/green]", f"{len(settings.sanctioned_addresses)} addresses"),
        ("Validation Types", "[green]Ready[/green]", ", ".join(domain.value for domain in DOMAIN_PROFILES)),
        (
            "API Server",
            "[yellow]Debug Mode[/yellow]" if settings.debug else "[green]Ready[/green]",
            f"{settings.host}:{settings.port}",
        ),
    ]


@app.command()
def status() -> None:
    """Show configuration status."""
    settings = get_settings()
    console.print(
        Panel(
            f"[bold cyan]URA Validator[/bold cyan] - {settings.validator_name}",
            title="System Status",
            border_style="cyan",
        )
    )

    table = Table(border_style="cyan")
    table.add_column("Component", style="bold white")
    table.add_column("Status", justify="center")
    table.add_column("Details", style="dim")
    for row in _status_rows(settings):
        table.add_row(*row)
    console.print(table)


@app.command()
def server() -> None:
    """Start the FastAPI server."""
    import uvicorn

    settings = get_settings()
    console.print(
        Panel(
            f"[bold cyan]Serving {settings.validator_name}[/bold cyan] on "
            f"http://{settings.host}:{settings.port}/v1 (debug={settings.debug})",
            title="Server",
            border_style="cyan",
        )
    )
    uvicorn.run("ura_validator.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    app()
