"""
climate-futures CLI

Serve the API, generate scenarios and inspect stored scenarios from the shell
"""
import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from climate_futures.baseline import DEFAULT_BASELINE, DEFAULT_IMPACTS
from climate_futures.config import get_config
from climate_futures.llm.adapter import LLMAdapter
from climate_futures.scenario.constraints import build_speculative_forecast
from climate_futures.scenario.models import Scenario, ScenarioRequest
from climate_futures.scenario.pipeline import ScenarioGenerator
from climate_futures.storage import create_store
from climate_futures.utils import ClimateFuturesError, setup_logging

console = Console()


def _print_scenario(scenario: Scenario) -> None:
    console.print(f"\n[bold blue]#{scenario.id}[/bold blue] {scenario.theme}")
    console.print(f"[dim]{scenario.user_input} - {scenario.created_at:%Y-%m-%d %H:%M} UTC[/dim]")

    table = Table(title="2100 forecasts")
    table.add_column("Indicator", style="cyan")
    table.add_column("Value", style="magenta", justify="right")
    for name, value in scenario.alt_forecasts.present().items():
        table.add_row(name, f"{value:,.2f}")
    console.print(table)
    console.print(f"\n{scenario.narrative}")


# ═══════════════════════════════════════════════════════════════════
# MAIN CLI GROUP
# ═══════════════════════════════════════════════════════════════════

@click.group()
@click.version_option(version='0.1.0')
def main():
    """
    climate-futures - speculative climate scenario backend
    """
    config = get_config()
    setup_logging(config.log_level, config.log_file)


@main.command()
@click.option('--host', default=None, help='Bind address (default: config api_host)')
@click.option('--port', default=None, type=int, help='Port (default: config api_port)')
def serve(host, port):
    """Run the HTTP API with uvicorn"""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "climate_futures.api.main:create_app",
        factory=True,
        host=host or config.api_host,
        port=port or config.api_port,
    )


@main.command()
@click.argument('user_input')
def generate(user_input):
    """Generate and store a scenario for USER_INPUT"""
    config = get_config()
    store = create_store(config)
    generator = ScenarioGenerator(
        LLMAdapter(config),
        store,
        max_tokens=config.scenario_max_tokens,
        temperature=config.scenario_temperature,
    )
    try:
        with console.status("[bold green]Generating scenario..."):
            scenario = generator.create(ScenarioRequest(userInput=user_input))
    except ClimateFuturesError as e:
        console.print(f"\n[red]✗ Error: {e}[/red]")
        raise SystemExit(1)
    except ValidationError as e:
        first = e.errors()[0]
        console.print(f"\n[red]✗ Error: {first['loc'][0]}: {first['msg']}[/red]")
        raise SystemExit(1)
    finally:
        store.close()

    _print_scenario(scenario)
    console.print(f"\n[green]✓ Saved scenario #{scenario.id}[/green]")


@main.command(name='list')
def list_scenarios():
    """List stored scenarios, newest first"""
    store = create_store(get_config())
    try:
        scenarios = store.list()
    finally:
        store.close()

    if not scenarios:
        console.print("[yellow]No scenarios yet[/yellow]")
        return

    table = Table(title="Scenarios")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Created", style="dim")
    table.add_column("Input")
    table.add_column("Temp 2100", style="magenta", justify="right")
    for s in scenarios:
        temp = s.alt_forecasts.global_temp_2100
        table.add_row(
            str(s.id),
            f"{s.created_at:%Y-%m-%d %H:%M}",
            s.user_input,
            f"{temp:.1f}" if temp is not None else "-",
        )
    console.print(table)


@main.command()
@click.argument('scenario_id', type=int)
def show(scenario_id):
    """Show one scenario"""
    store = create_store(get_config())
    try:
        scenario = store.get(scenario_id)
    except ClimateFuturesError as e:
        console.print(f"[red]✗ {e}: {scenario_id}[/red]")
        raise SystemExit(1)
    finally:
        store.close()
    _print_scenario(scenario)


@main.command()
@click.argument('scenario_id', type=int)
@click.option('--present-year', type=int, default=None, help='Anchor year for the decade samples')
@click.option('--seed', type=int, default=None, help='Seed for the perturbation source')
def forecast(scenario_id, present_year, seed):
    """Print constrained speculative curves for a stored scenario"""
    import random

    store = create_store(get_config())
    try:
        scenario = store.get(scenario_id)
    except ClimateFuturesError as e:
        console.print(f"[red]✗ {e}: {scenario_id}[/red]")
        raise SystemExit(1)
    finally:
        store.close()

    curves = build_speculative_forecast(
        DEFAULT_BASELINE,
        scenario.alt_forecasts,
        present_year=present_year,
        rng=random.Random(seed),
    )
    for title, points in (
        ("Temperature (°C)", curves.temperature),
        ("Emissions (Gt CO2)", curves.emissions),
        ("Sea level (m)", curves.sea_level),
    ):
        table = Table(title=title)
        table.add_column("Year", style="cyan")
        table.add_column("Baseline", justify="right")
        table.add_column("Speculative", style="magenta", justify="right")
        for p in points:
            table.add_row(str(p.year), f"{p.baseline:.2f}", f"{p.speculative:.2f}")
        console.print(table)


@main.command()
def baseline():
    """Show baseline climate and human-impact figures"""
    table = Table(title="Baseline indicators")
    table.add_column("Indicator", style="cyan")
    table.add_column("Current", justify="right")
    table.add_column("2100", style="magenta", justify="right")
    for name, series in DEFAULT_BASELINE:
        end = series.forecast[-1].value if series.forecast else series.current
        table.add_row(name, f"{series.current:g}", f"{end:g}")
    console.print(table)

    impacts = Table(title="Human impacts")
    impacts.add_column("Metric", style="cyan")
    impacts.add_column("Value", justify="right")
    for name, value in DEFAULT_IMPACTS:
        impacts.add_row(name, f"{value:,g}")
    console.print(impacts)


if __name__ == '__main__':
    main()
