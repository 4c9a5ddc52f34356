"""Typer-based command line interface for running simulations."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pydantic
import typer
from rich.console import Console
from rich.table import Table

from ..core.path_metrics import PathMetrics, percentile_path_metrics
from ..core.simulation_validation import validate_result
from ..core.validator import ValidationError, validate_config
from ..engine import run_simulation
from ..models.config import DEFAULT_SEED, ProgressiveExposure, SimulationConfig
from ..models.results import REPRESENTATIVES, MonthlyStatsRow, SimulationResult

app = typer.Typer(help="Monte Carlo simulator for R-multiple trade distributions")
console = Console()

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _format_currency(value: Optional[float]) -> str:
    """Format numbers as currency for console output."""
    return f"${value:,.0f}" if value is not None else "N/A"


def _format_pct(value: float) -> str:
    return f"{value * 100:.2f}%"


def _load_config_file(path: Path) -> Dict[str, object]:
    if not path.exists():
        raise typer.BadParameter(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        try:
            payload = json.load(fh)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter(f"{path} must contain a JSON object")
    return payload


def _build_config(base: Dict[str, object], overrides: Dict[str, object]) -> SimulationConfig:
    payload = dict(base)
    payload.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return SimulationConfig.from_metadata(payload)
    except pydantic.ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _summary_table(result: SimulationResult) -> Table:
    s = result.stats
    table = Table(title="Summary Statistics", show_lines=False)
    for column in ["Metric", "5th", "50th", "95th"]:
        table.add_column(column, justify="right" if column != "Metric" else "left")
    table.add_row("Final equity", _format_currency(s.final5), _format_currency(s.final50), _format_currency(s.final95))
    table.add_row("Max drawdown", _format_pct(s.dd5), _format_pct(s.dd50), _format_pct(s.dd95))
    table.add_row("Max consecutive losses", f"{s.mcl5:.1f}", f"{s.mcl50:.1f}", f"{s.mcl95:.1f}")
    return table


def _representative_table(result: SimulationResult) -> Table:
    table = Table(title="Representative Paths", show_lines=False)
    for column in ["Path", "Index", "Final Equity", "Max Drawdown", "Max Losses"]:
        table.add_column(column, justify="right" if column != "Path" else "left")
    for name in REPRESENTATIVES:
        idx = result.representative_index(name)
        table.add_row(
            name.title(),
            str(idx + 1),
            _format_currency(result.final_equity[idx]),
            _format_pct(result.max_drawdowns[idx]),
            str(result.representative_losses[name]),
        )
    return table


def _metrics_table(rows: List[PathMetrics]) -> Table:
    table = Table(title="Percentile Path Metrics", show_lines=False)
    for column in ["Percentile", "Ann. Return", "Sharpe", "Calmar", "Max DD", "Ann. Std"]:
        table.add_column(column, justify="right")
    for row in rows:
        table.add_row(
            f"{row.percentile:g}th",
            _format_pct(row.annualized_return),
            f"{row.sharpe:.2f}",
            f"{row.calmar:.2f}",
            _format_pct(row.max_drawdown),
            _format_pct(row.annualized_std),
        )
    return table


def _monthly_table(title: str, rows: List[MonthlyStatsRow]) -> Table:
    table = Table(title=title, show_lines=False)
    for column in ["Month", "Return", "Max DD", "Win Rate", "Max Losses", "End Equity"]:
        table.add_column(column, justify="right" if column != "Month" else "left")
    for row in rows:
        style = "green" if row.return_value > 0 else "red" if row.return_value < 0 else None
        table.add_row(
            f"{MONTH_NAMES[(row.month - 1) % 12]} {row.year}",
            _format_pct(row.return_value),
            _format_pct(row.max_drawdown),
            _format_pct(row.win_rate),
            str(row.max_consecutive_losses),
            _format_currency(row.end_equity),
            style=style,
        )
    return table


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable INFO logging"),
) -> None:
    """Configure logging for all commands."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def run(
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON configuration file"),
    start_equity: Optional[float] = typer.Option(None, help="Starting equity"),
    n_trades: Optional[int] = typer.Option(None, "--trades", help="Trades per path"),
    n_paths: Optional[int] = typer.Option(None, "--paths", help="Number of simulated paths"),
    risk_fraction: Optional[float] = typer.Option(None, "--risk", help="Risk per trade (decimal)"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    no_seed: bool = typer.Option(False, "--no-seed", help="Use a non-reproducible generator"),
    trades_per_month: Optional[int] = typer.Option(None, help="Trades per month in monthly tables"),
    start_year: Optional[int] = typer.Option(None, help="Calendar year of the first month"),
    start_month: Optional[int] = typer.Option(None, help="Calendar month (1-12) of the first month"),
    ruin_threshold: Optional[float] = typer.Option(
        None, "--ruin-threshold", help="Drawdown percent counted as ruin"
    ),
    progressive: Optional[bool] = typer.Option(
        None, "--progressive/--no-progressive", help="Toggle progressive exposure"
    ),
    loss_streak: int = typer.Option(3, help="Losses in a row that halve risk"),
    win_streak: int = typer.Option(3, help="Wins in a row that double risk"),
    min_risk_pct: float = typer.Option(0.1, help="Progressive exposure risk floor (percent)"),
    max_risk_pct: float = typer.Option(1.0, help="Progressive exposure risk cap (percent)"),
    monthly: str = typer.Option("median", help="Monthly table to print: median, best, worst or none"),
) -> None:
    """Run a simulation and print summary tables."""
    base = _load_config_file(config_path) if config_path else {"seed": DEFAULT_SEED}
    overrides: Dict[str, object] = {
        "start_equity": start_equity,
        "n_trades": n_trades,
        "n_paths": n_paths,
        "risk_fraction": risk_fraction,
        "seed": seed,
        "trades_per_month": trades_per_month,
        "start_year": start_year,
        "start_month": start_month,
        "risk_of_ruin_threshold": ruin_threshold,
    }
    if progressive is True:
        overrides["progressive"] = ProgressiveExposure(
            loss_streak_threshold=loss_streak,
            win_streak_threshold=win_streak,
            min_risk=min_risk_pct / 100.0,
            max_risk=max_risk_pct / 100.0,
        ).model_dump()
    config = _build_config(base, overrides)
    if progressive is False:
        config = config.model_copy(update={"progressive": None})
    if no_seed:
        config = config.model_copy(update={"seed": None})

    try:
        warnings = validate_config(config)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    for warning in warnings:
        console.print(f"[yellow]{warning}[/yellow]")

    which = monthly.strip().lower()
    if which not in REPRESENTATIVES and which != "none":
        raise typer.BadParameter("monthly must be one of: median, best, worst, none")

    console.print("\n[bold]Running simulation...[/bold]")
    result = run_simulation(config)

    console.print(_summary_table(result))
    console.print(
        f"Risk of ruin (DD >= {abs(result.risk_of_ruin_threshold):g}%): {_format_pct(result.risk_of_ruin)}"
    )
    console.print(_representative_table(result))
    metrics = percentile_path_metrics(
        result.equity_paths,
        result.final_equity,
        config.start_equity,
        config.trades_per_year,
    )
    console.print(_metrics_table(metrics))

    if which in REPRESENTATIVES:
        console.print(_monthly_table(f"Monthly Performance ({which.title()} Path)", result.monthly_tables[which]))

    check = validate_result(result)
    if check.status != "PASS":
        console.print(f"[red]Result checks failed: {', '.join(check.failed_checks)}[/red]")
    for warning in check.warnings:
        console.print(f"[yellow]Result warning: {warning}[/yellow]")
    console.print("\n[bold green]Simulation complete![/bold green]")


@app.command()
def defaults() -> None:
    """Print the default configuration as JSON."""
    typer.echo(json.dumps(SimulationConfig().to_metadata(), indent=2))


def main() -> None:
    """Entry point for CLI execution."""
    app()


if __name__ == "__main__":
    main()
