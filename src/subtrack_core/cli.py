"""CLI for SubTrack Core using Typer."""

import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from . import budget as budget_evaluator
from . import descriptive, normalizer, settlement, trends
from .config import load_settings
from .models import BudgetStatus, ParticipantBalance, SettlementTransaction

app = typer.Typer(
    name="subtrack",
    help="Subscription cost, budget, statistics and settlement calculations",
)

console = Console()


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def fail(error: Exception, verbose: bool):
    """Report an error and exit, or re-raise it in verbose mode."""
    console.print(f"\n[bold red]Error:[/bold red] {error}")
    if verbose:
        raise error
    sys.exit(1)


def format_money(amount: Decimal, use_color: bool = True) -> str:
    """
    Format money in accounting style.

    Negative amounts use parentheses: (85.02)
    """
    if amount < 0:
        formatted = f"({abs(amount)})"
        return f"[red]{formatted}[/red]" if use_color else formatted
    return f"[green]{amount}[/green]" if use_color else str(amount)


def load_balances(path: Path) -> list[ParticipantBalance]:
    """
    Read participant balances from a JSON file.

    Accepts either {"alice": "30.00", "bob": "-30.00"} or a list of
    {"participant_id": ..., "net_balance": ...} objects.
    """
    data = json.loads(path.read_text(encoding="utf-8"), parse_float=Decimal)

    if isinstance(data, dict):
        return [
            ParticipantBalance(
                participant_id=str(pid), net_balance=Decimal(str(amount))
            )
            for pid, amount in data.items()
        ]
    if isinstance(data, list):
        return [ParticipantBalance.model_validate(entry) for entry in data]

    raise ValueError(f"{path} must contain a JSON object or list of balances")


@app.command()
def normalize(
    price: str = typer.Argument(..., help="Price per billing period"),
    every: int = typer.Option(1, "--every", "-n", help="Units per billing period"),
    unit: str = typer.Option(
        "monthly", "--unit", "-u", help="daily, weekly, monthly or yearly"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show the monthly and yearly equivalent of a recurring price."""
    setup_logging(verbose)

    try:
        settings = load_settings()
        cost = normalizer.normalize(
            Decimal(price), every, unit, places=settings.money_places
        )
    except Exception as e:
        fail(e, verbose)

    console.print(f"\n[bold]{price} every {every} {unit}[/bold]")
    console.print(f"  Monthly: {format_money(cost.monthly)}")
    console.print(f"  Yearly:  {format_money(cost.yearly)}")


@app.command()
def budget(
    spent: str = typer.Argument(..., help="Amount spent"),
    limit: str = typer.Argument(..., help="Budget limit (0 = no limit)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show utilization, remaining amount and status for a budget."""
    setup_logging(verbose)

    try:
        settings = load_settings()
        summary = budget_evaluator.summarize(
            Decimal(spent), Decimal(limit), places=settings.money_places
        )
    except Exception as e:
        fail(e, verbose)

    status_style = {
        BudgetStatus.UNDER: "green",
        BudgetStatus.EXACT: "yellow",
        BudgetStatus.OVER: "red",
    }[summary.status]

    console.print("\n[bold]Budget:[/bold]")
    console.print(f"  Spent:       {format_money(summary.spent)}")
    console.print(f"  Limit:       {format_money(summary.budget)}")
    console.print(f"  Remaining:   {format_money(summary.remaining)}")
    console.print(f"  Utilization: {summary.utilization}%")
    console.print(
        f"  Status:      [{status_style}]{summary.status.value}[/{status_style}]"
    )


@app.command()
def stats(
    values: list[float] = typer.Argument(..., help="Sample values"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show descriptive statistics for a sample."""
    setup_logging(verbose)

    summary = descriptive.summarize(values)

    table = Table(
        title="Sample Statistics", show_header=True, header_style="bold magenta"
    )
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", justify="right")

    for name, value in summary.model_dump().items():
        if isinstance(value, list):
            display = ", ".join(f"{v:g}" for v in value) or "—"
        elif isinstance(value, float):
            display = f"{value:.4f}"
        else:
            display = str(value)
        table.add_row(name.replace("_", " "), display)

    console.print(table)


@app.command()
def trend(
    values: list[float] = typer.Argument(..., help="Series values, oldest first"),
    window: int = typer.Option(3, "--window", "-w", help="Moving average window"),
    alpha: float = typer.Option(0.5, "--alpha", "-a", help="EMA smoothing factor"),
    period: Optional[int] = typer.Option(
        None, "--period", "-p", help="Momentum period (default from settings)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show moving averages, momentum and the overall trend of a series."""
    setup_logging(verbose)

    try:
        settings = load_settings()
        momentum_period = period if period is not None else settings.momentum_period
        sma = trends.moving_average(values, window)
        ema = trends.exponential_moving_average(values, alpha)
        momentum = trends.momentum_index(values, momentum_period)
        summary = trends.analyze_trend(values)
        outliers = set(trends.detect_outliers(values, settings.outlier_threshold))
    except Exception as e:
        fail(e, verbose)

    table = Table(title="Trend", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Value", justify="right")
    table.add_column(f"SMA({window})", justify="right")
    table.add_column(f"EMA({alpha})", justify="right")
    table.add_column(f"Momentum({momentum_period})", justify="right")

    # Momentum has no values for the warm-up window
    offset = len(values) - len(momentum)
    for i, value in enumerate(values):
        momentum_display = f"{momentum[i - offset]:.2f}" if i >= offset else "—"
        value_display = f"[red]{value:g}[/red]" if i in outliers else f"{value:g}"
        table.add_row(
            str(i), value_display, f"{sma[i]:.2f}", f"{ema[i]:.2f}", momentum_display
        )

    console.print(table)
    console.print(
        f"\n[bold]Direction:[/bold] {summary.direction.value} "
        f"({summary.percentage_change:.1f}%), forecast {summary.forecast:.2f}"
    )


def display_plan(transactions: list[SettlementTransaction], places: int = 2):
    """Display a settlement plan in a table."""
    table = Table(
        title="Settlement Plan", show_header=True, header_style="bold magenta"
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("From", style="cyan")
    table.add_column("To", style="cyan")
    table.add_column("Amount", justify="right")

    for i, t in enumerate(transactions, start=1):
        table.add_row(
            str(i), t.from_participant, t.to_participant, format_money(t.amount)
        )

    console.print(table)
    total = settlement.settlement_total(transactions, places=places)
    console.print(f"\n  Total transferred: {format_money(total)}")


@app.command()
def settle(
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Balances JSON file"
    ),
    policy: Optional[str] = typer.Option(
        None, "--policy", help="reject or normalize (default from settings)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Compute who pays whom to settle a group's balances.

    Positive balances are owed money, negative balances owe money.
    """
    setup_logging(verbose)

    try:
        settings = load_settings()
        balances = load_balances(path)
        transactions = settlement.settle(
            balances,
            tolerance=settings.settlement_tolerance,
            policy=policy or settings.unbalanced_policy,
            places=settings.money_places,
        )
    except Exception as e:
        fail(e, verbose)

    if not transactions:
        console.print("[yellow]Everyone is already settled up.[/yellow]")
        return

    display_plan(transactions, places=settings.money_places)
    console.print("[bold green]✓ Settlement plan computed[/bold green]")


if __name__ == "__main__":
    app()
