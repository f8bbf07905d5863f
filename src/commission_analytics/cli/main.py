"""Main CLI entry point for the commission-analytics command."""

import json
import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import settings
from ..reporting import CommissionReportService
from ..storage import JSONRecordStore, RecordNotFoundError, StatusTransitionError, StorageError

console = Console()


def get_service(data_dir: Optional[str] = None) -> CommissionReportService:
    """Get report service over the JSON record store."""
    path = Path(data_dir) if data_dir else settings.data_dir
    return CommissionReportService(JSONRecordStore(path), elevated_role=settings.elevated_role)


def _parse_date(ctx, param, value) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date")


def _window(start: Optional[date], end: Optional[date]) -> Tuple[date, date]:
    """Default to the last 30 days."""
    end = end or date.today()
    start = start or end - timedelta(days=30)
    return start, end


def _scope(agent: Optional[str], role: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Without an agent or role, report across the whole agency."""
    if agent is None and role is None:
        role = settings.elevated_role
    return agent, role


def _money(value: float) -> str:
    return f"{value:,.2f}"


def _print_json(data):
    click.echo(json.dumps(data, indent=2))


date_options = [
    click.option("--start", callback=_parse_date, help="Window start (YYYY-MM-DD), default 30 days ago"),
    click.option("--end", callback=_parse_date, help="Window end (YYYY-MM-DD), default today"),
]
scope_options = [
    click.option("--agent", "-a", help="Agent id of the caller"),
    click.option("--role", "-r", help="Caller role; the elevated role sees all agents"),
]
common_options = [
    click.option("--json", "as_json", is_flag=True, help="Print the raw report as JSON"),
    click.option("--data-dir", help="Custom data directory"),
]


def with_options(options):
    def decorator(f):
        for option in reversed(options):
            f = option(f)
        return f
    return decorator


@click.group()
@click.version_option(version="1.0.0", prog_name="commission-analytics")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Commission analytics for real-estate agencies.

    \b
    Quick Start:
      commission-analytics report --start 2024-01-01 --end 2024-12-31
      commission-analytics agent agent-1 --start 2024-01-01
      commission-analytics forecast
      commission-analytics distribution --json
    """
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)


@cli.command()
@with_options(date_options + scope_options + common_options)
def report(start, end, agent, role, as_json, data_dir):
    """Commission totals, leaderboard and breakdowns."""
    start, end = _window(start, end)
    agent, role = _scope(agent, role)
    rep = get_service(data_dir).generate_commission_report(start, end, agent, role)

    if as_json:
        _print_json(rep.to_dict())
        return

    console.print(Panel.fit(
        f"Total: [bold]{_money(rep.total_commissions)}[/bold] ({rep.total_count})\n"
        f"Paid: [green]{_money(rep.paid_commissions)}[/green] ({rep.paid_count})\n"
        f"Pending: [yellow]{_money(rep.pending_commissions)}[/yellow] ({rep.pending_count})\n"
        f"Overdue: [red]{_money(rep.overdue_commissions)}[/red] ({rep.overdue_count})\n"
        f"Average: {_money(rep.average_commission)} at {rep.average_rate:.2f}%",
        title=f"Commissions {rep.period}",
    ))

    table = Table(title="Top Agents")
    table.add_column("#", justify="right")
    table.add_column("Agent")
    table.add_column("Total", justify="right")
    table.add_column("Deals", justify="right")
    table.add_column("Avg Rate", justify="right")
    table.add_column("Share", justify="right")
    for a in rep.top_agents:
        table.add_row(
            str(a.rank), a.agent_name or a.agent_id, _money(a.total_commissions),
            str(a.count), f"{a.average_rate:.2f}%", f"{a.percent_of_total:.1f}%",
        )
    console.print(table)

    table = Table(title="By Property Type")
    table.add_column("Type")
    table.add_column("Total", justify="right")
    table.add_column("Count", justify="right")
    table.add_column("Average", justify="right")
    for t in rep.by_property_type:
        table.add_row(t.type, _money(t.total_commissions), str(t.count), _money(t.average_commission))
    console.print(table)

    table = Table(title="Monthly Trend")
    table.add_column("Month")
    table.add_column("Total", justify="right")
    table.add_column("Paid", justify="right")
    table.add_column("Pending", justify="right")
    table.add_column("Count", justify="right")
    for m in rep.monthly_trend:
        table.add_row(m.month, _money(m.total), _money(m.paid), _money(m.pending), str(m.count))
    console.print(table)


@cli.command()
@click.argument("agent_id")
@with_options(date_options + common_options)
def agent(agent_id, start, end, as_json, data_dir):
    """Performance metrics for a single agent."""
    start, end = _window(start, end)
    m = get_service(data_dir).get_agent_performance_metrics(agent_id, start, end)

    if as_json:
        _print_json(m.to_dict())
        return

    if not m.commission_count:
        console.print(f"[yellow]No commissions for agent {agent_id} in {m.period}[/yellow]")
        return

    console.print(Panel.fit(
        f"Rank: [bold]#{m.rank}[/bold] ({m.percent_of_total:.1f}% of agency total)\n"
        f"Total: {_money(m.total_commissions)} over {m.commission_count} commissions\n"
        f"Paid: {_money(m.paid_commissions)}  Pending: {_money(m.pending_commissions)}\n"
        f"Properties sold: {m.properties_sold}\n"
        f"Average: {_money(m.average_commission_amount)} at {m.average_commission_rate:.2f}%\n"
        f"Sales value: {_money(m.total_sales_value)}\n"
        f"Lead conversion: {m.conversion_rate:.1f}%",
        title=f"{m.agent_name} ({m.period})",
    ))

    table = Table(title="Top Properties")
    table.add_column("Property")
    table.add_column("Commission", justify="right")
    table.add_column("Date")
    for p in m.top_properties:
        table.add_row(p.property_title or p.property_id, _money(p.commission), p.date[:10])
    console.print(table)


@cli.command()
@click.argument("agent_ids", nargs=-1, required=True)
@with_options(date_options + common_options)
def compare(agent_ids, start, end, as_json, data_dir):
    """Compare several agents side by side."""
    start, end = _window(start, end)
    metrics = get_service(data_dir).compare_agents(list(agent_ids), start, end)

    if as_json:
        _print_json([m.to_dict() for m in metrics])
        return

    table = Table(title=f"Agent Comparison {start} to {end}")
    table.add_column("Agent")
    table.add_column("Rank", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Count", justify="right")
    table.add_column("Avg Rate", justify="right")
    table.add_column("Conversion", justify="right")
    for m in metrics:
        table.add_row(
            m.agent_name or m.agent_id, str(m.rank or "-"), _money(m.total_commissions),
            str(m.commission_count), f"{m.average_commission_rate:.2f}%", f"{m.conversion_rate:.1f}%",
        )
    console.print(table)


@cli.command()
@with_options(scope_options + common_options)
def forecast(agent, role, as_json, data_dir):
    """Project month, quarter and year totals."""
    agent, role = _scope(agent, role)
    f = get_service(data_dir).get_commission_forecast(agent, role)

    if as_json:
        _print_json(f.to_dict())
        return

    table = Table(title=f"Commission Forecast (confidence: {f.confidence})")
    table.add_column("Period")
    table.add_column("Current", justify="right")
    table.add_column("Projected", justify="right")
    table.add_row("Month", _money(f.current_month), _money(f.projected_month))
    table.add_row("Quarter", _money(f.current_quarter), _money(f.projected_quarter))
    table.add_row("Year", _money(f.current_year), _money(f.projected_year))
    console.print(table)


@cli.command()
@with_options(date_options + scope_options + common_options)
def distribution(start, end, agent, role, as_json, data_dir):
    """Commission amount histogram and statistics."""
    start, end = _window(start, end)
    agent, role = _scope(agent, role)
    d = get_service(data_dir).get_commission_distribution(start, end, agent, role)

    if as_json:
        _print_json(d.to_dict())
        return

    table = Table(title=f"Commission Distribution {start} to {end}")
    table.add_column("Range")
    table.add_column("Count", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Share", justify="right")
    for r in d.ranges:
        table.add_row(r.range, str(r.count), _money(r.total_amount), f"{r.percentage:.1f}%")
    console.print(table)
    console.print(
        f"Mean {_money(d.mean)} | Median {_money(d.median)} | "
        f"Modal bucket mean {_money(d.modal_bucket_mean)} | Std dev {_money(d.standard_deviation)}"
    )


@cli.command("mark-paid")
@click.argument("commission_id")
@click.option("--data-dir", help="Custom data directory")
def mark_paid(commission_id: str, data_dir: Optional[str]):
    """Mark a pending commission as paid."""
    try:
        get_service(data_dir).store.mark_paid(commission_id)
    except RecordNotFoundError:
        console.print(f"[red]Commission {commission_id} not found[/red]")
        raise SystemExit(1)
    except (StatusTransitionError, StorageError) as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    console.print(f"[green]✓ Commission {commission_id} marked as paid[/green]")


@cli.command("flag-overdue")
@click.argument("commission_id")
@click.option("--clear", is_flag=True, help="Clear the overdue flag instead")
@click.option("--data-dir", help="Custom data directory")
def flag_overdue(commission_id: str, clear: bool, data_dir: Optional[str]):
    """Flag (or clear) a commission as overdue."""
    try:
        get_service(data_dir).store.set_overdue(commission_id, not clear)
    except RecordNotFoundError:
        console.print(f"[red]Commission {commission_id} not found[/red]")
        raise SystemExit(1)
    except StorageError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    state = "cleared" if clear else "flagged"
    console.print(f"[green]✓ Commission {commission_id} overdue {state}[/green]")


if __name__ == "__main__":
    cli()
