"""Command-line interface for the training analytics engine."""

import logging
import sys
from datetime import datetime, timezone
from typing import Iterable

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from .config import config
from .analysis.history import exercise_progress, find_last_performance, last_performance_bests, personal_records
from .analysis.progression import generate_progression
from .analysis.volume import analyze_plan_volume, SuggestionLevel
from .models import Session
from .snapshot import SnapshotError, load_snapshot
from .units import kg_to_display

console = Console()

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]

LEVEL_STYLES = {
    SuggestionLevel.GOOD: "green",
    SuggestionLevel.INFO: "yellow",
    SuggestionLevel.WARNING: "red",
}


def align_timezone(moment: datetime, sessions: Iterable[Session]) -> datetime:
    """Match the snapshot's timestamps so naive and aware values compare.

    Command-line dates are naive. Snapshots written with offsets are aware,
    in which case the command-line date is taken as UTC.
    """
    reference = next((s.completed_at for s in sessions if s.completed_at is not None), None)
    if reference is None:
        return moment
    if reference.tzinfo is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    if reference.tzinfo is None and moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def _load(path: str):
    try:
        return load_snapshot(path)
    except (OSError, SnapshotError) as e:
        console.print(f"[red]❌ Could not load snapshot: {e}[/red]")
        sys.exit(1)


@click.group()
def cli():
    """Training plan volume analysis and progressive overload recommendations."""
    logging.basicConfig(level=config.LOG_LEVEL)

    try:
        config.validate()
    except ValueError as e:
        console.print(f"[red]❌ Configuration Error: {e}[/red]")
        sys.exit(1)


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.option("--plan", "plan_id", default=None, help="Plan id (defaults to the first plan)")
@click.option("--as-of", type=click.DateTime(formats=DATE_FORMATS), default=None,
              help="End of the frequency window, defaults to now")
@click.option("--all-groups", is_flag=True, help="Also list muscle groups the plan does not train")
def volume(snapshot, plan_id, as_of, all_groups):
    """Analyze weekly volume, frequency and recovery per muscle group."""
    data = _load(snapshot)
    plan = data.get_plan(plan_id)
    if plan is None:
        console.print(f"[red]❌ Plan '{plan_id or '(first)'}' not found in snapshot[/red]")
        sys.exit(1)

    as_of = align_timezone(as_of or datetime.now(timezone.utc), data.sessions)
    analysis = analyze_plan_volume(plan, data.lookup, data.sessions, as_of)

    console.print(Panel.fit(f"📊 Volume Analysis: {plan.name or plan.id} ({plan.cycle_length}-day cycle)",
                            style="bold blue"))

    table = Table(title="Weekly Sets per Muscle Group", box=box.ROUNDED)
    table.add_column("Group", style="bold")
    table.add_column("Weekly", justify="right")
    table.add_column("Primary", justify="right")
    table.add_column("Secondary", justify="right")
    table.add_column("Freq/wk", justify="right")
    table.add_column("Max/session", justify="right")
    table.add_column("Distribution")
    table.add_column("Recovery")
    table.add_column("Suggestion")

    for group, result in analysis.items():
        if not result.sessions_in_cycle and not all_groups:
            continue
        style = LEVEL_STYLES[result.suggestion_level]
        table.add_row(
            group,
            str(result.total_weekly_sets),
            str(result.primary_sets),
            str(result.secondary_sets_weighted),
            f"{result.frequency:.1f}",
            str(result.max_sets_in_one_session),
            result.distribution_rating.value,
            result.recovery_rating.value,
            f"[{style}]{result.suggestion}[/{style}]",
        )

    console.print(table)


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.argument("template_id")
@click.option("--before", type=click.DateTime(formats=DATE_FORMATS), default=None,
              help="Only use sessions completed before this date")
def progress(snapshot, template_id, before):
    """Show last performance, strength estimates and the next workout."""
    data = _load(snapshot)
    settings = data.settings
    unit = settings.weight_unit
    details = data.lookup(template_id)
    name = details.name if details and details.name else template_id

    if before is not None:
        before = align_timezone(before, data.sessions)

    console.print(Panel.fit(f"🏋️ {name}", style="bold blue"))

    last = find_last_performance(data.sessions, template_id, before=before)
    if last is None:
        console.print("[yellow]No previous performance recorded.[/yellow]")
    else:
        bests = last_performance_bests(last)
        console.print(f"[bold]Last e1RM:[/bold] {kg_to_display(bests.best_1rm, unit):.1f} {unit.value}")
        console.print(f"[bold]Last e10RM:[/bold] {kg_to_display(bests.best_10rm, unit):.1f} {unit.value}")

    history = exercise_progress(data.sessions, template_id)
    if history:
        table = Table(title="Best Set per Session", box=box.ROUNDED)
        table.add_column("Date")
        table.add_column("Weight", justify="right")
        table.add_column("Reps", justify="right")
        table.add_column("RIR", justify="right")
        table.add_column("e1RM", justify="right", style="green")
        table.add_column("e10RM", justify="right", style="magenta")
        for point in history:
            table.add_row(
                point.completed_at.strftime("%Y-%m-%d"),
                f"{kg_to_display(point.weight, unit):g}",
                str(point.reps),
                "-" if point.rir is None else str(point.rir),
                f"{kg_to_display(point.e1rm, unit):.1f}",
                f"{kg_to_display(point.e10rm, unit):.1f}",
            )
        console.print(table)

    equipment = details.equipment if details else None
    recommendation = generate_progression(template_id, equipment, data.sessions, settings, before=before)
    if recommendation is None:
        console.print("\n[dim]Progression suggestions are disabled in settings.[/dim]")
        return

    console.print(f"\n[bold]Next workout:[/bold] {recommendation.suggestion}")
    for i, prescription in enumerate(recommendation.next_workout_plan, start=1):
        console.print(
            f"  • Set {i}: {prescription.weight:g} {recommendation.plan_unit.value} "
            f"x {prescription.reps} @ RIR {prescription.rir}"
        )


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.argument("template_id")
@click.option("--limit", default=10, help="Number of sessions to show")
def records(snapshot, template_id, limit):
    """List personal records per session, newest first."""
    data = _load(snapshot)
    unit = data.settings.weight_unit
    history = personal_records(data.sessions, template_id)

    if not history:
        console.print("[yellow]No completed sets recorded for this exercise.[/yellow]")
        return

    table = Table(title=f"🏆 Personal Records: {template_id}", box=box.ROUNDED)
    table.add_column("Date")
    table.add_column("Session")
    table.add_column("Set")
    table.add_column("Records", style="green")

    for entry in history[:limit]:
        for record in entry.sets:
            labels = []
            if record.is_new_volume_pr:
                labels.append("volume")
            if record.is_new_e1rm_pr:
                labels.append("e1RM")
            if record.is_new_e10rm_pr:
                labels.append("e10RM")
            table.add_row(
                entry.completed_at.strftime("%Y-%m-%d"),
                entry.session_name or entry.session_id,
                f"{kg_to_display(record.set.weight, unit):g} {unit.value} x {record.set.reps}",
                ", ".join(labels),
            )

    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
