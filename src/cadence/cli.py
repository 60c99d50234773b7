"""Cadence CLI - routine agenda and scheduling."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.routines_api import AuthenticationError
from .config import load_config
from .core.agenda import Agenda, format_agenda
from .core.routines import (
    NotScheduledError,
    RoutineNotFoundError,
    UnknownFrequencyError,
    validate_frequency,
)
from .core.scheduling import is_scheduled
from .workflows import (
    build_agenda,
    find_routine,
    get_repository,
    local_now,
    set_completion,
    unknown_frequencies,
    week_overview,
)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got {value!r}")


@click.group()
@click.version_option(package_name="cadence")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Cadence - routine scheduling CLI."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _show_agenda(agenda: Agenda, as_json: bool) -> None:
    """Shared agenda display logic."""
    if as_json:
        click.echo(
            json.dumps(
                {
                    "date": agenda.date.isoformat(),
                    "timeline": [
                        {
                            "id": i.id,
                            "time": i.time,
                            "title": i.title,
                            "kind": i.kind,
                            "category": i.category,
                            "completed": i.completed,
                        }
                        for i in agenda.timeline
                    ],
                    "anytime": [
                        {"id": i.id, "title": i.title, "category": i.category, "completed": i.completed}
                        for i in agenda.anytime
                    ],
                    "completed": agenda.completed_count,
                    "total": agenda.total_count,
                    "completion_rate": agenda.completion_rate,
                },
                indent=2,
            )
        )
    else:
        click.echo(format_agenda(agenda))


def _agenda_command(target: date | None, as_json: bool) -> None:
    config = load_config()
    try:
        agenda = build_agenda(config, target)
    except AuthenticationError as e:
        _fail(str(e))
    _show_agenda(agenda, as_json)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def today(as_json: bool):
    """Show today's agenda."""
    _agenda_command(None, as_json)


@main.command()
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def day(target: str, as_json: bool):
    """Show the agenda for a date (YYYY-MM-DD)."""
    _agenda_command(_parse_date(target), as_json)


@main.command()
@click.option("--start", default=None, help="First day (YYYY-MM-DD), default today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def week(start: str | None, as_json: bool):
    """Show routines scheduled over the next 7 days."""
    config = load_config()
    start_date = _parse_date(start) or local_now(config).date()
    try:
        overview = week_overview(config, start_date)
    except AuthenticationError as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                {
                    d.isoformat(): [{"id": r.id, "title": r.title, "time": r.time} for r in routines]
                    for d, routines in overview
                },
                indent=2,
            )
        )
        return

    for i, (d, routines) in enumerate(overview):
        if i:
            click.echo()
        click.echo(f"### {d.strftime('%A, %B %d')}")
        if not routines:
            click.echo("  (nothing scheduled)")
        for r in routines:
            click.echo(f"  {r.time or 'Anytime':8} {r.title}")


@main.command()
@click.argument("routine_id")
@click.option("--date", "target", default=None, help="Date to check (YYYY-MM-DD), default today")
def check(routine_id: str, target: str | None):
    """Check whether a routine is scheduled on a date."""
    config = load_config()
    target_date = _parse_date(target) or local_now(config).date()
    try:
        routine = find_routine(get_repository(config), routine_id)
    except (RoutineNotFoundError, AuthenticationError) as e:
        _fail(str(e))

    status = "scheduled" if is_scheduled(routine, target_date) else "not scheduled"
    click.echo(f"{routine.title}: {status} on {target_date.isoformat()}")


def _toggle(routine_id: str, done: bool) -> None:
    config = load_config()
    try:
        routine = set_completion(config, routine_id, done)
    except (RoutineNotFoundError, NotScheduledError, AuthenticationError) as e:
        _fail(str(e))

    state = "done" if done else "not done"
    click.echo(f"{routine.title}: {state} (streak {routine.streak})")


@main.command()
@click.argument("routine_id")
def done(routine_id: str):
    """Mark a routine done for today."""
    _toggle(routine_id, True)


@main.command()
@click.argument("routine_id")
def undo(routine_id: str):
    """Clear today's completion of a routine."""
    _toggle(routine_id, False)


@main.command()
def validate():
    """List routines with a frequency the scheduler does not recognize."""
    config = load_config()
    try:
        bad = unknown_frequencies(config)
    except AuthenticationError as e:
        _fail(str(e))

    if not bad:
        click.echo("All routine frequencies are valid.")
        return

    for routine in bad:
        try:
            validate_frequency(routine.frequency)
        except UnknownFrequencyError as e:
            click.echo(f"{routine.id} ({routine.title}): {e}", err=True)
    sys.exit(1)
