"""Pure agenda assembly logic - no I/O dependencies."""

import math
from dataclasses import dataclass, field
from datetime import date, tzinfo

from .routines import Routine, ScheduleItem, was_completed_on
from .scheduling import get_scheduled_routines, sort_by_time

DEFAULT_CATEGORIES = ["Health/Wellness", "Mindframe", "Learning/Development", "Business"]


@dataclass
class AgendaItem:
    """A single line on the day's agenda."""

    id: str
    time: str | None
    title: str
    kind: str
    category: str
    completed: bool = False
    streak: int = 0
    measure_of_success: str | None = None

    @property
    def is_routine(self) -> bool:
        return self.kind == "routine"


@dataclass
class Agenda:
    """Assembled agenda for one day."""

    date: date
    timeline: list[AgendaItem]
    anytime: list[AgendaItem]
    by_category: dict[str, list[Routine]] = field(default_factory=dict)
    completed_count: int = 0
    total_count: int = 0

    @property
    def completion_rate(self) -> int:
        """Percentage of scheduled routines completed, rounded half up."""
        if not self.total_count:
            return 0
        return math.floor(self.completed_count * 100 / self.total_count + 0.5)


def _routine_item(routine: Routine, completed: bool) -> AgendaItem:
    return AgendaItem(
        id=f"routine-{routine.id}",
        time=routine.time,
        title=routine.title,
        kind="routine",
        category=routine.category,
        completed=completed,
        streak=routine.streak,
        measure_of_success=routine.measure_of_success,
    )


def _schedule_item(item: ScheduleItem) -> AgendaItem:
    return AgendaItem(
        id=f"schedule-{item.id}",
        time=item.time,
        title=item.activity,
        kind="schedule",
        category=item.type,
    )


def group_by_category(
    routines: list[Routine],
    categories: list[str] | None = None,
) -> dict[str, list[Routine]]:
    """
    Group routines by category.

    Known categories always appear (possibly empty), in the given order;
    other categories follow in first-seen order.
    """
    groups: dict[str, list[Routine]] = {c: [] for c in categories or []}
    for r in routines:
        groups.setdefault(r.category, []).append(r)
    return groups


def assemble_agenda(
    routines: list[Routine],
    target_date: date,
    schedule: list[ScheduleItem] | None = None,
    categories: list[str] | None = None,
    tz: tzinfo | None = None,
) -> Agenda:
    """
    Assemble the agenda for a day from raw routines and schedule items.

    Pure function - no I/O. Schedule items are merged as given; pass them
    only for the current day.
    """
    categories = DEFAULT_CATEGORIES if categories is None else categories
    scheduled = get_scheduled_routines(routines, target_date)

    routine_items = [_routine_item(r, was_completed_on(r, target_date, tz)) for r in scheduled]

    items = [_schedule_item(s) for s in schedule or []] + routine_items
    combined = sort_by_time(items)

    return Agenda(
        date=target_date,
        timeline=[i for i in combined if i.time],
        anytime=[i for i in routine_items if not i.time],
        by_category=group_by_category(scheduled, categories),
        completed_count=sum(1 for i in routine_items if i.completed),
        total_count=len(scheduled),
    )


def format_agenda_line(item: AgendaItem) -> str:
    """
    Format a single agenda item for display.

    Pure function - no I/O.
    """
    when = item.time or "Anytime"
    if not item.is_routine:
        return f"- {when:7} {item.title} ({item.category})"

    check = "x" if item.completed else " "
    streak = f", streak {item.streak}" if item.streak else ""
    return f"- {when:7} [{check}] {item.title} ({item.category}{streak})"


def format_agenda_sections(agenda: Agenda) -> dict[str, str]:
    """
    Format agenda into markdown sections.

    Returns dict with keys: timeline, anytime, categories, progress
    """
    timeline_md = "\n".join(format_agenda_line(i) for i in agenda.timeline) or "Nothing scheduled."
    anytime_md = "\n".join(format_agenda_line(i) for i in agenda.anytime) or "None"

    category_lines = []
    for category, routines in agenda.by_category.items():
        titles = ", ".join(r.title for r in routines) or "-"
        category_lines.append(f"- {category or 'Uncategorized'}: {titles}")
    categories_md = "\n".join(category_lines) or "None"

    progress = (
        f"{agenda.completed_count}/{agenda.total_count} routines done "
        f"({agenda.completion_rate}%)"
    )

    return {
        "timeline": timeline_md,
        "anytime": anytime_md,
        "categories": categories_md,
        "progress": progress,
    }


def format_agenda(agenda: Agenda) -> str:
    """Render the full agenda as markdown."""
    sections = format_agenda_sections(agenda)
    return f"""## {agenda.date.strftime("%A, %B %d, %Y")}

### Timeline
{sections["timeline"]}

### Anytime
{sections["anytime"]}

### By Category
{sections["categories"]}

### Progress
{sections["progress"]}"""
