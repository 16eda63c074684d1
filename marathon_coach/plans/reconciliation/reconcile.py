"""Plan reconciliation logic.

Turns possibly malformed producer output into an invariant-respecting day grid.
Dates are ground truth; week and day numbers claimed by the producer are
never used.

Steps, per week window:
1. Undated records get a date from their position in the window
2. Deduplicate by date (first wins), drop dates outside the window
3. Lay out every date of the window; missing dates become rest days cloned
   from the preceding record
4. Excess runs become rest days, keeping the first long run plus the
   earliest other runs by date; a run shortfall is accepted and reported
5. The first long run moves to day 7, any other long run becomes easy
6. Stable sort by (week, date)

Functions here are pure and idempotent: reconciling a reconciled window
returns the same days.
"""

from collections.abc import Sequence
from datetime import date, timedelta

from loguru import logger

from marathon_coach.plans.reconciliation.types import DraftDay, ReconciliationOutcome
from marathon_coach.plans.types import DayRecord, WorkoutType
from marathon_coach.plans.workout_types import workout_info

REST_DESCRIPTION = "Rest day"
CONVERTED_REST_DESCRIPTION = "Rest day (converted from extra run)"

_CONTENT_FIELDS = ("workout_type", "distance_miles", "target_pace", "description", "hr_zone")


def _as_draft(day: DraftDay | DayRecord) -> DraftDay:
    if isinstance(day, DayRecord):
        return DraftDay.from_record(day)
    return day


def _rest_clone(template: DraftDay | None, day_date: date, description: str = REST_DESCRIPTION) -> DraftDay:
    base = template or DraftDay()
    return base.model_copy(
        update={
            "date": day_date,
            "workout_type": WorkoutType.REST,
            "distance_miles": 0.0,
            "target_pace": "",
            "description": description,
            "hr_zone": None,
            "week_hint": None,
            "day_hint": None,
        }
    )


def _to_record(draft: DraftDay, anchor_date: date) -> DayRecord:
    """Build a DayRecord with week/day recomputed from the anchor offset."""
    offset = (draft.date - anchor_date).days
    week, day_index = divmod(offset, 7)

    if draft.workout_type.is_run:
        info = workout_info(draft.workout_type)
        return DayRecord(
            date=draft.date,
            week=week + 1,
            day_in_week=day_index + 1,
            workout_type=draft.workout_type,
            distance_miles=max(0.0, draft.distance_miles),
            target_pace=draft.target_pace,
            description=draft.description,
            hr_zone=draft.hr_zone or (info.hr_zone if info else None),
        )

    return DayRecord(
        date=draft.date,
        week=week + 1,
        day_in_week=day_index + 1,
        workout_type=WorkoutType.REST,
        distance_miles=0.0,
        target_pace="",
        description=draft.description or REST_DESCRIPTION,
        hr_zone=None,
    )


def _enforce_run_count(
    grid: list[DayRecord],
    indices: list[int],
    week: int,
    days_per_week: int,
    warnings: list[str],
) -> None:
    """Convert runs beyond days_per_week to rest.

    The first long run is always kept, even when it falls after the
    earliest days_per_week runs; the remaining slots go to the earliest runs
    by date.
    """
    run_indices = [i for i in indices if grid[i].is_run]

    if len(run_indices) < days_per_week:
        warnings.append(f"Week {week}: {len(run_indices)} of {days_per_week} runs generated, shortfall accepted")
        return
    if len(run_indices) == days_per_week:
        return

    # Keep the first long run so the week keeps its anchor workout
    keep: list[int] = []
    first_long = next((i for i in run_indices if grid[i].workout_type == WorkoutType.LONG), None)
    if first_long is not None:
        keep.append(first_long)
    for i in run_indices:
        if len(keep) >= days_per_week:
            break
        if i not in keep:
            keep.append(i)

    converted = 0
    for i in run_indices:
        if i in keep:
            continue
        day = grid[i]
        grid[i] = day.model_copy(
            update={
                "workout_type": WorkoutType.REST,
                "distance_miles": 0.0,
                "target_pace": "",
                "description": CONVERTED_REST_DESCRIPTION,
                "hr_zone": None,
            }
        )
        converted += 1

    warnings.append(f"Week {week}: converted {converted} extra run(s) to rest")


def _pin_long_run(grid: list[DayRecord], indices: list[int]) -> None:
    long_indices = [i for i in indices if grid[i].workout_type == WorkoutType.LONG]
    if not long_indices:
        return

    first, *extra = long_indices
    easy_zone = workout_info(WorkoutType.EASY)
    for i in extra:
        grid[i] = grid[i].model_copy(
            update={"workout_type": WorkoutType.EASY, "hr_zone": easy_zone.hr_zone if easy_zone else None}
        )

    day_seven = indices[-1]
    if first == day_seven:
        return

    long_content = {name: getattr(grid[first], name) for name in _CONTENT_FIELDS}
    other_content = {name: getattr(grid[day_seven], name) for name in _CONTENT_FIELDS}
    grid[first] = grid[first].model_copy(update=other_content)
    grid[day_seven] = grid[day_seven].model_copy(update=long_content)


def reconcile_chunk(
    raw: Sequence[DraftDay | DayRecord],
    start_week: int,
    end_week: int,
    days_per_week: int,
    anchor_date: date,
) -> ReconciliationOutcome:
    """Reconcile a week window into exactly 7 days per week.

    Args:
        raw: Draft or already reconciled days, in producer order
        start_week: First week of the window (1-based)
        end_week: Last week of the window (inclusive)
        days_per_week: Required runs per week
        anchor_date: Plan start date (week 1, day 1)

    Returns:
        ReconciliationOutcome with the day grid and any warnings
    """
    window_start = anchor_date + timedelta(days=(start_week - 1) * 7)
    window_days = (end_week - start_week + 1) * 7
    window_end = window_start + timedelta(days=window_days - 1)
    warnings: list[str] = []

    by_date: dict[date, DraftDay] = {}
    duplicates = 0
    out_of_window = 0
    for index, day in enumerate(raw):
        draft = _as_draft(day)
        if draft.date is None:
            draft = draft.model_copy(update={"date": window_start + timedelta(days=index)})
        if not window_start <= draft.date <= window_end:
            out_of_window += 1
            continue
        if draft.date in by_date:
            duplicates += 1
            continue
        by_date[draft.date] = draft

    if duplicates:
        warnings.append(f"Weeks {start_week}-{end_week}: dropped {duplicates} duplicate day(s)")
    if out_of_window:
        warnings.append(f"Weeks {start_week}-{end_week}: dropped {out_of_window} day(s) outside {window_start}..{window_end}")

    grid: list[DayRecord] = []
    template: DraftDay | None = None
    filled = 0
    for offset in range(window_days):
        day_date = window_start + timedelta(days=offset)
        draft = by_date.get(day_date)
        if draft is None:
            draft = _rest_clone(template, day_date)
            filled += 1
        else:
            template = draft
        grid.append(_to_record(draft, anchor_date))

    if filled:
        warnings.append(f"Weeks {start_week}-{end_week}: filled {filled} missing day(s) with rest")

    for week in range(start_week, end_week + 1):
        first_index = (week - start_week) * 7
        indices = list(range(first_index, first_index + 7))
        _enforce_run_count(grid, indices, week, days_per_week, warnings)
        _pin_long_run(grid, indices)

    days = sorted(grid, key=lambda d: (d.week, d.date))

    if warnings:
        logger.warning(
            "Reconciliation adjusted producer output",
            start_week=start_week,
            end_week=end_week,
            warnings=warnings,
        )

    return ReconciliationOutcome(days=days, warnings=warnings)


def reconcile_days(
    raw: Sequence[DraftDay | DayRecord],
    start_week: int,
    end_week: int,
    days_per_week: int,
    anchor_date: date,
) -> list[DayRecord]:
    """Reconcile a week window and return only the days."""
    return reconcile_chunk(raw, start_week, end_week, days_per_week, anchor_date).days


def reconcile_plan(
    days: Sequence[DraftDay | DayRecord],
    total_weeks: int,
    days_per_week: int,
    start_date: date,
) -> ReconciliationOutcome:
    """Global pass over an assembled plan.

    Always yields exactly total_weeks x 7 days, catching cross-chunk drift
    such as duplicated boundary days.
    """
    return reconcile_chunk(days, 1, total_weeks, days_per_week, start_date)
