"""Parse workout producer output into draft days.

The producer is treated as untrusted. Output may arrive as a list or as raw
text wrapped in code fences or prose, and may be slightly malformed JSON.
One repair attempt is made before the chunk is declared unparsable.
"""

import json
import math
import re
from datetime import date, timedelta
from typing import Any

from loguru import logger

from marathon_coach.planner.errors import ChunkParseError
from marathon_coach.plans.reconciliation.types import DraftDay
from marathon_coach.plans.types import WorkoutType

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")

_TYPE_ALIASES: dict[str, WorkoutType] = {
    "longrun": WorkoutType.LONG,
    "marathonpace": WorkoutType.MARATHON_PACE,
    "mp": WorkoutType.MARATHON_PACE,
    "hillrepeats": WorkoutType.HILL_REPEATS,
    "hills": WorkoutType.HILL_REPEATS,
    "yasso800s": WorkoutType.YASSO_800S,
    "yasso": WorkoutType.YASSO_800S,
    "intervals": WorkoutType.INTERVAL,
    "off": WorkoutType.REST,
}


def clean_producer_text(text: str) -> str:
    """Strip code fences and surrounding prose, keeping the outermost [...]."""
    cleaned = _FENCE_RE.sub("", text.strip()).strip()
    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start >= 0 and end > start:
        cleaned = cleaned[start : end + 1]
    return cleaned


def repair_json_text(text: str) -> str:
    """Fix the malformations producers commonly emit.

    - trailing commas before a closing bracket
    - a doubled closing brace at the end ("}}]")
    - a missing final "]"
    """
    repaired = _TRAILING_COMMA_RE.sub(r"\1", text)
    if repaired.endswith("}}]"):
        repaired = repaired[:-3] + "}]"
    if not repaired.endswith("]") and repaired.endswith("}"):
        repaired += "]"
    return repaired


def parse_day_array(output: list[Any] | str, start_week: int, end_week: int) -> list[Any]:
    """Turn producer output into a list of raw day objects.

    Args:
        output: Producer output, already a list or raw text
        start_week: First week of the chunk (for error reporting)
        end_week: Last week of the chunk (for error reporting)

    Returns:
        Raw list items (not yet validated)

    Raises:
        ChunkParseError: If the output is not a JSON array even after repair
    """
    if isinstance(output, list):
        return output

    if not isinstance(output, str):
        raise ChunkParseError(start_week, end_week, f"expected a list or text, got {type(output).__name__}")

    text = clean_producer_text(output)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as parse_error:
        logger.warning(
            "Producer output is not valid JSON, attempting repair",
            start_week=start_week,
            end_week=end_week,
            error=str(parse_error),
            length=len(text),
            preview=text[:200],
        )
        try:
            parsed = json.loads(repair_json_text(text))
        except json.JSONDecodeError as repair_error:
            raise ChunkParseError(
                start_week,
                end_week,
                f"unparsable output ({parse_error}); repair failed ({repair_error})",
            ) from repair_error
        logger.info("JSON repair succeeded", start_week=start_week, end_week=end_week)

    if not isinstance(parsed, list):
        raise ChunkParseError(start_week, end_week, f"expected a JSON array, got {type(parsed).__name__}")
    return parsed


def coerce_workout_type(value: object) -> WorkoutType:
    """Map a producer type name to WorkoutType.

    Unknown run names (e.g. "strides") become easy runs; a missing type is rest.
    """
    if not isinstance(value, str) or not value.strip():
        return WorkoutType.REST

    raw = value.strip()
    try:
        return WorkoutType(raw)
    except ValueError:
        pass

    key = re.sub(r"[\s_\-]", "", raw).lower()
    for workout_type in WorkoutType:
        if workout_type.value.lower() == key:
            return workout_type
    return _TYPE_ALIASES.get(key, WorkoutType.EASY)


def _parse_date(value: object) -> date | None:
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _parse_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().split()[0]) if value.strip() else 0.0
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _parse_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _first(item: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


def coerce_draft_day(item: object) -> DraftDay | None:
    """Convert one raw producer object into a DraftDay.

    Returns:
        DraftDay, or None when the item is not an object at all
    """
    if not isinstance(item, dict):
        return None

    description = _first(item, "description", "notes")
    target_pace = _first(item, "targetPace", "target_pace", "pace")
    hr_zone = _first(item, "hrZone", "hr_zone")

    return DraftDay(
        date=_parse_date(item.get("date")),
        workout_type=coerce_workout_type(_first(item, "type", "workoutType", "workout_type")),
        distance_miles=_parse_float(_first(item, "distance", "distanceMiles", "distance_miles")),
        target_pace=str(target_pace).strip() if target_pace is not None else "",
        description=str(description).strip() if description is not None else "",
        hr_zone=str(hr_zone).strip() if hr_zone is not None else None,
        week_hint=_parse_int(_first(item, "weekNumber", "week")),
        day_hint=_parse_int(_first(item, "dayNumber", "day")),
    )


def coerce_draft_days(items: list[Any]) -> list[DraftDay]:
    """Coerce every usable item, dropping anything that is not an object."""
    drafts = [draft for draft in (coerce_draft_day(item) for item in items) if draft is not None]
    dropped = len(items) - len(drafts)
    if dropped:
        logger.warning("Dropped non-object items from producer output", dropped=dropped)
    return drafts


def minimum_usable_days(expected_days: int, min_fill_ratio: float) -> int:
    """Smallest day count a chunk may return before generation fails."""
    return math.ceil(expected_days * min_fill_ratio)


def pad_with_rest(drafts: list[DraftDay], expected_days: int, chunk_start: date) -> list[DraftDay]:
    """Append rest days until the chunk has ``expected_days`` entries.

    Padded days are dated one, two, ... days after the last returned day
    (or from the chunk start when no returned day carries a date).

    Args:
        drafts: Returned draft days in producer order
        expected_days: Days requested for the chunk
        chunk_start: First date of the chunk

    Returns:
        New list with trailing rest days appended
    """
    missing = expected_days - len(drafts)
    if missing <= 0:
        return list(drafts)

    last_date = next((d.date for d in reversed(drafts) if d.date is not None), None)
    if last_date is None:
        last_date = chunk_start + timedelta(days=len(drafts) - 1)

    padded = list(drafts)
    for offset in range(1, missing + 1):
        padded.append(
            DraftDay(
                date=last_date + timedelta(days=offset),
                workout_type=WorkoutType.REST,
                description="Rest day",
            )
        )
    return padded
