"""Parsing of typed-in scores and their display strings."""

import re

from wodboard.scoring.schemas import Discipline, ScoreRecord

TIME_INPUT = re.compile(r"^(\d{1,2}):(\d{2})$")
AMRAP_INPUT = re.compile(r"^(\d+)\s*\+\s*(\d+)$")
NUMBER_INPUT = re.compile(r"^\d+$")

EMPTY_SCORE = "-"


def parse_time_input(raw: str) -> int | None:
    """Parse ``"mm:ss"`` into total seconds.

    Parameters
    ----------
    raw : str
        User input, minutes with 1-2 digits

    Returns
    -------
    int | None
        Total seconds, or None when the input is malformed
    """
    match = TIME_INPUT.match(raw.strip())
    if not match:
        return None
    minutes, seconds = int(match.group(1)), int(match.group(2))
    if seconds >= 60:
        return None
    return minutes * 60 + seconds


def format_seconds(total_seconds: int) -> str:
    """Format seconds as ``"m:ss"``."""
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def parse_amrap_input(raw: str) -> tuple[int, int] | None:
    """Parse ``"5+12"`` into ``(rounds, reps)``; a bare number is ``(0, n)``."""
    value = raw.strip()
    match = AMRAP_INPUT.match(value)
    if match:
        return int(match.group(1)), int(match.group(2))
    if NUMBER_INPUT.match(value):
        return 0, int(value)
    return None


def score_display(record: ScoreRecord, discipline: Discipline) -> str:
    """Human-readable score of a record under the day's discipline."""
    if discipline == Discipline.TIME and record.elapsed_seconds is not None:
        return format_seconds(record.elapsed_seconds)
    if (
        discipline == Discipline.AMRAP
        and record.amrap_rounds is not None
        and record.amrap_reps is not None
    ):
        return f"{record.amrap_rounds}+{record.amrap_reps}"
    if discipline == Discipline.CALORIES and record.amrap_reps is not None:
        return f"{record.amrap_reps:,} cal"
    return EMPTY_SCORE
