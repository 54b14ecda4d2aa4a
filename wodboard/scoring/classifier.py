"""Workout discipline detection from free WOD text.

Pure functions, no state. Cue groups are checked in priority order because a
single WOD text often contains several cue words ("EMOM ... for quality, then
AMRAP").
"""

import re
from typing import NamedTuple

from wodboard.scoring.schemas import Discipline, Workout

# Disciplines an admin may force; CALORIES is only ever detected from text
OVERRIDABLE = frozenset({Discipline.TIME, Discipline.AMRAP, Discipline.NO_SCORE})

NO_SCORE_CUES = (
    re.compile(r"\bemom\b"),
    re.compile(r"\be[2-9]mom\b"),
    re.compile(r"every\s+minute\s+on\s+the\s+minute"),
    re.compile(r"every\s+\d+\s+minute"),
    re.compile(r"for\s+quality"),
    re.compile(r"not\s+for\s+time"),
    re.compile(r"\bskill\b"),
    re.compile(r"\bstrength\b"),
)

CALORIES_CUES = (
    re.compile(r"\bmax\s+(cal|calories)\b"),
    re.compile(r"\bfor\s+(cal|calories)\b"),
    re.compile(r"\bcalorie\s+challenge\b"),
)

AMRAP_CUES = (
    re.compile(r"\bamrap\b"),
    re.compile(r"as\s+many\s+rounds\s+as\s+possible"),
    re.compile(r"as\s+many\s+reps\s+as\s+possible"),
    re.compile(r"max\s+(rounds|reps)"),
    re.compile(r"score\s*[:\-]\s*(rounds|reps)"),
)

TIME_CUES = (
    re.compile(r"for\s+time"),
    re.compile(r"\btime\s*cap\b"),
    re.compile(r"\btcap\b"),
    re.compile(r"complete\s+.*for\s+time", re.DOTALL),
)

CUE_GROUPS: tuple[tuple[Discipline, tuple[re.Pattern, ...]], ...] = (
    (Discipline.NO_SCORE, NO_SCORE_CUES),
    (Discipline.CALORIES, CALORIES_CUES),
    (Discipline.AMRAP, AMRAP_CUES),
    (Discipline.TIME, TIME_CUES),
)

TEAMS_OF = re.compile(r"\bteams?\s+of\s+(\d+)")
PARTNER_CUES = (
    re.compile(r"\bpartner\s+wod\b"),
    re.compile(r"\bwith\s+a\s+partner\b"),
    re.compile(r"\bpartner\s+workout\b"),
)


class TeamDetection(NamedTuple):
    is_team: bool
    team_size: int


def detect_discipline(description_text: str | None) -> Discipline:
    """Detect the discipline from WOD text alone.

    Parameters
    ----------
    description_text : str | None
        Raw workout text

    Returns
    -------
    Discipline
        UNKNOWN for empty text, the first matching cue group otherwise,
        TIME when nothing matches
    """
    text = (description_text or "").strip().lower()
    if not text:
        return Discipline.UNKNOWN

    for discipline, cues in CUE_GROUPS:
        if any(cue.search(text) for cue in cues):
            return discipline

    # Most WODs without special phrasing are timed
    return Discipline.TIME


def classify(
    description_text: str | None, override: Discipline | str | None = None
) -> Discipline:
    """Resolve a workout's discipline, honouring an admin override.

    Parameters
    ----------
    description_text : str | None
        Raw workout text
    override : Discipline | str | None
        Admin override; only TIME, AMRAP and NO_SCORE are accepted,
        anything else falls back to text detection

    Returns
    -------
    Discipline
        Effective discipline
    """
    if override is not None:
        try:
            forced = Discipline(override)
        except ValueError:
            forced = None
        if forced in OVERRIDABLE:
            return forced

    return detect_discipline(description_text)


def effective_discipline(workout: Workout | None) -> Discipline:
    """Discipline of a workout, UNKNOWN when there is no workout at all."""
    if workout is None:
        return Discipline.UNKNOWN
    return classify(workout.description_text, workout.discipline_override)


def detect_team(description_text: str | None) -> TeamDetection:
    """Detect a team workout ("teams of 3", "partner WOD") and its size."""
    text = (description_text or "").lower()
    if not text:
        return TeamDetection(False, 2)

    match = TEAMS_OF.search(text)
    if match:
        return TeamDetection(True, int(match.group(1)))

    if any(cue.search(text) for cue in PARTNER_CUES):
        return TeamDetection(True, 2)

    return TeamDetection(False, 2)
