"""Ranking of one day's results.

Pure functions over already-fetched records. Missing score values never raise;
they sort as the worst possible result.
"""

import math
from datetime import date
from typing import Iterable, Sequence

from loguru import logger

from wodboard.scoring.classifier import effective_discipline
from wodboard.scoring.schemas import (
    BoardRow,
    Competitor,
    DayBoard,
    DayStatus,
    Discipline,
    RankBand,
    ScoreRecord,
    TeamEntry,
    Workout,
)

# Rounds dominate reps in the AMRAP composite key
ROUND_WEIGHT = 10000
MEDAL_BANDS = 3


def sort_key(record: ScoreRecord, discipline: Discipline) -> float:
    """Ascending sort key: lower is better for every discipline.

    Parameters
    ----------
    record : ScoreRecord
        Record to rank
    discipline : Discipline
        Day's discipline (TIME, AMRAP or CALORIES)

    Returns
    -------
    float
        Elapsed seconds for TIME (missing = +inf), negated
        ``rounds * 10000 + reps`` for AMRAP/CALORIES (missing parts = -1)
    """
    if discipline == Discipline.TIME:
        if record.elapsed_seconds is None:
            return math.inf
        return record.elapsed_seconds

    rounds, reps = _rounds_and_reps(record)
    return -(rounds * ROUND_WEIGHT + reps)


def tie_key(record: ScoreRecord, discipline: Discipline) -> tuple:
    """Key that is equal for two records iff they tie exactly."""
    if discipline == Discipline.TIME:
        seconds = record.elapsed_seconds
        return (math.inf if seconds is None else seconds,)
    return _rounds_and_reps(record)


def _rounds_and_reps(record: ScoreRecord) -> tuple[int, int]:
    rounds = record.amrap_rounds if record.amrap_rounds is not None else -1
    reps = record.amrap_reps if record.amrap_reps is not None else -1
    return rounds, reps


def group_teams(records: Iterable[ScoreRecord]) -> dict[str, TeamEntry]:
    """Build one TeamEntry per distinct team id, in first-seen order.

    The first row seen for a team is its representative; all rows of a team
    carry the same score values.
    """
    first_rows: dict[str, ScoreRecord] = {}
    members: dict[str, dict[str, None]] = {}
    guests: dict[str, list[str]] = {}
    guest_rows: set[str] = set()

    for record in records:
        if record.team_id is None:
            continue
        team_id = record.team_id
        first_rows.setdefault(team_id, record)
        members.setdefault(team_id, {})
        guests.setdefault(team_id, [])
        if record.athlete_id is not None:
            members[team_id].setdefault(record.athlete_id, None)
        else:
            guest_rows.add(team_id)
            if record.guest_name:
                guests[team_id].append(record.guest_name)
        for name in record.guest_partner_names:
            if name not in guests[team_id]:
                guests[team_id].append(name)

    return {
        team_id: TeamEntry(
            team_id=team_id,
            member_ids=tuple(members[team_id]),
            guest_names=tuple(guests[team_id]),
            has_guests=team_id in guest_rows,
            record=record,
        )
        for team_id, record in first_rows.items()
    }


def build_competitors(records: Sequence[ScoreRecord]) -> list[Competitor]:
    """Collapse a day's rows into rankable competitors.

    Teams come first (one per team id), then solo athletes de-duplicated by
    athlete id with the first submission winning. Solo guest rows are left
    out. A team made only of guests still takes its place in the order, it
    just has no one to award.
    """
    competitors = [
        Competitor(
            team_id=team.team_id,
            athlete_ids=team.member_ids,
            record=team.record,
            has_guests=team.has_guests,
        )
        for team in group_teams(records).values()
    ]

    seen: set[str] = set()
    for record in records:
        if record.team_id is not None or record.athlete_id is None:
            continue
        if record.athlete_id in seen:
            continue
        seen.add(record.athlete_id)
        competitors.append(Competitor(athlete_ids=(record.athlete_id,), record=record))

    return competitors


def rank_all(records: Sequence[ScoreRecord], discipline: Discipline) -> list[RankBand]:
    """Rank every competitor of a day into bands of exact ties.

    Positions use competition numbering: a two-way tie for first puts both on
    position 1 and the next band on position 3. A team advances the position
    by its member count, its guests counting as one entry together.

    Parameters
    ----------
    records : Sequence[ScoreRecord]
        All rows submitted for the day
    discipline : Discipline
        Effective discipline of the day's workout

    Returns
    -------
    list[RankBand]
        Bands in order; empty for NO_SCORE/UNKNOWN or no rankable rows
    """
    if not discipline.is_scoreable:
        return []

    ordered = sorted(
        build_competitors(records), key=lambda c: sort_key(c.record, discipline)
    )

    bands: list[RankBand] = []
    position = 1
    i = 0
    while i < len(ordered):
        current = tie_key(ordered[i].record, discipline)
        j = i + 1
        while j < len(ordered) and tie_key(ordered[j].record, discipline) == current:
            j += 1
        band = RankBand(position=position, competitors=tuple(ordered[i:j]))
        bands.append(band)
        position += band.entry_count
        i = j

    return bands


def rank(records: Sequence[ScoreRecord], discipline: Discipline) -> list[RankBand]:
    """First three bands of a day's ranking (see ``rank_all``)."""
    bands = rank_all(records, discipline)[:MEDAL_BANDS]
    logger.debug(
        "Ranked day",
        discipline=discipline.value,
        records=len(records),
        bands=[band.position for band in bands],
    )
    return bands


def position_for(
    athlete_id: str, records: Sequence[ScoreRecord], discipline: Discipline
) -> int | None:
    """Competition position of an athlete's entry, None if not ranked."""
    for band in rank_all(records, discipline):
        if athlete_id in band.athlete_ids:
            return band.position
    return None


def placement_for(
    athlete_id: str,
    records: Sequence[ScoreRecord],
    discipline: Discipline,
    clamp: int = 10,
) -> int | None:
    """Placement of one athlete on one day, clamped for charting.

    Parameters
    ----------
    athlete_id : str
        Athlete to look up
    records : Sequence[ScoreRecord]
        All rows submitted for the day
    discipline : Discipline
        Effective discipline of the day's workout
    clamp : int
        Worst placement reported; anything worse is reported as ``clamp``

    Returns
    -------
    int | None
        1 + number of entries with a strictly better result, capped at
        ``clamp``; None when the athlete has no ranked entry that day
    """
    position = position_for(athlete_id, records, discipline)
    if position is None:
        return None
    return min(position, clamp)


def day_status(workout: Workout | None, records: Sequence[ScoreRecord]) -> DayStatus:
    """Tell apart the reasons a day may have nothing ranked."""
    if workout is None:
        return DayStatus.NO_WORKOUT
    if not effective_discipline(workout).is_scoreable:
        return DayStatus.NOT_SCOREABLE
    if not records:
        return DayStatus.NO_SUBMISSIONS
    return DayStatus.RANKED


def build_day_board(
    day: date, workout: Workout | None, records: Sequence[ScoreRecord]
) -> DayBoard:
    """Assemble a day's board: status, medal bands and every row for display.

    Rows include guests; they are ordered by result and carry their
    competitor's position, or None for guests and unscored days.
    """
    discipline = effective_discipline(workout)
    status = day_status(workout, records)

    if not discipline.is_scoreable:
        rows = [BoardRow(record=record) for record in records]
        return DayBoard(
            date=day, status=status, discipline=discipline, workout=workout, rows=rows
        )

    bands = rank_all(records, discipline)
    team_positions: dict[str, int] = {}
    athlete_positions: dict[str, int] = {}
    for band in bands:
        for competitor in band.competitors:
            if competitor.team_id is not None:
                team_positions[competitor.team_id] = band.position
            else:
                athlete_positions[competitor.athlete_ids[0]] = band.position

    rows = []
    for record in sorted(records, key=lambda r: sort_key(r, discipline)):
        if record.team_id is not None:
            position = team_positions.get(record.team_id)
        elif record.athlete_id is not None:
            position = athlete_positions.get(record.athlete_id)
        else:
            position = None
        rows.append(BoardRow(record=record, position=position))

    return DayBoard(
        date=day,
        status=status,
        discipline=discipline,
        workout=workout,
        bands=bands[:MEDAL_BANDS],
        rows=rows,
    )
