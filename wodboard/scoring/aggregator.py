"""Medal points aggregation over arbitrary date windows.

``aggregate`` is a pure fold: every call rebuilds the tallies from the records
it is given and returns a new read-only mapping.
"""

from collections import defaultdict
from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from loguru import logger

from wodboard.scoring.classifier import effective_discipline
from wodboard.scoring.ranker import rank
from wodboard.scoring.schemas import (
    AthleteStandingRow,
    MedalTally,
    ScoreRecord,
    Workout,
)

MEDAL_POINTS = (3, 2, 1)
RX_BONUS_POINTS = 0.5

_MEDAL_FIELDS = ("gold", "silver", "bronze")


def group_by_date(records: Iterable[ScoreRecord]) -> dict[date, list[ScoreRecord]]:
    """Group score records by workout date, keeping submission order."""
    grouped: dict[date, list[ScoreRecord]] = defaultdict(list)
    for record in records:
        grouped[record.date].append(record)
    return dict(grouped)


def _award(tally: MedalTally, medal: str, points: float) -> MedalTally:
    return tally.model_copy(
        update={
            medal: getattr(tally, medal) + 1,
            "total_points": tally.total_points + points,
        }
    )


def calculate_rx_bonus(
    workouts: Iterable[Workout],
    scores_by_date: Mapping[date, Sequence[ScoreRecord]],
    bonus: float = RX_BONUS_POINTS,
) -> dict[str, float]:
    """Rx bonus per athlete: ``bonus`` for each unique scored date done Rx.

    Parameters
    ----------
    workouts : Iterable[Workout]
        Workouts of the window
    scores_by_date : Mapping[date, Sequence[ScoreRecord]]
        Records of the window keyed by date
    bonus : float
        Points per Rx date

    Returns
    -------
    dict[str, float]
        Bonus points per registered athlete; guests are never eligible
    """
    rx_dates: dict[str, set[date]] = defaultdict(set)
    for workout in workouts:
        if not effective_discipline(workout).is_scoreable:
            continue
        for record in scores_by_date.get(workout.date, ()):
            if record.is_rx and record.athlete_id is not None:
                rx_dates[record.athlete_id].add(workout.date)

    return {athlete_id: len(dates) * bonus for athlete_id, dates in rx_dates.items()}


def aggregate(
    workouts: Iterable[Workout],
    scores_by_date: Mapping[date, Sequence[ScoreRecord]],
    *,
    medal_points: Sequence[float] = MEDAL_POINTS,
    rx_bonus: float = RX_BONUS_POINTS,
) -> Mapping[str, MedalTally]:
    """Tally medals and points per athlete over a window of workouts.

    Only band positions 1, 2 and 3 earn medals; a band starting beyond
    position 3 ends the day's awards. Every athlete in a band, team members
    included, receives the identical award.

    Parameters
    ----------
    workouts : Iterable[Workout]
        Workouts in the window, at most one per date
    scores_by_date : Mapping[date, Sequence[ScoreRecord]]
        Records keyed by workout date; dates without a workout are ignored
    medal_points : Sequence[float]
        Points for gold, silver and bronze
    rx_bonus : float
        Points per unique Rx date on a scoreable workout, 0 to disable

    Returns
    -------
    Mapping[str, MedalTally]
        Read-only mapping of athlete id to tally
    """
    by_date: dict[date, Workout] = {}
    for workout in workouts:
        if workout.date in by_date:
            logger.warning("Duplicate workout ignored", date=workout.date.isoformat())
            continue
        by_date[workout.date] = workout
    window = [by_date[day] for day in sorted(by_date)]
    tallies: dict[str, MedalTally] = {}

    for workout in window:
        bands = rank(scores_by_date.get(workout.date, ()), effective_discipline(workout))
        for band in bands:
            if band.position > len(_MEDAL_FIELDS):
                break
            medal = _MEDAL_FIELDS[band.position - 1]
            points = medal_points[band.position - 1]
            for athlete_id in band.athlete_ids:
                tallies[athlete_id] = _award(
                    tallies.get(athlete_id, MedalTally()), medal, points
                )

    if rx_bonus:
        for athlete_id, bonus in calculate_rx_bonus(
            window, scores_by_date, rx_bonus
        ).items():
            tally = tallies.get(athlete_id, MedalTally())
            tallies[athlete_id] = tally.model_copy(
                update={"total_points": tally.total_points + bonus}
            )

    logger.debug("Aggregated window", workouts=len(window), athletes=len(tallies))
    return MappingProxyType(tallies)


def _standing_sort_key(item: tuple[str, MedalTally, str]) -> tuple:
    athlete_id, tally, name = item
    return (
        -tally.total_points,
        -tally.gold,
        -tally.silver,
        -tally.bronze,
        name.casefold(),
        athlete_id,
    )


def build_standings(
    tallies: Mapping[str, MedalTally],
    display_names: Mapping[str, str] | None = None,
    include_zero: bool = False,
) -> list[AthleteStandingRow]:
    """Sort tallies into a standings table.

    Order: total points, gold, silver, bronze (all descending), then display
    name and athlete id ascending so the table is fully deterministic.

    Parameters
    ----------
    tallies : Mapping[str, MedalTally]
        Output of ``aggregate``
    display_names : Mapping[str, str] | None
        Athlete id to display name; the id is used when a name is missing
    include_zero : bool
        Keep athletes whose total is zero

    Returns
    -------
    list[AthleteStandingRow]
        Rows with 1-based ``rank`` set to their table position
    """
    names = display_names or {}
    items = [
        (athlete_id, tally, names.get(athlete_id) or athlete_id)
        for athlete_id, tally in tallies.items()
        if include_zero or tally.total_points > 0
    ]
    items.sort(key=_standing_sort_key)

    return [
        AthleteStandingRow(
            rank=index,
            athlete_id=athlete_id,
            display_name=name,
            gold=tally.gold,
            silver=tally.silver,
            bronze=tally.bronze,
            total_points=tally.total_points,
        )
        for index, (athlete_id, tally, name) in enumerate(items, start=1)
    ]


def standing_index(
    tallies: Mapping[str, MedalTally],
    athlete_id: str,
    display_names: Mapping[str, str] | None = None,
) -> int | None:
    """0-based index of an athlete among positive-point standings, or None."""
    for row in build_standings(tallies, display_names):
        if row.athlete_id == athlete_id:
            return row.rank - 1
    return None
