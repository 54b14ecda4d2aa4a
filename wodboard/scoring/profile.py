"""Lifetime statistics for one athlete.

Composes the ranker, the aggregator and the completed-period rules. Medal,
placement and podium figures only cover finished periods; today and the
running month are reported separately as live counters.
"""

from datetime import date, timedelta
from statistics import fmean
from typing import AbstractSet, Iterable, Mapping, Sequence

from loguru import logger

from wodboard.core.dates import is_weekend
from wodboard.scoring.aggregator import (
    MEDAL_POINTS,
    RX_BONUS_POINTS,
    aggregate,
    group_by_date,
    standing_index,
)
from wodboard.scoring.classifier import effective_discipline
from wodboard.scoring.periods import (
    completed_days,
    completed_months,
    completed_weeks,
    month_window,
)
from wodboard.scoring.ranker import position_for
from wodboard.scoring.schemas import (
    DateWindow,
    MedalHistory,
    PlacementPoint,
    PodiumHistory,
    ProfileStats,
    ScoreRecord,
    Workout,
)

PLACEMENT_CLAMP = 10
STREAK_LOOKBACK_DAYS = 365


def attendance_streak(
    attended: AbstractSet[date],
    today: date,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Count consecutive attended weekdays walking back from today.

    Weekends neither break nor extend the streak. A missing today does not
    break it either, since today's class may not have happened yet.

    Parameters
    ----------
    attended : AbstractSet[date]
        Explicit attendance plus every date with a score
    today : date
        Today in the operating timezone
    lookback_days : int
        Maximum number of calendar days walked

    Returns
    -------
    int
        Streak length in weekdays
    """
    streak = 0
    day = today
    for _ in range(lookback_days):
        if not is_weekend(day):
            if day in attended:
                streak += 1
            elif day != today:
                break
        day -= timedelta(days=1)
    return streak


def _average(points: Sequence[PlacementPoint]) -> float | None:
    if not points:
        return None
    return fmean(point.rank for point in points)


def _podium_history(
    athlete_id: str,
    windows: Iterable[DateWindow],
    workouts: Sequence[Workout],
    scores_by_date: Mapping[date, Sequence[ScoreRecord]],
    medal_points: Sequence[float],
    rx_bonus: float,
    display_names: Mapping[str, str] | None,
) -> PodiumHistory:
    history = PodiumHistory()
    slots = (
        (history.first_periods, "first"),
        (history.second_periods, "second"),
        (history.third_periods, "third"),
    )

    for window in windows:
        window_workouts = [w for w in workouts if window.contains(w.date)]
        window_scores = {
            day: records for day, records in scores_by_date.items() if window.contains(day)
        }
        tallies = aggregate(
            window_workouts, window_scores, medal_points=medal_points, rx_bonus=rx_bonus
        )
        index = standing_index(tallies, athlete_id, display_names)
        if index is None or index >= len(slots):
            continue
        labels, counter = slots[index]
        labels.append(window.label)
        setattr(history, counter, getattr(history, counter) + 1)

    return history


def compute_stats(
    athlete_id: str,
    active_dates: Iterable[date],
    scores: Iterable[ScoreRecord],
    workouts: Iterable[Workout],
    *,
    today: date,
    attended_dates: Iterable[date] = (),
    medal_points: Sequence[float] = MEDAL_POINTS,
    rx_bonus: float = RX_BONUS_POINTS,
    placement_clamp: int = PLACEMENT_CLAMP,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
    display_names: Mapping[str, str] | None = None,
) -> ProfileStats:
    """Build an athlete's profile statistics.

    Parameters
    ----------
    athlete_id : str
        Athlete to describe
    active_dates : Iterable[date]
        Dates the athlete submitted a score on
    scores : Iterable[ScoreRecord]
        Every record (all athletes) on the dates and periods involved
    workouts : Iterable[Workout]
        Workouts for the same dates and periods
    today : date
        Today in the operating timezone
    attended_dates : Iterable[date]
        Explicit attendance markers, merged with active dates for the streak
    medal_points : Sequence[float]
        Points for gold, silver and bronze
    rx_bonus : float
        Rx bonus per scored date, used for weekly/monthly standings
    placement_clamp : int
        Worst placement reported in the trend
    lookback_days : int
        Bound of the streak walk
    display_names : Mapping[str, str] | None
        Names used to break full ties in weekly/monthly standings, the same
        way the leaderboard does; athlete ids stand in for missing names

    Returns
    -------
    ProfileStats
        Medals, podiums, placement trend, averages and streak
    """
    my_dates = sorted(set(active_dates))
    workout_list = list(workouts)
    workouts_by_date = {workout.date: workout for workout in workout_list}
    scores_by_date = group_by_date(scores)
    this_month = month_window(today)

    daily = MedalHistory()
    medal_slots = (
        ("gold", daily.gold_dates),
        ("silver", daily.silver_dates),
        ("bronze", daily.bronze_dates),
    )
    placements: list[PlacementPoint] = []

    for day in completed_days(today, my_dates):
        discipline = effective_discipline(workouts_by_date.get(day))
        if not discipline.is_scoreable:
            continue
        position = position_for(athlete_id, scores_by_date.get(day, []), discipline)
        if position is None:
            continue
        if position <= len(medal_slots):
            medal, dates = medal_slots[position - 1]
            setattr(daily, medal, getattr(daily, medal) + 1)
            dates.append(day)
        placements.append(PlacementPoint(date=day, rank=min(position, placement_clamp)))

    month_placements = [p for p in placements if this_month.contains(p.date)]

    weekly = _podium_history(
        athlete_id,
        completed_weeks(today, my_dates),
        workout_list,
        scores_by_date,
        medal_points,
        rx_bonus,
        display_names,
    )
    monthly = _podium_history(
        athlete_id,
        completed_months(today, my_dates),
        workout_list,
        scores_by_date,
        medal_points,
        rx_bonus,
        display_names,
    )

    attended = set(attended_dates) | set(my_dates)
    stats = ProfileStats(
        athlete_id=athlete_id,
        wods_logged=len(my_dates),
        this_month_count=sum(1 for day in my_dates if this_month.contains(day)),
        daily=daily,
        weekly=weekly,
        monthly=monthly,
        placements=placements,
        avg_place=_average(placements),
        avg_place_month=_average(month_placements),
        streak=attendance_streak(attended, today, lookback_days),
    )

    logger.debug(
        "Computed profile stats",
        athlete_id=athlete_id,
        wods_logged=stats.wods_logged,
        placements=len(placements),
    )
    return stats
