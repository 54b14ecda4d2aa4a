"""Service layer: fetch a snapshot through the lookups, then run the engine."""

from datetime import date

from loguru import logger

from wodboard.config import Settings, get_settings
from wodboard.core.dates import month_bounds, today_in_tz, week_monday
from wodboard.scoring.aggregator import aggregate, build_standings, group_by_date
from wodboard.scoring.periods import get_period_window
from wodboard.scoring.profile import compute_stats
from wodboard.scoring.ranker import build_day_board
from wodboard.scoring.repositories import (
    AthleteDirectory,
    AttendanceRepository,
    ScoreRepository,
    WorkoutRepository,
)
from wodboard.scoring.schemas import DayBoard, Leaderboard, ProfileStats


class ScoringService:
    """Service for day boards, period leaderboards and athlete profiles."""

    def __init__(
        self,
        workouts: WorkoutRepository,
        scores: ScoreRepository,
        attendance: AttendanceRepository | None = None,
        directory: AthleteDirectory | None = None,
        settings: Settings | None = None,
    ):
        self.workouts = workouts
        self.scores = scores
        self.attendance = attendance
        self.directory = directory
        self.settings = settings or get_settings()

    def today(self) -> date:
        """Today in the application's operating timezone."""
        return today_in_tz(self.settings.APP_TIMEZONE)

    async def get_day_board(self, day: date | None = None) -> DayBoard:
        """Build the board for one day.

        Parameters
        ----------
        day : date | None
            Day to show. If None, uses today.

        Returns
        -------
        DayBoard
            Status, medal bands and every row in display order
        """
        if day is None:
            day = self.today()

        workout = await self.workouts.get(day)
        records = await self.scores.list_for_date(day) if workout is not None else []

        board = build_day_board(day, workout, records)
        logger.info(
            "Built day board",
            date=day.isoformat(),
            status=board.status.value,
            discipline=board.discipline.value,
            rows=len(board.rows),
        )
        return board

    async def get_leaderboard(
        self,
        period: str = "this_month",
        today: date | None = None,
        custom_start: date | None = None,
        custom_end: date | None = None,
    ) -> Leaderboard:
        """Calculate standings for a named period.

        Parameters
        ----------
        period : str
            Period selector understood by ``get_period_window``
        today : date | None
            Reference date. If None, uses today.
        custom_start : date | None
            First day for a custom period
        custom_end : date | None
            Last day for a custom period

        Returns
        -------
        Leaderboard
            Window plus rows sorted by points, medals and name.
            Only includes athletes with >0 points.

        Raises
        ------
        InvalidPeriodError
            If the period cannot be resolved
        """
        if today is None:
            today = self.today()

        window = get_period_window(period, today, custom_start, custom_end)
        workouts = list(await self.workouts.list_between(window.start, window.end))
        records = await self.scores.list_for_dates(w.date for w in workouts)

        tallies = aggregate(
            workouts,
            group_by_date(records),
            medal_points=self.settings.medal_points,
            rx_bonus=self.settings.RX_BONUS_POINTS,
        )

        names = {}
        if self.directory is not None and tallies:
            names = await self.directory.get_display_names(list(tallies))

        rows = build_standings(tallies, names)
        logger.info(
            "Built leaderboard",
            period=period,
            window=window.label,
            workouts=len(workouts),
            athletes=len(rows),
        )
        return Leaderboard(window=window, rows=rows)

    async def get_athlete_profile(
        self, athlete_id: str, today: date | None = None
    ) -> ProfileStats:
        """Compute an athlete's lifetime statistics.

        Parameters
        ----------
        athlete_id : str
            Registered athlete id
        today : date | None
            Reference date. If None, uses today.

        Returns
        -------
        ProfileStats
            Medals, podiums, placement trend, averages and streak
        """
        if today is None:
            today = self.today()

        active_dates = list(await self.scores.list_dates_for_athlete(athlete_id))
        attended = []
        if self.attendance is not None:
            attended = list(await self.attendance.list_dates(athlete_id))

        workouts = []
        records = []
        if active_dates:
            # Cover the full weeks and months the first active date falls in
            first = min(active_dates)
            start = min(month_bounds(first)[0], week_monday(first))
            workouts = list(await self.workouts.list_between(start, today))
            records = list(await self.scores.list_for_dates(w.date for w in workouts))

        names = {}
        if self.directory is not None and records:
            athlete_ids = {r.athlete_id for r in records if r.athlete_id is not None}
            names = await self.directory.get_display_names(sorted(athlete_ids))

        stats = compute_stats(
            athlete_id,
            active_dates,
            records,
            workouts,
            today=today,
            attended_dates=attended,
            medal_points=self.settings.medal_points,
            rx_bonus=self.settings.RX_BONUS_POINTS,
            placement_clamp=self.settings.PLACEMENT_CLAMP,
            lookback_days=self.settings.STREAK_LOOKBACK_DAYS,
            display_names=names,
        )
        logger.info(
            "Built athlete profile",
            athlete_id=athlete_id,
            wods_logged=stats.wods_logged,
            streak=stats.streak,
        )
        return stats
