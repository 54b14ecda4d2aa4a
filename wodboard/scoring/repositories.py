"""Lookup contracts the engine's callers must provide, plus in-memory adapters."""

from collections import defaultdict
from datetime import date
from typing import Iterable, Mapping, Protocol, Sequence

from wodboard.scoring.exceptions import WorkoutConflictError
from wodboard.scoring.schemas import ScoreRecord, Workout


class WorkoutRepository(Protocol):
    """Provides access to published workouts."""

    async def get(self, day: date) -> Workout | None:
        """Fetch the workout for a date."""

    async def list_between(self, start: date, end: date) -> Sequence[Workout]:
        """Return workouts dated within ``start..end`` (inclusive)."""


class ScoreRepository(Protocol):
    """Provides access to submitted scores."""

    async def list_for_date(self, day: date) -> Sequence[ScoreRecord]:
        """Return every record for one date."""

    async def list_for_dates(self, days: Iterable[date]) -> Sequence[ScoreRecord]:
        """Return every record for a set of dates."""

    async def list_dates_for_athlete(self, athlete_id: str) -> Sequence[date]:
        """Return the distinct dates an athlete has a record on."""


class AttendanceRepository(Protocol):
    """Attendance markers recorded independently of scoring."""

    async def list_dates(self, athlete_id: str) -> Sequence[date]:
        """Return dates the athlete was marked as attended."""


class AthleteDirectory(Protocol):
    """Display names for registered athletes."""

    async def get_display_names(self, athlete_ids: Iterable[str]) -> Mapping[str, str]:
        """Return display names keyed by athlete id."""


class InMemoryWorkoutRepository:
    """Workout lookups over an in-memory collection, one workout per date."""

    def __init__(self, workouts: Iterable[Workout] = ()):
        self._by_date: dict[date, Workout] = {}
        for workout in workouts:
            self.add(workout)

    def add(self, workout: Workout) -> None:
        if workout.date in self._by_date:
            raise WorkoutConflictError(f"Workout already exists for {workout.date}")
        self._by_date[workout.date] = workout

    async def get(self, day: date) -> Workout | None:
        return self._by_date.get(day)

    async def list_between(self, start: date, end: date) -> list[Workout]:
        return [self._by_date[day] for day in sorted(self._by_date) if start <= day <= end]


class InMemoryScoreRepository:
    """Score lookups over an in-memory collection."""

    def __init__(self, records: Iterable[ScoreRecord] = ()):
        self._by_date: dict[date, list[ScoreRecord]] = defaultdict(list)
        for record in records:
            self.add(record)

    def add(self, record: ScoreRecord) -> None:
        self._by_date[record.date].append(record)

    async def list_for_date(self, day: date) -> list[ScoreRecord]:
        return list(self._by_date.get(day, ()))

    async def list_for_dates(self, days: Iterable[date]) -> list[ScoreRecord]:
        return [
            record
            for day in sorted(set(days))
            for record in self._by_date.get(day, ())
        ]

    async def list_dates_for_athlete(self, athlete_id: str) -> list[date]:
        return sorted(
            day
            for day, records in self._by_date.items()
            if any(record.athlete_id == athlete_id for record in records)
        )


class InMemoryAttendanceRepository:
    """Attendance markers held in memory, keyed by athlete id."""

    def __init__(self, attendance: Mapping[str, Iterable[date]] | None = None):
        self._dates = {
            athlete_id: set(days) for athlete_id, days in (attendance or {}).items()
        }

    async def list_dates(self, athlete_id: str) -> list[date]:
        return sorted(self._dates.get(athlete_id, ()))


class InMemoryAthleteDirectory:
    """Display names held in memory."""

    def __init__(self, names: Mapping[str, str] | None = None):
        self._names = dict(names or {})

    async def get_display_names(self, athlete_ids: Iterable[str]) -> dict[str, str]:
        return {
            athlete_id: self._names[athlete_id]
            for athlete_id in athlete_ids
            if athlete_id in self._names
        }
