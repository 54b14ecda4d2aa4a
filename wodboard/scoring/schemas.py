"""Pydantic schemas for workouts, score records and derived standings."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Discipline(str, Enum):
    """Scoring discipline of a workout."""

    TIME = "TIME"
    AMRAP = "AMRAP"
    CALORIES = "CALORIES"
    NO_SCORE = "NO_SCORE"
    UNKNOWN = "UNKNOWN"

    @property
    def is_scoreable(self) -> bool:
        return self in (Discipline.TIME, Discipline.AMRAP, Discipline.CALORIES)


class DayStatus(str, Enum):
    """Why a day's board does or does not have a ranking."""

    NO_WORKOUT = "NO_WORKOUT"
    NOT_SCOREABLE = "NOT_SCOREABLE"
    NO_SUBMISSIONS = "NO_SUBMISSIONS"
    RANKED = "RANKED"


class Workout(BaseModel):
    """The published workout (WOD) for one calendar date.

    Attributes
    ----------
    date : date
        Calendar date, unique per workout
    description_text : str
        Free text of the workout as published
    discipline_override : Discipline | None
        Admin override of the detected discipline
    is_team : bool
        Whether the workout is done in teams
    team_size : int
        Expected team size (informational, never enforced)
    """

    date: date
    description_text: str = ""
    discipline_override: Discipline | None = None
    is_team: bool = False
    team_size: int = 2

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ScoreRecord(BaseModel):
    """One submitted result for one athlete (or one member of a team).

    Attributes
    ----------
    athlete_id : str | None
        Registered athlete id, None for a guest
    date : date
        Workout date the score belongs to
    is_rx : bool
        Whether the workout was done as prescribed
    team_id : str | None
        Grouping key shared by every row of one team
    guest_name : str | None
        Display name of a guest row
    guest_partner_names : tuple[str, ...]
        Unregistered partners attached to the entry (display only)
    elapsed_seconds : int | None
        Result for TIME workouts
    amrap_rounds : int | None
        Rounds for AMRAP workouts (0 or None for CALORIES)
    amrap_reps : int | None
        Extra reps for AMRAP, calorie count for CALORIES
    submitted_at : datetime | None
        Submission timestamp
    last_edited_at : datetime | None
        Last edit timestamp
    """

    athlete_id: str | None = None
    date: date
    is_rx: bool = False
    team_id: str | None = None
    guest_name: str | None = None
    guest_partner_names: tuple[str, ...] = ()
    elapsed_seconds: int | None = None
    amrap_rounds: int | None = None
    amrap_reps: int | None = None
    submitted_at: datetime | None = None
    last_edited_at: datetime | None = None

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def is_guest(self) -> bool:
        return self.athlete_id is None


class TeamEntry(BaseModel):
    """A team as one aggregate: members plus the score they share."""

    team_id: str
    member_ids: tuple[str, ...]
    guest_names: tuple[str, ...] = ()
    has_guests: bool = False
    record: ScoreRecord

    model_config = ConfigDict(frozen=True)


class Competitor(BaseModel):
    """One ranked entry: a solo athlete or a whole team.

    Attributes
    ----------
    team_id : str | None
        Team id when the entry is a team
    athlete_ids : tuple[str, ...]
        Registered athletes sharing this entry's result
    record : ScoreRecord
        Representative record holding the score values
    has_guests : bool
        Team includes rows from unregistered guests
    """

    team_id: str | None = None
    athlete_ids: tuple[str, ...]
    record: ScoreRecord
    has_guests: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def is_team(self) -> bool:
        return self.team_id is not None


class RankBand(BaseModel):
    """Competitors tied on one position (competition numbering)."""

    position: int
    competitors: tuple[Competitor, ...]

    model_config = ConfigDict(frozen=True)

    @property
    def athlete_ids(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for competitor in self.competitors:
            for athlete_id in competitor.athlete_ids:
                seen.setdefault(athlete_id, None)
        return tuple(seen)

    @property
    def entry_count(self) -> int:
        """Entries the band consumes: each member once, a team's guests as one."""
        return len(self.athlete_ids) + sum(1 for c in self.competitors if c.has_guests)


class BoardRow(BaseModel):
    """A single row of a day's board, guests included."""

    record: ScoreRecord
    position: int | None = None

    model_config = ConfigDict(frozen=True)


class DayBoard(BaseModel):
    """Everything needed to render one day's leaderboard.

    Attributes
    ----------
    date : date
        The day shown
    status : DayStatus
        Distinguishes no workout, unscored workout, and no submissions yet
    discipline : Discipline
        Effective discipline of the day's workout
    workout : Workout | None
        The day's workout, if one exists
    bands : list[RankBand]
        Medal bands (at most three)
    rows : list[BoardRow]
        Every record in display order
    """

    date: date
    status: DayStatus
    discipline: Discipline
    workout: Workout | None = None
    bands: list[RankBand] = Field(default_factory=list)
    rows: list[BoardRow] = Field(default_factory=list)


class MedalTally(BaseModel):
    """Medal counts and points for one athlete over a window."""

    gold: int = 0
    silver: int = 0
    bronze: int = 0
    total_points: float = 0

    model_config = ConfigDict(frozen=True)


class AthleteStandingRow(BaseModel):
    """Single row of a standings table.

    Attributes
    ----------
    rank : int
        1-based row position in the sorted table
    athlete_id : str
        Registered athlete id
    display_name : str
        Externally supplied name, falls back to the id
    gold : int
        Gold medals in the window
    silver : int
        Silver medals in the window
    bronze : int
        Bronze medals in the window
    total_points : float
        Medal points plus any Rx bonus
    """

    rank: int
    athlete_id: str
    display_name: str
    gold: int
    silver: int
    bronze: int
    total_points: float

    model_config = ConfigDict(frozen=True)


class DateWindow(BaseModel):
    """Inclusive date range with a display label."""

    start: date
    end: date
    label: str

    model_config = ConfigDict(frozen=True)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class Leaderboard(BaseModel):
    """Standings for one window."""

    window: DateWindow
    rows: list[AthleteStandingRow]


class PlacementPoint(BaseModel):
    date: date
    rank: int

    model_config = ConfigDict(frozen=True)


class MedalHistory(BaseModel):
    """Daily medal counts with the dates they were won on."""

    gold: int = 0
    silver: int = 0
    bronze: int = 0
    gold_dates: list[date] = Field(default_factory=list)
    silver_dates: list[date] = Field(default_factory=list)
    bronze_dates: list[date] = Field(default_factory=list)


class PodiumHistory(BaseModel):
    """Weekly or monthly podium finishes with period labels."""

    first: int = 0
    second: int = 0
    third: int = 0
    first_periods: list[str] = Field(default_factory=list)
    second_periods: list[str] = Field(default_factory=list)
    third_periods: list[str] = Field(default_factory=list)


class ProfileStats(BaseModel):
    """Lifetime statistics for one athlete.

    Attributes
    ----------
    athlete_id : str
        Athlete the stats belong to
    wods_logged : int
        Distinct dates with a submitted score
    this_month_count : int
        Distinct dates with a score in the current month (live counter)
    daily : MedalHistory
        Medals won on completed days
    weekly : PodiumHistory
        Podium finishes in completed Monday-Friday weeks
    monthly : PodiumHistory
        Podium finishes in completed calendar months
    placements : list[PlacementPoint]
        Chronological placement trend, clamped
    avg_place : float | None
        Mean placement over the whole history, None without data
    avg_place_month : float | None
        Mean placement over the current month, None without data
    streak : int
        Consecutive attended weekdays ending today
    """

    athlete_id: str
    wods_logged: int = 0
    this_month_count: int = 0
    daily: MedalHistory = Field(default_factory=MedalHistory)
    weekly: PodiumHistory = Field(default_factory=PodiumHistory)
    monthly: PodiumHistory = Field(default_factory=PodiumHistory)
    placements: list[PlacementPoint] = Field(default_factory=list)
    avg_place: float | None = None
    avg_place_month: float | None = None
    streak: int = 0
