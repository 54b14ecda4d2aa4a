"""
Pytest configuration and fixtures for the WOD Board tests
"""

from datetime import date

import pytest

from wodboard.config import Settings
from wodboard.scoring.schemas import ScoreRecord, Workout


@pytest.fixture
def make_score():
    """Factory for score records with only the fields a test cares about."""

    def _make(
        athlete_id,
        day,
        seconds=None,
        rounds=None,
        reps=None,
        team_id=None,
        is_rx=False,
        guest_name=None,
    ):
        return ScoreRecord(
            athlete_id=athlete_id,
            date=day,
            elapsed_seconds=seconds,
            amrap_rounds=rounds,
            amrap_reps=reps,
            team_id=team_id,
            is_rx=is_rx,
            guest_name=guest_name,
        )

    return _make


@pytest.fixture
def make_workout():
    def _make(day, text="For time: 21-15-9 thrusters and pull-ups", override=None, is_team=False):
        return Workout(
            date=day,
            description_text=text,
            discipline_override=override,
            is_team=is_team,
        )

    return _make


@pytest.fixture
def settings():
    """Settings with defaults, independent of any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def season(make_score, make_workout):
    """Five weeks of a small class, used by profile and service tests.

    Feb 26 (Mon, TIME): alice 300, bob 400
    Mar 4  (Mon, TIME): alice 600, bob 600, carol 650
    Mar 5  (Tue, AMRAP): carol 6+0, bob 5+20, alice 5+12, dave 4+0, erin 3+0
    Mar 6  (Wed, EMOM): alice only, not scored
    Mar 8  (Fri, TIME): no submissions
    Mar 20 (Wed, TIME): alice 500, today in these tests
    """
    workouts = [
        make_workout(date(2024, 2, 26)),
        make_workout(date(2024, 3, 4)),
        make_workout(date(2024, 3, 5), "AMRAP 12: 5 pull-ups, 10 push-ups, 15 squats"),
        make_workout(date(2024, 3, 6), "EMOM 10: 3 power cleans"),
        make_workout(date(2024, 3, 8), "Complete 5 rounds for time"),
        make_workout(date(2024, 3, 20)),
    ]
    scores = [
        make_score("alice", date(2024, 2, 26), seconds=300),
        make_score("bob", date(2024, 2, 26), seconds=400),
        make_score("alice", date(2024, 3, 4), seconds=600),
        make_score("bob", date(2024, 3, 4), seconds=600),
        make_score("carol", date(2024, 3, 4), seconds=650),
        make_score("alice", date(2024, 3, 5), rounds=5, reps=12),
        make_score("bob", date(2024, 3, 5), rounds=5, reps=20),
        make_score("carol", date(2024, 3, 5), rounds=6, reps=0),
        make_score("dave", date(2024, 3, 5), rounds=4, reps=0),
        make_score("erin", date(2024, 3, 5), rounds=3, reps=0),
        make_score("alice", date(2024, 3, 6)),
        make_score("alice", date(2024, 3, 20), seconds=500),
    ]
    return workouts, scores


@pytest.fixture
def today():
    return date(2024, 3, 20)
