"""Ranking and points aggregation engine."""

from wodboard.scoring.aggregator import aggregate, build_standings
from wodboard.scoring.classifier import classify
from wodboard.scoring.profile import attendance_streak, compute_stats
from wodboard.scoring.ranker import rank
from wodboard.scoring.schemas import Discipline, ScoreRecord, Workout
from wodboard.scoring.service import ScoringService

__all__ = [
    "Discipline",
    "ScoreRecord",
    "ScoringService",
    "Workout",
    "aggregate",
    "attendance_streak",
    "build_standings",
    "classify",
    "compute_stats",
    "rank",
]
