"""Scoring exceptions."""


class ScoringException(Exception):
    """Base exception for ranking engine errors."""

    pass


class InvalidPeriodError(ScoringException, ValueError):
    """Raised when a leaderboard period selector cannot be resolved."""

    pass


class WorkoutConflictError(ScoringException):
    """Raised when two workouts are registered for the same date."""

    pass
