"""WOD Board: daily, weekly and monthly ranking engine for a class community."""

__version__ = "0.1.0"
