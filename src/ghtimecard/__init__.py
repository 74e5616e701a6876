"""ghtimecard - GitHub activity timecards."""

__version__ = "0.1.0"
