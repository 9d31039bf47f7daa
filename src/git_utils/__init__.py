"""git-utils: interactive fuzzy selection lists for everyday git chores."""

__version__ = "1.0.0"
