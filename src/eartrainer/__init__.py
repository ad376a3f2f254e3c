"""eartrainer - terminal front end for pitchtone."""

__version__ = "0.1.0"
