"""cloudtail: tail Cloud Logging entries for a project from the terminal."""

__version__ = "0.1.0"
