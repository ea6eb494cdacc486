"""Roadmap Tracker: personal roadmap planner with pluggable local storage."""

__version__ = "0.1.0"
