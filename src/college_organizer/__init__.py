# src/college_organizer/__init__.py

"""Personal task/schedule organizer: record store, scheduling engine and derived views."""

__version__ = "1.0.0"
