# src/college_organizer/notifications/__init__.py
