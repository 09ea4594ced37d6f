# src/college_organizer/cli/__init__.py
