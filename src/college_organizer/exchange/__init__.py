# src/college_organizer/exchange/__init__.py
