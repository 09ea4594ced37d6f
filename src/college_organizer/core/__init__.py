# src/college_organizer/core/__init__.py
