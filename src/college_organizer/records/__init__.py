# src/college_organizer/records/__init__.py
