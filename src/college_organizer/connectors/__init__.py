# src/college_organizer/connectors/__init__.py
