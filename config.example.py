# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file lists every key with its default so the repo documents itself.
"""

ENV_VARS = {
    # App / logging
    "ORGANIZER_APP_NAME": "App display name (default: College Organizer).",
    "ORGANIZER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Storage
    "ORGANIZER_STORE": "Record store backend: memory | sqlite (default: memory).",
    "ORGANIZER_DATA_DIR": "Local data directory for logs and the SQLite file (default: .local/organizer).",
    "ORGANIZER_DB_PATH": "SQLite path when ORGANIZER_STORE=sqlite (default: <data_dir>/organizer.sqlite3).",
    "ORGANIZER_SEED_DEMO": "Seed sample tracks/tasks into an empty store (default: true for memory).",
    # Views
    "ORGANIZER_EXPAND_RECURRING": "Show recurring tasks on every occurrence, not only the anchor date (default: false).",
    "ORGANIZER_UPCOMING_LIMIT": "Size of the upcoming list (default: 10).",
    # Notifications
    "ORGANIZER_NOTIFICATIONS_ENABLED": "Run the background notification monitor (default: true).",
    "ORGANIZER_NOTIFY_TIMEOUT_SECONDS": "Seconds a notification stays active (default: 5).",
    "ORGANIZER_NOTIFY_POLL_SECONDS": "Monitor polling interval (default: 1).",
    # Pomodoro presets (minutes)
    "ORGANIZER_POMODORO_MINUTES": "Focus session length (default: 25).",
    "ORGANIZER_SHORT_BREAK_MINUTES": "Short break (default: 5).",
    "ORGANIZER_LONG_BREAK_MINUTES": "Long break (default: 15).",
}
