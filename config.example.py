# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening src/todolist/config.py.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todolist).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for the task file and todolist.log (default: .local/todolist).",
    "TODO_TASKS_PATH": "JSON task file (default: <data_dir>/tasks.json).",
    # Store behaviour
    "TODO_JSON_INDENT": "Indentation used when pretty-printing the task file (default: 2).",
    "TODO_FLUSH_ON_EXIT": "Write the whole working copy back to the file on exit (default: true).",
}
