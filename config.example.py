# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths
    "TASKLIST_DATA_DIR": "Local data dir for storage and logs (default: .local/tasklist).",
    "TASKLIST_STORAGE_PATH": "Key-value storage file (default: <data_dir>/storage.json).",
    # Input defaults
    "TASKLIST_DEFAULT_PRIORITY": "Priority for new tasks: low | medium | high (default: high).",
    "TASKLIST_DEFAULT_FILTER": "Filter at startup: all | active | completed (default: all).",
    "TASKLIST_PREFILL_DATE": "Give new tasks today's date and the current time (default: true).",
}
