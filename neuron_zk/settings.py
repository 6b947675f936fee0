from __future__ import annotations
import os
from pathlib import Path

APP_NAME = "neuron-zk"
APP_HOME = Path(os.environ.get("NEURON_ZK_HOME") or Path.home() / f".{APP_NAME}")
LOG_DIR = APP_HOME / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"

# per-notes-directory state (QSettings ini lives here)
NOTES_STATE_DIR = ".neuron"
NOTES_SETTINGS_FILE = "neuron.ini"
NOTES_CACHE_FILE = "cache.json"
