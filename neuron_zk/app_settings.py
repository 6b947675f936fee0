from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QSettings

from neuron_zk.core.queries import SortOrder
from neuron_zk.settings import NOTES_SETTINGS_FILE, NOTES_STATE_DIR


@dataclass(frozen=True)
class SettingsKeys:
    QUERY_SORT: str = "query/sort"
    QUERY_LIMIT: str = "query/limit"


def notes_settings(notes_dir: Path) -> QSettings:
    """Settings stored next to the notes, in ``.neuron/neuron.ini``."""
    path = Path(notes_dir) / NOTES_STATE_DIR / NOTES_SETTINGS_FILE
    return QSettings(str(path), QSettings.Format.IniFormat)


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def get_int(settings: QSettings, key: str, default: int) -> int:
    try:
        return int(settings.value(key, default))
    except Exception:
        return default


def get_sort(settings: QSettings, default: SortOrder = SortOrder.DATE) -> SortOrder:
    try:
        return SortOrder(get_str(settings, SettingsKeys.QUERY_SORT, default.value))
    except ValueError:
        return default


def get_limit(settings: QSettings) -> int | None:
    # 0 or negative means "no limit"
    limit = get_int(settings, SettingsKeys.QUERY_LIMIT, 0)
    return limit if limit > 0 else None
