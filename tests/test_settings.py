import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from neuron_zk.app_settings import SettingsKeys, get_int, get_limit, get_sort, get_str, notes_settings
from neuron_zk.core.queries import SortOrder


def write_ini(tmp_path, body):
    (tmp_path / ".neuron").mkdir(exist_ok=True)
    (tmp_path / ".neuron" / "neuron.ini").write_text(body, encoding="utf-8")
    return notes_settings(tmp_path)


def test_defaults_without_file(tmp_path):
    s = notes_settings(tmp_path)
    assert get_sort(s) is SortOrder.DATE
    assert get_limit(s) is None
    assert get_str(s, SettingsKeys.QUERY_SORT, "x") == "x"


def test_values_from_file(tmp_path):
    s = write_ini(tmp_path, "[query]\nsort=id\nlimit=5\n")
    assert get_sort(s) is SortOrder.ID
    assert get_limit(s) == 5
    assert get_int(s, SettingsKeys.QUERY_LIMIT, 0) == 5


def test_bad_values_fall_back(tmp_path):
    s = write_ini(tmp_path, "[query]\nsort=size\nlimit=lots\n")
    assert get_sort(s) is SortOrder.DATE
    assert get_limit(s) is None


def test_zero_limit_means_unlimited(tmp_path):
    s = write_ini(tmp_path, "[query]\nlimit=0\n")
    assert get_limit(s) is None
