import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import datetime, timedelta, timezone

import pytest

from neuron_zk.core.errors import InvalidTitleID, MalformedID
from neuron_zk.core.ids import (
    CustomScheme,
    HashScheme,
    ZettelID,
    format_zettel_id,
    generate_zettel_id,
    parse_zettel_id,
)

WHEN = datetime(2020, 8, 24, 12, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("text", ["abc123", "2020-note_x.v2", "Hello-World", "a"])
def test_parse_format_round_trip(text):
    zid = parse_zettel_id(text)
    assert format_zettel_id(zid) == text
    assert parse_zettel_id(format_zettel_id(zid)) == zid


def test_filename():
    assert parse_zettel_id("abc123").filename == "abc123.md"


@pytest.mark.parametrize("text", ["", "a/b", "a\\b", "a b", "tab\there", "new\nline", ".hidden", "what?", "ü"])
def test_parse_rejects(text):
    with pytest.raises(MalformedID):
        parse_zettel_id(text)


def test_empty_is_malformed_id():
    with pytest.raises(MalformedID) as exc:
        parse_zettel_id("")
    assert exc.value.reason == "empty"


def test_hash_ids_differ_at_same_instant():
    a = generate_zettel_id(HashScheme(), WHEN)
    b = generate_zettel_id(HashScheme(), WHEN)
    assert a != b
    assert a.value[:7] == b.value[:7]


def test_hash_id_uses_injected_entropy():
    zid = generate_zettel_id(HashScheme(), WHEN, entropy=lambda: "DEADBEEF00")
    assert len(zid.value) == 15
    assert zid.value.endswith("deadbeef")
    assert parse_zettel_id(zid.value) == zid


def test_hash_ids_sort_by_time():
    later = WHEN.replace(year=2021)
    a = generate_zettel_id(HashScheme(), WHEN, entropy=lambda: "ffffffff")
    b = generate_zettel_id(HashScheme(), later, entropy=lambda: "00000000")
    assert a.value < b.value


def test_hash_entropy_must_be_hex():
    with pytest.raises(ValueError):
        generate_zettel_id(HashScheme(), WHEN, entropy=lambda: "xyz")


def test_custom_id_from_title():
    assert generate_zettel_id(CustomScheme("Hello World"), WHEN) == ZettelID("Hello-World")


def test_custom_id_transliterates():
    assert generate_zettel_id(CustomScheme("Café  au lait"), WHEN) == ZettelID("Cafe-au-lait")


def test_custom_id_ignores_timestamp():
    assert generate_zettel_id(CustomScheme("x"), WHEN) == generate_zettel_id(CustomScheme("x"), WHEN.replace(year=1999))


@pytest.mark.parametrize("title", ["", "   ", "---", "what?", "a/b", "日本語"])
def test_custom_id_rejects(title):
    with pytest.raises(InvalidTitleID):
        generate_zettel_id(CustomScheme(title), WHEN)


def test_naive_timestamp_is_utc():
    naive = WHEN.replace(tzinfo=None)
    pin = lambda: "abcdef01"
    assert generate_zettel_id(HashScheme(), naive, entropy=pin) == generate_zettel_id(HashScheme(), WHEN, entropy=pin)


def test_aware_timestamps_use_their_offset():
    pin = lambda: "abcdef01"
    shifted = WHEN.astimezone(timezone(timedelta(hours=5)))
    assert generate_zettel_id(HashScheme(), shifted, entropy=pin) == generate_zettel_id(HashScheme(), WHEN, entropy=pin)
