import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from neuron_zk.core.errors import InvalidTagPattern
from neuron_zk.core.tags import Tag, TagMatch, TagPattern, TagQuery, default_tag_query


@pytest.mark.parametrize("text", ["", "a//b", "/a", "a/", "a b", "a***"])
def test_invalid_patterns(text):
    with pytest.raises(InvalidTagPattern):
        TagPattern.parse(text)


def test_literal_pattern():
    p = TagPattern.parse("project/alpha")
    assert p.matches("project/alpha")
    assert not p.matches("project/alphabet")
    assert not p.matches("project")


def test_single_star_stays_in_segment():
    p = TagPattern.parse("project/*")
    assert p.matches(Tag("project/alpha"))
    assert not p.matches("project/alpha/x")
    assert not p.matches("project")


def test_double_star_crosses_segments():
    assert TagPattern.parse("project/**").matches("project/alpha/x")
    assert TagPattern.parse("**/alpha").matches("alpha")
    assert TagPattern.parse("**/alpha").matches("project/alpha")


def test_question_mark():
    p = TagPattern.parse("proj?ct")
    assert p.matches("project")
    assert not p.matches("proj/ct")


def test_tag_components():
    assert Tag("a/b/c").components == ("a", "b", "c")


def test_any_mode():
    q = default_tag_query(["a", "b"])
    assert q.mode is TagMatch.ANY
    assert q.matches([Tag("b")])
    assert not q.matches([Tag("c")])


def test_all_mode():
    q = TagQuery((TagPattern.parse("a"), TagPattern.parse("b")), TagMatch.ALL)
    assert not q.matches(["a"])
    assert q.matches(["a", "b", "c"])


def test_empty_any_matches_nothing():
    assert not TagQuery.nothing().matches(["a"])
    assert not TagQuery().matches(["a"])


def test_default_empty_is_match_all():
    q = default_tag_query([])
    assert q == TagQuery.everything()
    assert q.matches([])
    assert q.matches(["anything"])


def test_default_rejects_bad_pattern():
    with pytest.raises(InvalidTagPattern):
        default_tag_query(["ok", "not ok"])
