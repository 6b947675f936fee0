import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from neuron_zk.core.slugs import is_id_token, slugify_title


def test_basic():
    assert slugify_title("Hello World") == "Hello-World"


def test_whitespace_runs():
    assert slugify_title("  a \t b\n c  ") == "a-b-c"


def test_edges_trimmed():
    assert slugify_title("-.note.-") == "note"


def test_control_chars_removed():
    assert slugify_title("a\u0000b") == "ab"


def test_unicode_normalization():
    a = slugify_title("été")
    b = slugify_title("e\u0301te\u0301")
    assert a == b == "ete"


def test_disallowed_chars_are_kept():
    assert slugify_title("what?") == "what?"
    assert not is_id_token(slugify_title("what?"))


def test_length_limit():
    assert len(slugify_title("x" * 500)) == 120
