# neuron_zk/core/slugs.py

from __future__ import annotations

import re
import unicodedata


ID_CHARS_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")
WHITESPACE_RE = re.compile(r"\s+")
DASHES_RE = re.compile(r"-{2,}")

MAX_SLUG_LENGTH = 120


def slugify_title(title: str) -> str:
    """
    Turn a user-supplied title into an identifier token.

    Steps:
    - NFKC normalisation, then NFKD + drop combining marks (transliteration)
    - whitespace runs become a single "-"
    - control characters removed
    - leading/trailing "-" and "." trimmed

    Characters outside the identifier alphabet are left in place so the
    caller can reject the title instead of silently rewriting it.
    """
    if title is None:
        raise ValueError("slugify_title(): title is None")

    # 1. Unicode normalization, then strip accents
    name = unicodedata.normalize("NFKC", str(title))
    name = unicodedata.normalize("NFKD", name)
    name = "".join(ch for ch in name if not unicodedata.combining(ch))

    # 2. Whitespace to dashes
    name = WHITESPACE_RE.sub("-", name.strip())

    # 3. Remove control characters
    name = "".join(
        ch for ch in name
        if unicodedata.category(ch)[0] != "C"
    )
    name = DASHES_RE.sub("-", name)

    # 4. Trim separators at the edges
    name = name.strip("-.")

    # 5. Length limit
    if len(name) > MAX_SLUG_LENGTH:
        name = name[:MAX_SLUG_LENGTH].rstrip("-.")

    return name


def is_id_token(text: str) -> bool:
    return bool(text) and not text.startswith(".") and bool(ID_CHARS_RE.match(text))
