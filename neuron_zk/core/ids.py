# neuron_zk/core/ids.py

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Union

from .errors import InvalidTitleID, MalformedID
from .slugs import is_id_token, slugify_title

NOTE_SUFFIX = ".md"

HASH_TIME_WIDTH = 7
HASH_ENTROPY_WIDTH = 8
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


@dataclass(frozen=True)
class ZettelID:
    """Stable identifier of a zettel; the note lives in ``<value>.md``."""

    value: str

    def __str__(self) -> str:
        return self.value

    @property
    def filename(self) -> str:
        return f"{self.value}{NOTE_SUFFIX}"


@dataclass(frozen=True)
class HashScheme:
    pass


@dataclass(frozen=True)
class CustomScheme:
    title: str


IDScheme = Union[HashScheme, CustomScheme]


def format_zettel_id(zettel_id: ZettelID) -> str:
    return zettel_id.value


def parse_zettel_id(text: str) -> ZettelID:
    if not isinstance(text, str) or not text:
        raise MalformedID(str(text), "empty")
    if "/" in text or "\\" in text:
        raise MalformedID(text, "contains a path separator")
    if any(ch.isspace() for ch in text):
        raise MalformedID(text, "contains whitespace")
    if not is_id_token(text):
        raise MalformedID(text, "only letters, digits, '_', '-' and '.' are allowed, not leading '.'")
    return ZettelID(text)


def generate_zettel_id(
    scheme: IDScheme,
    timestamp: datetime,
    *,
    entropy: Callable[[], str] | None = None,
) -> ZettelID:
    """
    Produce the ID for a new zettel.

    Hash IDs are the creation time in fixed-width base 36 followed by a few
    hex characters from ``entropy`` (``uuid4().hex`` when not given), so they
    sort by creation time and differ even within one second. A naive
    ``timestamp`` is taken as UTC.
    """
    if isinstance(scheme, HashScheme):
        source = entropy or (lambda: uuid.uuid4().hex)
        noise = source()[:HASH_ENTROPY_WIDTH].lower()
        if len(noise) < HASH_ENTROPY_WIDTH or not _HEX_RE.match(noise):
            raise ValueError(f"entropy source must give {HASH_ENTROPY_WIDTH} hex characters, got {noise!r}")
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return ZettelID(_base36(int(timestamp.timestamp()), HASH_TIME_WIDTH) + noise)

    if isinstance(scheme, CustomScheme):
        slug = slugify_title(scheme.title)
        if not is_id_token(slug):
            raise InvalidTitleID(scheme.title, slug)
        return ZettelID(slug)

    raise TypeError(f"unknown ID scheme: {scheme!r}")


def _base36(n: int, width: int) -> str:
    if n < 0:
        raise ValueError("timestamps before the epoch are not supported")
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    out = "".join(reversed(digits)) or "0"
    return out.rjust(width, "0")
