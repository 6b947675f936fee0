# neuron_zk/core/tags.py

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable

from .errors import InvalidTagPattern


@dataclass(frozen=True)
class Tag:
    """Hierarchical label such as ``project/alpha``."""

    value: str

    def __str__(self) -> str:
        return self.value

    @property
    def components(self) -> tuple[str, ...]:
        return tuple(self.value.split("/"))


@dataclass(frozen=True)
class TagPattern:
    """
    Glob over tag strings.

    ``*`` matches inside one segment, ``**`` matches across segments and
    ``?`` matches a single non-separator character.
    """

    text: str

    @classmethod
    def parse(cls, text: str) -> "TagPattern":
        if not isinstance(text, str) or not text:
            raise InvalidTagPattern(str(text), "empty pattern")
        if any(ch.isspace() for ch in text):
            raise InvalidTagPattern(text, "whitespace is not allowed")
        if any(seg == "" for seg in text.split("/")):
            raise InvalidTagPattern(text, "empty segment")
        if "***" in text:
            raise InvalidTagPattern(text, "'***' is not a valid wildcard")
        return cls(text)

    def matches(self, tag: Tag | str) -> bool:
        return _compile(self.text).match(str(tag)) is not None

    def __str__(self) -> str:
        return self.text


class TagMatch(Enum):
    ANY = "any"
    ALL = "all"


@dataclass(frozen=True)
class TagQuery:
    patterns: tuple[TagPattern, ...] = ()
    mode: TagMatch = TagMatch.ANY

    @classmethod
    def everything(cls) -> "TagQuery":
        return cls((), TagMatch.ALL)

    @classmethod
    def nothing(cls) -> "TagQuery":
        return cls((), TagMatch.ANY)

    def matches(self, tags: Iterable[Tag | str]) -> bool:
        tags = [str(t) for t in tags]

        def hit(p: TagPattern) -> bool:
            return any(p.matches(t) for t in tags)

        if self.mode is TagMatch.ALL:
            return all(hit(p) for p in self.patterns)
        return any(hit(p) for p in self.patterns)


def default_tag_query(patterns: Iterable[TagPattern | str]) -> TagQuery:
    """
    OR-query over ``patterns``.

    An empty list yields the match-all query, not the match-nothing one.
    Callers that want no zettels for an empty filter must use
    ``TagQuery.nothing()``.
    """
    parsed = tuple(p if isinstance(p, TagPattern) else TagPattern.parse(p) for p in patterns)
    if not parsed:
        return TagQuery.everything()
    return TagQuery(parsed, TagMatch.ANY)


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern:
    out = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1

    return re.compile("".join(out) + r"\Z")
