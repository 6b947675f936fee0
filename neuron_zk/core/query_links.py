# neuron_zk/core/query_links.py

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Callable
from urllib.parse import parse_qs, quote, unquote, urlencode, urlsplit

from .connection import Connection
from .errors import NeuronError, NotAURI, UnrecognizedQueryLink
from .ids import parse_zettel_id
from .queries import (
    BacklinksOf,
    FullGraph,
    Query,
    SortOrder,
    ZettelByID,
    ZettelsByTag,
)
from .tags import TagMatch, TagPattern, TagQuery, default_tag_query

SCHEME = "neuron"

# RFC 3986: scheme ":" followed only by unreserved/reserved/percent characters
_URI_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*\Z")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_LIMIT_RE = re.compile(r"^[0-9]+\Z")

# Links inside note text, in order of appearance:
#   <neuron://...>   [label](neuron://...)   [[[id]]]   [[id]]   [[id|alias]]
LINK_RE = re.compile(
    r"<(?P<auto>neuron://[^<>\s]+)>"
    r"|\[[^\]\n]*\]\((?P<md>neuron://[^()\s]+)\)"
    r"|\[\[\[(?P<folge>[^\[\]\n]+)\]\]\]"
    r"|\[\[(?P<wiki>[^\[\]\n]+)\]\]"
)


# ───────────────────────── parsing ─────────────────────────

def parse_query_link(text: str) -> Query:
    """
    Parse a query link such as ``neuron://search?tag=project%2Falpha``.

    Raises ``NotAURI`` when the text is not a URI at all,
    ``UnrecognizedQueryLink`` when it is a URI of no known shape, and
    ``MalformedID`` / ``InvalidTagPattern`` when a component is bad.
    """
    if not isinstance(text, str) or not _URI_RE.match(text) or _BAD_PERCENT_RE.search(text):
        raise NotAURI(str(text))

    parts = urlsplit(text)
    if parts.scheme.lower() != SCHEME:
        raise UnrecognizedQueryLink(text, f"scheme must be {SCHEME!r}")
    if parts.fragment:
        raise UnrecognizedQueryLink(text, "fragments are not supported")

    handler = _HANDLERS.get(parts.netloc.lower())
    if handler is None:
        raise UnrecognizedQueryLink(text, f"unknown query {parts.netloc!r}")

    try:
        params = parse_qs(parts.query, keep_blank_values=True, errors="strict")
        path = unquote(parts.path, errors="strict")
    except UnicodeDecodeError:
        raise NotAURI(text) from None
    return handler(text, path, params)


def _zettel(text: str, path: str, params: dict[str, list[str]]) -> Query:
    _only(text, params, {"id", "connection"})
    raw_id = _single(text, params, "id")
    path_id = path[1:] if path.startswith("/") else path
    if path_id and raw_id is not None:
        raise UnrecognizedQueryLink(text, "ID given both in path and as parameter")
    raw_id = path_id or raw_id
    if raw_id is None:
        raise UnrecognizedQueryLink(text, "missing zettel ID")
    return ZettelByID(parse_zettel_id(raw_id), _connection(text, params))


def _search(text: str, path: str, params: dict[str, list[str]]) -> Query:
    _no_path(text, path)
    _only(text, params, {"tag", "match", "sort", "limit", "connection"})

    patterns = [TagPattern.parse(p) for p in params.get("tag", [])]
    match = _single(text, params, "match")
    if match is None:
        tag_query = default_tag_query(patterns)
    else:
        try:
            tag_query = TagQuery(tuple(patterns), TagMatch(match))
        except ValueError:
            raise UnrecognizedQueryLink(text, f"match must be 'any' or 'all', got {match!r}") from None

    sort = SortOrder.DATE
    raw_sort = _single(text, params, "sort")
    if raw_sort is not None:
        try:
            sort = SortOrder(raw_sort)
        except ValueError:
            raise UnrecognizedQueryLink(text, f"unknown sort order {raw_sort!r}") from None

    limit = None
    raw_limit = _single(text, params, "limit")
    if raw_limit is not None:
        if not _LIMIT_RE.match(raw_limit):
            raise UnrecognizedQueryLink(text, f"limit must be a non-negative integer, got {raw_limit!r}")
        limit = int(raw_limit)

    return ZettelsByTag(tag_query, _connection(text, params), sort, limit)


def _graph(text: str, path: str, params: dict[str, list[str]]) -> Query:
    _no_path(text, path)
    _only(text, params, set())
    return FullGraph()


def _backlinks(text: str, path: str, params: dict[str, list[str]]) -> Query:
    _no_path(text, path)
    _only(text, params, {"id", "connection"})
    return BacklinksOf(_required_id(text, params), _connection(text, params))


def _uplinks(text: str, path: str, params: dict[str, list[str]]) -> Query:
    _no_path(text, path)
    _only(text, params, {"id"})
    return BacklinksOf(_required_id(text, params), Connection.FOLGEZETTEL)


_HANDLERS: dict[str, Callable[[str, str, dict[str, list[str]]], Query]] = {
    "zettel": _zettel,
    "search": _search,
    "graph": _graph,
    "backlinks": _backlinks,
    "uplinks": _uplinks,
}


def _only(text: str, params: dict[str, list[str]], allowed: set[str]) -> None:
    unknown = sorted(set(params) - allowed)
    if unknown:
        raise UnrecognizedQueryLink(text, f"unknown parameter(s): {', '.join(unknown)}")


def _single(text: str, params: dict[str, list[str]], key: str) -> str | None:
    values = params.get(key)
    if not values:
        return None
    if len(values) > 1:
        raise UnrecognizedQueryLink(text, f"parameter {key!r} given more than once")
    return values[0]


def _no_path(text: str, path: str) -> None:
    if path not in ("", "/"):
        raise UnrecognizedQueryLink(text, f"unexpected path {path!r}")


def _required_id(text: str, params: dict[str, list[str]]):
    raw = _single(text, params, "id")
    if raw is None:
        raise UnrecognizedQueryLink(text, "missing 'id' parameter")
    return parse_zettel_id(raw)


def _connection(text: str, params: dict[str, list[str]]) -> Connection | None:
    raw = _single(text, params, "connection")
    if raw is None:
        return None
    try:
        return Connection(raw)
    except ValueError:
        raise UnrecognizedQueryLink(text, f"unknown connection {raw!r}") from None


# ───────────────────────── rendering ─────────────────────────

def render_query_link(query: Query) -> str:
    """Canonical link text; ``parse_query_link`` gives ``query`` back."""
    params: list[tuple[str, str]] = []

    if isinstance(query, ZettelByID):
        base = f"{SCHEME}://zettel/{quote(query.zettel_id.value, safe='')}"
        _add_connection(params, query.connection)

    elif isinstance(query, ZettelsByTag):
        base = f"{SCHEME}://search"
        tq = query.tag_query
        params.extend(("tag", p.text) for p in tq.patterns)
        if default_tag_query(tq.patterns) != tq:
            params.append(("match", tq.mode.value))
        if query.sort is not SortOrder.DATE:
            params.append(("sort", query.sort.value))
        if query.limit is not None:
            params.append(("limit", str(query.limit)))
        _add_connection(params, query.connection)

    elif isinstance(query, FullGraph):
        base = f"{SCHEME}://graph"

    elif isinstance(query, BacklinksOf):
        base = f"{SCHEME}://backlinks"
        params.append(("id", query.zettel_id.value))
        _add_connection(params, query.connection)

    else:
        raise TypeError(f"not a query: {query!r}")

    if not params:
        return base
    return f"{base}?{urlencode(params, quote_via=quote, safe='')}"


def _add_connection(params: list[tuple[str, str]], connection: Connection | None) -> None:
    if connection is not None:
        params.append(("connection", connection.label))


# ───────────────────────── extraction ─────────────────────────

@dataclass(frozen=True)
class LinkScan:
    queries: tuple[Query, ...] = ()
    errors: tuple[NeuronError, ...] = ()


def extract_links(markdown_text: str) -> LinkScan:
    """
    Collect every query carried by links in ``markdown_text``.

    ``[[id]]`` is an ordinary link and ``[[[id]]]`` a folgezettel link; a
    wiki-link may also wrap a full query link. Bad links end up in
    ``errors`` instead of aborting the scan.
    """
    queries: list[Query] = []
    errors: list[NeuronError] = []

    for m in LINK_RE.finditer(markdown_text or ""):
        try:
            if m.group("auto") or m.group("md"):
                queries.append(parse_query_link(m.group("auto") or m.group("md")))
            elif m.group("folge"):
                queries.append(_wiki_query(m.group("folge"), Connection.FOLGEZETTEL))
            else:
                queries.append(_wiki_query(m.group("wiki"), None))
        except NeuronError as e:
            errors.append(e)

    return LinkScan(tuple(queries), tuple(errors))


def _wiki_query(inner: str, connection: Connection | None) -> Query:
    target = inner.split("|", 1)[0].strip()

    if "://" in target:
        query = parse_query_link(target)
        if connection is not None and isinstance(query, (ZettelByID, ZettelsByTag)) and query.connection is None:
            return replace(query, connection=connection)
        return query

    return ZettelByID(parse_zettel_id(target), connection)
