# neuron_zk/vault/notes.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import markdown as md

from neuron_zk.core.ids import ZettelID
from neuron_zk.core.tags import Tag

_H1_RE = re.compile(r"(?m)^\s*#\s+(.+?)\s*#*\s*$")
_TAG_SPLIT_RE = re.compile(r"[,\s]+")
_OPEN_FENCE_RE = re.compile(r"^-{3}\s*$")
_CLOSE_FENCE_RE = re.compile(r"^(?:-{3}|\.{3})\s*$")
_LIST_ITEM_RE = re.compile(r"^\s*-(?:\s|$)")


@dataclass(frozen=True)
class Zettel:
    id: ZettelID
    title: str
    tags: tuple[Tag, ...] = ()
    date: str | None = None
    content: str = ""
    path: Path | None = field(default=None, compare=False)


def parse_front_matter(text: str) -> tuple[dict[str, list[str]], str]:
    """
    Split a note into its metadata and body.

    Only a block opened by ``---`` on the first line and closed by ``---``
    (or ``...``) counts as metadata; anything else is all body. The block is
    read by Python-Markdown's ``meta`` extension (``key: value`` lines, keys
    lower-cased). YAML list items (``- item``) at any indent are folded into
    the preceding key.
    """
    lines = (text or "").replace("\r\n", "\n").split("\n")
    if not _OPEN_FENCE_RE.match(lines[0]):
        return {}, "\n".join(lines)

    end = next((i for i in range(1, len(lines)) if _CLOSE_FENCE_RE.match(lines[i])), None)
    if end is None:
        return {}, "\n".join(lines)

    # meta stops at blank lines and only continues 4-space indented lines
    block = [
        "    " + line.strip() if _LIST_ITEM_RE.match(line) else line
        for line in lines[1:end]
        if line.strip()
    ]
    parser = md.Markdown(extensions=["meta"])
    parser.preprocessors["meta"].run(block)
    return dict(parser.Meta), "\n".join(lines[end + 1:])


def parse_tags(values: list[str]) -> tuple[Tag, ...]:
    tags: list[Tag] = []
    for line in values:
        line = line.strip().strip("[]")
        for raw in _TAG_SPLIT_RE.split(line):
            raw = raw.strip().strip("\"'").lstrip("-").strip()
            if raw and Tag(raw) not in tags:
                tags.append(Tag(raw))
    return tuple(tags)


def zettel_from_text(zettel_id: ZettelID, text: str, *, path: Path | None = None) -> Zettel:
    meta, body = parse_front_matter(text)

    title = " ".join(meta.get("title", [])).strip()
    if not title:
        m = _H1_RE.search(body)
        title = m.group(1).strip() if m else zettel_id.value

    date = " ".join(meta.get("date", [])).strip() or None

    return Zettel(
        id=zettel_id,
        title=title,
        tags=parse_tags(meta.get("tags", [])),
        date=date,
        content=body,
        path=path,
    )


def render_new_zettel(*, date: str, title: str | None) -> str:
    lines = ["---", f"date: {date}"]
    if title:
        lines.append(f"title: {title}")
    lines.append("---")
    lines.append("")
    lines.append(f"# {title}" if title else "")
    lines.append("")
    return "\n".join(lines)
