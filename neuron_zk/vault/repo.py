from __future__ import annotations

import os
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from neuron_zk.core.errors import MalformedID, NoteExists, NoteNotFound
from neuron_zk.core.ids import NOTE_SUFFIX, IDScheme, ZettelID, generate_zettel_id, parse_zettel_id
from neuron_zk.logging_setup import get_logger
from neuron_zk.vault.notes import Zettel, render_new_zettel, zettel_from_text

log = get_logger("vault")


@dataclass(frozen=True)
class NoteStore:
    notes_dir: Path

    def ensure(self) -> None:
        self.notes_dir.mkdir(parents=True, exist_ok=True)

    def note_path(self, zettel_id: ZettelID) -> Path:
        return self.notes_dir / zettel_id.filename

    def list_ids(self) -> list[ZettelID]:
        ids = []
        for p in sorted(self.notes_dir.glob(f"*{NOTE_SUFFIX}")):
            try:
                ids.append(parse_zettel_id(p.stem))
            except MalformedID as e:
                log.warning("Skipping %s: %s", p.name, e)
        return ids

    def read_note(self, zettel_id: ZettelID) -> Zettel:
        path = self.note_path(zettel_id)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise NoteNotFound(zettel_id) from None
        return zettel_from_text(zettel_id, text, path=path)

    def list_all(self) -> list[Zettel]:
        zettels = []
        for zid in self.list_ids():
            try:
                zettels.append(self.read_note(zid))
            except (OSError, UnicodeDecodeError) as e:
                log.warning("Cannot read zettel %s: %s", zid, e)
        log.debug("Loaded %d zettels from %s", len(zettels), self.notes_dir)
        return zettels

    def create_note(
        self,
        scheme: IDScheme,
        when: datetime,
        *,
        title: str | None = None,
        entropy: Callable[[], str] | None = None,
    ) -> Zettel:
        zettel_id = generate_zettel_id(scheme, when, entropy=entropy)
        path = self.note_path(zettel_id)
        if path.exists():
            raise NoteExists(path)

        self.ensure()
        text = render_new_zettel(date=when.isoformat(timespec="minutes"), title=title)
        try:
            atomic_write_text(path, text, exclusive=True)
        except FileExistsError:
            raise NoteExists(path) from None
        log.info("Created zettel %s at %s", zettel_id, path)
        return zettel_from_text(zettel_id, text, path=path)


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8", exclusive: bool = False) -> None:
    """
    Atomic-ish file write:
    - write to temp file in same directory
    - fsync
    - replace(), or with ``exclusive`` hard-link into place, raising
      FileExistsError rather than overwriting
    """
    path = Path(path)
    tmp_path = path.parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        if exclusive:
            os.link(tmp_path, path)
        else:
            tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
