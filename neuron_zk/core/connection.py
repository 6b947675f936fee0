from __future__ import annotations

from enum import Enum


class Connection(Enum):
    """Kind of a directed link between two zettels."""

    ORDINARY = "ordinary"
    FOLGEZETTEL = "folgezettel"

    @property
    def label(self) -> str:
        return self.value

    @staticmethod
    def merge(a: "Connection", b: "Connection") -> "Connection":
        # Folgezettel dominates when the same pair is linked twice.
        if Connection.FOLGEZETTEL in (a, b):
            return Connection.FOLGEZETTEL
        return Connection.ORDINARY
