from .notes import Zettel, parse_front_matter, zettel_from_text
from .repo import NoteStore, atomic_write_text

__all__ = ["Zettel",
           "parse_front_matter",
           "zettel_from_text",
           "NoteStore",
           "atomic_write_text",
           ]
