from .connection import Connection
from .errors import (
    InvalidTagPattern,
    InvalidTitleID,
    MalformedID,
    NeuronError,
    NoteExists,
    NoteNotFound,
    NotAURI,
    UnrecognizedQueryLink,
)
from .ids import CustomScheme, HashScheme, IDScheme, ZettelID, format_zettel_id, generate_zettel_id, parse_zettel_id
from .queries import (
    BacklinksOf,
    FullGraph,
    GraphQuery,
    Query,
    ResultShape,
    SortOrder,
    ZettelByID,
    ZettelQuery,
    ZettelsByTag,
    uplinks_of,
)
from .query_links import LinkScan, extract_links, parse_query_link, render_query_link
from .slugs import slugify_title
from .tags import Tag, TagMatch, TagPattern, TagQuery, default_tag_query

__all__ = ["Connection",
           "NeuronError",
           "MalformedID",
           "InvalidTitleID",
           "InvalidTagPattern",
           "NotAURI",
           "UnrecognizedQueryLink",
           "NoteNotFound",
           "NoteExists",
           "ZettelID",
           "IDScheme",
           "HashScheme",
           "CustomScheme",
           "format_zettel_id",
           "parse_zettel_id",
           "generate_zettel_id",
           "slugify_title",
           "Tag",
           "TagPattern",
           "TagMatch",
           "TagQuery",
           "default_tag_query",
           "ResultShape",
           "SortOrder",
           "ZettelByID",
           "ZettelsByTag",
           "FullGraph",
           "BacklinksOf",
           "uplinks_of",
           "ZettelQuery",
           "GraphQuery",
           "Query",
           "LinkScan",
           "extract_links",
           "parse_query_link",
           "render_query_link",
           ]
