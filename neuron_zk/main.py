# neuron_zk/main.py
"""Command line entry point.

neuron-zk [-d PATH] [-v] new [TITLEID] [--title TEXT] [--date ISO]
neuron-zk [-d PATH] [-v] query [--cached] (--id ID | --tag PATTERN ... | --all | --uri URI
                                           | --graph | --backlinks-of ID | --uplinks-of ID)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from neuron_zk.app_settings import get_limit, get_sort, notes_settings
from neuron_zk.core.connection import Connection
from neuron_zk.core.errors import NeuronError
from neuron_zk.core.ids import CustomScheme, HashScheme, parse_zettel_id
from neuron_zk.core.queries import BacklinksOf, FullGraph, Query, ZettelByID, ZettelsByTag
from neuron_zk.core.query_links import parse_query_link
from neuron_zk.core.tags import TagQuery, default_tag_query
from neuron_zk.graph.builder import build_zettel_graph
from neuron_zk.graph.cache import load_graph_cache, save_graph_cache
from neuron_zk.graph.resolver import GraphResolver, result_to_json
from neuron_zk.logging_setup import install_global_exception_hooks, log, set_console_level
from neuron_zk.vault.repo import NoteStore


def _zettel_id_arg(text: str):
    try:
        return parse_zettel_id(text)
    except NeuronError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _query_link_arg(text: str) -> Query:
    try:
        return parse_query_link(text)
    except NeuronError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _datetime_arg(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date/time: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="neuron-zk", description="Zettelkasten graph and queries")
    p.add_argument(
        "-d",
        dest="notes_dir",
        type=Path,
        default=Path.cwd(),
        metavar="PATH",
        help="Run as if started in PATH instead of the current working directory",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug logging on stderr")
    sub = p.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a new zettel")
    new.add_argument(
        "title_id",
        nargs="?",
        metavar="TITLEID",
        help="Custom (title) ID to use; otherwise a hash ID is generated",
    )
    new.add_argument("--title", help="Title written into the front matter")
    new.add_argument("--date", type=_datetime_arg, default=None, metavar="DATE/TIME", help="Zettel date/time")

    query = sub.add_parser("query", help="Run a query against the zettelkasten")
    sel = query.add_mutually_exclusive_group(required=True)
    sel.add_argument("--id", type=_zettel_id_arg, help="Get the zettel with this ID")
    sel.add_argument("--tag", "-t", action="append", metavar="PATTERN", help="Zettels with a tag matching PATTERN (repeatable)")
    sel.add_argument("--all", action="store_true", help="All zettels")
    sel.add_argument("--uri", "-u", type=_query_link_arg, help="Run a neuron:// query link")
    sel.add_argument("--graph", action="store_true", help="Get the entire zettelkasten graph as JSON")
    sel.add_argument("--backlinks-of", type=_zettel_id_arg, metavar="ID", help="Get backlinks to the given zettel ID")
    sel.add_argument("--uplinks-of", type=_zettel_id_arg, metavar="ID", help="Get uplinks to the given zettel ID")
    query.add_argument("--cached", action="store_true", help="Use the cached zettelkasten graph (faster)")
    return p


def query_from_args(args: argparse.Namespace, *, settings=None) -> Query:
    sort_limit = {}
    if settings is not None:
        sort_limit = {"sort": get_sort(settings), "limit": get_limit(settings)}

    if args.id is not None:
        return ZettelByID(args.id)
    if args.tag:
        return ZettelsByTag(default_tag_query(args.tag), **sort_limit)
    if args.all:
        return ZettelsByTag(TagQuery.everything(), **sort_limit)
    if args.uri is not None:
        return args.uri
    if args.graph:
        return FullGraph()
    if args.backlinks_of is not None:
        return BacklinksOf(args.backlinks_of)
    if args.uplinks_of is not None:
        return BacklinksOf(args.uplinks_of, Connection.FOLGEZETTEL)
    raise ValueError("no query selected")


def run_new(args: argparse.Namespace) -> int:
    store = NoteStore(args.notes_dir)
    scheme = CustomScheme(args.title_id) if args.title_id else HashScheme()
    when = args.date or datetime.now()
    zettel = store.create_note(scheme, when, title=args.title)
    print(zettel.path)
    return 0


def run_query(args: argparse.Namespace) -> int:
    store = NoteStore(args.notes_dir)
    query = query_from_args(args, settings=notes_settings(args.notes_dir))
    log.debug("Running query %r in %s", query, args.notes_dir)

    graph = load_graph_cache(args.notes_dir) if args.cached else None
    if graph is None:
        graph = build_zettel_graph(store.list_all())
        try:
            save_graph_cache(args.notes_dir, graph)
        except OSError as e:
            log.warning("Cannot write graph cache: %s", e)

    result = GraphResolver(graph).evaluate(query)
    json.dump(result_to_json(result), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    install_global_exception_hooks()
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_console_level(logging.DEBUG)

    try:
        if args.command == "new":
            return run_new(args)
        return run_query(args)
    except NeuronError as e:
        log.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
