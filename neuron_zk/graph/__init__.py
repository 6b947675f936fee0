from .builder import Edge, ZettelGraph, build_zettel_graph
from .resolver import GraphResolver, GraphSnapshot, result_to_json
from .cache import load_graph_cache, save_graph_cache
from .worker import QueryService, QueryWorker

__all__ = ["Edge",
           "ZettelGraph",
           "build_zettel_graph",
           "GraphResolver",
           "GraphSnapshot",
           "result_to_json",
           "load_graph_cache",
           "save_graph_cache",
           "QueryService",
           "QueryWorker",
           ]
