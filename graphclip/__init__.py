from graphclip.aggregate import SeriesAggregator, SeriesPoint
from graphclip.api import graph
from graphclip.clipping import ClippingAssembler
from graphclip.config import GraphConfig, Margins, load_graph_config
from graphclip.crossing import BoundaryCrossingSolver, find_crossing
from graphclip.errors import EmptyInputError, GraphClipError, InvalidFunctionError, InvalidRangeError
from graphclip.graph import Graph
from graphclip.run import Run, functions_by_series
from graphclip.sampling import CurveSampler, Sample
from graphclip.viewport import Viewport

__all__ = [
    "BoundaryCrossingSolver",
    "ClippingAssembler",
    "CurveSampler",
    "EmptyInputError",
    "Graph",
    "GraphClipError",
    "GraphConfig",
    "InvalidFunctionError",
    "InvalidRangeError",
    "Margins",
    "Run",
    "Sample",
    "SeriesAggregator",
    "SeriesPoint",
    "Viewport",
    "find_crossing",
    "functions_by_series",
    "graph",
    "load_graph_config",
]
