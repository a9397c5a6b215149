from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from graphclip.config import GraphConfig, load_graph_config
from graphclip.graph import Graph


def graph(
    config: GraphConfig | str | Path | None = None,
    **overrides: Any,
) -> Graph:
    if config is None:
        config = GraphConfig()
    elif not isinstance(config, GraphConfig):
        config = load_graph_config(config)
    if overrides:
        config = replace(config, **overrides)
    return Graph(config)
