"""
Graph Visualization

Deterministic transformation of a partial interpretation into DOT source.
"""

from .dot_source import DotSource, DotSourceBuilder, render_graph
from .edges import (
    CONTAINMENT_WEIGHT,
    EDGE_WEIGHT,
    UNKNOWN_WEIGHT_FACTOR,
    binary_search,
)
from .escaping import encode_name, escape_html, obfuscate_color
from .nodes import NodeData, compute_node_data, is_rendered

__all__ = [
    'DotSource',
    'DotSourceBuilder',
    'render_graph',
    'CONTAINMENT_WEIGHT',
    'EDGE_WEIGHT',
    'UNKNOWN_WEIGHT_FACTOR',
    'binary_search',
    'encode_name',
    'escape_html',
    'obfuscate_color',
    'NodeData',
    'compute_node_data',
    'is_rendered',
]
