"""
Graph Description Assembly

Composes the DOT source handed to the layout engine.

STABILITY REQUIREMENT:
======================
The layout engine re-lays the whole graph on ANY text change. Output must
therefore be byte-identical for an unchanged snapshot and policy:
- nodes in node order
- edges in relation order, then tuple order
- no timestamps, counters or hash-seeded iteration in the text
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Union
import logging

from ..config import RenderConfig
from ..contracts.semantics import SemanticModel
from ..state.policy import VisibilityPolicy
from .edges import edge_statements, format_number
from .nodes import compute_node_data, is_rendered, node_statements


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DotSource:
    """Finished DOT text and the number of statement chunks it was built from."""
    text: str
    line_count: int

    def __iter__(self) -> Iterator[Union[str, int]]:
        # Unpacks as (text, line_count)
        yield self.text
        yield self.line_count


class DotSourceBuilder:
    """
    Append-only accumulator, finalized exactly once.

    Chunks are joined with newlines; a chunk may itself span several lines.
    """

    def __init__(self):
        self._chunks: List[str] = []
        self._result: Optional[DotSource] = None

    def append(self, chunk: str) -> DotSourceBuilder:
        if self._result is not None:
            raise RuntimeError("DotSourceBuilder is already finalized")
        self._chunks.append(chunk)
        return self

    def extend(self, chunks: Iterable[str]) -> DotSourceBuilder:
        for chunk in chunks:
            self.append(chunk)
        return self

    @property
    def finalized(self) -> bool:
        return self._result is not None

    def build(self) -> DotSource:
        if self._result is not None:
            raise RuntimeError("DotSourceBuilder is already finalized")
        self._result = DotSource(
            text="\n".join(self._chunks),
            line_count=len(self._chunks),
        )
        self._chunks = []
        return self._result


def default_statements(config: RenderConfig) -> List[str]:
    return [
        'graph [bgcolor=transparent];',
        f'node [fontsize={format_number(config.node_font_size)}, shape=plain, '
        f'fontname="{config.font_name}"];',
        f'edge [fontsize={format_number(config.edge_font_size)}, color=black, '
        f'fontname="{config.font_name}"];',
    ]


def render_graph(
    model: Optional[SemanticModel],
    policy: VisibilityPolicy,
    config: Optional[RenderConfig] = None,
) -> Optional[DotSource]:
    """
    Render a snapshot to DOT.

    Returns None while no model is available yet.
    """
    if model is None:
        return None
    config = config or RenderConfig()

    builder = DotSourceBuilder()
    builder.append('digraph {')
    builder.extend(default_statements(config))

    node_data = compute_node_data(model, policy)
    rendered_nodes = 0
    for index, (metadata, data) in enumerate(zip(model.nodes, node_data)):
        if not is_rendered(data, policy):
            continue
        builder.extend(node_statements(index, metadata, data, policy))
        rendered_nodes += 1

    edges = edge_statements(model, node_data, policy)
    builder.extend(edges)
    builder.append('}')

    source = builder.build()
    logger.debug(
        "Rendered %d of %d nodes and %d edges into %d lines",
        rendered_nodes, len(model.nodes), len(edges), source.line_count,
    )
    return source
