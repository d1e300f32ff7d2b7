"""
Render Configuration

Global default attributes of the generated graph. Everything else about
the look of nodes and edges is carried by their HTML-like labels.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import os


ENV_PREFIX = "INTERPRETATION_GRAPH_"


@dataclass(frozen=True)
class RenderConfig:
    """Font settings for the graph-wide default statements."""
    font_name: str = "OpenSans"
    node_font_size: float = 12
    edge_font_size: float = 10.5

    def __post_init__(self):
        if not self.font_name or '"' in self.font_name:
            raise ValueError("font_name must be a non-empty string without quotes")
        if self.node_font_size <= 0 or self.edge_font_size <= 0:
            raise ValueError("Font sizes must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> RenderConfig:
        """Read overrides from INTERPRETATION_GRAPH_* variables."""
        environ = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            font_name=environ.get(f"{ENV_PREFIX}FONT_NAME", defaults.font_name),
            node_font_size=float(
                environ.get(f"{ENV_PREFIX}NODE_FONT_SIZE", defaults.node_font_size)
            ),
            edge_font_size=float(
                environ.get(f"{ENV_PREFIX}EDGE_FONT_SIZE", defaults.edge_font_size)
            ),
        )
