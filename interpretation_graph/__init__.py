"""
Interpretation Graph

Renders partial interpretations of graph models as Graphviz DOT source.

LAYERS:
=======
- contracts: immutable snapshot types and the truth domain
- state: visibility policy and display flags
- visualization: node/edge attributes and DOT assembly
"""

from .config import RenderConfig
from .contracts import SemanticModel, TruthValue, Visibility
from .state import VisibilityPolicy
from .visualization import DotSource, render_graph

__version__ = "0.1.0"

__all__ = [
    'RenderConfig',
    'SemanticModel',
    'TruthValue',
    'Visibility',
    'VisibilityPolicy',
    'DotSource',
    'render_graph',
]
