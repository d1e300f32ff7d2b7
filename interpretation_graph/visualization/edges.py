"""
Edge Attributes

Derives per-edge rendering attributes for binary relations, collapsing
symmetric tuple pairs and weighting edges for the layout engine.

LAYOUT HEURISTICS:
==================
1. A pair holding the same value both ways is drawn once, with dir=both
2. Of two differing directions, only the canonical one (to > from) drives
   the ranking; the other gets constraint=false, weight=0
3. UNKNOWN tuples pull with half weight unless the opposite direction
   already drives the layout
4. Containment edges pull harder and are drawn thicker

Opposite lookups bisect the relation's tuples, which the snapshot keeps
strictly ascending.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Final, List, Optional, Sequence, Tuple
import logging

from ..contracts.base import ContractViolation, ErrorCode, TruthValue, Visibility
from ..contracts.semantics import (
    BuiltinDetail, ClassDetail, Fact, OppositeDetail, PredicateDetail,
    ReferenceDetail, RelationMetadata, SemanticModel, unknown_detail,
)
from ..state.policy import VisibilityPolicy
from .escaping import encode_name, escape_html
from .nodes import NodeData, is_rendered


logger = logging.getLogger(__name__)

EDGE_WEIGHT: Final[int] = 1
CONTAINMENT_WEIGHT: Final[int] = 5
UNKNOWN_WEIGHT_FACTOR: Final[float] = 0.5


# =============================================================================
# OPPOSITE LOOKUP
# =============================================================================

def binary_search(
    facts: Sequence[Fact],
    key: Tuple[int, ...],
) -> Optional[TruthValue]:
    """Value of the fact whose arguments equal `key`, or None."""
    lower = 0
    upper = len(facts) - 1
    while lower <= upper:
        middle = (lower + upper) // 2
        arguments = facts[middle].arguments
        if len(arguments) != len(key):
            raise ContractViolation(
                ErrorCode.TUPLE_ARITY_MISMATCH,
                f"Cannot compare {arguments!r} with key {key!r}"
            )
        if arguments == key:
            return facts[middle].value
        if arguments < key:
            lower = middle + 1
        else:
            upper = middle - 1
    return None


# =============================================================================
# STATIC PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class EdgeParameters:
    """Per-relation defaults, before per-tuple adjustments."""
    weight: float = EDGE_WEIGHT
    constraint: bool = True
    penwidth: int = 1
    containment: bool = False


def edge_parameters(
    relation: RelationMetadata,
    policy: VisibilityPolicy,
) -> EdgeParameters:
    detail = relation.detail
    if isinstance(detail, ReferenceDetail):
        if detail.containment:
            return EdgeParameters(
                weight=CONTAINMENT_WEIGHT, penwidth=2, containment=True,
            )
        return EdgeParameters()
    if isinstance(detail, OppositeDetail):
        # The opposite reference already lays the pair out
        if policy.get_visibility(detail.opposite) is not Visibility.NONE:
            return EdgeParameters(weight=0, constraint=False)
        return EdgeParameters()
    if isinstance(detail, (ClassDetail, PredicateDetail, BuiltinDetail)):
        return EdgeParameters()
    raise unknown_detail(detail)


# =============================================================================
# STATEMENTS
# =============================================================================

def format_number(value: float) -> str:
    """Integral values print without a decimal point."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _quote(text: str) -> str:
    return '"' + text.replace('\\', '\\\\').replace('"', '\\"') + '"'


def edge_label(name: str, containment: bool, value: TruthValue) -> str:
    if value is not TruthValue.ERROR:
        if containment:
            return f"<<b>{escape_html(name)}</b>>"
        return _quote(name)
    text = f"<b>{escape_html(name)}</b>" if containment else escape_html(name)
    # The icon is the only <use> element of its group, so it needs no id
    return (
        '<<table fixedsize="TRUE" align="left" border="0" cellborder="0" '
        'cellspacing="0" cellpadding="0">\n'
        '    <tr>\n'
        '      <td><img src="#ERROR"/></td>\n'
        '      <td width="3.9375"></td>\n'
        f'      <td align="left">{text}</td>\n'
        '    </tr>\n'
        '  </table>>'
    )


def relation_edge_statements(
    model: SemanticModel,
    node_data: Sequence[NodeData],
    relation: RelationMetadata,
    policy: VisibilityPolicy,
) -> List[str]:
    """DOT edge statements for one binary relation, in tuple order."""
    visibility = policy.get_visibility(relation.name)
    show_unknown = visibility is Visibility.ALL
    parameters = edge_parameters(relation, policy)
    name = policy.get_name(relation)
    encoded_relation = encode_name(relation.name)
    facts = model.facts(relation.name)

    statements = []
    for fact in facts:
        source, target = fact.arguments
        value = fact.value
        is_unknown = value is TruthValue.UNKNOWN
        if is_unknown and not show_unknown:
            continue

        source_node = model.node(source)
        target_node = model.node(target)
        if source_node is None or target_node is None:
            logger.debug(
                "Skipping %s tuple (%d, %d) with dangling endpoint",
                relation.name, source, target,
            )
            continue
        if not (is_rendered(node_data[source], policy)
                and is_rendered(node_data[target], policy)):
            continue

        direction = "forward"
        constraint = parameters.constraint
        weight = parameters.weight
        opposite = binary_search(facts, (target, source))
        opposite_unknown = opposite is TruthValue.UNKNOWN
        opposite_visible = opposite is not None and (show_unknown or not opposite_unknown)
        if opposite is value:
            if target < source:
                # Already emitted in the reverse direction
                continue
            if target > source:
                direction = "both"
        elif opposite_visible and target < source:
            # Let the opposite edge drive the layout
            constraint = False
            weight = 0
        elif is_unknown and (opposite is None or opposite_unknown):
            weight *= UNKNOWN_WEIGHT_FACTOR

        edge_id = (
            f"{encode_name(source_node.name)},{encode_name(target_node.name)},"
            f"{encoded_relation}"
        )
        statements.append(
            f'n{source} -> n{target} [\n'
            f'      id="{edge_id}",\n'
            f'      dir="{direction}",\n'
            f'      constraint={"true" if constraint else "false"},\n'
            f'      weight={format_number(weight)},\n'
            f'      xlabel={edge_label(name, parameters.containment, value)},\n'
            f'      penwidth={parameters.penwidth},\n'
            f'      arrowsize={0.875 if parameters.penwidth >= 2 else 1},\n'
            f'      style="{"dashed" if is_unknown else "solid"}",\n'
            f'      class="edge-{value.value}"\n'
            f'    ]'
        )
    return statements


def edge_statements(
    model: SemanticModel,
    node_data: Sequence[NodeData],
    policy: VisibilityPolicy,
) -> List[str]:
    """Edge statements of every visible binary relation, in relation order."""
    statements = []
    for relation in model.relations:
        if relation.arity != 2:
            continue
        if policy.get_visibility(relation.name) is Visibility.NONE:
            continue
        statements.extend(
            relation_edge_statements(model, node_data, relation, policy)
        )
    return statements
