"""
Node Attributes

Derives per-node rendering attributes from the visible tuples of a snapshot
and from the builtin exists/equals/count facts.

ORDERING CONTRACT:
==================
Unary predicates are rendered in the order they are first discovered
(relation order, then tuple order). The mapping is an OrderedDict so that
this order is explicit; it is part of the byte-identical output contract.
"""

from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import List, Tuple
import logging

from ..contracts.base import (
    DEFAULT_COUNT_LABEL, EQUALS_RELATION, EXISTS_RELATION, NodeKind, TruthValue,
    Visibility,
)
from ..contracts.semantics import (
    ClassDetail, NodeMetadata, RelationMetadata, SemanticModel,
)
from ..state.policy import VisibilityPolicy
from .escaping import encode_name, escape_html, obfuscate_color


logger = logging.getLogger(__name__)


@dataclass
class NodeData:
    """Transient attributes of one node, discarded after the render."""
    isolated: bool = True
    exists: TruthValue = TruthValue.FALSE
    equals_self: TruthValue = TruthValue.FALSE
    count: str = DEFAULT_COUNT_LABEL
    unary_predicates: OrderedDict[RelationMetadata, TruthValue] = field(
        default_factory=OrderedDict
    )


def compute_node_data(
    model: SemanticModel,
    policy: VisibilityPolicy,
) -> Tuple[NodeData, ...]:
    """Compute NodeData for every node, indexed like model.nodes."""
    node_data = [NodeData() for _ in model.nodes]

    def resolve(index: int):
        if 0 <= index < len(node_data):
            return node_data[index]
        logger.debug("Skipping dangling node index %d", index)
        return None

    for relation in model.relations:
        visibility = policy.get_visibility(relation.name)
        if visibility is Visibility.NONE:
            continue
        for fact in model.facts(relation.name):
            if not visibility.shows(fact.value):
                continue
            for index in fact.arguments:
                data = resolve(index)
                if data is None:
                    continue
                data.isolated = False
                if relation.arity == 1:
                    data.unary_predicates[relation] = fact.value

    # Builtin facts bypass the visibility policy
    for fact in model.facts(EXISTS_RELATION):
        data = resolve(fact.arguments[0])
        if data is not None:
            data.exists = fact.value

    for fact in model.facts(EQUALS_RELATION):
        index, other = fact.arguments
        if index != other:
            continue
        data = resolve(index)
        if data is not None:
            data.equals_self = fact.value

    for count in model.counts:
        data = resolve(count.node)
        if data is not None:
            data.count = count.label

    return tuple(node_data)


def is_rendered(data: NodeData, policy: VisibilityPolicy) -> bool:
    """Hidden nodes are left out of the output, edges included."""
    if data.isolated:
        return False
    return policy.show_non_existent or data.exists is not TruthValue.FALSE


# =============================================================================
# LABELS
# =============================================================================

def node_name(policy: VisibilityPolicy, metadata: NodeMetadata) -> str:
    name = escape_html(policy.get_name(metadata))
    if metadata.kind is NodeKind.INDIVIDUAL:
        return f"<b>{name}</b>"
    return name


def relation_name(policy: VisibilityPolicy, metadata: RelationMetadata) -> str:
    name = escape_html(policy.get_name(metadata))
    detail = metadata.detail
    if isinstance(detail, ClassDetail) and detail.abstract_class:
        return f"<i>{name}</i>"
    if metadata.is_containment:
        return f"<b>{name}</b>"
    return name


def node_classes(metadata: NodeMetadata, data: NodeData) -> str:
    class_list = [
        f"node-{metadata.kind.value}",
        f"node-exists-{data.exists.value}",
        f"node-equalsSelf-{data.equals_self.value}",
    ]
    if not data.unary_predicates:
        class_list.append("node-empty")
    if metadata.type_hash is not None:
        class_list.append(f"node-typeHash-{obfuscate_color(metadata.type_hash)}")
    return " ".join(class_list)


def node_statements(
    index: int,
    metadata: NodeMetadata,
    data: NodeData,
    policy: VisibilityPolicy,
) -> List[str]:
    """DOT statement chunks for one rendered node."""
    encoded_node_name = encode_name(metadata.name)
    border = 2 if metadata.kind is NodeKind.INDIVIDUAL else 1
    count = f" {data.count}" if policy.scopes else ""
    chunks = [
        f'n{index} [id="{encoded_node_name}", class="{node_classes(metadata, data)}", label=<\n'
        f'        <table border="{border}" cellborder="0" cellspacing="0" style="rounded" bgcolor="white">\n'
        f'          <tr><td cellpadding="4.5" width="32" bgcolor="green">'
        f'{node_name(policy, metadata)}{count}</td></tr>'
    ]
    if data.unary_predicates:
        chunks.append(
            '<hr/><tr><td cellpadding="4.5"><table fixedsize="TRUE" align="left" '
            'border="0" cellborder="0" cellspacing="0" cellpadding="1.5">'
        )
        for relation, value in data.unary_predicates.items():
            label_id = f"{encoded_node_name},{encode_name(relation.name)},label"
            chunks.append(
                f'<tr>\n'
                f'              <td><img src="#{value.value}"/></td>\n'
                f'              <td width="1.5"></td>\n'
                f'              <td align="left" href="#{value.value}" id="{label_id}">'
                f'{relation_name(policy, relation)}</td>\n'
                f'            </tr>'
            )
        chunks.append('</table></td></tr>')
    chunks.append('</table>>]')
    return chunks
