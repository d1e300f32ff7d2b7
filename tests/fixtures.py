"""
Test Fixtures

Explicit, hand-written snapshots for renderer tests.

RULES:
======
1. All fixtures are EXPLICIT, not random
2. Tuples are listed in ascending order, as the producer emits them
3. Every node exists unless a test says otherwise
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from interpretation_graph.contracts.base import (
    COUNT_RELATION, EQUALS_RELATION, EXISTS_RELATION, NodeKind, Visibility,
)
from interpretation_graph.contracts.semantics import (
    BuiltinDetail, ClassDetail, NodeMetadata, OppositeDetail, PredicateDetail,
    ReferenceDetail, RelationMetadata, SemanticModel,
)
from interpretation_graph.state.policy import VisibilityPolicy


def make_node(
    simple_name: str,
    kind: NodeKind = NodeKind.INDIVIDUAL,
    type_hash: Optional[str] = None,
) -> NodeMetadata:
    return NodeMetadata(
        name=f"example::{simple_name}",
        simple_name=simple_name,
        kind=kind,
        type_hash=type_hash,
    )


def make_relation(simple_name: str, arity: int = 2, detail=None) -> RelationMetadata:
    return RelationMetadata(
        name=f"example::{simple_name}",
        simple_name=simple_name,
        arity=arity,
        detail=detail if detail is not None else PredicateDetail(),
    )


def plain(simple_name: str, arity: int = 2) -> RelationMetadata:
    return make_relation(simple_name, arity, ReferenceDetail(containment=False))


def containment(simple_name: str) -> RelationMetadata:
    return make_relation(simple_name, 2, ReferenceDetail(containment=True))


def opposite_of(simple_name: str, other: RelationMetadata) -> RelationMetadata:
    return make_relation(simple_name, 2, OppositeDetail(opposite=other.name))


def class_relation(simple_name: str, abstract: bool = False) -> RelationMetadata:
    return make_relation(simple_name, 1, ClassDetail(abstract_class=abstract))


BUILTIN_EXISTS = make_relation("exists", 1, BuiltinDetail())


def make_model(
    nodes: Sequence[NodeMetadata],
    relations: Sequence[RelationMetadata],
    tuples: Dict[str, List[list]],
    exists: Optional[Dict[int, str]] = None,
    equals: Optional[Dict[int, str]] = None,
    counts: Optional[Dict[int, str]] = None,
) -> SemanticModel:
    """
    Build a snapshot keyed by relation objects' names.

    exists defaults to TRUE for every node.
    """
    if exists is None:
        exists = {index: "TRUE" for index in range(len(nodes))}
    interpretation = dict(tuples)
    interpretation[EXISTS_RELATION] = [[index, value] for index, value in exists.items()]
    if equals:
        interpretation[EQUALS_RELATION] = [
            [index, index, value] for index, value in equals.items()
        ]
    if counts:
        interpretation[COUNT_RELATION] = [[index, label] for index, label in counts.items()]
    return SemanticModel.from_raw(nodes, relations, interpretation)


def policy_for(
    *levels,
    show_non_existent: bool = False,
    scopes: bool = False,
    abbreviate: bool = True,
) -> VisibilityPolicy:
    """policy_for((relation, "all"), ...)"""
    return VisibilityPolicy(
        visibility={relation.name: Visibility.parse(level) for relation, level in levels},
        show_non_existent=show_non_existent,
        scopes=scopes,
        abbreviate=abbreviate,
    )


# =============================================================================
# SAMPLE SNAPSHOT
# =============================================================================

def make_family_model() -> SemanticModel:
    """
    Three people, a containment tree and a symmetric `knows`.

    0 alice (INDIVIDUAL), 1 bob (NEW), 2 carol (IMPLICIT, may not exist)
    """
    nodes = [
        make_node("alice", NodeKind.INDIVIDUAL, type_hash="person"),
        make_node("bob", NodeKind.NEW, type_hash="person"),
        make_node("carol", NodeKind.IMPLICIT),
    ]
    person = class_relation("Person")
    knows = plain("knows")
    children = containment("children")
    relations = [person, knows, children]
    tuples = {
        person.name: [[0, "TRUE"], [1, "TRUE"], [2, "UNKNOWN"]],
        knows.name: [[0, 1, "TRUE"], [1, 0, "TRUE"], [1, 2, "UNKNOWN"]],
        children.name: [[0, 1, "TRUE"], [0, 2, "ERROR"]],
    }
    return make_model(
        nodes, relations, tuples,
        exists={0: "TRUE", 1: "TRUE", 2: "UNKNOWN"},
        equals={0: "TRUE", 1: "UNKNOWN"},
        counts={0: "[1]", 1: "[1]", 2: "[0..1]"},
    )
