"""
Semantic Model Contracts

Immutable snapshot of a partial interpretation: the ordered node sequence,
the ordered relation sequence and the truth-valued tuples of each relation.

INGESTION BOUNDARY:
===================
Raw tuples are validated ONCE, when the snapshot is built:
1. Tuple length must be arity + 1
2. Argument slots must be integer node indices
3. The value slot must be a truth value (a label string for counts)
4. Tuples of a relation must be strictly ascending by their arguments

Node indices are NOT range-checked here. Dangling references are tolerated
and skipped by the renderers, since interpretations may briefly reference
nodes that are not materialized yet.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union
import logging

from .base import (
    BUILTIN_ARITIES, COUNT_RELATION, ContractViolation, ErrorCode,
    NodeKind, TruthValue,
)


logger = logging.getLogger(__name__)


# =============================================================================
# NODES
# =============================================================================

@dataclass(frozen=True)
class NodeMetadata:
    """
    A node of the model. Identity is its position in the node sequence.

    type_hash is an opaque grouping key; it is only ever used to pick a
    color class, never shown.
    """
    name: str
    simple_name: str
    kind: NodeKind
    type_hash: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'kind', NodeKind.parse(self.kind))


# =============================================================================
# RELATION DETAILS (closed sum type)
# =============================================================================

@dataclass(frozen=True)
class ClassDetail:
    abstract_class: bool = False


@dataclass(frozen=True)
class ReferenceDetail:
    containment: bool = False


@dataclass(frozen=True)
class OppositeDetail:
    """Reference mirroring the relation named `opposite` in reverse order."""
    opposite: str
    container: bool = False


@dataclass(frozen=True)
class PredicateDetail:
    error: bool = False


@dataclass(frozen=True)
class BuiltinDetail:
    pass


RelationDetail = Union[
    ClassDetail, ReferenceDetail, OppositeDetail, PredicateDetail, BuiltinDetail
]

RELATION_DETAIL_TYPES = (
    ClassDetail, ReferenceDetail, OppositeDetail, PredicateDetail, BuiltinDetail
)


def unknown_detail(detail: object) -> ContractViolation:
    """Error for a detail outside the closed set. Raise from the final branch."""
    return ContractViolation(
        ErrorCode.UNKNOWN_RELATION_DETAIL,
        f"Unhandled relation detail {detail!r}"
    )


@dataclass(frozen=True)
class RelationMetadata:
    """A relation symbol with its arity and detail variant."""
    name: str
    simple_name: str
    arity: int
    detail: RelationDetail = field(default_factory=PredicateDetail)

    def __post_init__(self):
        if not isinstance(self.arity, int) or isinstance(self.arity, bool) or self.arity < 0:
            raise ContractViolation(
                ErrorCode.INVALID_ARITY,
                f"Relation {self.name!r} has invalid arity {self.arity!r}"
            )
        if not isinstance(self.detail, RELATION_DETAIL_TYPES):
            raise unknown_detail(self.detail)

    @property
    def is_containment(self) -> bool:
        return isinstance(self.detail, ReferenceDetail) and self.detail.containment


# =============================================================================
# TUPLES
# =============================================================================

@dataclass(frozen=True)
class Fact:
    """One tuple of a partial interpretation: argument indices and a value."""
    arguments: Tuple[int, ...]
    value: TruthValue


@dataclass(frozen=True)
class CountFact:
    """A `builtin::count` entry: node index and its display label."""
    node: int
    label: str


def _is_index(item: object) -> bool:
    return isinstance(item, int) and not isinstance(item, bool)


def parse_fact(relation_name: str, arity: int, raw: Sequence[object]) -> Fact:
    """Validate one raw tuple `[index, ..., value]` against its arity."""
    if len(raw) != arity + 1:
        raise ContractViolation(
            ErrorCode.TUPLE_ARITY_MISMATCH,
            f"Tuple {list(raw)!r} of {relation_name!r} does not match arity {arity}"
        )
    arguments = tuple(raw[:arity])
    for item in arguments:
        if not _is_index(item):
            raise ContractViolation(
                ErrorCode.INVALID_NODE_INDEX,
                f"Tuple {list(raw)!r} of {relation_name!r} has non-integer argument {item!r}"
            )
    return Fact(arguments=arguments, value=TruthValue.parse(raw[arity]))


def parse_count_fact(raw: Sequence[object]) -> CountFact:
    if len(raw) != 2:
        raise ContractViolation(
            ErrorCode.TUPLE_ARITY_MISMATCH,
            f"Count tuple {list(raw)!r} must be [node, label]"
        )
    node, label = raw
    if not _is_index(node):
        raise ContractViolation(
            ErrorCode.INVALID_NODE_INDEX,
            f"Count tuple {list(raw)!r} has non-integer node {node!r}"
        )
    if not isinstance(label, str):
        raise ContractViolation(
            ErrorCode.INVALID_COUNT_LABEL,
            f"Count tuple {list(raw)!r} has non-string label {label!r}"
        )
    return CountFact(node=node, label=label)


def check_sorted(relation_name: str, facts: Sequence[Fact]) -> None:
    """Tuples must be strictly ascending so opposite lookups can bisect."""
    for previous, current in zip(facts, facts[1:]):
        if previous.arguments >= current.arguments:
            raise ContractViolation(
                ErrorCode.UNSORTED_TUPLES,
                f"Tuples of {relation_name!r} are not strictly ascending: "
                f"{previous.arguments!r} before {current.arguments!r}"
            )


# =============================================================================
# SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class SemanticModel:
    """
    Read-only snapshot passed to the renderer for one invocation.

    interpretation maps relation names (and the exists/equals builtins) to
    validated facts. Count labels are kept apart since they carry no
    truth value.
    """
    nodes: Tuple[NodeMetadata, ...]
    relations: Tuple[RelationMetadata, ...]
    interpretation: Mapping[str, Tuple[Fact, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    counts: Tuple[CountFact, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'nodes', tuple(self.nodes))
        object.__setattr__(self, 'relations', tuple(self.relations))
        object.__setattr__(self, 'counts', tuple(self.counts))
        frozen = {name: tuple(facts) for name, facts in self.interpretation.items()}
        arities = self._arities()
        for name, facts in frozen.items():
            arity = arities.get(name)
            for fact in facts:
                if arity is not None and len(fact.arguments) != arity:
                    raise ContractViolation(
                        ErrorCode.TUPLE_ARITY_MISMATCH,
                        f"Fact {fact.arguments!r} of {name!r} does not match arity {arity}"
                    )
            if name not in BUILTIN_ARITIES:
                check_sorted(name, facts)
        object.__setattr__(self, 'interpretation', MappingProxyType(frozen))

    def _arities(self) -> Dict[str, int]:
        arities = {relation.name: relation.arity for relation in self.relations}
        arities.update(BUILTIN_ARITIES)
        return arities

    @classmethod
    def from_raw(
        cls,
        nodes: Iterable[NodeMetadata],
        relations: Iterable[RelationMetadata],
        partial_interpretation: Mapping[str, Iterable[Sequence[object]]],
    ) -> SemanticModel:
        """
        Build a snapshot from raw `[index, ..., value]` tuples.

        Entries for relations missing from `relations` are dropped.
        """
        relations = tuple(relations)
        arities = {relation.name: relation.arity for relation in relations}
        arities.update(BUILTIN_ARITIES)

        interpretation: Dict[str, Tuple[Fact, ...]] = {}
        counts: Tuple[CountFact, ...] = ()
        for name, raw_tuples in partial_interpretation.items():
            if name == COUNT_RELATION:
                counts = tuple(parse_count_fact(raw) for raw in raw_tuples)
                continue
            arity = arities.get(name)
            if arity is None:
                logger.debug("Dropping interpretation of unknown relation %r", name)
                continue
            interpretation[name] = tuple(
                parse_fact(name, arity, raw) for raw in raw_tuples
            )

        return cls(
            nodes=tuple(nodes),
            relations=relations,
            interpretation=interpretation,
            counts=counts,
        )

    def facts(self, relation_name: str) -> Tuple[Fact, ...]:
        return self.interpretation.get(relation_name, ())

    def node(self, index: int) -> Optional[NodeMetadata]:
        """Resolve a node index, or None for a dangling reference."""
        if 0 <= index < len(self.nodes):
            return self.nodes[index]
        return None

    def relation(self, name: str) -> Optional[RelationMetadata]:
        for relation in self.relations:
            if relation.name == name:
                return relation
        return None
