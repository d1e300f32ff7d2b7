"""
Contracts Package

Immutable input types for the graph transform: the truth domain, the
semantic model snapshot and the wire payload that produces it.
"""

from .base import (
    ErrorCode,
    ContractViolation,
    TruthValue,
    NodeKind,
    Visibility,
    EXISTS_RELATION,
    EQUALS_RELATION,
    COUNT_RELATION,
)
from .semantics import (
    NodeMetadata,
    RelationMetadata,
    RelationDetail,
    ClassDetail,
    ReferenceDetail,
    OppositeDetail,
    PredicateDetail,
    BuiltinDetail,
    Fact,
    CountFact,
    SemanticModel,
)

__all__ = [
    # Base
    'ErrorCode',
    'ContractViolation',
    'TruthValue',
    'NodeKind',
    'Visibility',
    'EXISTS_RELATION',
    'EQUALS_RELATION',
    'COUNT_RELATION',
    # Semantics
    'NodeMetadata',
    'RelationMetadata',
    'RelationDetail',
    'ClassDetail',
    'ReferenceDetail',
    'OppositeDetail',
    'PredicateDetail',
    'BuiltinDetail',
    'Fact',
    'CountFact',
    'SemanticModel',
]
