"""
Wire Payload Contracts

Pydantic models for the JSON semantics result emitted by the model server:

    {
      "nodes": [{"name", "simpleName", "kind", "typeHash"?}],
      "relations": [{"name", "simpleName", "arity", "detail": {"type", ...}}],
      "partialInterpretation": {"<relation>": [[0, 1, "TRUE"], ...]}
    }

Shape errors surface as pydantic.ValidationError. Tuple-level checks are
left to SemanticModel.from_raw, which raises ContractViolation.
"""

from __future__ import annotations
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import NodeKind
from .semantics import (
    BuiltinDetail, ClassDetail, NodeMetadata, OppositeDetail, PredicateDetail,
    ReferenceDetail, RelationDetail, RelationMetadata, SemanticModel,
    unknown_detail,
)


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# DETAILS
# =============================================================================

class ClassDetailPayload(WireModel):
    type: Literal["class"]
    abstract_class: bool = False


class ReferenceDetailPayload(WireModel):
    type: Literal["reference"]
    containment: bool = False


class OppositeDetailPayload(WireModel):
    type: Literal["opposite"]
    opposite: str
    container: bool = False


class PredicateDetailPayload(WireModel):
    type: Literal["predicate"]
    error: bool = False


class BuiltinDetailPayload(WireModel):
    type: Literal["builtin"]


DetailPayload = Annotated[
    Union[
        ClassDetailPayload,
        ReferenceDetailPayload,
        OppositeDetailPayload,
        PredicateDetailPayload,
        BuiltinDetailPayload,
    ],
    Field(discriminator="type"),
]


def to_detail(payload: DetailPayload) -> RelationDetail:
    if isinstance(payload, ClassDetailPayload):
        return ClassDetail(abstract_class=payload.abstract_class)
    if isinstance(payload, ReferenceDetailPayload):
        return ReferenceDetail(containment=payload.containment)
    if isinstance(payload, OppositeDetailPayload):
        return OppositeDetail(opposite=payload.opposite, container=payload.container)
    if isinstance(payload, PredicateDetailPayload):
        return PredicateDetail(error=payload.error)
    if isinstance(payload, BuiltinDetailPayload):
        return BuiltinDetail()
    raise unknown_detail(payload)


# =============================================================================
# METADATA
# =============================================================================

class NodePayload(WireModel):
    name: str
    simple_name: str
    kind: NodeKind
    type_hash: Optional[str] = None

    def to_metadata(self) -> NodeMetadata:
        return NodeMetadata(
            name=self.name,
            simple_name=self.simple_name,
            kind=self.kind,
            type_hash=self.type_hash,
        )


class RelationPayload(WireModel):
    name: str
    simple_name: str
    arity: int = Field(ge=0)
    detail: DetailPayload

    def to_metadata(self) -> RelationMetadata:
        return RelationMetadata(
            name=self.name,
            simple_name=self.simple_name,
            arity=self.arity,
            detail=to_detail(self.detail),
        )


class SemanticsPayload(WireModel):
    """A complete semantics result for one snapshot."""
    nodes: List[NodePayload] = Field(default_factory=list)
    relations: List[RelationPayload] = Field(default_factory=list)
    # Tuple slots stay untyped so that malformed tuples reach the
    # ingestion boundary and fail there with an explicit error code.
    partial_interpretation: Dict[str, List[List[Any]]] = Field(default_factory=dict)

    def to_model(self) -> SemanticModel:
        return SemanticModel.from_raw(
            nodes=(node.to_metadata() for node in self.nodes),
            relations=(relation.to_metadata() for relation in self.relations),
            partial_interpretation=self.partial_interpretation,
        )


def parse_semantics(payload: Union[str, bytes, Dict[str, Any]]) -> SemanticModel:
    """Parse a JSON document (or already-decoded dict) into a snapshot."""
    if isinstance(payload, (str, bytes)):
        parsed = SemanticsPayload.model_validate_json(payload)
    else:
        parsed = SemanticsPayload.model_validate(payload)
    return parsed.to_model()
