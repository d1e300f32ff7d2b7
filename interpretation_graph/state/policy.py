"""
Visibility Policy

Controls which relations, and which of their truth values, reach the
renderer, together with the global display flags.

POLICY RULES:
=============
1. Policies are immutable; every edit returns a new policy
2. Relations without an explicit setting are hidden (NONE)
3. Builtin relations and relations of arity other than 1 or 2 are never shown
4. Error predicates have no UNKNOWN tuples worth showing, so they cap at MUST
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Union

from ..contracts.base import ContractViolation, ErrorCode, Visibility
from ..contracts.semantics import (
    BuiltinDetail, ClassDetail, NodeMetadata, OppositeDetail, PredicateDetail,
    ReferenceDetail, RelationMetadata, SemanticModel, unknown_detail,
)


def default_visibility(metadata: Optional[RelationMetadata]) -> Visibility:
    """Visibility a relation gets before the user changes anything."""
    if metadata is None or metadata.arity not in (1, 2):
        return Visibility.NONE
    detail = metadata.detail
    if isinstance(detail, (ClassDetail, ReferenceDetail, OppositeDetail)):
        return Visibility.ALL
    if isinstance(detail, PredicateDetail):
        return Visibility.MUST if detail.error else Visibility.NONE
    if isinstance(detail, BuiltinDetail):
        return Visibility.NONE
    raise unknown_detail(detail)


def is_visibility_allowed(
    metadata: Optional[RelationMetadata],
    visibility: Visibility,
) -> bool:
    if visibility is Visibility.NONE:
        return True
    if metadata is None or metadata.arity not in (1, 2):
        return False
    detail = metadata.detail
    if isinstance(detail, BuiltinDetail):
        return False
    if isinstance(detail, PredicateDetail):
        return visibility is Visibility.MUST if detail.error else True
    if isinstance(detail, (ClassDetail, ReferenceDetail, OppositeDetail)):
        return True
    raise unknown_detail(detail)


@dataclass(frozen=True)
class VisibilityPolicy:
    """
    Per-relation visibility plus global display flags.

    - show_non_existent: also render nodes whose exists fact is FALSE
    - scopes: append the count label to node headers
    - abbreviate: display simple names instead of qualified names
    """
    visibility: Mapping[str, Visibility] = field(
        default_factory=lambda: MappingProxyType({})
    )
    show_non_existent: bool = False
    scopes: bool = False
    abbreviate: bool = True

    def __post_init__(self):
        parsed = {
            name: Visibility.parse(value) for name, value in self.visibility.items()
        }
        object.__setattr__(self, 'visibility', MappingProxyType(parsed))

    @classmethod
    def from_model(cls, model: SemanticModel, **flags) -> VisibilityPolicy:
        """Seed every relation of the model with its default visibility."""
        return cls(
            visibility={
                relation.name: default_visibility(relation)
                for relation in model.relations
            },
            **flags,
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_visibility(self, relation_name: str) -> Visibility:
        return self.visibility.get(relation_name, Visibility.NONE)

    def get_name(self, metadata: Union[NodeMetadata, RelationMetadata]) -> str:
        """Display name, before any escaping."""
        return metadata.simple_name if self.abbreviate else metadata.name

    # =========================================================================
    # EDITS (return new policies)
    # =========================================================================

    def with_visibility(
        self,
        relation: RelationMetadata,
        visibility: Union[Visibility, str],
    ) -> VisibilityPolicy:
        visibility = Visibility.parse(visibility)
        if not is_visibility_allowed(relation, visibility):
            raise ContractViolation(
                ErrorCode.VISIBILITY_NOT_ALLOWED,
                f"Relation {relation.name!r} cannot be shown as {visibility.value!r}"
            )
        updated = dict(self.visibility)
        updated[relation.name] = visibility
        return replace(self, visibility=updated)

    def cycle_visibility(self, relation: RelationMetadata) -> VisibilityPolicy:
        """Step NONE -> MUST -> ALL -> NONE, skipping disallowed levels."""
        current = self.get_visibility(relation.name)
        if current is Visibility.NONE:
            if not is_visibility_allowed(relation, Visibility.MUST):
                return self
            return self.with_visibility(relation, Visibility.MUST)
        if current is Visibility.MUST:
            if is_visibility_allowed(relation, Visibility.ALL):
                return self.with_visibility(relation, Visibility.ALL)
            return self.with_visibility(relation, Visibility.NONE)
        return self.with_visibility(relation, Visibility.NONE)

    def hide_all(self, model: SemanticModel) -> VisibilityPolicy:
        return replace(
            self,
            visibility={relation.name: Visibility.NONE for relation in model.relations},
        )

    def show_all(self, model: SemanticModel) -> VisibilityPolicy:
        """Show every relation that may be shown at all, at MUST level."""
        updated = dict(self.visibility)
        for relation in model.relations:
            if is_visibility_allowed(relation, Visibility.MUST):
                updated[relation.name] = Visibility.MUST
        return replace(self, visibility=updated)

    def reset(self, model: SemanticModel) -> VisibilityPolicy:
        return replace(
            self,
            visibility={
                relation.name: default_visibility(relation)
                for relation in model.relations
            },
        )

    def toggle_abbreviate(self) -> VisibilityPolicy:
        return replace(self, abbreviate=not self.abbreviate)

    def toggle_scopes(self) -> VisibilityPolicy:
        return replace(self, scopes=not self.scopes)

    def toggle_show_non_existent(self) -> VisibilityPolicy:
        return replace(self, show_non_existent=not self.show_non_existent)
