"""
Base Contracts and Shared Types

Foundational types shared by every layer of the graph transform.
All types here are IMMUTABLE and represent pure data.

TRUTH DOMAIN:
=============
Partial interpretations are four-valued:
- TRUE / FALSE: classical facts
- UNKNOWN: not yet resolved
- ERROR: contradictory (over-constrained) fact
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Final, Optional
import logging


logger = logging.getLogger(__name__)


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for contract violations.
    Every rejected input maps to exactly one code.
    """
    # Tuple shape errors
    TUPLE_ARITY_MISMATCH = auto()
    INVALID_NODE_INDEX = auto()
    INVALID_TRUTH_VALUE = auto()
    INVALID_COUNT_LABEL = auto()
    UNSORTED_TUPLES = auto()

    # Metadata errors
    INVALID_ARITY = auto()
    INVALID_NODE_KIND = auto()
    UNKNOWN_RELATION_DETAIL = auto()

    # Policy errors
    VISIBILITY_NOT_ALLOWED = auto()


class ContractViolation(ValueError):
    """
    Malformed upstream data.

    Raised immediately and never recovered from: callers must treat it as a
    data-integrity bug in the producer of the interpretation.
    """

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(f"{code.name}: {message}")
        self.code = code
        self.message = message


# =============================================================================
# TRUTH VALUES
# =============================================================================

class TruthValue(Enum):
    """Four-valued truth domain of a partial interpretation."""
    TRUE = "TRUE"
    FALSE = "FALSE"
    UNKNOWN = "UNKNOWN"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, value: object) -> TruthValue:
        """Parse a wire value, raising ContractViolation on anything else."""
        if isinstance(value, TruthValue):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ContractViolation(
            ErrorCode.INVALID_TRUTH_VALUE,
            f"Expected one of TRUE, FALSE, UNKNOWN, ERROR, got {value!r}"
        )


# =============================================================================
# NODE KINDS
# =============================================================================

class NodeKind(Enum):
    """Structural kind of a node."""
    IMPLICIT = "IMPLICIT"
    INDIVIDUAL = "INDIVIDUAL"
    NEW = "NEW"

    @classmethod
    def parse(cls, value: object) -> NodeKind:
        if isinstance(value, NodeKind):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ContractViolation(
                ErrorCode.INVALID_NODE_KIND,
                f"Unknown node kind {value!r}"
            ) from None


# =============================================================================
# VISIBILITY LEVELS
# =============================================================================

class Visibility(Enum):
    """
    Per-relation visibility lattice: NONE < MUST < ALL.

    - NONE: relation suppressed entirely
    - MUST: every tuple except UNKNOWN ones
    - ALL: every tuple
    """
    NONE = "none"
    MUST = "must"
    ALL = "all"

    @classmethod
    def parse(cls, value: Optional[object]) -> Visibility:
        """Parse a visibility setting. Unknown values hide the relation."""
        if isinstance(value, Visibility):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown visibility %r treated as none", value)
            return cls.NONE

    def shows(self, value: TruthValue) -> bool:
        """Whether a tuple with the given value passes this visibility."""
        if self is Visibility.NONE:
            return False
        return self is Visibility.ALL or value is not TruthValue.UNKNOWN


# =============================================================================
# BUILTIN RELATIONS
# =============================================================================

EXISTS_RELATION: Final[str] = "builtin::exists"
EQUALS_RELATION: Final[str] = "builtin::equals"
COUNT_RELATION: Final[str] = "builtin::count"

# Arity of builtin facts read outside the visibility system
BUILTIN_ARITIES: Final = {
    EXISTS_RELATION: 1,
    EQUALS_RELATION: 2,
    COUNT_RELATION: 1,
}

DEFAULT_COUNT_LABEL: Final[str] = "[0]"
