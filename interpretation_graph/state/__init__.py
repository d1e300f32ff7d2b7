"""
State Access Layer

Display state that decides what the renderer may show. Read-only during a
render; edits produce new policies.
"""

from .policy import (
    VisibilityPolicy,
    default_visibility,
    is_visibility_allowed,
)

__all__ = [
    'VisibilityPolicy',
    'default_visibility',
    'is_visibility_allowed',
]
