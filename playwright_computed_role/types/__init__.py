"""Type definitions for playwright-computed-role."""

from .models import ConstructorParams, DEFAULT_ENGINE_NAME, RoleFilter
from .snapshot import DocumentSnapshot, InternalsSnapshot, SnapshotNode

__all__ = [
    "ConstructorParams",
    "DEFAULT_ENGINE_NAME",
    "RoleFilter",
    "DocumentSnapshot",
    "InternalsSnapshot",
    "SnapshotNode",
]
