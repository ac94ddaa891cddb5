"""
==========================
Utility Functions Package.
==========================

Structural data helpers and database helpers.

Modules:
    structures: merge (immutable path update) and clone (deep copy)
    database_utils: Engine creation and DDL application
"""

__version__ = "1.0.0"
__all__ = [
    'merge',
    'clone',
    'PathError',
    'StructureDepthError',
    'StructureError',
    'apply_schema',
    'create_sqlalchemy_engine',
    'verify_connection',
]

from .database_utils import (
    apply_schema,
    create_sqlalchemy_engine,
    verify_connection,
)
from .structures import (
    PathError,
    StructureDepthError,
    StructureError,
    clone,
    merge,
)
