"""
========================================
Schema Description Models
========================================

Typed models for the table/field schema description consumed by the DDL
generator.

Modules:
    schema_models: TableDefinition, FieldDefinition, ForeignKeyReference

Example:
    >>> from models import TableDefinition
    >>>
    >>> table = TableDefinition.from_dict({'name': 'users', 'fields': []})
    >>> TableDefinition.defaults()
    {'name': '', 'fields': []}
"""

__version__ = "0.1.0"
__all__ = [
    'ForeignKeyReference',
    'FieldDefinition',
    'TableDefinition',
]

from .schema_models import (
    FieldDefinition,
    ForeignKeyReference,
    TableDefinition,
)
