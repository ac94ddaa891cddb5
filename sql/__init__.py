"""
===============================================
SQL generation package for schema descriptions.
===============================================

Pure functions that render schema descriptions as SQL text. Nothing here
touches a database; see utils.database_utils for executing the output.

Modules:
    ddl.py: CREATE TABLE generation (to_sql and its helpers)

Example:
    >>> from sql import to_sql
    >>>
    >>> ddl = to_sql({'t': {'name': 't', 'fields': [{'name': 'id', 'type': 'INTEGER'}]}})
"""

__version__ = "1.0.0"
__all__ = [
    'to_sql', 'create_table_statement', 'column_definition',
]

from .ddl import (
    column_definition,
    create_table_statement,
    to_sql,
)
