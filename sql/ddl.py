"""
=======================================================================
Data Definition Language (DDL) generation from schema descriptions.
=======================================================================

Turns a schema description (see models.schema_models) into plain
``CREATE TABLE`` statements.

Each table produces one statement. Inside it, clauses appear in this order:
    - one clause per field: ``<name> <type> [NOT NULL] [DEFAULT <value>]``,
      followed by ``CHECK (<name><condition>)`` when the field has a check
    - ``PRIMARY KEY (<field>)``
    - ``FOREIGN KEY (<fieldName>) REFERENCES <tableName>(<fieldName>)``, naming
      the referenced field on both sides
    - ``UNIQUE (<field>, ...)``

Limitations:
    - Identifiers, types, defaults and check conditions are emitted verbatim.
      There is no escaping, so untrusted input must never reach this module.
    - One primary key and one foreign key per table; when several fields
      declare one, the last declared field wins.
    - Nothing is validated (duplicate columns, unknown referenced tables).
      Missing or malformed attributes simply mean the feature is absent;
      non-string names and types are rendered with ``str()``.
    - A default is emitted whenever it is not ``None`` or ``''``, so falsy
      values such as ``0`` and ``False`` still produce ``DEFAULT 0`` and
      ``DEFAULT FALSE``.

Functions:
    to_sql: Generate DDL for every table of a schema description
    create_table_statement: Generate the CREATE TABLE statement of one table
    column_definition: Generate the column clause of one field

Example:
    >>> from sql.ddl import to_sql
    >>>
    >>> print(to_sql({
    ...     'users': {
    ...         'name': 'users',
    ...         'fields': [
    ...             {'name': 'id', 'type': 'INTEGER', 'primaryKey': True},
    ...             {'name': 'email', 'type': 'TEXT', 'unique': True, 'notNull': True},
    ...         ],
    ...     },
    ... }), end='')
    CREATE TABLE users(
    id INTEGER,
    email TEXT NOT NULL,
    PRIMARY KEY (id),
    UNIQUE (email)
    );
"""

from typing import Any, List, Mapping, Optional, Union

from models.schema_models import (
    FieldDefinition,
    ForeignKeyReference,
    TableDefinition,
)

TableLike = Union[TableDefinition, Mapping[str, Any]]
FieldLike = Union[FieldDefinition, Mapping[str, Any]]

CLAUSE_SEPARATOR = ",\n"


def to_sql(tables: Mapping[Any, TableLike]) -> str:
    """Generate CREATE TABLE statements for a schema description.

    Args:
        tables: Mapping of table identifier to table (dict or TableDefinition),
            emitted in iteration order

    Returns:
        Newline-terminated statements, empty string for an empty schema
    """
    statements = [
        create_table_statement(table, table_id=table_id)
        for table_id, table in tables.items()
    ]
    return "".join(statement + "\n" for statement in statements)


def create_table_statement(table: TableLike, table_id: Optional[Any] = None) -> str:
    """Generate the CREATE TABLE statement for one table.

    Args:
        table: Table definition or its wire-format mapping
        table_id: Identifier used as the table name when the table has none

    Returns:
        Single statement ending with ``);``

    Example:
        >>> create_table_statement({'name': 't', 'fields': [{'name': 'a', 'type': 'INT'}]})
        'CREATE TABLE t(\\na INT\\n);'
    """
    table = _as_table(table, table_id)

    # Per-table accumulators
    clauses: List[str] = []
    primary_key = None
    foreign_key = None
    unique_fields: List[str] = []

    for field in table.fields:
        clauses.append(column_definition(field))

        if field.check_condition:
            clauses.append(f"CHECK ({field.name}{field.check_condition})")

        if field.primary_key:
            primary_key = field.name

        if field.unique:
            unique_fields.append(str(field.name))

        if isinstance(field.foreign_key, ForeignKeyReference) and field.foreign_key.table_name:
            foreign_key = field.foreign_key

    if primary_key:
        clauses.append(f"PRIMARY KEY ({primary_key})")

    if foreign_key:
        clauses.append(
            f"FOREIGN KEY ({foreign_key.field_name}) "
            f"REFERENCES {foreign_key.table_name}({foreign_key.field_name})"
        )

    if unique_fields:
        clauses.append(f"UNIQUE ({', '.join(unique_fields)})")

    return f"CREATE TABLE {table.name}(\n" + CLAUSE_SEPARATOR.join(clauses) + "\n);"


def column_definition(field: FieldLike) -> str:
    """Generate ``<name> <type> [NOT NULL] [DEFAULT <value>]`` for one field.

    Args:
        field: Field definition or its wire-format mapping

    Returns:
        Column clause without trailing separator
    """
    if not isinstance(field, FieldDefinition):
        field = FieldDefinition.from_dict(field)

    sql_parts = [str(part) for part in (field.name, field.type) if part not in (None, '')]

    if field.not_null:
        sql_parts.append("NOT NULL")

    if _has_default(field.default_value):
        sql_parts.append(f"DEFAULT {_render_default(field.default_value)}")

    return " ".join(sql_parts)


def _as_table(table: TableLike, table_id: Optional[Any]) -> TableDefinition:
    fallback_name = '' if table_id is None else str(table_id)
    if isinstance(table, TableDefinition):
        if table.name or not fallback_name:
            return table
        return TableDefinition(name=fallback_name, fields=table.fields)
    if isinstance(table, Mapping):
        return TableDefinition.from_dict(table, fallback_name=fallback_name)
    return TableDefinition(name=fallback_name)


def _has_default(value: Any) -> bool:
    return value is not None and value != ''


def _render_default(value: Any) -> str:
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    return str(value)
