"""
===========================================================
Schema description models for DDL generation
===========================================================

Typed representation of the schema description consumed by
``sql.ddl.to_sql``. The wire format is a plain mapping using camelCase keys:

    {
        'users': {
            'name': 'users',
            'fields': [
                {'name': 'id', 'type': 'INTEGER', 'primaryKey': True},
                {'name': 'email', 'type': 'TEXT', 'unique': True, 'notNull': True},
            ],
        },
    }

Models:
    ForeignKeyReference: Target of a foreign key (table and field)
    FieldDefinition: One column with its constraints
    TableDefinition: Named table holding an ordered list of fields

``from_dict`` never validates: missing keys fall back to the defaults
returned by ``defaults()`` and unknown keys are ignored.

Example:
    >>> from models.schema_models import FieldDefinition, TableDefinition
    >>>
    >>> table = TableDefinition(
    ...     name='users',
    ...     fields=[FieldDefinition(name='id', type='INTEGER', primary_key=True)]
    ... )
    >>> table.to_dict()['fields'][0]['primaryKey']
    True
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

# Older schema documents spell the nullability flag with this typo
LEGACY_NOT_NULL_KEY = 'notNUll'

FIELD_CONTAINER_TYPES = (list, tuple)


def _as_text(value: Any) -> str:
    """Coerce an identifier-like value to str; None and '' become ''."""
    if value is None or value == '':
        return ''
    return str(value)


@dataclass
class ForeignKeyReference:
    """Reference from a column to a field of another table.

    Attributes:
        table_name: Referenced table
        field_name: Referenced column in that table
    """

    table_name: str = ''
    field_name: str = ''

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ForeignKeyReference':
        return cls(
            table_name=_as_text(data.get('tableName')),
            field_name=_as_text(data.get('fieldName')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'tableName': self.table_name, 'fieldName': self.field_name}


@dataclass
class FieldDefinition:
    """Column definition with its constraints.

    Attributes:
        name: Column name (emitted unescaped)
        type: Raw SQL type token, e.g. 'INTEGER' or 'VARCHAR(255)'
        primary_key: Column is the table's primary key
        unique: Column takes part in the table's UNIQUE clause
        not_null: Emit NOT NULL
        default_value: Raw SQL literal for DEFAULT, None for no default
        check_condition: Raw SQL fragment appended to the column name in CHECK
        foreign_key: Optional reference to another table's field
    """

    name: str = ''
    type: str = ''
    primary_key: bool = False
    unique: bool = False
    not_null: bool = False
    default_value: Optional[Any] = None
    check_condition: Optional[str] = None
    foreign_key: Optional[ForeignKeyReference] = None

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        """Return the wire-format dict of a blank field."""
        return cls().to_dict()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FieldDefinition':
        """Build a field from its wire-format mapping.

        Args:
            data: Field mapping with camelCase keys

        Returns:
            FieldDefinition with absent keys set to their defaults
        """
        foreign_key = data.get('foreignKey')
        if isinstance(foreign_key, Mapping) and foreign_key:
            foreign_key = ForeignKeyReference.from_dict(foreign_key)
        else:
            foreign_key = None

        return cls(
            name=_as_text(data.get('name')),
            type=_as_text(data.get('type')),
            primary_key=bool(data.get('primaryKey')),
            unique=bool(data.get('unique')),
            not_null=bool(data.get('notNull') or data.get(LEGACY_NOT_NULL_KEY)),
            default_value=data.get('defaultValue'),
            check_condition=data.get('checkCondition') or None,
            foreign_key=foreign_key,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': self.type,
            'primaryKey': self.primary_key,
            'unique': self.unique,
            'notNull': self.not_null,
            'defaultValue': self.default_value,
            'checkCondition': self.check_condition,
            'foreignKey': self.foreign_key.to_dict() if self.foreign_key else None,
        }


@dataclass
class TableDefinition:
    """Named table with an ordered list of fields.

    Attributes:
        name: Table name (emitted unescaped)
        fields: Columns in declaration order
    """

    name: str = ''
    fields: List[FieldDefinition] = field(default_factory=list)

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        """Return the wire-format dict of an empty table."""
        return cls().to_dict()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], fallback_name: str = '') -> 'TableDefinition':
        """Build a table from its wire-format mapping.

        ``fields`` may be a list or a mapping; for a mapping its values are
        used in iteration order. Any other value means no fields. Entries
        that are already FieldDefinition instances are kept as they are;
        entries that are neither those nor mappings are skipped.

        Args:
            data: Table mapping with 'name' and 'fields'
            fallback_name: Name used when the mapping has none

        Returns:
            TableDefinition
        """
        raw_fields = data.get('fields')
        if isinstance(raw_fields, Mapping):
            raw_fields = list(raw_fields.values())
        elif not isinstance(raw_fields, FIELD_CONTAINER_TYPES):
            raw_fields = []

        fields = []
        for raw in raw_fields:
            if isinstance(raw, FieldDefinition):
                fields.append(raw)
            elif isinstance(raw, Mapping):
                fields.append(FieldDefinition.from_dict(raw))

        return cls(name=_as_text(data.get('name')) or fallback_name, fields=fields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'fields': [f.to_dict() for f in self.fields],
        }
