"""
=======================================================================
Comprehensive pytest suite for sql/ddl.py
=======================================================================

Sections:
---------
1. Unit tests - column clauses and single tables
2. Integration tests - multi-table schemas and model input
3. Edge case tests - incomplete or unusual descriptors
4. Regression tests - accumulator reset between tables

Available markers:
------------------
unit, integration, edge_case, regression

How to Execute:
---------------
All tests:          pytest tests/tests_sql/test_ddl.py -v
"""

import pytest

from models.schema_models import (
    FieldDefinition,
    ForeignKeyReference,
    TableDefinition,
)
from sql.ddl import column_definition, create_table_statement, to_sql

# ===============
# 1. UNIT TESTS
# ===============


@pytest.mark.unit
def test_users_scenario():
    ddl = to_sql({
        'users': {
            'name': 'users',
            'fields': [
                {'name': 'id', 'type': 'INTEGER', 'primaryKey': True},
                {'name': 'email', 'type': 'TEXT', 'unique': True, 'notNull': True},
            ],
        },
    })

    lines = ddl.splitlines()
    assert lines[0] == 'CREATE TABLE users('
    assert 'id INTEGER,' in lines
    assert 'email TEXT NOT NULL,' in lines
    assert 'PRIMARY KEY (id),' in lines
    assert 'UNIQUE (email)' in lines
    assert ddl.rstrip().endswith(');')


@pytest.mark.unit
def test_exact_statement_layout():
    statement = create_table_statement({
        'name': 'users',
        'fields': [
            {'name': 'id', 'type': 'INTEGER', 'primaryKey': True},
            {'name': 'email', 'type': 'TEXT', 'unique': True, 'notNull': True},
        ],
    })

    assert statement == (
        "CREATE TABLE users(\n"
        "id INTEGER,\n"
        "email TEXT NOT NULL,\n"
        "PRIMARY KEY (id),\n"
        "UNIQUE (email)\n"
        ");"
    )


@pytest.mark.unit
@pytest.mark.parametrize('field, expected', [
    ({'name': 'id', 'type': 'INTEGER'}, 'id INTEGER'),
    ({'name': 'id', 'type': 'INTEGER', 'notNull': True}, 'id INTEGER NOT NULL'),
    ({'name': 'n', 'type': 'INT', 'defaultValue': 0}, 'n INT DEFAULT 0'),
    ({'name': 's', 'type': 'TEXT', 'defaultValue': "'x'", 'notNull': True}, "s TEXT NOT NULL DEFAULT 'x'"),
    ({'name': 'flag', 'type': 'BOOLEAN', 'defaultValue': False}, 'flag BOOLEAN DEFAULT FALSE'),
    ({'name': 's', 'type': 'TEXT', 'defaultValue': ''}, 's TEXT'),
])
def test_column_definition(field, expected):
    assert column_definition(field) == expected


@pytest.mark.unit
def test_column_definition_accepts_model():
    field = FieldDefinition(name='total', type='REAL', not_null=True, default_value=1.5)

    assert column_definition(field) == 'total REAL NOT NULL DEFAULT 1.5'


@pytest.mark.unit
def test_check_condition_follows_its_column():
    statement = create_table_statement({
        'name': 'people',
        'fields': [
            {'name': 'age', 'type': 'INTEGER', 'checkCondition': ' >= 0'},
            {'name': 'name', 'type': 'TEXT'},
        ],
    })

    assert statement.splitlines()[1:4] == [
        'age INTEGER,',
        'CHECK (age >= 0),',
        'name TEXT',
    ]


@pytest.mark.unit
def test_foreign_key_clause_names_referenced_field_on_both_sides():
    statement = create_table_statement({
        'name': 'orders',
        'fields': [
            {'name': 'user_id', 'type': 'INTEGER',
             'foreignKey': {'tableName': 'users', 'fieldName': 'id'}},
        ],
    })

    assert 'FOREIGN KEY (id) REFERENCES users(id)' in statement


@pytest.mark.unit
def test_unique_clause_lists_fields_in_order():
    statement = create_table_statement({
        'name': 't',
        'fields': [
            {'name': 'a', 'type': 'TEXT', 'unique': True},
            {'name': 'b', 'type': 'TEXT'},
            {'name': 'c', 'type': 'TEXT', 'unique': True},
        ],
    })

    assert 'UNIQUE (a, c)' in statement


@pytest.mark.unit
def test_trailing_clause_order(users_schema):
    statement = create_table_statement(users_schema['orders'])
    lines = statement.splitlines()

    assert lines[-3] == 'PRIMARY KEY (order_id),'
    assert lines[-2] == 'FOREIGN KEY (user_id) REFERENCES users(user_id)'
    assert lines[-1] == ');'


# ======================
# 2. INTEGRATION TESTS
# ======================

@pytest.mark.integration
def test_tables_emitted_in_iteration_order(users_schema):
    ddl = to_sql(users_schema)

    assert ddl.index('CREATE TABLE users(') < ddl.index('CREATE TABLE orders(')
    assert ddl.count('CREATE TABLE') == 2
    assert ddl.endswith(');\n')


@pytest.mark.integration
def test_model_and_dict_input_produce_same_ddl(users_schema):
    models = {
        key: TableDefinition.from_dict(table)
        for key, table in users_schema.items()
    }

    assert to_sql(models) == to_sql(users_schema)


@pytest.mark.integration
def test_model_with_foreign_key():
    table = TableDefinition(
        name='orders',
        fields=[
            FieldDefinition(name='id', type='INTEGER', primary_key=True),
            FieldDefinition(
                name='user_id',
                type='INTEGER',
                foreign_key=ForeignKeyReference(table_name='users', field_name='id'),
            ),
        ],
    )

    statement = create_table_statement(table)

    assert 'PRIMARY KEY (id)' in statement
    assert 'FOREIGN KEY (id) REFERENCES users(id)' in statement


# ========================
# 3. EDGE CASE TESTS
# ========================

@pytest.mark.edge_case
def test_empty_schema_produces_empty_text():
    assert to_sql({}) == ''


@pytest.mark.edge_case
def test_table_without_fields():
    assert create_table_statement({'name': 'empty', 'fields': []}) == 'CREATE TABLE empty(\n\n);'


@pytest.mark.edge_case
def test_missing_table_name_falls_back_to_identifier():
    ddl = to_sql({'audit': {'fields': [{'name': 'id', 'type': 'INTEGER'}]}})

    assert ddl.startswith('CREATE TABLE audit(')


@pytest.mark.edge_case
def test_model_without_name_falls_back_to_identifier():
    ddl = to_sql({'audit': TableDefinition(fields=[FieldDefinition(name='id', type='INTEGER')])})

    assert ddl.startswith('CREATE TABLE audit(')


@pytest.mark.edge_case
def test_malformed_descriptors_never_fail():
    ddl = to_sql({
        'a': {'name': 'a', 'fields': [{'name': 'x'}, 'garbage', None]},
        'b': None,
        'c': {'name': 'c', 'fields': [{'name': 'y', 'type': 'INT', 'foreignKey': {}}]},
    })

    assert 'CREATE TABLE a(\nx\n);' in ddl
    assert 'CREATE TABLE b(\n\n);' in ddl
    assert 'FOREIGN KEY' not in ddl


@pytest.mark.edge_case
@pytest.mark.parametrize('field, expected', [
    ({'name': 'x', 'foreignKey': 'users'}, 'CREATE TABLE t(\nx\n);'),
    ({'name': 'x', 'foreignKey': True}, 'CREATE TABLE t(\nx\n);'),
    ({'name': 'x', 'foreignKey': ['users', 'id']}, 'CREATE TABLE t(\nx\n);'),
    ({'name': 'x', 'type': 5}, 'CREATE TABLE t(\nx 5\n);'),
    ({'name': 7, 'type': 'INT', 'unique': True}, 'CREATE TABLE t(\n7 INT,\nUNIQUE (7)\n);'),
])
def test_wrongly_typed_field_attributes_never_fail(field, expected):
    assert to_sql({'t': {'name': 't', 'fields': [field]}}) == expected + '\n'


@pytest.mark.edge_case
@pytest.mark.parametrize('fields', [5, 'abc', True])
def test_non_collection_fields_mean_no_columns(fields):
    assert to_sql({'t': {'name': 't', 'fields': fields}}) == 'CREATE TABLE t(\n\n);\n'


@pytest.mark.edge_case
def test_foreign_key_without_table_is_ignored():
    statement = create_table_statement({
        'name': 't',
        'fields': [{'name': 'x', 'type': 'INT', 'foreignKey': {'fieldName': 'id'}}],
    })

    assert 'FOREIGN KEY' not in statement


@pytest.mark.edge_case
def test_fields_given_as_mapping():
    statement = create_table_statement({
        'name': 't',
        'fields': {
            '0': {'name': 'id', 'type': 'INTEGER'},
            '1': {'name': 'label', 'type': 'TEXT'},
        },
    })

    assert statement == 'CREATE TABLE t(\nid INTEGER,\nlabel TEXT\n);'


@pytest.mark.edge_case
def test_last_primary_key_wins():
    statement = create_table_statement({
        'name': 't',
        'fields': [
            {'name': 'a', 'type': 'INT', 'primaryKey': True},
            {'name': 'b', 'type': 'INT', 'primaryKey': True},
        ],
    })

    assert 'PRIMARY KEY (b)' in statement
    assert 'PRIMARY KEY (a)' not in statement


@pytest.mark.edge_case
def test_last_foreign_key_wins():
    statement = create_table_statement({
        'name': 't',
        'fields': [
            {'name': 'a_id', 'type': 'INT', 'foreignKey': {'tableName': 'a', 'fieldName': 'id'}},
            {'name': 'b_id', 'type': 'INT', 'foreignKey': {'tableName': 'b', 'fieldName': 'id'}},
        ],
    })

    assert statement.count('FOREIGN KEY') == 1
    assert 'FOREIGN KEY (id) REFERENCES b(id)' in statement


@pytest.mark.edge_case
def test_legacy_not_null_spelling():
    assert column_definition({'name': 'x', 'type': 'INT', 'notNUll': True}) == 'x INT NOT NULL'


@pytest.mark.edge_case
def test_identifiers_are_not_escaped():
    statement = create_table_statement({'name': 'weird name', 'fields': [{'name': 'a"b', 'type': 'INT'}]})

    assert statement.startswith('CREATE TABLE weird name(\na"b INT')


# ========================
# 4. REGRESSION TESTS
# ========================

@pytest.mark.regression
def test_primary_key_does_not_leak_to_next_table():
    ddl = to_sql({
        'first': {'name': 'first', 'fields': [{'name': 'id', 'type': 'INTEGER', 'primaryKey': True}]},
        'second': {'name': 'second', 'fields': [{'name': 'value', 'type': 'TEXT'}]},
    })

    second = ddl[ddl.index('CREATE TABLE second('):]
    assert ddl.count('PRIMARY KEY') == 1
    assert 'PRIMARY KEY' not in second


@pytest.mark.regression
def test_unique_and_foreign_key_do_not_leak_to_next_table(users_schema):
    users_schema['tail'] = {'name': 'tail', 'fields': [{'name': 'v', 'type': 'TEXT'}]}

    ddl = to_sql(users_schema)
    tail = ddl[ddl.index('CREATE TABLE tail('):]

    assert tail == 'CREATE TABLE tail(\nv TEXT\n);\n'


@pytest.mark.regression
def test_no_dangling_separators(users_schema):
    ddl = to_sql(users_schema)

    assert ',\n);' not in ddl
    assert '(\n,' not in ddl
