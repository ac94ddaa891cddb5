"""
Shared pytest configuration and fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path to enable importing project modules
# This allows tests to import from 'core', 'sql', 'utils', etc. without installation
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests - isolated function-level tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interactions")
    config.addinivalue_line("markers", "smoke: Smoke tests - basic functionality checks")
    config.addinivalue_line("markers", "edge_case: Edge case tests - boundary conditions")
    config.addinivalue_line("markers", "regression: Regression tests - previously fixed bugs")
    config.addinivalue_line("markers", "system: System tests - full system behavior tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - complete workflow tests")


@pytest.fixture
def users_schema():
    """Two related tables covering every field attribute."""
    return {
        'users': {
            'name': 'users',
            'fields': [
                {'name': 'user_id', 'type': 'INTEGER', 'primaryKey': True},
                {'name': 'email', 'type': 'TEXT', 'unique': True, 'notNull': True},
                {'name': 'age', 'type': 'INTEGER', 'checkCondition': ' >= 0'},
            ],
        },
        'orders': {
            'name': 'orders',
            'fields': [
                {'name': 'order_id', 'type': 'INTEGER', 'primaryKey': True},
                {
                    'name': 'user_id',
                    'type': 'INTEGER',
                    'notNull': True,
                    'foreignKey': {'tableName': 'users', 'fieldName': 'user_id'},
                },
                {'name': 'status', 'type': 'TEXT', 'defaultValue': "'new'"},
            ],
        },
    }
