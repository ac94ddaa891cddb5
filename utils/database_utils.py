"""
==================================================
Database helpers for applying generated DDL.
==================================================

Builds SQLAlchemy engines from configuration and executes the statements
produced by sql.ddl against them. Generation stays pure; this module is the
only place that talks to a database.

Key Features:
    - Engine creation from config (DATABASE_URL or POSTGRES_* settings)
    - Transactional DDL application (all tables or none)
    - Connection health check

Example:
    >>> from sqlalchemy import create_engine
    >>> from utils.database_utils import apply_schema
    >>>
    >>> engine = create_engine('sqlite://')
    >>> apply_schema({'t': {'name': 't', 'fields': [{'name': 'id', 'type': 'INTEGER'}]}}, engine)
    ['CREATE TABLE t(\\nid INTEGER\\n);']
"""

import logging
from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.config import config
from sql.ddl import create_table_statement

logger = logging.getLogger(__name__)


class DatabaseConnectionError(Exception):
    """Exception raised when a database engine cannot be created or reached."""
    pass


class SchemaApplyError(Exception):
    """Exception raised when executing generated DDL fails.

    The surrounding transaction has been rolled back when this is raised.
    """
    pass


def create_sqlalchemy_engine(url: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Create SQLAlchemy engine for DDL application.

    Args:
        url: SQLAlchemy URL (defaults to config.get_connection_string())
        echo: Enable SQL statement logging

    Returns:
        Configured SQLAlchemy Engine

    Raises:
        DatabaseConnectionError: If the URL cannot be parsed or its driver
            is not installed
    """
    url = url or config.get_connection_string()
    try:
        return create_engine(url, echo=echo, pool_pre_ping=True)
    except (SQLAlchemyError, ImportError) as e:
        raise DatabaseConnectionError(f"Could not create engine: {e}") from e


def apply_schema(
    tables: Mapping[Any, Any],
    engine: Optional[Engine] = None
) -> List[str]:
    """
    Execute one CREATE TABLE statement per table inside a single transaction.

    Args:
        tables: Schema description (see sql.ddl.to_sql)
        engine: Target engine; a config-based engine is created and disposed
            when omitted

    Returns:
        The executed statements in order

    Raises:
        SchemaApplyError: If any statement fails; nothing is committed
    """
    statements = [
        create_table_statement(table, table_id=table_id)
        for table_id, table in tables.items()
    ]

    owns_engine = engine is None
    if owns_engine:
        engine = create_sqlalchemy_engine()

    logger.info(f"Applying {len(statements)} CREATE TABLE statement(s)")
    try:
        with engine.begin() as conn:
            for statement in statements:
                logger.debug(f"Executing:\n{statement}")
                # exec_driver_sql skips bind-parameter parsing of ':' in raw DDL
                conn.exec_driver_sql(statement)
    except SQLAlchemyError as e:
        logger.error(f"❌ Schema application failed: {e}")
        raise SchemaApplyError(f"Failed to apply schema: {e}") from e
    finally:
        if owns_engine:
            engine.dispose()

    logger.info(f"✅ Applied {len(statements)} table(s)")
    return statements


def verify_connection(engine: Optional[Engine] = None) -> Tuple[bool, str]:
    """
    Verify database connection and return status with details.

    Args:
        engine: Engine to check (defaults to a config-based engine)

    Returns:
        Tuple of (success, message)

    Example:
        >>> success, message = verify_connection()
        >>> if not success:
        ...     print(message)
    """
    owns_engine = engine is None
    try:
        if owns_engine:
            engine = create_sqlalchemy_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, f"Connected to {engine.url.render_as_string(hide_password=True)}"
    except (SQLAlchemyError, DatabaseConnectionError) as e:
        logger.debug(f"Database not available: {e}")
        return False, f"Connection failed: {e}"
    finally:
        if owns_engine and engine is not None:
            engine.dispose()
