"""
=========================================================
Command-line entry point for schema-to-DDL generation.
=========================================================

Reads a JSON schema description, prints (or writes) the generated
CREATE TABLE statements, and optionally applies them to a database.

Usage:
    # Print DDL to stdout
    python main.py schema.json

    # Write DDL to a file
    python main.py schema.json --output schema.sql

    # Apply to the configured database (DATABASE_URL or POSTGRES_*)
    python main.py schema.json --apply

    # Apply to an explicit database
    python main.py schema.json --apply --database-url sqlite:///local.db

Example:
    >>> from main import load_schema
    >>> from sql.ddl import to_sql
    >>>
    >>> print(to_sql(load_schema('schema.json')))
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.logger import get_logger
from sql.ddl import to_sql
from utils.database_utils import (
    DatabaseConnectionError,
    SchemaApplyError,
    apply_schema,
    create_sqlalchemy_engine,
)

logger = get_logger(__name__)


class SchemaCliError(Exception):
    """Exception raised when the schema file cannot be loaded."""
    pass


def load_schema(path: str) -> Dict[str, Any]:
    """
    Load a schema description from a JSON file.

    Args:
        path: Path to a JSON file whose top level is an object of tables

    Returns:
        Schema description mapping, in file order

    Raises:
        SchemaCliError: If the file is missing, not valid JSON, or not an object
    """
    schema_path = Path(path)
    try:
        with schema_path.open(encoding='utf-8') as f:
            tables = json.load(f)
    except OSError as e:
        raise SchemaCliError(f"Cannot read schema file {schema_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaCliError(f"Invalid JSON in {schema_path}: {e}") from e

    if not isinstance(tables, dict):
        raise SchemaCliError(
            f"Schema file {schema_path} must contain a JSON object of tables"
        )

    logger.debug(f"Loaded {len(tables)} table(s) from {schema_path}")
    return tables


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command-line interface for DDL generation.

    Exit Codes:
        0: Success
        1: Error
        130: User interrupt (Ctrl+C)
    """
    parser = argparse.ArgumentParser(
        description="Generate CREATE TABLE statements from a JSON schema description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py schema.json
  python main.py schema.json --output schema.sql
  python main.py schema.json --apply --database-url sqlite:///local.db

Note:
  Generated SQL is not escaped. Only use trusted schema files.
        """
    )

    parser.add_argument(
        'schema',
        help='Path to the JSON schema description'
    )
    parser.add_argument(
        '--output', '-o',
        help='Write DDL to this file instead of stdout'
    )
    parser.add_argument(
        '--apply',
        action='store_true',
        help='Execute the DDL against the database'
    )
    parser.add_argument(
        '--database-url',
        help='SQLAlchemy URL for --apply (defaults to configuration)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        tables = load_schema(args.schema)
        ddl = to_sql(tables)

        if args.output:
            Path(args.output).write_text(ddl, encoding='utf-8')
            logger.info(f"Wrote DDL for {len(tables)} table(s) to {args.output}")
        else:
            sys.stdout.write(ddl)

        if args.apply:
            engine = create_sqlalchemy_engine(args.database_url)
            try:
                apply_schema(tables, engine)
            finally:
                engine.dispose()

        return 0

    except (SchemaCliError, DatabaseConnectionError, SchemaApplyError) as e:
        logger.error(f"❌ {e}")
        return 1
    except OSError as e:
        logger.error(f"❌ Cannot write output: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user")
        return 130


if __name__ == '__main__':
    sys.exit(main())
