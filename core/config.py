"""
==========================================================
Configuration management for the structural data toolkit.
==========================================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration covers:
- Target database for applying generated DDL
- Recursion limits for structural operations (clone)
- Default logging level

Example:
    >>> from core.config import config
    >>>
    >>> # Database connection for DDL application
    >>> engine_url = config.get_connection_string()
    >>>
    >>> # Recursion limit used by utils.structures.clone
    >>> print(f"Max depth: {config.max_structure_depth}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


@dataclass
class DatabaseConfig:
    """Database configuration settings.

    Attributes:
        host: PostgreSQL server hostname or IP address
        port: PostgreSQL server port number
        user: Database username
        password: Database password
        database: Database receiving the generated tables
        url: Optional full SQLAlchemy URL overriding the fields above
    """

    host: str
    port: int
    user: str
    password: str
    database: str
    url: Optional[str] = None

    def get_connection_string(self) -> str:
        """Get SQLAlchemy connection string.

        Returns:
            The explicit URL if one was configured, otherwise a PostgreSQL
            connection string built from the individual settings
        """
        if self.url:
            return self.url
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class StructureConfig:
    """Limits for recursive structure operations.

    Attributes:
        max_depth: Deepest nesting level clone() will descend before failing
    """

    max_depth: int


@dataclass
class LoggingConfig:
    """Logging settings.

    Attributes:
        level: Default log level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    """

    level: str


class Config:
    """Centralized configuration manager.

    Attributes:
        db: DatabaseConfig instance with database connection settings
        structures: StructureConfig instance with recursion limits
        logging: LoggingConfig instance with log settings

    Example:
        >>> config = Config()
        >>> conn_str = config.get_connection_string()
        >>> depth = config.max_structure_depth
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            host=os.getenv('POSTGRES_HOST', 'localhost'),
            port=int(os.getenv('POSTGRES_PORT', '5432')),
            user=os.getenv('POSTGRES_USER', 'postgres'),
            password=os.getenv('POSTGRES_PASSWORD', ''),
            database=os.getenv('POSTGRES_DB', 'postgres'),
            url=os.getenv('DATABASE_URL') or None
        )

        self.structures = StructureConfig(
            max_depth=int(os.getenv('STRUCTURE_MAX_DEPTH', '500'))
        )

        self.logging = LoggingConfig(
            level=os.getenv('LOG_LEVEL', 'INFO').upper()
        )

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_name(self) -> str:
        """Get target database name."""
        return self.db.database

    @property
    def max_structure_depth(self) -> int:
        """Get the recursion limit for structure cloning."""
        return self.structures.max_depth

    @property
    def log_level(self) -> str:
        """Get the default log level name."""
        return self.logging.level

    def get_connection_string(self) -> str:
        """Get database connection string.

        Returns:
            SQLAlchemy-compatible connection string

        Example:
            >>> config = Config()
            >>> url = config.get_connection_string()
        """
        return self.db.get_connection_string()


# Global configuration instance
config = Config()
