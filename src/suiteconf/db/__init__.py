"""Database drivers for seeding and cleaning test databases."""

from suiteconf.db.dialects import (
    DRIVERS,
    Dialect,
    MsSql,
    MySql,
    Oci,
    Oracle,
    PostgreSql,
    Sqlite,
    SqlSrv,
    create,
    dialect_for,
)
from suiteconf.db.driver import Db
from suiteconf.db.dsn import get_provider, parse_dsn

__all__ = [
    "Db",
    "Dialect",
    "DRIVERS",
    "create",
    "dialect_for",
    "get_provider",
    "parse_dsn",
    # Variants
    "Sqlite",
    "MySql",
    "PostgreSql",
    "MsSql",
    "SqlSrv",
    "Oracle",
    "Oci",
]
