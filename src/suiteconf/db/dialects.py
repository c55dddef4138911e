"""Dialect variants and the DSN-prefix driver factory."""

from enum import Enum
from typing import Any, Optional

from sqlalchemy.engine import URL

from suiteconf.db.driver import Db
from suiteconf.db.dsn import build_url, get_provider, parse_dsn


class Sqlite(Db):
    def url(self) -> URL:
        # sqlite:/path/to/db.sqlite or sqlite::memory:
        path = self.dsn.partition(":")[2]
        if path in ("", ":memory:"):
            return URL.create("sqlite")
        return URL.create("sqlite", database=path)


class MySql(Db):
    paramstyle = "format"

    def url(self) -> URL:
        return build_url("mysql+pymysql", parse_dsn(self.dsn), self.user, self.password)

    def get_quoted_name(self, name: str) -> str:
        return "`" + name.replace(".", "`.`") + "`"

    def cleanup(self) -> None:
        self.sql_query("SET FOREIGN_KEY_CHECKS=0")
        try:
            super().cleanup()
        finally:
            self.sql_query("SET FOREIGN_KEY_CHECKS=1")


class PostgreSql(Db):
    paramstyle = "format"

    def url(self) -> URL:
        return build_url("postgresql+psycopg2", parse_dsn(self.dsn), self.user, self.password)

    def last_insert_id(self, table: str) -> Any:
        sequence = f"{table}_{self.get_primary_column(table)}_seq"
        return self.get_dbh().exec_driver_sql(f"SELECT currval('{sequence}')").scalar()


class MsSql(Db):
    paramstyle = "format"

    def url(self) -> URL:
        return build_url("mssql+pymssql", parse_dsn(self.dsn), self.user, self.password)

    def get_quoted_name(self, name: str) -> str:
        return "[" + name.replace(".", "].[") + "]"


class SqlSrv(MsSql):
    paramstyle = "qmark"

    def url(self) -> URL:
        return build_url(
            "mssql+pyodbc", parse_dsn(self.dsn), self.user, self.password, query_keys=("driver",)
        )


class Oracle(Db):
    paramstyle = "numeric"

    def url(self) -> URL:
        # oci:dbname=//localhost:1521/XE
        params = parse_dsn(self.dsn)
        dbname = params.get("dbname", "")
        if not dbname.startswith("//"):
            return URL.create(
                "oracle+oracledb", username=self.user, password=self.password, database=dbname
            )
        hostport, _, service = dbname[2:].partition("/")
        host, _, port = hostport.partition(":")
        return URL.create(
            "oracle+oracledb",
            username=self.user,
            password=self.password,
            host=host or None,
            port=int(port) if port else None,
            query={"service_name": service} if service else {},
        )


class Oci(Oracle):
    pass


class Dialect(Enum):
    """DSN prefixes with a dedicated driver."""

    SQLITE = "sqlite"
    MYSQL = "mysql"
    PGSQL = "pgsql"
    MSSQL = "mssql"
    ORACLE = "oracle"
    SQLSRV = "sqlsrv"
    OCI = "oci"


DRIVERS: dict[Dialect, type[Db]] = {
    Dialect.SQLITE: Sqlite,
    Dialect.MYSQL: MySql,
    Dialect.PGSQL: PostgreSql,
    Dialect.MSSQL: MsSql,
    Dialect.ORACLE: Oracle,
    Dialect.SQLSRV: SqlSrv,
    Dialect.OCI: Oci,
}


def dialect_for(dsn: str) -> Optional[Dialect]:
    """Dialect for the DSN prefix, None when it has no dedicated driver."""
    try:
        return Dialect(get_provider(dsn))
    except ValueError:
        return None


def create(dsn: str, user: Optional[str] = None, password: Optional[str] = None) -> Db:
    """Pick the driver for a DSN by its prefix; unknown prefixes get the generic Db."""
    dialect = dialect_for(dsn)
    driver_cls = DRIVERS[dialect] if dialect is not None else Db
    return driver_cls(dsn, user, password)
