"""Base database driver: statement builders and SQL script loading.

Connections go through SQLAlchemy and are opened lazily, so statement
builders work without a database driver installed.
"""

import re
from typing import Any, Iterable, Optional, Union

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import URL, Connection, CursorResult, Engine

from suiteconf.db.dsn import parse_dsn, passthrough_url

DEFAULT_DELIMITER = ";"

_DELIMITER_RE = re.compile(r"DELIMITER ([;$|\\]+)", re.IGNORECASE)
_COMMENT_RE = re.compile(r"^((--.*?)|(#))", re.DOTALL)


class Db:
    """Generic driver. Dialect variants override quoting, placeholders and URLs."""

    # DB-API paramstyle used by the builders: "qmark", "format" or "numeric"
    paramstyle = "qmark"

    def __init__(self, dsn: str, user: Optional[str] = None, password: Optional[str] = None):
        self.dsn = dsn
        self.user = user
        self.password = password
        self.sql_to_run: Optional[str] = None
        self.primary_columns: dict[str, str] = {}
        self._engine: Optional[Engine] = None
        self._dbh: Optional[Connection] = None
        self._last_insert_id: Any = None

    # Connection

    def url(self) -> Union[URL, str]:
        return passthrough_url(self.dsn, self.user, self.password)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(self.url())
        return self._engine

    def get_dbh(self) -> Connection:
        if self._dbh is None:
            self._dbh = self.engine.connect().execution_options(isolation_level="AUTOCOMMIT")
        return self._dbh

    def close(self) -> None:
        if self._dbh is not None:
            self._dbh.close()
            self._dbh = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def get_db(self) -> Optional[str]:
        """Database name from the DSN's ``dbname`` entry."""
        return parse_dsn(self.dsn).get("dbname")

    def cleanup(self) -> None:
        """Drop every table in the database."""
        dbh = self.get_dbh()
        metadata = MetaData()
        metadata.reflect(bind=dbh)
        metadata.drop_all(bind=dbh)

    # Script loading

    def load(self, sql: Union[str, Iterable[str]]) -> None:
        """Run a multi-statement script, honouring ``DELIMITER`` directives."""
        if isinstance(sql, str):
            sql = sql.splitlines()

        query = ""
        delimiter = DEFAULT_DELIMITER
        for line in sql:
            match = _DELIMITER_RE.search(line)
            if match:
                delimiter = match.group(1)
                continue

            if self._skip_line(line):
                continue

            query += "\n" + line.rstrip()

            if query.endswith(delimiter):
                self.sql_to_run = query[: -len(delimiter)]
                self.sql_query(self.sql_to_run)
                query = ""

    @staticmethod
    def _skip_line(line: str) -> bool:
        """Blank lines, lone semicolons and comments."""
        line = line.strip()
        return line == "" or line == ";" or bool(_COMMENT_RE.match(line))

    def sql_query(self, query: str) -> None:
        # no bind params, so a literal "%" reaches format-style drivers verbatim
        self.get_dbh().exec_driver_sql(query, execution_options={"no_parameters": True})

    # Statement builders

    def placeholder(self, position: int) -> str:
        """Bind marker for the 1-based parameter position."""
        if self.paramstyle == "format":
            return "%s"
        if self.paramstyle == "numeric":
            return f":{position}"
        return "?"

    def get_quoted_name(self, name: str) -> str:
        return '"' + name.replace(".", '"."') + '"'

    def insert(self, table_name: str, data: dict[str, Any]) -> str:
        columns = ", ".join(self.get_quoted_name(column) for column in data)
        values = ", ".join(self.placeholder(i) for i in range(1, len(data) + 1))
        return f"INSERT INTO {self.get_quoted_name(table_name)} ({columns}) VALUES ({values})"

    def select(self, column: str, table: str, criteria: dict[str, Any]) -> str:
        """Build a select. ``None`` criteria become IS NULL and are removed from criteria."""
        where = self.generate_where_clause(criteria)
        return f"select {column} from {self.get_quoted_name(table)} {where}"

    def generate_where_clause(self, criteria: dict[str, Any]) -> str:
        if not criteria:
            return ""

        params = []
        position = 0
        for key, value in list(criteria.items()):
            if value is None:
                params.append(f"{self.get_quoted_name(key)} IS NULL ")
                del criteria[key]
            else:
                position += 1
                params.append(f"{self.get_quoted_name(key)} = {self.placeholder(position)} ")

        return "WHERE " + "AND ".join(params)

    def delete_query(self, table: str, id: Any, primary_key: str = "id") -> None:
        query = (
            f"DELETE FROM {self.get_quoted_name(table)} "
            f"WHERE {self.get_quoted_name(primary_key)} = {self.placeholder(1)}"
        )
        self.execute_query(query, [id])

    def execute_query(self, query: str, params: Iterable[Any]) -> CursorResult:
        result = self.get_dbh().exec_driver_sql(query, tuple(params))
        self._last_insert_id = result.lastrowid
        return result

    def last_insert_id(self, table: str) -> Any:
        return self._last_insert_id

    # Primary keys

    def get_primary_column(self, table_name: str) -> str:
        # TODO: detect primary keys through sqlalchemy.inspect(); "id" is assumed for now
        return "id"

    def flush_primary_column_cache(self) -> bool:
        self.primary_columns = {}
        return not self.primary_columns
