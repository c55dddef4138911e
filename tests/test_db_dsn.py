"""Tests for suiteconf.db.dsn."""

from suiteconf.db.dsn import build_url, get_provider, parse_dsn, passthrough_url


class TestGetProvider:
    def test_prefix(self):
        assert get_provider("mysql:host=localhost;dbname=test") == "mysql"

    def test_sqlite_memory(self):
        assert get_provider("sqlite::memory:") == "sqlite"

    def test_no_colon(self):
        assert get_provider("nothing") == ""


class TestParseDsn:
    def test_pairs(self):
        assert parse_dsn("mysql:host=localhost;dbname=test") == {
            "host": "localhost",
            "dbname": "test",
        }

    def test_keys_lowercased_and_trimmed(self):
        assert parse_dsn("sqlsrv:Server=db ; Database=app;") == {"server": "db", "database": "app"}

    def test_value_keeps_equals(self):
        assert parse_dsn("odbc:dsn=a=b")["dsn"] == "a=b"

    def test_no_pairs(self):
        assert parse_dsn("sqlite:/tmp/db.sqlite") == {}


class TestBuildUrl:
    def test_full(self):
        url = build_url(
            "mysql+pymysql",
            {"host": "db", "port": "3307", "dbname": "app", "charset": "utf8mb4"},
            "root",
            "secret",
        )
        assert url.drivername == "mysql+pymysql"
        assert url.host == "db"
        assert url.port == 3307
        assert url.database == "app"
        assert url.username == "root"
        assert url.password == "secret"
        assert dict(url.query) == {"charset": "utf8mb4"}

    def test_server_with_port(self):
        url = build_url("mssql+pyodbc", {"server": "db,1433", "database": "app"})
        assert url.host == "db"
        assert url.port == 1433
        assert url.database == "app"

    def test_empty_credentials_dropped(self):
        url = build_url("postgresql+psycopg2", {"host": "db"}, "", "")
        assert url.username is None
        assert url.password is None

    def test_unlisted_keys_ignored(self):
        url = build_url("mysql+pymysql", {"host": "db", "timeout": "5"})
        assert dict(url.query) == {}


class TestPassthroughUrl:
    def test_adds_credentials(self):
        url = passthrough_url("postgresql://db/app", "user", "pw")
        assert url.username == "user"
        assert url.password == "pw"
        assert url.database == "app"

    def test_keeps_embedded_credentials(self):
        url = passthrough_url("postgresql://me:x@db/app")
        assert url.username == "me"
