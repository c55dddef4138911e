"""PDO-style DSN parsing (``mysql:host=localhost;dbname=test``)."""

from typing import Optional

from sqlalchemy.engine import URL, make_url


def get_provider(dsn: str) -> str:
    """Scheme before the first colon, or "" when there is none."""
    provider, sep, _ = dsn.partition(":")
    return provider if sep else ""


def parse_dsn(dsn: str) -> dict[str, str]:
    """Split the ``key=value;key=value`` part of a DSN. Keys are lowercased."""
    _, _, body = dsn.partition(":")
    params: dict[str, str] = {}
    for part in body.split(";"):
        key, sep, value = part.partition("=")
        if sep and key.strip():
            params[key.strip().lower()] = value.strip()
    return params


def build_url(
    drivername: str,
    params: dict[str, str],
    user: Optional[str] = None,
    password: Optional[str] = None,
    query_keys: tuple[str, ...] = ("charset", "unix_socket"),
) -> URL:
    """SQLAlchemy URL from parsed DSN params (host, port, dbname + query keys)."""
    host = params.get("host") or params.get("server")
    port = params.get("port")
    # sqlsrv style: Server=localhost,1433
    if host and "," in host and not port:
        host, port = host.split(",", 1)
    database = params.get("dbname") or params.get("database")
    query = {key: params[key] for key in query_keys if key in params}
    return URL.create(
        drivername,
        username=user or None,
        password=password or None,
        host=host or None,
        port=int(port) if port else None,
        database=database or None,
        query=query,
    )


def passthrough_url(dsn: str, user: Optional[str] = None, password: Optional[str] = None) -> URL:
    """Treat a DSN SQLAlchemy already understands as a URL, adding credentials."""
    url = make_url(dsn)
    if user:
        url = url.set(username=user)
    if password:
        url = url.set(password=password)
    return url
