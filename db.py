from psycopg2.pool import SimpleConnectionPool
from contextlib import contextmanager
from settings import settings
_pool: SimpleConnectionPool | None = None


def init_pool():
    """
    Initialize the PostgreSQL connection pool.
    Called lazily on first use by the postgres state backend.
    """
    global _pool
    if _pool is None:
        if not settings.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is not set.")
        _pool = SimpleConnectionPool(
            minconn=1,
            maxconn=10,
            dsn=settings.DATABASE_URL,
            connect_timeout=5,
        )


def close_pool():
    """
    Gracefully close all pooled connections.
    """
    global _pool
    if _pool:
        _pool.closeall()
        _pool = None


@contextmanager
def get_conn():
    """
    One invocation == one transaction.
    Commits on success, rolls back on error.
    """
    if _pool is None:
        init_pool()

    conn = _pool.getconn()

    try:
        with conn.cursor() as cur:
            cur.execute("SET statement_timeout = '5000ms';")
            cur.execute("SET idle_in_transaction_session_timeout = '5000ms';")
            cur.execute("SET application_name = 'ecopayout';")

        yield conn
        conn.commit()

    except Exception:
        conn.rollback()
        raise

    finally:
        _pool.putconn(conn)


def ping() -> None:
    with get_conn() as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
