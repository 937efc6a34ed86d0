from sqlalchemy.pool import StaticPool


def test_get_engine_kwargs_sqlite_has_check_same_thread(monkeypatch):
    # Import lazily so monkeypatch can affect env usage deterministically.
    from focusflow.database import database as db

    kwargs = db.get_engine_kwargs("sqlite:///./focusflow.db")
    assert "connect_args" in kwargs
    assert kwargs["connect_args"]["check_same_thread"] is False
    # SQLite should not require pool sizing knobs.
    assert "pool_size" not in kwargs
    assert "max_overflow" not in kwargs
    assert "poolclass" not in kwargs
    assert kwargs["pool_pre_ping"] is True


def test_get_engine_kwargs_memory_sqlite_shares_one_connection():
    from focusflow.database import database as db

    kwargs = db.get_engine_kwargs("sqlite:///:memory:")
    assert kwargs["poolclass"] is StaticPool


def test_get_engine_kwargs_postgres_has_conservative_pooling(monkeypatch):
    from focusflow.database import database as db

    monkeypatch.setenv("DB_POOL_SIZE", "7")
    monkeypatch.setenv("DB_MAX_OVERFLOW", "3")
    monkeypatch.setenv("DB_POOL_TIMEOUT_SEC", "15")

    kwargs = db.get_engine_kwargs("postgresql+psycopg://u:p@localhost:5432/db")
    assert "connect_args" not in kwargs
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["pool_size"] == 7
    assert kwargs["max_overflow"] == 3
    assert kwargs["pool_timeout"] == 15


def test_debug_enables_echo(monkeypatch):
    from focusflow.database import database as db

    monkeypatch.setenv("DEBUG", "true")
    assert db.get_engine_kwargs("sqlite:///./focusflow.db")["echo"] is True


def test_sqlite_pragmas_listener_is_guarded():
    # Verify the helper used by the connect event guard behaves as expected.
    from focusflow.database import database as db

    assert db._is_sqlite_url("sqlite:///./focusflow.db") is True
    assert db._is_sqlite_url("postgresql+psycopg://u:p@localhost/db") is False


def test_sqlite_foreign_keys_enforced(tmp_path):
    """Deleting a user cascades to their sessions and interruptions."""
    from sqlalchemy import text
    from focusflow.database.database import Database

    database = Database(f"sqlite:///{tmp_path / 'cascade.db'}")
    database.init_schema()
    try:
        with database.engine.begin() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
            conn.execute(text(
                "INSERT INTO users (id, username, email, password_hash, preferences, created_at, updated_at) "
                "VALUES ('u1', 'alice', 'alice@example.com', 'x', '{}', '2024-01-01', '2024-01-01')"
            ))
            conn.execute(text(
                "INSERT INTO pomodoro_sessions (id, user_id, start_time, duration, type, completed) "
                "VALUES ('s1', 'u1', '2024-01-01', 25, 'work', 0)"
            ))
            conn.execute(text(
                "INSERT INTO session_interruptions (session_id, timestamp, reason) "
                "VALUES ('s1', '2024-01-01', 'phone')"
            ))
            conn.execute(text("DELETE FROM users WHERE id = 'u1'"))

            assert conn.execute(text("SELECT COUNT(*) FROM pomodoro_sessions")).scalar() == 0
            assert conn.execute(text("SELECT COUNT(*) FROM session_interruptions")).scalar() == 0
    finally:
        database.dispose()
