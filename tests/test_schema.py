import sqlite3

import pytest

from chatdesk.storage.schema import create_schema


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.execute("PRAGMA foreign_keys = ON")
    create_schema(connection)
    yield connection
    connection.close()


def test_tables_created(conn):
    names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert {"users", "messages", "admin_status"} <= names


def test_create_schema_is_idempotent(conn):
    create_schema(conn)


def test_password_is_unique(conn):
    conn.execute("INSERT INTO users (id, name, password) VALUES ('1', 'A', '7777')")
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO users (id, name, password) VALUES ('2', 'B', '7777')")


def test_message_references_users(conn):
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO messages (id, sender_id, receiver_id, content) VALUES ('m', 'x', 'y', 'hi')")


def test_admin_status_defaults_and_enum(conn):
    conn.execute("INSERT INTO admin_status DEFAULT VALUES")
    row = conn.execute("SELECT id, status FROM admin_status").fetchone()
    assert row == ("admin_status", "available")
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("UPDATE admin_status SET status = 'away'")
