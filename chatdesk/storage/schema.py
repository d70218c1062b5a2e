"""
Relational schema for a future persistent store.

Declares the users, messages and admin_status tables with the same fields
as the in-memory records. Not used by the running server.
"""

import sqlite3
from typing import List

from ..models import ADMIN_STATUS_ID


USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    password TEXT NOT NULL UNIQUE,
    is_admin BOOLEAN NOT NULL DEFAULT 0,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

MESSAGES_TABLE = """
CREATE TABLE IF NOT EXISTS messages (
    id TEXT PRIMARY KEY,
    sender_id TEXT NOT NULL REFERENCES users(id),
    receiver_id TEXT NOT NULL REFERENCES users(id),
    content TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

ADMIN_STATUS_TABLE = f"""
CREATE TABLE IF NOT EXISTS admin_status (
    id TEXT PRIMARY KEY DEFAULT '{ADMIN_STATUS_ID}',
    status TEXT NOT NULL DEFAULT 'available' CHECK (status IN ('available', 'busy')),
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

TABLES: List[str] = [USERS_TABLE, MESSAGES_TABLE, ADMIN_STATUS_TABLE]


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all tables if they do not exist yet"""
    with conn:
        for ddl in TABLES:
            conn.execute(ddl)
