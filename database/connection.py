"""
Database connection management.
Handles per-request connections, initialization, and teardown.
"""

import sqlite3
from flask import g, current_app


def get_db():
    """
    Get the request-scoped database connection with row factory.

    The connection lives on ``flask.g`` and is closed by the app-context
    teardown registered in app.py.

    Returns:
        sqlite3.Connection: Database connection object
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/hostal.db')
        g.db = sqlite3.connect(
            db_path,
            detect_types=sqlite3.PARSE_DECLTYPES,
            # Transactions are opened explicitly (BEGIN IMMEDIATE for bookings)
            isolation_level=None
        )
        g.db.row_factory = sqlite3.Row
        # Enable foreign key constraints
        g.db.execute('PRAGMA foreign_keys = ON')
        # Wait for a competing writer instead of failing immediately
        g.db.execute('PRAGMA busy_timeout = 5000')
        if db_path != ':memory:':
            # Enable WAL mode for better concurrency
            g.db.execute('PRAGMA journal_mode = WAL')
    return g.db


def close_db(e=None):
    """
    Close database connection.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    db = g.pop('db', None)
    if db is not None:
        if db.in_transaction:
            db.rollback()
        db.close()


def init_db():
    """
    Initialize database: drop existing tables, create new schema, insert seed data.
    WARNING: This will delete all existing data!
    """
    from database.schema import drop_tables, create_tables, create_indexes
    from database.seed import seed_database

    db = get_db()

    db.execute('BEGIN')
    try:
        # Drop existing tables (in reverse order of dependencies)
        drop_tables(db)

        # Create all tables
        create_tables(db)

        # Create indexes
        create_indexes(db)

        # Insert seed data
        seed_database(db)

        db.commit()
    except Exception:
        db.rollback()
        raise

    current_app.logger.info('Database initialized at %s', current_app.config.get('DATABASE_PATH'))
