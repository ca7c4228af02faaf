"""
Database tests.
Tests database initialization and data integrity.
"""

import sqlite3

import pytest

from database import get_db


def test_database_tables(app):
    """Test that all required tables exist."""
    with app.app_context():
        cursor = get_db().cursor()
        cursor.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
        tables = [row[0] for row in cursor.fetchall()]

        for table in ('rooms', 'clients', 'reservations', 'reservation_status_history'):
            assert table in tables, f"Table {table} should exist"


def test_seed_rooms(app):
    """Test the seeded room inventory."""
    with app.app_context():
        cursor = get_db().cursor()

        cursor.execute('SELECT type, COUNT(*), MIN(price) FROM rooms GROUP BY type')
        by_type = {row[0]: (row[1], row[2]) for row in cursor.fetchall()}

        assert by_type == {
            'HALF_BED': (13, 20.0),
            'TWO_BEDS': (5, 25.0),
            'DOUBLE': (1, 40.0)
        }

        cursor.execute('SELECT MIN(number), MAX(number), SUM(is_available) FROM rooms')
        assert tuple(cursor.fetchone()) == (1, 19, 19)


def test_seed_clients(app):
    """Test the seeded sample clients."""
    with app.app_context():
        cursor = get_db().cursor()
        cursor.execute('SELECT dni FROM clients ORDER BY dni')
        assert [row[0] for row in cursor.fetchall()] == ['11223344', '12345678', '87654321']


def test_checkout_after_checkin_constraint(app):
    """Rows written around the booking flow still need check_out > check_in."""
    with app.app_context():
        db = get_db()

        with pytest.raises(sqlite3.IntegrityError):
            db.execute('''
                INSERT INTO reservations (room_id, client_id, check_in, check_out, total_price, status)
                VALUES (1, 1, '2024-01-01T15:00:00Z', '2024-01-01T15:00:00Z', 20.0, 'ACTIVE')
            ''')


def test_status_constraint(app):
    """Test that unknown statuses are rejected by the schema."""
    with app.app_context():
        db = get_db()

        with pytest.raises(sqlite3.IntegrityError):
            db.execute('''
                INSERT INTO reservations (room_id, client_id, check_in, check_out, total_price, status)
                VALUES (1, 1, '2024-01-01T15:00:00Z', '2024-01-01T18:00:00Z', 20.0, 'PENDING')
            ''')


def test_history_cascades(app, booking):
    """Deleting a reservation removes its status history."""
    with app.app_context():
        from models.reservation import create_reservation, delete_reservation

        reservation = create_reservation(booking())
        delete_reservation(reservation['id'])

        count = get_db().execute(
            'SELECT COUNT(*) FROM reservation_status_history WHERE reservation_id = ?',
            (reservation['id'],)
        ).fetchone()[0]
        assert count == 0


def test_init_db_resets(app, booking):
    """Re-initializing drops bookings and restores the seed data."""
    with app.app_context():
        from database import init_db
        from models.reservation import create_reservation

        create_reservation(booking())
        init_db()

        db = get_db()
        assert db.execute('SELECT COUNT(*) FROM reservations').fetchone()[0] == 0
        assert db.execute('SELECT COUNT(*) FROM rooms').fetchone()[0] == 19
