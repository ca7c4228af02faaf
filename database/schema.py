"""
Database schema definitions.
Table creation, indexes, and structure management.

Instants (check_in, check_out) are stored as UTC text 'YYYY-MM-DDTHH:MM:SSZ',
so string comparison in SQL follows time order.
"""


def drop_tables(db):
    """Drop all existing tables, children first."""
    tables = [
        'reservation_status_history',
        'reservations',
        'clients',
        'rooms'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')


def create_tables(db):
    """Create all database tables."""

    # 1. Room inventory (occupancy is never stored here)
    db.execute('''
        CREATE TABLE rooms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            number INTEGER UNIQUE NOT NULL CHECK (number > 0),
            type TEXT NOT NULL CHECK (type IN ('HALF_BED', 'TWO_BEDS', 'DOUBLE')),
            price REAL NOT NULL CHECK (price >= 0),
            is_available INTEGER NOT NULL DEFAULT 1,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 2. Clients (DNI is the natural key)
    db.execute('''
        CREATE TABLE clients (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            dni TEXT UNIQUE NOT NULL,
            origin TEXT NOT NULL,
            occupation TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 3. Reservations
    db.execute('''
        CREATE TABLE reservations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            room_id INTEGER NOT NULL REFERENCES rooms(id),
            client_id INTEGER NOT NULL REFERENCES clients(id),
            check_in TEXT NOT NULL,
            check_out TEXT NOT NULL,
            total_price REAL NOT NULL,
            status TEXT NOT NULL DEFAULT 'ACTIVE'
                CHECK (status IN ('ACTIVE', 'COMPLETED', 'CANCELLED')),
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
            CHECK (check_out > check_in)
        )
    ''')

    # 4. Status history
    db.execute('''
        CREATE TABLE reservation_status_history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            reservation_id INTEGER NOT NULL REFERENCES reservations(id) ON DELETE CASCADE,
            status TEXT NOT NULL,
            action TEXT NOT NULL,
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create indexes for the common lookups."""
    db.execute('CREATE INDEX idx_reservations_room_status ON reservations(room_id, status, check_in)')
    db.execute('CREATE INDEX idx_reservations_client ON reservations(client_id)')
    db.execute('CREATE INDEX idx_status_history_reservation ON reservation_status_history(reservation_id)')
