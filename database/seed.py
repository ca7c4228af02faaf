"""
Database seed data.
Initial data population for fresh database installations.
"""

# (type, count, price per stay)
ROOM_INVENTORY = [
    ('HALF_BED', 13, 20.0),
    ('TWO_BEDS', 5, 25.0),
    ('DOUBLE', 1, 40.0),
]

SAMPLE_CLIENTS = [
    ('Juan Pérez', '12345678', 'Lima', 'Estudiante'),
    ('María García', '87654321', 'Arequipa', 'Comerciante'),
    ('Carlos López', '11223344', 'Trujillo', None),
]


def seed_database(db):
    """Insert initial seed data."""

    # 1. Rooms, numbered consecutively from 1
    number = 1
    for room_type, count, price in ROOM_INVENTORY:
        for _ in range(count):
            db.execute('''
                INSERT INTO rooms (number, type, price, is_available)
                VALUES (?, ?, ?, 1)
            ''', (number, room_type, price))
            number += 1

    # 2. Sample clients
    for name, dni, origin, occupation in SAMPLE_CLIENTS:
        db.execute('''
            INSERT INTO clients (name, dni, origin, occupation)
            VALUES (?, ?, ?, ?)
        ''', (name, dni, origin, occupation))
