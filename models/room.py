"""
Room inventory data access functions.
Handles room queries, the maintenance flag, and occupancy statistics.

Occupancy is never stored on a room; statistics derive it from ACTIVE
reservations at the requested instant.
"""

from itertools import combinations

from database import get_db
from utils.datetime_helpers import TimeWindow, overlaps, to_utc_iso
from utils.errors import NotFoundError, ValidationError
from utils.events import ROOM_STATUS_UPDATED
from .occupancy import is_occupied_at
from .reservation_queries import (
    get_room_reservations, get_active_reservations_by_room, serialize_reservation
)


ROOM_TYPES = ('HALF_BED', 'TWO_BEDS', 'DOUBLE')

ROOM_TYPE_DISPLAY_NAMES = {
    'HALF_BED': 'Plaza y media',
    'TWO_BEDS': 'Dos plazas',
    'DOUBLE': 'Doble'
}


def _row_to_room(row) -> dict:
    room = dict(row)
    room['is_available'] = bool(room['is_available'])
    return room


def serialize_room(room: dict) -> dict:
    """Build the JSON shape of a room."""
    data = {
        'id': room['id'],
        'number': room['number'],
        'type': room['type'],
        'type_name': ROOM_TYPE_DISPLAY_NAMES.get(room['type'], room['type']),
        'price': room['price'],
        'is_available': room['is_available']
    }
    if 'reservations' in room:
        data['reservations'] = [serialize_reservation(r) for r in room['reservations']]
    return data


# =============================================================================
# READ
# =============================================================================

def get_all_rooms() -> list:
    """
    Get all rooms ordered by number.

    Returns:
        List of room dicts
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM rooms ORDER BY number')
    return [_row_to_room(row) for row in cursor.fetchall()]


def get_room_by_id(room_id: int, include_reservations: bool = False, cursor=None) -> dict:
    """
    Get room by ID.

    Args:
        room_id: Room ID
        include_reservations: Attach every reservation of the room (any status)
        cursor: Active transaction cursor (optional)

    Returns:
        Room dict or None if not found
    """
    cur = cursor or get_db().cursor()
    cur.execute('SELECT * FROM rooms WHERE id = ?', (room_id,))
    row = cur.fetchone()
    if not row:
        return None

    room = _row_to_room(row)
    if include_reservations:
        room['reservations'] = get_room_reservations(room_id, status=None, cursor=cur)
    return room


def get_room_by_number(number: int) -> dict:
    """Get room by its door number."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM rooms WHERE number = ?', (number,))
    row = cursor.fetchone()
    return _row_to_room(row) if row else None


# =============================================================================
# MAINTENANCE FLAG
# =============================================================================

def set_room_availability(room_id: int, is_available: bool, publisher=None) -> dict:
    """
    Toggle a room's maintenance flag.

    Reservations are untouched; availability queries pick up the change.

    Args:
        room_id: Room ID
        is_available: False puts the room under maintenance
        publisher: EventPublisher notified after the update (optional)

    Returns:
        dict: Updated room

    Raises:
        NotFoundError: If the room does not exist
        ValidationError: If is_available is not a boolean
    """
    if not isinstance(is_available, bool):
        raise ValidationError('El campo is_available debe ser booleano')

    db = get_db()
    cursor = db.cursor()

    cursor.execute('''
        UPDATE rooms
        SET is_available = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (1 if is_available else 0, room_id))
    db.commit()

    if cursor.rowcount == 0:
        raise NotFoundError('Habitación no encontrada')

    room = get_room_by_id(room_id)
    if publisher:
        publisher.publish(ROOM_STATUS_UPDATED, serialize_room(room), room_id=room_id)
    return room


# =============================================================================
# STATISTICS
# =============================================================================

def get_room_stats(now) -> dict:
    """
    Occupancy statistics at an instant.

    Args:
        now: Aware instant (usually the current time)

    Returns:
        dict: {
            'total': int,
            'occupied': int,       # covered by an ACTIVE reservation
            'available': int,      # not in maintenance and not occupied
            'maintenance': int,
            'occupancy_rate': float,  # occupied / total * 100, one decimal
            'by_type': {type: {'total', 'occupied', 'available'}}
        }
    """
    rooms = get_all_rooms()
    reservations_by_room = get_active_reservations_by_room()

    by_type = {
        room_type: {'total': 0, 'occupied': 0, 'available': 0}
        for room_type in ROOM_TYPES
    }
    occupied = available = maintenance = 0

    for room in rooms:
        is_occupied = is_occupied_at(reservations_by_room.get(room['id'], []), now)
        type_stats = by_type.setdefault(room['type'], {'total': 0, 'occupied': 0, 'available': 0})
        type_stats['total'] += 1

        if is_occupied:
            occupied += 1
            type_stats['occupied'] += 1
        elif room['is_available']:
            available += 1
            type_stats['available'] += 1

        if not room['is_available']:
            maintenance += 1

    total = len(rooms)
    occupancy_rate = round(occupied / total * 100, 1) if total else 0.0

    return {
        'total': total,
        'occupied': occupied,
        'available': available,
        'maintenance': maintenance,
        'occupancy_rate': occupancy_rate,
        'by_type': by_type
    }


# =============================================================================
# INTEGRITY
# =============================================================================

def find_overlapping_reservations() -> list:
    """
    Report ACTIVE reservation pairs on the same room that overlap.

    Creation prevents these; the report catches rows written around the
    booking flow (manual edits, imports).

    Returns:
        list: [{'room_id', 'room_number', 'first_id', 'second_id',
                'first_window', 'second_window'}]
    """
    issues = []
    for room_id, reservations in get_active_reservations_by_room().items():
        for first, second in combinations(reservations, 2):
            a = TimeWindow(first['check_in'], first['check_out'])
            b = TimeWindow(second['check_in'], second['check_out'])
            if overlaps(a, b):
                issues.append({
                    'room_id': room_id,
                    'room_number': first['room_number'],
                    'first_id': first['id'],
                    'second_id': second['id'],
                    'first_window': [to_utc_iso(a.start), to_utc_iso(a.end)],
                    'second_window': [to_utc_iso(b.start), to_utc_iso(b.end)]
                })
    return issues
