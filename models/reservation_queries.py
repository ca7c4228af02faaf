"""
Reservation queries: reading, listing, and row conversion.
"""

from database import get_db
from utils.datetime_helpers import from_storage, to_utc_iso


RESERVATION_SELECT = '''
    SELECT r.*,
           c.name as client_name, c.dni as client_dni,
           c.origin as client_origin, c.occupation as client_occupation,
           rm.number as room_number, rm.type as room_type,
           rm.price as room_price, rm.is_available as room_is_available
    FROM reservations r
    JOIN clients c ON r.client_id = c.id
    JOIN rooms rm ON r.room_id = rm.id
'''


# =============================================================================
# CONVERSION
# =============================================================================

def row_to_reservation(row) -> dict:
    """Convert a reservation row to a dict with aware check_in/check_out."""
    reservation = dict(row)
    reservation['check_in'] = from_storage(reservation['check_in'])
    reservation['check_out'] = from_storage(reservation['check_out'])
    return reservation


def serialize_reservation(reservation: dict) -> dict:
    """
    Build the JSON shape of a reservation.

    Nested 'client' and 'room' are included when the reservation was loaded
    with RESERVATION_SELECT.
    """
    if reservation is None:
        return None

    data = {
        'id': reservation['id'],
        'room_id': reservation['room_id'],
        'client_id': reservation['client_id'],
        'check_in': to_utc_iso(reservation['check_in']),
        'check_out': to_utc_iso(reservation['check_out']),
        'total_price': reservation['total_price'],
        'status': reservation['status'],
        'created_at': reservation.get('created_at'),
        'updated_at': reservation.get('updated_at')
    }

    if 'client_dni' in reservation:
        data['client'] = {
            'id': reservation['client_id'],
            'name': reservation['client_name'],
            'dni': reservation['client_dni'],
            'origin': reservation['client_origin'],
            'occupation': reservation['client_occupation']
        }

    if 'room_number' in reservation:
        data['room'] = {
            'id': reservation['room_id'],
            'number': reservation['room_number'],
            'type': reservation['room_type'],
            'price': reservation['room_price'],
            'is_available': bool(reservation['room_is_available'])
        }

    return data


# =============================================================================
# READ
# =============================================================================

def get_reservation_by_id(reservation_id: int, cursor=None) -> dict:
    """
    Get reservation by ID with client and room data.

    Args:
        reservation_id: Reservation ID
        cursor: Active transaction cursor (optional)

    Returns:
        dict: Reservation or None
    """
    cur = cursor or get_db().cursor()
    cur.execute(RESERVATION_SELECT + ' WHERE r.id = ?', (reservation_id,))
    row = cur.fetchone()
    return row_to_reservation(row) if row else None


def get_all_reservations(status: str = None, room_id: int = None, client_id: int = None) -> list:
    """
    List reservations, newest first.

    Args:
        status: Filter by status (optional)
        room_id: Filter by room (optional)
        client_id: Filter by client (optional)

    Returns:
        list: Reservation dicts
    """
    db = get_db()
    cursor = db.cursor()

    query = RESERVATION_SELECT + ' WHERE 1=1'
    params = []

    if status:
        query += ' AND r.status = ?'
        params.append(status)

    if room_id:
        query += ' AND r.room_id = ?'
        params.append(room_id)

    if client_id:
        query += ' AND r.client_id = ?'
        params.append(client_id)

    query += ' ORDER BY r.created_at DESC, r.id DESC'

    cursor.execute(query, params)
    return [row_to_reservation(row) for row in cursor.fetchall()]


def get_room_reservations(room_id: int, status: str = 'ACTIVE', cursor=None) -> list:
    """
    Get a room's reservations ordered by check-in.

    Args:
        room_id: Room ID
        status: Status filter, None for all statuses
        cursor: Active transaction cursor (optional)

    Returns:
        list: Reservation dicts
    """
    cur = cursor or get_db().cursor()

    query = RESERVATION_SELECT + ' WHERE r.room_id = ?'
    params = [room_id]

    if status:
        query += ' AND r.status = ?'
        params.append(status)

    query += ' ORDER BY r.check_in'

    cur.execute(query, params)
    return [row_to_reservation(row) for row in cur.fetchall()]


def get_active_reservations_by_room() -> dict:
    """
    Group all ACTIVE reservations by room in a single query.

    Returns:
        dict: {room_id: [reservation, ...]}
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute(RESERVATION_SELECT + " WHERE r.status = 'ACTIVE' ORDER BY r.room_id, r.check_in")

    by_room = {}
    for row in cursor.fetchall():
        reservation = row_to_reservation(row)
        by_room.setdefault(reservation['room_id'], []).append(reservation)
    return by_room
