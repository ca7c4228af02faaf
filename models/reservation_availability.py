"""
Room availability, checkout suggestions, and conflict checking.

Every function loads ACTIVE reservations fresh and hands them to the pure
evaluators in models.occupancy; nothing here caches occupancy.
"""

from datetime import datetime

from database import get_db
from utils.datetime_helpers import get_now, get_timezone, to_utc_iso
from utils.errors import NotFoundError
from .occupancy import evaluate_room_availability, find_conflicts, suggest_checkout
from .reservation_queries import (
    get_active_reservations_by_room, get_room_reservations, row_to_reservation,
    serialize_reservation
)
from .room import get_all_rooms, get_room_by_id, serialize_room


REASON_MESSAGES = {
    'maintenance': 'En mantenimiento',
    'occupied': 'Ocupada en ese horario',
    'available': 'Disponible'
}


def _serialize_info(info: dict) -> dict:
    if not info:
        return None
    return {
        'type': info['type'],
        'time': to_utc_iso(info['time']),
        'time_display': info['time_display']
    }


def _room_availability(room: dict, reservations: list, instant: datetime, tz) -> dict:
    """Evaluate one room and build its JSON-ready result."""
    evaluation = evaluate_room_availability(room, reservations, instant, tz)

    result = serialize_room(room)
    result.update({
        'is_occupied': evaluation['is_occupied'],
        'available_at': evaluation['available_at'],
        'reason': evaluation['reason'],
        'reason_message': REASON_MESSAGES[evaluation['reason']],
        'additional_info': _serialize_info(evaluation['additional_info']),
        'current_reservation': serialize_reservation(evaluation['current_reservation']),
        'next_reservation_id': (
            evaluation['next_reservation']['id'] if evaluation['next_reservation'] else None
        )
    })
    return result


# =============================================================================
# AVAILABILITY QUERIES
# =============================================================================

def get_availability_at(instant: datetime) -> list:
    """
    Availability of every room at an instant.

    Args:
        instant: Aware target instant

    Returns:
        list: Room dicts ordered by number, each with 'available_at',
              'is_occupied', 'reason', 'reason_message', 'additional_info'
    """
    tz = get_timezone()
    reservations_by_room = get_active_reservations_by_room()

    return [
        _room_availability(room, reservations_by_room.get(room['id'], []), instant, tz)
        for room in get_all_rooms()
    ]


def list_rooms_with_occupancy() -> list:
    """Availability of every room right now (live dashboard)."""
    return get_availability_at(get_now())


def get_room_availability_at(room_id: int, instant: datetime) -> dict:
    """
    Availability of a single room at an instant.

    Raises:
        NotFoundError: If the room does not exist
    """
    room = get_room_by_id(room_id)
    if not room:
        raise NotFoundError('Habitación no encontrada')

    reservations = get_room_reservations(room_id)
    return _room_availability(room, reservations, instant, get_timezone())


# =============================================================================
# CHECKOUT SUGGESTION
# =============================================================================

def get_suggested_checkout(room_id: int, check_in: datetime, cursor=None) -> dict:
    """
    Suggest a checkout for a room and candidate check-in.

    Backs off one minute before the nearest future ACTIVE reservation, or
    applies the standard 12:59 rule when there is none. Advisory only.

    Args:
        room_id: Room ID
        check_in: Aware candidate check-in
        cursor: Active transaction cursor (optional)

    Returns:
        dict: {
            'room': dict,
            'suggested_checkout': datetime,
            'reason': str,
            'next_reservation_id': int or None
        }

    Raises:
        NotFoundError: If the room does not exist
    """
    cur = cursor or get_db().cursor()

    room = get_room_by_id(room_id, cursor=cur)
    if not room:
        raise NotFoundError('Habitación no encontrada')

    reservations = get_room_reservations(room_id, cursor=cur)
    suggestion = suggest_checkout(reservations, check_in, get_timezone())

    return {
        'room': room,
        'suggested_checkout': suggestion['suggested_checkout'],
        'reason': suggestion['reason'],
        'next_reservation_id': (
            suggestion['next_reservation']['id'] if suggestion['next_reservation'] else None
        )
    }


# =============================================================================
# CONFLICT CHECK
# =============================================================================

def check_reservation_conflict(room_id: int, check_in: datetime, check_out: datetime,
                               cursor=None) -> tuple:
    """
    Decide whether [check_in, check_out) can be booked on a room.

    Run it on the same transaction cursor as the insert so a concurrent
    booking cannot slip in between check and write.

    Args:
        room_id: Room ID
        check_in: Aware check-in (inclusive)
        check_out: Aware checkout (exclusive)
        cursor: Active transaction cursor (optional)

    Returns:
        tuple: (acceptable: bool, reason: str or None, conflicting_ids: list)

    Raises:
        NotFoundError: If the room does not exist
    """
    cur = cursor or get_db().cursor()

    room = get_room_by_id(room_id, cursor=cur)
    if not room:
        raise NotFoundError('Habitación no encontrada')

    if not room['is_available']:
        return False, 'La habitación está en mantenimiento', []

    # Only candidates that can overlap: existing.check_in < check_out AND check_in < existing.check_out
    cur.execute('''
        SELECT id, room_id, check_in, check_out, status
        FROM reservations
        WHERE room_id = ? AND status = 'ACTIVE'
          AND check_in < ? AND check_out > ?
    ''', (room_id, to_utc_iso(check_out), to_utc_iso(check_in)))

    candidates = [row_to_reservation(row) for row in cur.fetchall()]
    conflicts = find_conflicts(candidates, check_in, check_out)

    if conflicts:
        return False, 'La habitación ya tiene una reserva en ese horario', [r['id'] for r in conflicts]

    return True, None, []
