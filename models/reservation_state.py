"""
Reservation status management functions.
Handles status transitions and history.

ACTIVE is the only non-terminal status. Completion is always a manual
action: nothing flips a reservation to COMPLETED when its checkout passes.
"""

import sqlite3

from database import get_db
from utils.errors import ConflictError, InternalError, NotFoundError, ValidationError
from utils.events import RESERVATION_UPDATED, ROOM_UPDATED
from utils.validators import RESERVATION_STATUSES, validate_status
from .reservation_queries import get_reservation_by_id, serialize_reservation


# =============================================================================
# CONSTANTS
# =============================================================================

VALID_TRANSITIONS = {
    'ACTIVE': ('COMPLETED', 'CANCELLED'),
    'COMPLETED': (),
    'CANCELLED': ()
}

STATUS_DISPLAY_NAMES = {
    'ACTIVE': 'Activa',
    'COMPLETED': 'Completada',
    'CANCELLED': 'Cancelada'
}


# =============================================================================
# HISTORY
# =============================================================================

def record_status_history(cursor, reservation_id: int, status: str, action: str, notes: str = '') -> None:
    """Append a status history row on the caller's cursor."""
    cursor.execute('''
        INSERT INTO reservation_status_history
        (reservation_id, status, action, notes, created_at)
        VALUES (?, ?, ?, ?, CURRENT_TIMESTAMP)
    ''', (reservation_id, status, action, notes))


def get_status_history(reservation_id: int) -> list:
    """
    Get status change history for a reservation, oldest first.

    Raises:
        NotFoundError: If the reservation does not exist
    """
    if not get_reservation_by_id(reservation_id):
        raise NotFoundError('Reserva no encontrada')

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT status, action, notes, created_at
        FROM reservation_status_history
        WHERE reservation_id = ?
        ORDER BY id
    ''', (reservation_id,))
    return [dict(row) for row in cursor.fetchall()]


# =============================================================================
# STATE TRANSITIONS
# =============================================================================

def validate_status_transition(current: str, new: str) -> tuple:
    """
    Check a status change against VALID_TRANSITIONS.

    Returns:
        tuple: (is_valid, error_message)
    """
    if new in VALID_TRANSITIONS.get(current, ()):
        return True, ''
    return False, (
        f"No se puede cambiar una reserva {STATUS_DISPLAY_NAMES.get(current, current)} "
        f"a {STATUS_DISPLAY_NAMES.get(new, new)}"
    )


def update_reservation_status(reservation_id: int, status: str, notes: str = '',
                              publisher=None) -> dict:
    """
    Move a reservation to COMPLETED or CANCELLED.

    Cancelled and completed reservations drop out of every occupancy and
    conflict check immediately, since those only consider ACTIVE rows.

    Args:
        reservation_id: Reservation ID
        status: New status
        notes: Optional history notes
        publisher: EventPublisher notified after commit (optional)

    Returns:
        dict: Updated reservation

    Raises:
        ValidationError: If status is not a known value
        NotFoundError: If the reservation does not exist
        ConflictError: If the transition is not allowed
        InternalError: If the store fails; the transaction is rolled back
    """
    if not validate_status(status):
        raise ValidationError(
            f"Estado inválido. Valores permitidos: {', '.join(RESERVATION_STATUSES)}"
        )

    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('BEGIN IMMEDIATE')

        reservation = get_reservation_by_id(reservation_id, cursor=cursor)
        if not reservation:
            raise NotFoundError('Reserva no encontrada')

        is_valid, error = validate_status_transition(reservation['status'], status)
        if not is_valid:
            raise ConflictError(error)

        cursor.execute('''
            UPDATE reservations
            SET status = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (status, reservation_id))

        record_status_history(cursor, reservation_id, status, 'changed', notes)

        db.commit()

    except sqlite3.Error as e:
        db.rollback()
        raise InternalError('Error al guardar la reserva', cause=e) from e
    except Exception:
        db.rollback()
        raise

    updated = get_reservation_by_id(reservation_id)

    if publisher:
        publisher.publish(RESERVATION_UPDATED, serialize_reservation(updated), room_id=updated['room_id'])
        publisher.publish(ROOM_UPDATED, {'room_id': updated['room_id']}, room_id=updated['room_id'])

    return updated


def cancel_reservation(reservation_id: int, notes: str = '', publisher=None) -> dict:
    """Shortcut for ACTIVE -> CANCELLED."""
    return update_reservation_status(reservation_id, 'CANCELLED', notes, publisher)


def complete_reservation(reservation_id: int, notes: str = '', publisher=None) -> dict:
    """Shortcut for ACTIVE -> COMPLETED."""
    return update_reservation_status(reservation_id, 'COMPLETED', notes, publisher)
