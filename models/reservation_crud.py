"""
Reservation CRUD operations.
Handles create and delete for reservations.
"""

import sqlite3

from flask import current_app

from database import get_db
from utils.datetime_helpers import parse_instant, to_utc_iso
from utils.errors import ConflictError, InternalError, NotFoundError, ValidationError
from utils.events import RESERVATION_CREATED, RESERVATION_DELETED, ROOM_UPDATED
from utils.messages import get_message
from utils.validators import missing_fields, sanitize_input, validate_dni, validate_room_id
from .client import upsert_client_by_dni
from .reservation_availability import check_reservation_conflict, get_suggested_checkout
from .reservation_queries import get_reservation_by_id, serialize_reservation
from .reservation_state import record_status_history
from .room import get_room_by_id


REQUIRED_FIELDS = ('client_name', 'client_dni', 'client_origin', 'room_id', 'check_in')

FIELD_LABELS = {
    'client_name': 'El nombre del cliente es requerido',
    'client_dni': 'El DNI del cliente es requerido',
    'client_origin': 'La procedencia del cliente es requerida',
    'room_id': 'El ID de la habitación es requerido',
    'check_in': 'La fecha de check-in es requerida'
}


# =============================================================================
# VALIDATION
# =============================================================================

def validate_reservation_data(data: dict) -> dict:
    """
    Validate and normalize booking form data before touching the store.

    Args:
        data: Submitted fields (client_name, client_dni, client_origin,
              client_occupation, room_id, check_in, check_out)

    Returns:
        dict: Cleaned data with parsed instants (check_out may be None)

    Raises:
        ValidationError: With 'errors' detail listing every problem
    """
    if not isinstance(data, dict):
        raise ValidationError(get_message('json_required'))

    errors = [FIELD_LABELS[field] for field in missing_fields(data, REQUIRED_FIELDS)]

    if data.get('client_dni') and not validate_dni(str(data['client_dni'])):
        errors.append('El DNI del cliente no tiene un formato válido')

    if data.get('room_id') is not None and not validate_room_id(data['room_id']):
        errors.append('El ID de la habitación no es válido')

    check_in = check_out = None
    if data.get('check_in'):
        try:
            check_in = parse_instant(data['check_in'])
        except ValidationError:
            errors.append('La fecha de check-in debe ser válida')

    if data.get('check_out'):
        try:
            check_out = parse_instant(data['check_out'])
        except ValidationError:
            errors.append('La fecha de check-out debe ser válida')

    if check_in and check_out and check_out <= check_in:
        errors.append('La fecha de check-out debe ser posterior al check-in')

    if errors:
        raise ValidationError(errors[0], errors=errors)

    return {
        'client_name': sanitize_input(str(data['client_name']), 100),
        'client_dni': sanitize_input(str(data['client_dni']), 20).upper(),
        'client_origin': sanitize_input(str(data['client_origin']), 100),
        'client_occupation': sanitize_input(str(data.get('client_occupation') or ''), 100) or None,
        'room_id': int(data['room_id']),
        'check_in': check_in,
        'check_out': check_out
    }


# =============================================================================
# CREATE
# =============================================================================

def create_reservation(data: dict, publisher=None) -> dict:
    """
    Create a reservation after validation and conflict checking.

    The conflict check, client upsert and insert share one BEGIN IMMEDIATE
    transaction, so two overlapping requests for the same room cannot both
    succeed: the second one waits for the write lock, sees the first row,
    and gets a ConflictError.

    When check_out is omitted, the checkout suggestion for the room is used.

    Args:
        data: Booking fields (see validate_reservation_data)
        publisher: EventPublisher notified after commit (optional)

    Returns:
        dict: Created reservation with client and room

    Raises:
        ValidationError: If fields are missing or malformed
        NotFoundError: If the room does not exist
        ConflictError: If the room is under maintenance or the window overlaps
        InternalError: If the store fails; the transaction is rolled back
    """
    cleaned = validate_reservation_data(data)
    room_id = cleaned['room_id']
    check_in = cleaned['check_in']

    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('BEGIN IMMEDIATE')

        room = get_room_by_id(room_id, cursor=cursor)
        if not room:
            raise NotFoundError('Habitación no encontrada')

        if not room['is_available']:
            raise ConflictError('La habitación no está disponible')

        check_out = cleaned['check_out']
        if check_out is None:
            check_out = get_suggested_checkout(room_id, check_in, cursor=cursor)['suggested_checkout']
            if check_out <= check_in:
                raise ConflictError('La habitación ya tiene una reserva en ese horario')

        acceptable, reason, conflicting_ids = check_reservation_conflict(
            room_id, check_in, check_out, cursor=cursor
        )
        if not acceptable:
            raise ConflictError(reason, conflicts=conflicting_ids)

        client_id, client_created = upsert_client_by_dni(
            cursor,
            name=cleaned['client_name'],
            dni=cleaned['client_dni'],
            origin=cleaned['client_origin'],
            occupation=cleaned['client_occupation']
        )

        # Price is a snapshot: later room price changes do not touch it
        cursor.execute('''
            INSERT INTO reservations (
                room_id, client_id, check_in, check_out, total_price, status,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, 'ACTIVE', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        ''', (room_id, client_id, to_utc_iso(check_in), to_utc_iso(check_out), room['price']))

        reservation_id = cursor.lastrowid

        record_status_history(cursor, reservation_id, 'ACTIVE', 'created', 'Creación de reserva')

        db.commit()

    except sqlite3.Error as e:
        db.rollback()
        raise InternalError('Error al guardar la reserva', cause=e) from e
    except Exception:
        db.rollback()
        raise

    current_app.logger.info(
        'Reservation %s created for room %s (%s - %s), client %s%s',
        reservation_id, room['number'], to_utc_iso(check_in), to_utc_iso(check_out),
        client_id, ' (new)' if client_created else ''
    )

    reservation = get_reservation_by_id(reservation_id)

    if publisher:
        publisher.publish(RESERVATION_CREATED, serialize_reservation(reservation), room_id=room_id)
        publisher.publish(ROOM_UPDATED, {'room_id': room_id}, room_id=room_id)

    return reservation


# =============================================================================
# DELETE
# =============================================================================

def delete_reservation(reservation_id: int, publisher=None) -> None:
    """
    Delete a reservation outright, whatever its status.

    History rows go with it (ON DELETE CASCADE).

    Args:
        reservation_id: Reservation ID
        publisher: EventPublisher notified after commit (optional)

    Raises:
        NotFoundError: If the reservation does not exist
        InternalError: If the store fails; the transaction is rolled back
    """
    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('BEGIN IMMEDIATE')

        reservation = get_reservation_by_id(reservation_id, cursor=cursor)
        if not reservation:
            raise NotFoundError('Reserva no encontrada')

        cursor.execute('DELETE FROM reservations WHERE id = ?', (reservation_id,))

        db.commit()

    except sqlite3.Error as e:
        db.rollback()
        raise InternalError('Error al guardar la reserva', cause=e) from e
    except Exception:
        db.rollback()
        raise

    current_app.logger.info('Reservation %s deleted (was %s)', reservation_id, reservation['status'])

    if publisher:
        room_id = reservation['room_id']
        publisher.publish(RESERVATION_DELETED, {'id': reservation_id}, room_id=room_id)
        if reservation['status'] == 'ACTIVE':
            publisher.publish(ROOM_UPDATED, {'room_id': room_id}, room_id=room_id)
