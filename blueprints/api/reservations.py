"""
Reservation API routes: listing, booking, status changes, and deletion.
"""

from flask import request

from models.reservation import (
    get_all_reservations, get_reservation_by_id, create_reservation,
    update_reservation_status, delete_reservation, get_status_history,
    serialize_reservation
)
from utils.api_response import api_success, api_error
from utils.errors import ValidationError
from utils.events import get_publisher
from utils.messages import get_message
from utils.validators import validate_status


def register_routes(bp):
    """Register reservation API routes on the blueprint."""

    @bp.route('/reservations')
    def reservations_list():
        """
        List reservations, newest first.

        Query params:
            status: ACTIVE, COMPLETED or CANCELLED (optional)
            room_id: Filter by room (optional)
            client_id: Filter by client (optional)
        """
        status = request.args.get('status')
        if status and not validate_status(status):
            raise ValidationError('Estado inválido')

        reservations = get_all_reservations(
            status=status,
            room_id=request.args.get('room_id', type=int),
            client_id=request.args.get('client_id', type=int)
        )
        return api_success(data=[serialize_reservation(r) for r in reservations])

    @bp.route('/reservations/<int:reservation_id>')
    def reservation_detail(reservation_id):
        """Get reservation details as JSON."""
        reservation = get_reservation_by_id(reservation_id)
        if not reservation:
            return api_error(get_message('reservation_not_found'), status=404)

        return api_success(data=serialize_reservation(reservation))

    @bp.route('/reservations/<int:reservation_id>/history')
    def reservation_history(reservation_id):
        """Get reservation status history."""
        return api_success(data=get_status_history(reservation_id))

    @bp.route('/reservations', methods=['POST'])
    def reservation_create():
        """
        Book a room.

        Body:
            client_name, client_dni, client_origin, client_occupation (optional),
            room_id, check_in, check_out (optional, defaults to the suggestion)
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError(get_message('json_required'))

        reservation = create_reservation(data, publisher=get_publisher())

        return api_success(
            data=serialize_reservation(reservation),
            message=get_message('reservation_created'),
            status=201
        )

    @bp.route('/reservations/<int:reservation_id>', methods=['PUT'])
    def reservation_update(reservation_id):
        """Change reservation status: {"status": "COMPLETED" | "CANCELLED"}."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError(get_message('json_required'))

        reservation = update_reservation_status(
            reservation_id,
            data.get('status'),
            notes=data.get('notes') or '',
            publisher=get_publisher()
        )

        return api_success(
            data=serialize_reservation(reservation),
            message=get_message('reservation_updated')
        )

    @bp.route('/reservations/<int:reservation_id>', methods=['DELETE'])
    def reservation_delete(reservation_id):
        """Delete a reservation regardless of status."""
        delete_reservation(reservation_id, publisher=get_publisher())
        return api_success(message=get_message('reservation_deleted'))
