"""
Room API routes: occupancy, availability at an instant, checkout
suggestions, maintenance flag, and statistics.
"""

from flask import request

from models.reservation import (
    list_rooms_with_occupancy, get_availability_at, get_suggested_checkout
)
from models.room import get_room_by_id, serialize_room, set_room_availability, get_room_stats
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_now, parse_instant, to_utc_iso
from utils.errors import ValidationError
from utils.events import get_publisher
from utils.messages import get_message


def register_routes(bp):
    """Register room API routes on the blueprint."""

    # ============================================================================
    # ROOM LISTING
    # ============================================================================

    @bp.route('/rooms')
    def rooms_list():
        """All rooms with their current occupancy and annotation."""
        return api_success(data=list_rooms_with_occupancy())

    @bp.route('/rooms/<int:room_id>')
    def room_detail(room_id):
        """Room details with every reservation it has had."""
        room = get_room_by_id(room_id, include_reservations=True)
        if not room:
            return api_error(get_message('room_not_found'), status=404)

        return api_success(data=serialize_room(room))

    # ============================================================================
    # AVAILABILITY
    # ============================================================================

    @bp.route('/rooms/available/status')
    def rooms_available_now():
        """Rooms not under maintenance, with whether they are occupied now."""
        rooms = [
            {
                'id': room['id'],
                'number': room['number'],
                'type': room['type'],
                'price': room['price'],
                'is_available': room['is_available'],
                'is_occupied': room['is_occupied']
            }
            for room in list_rooms_with_occupancy()
            if room['is_available']
        ]
        return api_success(data=rooms)

    @bp.route('/rooms/available/date/<instant>')
    def rooms_available_at(instant):
        """
        Availability of every room at an instant.

        Args:
            instant: ISO-8601 instant, UTC ('2024-01-01T15:00:00Z')
        """
        target = parse_instant(instant)
        return api_success(data=get_availability_at(target), target_date=to_utc_iso(target))

    @bp.route('/rooms/<int:room_id>/availability/<instant>')
    def room_checkout_suggestion(room_id, instant):
        """
        Suggested checkout for a room and candidate check-in.

        Args:
            room_id: Room ID
            instant: Candidate check-in, ISO-8601
        """
        check_in = parse_instant(instant)
        suggestion = get_suggested_checkout(room_id, check_in)

        return api_success(data={
            'room': serialize_room(suggestion['room']),
            'check_in': to_utc_iso(check_in),
            'suggested_checkout': to_utc_iso(suggestion['suggested_checkout']),
            'reason': suggestion['reason'],
            'next_reservation_id': suggestion['next_reservation_id']
        })

    # ============================================================================
    # MAINTENANCE AND STATS
    # ============================================================================

    @bp.route('/rooms/<int:room_id>/status', methods=['PUT'])
    def room_update_status(room_id):
        """Set the maintenance flag: {"is_available": bool}."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError(get_message('json_required'))

        room = get_room_by_id(room_id)
        if not room:
            return api_error(get_message('room_not_found'), status=404)

        # Missing flag keeps the current value
        is_available = data.get('is_available', room['is_available'])
        room = set_room_availability(room_id, is_available, publisher=get_publisher())

        return api_success(data=serialize_room(room), message=get_message('room_status_updated'))

    @bp.route('/rooms/stats/overview')
    def rooms_stats():
        """Occupancy statistics right now."""
        return api_success(data=get_room_stats(get_now()))
