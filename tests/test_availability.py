"""
Tests for availability queries, checkout suggestions, and conflict checking
against the database.
"""

import pytest
from datetime import timedelta

from utils.datetime_helpers import parse_instant, to_utc_iso
from utils.errors import NotFoundError


@pytest.fixture
def booked_room(app, booking):
    """Room 1 booked 10:00-13:00 and 15:00-18:00 on 2024-01-01 (Lima)."""
    with app.app_context():
        from models.reservation import create_reservation

        first = create_reservation(booking())
        second = create_reservation(booking(
            client_dni='99887766',
            check_in='2024-01-01T15:00:00-05:00',
            check_out='2024-01-01T18:00:00-05:00'
        ))
        yield {'room_id': 1, 'first_id': first['id'], 'second_id': second['id']}


def at(value):
    return parse_instant(value)


def room_result(results, room_id):
    return next(r for r in results if r['id'] == room_id)


class TestGetAvailabilityAt:
    """Tests for inventory-wide availability at an instant."""

    def test_all_rooms_returned_in_order(self, app):
        with app.app_context():
            from models.reservation import get_availability_at

            results = get_availability_at(at('2024-01-01T11:00:00-05:00'))

            assert len(results) == 19
            assert [r['number'] for r in results] == list(range(1, 20))
            assert all(r['available_at'] for r in results)

    def test_occupied_room(self, app, booked_room):
        with app.app_context():
            from models.reservation import get_availability_at

            result = room_result(get_availability_at(at('2024-01-01T11:00:00-05:00')), 1)

            assert result['available_at'] is False
            assert result['reason'] == 'occupied'
            assert result['reason_message'] == 'Ocupada en ese horario'
            assert result['additional_info']['type'] == 'occupied_until'
            assert result['additional_info']['time'] == '2024-01-01T18:00:00Z'
            assert result['current_reservation']['id'] == booked_room['first_id']

    def test_free_at_checkout_instant(self, app, booked_room):
        with app.app_context():
            from models.reservation import get_availability_at

            result = room_result(get_availability_at(at('2024-01-01T13:00:00-05:00')), 1)

            assert result['available_at'] is True
            assert result['additional_info'] == {
                'type': 'available_until',
                'time': '2024-01-01T20:00:00Z',
                'time_display': '01/01/2024 03:00 PM'
            }
            assert result['next_reservation_id'] == booked_room['second_id']

    def test_occupied_at_checkin_instant(self, app, booked_room):
        with app.app_context():
            from models.reservation import get_availability_at

            result = room_result(get_availability_at(at('2024-01-01T15:00:00-05:00')), 1)
            assert result['available_at'] is False

    def test_maintenance_room(self, app):
        with app.app_context():
            from models.reservation import get_availability_at
            from models.room import set_room_availability

            set_room_availability(2, False)
            result = room_result(get_availability_at(at('2024-01-01T11:00:00-05:00')), 2)

            assert result['available_at'] is False
            assert result['reason'] == 'maintenance'
            assert result['reason_message'] == 'En mantenimiento'

    def test_cancel_frees_instant_immediately(self, app, booked_room):
        with app.app_context():
            from models.reservation import get_availability_at, cancel_reservation

            instant = at('2024-01-01T11:00:00-05:00')
            assert room_result(get_availability_at(instant), 1)['available_at'] is False

            cancel_reservation(booked_room['first_id'])

            assert room_result(get_availability_at(instant), 1)['available_at'] is True

    def test_single_room_query(self, app, booked_room):
        with app.app_context():
            from models.reservation import get_room_availability_at

            result = get_room_availability_at(1, at('2024-01-01T16:00:00-05:00'))
            assert result['is_occupied'] is True

            with pytest.raises(NotFoundError):
                get_room_availability_at(999, at('2024-01-01T16:00:00-05:00'))


class TestListRoomsWithOccupancy:
    """Tests for the live dashboard (instant = now)."""

    def test_current_booking_shows_occupied(self, app, booking):
        with app.app_context():
            from models.reservation import create_reservation, list_rooms_with_occupancy
            from utils.datetime_helpers import get_now

            now = get_now().replace(microsecond=0)
            create_reservation(booking(
                room_id=3,
                check_in=(now - timedelta(hours=1)).isoformat(),
                check_out=(now + timedelta(hours=2)).isoformat()
            ))

            rooms = list_rooms_with_occupancy()

            assert room_result(rooms, 3)['is_occupied'] is True
            assert room_result(rooms, 3)['additional_info']['type'] == 'occupied_until'
            assert room_result(rooms, 4)['is_occupied'] is False


class TestGetSuggestedCheckout:
    """Tests for checkout suggestions against stored reservations."""

    def test_backs_off_before_next_reservation(self, app, booked_room):
        with app.app_context():
            from models.reservation import get_suggested_checkout

            result = get_suggested_checkout(1, at('2024-01-01T13:00:00-05:00'))

            # 15:00 Lima minus one minute
            assert to_utc_iso(result['suggested_checkout']) == '2024-01-01T19:59:00Z'
            assert result['reason'] == 'Disponible hasta 01/01/2024 03:00 PM'
            assert result['next_reservation_id'] == booked_room['second_id']

    def test_standard_checkout_without_future(self, app):
        with app.app_context():
            from models.reservation import get_suggested_checkout

            result = get_suggested_checkout(5, at('2024-01-01T03:00:00-05:00'))

            assert to_utc_iso(result['suggested_checkout']) == '2024-01-01T17:59:00Z'
            assert result['reason'] == 'Check-out estándar (sin reservas futuras)'
            assert result['next_reservation_id'] is None

    def test_unknown_room(self, app):
        with app.app_context():
            from models.reservation import get_suggested_checkout

            with pytest.raises(NotFoundError):
                get_suggested_checkout(999, at('2024-01-01T03:00:00-05:00'))


class TestCheckReservationConflict:
    """Tests for the booking conflict check."""

    def test_overlap_rejected(self, app, booked_room):
        with app.app_context():
            from models.reservation import check_reservation_conflict

            ok, reason, ids = check_reservation_conflict(
                1, at('2024-01-01T12:00:00-05:00'), at('2024-01-01T14:00:00-05:00')
            )

            assert ok is False
            assert reason == 'La habitación ya tiene una reserva en ese horario'
            assert ids == [booked_room['first_id']]

    def test_gap_between_bookings_accepted(self, app, booked_room):
        with app.app_context():
            from models.reservation import check_reservation_conflict

            ok, reason, ids = check_reservation_conflict(
                1, at('2024-01-01T13:00:00-05:00'), at('2024-01-01T15:00:00-05:00')
            )

            assert (ok, reason, ids) == (True, None, [])

    def test_maintenance_rejected(self, app):
        with app.app_context():
            from models.reservation import check_reservation_conflict
            from models.room import set_room_availability

            set_room_availability(6, False)
            ok, reason, _ = check_reservation_conflict(
                6, at('2024-01-01T12:00:00-05:00'), at('2024-01-01T14:00:00-05:00')
            )

            assert ok is False
            assert 'mantenimiento' in reason

    def test_other_rooms_unaffected(self, app, booked_room):
        with app.app_context():
            from models.reservation import check_reservation_conflict

            ok, _, _ = check_reservation_conflict(
                2, at('2024-01-01T11:00:00-05:00'), at('2024-01-01T12:00:00-05:00')
            )
            assert ok is True
