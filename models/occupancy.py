"""
Occupancy evaluation over a room's reservation list.

Pure functions: callers pass reservation dicts with aware ``check_in`` /
``check_out`` datetimes and a ``status``. Only ACTIVE reservations count.
Check-in is inclusive and checkout exclusive, so a room is free again at the
exact checkout instant.
"""

from datetime import datetime, timedelta

from utils.datetime_helpers import (
    TimeWindow, overlaps, standard_checkout, format_local
)

STATUS_ACTIVE = 'ACTIVE'

# Suggested checkout leaves this gap before the next booked check-in
CHECKOUT_BACKOFF = timedelta(minutes=1)


def _active(reservations: list) -> list:
    return [r for r in reservations if r.get('status') == STATUS_ACTIVE]


def _covers(reservation: dict, instant: datetime) -> bool:
    return reservation['check_in'] <= instant < reservation['check_out']


# =============================================================================
# OCCUPANCY
# =============================================================================

def is_occupied_at(reservations: list, instant: datetime) -> bool:
    """Return True if any ACTIVE reservation covers the instant."""
    return any(_covers(r, instant) for r in _active(reservations))


def current_reservation(reservations: list, instant: datetime) -> dict:
    """Return the ACTIVE reservation covering the instant, or None."""
    for reservation in _active(reservations):
        if _covers(reservation, instant):
            return reservation
    return None


def next_reservation(reservations: list, instant: datetime) -> dict:
    """Return the ACTIVE reservation with the earliest check-in after the instant."""
    upcoming = [r for r in _active(reservations) if r['check_in'] > instant]
    if not upcoming:
        return None
    return min(upcoming, key=lambda r: r['check_in'])


# =============================================================================
# CONFLICTS
# =============================================================================

def find_conflicts(reservations: list, check_in: datetime, check_out: datetime) -> list:
    """
    Find ACTIVE reservations overlapping a proposed [check_in, check_out).

    Returns:
        list: Conflicting reservation dicts (empty when the window fits)
    """
    proposed = TimeWindow(check_in, check_out)
    return [
        r for r in _active(reservations)
        if overlaps(TimeWindow(r['check_in'], r['check_out']), proposed)
    ]


# =============================================================================
# AVAILABILITY AND SUGGESTIONS
# =============================================================================

def evaluate_room_availability(room: dict, reservations: list, instant: datetime, tz) -> dict:
    """
    Decide whether a room is available at an instant.

    Maintenance overrides reservations. When the room is free, the
    annotation points at the next booked check-in; when occupied, at the
    covering reservation's checkout.

    Args:
        room: Room dict (needs 'is_available')
        reservations: Room reservations (any status)
        instant: Aware target instant
        tz: Business timezone for display strings

    Returns:
        dict: {
            'available_at': bool,
            'is_occupied': bool,
            'reason': 'maintenance' | 'occupied' | 'available',
            'additional_info': {'type', 'time', 'time_display'} or None,
            'current_reservation': dict or None,
            'next_reservation': dict or None
        }
    """
    current = current_reservation(reservations, instant)
    upcoming = next_reservation(reservations, instant)
    occupied = current is not None

    if not room['is_available']:
        available = False
        reason = 'maintenance'
    else:
        available = not occupied
        reason = 'occupied' if occupied else 'available'

    info = None
    if occupied:
        info = _annotation('occupied_until', current['check_out'], tz)
    elif upcoming:
        info = _annotation('available_until', upcoming['check_in'], tz)

    return {
        'available_at': available,
        'is_occupied': occupied,
        'reason': reason,
        'additional_info': info,
        'current_reservation': current,
        'next_reservation': upcoming
    }


def _annotation(kind: str, instant: datetime, tz) -> dict:
    return {
        'type': kind,
        'time': instant,
        'time_display': format_local(instant, tz)
    }


def suggest_checkout(reservations: list, check_in: datetime, tz) -> dict:
    """
    Propose a checkout for a candidate check-in.

    Every future ACTIVE reservation counts, not just same-day ones: the
    suggestion backs off one minute before the nearest. Without any, the
    standard 12:59 rule applies.

    Returns:
        dict: {'suggested_checkout': datetime, 'reason': str,
               'next_reservation': dict or None}
    """
    upcoming = next_reservation(reservations, check_in)

    if upcoming:
        return {
            'suggested_checkout': upcoming['check_in'] - CHECKOUT_BACKOFF,
            'reason': f"Disponible hasta {format_local(upcoming['check_in'], tz)}",
            'next_reservation': upcoming
        }

    return {
        'suggested_checkout': standard_checkout(check_in, tz),
        'reason': 'Check-out estándar (sin reservas futuras)',
        'next_reservation': None
    }
