"""
Reservation data access functions.
Handles reservation lifecycle, status management, availability, and
checkout suggestions.

This module re-exports all functions from the split modules:
- occupancy.py: Pure occupancy, conflict and suggestion evaluators
- reservation_queries.py: Reading, listing, and row conversion
- reservation_crud.py: Create and delete
- reservation_state.py: Status transitions and history
- reservation_availability.py: Availability queries, suggestions, conflict check
"""

# =============================================================================
# RE-EXPORTS
# =============================================================================

# Pure evaluators
from .occupancy import (
    is_occupied_at,
    current_reservation,
    next_reservation,
    find_conflicts,
    evaluate_room_availability,
    suggest_checkout,
)

# Queries
from .reservation_queries import (
    get_reservation_by_id,
    get_all_reservations,
    get_room_reservations,
    get_active_reservations_by_room,
    serialize_reservation,
)

# CRUD operations
from .reservation_crud import (
    validate_reservation_data,
    create_reservation,
    delete_reservation,
)

# Status management
from .reservation_state import (
    VALID_TRANSITIONS,
    validate_status_transition,
    update_reservation_status,
    cancel_reservation,
    complete_reservation,
    get_status_history,
)

# Availability
from .reservation_availability import (
    get_availability_at,
    list_rooms_with_occupancy,
    get_room_availability_at,
    get_suggested_checkout,
    check_reservation_conflict,
)
