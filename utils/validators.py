"""
Input validation helper functions.
Provides validation for booking form fields.
"""

import re


RESERVATION_STATUSES = ('ACTIVE', 'COMPLETED', 'CANCELLED')


def validate_dni(dni: str) -> bool:
    """
    Validate national ID format.
    Accepts 8 digits (DNI) or 6-12 alphanumerics (passport, carné de extranjería).

    Args:
        dni: Document number to validate

    Returns:
        True if valid format
    """
    if not dni or not isinstance(dni, str):
        return False

    cleaned = dni.strip().upper()
    return bool(re.match(r'^[0-9]{8}$', cleaned) or re.match(r'^[A-Z0-9]{6,12}$', cleaned))


def validate_room_id(room_id) -> bool:
    """
    Validate a room ID is a positive integer (ints or digit strings).

    Args:
        room_id: Room ID from the request

    Returns:
        True if usable as a room ID
    """
    if isinstance(room_id, bool):
        return False
    if isinstance(room_id, int):
        return room_id > 0
    if isinstance(room_id, str):
        return room_id.strip().isdigit() and int(room_id) > 0
    return False


def validate_status(status: str) -> bool:
    """
    Validate a reservation status value.

    Args:
        status: Status name

    Returns:
        True if status is ACTIVE, COMPLETED or CANCELLED
    """
    return status in RESERVATION_STATUSES


def missing_fields(data: dict, fields: tuple) -> list:
    """
    List required fields that are absent or blank.

    Args:
        data: Submitted data
        fields: Required field names

    Returns:
        list: Names of missing fields, in the given order
    """
    missing = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    # Strip whitespace
    sanitized = text.strip()

    # Limit length if specified
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
