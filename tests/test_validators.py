"""
Tests for input validation utilities.
"""

from utils.validators import (
    validate_dni,
    validate_room_id,
    validate_status,
    missing_fields,
    sanitize_input
)


class TestValidateDni:
    """Tests for national ID validation."""

    def test_valid_dni(self):
        """Test 8-digit DNIs and alphanumeric documents."""
        assert validate_dni('12345678') is True
        assert validate_dni(' 12345678 ') is True
        assert validate_dni('AB123456') is True
        assert validate_dni('ce0012345') is True

    def test_invalid_dni(self):
        """Test malformed document numbers."""
        assert validate_dni('') is False
        assert validate_dni(None) is False
        assert validate_dni('12345') is False
        assert validate_dni('1234-5678') is False
        assert validate_dni('1234567890123') is False
        assert validate_dni(12345678) is False


class TestValidateRoomId:
    """Tests for room ID validation."""

    def test_valid(self):
        assert validate_room_id(1) is True
        assert validate_room_id('19') is True

    def test_invalid(self):
        assert validate_room_id(0) is False
        assert validate_room_id(-3) is False
        assert validate_room_id('abc') is False
        assert validate_room_id(True) is False
        assert validate_room_id(1.5) is False
        assert validate_room_id(None) is False


class TestValidateStatus:
    """Tests for reservation status values."""

    def test_statuses(self):
        assert validate_status('ACTIVE') is True
        assert validate_status('COMPLETED') is True
        assert validate_status('CANCELLED') is True
        assert validate_status('active') is False
        assert validate_status('PENDING') is False
        assert validate_status(None) is False


class TestMissingFields:
    """Tests for required field detection."""

    def test_blank_and_absent(self):
        data = {'name': 'Ana', 'dni': '  ', 'origin': None}
        assert missing_fields(data, ('name', 'dni', 'origin', 'room_id')) == ['dni', 'origin', 'room_id']

    def test_zero_is_present(self):
        assert missing_fields({'room_id': 0}, ('room_id',)) == []


class TestSanitizeInput:
    """Tests for input sanitization."""

    def test_strip_whitespace(self):
        """Test whitespace stripping."""
        assert sanitize_input('  hello  ') == 'hello'

    def test_max_length(self):
        """Test length truncation."""
        assert sanitize_input('hello world', max_length=5) == 'hello'

    def test_empty_input(self):
        """Test empty input handling."""
        assert sanitize_input('') == ''
        assert sanitize_input(None) == ''
