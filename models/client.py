"""
Client data access functions.
Handles client listing, DNI lookup, edits, and upsert-by-DNI for bookings.
"""

from database import get_db
from utils.errors import NotFoundError, ValidationError
from .reservation_queries import get_all_reservations, serialize_reservation


def serialize_client(client: dict) -> dict:
    """Build the JSON shape of a client."""
    data = {
        'id': client['id'],
        'name': client['name'],
        'dni': client['dni'],
        'origin': client['origin'],
        'occupation': client['occupation'],
        'created_at': client.get('created_at')
    }
    if 'reservations' in client:
        data['reservations'] = [serialize_reservation(r) for r in client['reservations']]
    if 'reservation_count' in client:
        data['reservation_count'] = client['reservation_count']
    return data


# =============================================================================
# READ OPERATIONS
# =============================================================================

def get_all_clients() -> list:
    """
    Get all clients, newest first.

    Returns:
        List of client dicts with reservation_count
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT c.*,
               (SELECT COUNT(*) FROM reservations WHERE client_id = c.id) as reservation_count
        FROM clients c
        ORDER BY c.created_at DESC, c.id DESC
    ''')
    return [dict(row) for row in cursor.fetchall()]


def get_client_by_id(client_id: int, include_reservations: bool = False) -> dict:
    """
    Get client by ID.

    Args:
        client_id: Client ID
        include_reservations: Attach the client's reservations

    Returns:
        Client dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM clients WHERE id = ?', (client_id,))
    row = cursor.fetchone()
    if not row:
        return None

    client = dict(row)
    if include_reservations:
        client['reservations'] = get_all_reservations(client_id=client_id)
    return client


def get_client_by_dni(dni: str, include_reservations: bool = False, cursor=None) -> dict:
    """
    Get client by national ID.

    Args:
        dni: Client DNI
        include_reservations: Attach the client's reservations
        cursor: Active transaction cursor (optional)

    Returns:
        Client dict or None if not found
    """
    cur = cursor or get_db().cursor()
    cur.execute('SELECT * FROM clients WHERE dni = ?', ((dni or '').strip(),))
    row = cur.fetchone()
    if not row:
        return None

    client = dict(row)
    if include_reservations:
        client['reservations'] = get_all_reservations(client_id=client['id'])
    return client


def get_client_reservations(client_id: int) -> list:
    """
    Get a client's reservation history, newest first.

    Raises:
        NotFoundError: If the client does not exist
    """
    if not get_client_by_id(client_id):
        raise NotFoundError('Cliente no encontrado')
    return get_all_reservations(client_id=client_id)


# =============================================================================
# WRITE OPERATIONS
# =============================================================================

def upsert_client_by_dni(cursor, name: str, dni: str, origin: str, occupation: str = None) -> tuple:
    """
    Find a client by DNI or create it.

    An existing client is reused as-is; the booking form never overwrites
    stored client data. Runs on the caller's transaction cursor.

    Args:
        cursor: Active transaction cursor
        name: Client name
        dni: Client DNI (natural key)
        origin: Place of origin
        occupation: Occupation (optional)

    Returns:
        tuple: (client_id, created: bool)
    """
    existing = get_client_by_dni(dni, cursor=cursor)
    if existing:
        return existing['id'], False

    cursor.execute('''
        INSERT INTO clients (name, dni, origin, occupation)
        VALUES (?, ?, ?, ?)
    ''', (name.strip(), dni.strip(), origin.strip(), (occupation or '').strip() or None))
    return cursor.lastrowid, True


def update_client(client_id: int, name: str = None, origin: str = None, occupation=...) -> dict:
    """
    Update client fields.

    Empty name or origin keep the stored value. Occupation is only touched
    when passed, and an empty value clears it.

    Args:
        client_id: Client ID
        name: New name (optional)
        origin: New origin (optional)
        occupation: New occupation, None or '' to clear (optional)

    Returns:
        dict: Updated client

    Raises:
        NotFoundError: If the client does not exist
        ValidationError: If a field has the wrong type
    """
    client = get_client_by_id(client_id)
    if not client:
        raise NotFoundError('Cliente no encontrado')

    for field, value in (('name', name), ('origin', origin)):
        if value is not None and not isinstance(value, str):
            raise ValidationError(f'El campo {field} debe ser texto')

    new_name = (name or '').strip() or client['name']
    new_origin = (origin or '').strip() or client['origin']
    if occupation is ...:
        new_occupation = client['occupation']
    else:
        if occupation is not None and not isinstance(occupation, str):
            raise ValidationError('El campo occupation debe ser texto')
        new_occupation = (occupation or '').strip() or None

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        UPDATE clients
        SET name = ?, origin = ?, occupation = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (new_name, new_origin, new_occupation, client_id))
    db.commit()

    return get_client_by_id(client_id)
