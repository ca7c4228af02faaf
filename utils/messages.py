"""
Centralized Spanish API messages.
All user-facing text in Spanish for consistency.
"""

MESSAGES = {
    # Success messages
    'reservation_created': 'Reserva creada exitosamente',
    'reservation_updated': 'Reserva actualizada exitosamente',
    'reservation_deleted': 'Reserva eliminada exitosamente',
    'client_updated': 'Cliente actualizado exitosamente',
    'room_status_updated': 'Estado de habitación actualizado exitosamente',

    # Error messages
    'room_not_found': 'Habitación no encontrada',
    'client_not_found': 'Cliente no encontrado',
    'reservation_not_found': 'Reserva no encontrada',
    'invalid_date': 'Fecha inválida',
    'json_required': 'Se requiere un cuerpo JSON',
    'resource_not_found': 'Recurso no encontrado',
    'method_not_allowed': 'Método no permitido',
    'internal_error': 'Error interno del servidor',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get a message by key with optional formatting.

    Args:
        key: Message key
        **kwargs: Format arguments

    Returns:
        Formatted message string
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
