"""
Client API routes: listing, DNI lookup, edits, and reservation history.
"""

from flask import request

from models.client import (
    get_all_clients, get_client_by_id, get_client_by_dni,
    get_client_reservations, update_client, serialize_client
)
from models.reservation import serialize_reservation
from utils.api_response import api_success, api_error
from utils.errors import ValidationError
from utils.messages import get_message


def register_routes(bp):
    """Register client API routes on the blueprint."""

    @bp.route('/clients')
    def clients_list():
        """All clients, newest first."""
        return api_success(data=[serialize_client(c) for c in get_all_clients()])

    @bp.route('/clients/<int:client_id>')
    def client_detail(client_id):
        """Client with reservation history."""
        client = get_client_by_id(client_id, include_reservations=True)
        if not client:
            return api_error(get_message('client_not_found'), status=404)

        return api_success(data=serialize_client(client))

    @bp.route('/clients/search/dni/<dni>')
    def client_by_dni(dni):
        """Look a client up by DNI (used to prefill the booking form)."""
        client = get_client_by_dni(dni, include_reservations=True)
        if not client:
            return api_error(get_message('client_not_found'), status=404)

        return api_success(data=serialize_client(client))

    @bp.route('/clients/<int:client_id>', methods=['PUT'])
    def client_update(client_id):
        """Edit name, origin or occupation."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError(get_message('json_required'))

        kwargs = {'name': data.get('name'), 'origin': data.get('origin')}
        if 'occupation' in data:
            kwargs['occupation'] = data['occupation']

        client = update_client(client_id, **kwargs)

        return api_success(data=serialize_client(client), message=get_message('client_updated'))

    @bp.route('/clients/<int:client_id>/reservations')
    def client_reservations(client_id):
        """A client's reservations, newest first."""
        reservations = get_client_reservations(client_id)
        return api_success(data=[serialize_reservation(r) for r in reservations])
