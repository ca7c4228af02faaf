"""
General API routes: health check, CSRF token, and the event feed.
"""

from datetime import datetime, timezone

from flask import jsonify, request, current_app
from flask_wtf.csrf import generate_csrf

from utils.api_response import api_success
from utils.events import get_publisher


def register_routes(bp):
    """Register general API routes on the blueprint."""

    @bp.route('/health')
    def health_check():
        """
        Health check endpoint.

        Returns:
            JSON with status and version
        """
        return jsonify({
            'status': 'ok',
            'version': current_app.config.get('APP_VERSION', '1.0.0'),
            'timestamp': datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ'),
            'app': 'Sistema de Gestión Hotelera'
        })

    @bp.route('/csrf-token')
    def csrf_token():
        """Issue a CSRF token for clients that send X-CSRFToken on writes."""
        return api_success(data={'csrf_token': generate_csrf()})

    @bp.route('/events')
    def event_feed():
        """
        Poll recent booking events.

        Query params:
            since: Last event id already seen (default 0)
            room_id: Only events for this room (optional)

        Returns:
            JSON list of events plus the latest id to poll from
        """
        since = request.args.get('since', 0, type=int)
        room_id = request.args.get('room_id', type=int)

        publisher = get_publisher()
        events = publisher.events_since(since, room_id=room_id)

        return api_success(data=events, last_id=publisher.last_id)
