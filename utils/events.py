"""
Real-time notification of booking mutations.

Mutation functions receive an ``EventPublisher`` explicitly and call
``publish()`` after their transaction commits. Publishing is fire-and-forget:
subscriber errors are logged and never reach the caller.

Observers either register a callback with ``subscribe()`` or poll the
bounded feed through ``events_since()`` (exposed at /api/events).
"""

import logging
import threading
from collections import deque
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

# Event names
RESERVATION_CREATED = 'reservation-created'
RESERVATION_UPDATED = 'reservation-updated'
RESERVATION_DELETED = 'reservation-deleted'
ROOM_UPDATED = 'room-updated'
ROOM_STATUS_UPDATED = 'room-status-updated'


class EventPublisher:
    """Thread-safe in-process event hub with a bounded replay buffer."""

    def __init__(self, buffer_size: int = 200):
        self._lock = threading.Lock()
        self._subscribers = []
        self._buffer = deque(maxlen=buffer_size)
        self._last_id = 0

    def init_app(self, app):
        """Register on the app so request handlers can find it."""
        app.extensions['events'] = self

    def subscribe(self, callback):
        """
        Register a callback ``callback(event: dict)``.

        Returns:
            The callback, so this can be used as a decorator
        """
        with self._lock:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback):
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def publish(self, name: str, payload: dict = None, room_id: int = None) -> dict:
        """
        Publish an event to the feed and every subscriber.

        Args:
            name: Event name (e.g. 'reservation-created')
            payload: JSON-serializable data
            room_id: Room the event concerns, for room-scoped observers

        Returns:
            dict: The published event, or None if it could not be recorded
        """
        try:
            with self._lock:
                self._last_id += 1
                event = {
                    'id': self._last_id,
                    'event': name,
                    'room_id': room_id,
                    'data': payload or {},
                    'timestamp': datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')
                }
                self._buffer.append(event)
                subscribers = list(self._subscribers)
        except Exception as e:
            logger.error(f"Failed to record event {name}: {e}", exc_info=True)
            return None

        for callback in subscribers:
            try:
                callback(event)
            except Exception as e:
                # Notification failures never fail the mutation
                logger.error(f"Event subscriber failed for {name}: {e}", exc_info=True)

        logger.debug(f"Published {name} (id={event['id']})")
        return event

    def events_since(self, since_id: int = 0, room_id: int = None) -> list:
        """
        Get buffered events newer than ``since_id``.

        Args:
            since_id: Last event id the observer has seen
            room_id: Only events for this room (optional)

        Returns:
            list: Events in publication order
        """
        with self._lock:
            events = [e for e in self._buffer if e['id'] > since_id]
        if room_id is not None:
            events = [e for e in events if e['room_id'] == room_id]
        return events

    @property
    def last_id(self) -> int:
        return self._last_id


def get_publisher():
    """Get the publisher registered on the current app, or None."""
    from flask import current_app
    return current_app.extensions.get('events')
