"""
Out-of-band push channel for connected POS clients.

Transports (a websocket server, a test double) register one send callable
per logged-in user. The deactivation event is relayed here as a
``forceLogout`` push. Delivery is fire-and-forget: failures are logged and
never reach the code that deactivated the account.
"""

import logging
import threading

from django.dispatch import receiver

from .signals import account_deactivated

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Maps user ids to the send callable of their live connection."""

    def __init__(self):
        self._lock = threading.Lock()
        self._connections = {}

    def register(self, user_id, send):
        with self._lock:
            self._connections[str(user_id)] = send

    def unregister(self, user_id):
        with self._lock:
            self._connections.pop(str(user_id), None)

    def clear(self):
        with self._lock:
            self._connections.clear()

    def is_connected(self, user_id):
        with self._lock:
            return str(user_id) in self._connections

    def push(self, user_id, event, payload=None):
        """Send ``event`` to the user's connection. Returns True if delivered."""
        with self._lock:
            send = self._connections.get(str(user_id))
        if send is None:
            return False

        try:
            send(event, payload or {})
        except Exception:
            logger.exception("Push of %s to user %s failed", event, user_id)
            return False
        return True


connection_registry = ConnectionRegistry()


@receiver(account_deactivated, dispatch_uid='accounts.relay_forced_logout')
def relay_forced_logout(sender, account=None, user_ids=(), **kwargs):
    for user_id in user_ids:
        if connection_registry.push(user_id, 'forceLogout', {'message': 'You have been logged out'}):
            connection_registry.unregister(user_id)
            logger.info("Forced logout pushed to user %s", user_id)
