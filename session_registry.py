# session_registry.py
import logging
import random

from participant import Participant
from protocol import SPAWN_EXTENT, SPAWN_ORIGIN

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Owns participant lifetime: one record per open connection.

    All access happens on the event loop thread, so there is no locking.
    Iteration order is insertion order.
    """

    def __init__(self, spawn_origin=SPAWN_ORIGIN, spawn_extent=SPAWN_EXTENT, rng=None):
        # {connection_id: Participant}
        self.participants = {}
        self.spawn_origin = spawn_origin
        self.spawn_extent = spawn_extent
        self._rng = rng or random.Random()

    def create(self, conn_id, now):
        """Insert a fresh record for conn_id.

        An existing record under the same id is overwritten; connection ids
        are unique by construction of the transport.
        """
        ox, oy = self.spawn_origin
        ex, ey = self.spawn_extent
        participant = Participant(
            id=conn_id,
            tint=self._rng.randint(0, 0xFFFFFF),
            x=ox + self._rng.random() * ex,
            y=oy + self._rng.random() * ey,
            last_movement_at=now,
        )
        self.participants[conn_id] = participant
        logger.debug("[REGISTRY] Created %s at (%.1f, %.1f)", conn_id, participant.x, participant.y)
        return participant

    def get(self, conn_id):
        return self.participants.get(conn_id)

    def remove(self, conn_id):
        """Delete the record; removing an unknown id is a no-op."""
        return self.participants.pop(conn_id, None)

    def values(self):
        # copy so a sweep never trips over a concurrent create/remove
        return list(self.participants.values())

    def __len__(self):
        return len(self.participants)

    def __contains__(self, conn_id):
        return conn_id in self.participants

    def get_state(self, now):
        """Snapshot payload: every named participant plus a server timestamp."""
        return {
            "users": [p.to_dict() for p in self.participants.values() if p.is_named],
            "timestamp": now,
        }
