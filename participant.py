"""Participant record tracked for every open connection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Facing(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ActivityState(str, Enum):
    IDLE = "idle"
    WALKING = "walking"
    DANCING = "dancing"


class Liveness(str, Enum):
    ACTIVE = "active"
    IDLE = "idle"


@dataclass
class Participant:
    id: str
    tint: int
    x: float
    y: float
    # Timestamps are milliseconds on the server clock
    last_movement_at: int
    display_name: str | None = None
    facing: Facing = Facing.DOWN
    activity: ActivityState = ActivityState.IDLE
    dance_variant: str | None = None  # only set while dancing
    liveness: Liveness = Liveness.ACTIVE
    last_sequence: int = 0
    current_emote: str | None = None
    emote_expires_at: int = 0
    emote_cooldown_until: int = 0

    @property
    def is_named(self) -> bool:
        return self.display_name is not None

    @property
    def is_dancing(self) -> bool:
        return self.activity is ActivityState.DANCING

    @property
    def is_moving(self) -> bool:
        return (
            self.activity is ActivityState.WALKING
            and self.liveness is Liveness.ACTIVE
        )

    # Activity transitions. dance_variant is cleared on every exit from DANCING.

    def walk(self) -> None:
        """Nonzero movement always wins over a dance."""
        self.activity = ActivityState.WALKING
        self.dance_variant = None

    def halt(self) -> None:
        """Zero movement: back to idle unless dancing."""
        if self.activity is not ActivityState.DANCING:
            self.activity = ActivityState.IDLE

    def dance(self, variant: str) -> None:
        self.activity = ActivityState.DANCING
        self.dance_variant = variant

    def stop_dance(self) -> None:
        self.activity = ActivityState.IDLE
        self.dance_variant = None

    def to_dict(self) -> dict[str, Any]:
        """Wire representation used by join notifications and snapshots."""
        return {
            "id": self.id,
            "name": self.display_name,
            "color": self.tint,
            "x": self.x,
            "y": self.y,
            "dir": self.facing.value,
            "status": self.liveness.value,
            "state": self.activity.value,
            "danceType": self.dance_variant,
            "emote": self.current_emote,
            "emoteUntil": self.emote_expires_at,
            "lastSeen": self.last_movement_at,
            "lastSeq": self.last_sequence,
            "isMoving": self.is_moving,
        }
