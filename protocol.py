class PacketType:
    # client -> server
    SET_NAME = "SET_NAME"
    MOVE = "MOVE"
    DANCE = "DANCE"
    STOP_DANCE = "STOP_DANCE"
    EMOTE = "EMOTE"
    PING = "PING"
    # server -> client
    PONG = "PONG"
    ID_ASSIGNED = "ID_ASSIGNED"
    USER_JOINED = "USER_JOINED"
    USER_LEFT = "USER_LEFT"
    STATE_SNAPSHOT = "STATE_SNAPSHOT"


# Gameplay constants (times in milliseconds)
SPEED = 120.0  # position units per second
NAME_MAX_LENGTH = 16
TICK_MS = 50
MOVE_STALE_MS = 100
EMOTE_DURATION_MS = 2000
EMOTE_COOLDOWN_MS = 1000
MAX_MOVE_DT_MS = 1000
DEFAULT_DANCE = "dance1"

# Spawn region: origin + random() * extent on each axis
SPAWN_ORIGIN = (200.0, 200.0)
SPAWN_EXTENT = (300.0, 300.0)

FACINGS = ("up", "down", "left", "right")

EMOTES = ("wave", "heart", "laugh", "angry")
# Emoji literals sent by the web client
EMOTE_ALIASES = {
    "\U0001F44B": "wave",
    "❤️": "heart",
    "❤": "heart",
    "\U0001F604": "laugh",
    "\U0001F621": "angry",
}
