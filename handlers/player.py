import logging

from packets import is_number
from participant import Facing, Liveness
from protocol import FACINGS
from . import normalize

logger = logging.getLogger(__name__)

# Characters removed by JavaScript String.prototype.trim
TRIM_CHARS = (
    " \t\n\r\x0b\x0c\xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def clamp(value, low, high):
    return max(low, min(high, value))


def clean_name(name, max_length):
    """Trimmed, truncated display name, or None when nothing usable remains."""
    if not isinstance(name, str):
        return None
    cleaned = name.strip(TRIM_CHARS)[:max_length]
    return cleaned or None


async def handle_set_name(server, conn_id, packet_or_data):
    data = normalize(packet_or_data)
    participant = server.registry.get(conn_id)
    if participant is None:
        return

    name = clean_name(data.get("name"), server.config.name_max_length)
    if name is None:
        return

    participant.display_name = name
    logger.info("[JOIN] %s named %r", conn_id, name)
    await server.broadcast_user_joined(participant)


async def handle_move(server, conn_id, packet_or_data):
    data = normalize(packet_or_data)
    participant = server.registry.get(conn_id)
    if participant is None:
        return

    vx, vy, dt = data.get("vx"), data.get("vy"), data.get("dt")
    if not (is_number(vx) and is_number(vy) and is_number(dt)):
        logger.debug("[MOVE] Malformed move from %s: %s", conn_id, data)
        return

    config = server.config
    if abs(vx) > 1 or abs(vy) > 1 or dt < 0 or dt > config.max_move_dt_ms:
        logger.warning("[CHEAT?] %s sent out-of-range move vx=%s vy=%s dt=%s", conn_id, vx, vy, dt)
        vx = clamp(vx, -1, 1)
        vy = clamp(vy, -1, 1)
        dt = clamp(dt, 0, config.max_move_dt_ms)

    delta = dt / 1000.0
    participant.x += vx * config.speed * delta
    participant.y += vy * config.speed * delta

    direction = data.get("dir")
    if direction in FACINGS:
        participant.facing = Facing(direction)

    seq = data.get("seq")
    if isinstance(seq, int) and not isinstance(seq, bool):
        participant.last_sequence = seq

    participant.last_movement_at = server.clock()
    participant.liveness = Liveness.ACTIVE

    if vx != 0 or vy != 0:
        participant.walk()
    else:
        participant.halt()


async def handle_disconnect(server, conn_id, packet_or_data=None):
    """Drop the record and tell everyone, named or not."""
    participant = server.registry.remove(conn_id)
    name = participant.display_name if participant else None
    logger.info("[DISCONNECT] %s (%s)", conn_id, name or "unnamed")
    await server.broadcast_user_left(conn_id)
