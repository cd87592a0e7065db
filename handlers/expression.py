import logging

from protocol import EMOTE_ALIASES, EMOTES
from . import normalize

logger = logging.getLogger(__name__)


def resolve_emote(value):
    """Map a client emote (symbol or emoji literal) into the allow-set."""
    if not isinstance(value, str):
        return None
    if value in EMOTES:
        return value
    return EMOTE_ALIASES.get(value)


async def handle_dance(server, conn_id, packet_or_data):
    data = normalize(packet_or_data)
    participant = server.registry.get(conn_id)
    if participant is None:
        return

    # toggle
    if participant.is_dancing:
        participant.stop_dance()
        logger.info("[DANCE] Stopped for %s", participant.display_name or conn_id)
        return

    variant = data.get("type")
    if not isinstance(variant, str) or not variant:
        variant = server.config.default_dance
    participant.dance(variant)
    logger.info("[DANCE] Started for %s (%s)", participant.display_name or conn_id, variant)


async def handle_stop_dance(server, conn_id, packet_or_data=None):
    participant = server.registry.get(conn_id)
    if participant is None:
        return
    participant.stop_dance()
    logger.debug("[DANCE] STOP_DANCE for %s", participant.display_name or conn_id)


async def handle_emote(server, conn_id, packet_or_data):
    data = normalize(packet_or_data)
    participant = server.registry.get(conn_id)
    if participant is None:
        return

    now = server.clock()
    if now < participant.emote_cooldown_until:
        return

    emote = resolve_emote(data.get("type"))
    if emote is None:
        return

    config = server.config
    participant.current_emote = emote
    participant.emote_expires_at = now + config.emote_duration_ms
    participant.emote_cooldown_until = now + config.emote_cooldown_ms
    logger.debug("[EMOTE] %s -> %s", conn_id, emote)
