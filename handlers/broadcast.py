import logging

logger = logging.getLogger(__name__)


async def broadcast_packet(server, packet: bytes):
    """Write one encoded frame to every open connection.

    A failed write closes that connection; its read loop then runs the
    regular disconnect path, so the registry is never touched here.
    """
    writers = list(server.writers_by_id.items())
    for conn_id, w in writers:
        try:
            w.write(packet)
        except Exception as e:
            logger.error("[ERROR] Failed to broadcast to %s: %s", conn_id, e)
            w.close()

    for conn_id, w in writers:
        if w.is_closing():
            continue
        try:
            await w.drain()
        except Exception as e:
            logger.error("[ERROR] Drain to %s failed: %s", conn_id, e)
            w.close()
