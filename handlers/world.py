import logging

from packet_factory import PacketFactory
from protocol import PacketType
from .broadcast import broadcast_packet

logger = logging.getLogger(__name__)


async def broadcast_user_joined(server, participant):
    packet = PacketFactory.encode_line(PacketType.USER_JOINED, {"user": participant.to_dict()})
    await broadcast_packet(server, packet)


async def broadcast_user_left(server, conn_id):
    packet = PacketFactory.encode_line(PacketType.USER_LEFT, {"id": conn_id})
    await broadcast_packet(server, packet)


async def broadcast_state_snapshot(server, snapshot):
    packet = PacketFactory.encode_line(PacketType.STATE_SNAPSHOT, snapshot)
    logger.debug("[BROADCAST] %d users to %d connections", len(snapshot["users"]), len(server.writers_by_id))
    await broadcast_packet(server, packet)
