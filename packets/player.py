from protocol import PacketType
from . import BasePacket
from .registry import register_packet


@register_packet
class SetNamePacket(BasePacket):
    packet_id = PacketType.SET_NAME


@register_packet
class MovePacket(BasePacket):
    packet_id = PacketType.MOVE
    required_numbers = ("vx", "vy", "dt")

