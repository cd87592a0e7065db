from protocol import PacketType
from . import BasePacket
from .registry import register_packet


@register_packet
class DancePacket(BasePacket):
    packet_id = PacketType.DANCE


@register_packet
class StopDancePacket(BasePacket):
    packet_id = PacketType.STOP_DANCE


@register_packet
class EmotePacket(BasePacket):
    packet_id = PacketType.EMOTE
