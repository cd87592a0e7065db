import json


class PacketFactory:
    @staticmethod
    def build(packet_id: str, data: dict) -> str:
        """Serialize a packet to a JSON string."""
        packet = {"id": packet_id, "data": data}
        return json.dumps(packet, ensure_ascii=False)

    @staticmethod
    def encode_line(packet_id: str, data: dict) -> bytes:
        """Serialize a packet into one newline-terminated wire frame."""
        return (PacketFactory.build(packet_id, data) + "\n").encode("utf-8")

    @staticmethod
    def parse(raw_data: str):
        """Deserialize raw packet data into an (id, data) pair."""
        try:
            packet = json.loads(raw_data)
        except json.JSONDecodeError:
            return None, None
        if not isinstance(packet, dict):
            return None, None
        data = packet.get("data")
        return packet.get("id"), data if isinstance(data, dict) else {}
