"""Handlers package for event logic.
Each inbound event handler has the signature:
    async def handle_xxx(server, conn_id, packet_or_data)

Handlers finish every registry mutation before their first await, so a
handler's state change is atomic with respect to other handlers and the
tick. Bad input is a silent no-op; handlers never raise for client data.
"""


def normalize(packet_or_data):
    if hasattr(packet_or_data, "_data"):
        return packet_or_data.to_data()
    if isinstance(packet_or_data, dict):
        data = packet_or_data.get("data", {})
        return data if isinstance(data, dict) else {}
    return {}
