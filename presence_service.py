# presence_service.py
import asyncio
import json
import logging

import grpc

logger = logging.getLogger(__name__)

SERVICE_NAME = "presence.PresenceService"


def _serialize(message) -> bytes:
    return json.dumps(message, ensure_ascii=False).encode("utf-8")


def _deserialize(raw: bytes):
    if not raw:
        return {}
    return json.loads(raw.decode("utf-8"))


# ---------------------------
# gRPC Presence Service (read-only observers)
# ---------------------------
class PresenceServiceServicer:
    """Fans snapshots out to gRPC observers (dashboards, bots, recorders).

    Each subscriber has its own bounded queue. A slow subscriber loses its
    oldest snapshots; publish() never blocks the tick.
    """

    def __init__(self, max_queue=16):
        self.max_queue = max_queue
        self.latest = {"users": [], "timestamp": 0}
        self.subscribers = set()  # set of asyncio.Queue

    def publish(self, snapshot):
        self.latest = snapshot
        for queue in list(self.subscribers):
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(snapshot)

    async def GetSnapshot(self, request, context):
        """Latest snapshot broadcast by the tick."""
        return self.latest

    async def StreamSnapshots(self, request, context):
        """Server-streams every snapshot published after subscription."""
        queue = asyncio.Queue(maxsize=self.max_queue)
        self.subscribers.add(queue)
        logger.info("[PRESENCE] Observer subscribed (%d total)", len(self.subscribers))
        try:
            while True:
                yield await queue.get()
        finally:
            self.subscribers.discard(queue)
            logger.info("[PRESENCE] Observer left (%d total)", len(self.subscribers))


def build_generic_handler(servicer):
    return grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            "GetSnapshot": grpc.unary_unary_rpc_method_handler(
                servicer.GetSnapshot,
                request_deserializer=_deserialize,
                response_serializer=_serialize,
            ),
            "StreamSnapshots": grpc.unary_stream_rpc_method_handler(
                servicer.StreamSnapshots,
                request_deserializer=_deserialize,
                response_serializer=_serialize,
            ),
        },
    )


async def start_presence_service(servicer, port=6000):
    """Start the gRPC presence service and serve until terminated."""
    server = grpc.aio.server()
    server.add_generic_rpc_handlers((build_generic_handler(servicer),))
    server.add_insecure_port(f"[::]:{port}")
    await server.start()
    logger.info("[PRESENCE] gRPC PresenceService running on port %d", port)
    await server.wait_for_termination()
