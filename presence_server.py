# presence_server.py
import asyncio
import json
import logging
import time
import uuid

from dotenv import load_dotenv

from config import ServerConfig, load_config
from handlers import expression as expression_handlers
from handlers import player as player_handlers
from handlers import world as world_handlers
from packet_factory import PacketFactory
from packets import parse_raw_packet
from presence_service import PresenceServiceServicer, start_presence_service
from protocol import PacketType
from session_registry import SessionRegistry
from tick_scheduler import TickScheduler

logger = logging.getLogger(__name__)


def now_ms():
    return int(time.time() * 1000)


HANDLERS = {
    PacketType.SET_NAME: player_handlers.handle_set_name,
    PacketType.MOVE: player_handlers.handle_move,
    PacketType.DANCE: expression_handlers.handle_dance,
    PacketType.STOP_DANCE: expression_handlers.handle_stop_dance,
    PacketType.EMOTE: expression_handlers.handle_emote,
}


class PresenceServer:
    def __init__(self, config=None, clock=None, registry=None, presence=None):
        self.config = config or ServerConfig()
        self.clock = clock or now_ms
        if registry is None:
            registry = SessionRegistry(self.config.spawn_origin, self.config.spawn_extent)
        self.registry = registry
        # writer registry for broadcast: conn_id -> writer
        self.writers_by_id = {}
        # optional gRPC observer fan-out
        self.presence = presence
        self.scheduler = TickScheduler(self, self.config.tick_ms, self.config.move_stale_ms)

    async def handle_client(self, reader, writer):
        addr = writer.get_extra_info("peername")
        conn_id = uuid.uuid4().hex
        logger.info("[CONNECT] %s as %s", addr, conn_id)
        await self.connect(conn_id, writer)

        try:
            while True:
                data = await reader.readline()
                if not data:
                    break

                message = data.decode("utf-8", errors="replace").strip()
                if not message:
                    continue

                logger.debug("[RECV] From %s: %s", conn_id, message)
                try:
                    await self.handle_message(conn_id, message)
                except Exception:
                    logger.exception("[ERROR] Failed to process packet from %s", conn_id)
        except (ConnectionError, ValueError) as e:
            # ValueError: line longer than the stream limit
            logger.warning("[ERROR] Connection %s dropped: %s", conn_id, e)
        finally:
            await self.disconnect(conn_id)
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass

    async def connect(self, conn_id, writer):
        self.registry.create(conn_id, self.clock())
        self.writers_by_id[conn_id] = writer
        await self.send(writer, PacketType.ID_ASSIGNED, {"id": conn_id})

    async def disconnect(self, conn_id):
        self.writers_by_id.pop(conn_id, None)
        await player_handlers.handle_disconnect(self, conn_id)

    async def handle_message(self, conn_id, message):
        try:
            packet_raw = json.loads(message)
        except json.JSONDecodeError:
            logger.warning("[ERROR] Invalid JSON from %s: %.80s", conn_id, message)
            return
        await self.handle_packet(conn_id, parse_raw_packet(packet_raw))

    async def handle_packet(self, conn_id, packet):
        if packet is None:
            return

        packet_id = packet.packet_id or packet.get("_raw_id")

        if packet_id == PacketType.PING:
            writer = self.writers_by_id.get(conn_id)
            if writer is not None:
                await self.send(writer, PacketType.PONG, {"msg": "pong"})
            return

        handler = HANDLERS.get(packet_id)
        if handler is None:
            logger.warning("[ERROR] Unknown packet type from %s: %r", conn_id, packet_id)
            return
        if not packet.is_valid():
            logger.debug("[ERROR] Malformed %s from %s: %s", packet_id, conn_id, packet.to_data())
            return
        await handler(self, conn_id, packet)

    async def send(self, writer, packet_id, data):
        writer.write(PacketFactory.encode_line(packet_id, data))
        await writer.drain()

    async def broadcast_user_joined(self, participant):
        await world_handlers.broadcast_user_joined(self, participant)

    async def broadcast_user_left(self, conn_id):
        await world_handlers.broadcast_user_left(self, conn_id)

    async def broadcast_state_snapshot(self, snapshot):
        await world_handlers.broadcast_state_snapshot(self, snapshot)
        if self.presence is not None:
            self.presence.publish(snapshot)


async def serve(config):
    presence = PresenceServiceServicer() if config.grpc_enabled else None
    server = PresenceServer(config, presence=presence)

    tcp_server = await asyncio.start_server(server.handle_client, config.host, config.port)
    logger.info("[SERVER] Running PresenceServer on %s:%d", config.host, config.port)

    tasks = [tcp_server.serve_forever(), server.scheduler.run()]
    if presence is not None:
        tasks.append(start_presence_service(presence, config.grpc_port))

    async with tcp_server:
        await asyncio.gather(*tasks)


def main():
    load_dotenv()
    config = load_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        print("\nServer stopped")


if __name__ == "__main__":
    main()
