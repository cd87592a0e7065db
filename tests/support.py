import asyncio
import json
import random
from types import SimpleNamespace

from config import ServerConfig
from session_registry import SessionRegistry


class DummyWriter:
    def __init__(self):
        self.buf = b""
        self.closed = False

    def get_extra_info(self, key):
        return ("127.0.0.1", 12345)

    def write(self, data: bytes):
        self.buf += data

    async def drain(self):
        await asyncio.sleep(0)

    def is_closing(self):
        return self.closed

    def close(self):
        self.closed = True

    async def wait_closed(self):
        await asyncio.sleep(0)

    def packets(self):
        return [json.loads(line) for line in self.buf.decode("utf-8").splitlines() if line]


class BrokenWriter(DummyWriter):
    def write(self, data: bytes):
        raise ConnectionResetError("peer gone")


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


class MinimalServer(SimpleNamespace):
    """Server double recording notifications instead of writing them."""

    def __init__(self, now=0):
        super().__init__()
        self.config = ServerConfig()
        self.clock = FakeClock(now)
        self.registry = SessionRegistry(rng=random.Random(7))
        self.writers_by_id = {}
        self.joined = []
        self.left = []
        self.snapshots = []

    async def broadcast_user_joined(self, participant):
        self.joined.append(participant.to_dict())

    async def broadcast_user_left(self, conn_id):
        self.left.append(conn_id)

    async def broadcast_state_snapshot(self, snapshot):
        self.snapshots.append(snapshot)
