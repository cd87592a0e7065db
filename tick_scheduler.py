# tick_scheduler.py
import asyncio
import logging

from participant import Liveness
from protocol import MOVE_STALE_MS, TICK_MS

logger = logging.getLogger(__name__)


def sweep(registry, now, stale_ms=MOVE_STALE_MS):
    """Apply the time-based transitions to every record.

    Marks participants without a recent MOVE as motion-idle and clears
    emotes whose display window has passed. Connection membership is
    never changed here.
    """
    for p in registry.values():
        if now - p.last_movement_at > stale_ms:
            p.liveness = Liveness.IDLE
        if p.current_emote is not None and now > p.emote_expires_at:
            p.current_emote = None


class TickScheduler:
    """Fixed-rate sweep + snapshot broadcast.

    Ticks are serialized: a slow tick delays the next one instead of
    overlapping it, so the schedule drifts rather than piling up.
    """

    def __init__(self, server, period_ms=TICK_MS, stale_ms=MOVE_STALE_MS):
        self.server = server
        self.period = period_ms / 1000.0
        self.stale_ms = stale_ms
        self.ticks = 0

    async def tick(self):
        now = self.server.clock()
        sweep(self.server.registry, now, self.stale_ms)
        snapshot = self.server.registry.get_state(now)
        self.ticks += 1
        await self.server.broadcast_state_snapshot(snapshot)
        return snapshot

    async def run(self):
        loop = asyncio.get_running_loop()
        logger.info("[TICK] Running every %.0f ms", self.period * 1000)
        while True:
            start = loop.time()
            try:
                await self.tick()
            except Exception:
                logger.exception("[ERROR] Tick %d failed", self.ticks)
            elapsed = loop.time() - start
            if elapsed > self.period:
                logger.debug("[TICK] Overran period by %.1f ms", (elapsed - self.period) * 1000)
            await asyncio.sleep(max(0, self.period - elapsed))
