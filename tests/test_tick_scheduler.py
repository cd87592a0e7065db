import asyncio
import unittest

from participant import Liveness
from support import MinimalServer
from tick_scheduler import TickScheduler, sweep


class TestSweep(unittest.TestCase):
    def setUp(self):
        self.server = MinimalServer()
        self.registry = self.server.registry
        self.p = self.registry.create("c1", now=0)

    def test_motion_staleness(self):
        sweep(self.registry, now=100)
        self.assertEqual(self.p.liveness, Liveness.ACTIVE)
        sweep(self.registry, now=101)
        self.assertEqual(self.p.liveness, Liveness.IDLE)
        # connection liveness is untouched
        self.assertIn("c1", self.registry)

    def test_emote_expiry(self):
        self.p.current_emote = "wave"
        self.p.emote_expires_at = 2000

        sweep(self.registry, now=1999)
        self.assertEqual(self.p.current_emote, "wave")
        sweep(self.registry, now=2000)
        self.assertEqual(self.p.current_emote, "wave")
        sweep(self.registry, now=2001)
        self.assertIsNone(self.p.current_emote)

    def test_sweep_leaves_activity_alone(self):
        self.p.walk()
        sweep(self.registry, now=10000)
        self.assertEqual(self.p.activity.value, "walking")
        self.assertFalse(self.p.is_moving)


class TestTickScheduler(unittest.TestCase):
    def test_tick_broadcasts_named_snapshot(self):
        server = MinimalServer(now=400)
        named = server.registry.create("a", now=0)
        named.display_name = "Ann"
        server.registry.create("b", now=0)
        scheduler = TickScheduler(server)

        snapshot = asyncio.run(scheduler.tick())

        self.assertEqual(server.snapshots, [snapshot])
        self.assertEqual(snapshot["timestamp"], 400)
        self.assertEqual([u["id"] for u in snapshot["users"]], ["a"])
        self.assertEqual(snapshot["users"][0]["status"], "idle")
        self.assertEqual(scheduler.ticks, 1)

    def test_run_keeps_ticking_after_failure(self):
        server = MinimalServer()
        calls = []

        async def flaky(snapshot):
            calls.append(snapshot)
            if len(calls) == 1:
                raise RuntimeError("boom")

        server.broadcast_state_snapshot = flaky
        scheduler = TickScheduler(server, period_ms=1)

        async def run():
            task = asyncio.ensure_future(scheduler.run())
            while len(calls) < 3:
                await asyncio.sleep(0.005)
            task.cancel()
            with self.assertRaises(asyncio.CancelledError):
                await task

        asyncio.run(run())
        self.assertGreaterEqual(len(calls), 3)


if __name__ == "__main__":
    unittest.main()
