import os
import tempfile
import unittest

from config import ConfigError, ServerConfig, load_config


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        config = load_config(ini_path=None, env={})
        self.assertEqual(config, ServerConfig())
        self.assertEqual(config.port, 5000)
        self.assertEqual(config.tick_ms, 50)
        self.assertEqual(config.speed, 120.0)

    def test_environment_overrides(self):
        config = load_config(ini_path=None, env={"PORT": "8080", "PRESENCE_GRPC_ENABLED": "no", "HOST": "0.0.0.0"})
        self.assertEqual(config.port, 8080)
        self.assertFalse(config.grpc_enabled)
        self.assertEqual(config.host, "0.0.0.0")

    def test_empty_port_falls_back(self):
        self.assertEqual(load_config(ini_path=None, env={"PORT": ""}).port, 5000)

    def test_ini_file_then_env(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "presence.ini")
            with open(path, "w") as f:
                f.write("[server]\nport = 7001\ntick_ms = 100\nspeed = 90.5\n")
            config = load_config(ini_path=path, env={"PORT": "7002"})
        self.assertEqual(config.port, 7002)
        self.assertEqual(config.tick_ms, 100)
        self.assertEqual(config.speed, 90.5)

    def test_spawn_region_from_ini(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "presence.ini")
            with open(path, "w") as f:
                f.write("[server]\nspawn_x = 10\nspawn_y = 20\nspawn_width = 5\nspawn_height = 0\n")
            config = load_config(ini_path=path, env={})
        self.assertEqual(config.spawn_origin, (10.0, 20.0))
        self.assertEqual(config.spawn_extent, (5.0, 0.0))

    def test_bad_values_raise(self):
        with self.assertRaises(ConfigError):
            load_config(ini_path=None, env={"PORT": "http"})
        with self.assertRaises(ConfigError):
            load_config(ini_path=None, env={"PRESENCE_GRPC_ENABLED": "maybe"})

    def test_unknown_ini_key_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "presence.ini")
            with open(path, "w") as f:
                f.write("[server]\nwarp_speed = 9\n")
            with self.assertRaises(ConfigError):
                load_config(ini_path=path, env={})


if __name__ == "__main__":
    unittest.main()
