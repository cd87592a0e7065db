# config.py
import configparser
import os
from dataclasses import dataclass, fields, replace

import protocol

DEFAULT_PORT = 5000
DEFAULT_GRPC_PORT = 6000


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    tick_ms: int = protocol.TICK_MS
    move_stale_ms: int = protocol.MOVE_STALE_MS
    speed: float = protocol.SPEED
    max_move_dt_ms: int = protocol.MAX_MOVE_DT_MS
    name_max_length: int = protocol.NAME_MAX_LENGTH
    emote_duration_ms: int = protocol.EMOTE_DURATION_MS
    emote_cooldown_ms: int = protocol.EMOTE_COOLDOWN_MS
    default_dance: str = protocol.DEFAULT_DANCE
    # spawn region: origin + random() * extent on each axis
    spawn_x: float = protocol.SPAWN_ORIGIN[0]
    spawn_y: float = protocol.SPAWN_ORIGIN[1]
    spawn_width: float = protocol.SPAWN_EXTENT[0]
    spawn_height: float = protocol.SPAWN_EXTENT[1]
    grpc_enabled: bool = True
    grpc_port: int = DEFAULT_GRPC_PORT
    log_level: str = "INFO"

    @property
    def spawn_origin(self):
        return (self.spawn_x, self.spawn_y)

    @property
    def spawn_extent(self):
        return (self.spawn_width, self.spawn_height)


# environment variable -> config field
ENV_OVERRIDES = {
    "HOST": "host",
    "PORT": "port",
    "PRESENCE_GRPC_PORT": "grpc_port",
    "PRESENCE_GRPC_ENABLED": "grpc_enabled",
    "LOG_LEVEL": "log_level",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _coerce(name, kind, raw):
    value = raw.strip()
    try:
        if kind is bool:
            lowered = value.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(value)
        if kind is int:
            return int(value)
        if kind is float:
            return float(value)
    except ValueError:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from None
    return value


def load_config(ini_path="presence.ini", env=None):
    """Build a ServerConfig from defaults, an optional INI file and the environment.

    The INI file's [server] section may set any field by name. Environment
    variables in ENV_OVERRIDES win over the file.
    """
    env = os.environ if env is None else env
    kinds = {f.name: f.type for f in fields(ServerConfig)}
    values = {}

    if ini_path and os.path.exists(ini_path):
        parser = configparser.ConfigParser()
        parser.read(ini_path)
        if "server" in parser:
            for key, raw in parser["server"].items():
                if key not in kinds:
                    raise ConfigError(f"Unknown setting in {ini_path}: {key}")
                values[key] = _coerce(key, kinds[key], raw)

    for var, name in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw:
            values[name] = _coerce(var, kinds[name], raw)

    return replace(ServerConfig(), **values)
