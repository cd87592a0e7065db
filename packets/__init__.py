import math
from typing import Any, Dict, Optional, Tuple

from .registry import register_packet, _registry


def is_number(value) -> bool:
    """True for finite ints/floats; bools are not numbers on the wire."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


class BasePacket:
    packet_id: Optional[str] = None
    # Fields that must be present and numeric for the packet to be usable
    required_numbers: Tuple[str, ...] = ()

    def __init__(self, **kwargs):
        self._data = dict(kwargs)

    @classmethod
    def from_data(cls, data: Dict[str, Any]):
        return cls(**data)

    def to_data(self) -> Dict[str, Any]:
        return dict(self._data)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def is_valid(self) -> bool:
        return all(is_number(self._data.get(name)) for name in self.required_numbers)

    def __getattr__(self, item):
        if item.startswith("__") or item == "_data":
            raise AttributeError(item)
        if item in self._data:
            return self._data[item]
        raise AttributeError(item)


def parse_raw_packet(raw: Dict[str, Any]) -> Optional[BasePacket]:
    """Parse a raw dict (with keys 'id' and 'data') into a packet object.

    Returns None for an empty or non-dict frame. Unknown ids produce a
    generic BasePacket tagged with '_raw_id'.
    """
    if not raw or not isinstance(raw, dict):
        return None
    pid = raw.get("id")
    data = raw.get("data") or {}
    if not isinstance(data, dict):
        data = {}
    # keys must be valid keyword names for from_data
    data = {str(k): v for k, v in data.items()}
    cls = _registry.get(pid)
    if cls:
        return cls.from_data(data)
    p = BasePacket(**data)
    p._data["_raw_id"] = pid
    return p


__all__ = [
    "BasePacket",
    "is_number",
    "parse_raw_packet",
    "register_packet",
]

# Concrete packet modules register themselves on import
from . import ping  # noqa: F401,E402
from . import player  # noqa: F401,E402
from . import expression  # noqa: F401,E402
